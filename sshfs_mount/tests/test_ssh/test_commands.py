import logging

import pytest

from sshfs_mount.ssh import CommandFailed, Output, run_command


def test_combined_output(make_session):
    session = make_session({"foo": ("out\n", "err\n", 0)})

    assert run_command(session, "foo") == "out\nerr\n"


def test_stdout_only(make_session):
    session = make_session({"id -u": ("1000\n", "warning: something\n", 0)})

    assert run_command(session, "id -u", Output.STDOUT) == "1000\n"


def test_nonzero_exit(make_session):
    session = make_session({"foo": ("partial output", "permission denied", 1)})

    with pytest.raises(CommandFailed) as e:
        run_command(session, "foo")

    assert e.value.stderr == "permission denied"
    assert e.value.command == "foo"
    assert str(e.value) == "permission denied"


def test_no_retry(make_session):
    session = make_session({"foo": ("", "nope", 2)})

    with pytest.raises(CommandFailed):
        run_command(session, "foo")

    assert session.commands == ["foo"]


def test_session_failure_propagates(make_session):
    session = make_session({"foo": CommandFailed("connection reset")})

    with pytest.raises(CommandFailed) as e:
        run_command(session, "foo")

    assert e.value.stderr == "connection reset"


def test_command_logged(make_session, caplog):
    caplog.set_level(logging.DEBUG, logger="sshfs_mount")

    session = make_session({"foo": ("x" * 1000, "", 0)})
    run_command(session, "foo")

    record = caplog.records[-1]

    assert "ran `foo` (exit status 0)" in record.getMessage()
    assert record.context["component"] == "ssh"
    assert len(record.context["stdout"]) == 80
