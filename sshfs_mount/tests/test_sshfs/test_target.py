import pytest

from sshfs_mount.ssh import CommandFailed
from sshfs_mount.sshfs import default_ids, MountTarget, provision_target

IDENTITY = {
    "id -nu": ("ubuntu\n", "", 0),
    "id -ng": ("admin\n", "", 0),
    "id -u": ("1000\n", "", 0),
    "id -g": ("1001\n", "", 0),
}


def test_provision_target(make_session):
    session = make_session(
        {
            **IDENTITY,
            "sudo mkdir -p /mnt/src": ("", "", 0),
            "sudo chown ubuntu:admin /mnt/src": ("", "", 0),
        }
    )

    target = provision_target(session, "/mnt/src")

    assert target == MountTarget("/mnt/src", "ubuntu", "admin")
    assert session.commands == [
        "sudo mkdir -p /mnt/src",
        "id -nu",
        "id -ng",
        "sudo chown ubuntu:admin /mnt/src",
    ]


def test_provision_target_quoting(make_session):
    session = make_session(
        {
            **IDENTITY,
            "sudo mkdir -p '/mnt/my src'": ("", "", 0),
            "sudo chown ubuntu:admin '/mnt/my src'": ("", "", 0),
        }
    )

    provision_target(session, "/mnt/my src")

    assert session.commands[-1] == "sudo chown ubuntu:admin '/mnt/my src'"


def test_mkdir_failure_aborts(make_session):
    session = make_session(
        {**IDENTITY, "sudo mkdir -p /mnt/src": ("", "read-only file system", 1)}
    )

    with pytest.raises(CommandFailed) as e:
        provision_target(session, "/mnt/src")

    assert e.value.stderr == "read-only file system"
    assert session.commands == ["sudo mkdir -p /mnt/src"]


def test_chown_failure(make_session):
    session = make_session({**IDENTITY, "sudo mkdir -p /mnt/src": ("", "", 0)})

    with pytest.raises(CommandFailed):
        provision_target(session, "/mnt/src")


def test_default_ids(make_session):
    assert default_ids(make_session(IDENTITY)) == (1000, 1001)


def test_default_ids_ignores_stderr(make_session):
    session = make_session(
        {
            "id -u": ("1000\n", "sudo: unable to resolve host\n", 0),
            "id -g": ("1000\n", "", 0),
        }
    )

    assert default_ids(session) == (1000, 1000)


def test_default_ids_not_numeric(make_session):
    session = make_session({"id -u": ("ubuntu\n", "", 0)})

    with pytest.raises(ValueError):
        default_ids(session)


def test_owner_quoting(make_session):
    session = make_session(
        {
            "sudo mkdir -p /mnt/src": ("", "", 0),
            "id -nu": ("ubuntu\n", "", 0),
            "id -ng": ("domain users\n", "", 0),
            "sudo chown 'ubuntu:domain users' /mnt/src": ("", "", 0),
        }
    )

    target = provision_target(session, "/mnt/src")

    assert target.group == "domain users"
    assert session.commands[-1] == "sudo chown 'ubuntu:domain users' /mnt/src"
