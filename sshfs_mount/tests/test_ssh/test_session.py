from unittest import mock

import paramiko
import pytest

from sshfs_mount.ssh import CommandFailed, ParamikoSession


def mock_client(stdout: bytes, stderr: bytes, exit_status: int) -> mock.Mock:
    client = mock.Mock()

    out = mock.Mock()
    out.read.return_value = stdout
    out.channel.recv_exit_status.return_value = exit_status

    err = mock.Mock()
    err.read.return_value = stderr

    client.exec_command.return_value = (mock.Mock(), out, err)

    return client


def test_execute():
    client = mock_client(b"hello\n", b"", 0)
    session = ParamikoSession(client)

    result = session.execute("echo hello")

    client.exec_command.assert_called_once_with("echo hello")
    assert result.stdout == "hello\n"
    assert result.stderr == ""
    assert result.exit_status == 0


def test_execute_nonzero_exit():
    session = ParamikoSession(mock_client(b"", b"no such file\n", 2))

    result = session.execute("ls /nonexistent")

    assert result.stderr == "no such file\n"
    assert result.exit_status == 2


def test_execute_undecodable_output():
    session = ParamikoSession(mock_client(b"\xff\xfe", b"", 0))

    assert session.execute("cat binary").stdout == "\ufffd\ufffd"


def test_transport_failure():
    client = mock.Mock()
    client.exec_command.side_effect = paramiko.SSHException("SSH session not active")

    session = ParamikoSession(client)

    with pytest.raises(CommandFailed) as e:
        session.execute("true")

    assert "SSH session not active" in e.value.stderr
    assert e.value.command == "true"


def test_connect():
    with mock.patch("paramiko.SSHClient") as mock_client_type:
        session = ParamikoSession.connect("host", port=2222, username="me", timeout=1.5)

    client = mock_client_type()

    client.load_system_host_keys.assert_called_once()
    client.connect.assert_called_once_with(
        "host", port=2222, username="me", timeout=1.5
    )
    assert session.client is client


def test_connect_failure():
    with mock.patch("paramiko.SSHClient") as mock_client_type:
        client = mock_client_type()
        client.connect.side_effect = OSError("connection refused")

        with pytest.raises(CommandFailed) as e:
            ParamikoSession.connect("host")

    assert "failed to connect to host" in str(e.value)
    assert client.close.called


def test_close():
    client = mock.Mock()
    ParamikoSession(client).close()

    assert client.close.called
