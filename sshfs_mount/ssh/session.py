"""Module with the SSH session abstraction and its paramiko implementation."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

import paramiko

from .commands import CommandFailed


@dataclass
class CommandResult:
    """Captured output and exit status of a command executed on the remote host."""

    stdout: str
    stderr: str
    exit_status: int


class Session(ABC):
    """
    Authenticated channel that can execute commands on a remote host.

    A session must only ever be used by one owner at a time. Commands are executed
    synchronously, one after another.
    """

    @abstractmethod
    def execute(self, command: str) -> CommandResult:
        """Execute a shell command on the remote host and wait for it to exit."""
        raise NotImplementedError()


class ParamikoSession(Session):
    """Session on top of a connected paramiko SSH client."""

    def __init__(self, client: paramiko.SSHClient):
        """Wrap an already connected and authenticated SSH client."""
        self._client = client

    @classmethod
    def connect(
        cls,
        host: str,
        port: int = 22,
        username: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> ParamikoSession:
        """
        Connect to a host using the system host keys and the user's default keys.

        Authentication is left entirely to paramiko, which tries the SSH agent and
        the usual key files in ~/.ssh.
        """
        client = paramiko.SSHClient()
        client.load_system_host_keys()

        try:
            client.connect(host, port=port, username=username, timeout=timeout)
        except (paramiko.SSHException, OSError) as e:
            client.close()
            raise CommandFailed(f"failed to connect to {host}: {e}")

        return cls(client)

    @property
    def client(self) -> paramiko.SSHClient:
        """Return the underlying SSH client, for example to open an SFTP channel."""
        return self._client

    def execute(self, command: str) -> CommandResult:
        """
        Execute a command through a new SSH channel.

        Transport failures are reported as CommandFailed, just like a command that
        exits with a non-zero status.
        """
        try:
            _, stdout, stderr = self._client.exec_command(command)

            out = stdout.read().decode(errors="replace")
            err = stderr.read().decode(errors="replace")
            exit_status = stdout.channel.recv_exit_status()
        except (paramiko.SSHException, OSError) as e:
            raise CommandFailed(f"ssh session failed: {e}", command=command)

        return CommandResult(out, err, exit_status)

    def close(self) -> None:
        """Close the SSH connection."""
        self._client.close()
