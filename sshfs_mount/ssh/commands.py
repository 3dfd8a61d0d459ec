"""Module for running commands on the remote host and checking their results."""

from __future__ import annotations

from enum import auto, Enum
import typing
from typing import Optional

from sshfs_mount.logger import get_logger, summarize

if typing.TYPE_CHECKING:
    from .session import Session

log = get_logger("ssh")


class CommandFailed(RuntimeError):
    """Exception raised when a remote command fails or the session itself fails."""

    def __init__(self, stderr: str, command: Optional[str] = None) -> None:
        """Instantiate the exception with the standard error output of the command."""
        super().__init__(stderr)

        self.stderr = stderr
        self.command = command


class Output(Enum):
    """Which output streams of a command make up its result."""

    # Some tools print useful text on stderr even when they succeed
    COMBINED = auto()

    # For commands with machine readable output like `id -u`
    STDOUT = auto()


def run_command(
    session: Session, command: str, output: Output = Output.COMBINED
) -> str:
    """
    Run a shell command on the remote host and return its output.

    Raises CommandFailed with the standard error output if the command exits with a
    non-zero status. Arguments embedded in the command must already be quoted.
    """
    result = session.execute(command)

    log.debug(
        f"ran `{command}` (exit status {result.exit_status})",
        extra={
            "context": {
                "operation": "run_command",
                "stdout": summarize(result.stdout.strip(), 80),
                "stderr": summarize(result.stderr.strip(), 80),
            }
        },
    )

    if result.exit_status != 0:
        raise CommandFailed(result.stderr, command=command)

    if output == Output.COMBINED:
        return result.stdout + result.stderr
    else:
        return result.stdout
