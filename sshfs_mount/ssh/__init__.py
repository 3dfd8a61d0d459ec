"""
Modules that execute commands on the remote host over an SSH session.

The session is the only channel to the remote host. It is used to probe and prepare
the host while setting up a mount and is then handed over to the SFTP bridge server,
which uses the same channel for its protocol traffic.
"""

from .commands import CommandFailed, Output, run_command
from .session import CommandResult, ParamikoSession, Session

__all__ = [
    "CommandFailed",
    "CommandResult",
    "Output",
    "ParamikoSession",
    "Session",
    "run_command",
]
