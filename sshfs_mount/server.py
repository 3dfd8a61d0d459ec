"""Module defining the interface of the SFTP bridge server started by a mount."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict

from sshfs_mount.ssh import Session
from sshfs_mount.sshfs import SshfsInvocation


@dataclass(frozen=True)
class MountConfig:
    """Everything resolved while setting up a mount that the bridge server needs."""

    invocation: SshfsInvocation

    # Maps of remote id -> local id, passed through as given by the caller
    gid_map: Dict[int, int] = field(default_factory=dict)
    uid_map: Dict[int, int] = field(default_factory=dict)

    # Owner for files without an entry in the maps
    default_uid: int = 0
    default_gid: int = 0


class BridgeServer(ABC):
    """
    Base class for a server that exposes a local directory to sshfs on the remote.

    Implementations start sshfs on the remote host through the session using the
    invocation and then serve SFTP requests over that same channel. The server takes
    over ownership of the session when it is constructed.
    """

    @abstractmethod
    def __init__(
        self,
        session: Session,
        source: str,
        target: str,
        gid_map: Dict[int, int],
        uid_map: Dict[int, int],
        default_uid: int,
        default_gid: int,
        invocation: SshfsInvocation,
    ) -> None:
        """Construct the server with the session and the resolved configuration."""

    @abstractmethod
    def serve(self) -> None:
        """Serve requests until stop() is called or the session fails."""
        raise NotImplementedError()

    @abstractmethod
    def stop(self) -> None:
        """
        Ask serve() to return.

        This is called from a different thread than the one running serve().
        """
        raise NotImplementedError()
