"""
Module that implements the lifecycle of an sshfs mount.

Setting up a mount happens in a fixed order on the calling thread:

1. Find out how to invoke sshfs on the remote host.
2. Create the mount target and hand it over to the session's user.
3. Query the default user and group id of the session's user.
4. Construct the bridge server, which takes over the SSH session.

Only then is a worker thread started that runs the bridge server until the mount is
stopped. If any step fails, the exception propagates to the caller and no thread is
left behind.
"""

from __future__ import annotations

from enum import auto, Enum
import threading
from typing import Any, Callable, Dict, Optional

from sshfs_mount.logger import ContextAdapter, get_logger
from sshfs_mount.server import BridgeServer, MountConfig
from sshfs_mount.ssh import Session
import sshfs_mount.sshfs as sshfs

ServerFactory = Callable[..., BridgeServer]


class MountState(Enum):
    """Lifecycle states of a mount."""

    UNSTARTED = auto()
    RUNNING = auto()
    STOPPED = auto()


class SshfsMount:
    """A directory on the local machine that is mounted on the remote host."""

    def __init__(
        self,
        session: Session,
        source: str,
        target: str,
        gid_map: Dict[int, int],
        uid_map: Dict[int, int],
        server_type: ServerFactory,
        stop_timeout: Optional[float] = None,
    ):
        """
        Set up the mount and start serving it in the background.

        The session is handed over to the bridge server and must not be used by the
        caller anymore. If stop_timeout is given then stop() gives up waiting for the
        server after that many seconds instead of waiting indefinitely.
        """
        # Set before anything can fail, so that __del__ works on a partial object
        self._state = MountState.UNSTARTED
        self._thread: Optional[threading.Thread] = None
        self._stop_lock = threading.Lock()

        self._source = source
        self._target = target
        self._stop_timeout = stop_timeout

        self._log = get_logger("sshfs mount", source=source, target=target)

        self._config = _resolve_config(session, target, gid_map, uid_map)
        self._server = _make_server(server_type, session, source, target, self._config)

        # The thread must not reference the mount itself, or it would never be
        # garbage collected while running
        self._thread = self._start_thread(self._serve, self._server, self._log)
        self._state = MountState.RUNNING

    def __del__(self) -> None:
        """Stop the mount if it is still running."""
        # __init__ may not have run at all, for example with wrong arguments
        if not hasattr(self, "_stop_lock"):
            return

        self.stop()

    def __enter__(self) -> SshfsMount:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.stop()

    @property
    def state(self) -> MountState:
        """Return the current lifecycle state."""
        return self._state

    @property
    def source(self) -> str:
        return self._source

    @property
    def target(self) -> str:
        return self._target

    @property
    def config(self) -> MountConfig:
        """Return the configuration that the bridge server was started with."""
        return self._config

    def stop(self) -> None:
        """
        Stop the bridge server and wait for its thread to exit.

        Calling this more than once has no further effect.
        """
        with self._stop_lock:
            if self._state != MountState.RUNNING:
                return

            self._state = MountState.STOPPED

        log = self._log.bind(operation="stop")

        log.debug("stopping bridge server")

        try:
            self._server.stop()
        finally:
            self._join(log)

    def _join(self, log: ContextAdapter) -> None:
        """Wait for the thread of the bridge server to exit."""
        assert self._thread is not None

        # The server may be stopped from its own thread, which can't join itself
        if self._thread is threading.current_thread():
            return

        self._thread.join(self._stop_timeout)

        if self._thread.is_alive():
            log.warning(
                f"bridge server did not stop within {self._stop_timeout} seconds, "
                "abandoning its thread"
            )

    @staticmethod
    def _serve(server: BridgeServer, log: ContextAdapter) -> None:
        """Run the bridge server until it is stopped or the session fails."""
        log = log.bind(operation="serve")

        log.info("connected")

        try:
            server.serve()
        except Exception as e:
            log.error(f"bridge server failed: {e}")
        else:
            log.info("stopped")

    @staticmethod
    def _start_thread(target: Callable[..., None], *args: Any) -> threading.Thread:
        """
        Start a thread with the specified function.

        It is still made a daemon just in case the thread fails to exit properly and
        blocks the shutting down of the program.
        """
        t = threading.Thread(target=target, args=args, daemon=True)
        t.start()
        return t


def _resolve_config(
    session: Session, target: str, gid_map: Dict[int, int], uid_map: Dict[int, int],
) -> MountConfig:
    """Probe and prepare the remote host, in the order that the mount relies on."""
    invocation = sshfs.resolve_invocation(session)

    sshfs.provision_target(session, target)

    default_uid, default_gid = sshfs.default_ids(session)

    return MountConfig(
        invocation=invocation,
        gid_map=gid_map,
        uid_map=uid_map,
        default_uid=default_uid,
        default_gid=default_gid,
    )


def _make_server(
    server_type: ServerFactory,
    session: Session,
    source: str,
    target: str,
    config: MountConfig,
) -> BridgeServer:
    """Construct the bridge server, which takes over the session from here on."""
    return server_type(
        session,
        source,
        target,
        config.gid_map,
        config.uid_map,
        config.default_uid,
        config.default_gid,
        config.invocation,
    )
