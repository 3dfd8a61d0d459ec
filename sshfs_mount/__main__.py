"""
Module implementing the command-line interface of sshfs-mount.

The command connects to a remote host, finds out how sshfs would be invoked there and
prints that command line along with the default user and group id of the remote user.
This makes it easy to check whether a host is ready to have directories mounted on it.
"""

import logging
import os
import sys
from typing import List, NoReturn, Optional

from sshfs_mount.args import Arguments
from sshfs_mount.config import Config
import sshfs_mount.constants as constants
from sshfs_mount.logger import log
from sshfs_mount.ssh import ParamikoSession
import sshfs_mount.sshfs as sshfs


def main(arguments: Optional[List[str]] = None) -> NoReturn:
    """
    Probe the remote host with the given arguments.

    Defaults to parsing command-line arguments from sys.argv if none are specified.
    """
    # Parse command-line arguments.
    args = Arguments.parse(arguments)

    # Configure debug logging.
    if args.debug:
        log.setLevel(logging.DEBUG)
    else:
        log.setLevel(logging.ERROR)

    config = Config.load(os.path.expanduser(args.config))

    try:
        probe(args, config)
        exit_code = 0
    except Exception as e:
        log.error(f"failed to probe {args.destination}: {e}")
        exit_code = constants.SSHFS_MOUNT_ERROR_CODE

    sys.exit(exit_code)


def probe(args: Arguments, config: Config) -> None:
    """Resolve the sshfs invocation on the remote and optionally create the target."""
    session = ParamikoSession.connect(
        args.destination,
        port=args.port or config.ssh.port,
        username=args.user or config.ssh.username,
        timeout=args.timeout or config.ssh.timeout,
    )

    try:
        invocation = sshfs.resolve_invocation(session)
        print(invocation.command_line())

        if args.target is not None:
            target = sshfs.provision_target(session, args.target)
            print(f"target: {target.path} ({target.user}:{target.group})")

        uid, gid = sshfs.default_ids(session)
        print(f"uid: {uid}")
        print(f"gid: {gid}")
    finally:
        session.close()


if __name__ == "__main__":
    main()
