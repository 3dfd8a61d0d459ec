"""Module that prepares the mount target directory on the remote host."""

from dataclasses import dataclass
import shlex
from typing import Tuple

from sshfs_mount.logger import get_logger
from sshfs_mount.ssh import Output, run_command, Session

log = get_logger("sshfs mount", operation="provision_target")


@dataclass(frozen=True)
class MountTarget:
    """Mount target directory along with the user and group that own it."""

    path: str
    user: str
    group: str


def make_target_dir(session: Session, target: str) -> None:
    """Create the target directory and any missing parents."""
    run_command(session, f"sudo mkdir -p {shlex.quote(target)}")


def set_owner_for(session: Session, target: str) -> MountTarget:
    """Make the user and group of the session the owners of the target directory."""
    user = run_command(session, "id -nu").rstrip()
    group = run_command(session, "id -ng").rstrip()

    owner = shlex.quote(f"{user}:{group}")
    run_command(session, f"sudo chown {owner} {shlex.quote(target)}")

    return MountTarget(target, user, group)


def provision_target(session: Session, target: str) -> MountTarget:
    """Ensure that the target directory exists and is owned by the session's user."""
    make_target_dir(session, target)
    mount_target = set_owner_for(session, target)

    log.debug(
        f"mount target owned by {mount_target.user}:{mount_target.group}",
        extra={"context": {"target": target}},
    )

    return mount_target


def default_ids(session: Session) -> Tuple[int, int]:
    """
    Query the numeric user and group id of the session's user.

    These are used as the owner of files that have no entry in the id maps.
    """
    output = run_command(session, "id -u", Output.STDOUT)
    log.debug(f"`id -u` = {output.strip()}")
    default_uid = int(output)

    output = run_command(session, "id -g", Output.STDOUT)
    log.debug(f"`id -g` = {output.strip()}")
    default_gid = int(output)

    return default_uid, default_gid
