"""Module defining the command-line arguments and providing a parser for them."""

from __future__ import annotations

import argparse
from typing import List, Optional

from sshfs_mount.constants import VERSION


class Arguments(argparse.Namespace):
    """Parsed command-line arguments."""

    destination: str
    target: Optional[str]

    config: str

    port: Optional[int]
    user: Optional[str]
    timeout: Optional[float]

    debug: bool

    @classmethod
    def parse(cls, args: Optional[List[str]] = None) -> Arguments:
        """
        Parse command-line arguments from the given list of strings.

        Defaults to sys.argv if none are specified.
        """
        return cls._get_parser().parse_args(args, namespace=cls())

    @classmethod
    def _get_parser(cls) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            description="Check and prepare a remote host for mounting with sshfs.",
            usage="sshfs-mount [option...] destination",
        )

        parser.add_argument(
            "--version",
            action="version",
            version=f"%(prog)s {VERSION}",
            help="show the program version",
        )

        parser.add_argument("destination", type=str, help="remote host to probe")

        # Optionally also create the mount target
        parser.add_argument(
            "--target", type=str, help="mount target directory to create on the remote"
        )

        # Path to (optional) config file
        parser.add_argument(
            "--config",
            type=str,
            help="path to config file (default is ~/.sshfs_mount/config)",
            default="~/.sshfs_mount/config",
        )

        # Connection settings, default to the config file
        parser.add_argument("--port", type=int, help="SSH port of the remote host")
        parser.add_argument("--user", type=str, help="user to log in as")
        parser.add_argument(
            "--timeout",
            type=cls._parse_timeout,
            help="SSH connection timeout in seconds",
        )

        # Enable debug output for development
        parser.add_argument(
            "--debug", action="store_true", help="enable debug information"
        )

        return parser

    @staticmethod
    def _parse_timeout(arg: str) -> float:
        try:
            val = float(arg)
            assert val > 0
            return val
        except (ValueError, AssertionError):
            raise argparse.ArgumentTypeError("expected number > 0")
