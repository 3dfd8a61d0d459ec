"""Module for configuration variables with defaults that are overridable by a file."""

from __future__ import annotations

from configparser import ConfigParser, SectionProxy
from dataclasses import dataclass, field
from typing import Optional

from sshfs_mount.logger import log


@dataclass
class SshConfig:
    """Configuration variables related to the SSH connection."""

    port: int = 22
    username: Optional[str] = None
    timeout: float = 10.0

    @staticmethod
    def load(section: SectionProxy) -> SshConfig:
        """Load overridden variables from a section within a config file."""
        config = SshConfig()

        config.port = section.getint("port", fallback=config.port)
        config.username = section.get("username", fallback=config.username)
        config.timeout = section.getfloat("timeout", fallback=config.timeout)

        return config


@dataclass
class LifecycleConfig:
    """Configuration variables related to the lifecycle of mounts."""

    # None means that stopping a mount waits for the bridge server indefinitely
    stop_timeout: Optional[float] = None

    @staticmethod
    def load(section: SectionProxy) -> LifecycleConfig:
        """Load overridden variables from a section within a config file."""
        config = LifecycleConfig()

        config.stop_timeout = section.getfloat(
            "stop_timeout", fallback=config.stop_timeout
        )

        return config


@dataclass
class Config:
    """Configuration variables."""

    ssh: SshConfig = field(default_factory=SshConfig)
    mount: LifecycleConfig = field(default_factory=LifecycleConfig)

    @staticmethod
    def load(filename: str) -> Config:
        """Load overridden configuration variables from a config file."""
        parser = ConfigParser()

        config = Config()

        try:
            with open(filename, "r") as f:
                parser.read_string(f.read(), filename)

            if "ssh" in parser:
                config.ssh = SshConfig.load(parser["ssh"])

            if "mount" in parser:
                config.mount = LifecycleConfig.load(parser["mount"])
        except FileNotFoundError:
            log.info(f"no config file at {filename}")
        except Exception as e:
            # An unreadable config file is not considered a fatal error since we can
            # fall back to defaults.
            log.error(f"failed to read config file {filename}: {e}")
        else:
            log.info(f"loaded config: {config}")

        return config
