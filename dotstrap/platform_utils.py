"""
Platform Utilities Module

Provides the host-facing primitives dotstrap is built on:
- OS detection and platform description
- Package manager detection in a fixed priority order
- Blocking command execution attached to the terminal
"""

import platform
import shutil
import subprocess
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import distro

from .errors import CommandError, EnvironmentDetectionError
from .logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class PackageManagerDescriptor:
    """How to drive one package manager"""
    name: str
    install_args: Tuple[str, ...]
    update_args: Tuple[str, ...] = ()
    privilege_cmd: str = ''

    def _prefix(self) -> List[str]:
        if self.privilege_cmd:
            return [self.privilege_cmd, self.name]
        return [self.name]

    def update_command(self) -> List[str]:
        """Full update invocation, or an empty list when there is none"""
        if not self.update_args:
            return []
        return self._prefix() + list(self.update_args)

    def install_command(self, packages: Sequence[str]) -> List[str]:
        """Full install invocation for the given packages"""
        return self._prefix() + list(self.install_args) + list(packages)


class PlatformUtils:
    """Platform-specific utility functions"""

    # Candidates per OS type, in probing priority order
    PACKAGE_MANAGERS: Dict[str, Dict[str, Dict[str, str]]] = {
        'linux': {
            'apt': {
                'install': 'install -y',
                'update': 'update',
                'privilege': 'sudo',
            },
            'dnf': {
                'install': 'install -y',
                'update': 'makecache',
                'privilege': 'sudo',
            },
            'pacman': {
                'install': '-S --noconfirm',
                'update': '-Sy',
                'privilege': 'sudo',
            },
        },
        'darwin': {
            'brew': {
                'install': 'install',
                'update': 'update',
                'privilege': '',
            },
        },
    }

    @classmethod
    def get_platform_info(cls) -> str:
        """Get detailed platform information"""
        system = platform.system()
        machine = platform.machine()

        if system == 'Darwin':
            version = platform.mac_ver()[0]
            return f"macOS {version} ({machine})"
        elif system == 'Linux':
            dist_name = distro.name()
            dist_version = distro.version()
            if dist_name and dist_version:
                return f"{dist_name} {dist_version} ({machine})"
            elif dist_name:
                return f"{dist_name} ({machine})"
            return f"Linux ({machine})"
        else:
            return f"{system} ({machine})"

    @classmethod
    def get_os_type(cls) -> str:
        """Get normalized OS type"""
        return platform.system().lower()

    @classmethod
    def get_linux_distribution(cls) -> Optional[str]:
        """Get Linux distribution id, None on other systems"""
        if platform.system() != 'Linux':
            return None
        return distro.id().lower() or None

    @classmethod
    def command_exists(cls, command: str) -> bool:
        """Check if a command exists in system PATH"""
        return shutil.which(command) is not None

    @classmethod
    def get_descriptor(cls, os_type: str, name: str) -> Optional[PackageManagerDescriptor]:
        """Build the descriptor for a known package manager"""
        manager_config = cls.PACKAGE_MANAGERS.get(os_type, {}).get(name)
        if not manager_config:
            return None

        return PackageManagerDescriptor(
            name=name,
            install_args=tuple(manager_config['install'].split()),
            update_args=tuple(manager_config['update'].split()),
            privilege_cmd=manager_config['privilege'],
        )

    @classmethod
    def detect_package_manager(cls, os_type: Optional[str] = None) -> Optional[PackageManagerDescriptor]:
        """
        Detect the package manager of the host

        Candidates are probed in the order listed in PACKAGE_MANAGERS and the
        first one found on the search path wins.

        Args:
            os_type: OS type to probe for, defaults to the running host

        Returns:
            Descriptor of the first available manager, or None for an
            unsupported OS or when no candidate is installed
        """
        if os_type is None:
            os_type = cls.get_os_type()

        managers = cls.PACKAGE_MANAGERS.get(os_type)
        if not managers:
            logger.debug(f"No package managers known for OS type '{os_type}'")
            return None

        for manager_name in managers:
            if cls.command_exists(manager_name):
                logger.debug(f"Found package manager: {manager_name}")
                return cls.get_descriptor(os_type, manager_name)
            logger.debug(f"Package manager not found: {manager_name}")

        return None

    @classmethod
    def require_package_manager(cls, os_type: Optional[str] = None) -> PackageManagerDescriptor:
        """Like detect_package_manager, but a miss is an error"""
        descriptor = cls.detect_package_manager(os_type)
        if descriptor is None:
            raise EnvironmentDetectionError("Unsupported system or package manager not found")
        return descriptor

    @classmethod
    def run_command(cls, command: List[str], cwd: Optional[str] = None) -> None:
        """
        Run a command attached to the current terminal

        Output goes straight to the inherited stdout/stderr. The call blocks
        until the command exits; there is no timeout.

        Raises:
            CommandError: command exited non-zero or could not be started
        """
        logger.debug(f"Running: {' '.join(command)}")
        try:
            result = subprocess.run(command, cwd=cwd, check=False)
        except FileNotFoundError:
            raise CommandError(command, reason=f"command not found: {command[0]}")
        except OSError as e:
            raise CommandError(command, reason=str(e))

        if result.returncode != 0:
            raise CommandError(command, returncode=result.returncode)
