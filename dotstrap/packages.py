"""
Package List Module

Reads the line-delimited package list and installs it through a detected
package manager.
"""

from pathlib import Path
from typing import Callable, List, Optional, Union

from .errors import CommandError, PackageInstallError, PackageListError
from .logger import get_logger
from .platform_utils import PackageManagerDescriptor, PlatformUtils

logger = get_logger(__name__)

Runner = Callable[[List[str]], None]


def read_package_list(path: Union[str, Path]) -> List[str]:
    """
    Read package names from a text file, one per line

    Every line is kept, in order, with surrounding whitespace removed.
    Blank lines come back as empty strings and duplicates are kept.
    Only '\\n' ends a line; other control characters stay inside the entry.

    Raises:
        PackageListError: file cannot be opened or read
    """
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8', newline='') as f:
            content = f.read()
    except OSError as e:
        raise PackageListError(f"failed to open {path}: {e}")
    except UnicodeDecodeError as e:
        raise PackageListError(f"failed to read {path}: {e}")

    lines = content.split('\n')
    if lines[-1] == '':
        lines.pop()
    return [line.strip() for line in lines]


def install_packages(descriptor: PackageManagerDescriptor, packages: List[str],
                     runner: Optional[Runner] = None) -> None:
    """
    Refresh the package index and install all packages in one invocation

    Args:
        descriptor: package manager to drive
        packages: names as returned by read_package_list
        runner: command runner, PlatformUtils.run_command by default

    Raises:
        PackageListError: nothing to install
        PackageInstallError: update or install command failed
    """
    if runner is None:
        runner = PlatformUtils.run_command

    # Blank lines stay in the list but are never handed to the package manager
    names = [name for name in packages if name]
    if not names:
        raise PackageListError("no packages to install")

    update_command = descriptor.update_command()
    if update_command:
        logger.info(f"Updating package manager ({descriptor.name})...")
        try:
            runner(update_command)
        except CommandError as e:
            raise PackageInstallError(f"failed to update package manager: {e}") from e

    logger.info(f"Installing packages: {' '.join(names)}")
    try:
        runner(descriptor.install_command(names))
    except CommandError as e:
        raise PackageInstallError(f"failed to install packages: {e}") from e
