"""
Configuration Deployer

Copies each tool's configuration from the project's configs directory to its
destination under the home root. Tools are processed in mapping order and
the first failure stops the run.
"""

import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from .config_manager import ConfigEntry
from .errors import DeploymentError, MissingConfigSourceError
from .logger import get_logger

logger = get_logger(__name__)

# Mode for single-file configs
FILE_MODE = 0o644

BACKUP_SUFFIX = '.bak'


@dataclass(frozen=True)
class DeployResult:
    """Outcome of deploying one tool"""
    tool: str
    source: Path
    destination: Path
    backup_path: Optional[Path] = None


def _exists(path: Path) -> bool:
    # lexists: a dangling symlink still occupies the destination
    return os.path.lexists(path)


def _remove(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


def backup_path_for(destination: Path) -> Path:
    return destination.with_name(destination.name + BACKUP_SUFFIX)


def backup_config(destination: Path) -> Optional[Path]:
    """
    Move an existing destination aside to <destination>.bak

    Only one backup generation is kept: an older .bak is deleted first.

    Returns:
        The backup path, or None when there was nothing to back up
    """
    if not _exists(destination):
        return None

    backup_path = backup_path_for(destination)
    if _exists(backup_path):
        _remove(backup_path)

    logger.info(f"Backing up {destination} to {backup_path}")
    os.rename(destination, backup_path)
    return backup_path


def copy_config(source: Path, destination: Path) -> None:
    """
    Copy a file or directory configuration into place

    Directories are copied recursively keeping directory modes and file
    permission bits, merging into an existing destination directory. A single
    file is written byte for byte with FILE_MODE.
    """
    if source.is_dir():
        shutil.copytree(source, destination, dirs_exist_ok=True)
        shutil.copymode(source, destination)
    else:
        data = source.read_bytes()
        with open(destination, 'wb') as f:
            f.write(data)
        os.chmod(destination, FILE_MODE)


class ConfigDeployer:
    """Deploys a config mapping to the filesystem"""

    def __init__(self, mapping: Dict[str, ConfigEntry], backup: bool = False):
        self.mapping = mapping
        self.backup = backup

    def deploy_one(self, entry: ConfigEntry) -> DeployResult:
        """Deploy a single tool; raises DeploymentError on any failure"""
        tool = entry.tool
        source = entry.source
        destination = entry.destination

        if not source.exists():
            raise MissingConfigSourceError(tool, str(source))

        backup_path = None
        if self.backup:
            try:
                backup_path = backup_config(destination)
            except OSError as e:
                raise DeploymentError(tool, f"failed to backup {tool}: {e}") from e

        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DeploymentError(
                tool, f"failed to create directory {destination.parent}: {e}"
            ) from e

        try:
            copy_config(source, destination)
        except (OSError, shutil.Error) as e:
            raise DeploymentError(
                tool, f"failed to copy configuration for {tool} to {destination}: {e}"
            ) from e

        logger.info(f"Configuration for {tool} successfully installed")
        return DeployResult(tool, source, destination, backup_path)

    def deploy(self) -> List[DeployResult]:
        """Deploy every tool in order, stopping at the first failure"""
        results = []
        for entry in self.mapping.values():
            results.append(self.deploy_one(entry))
        return results
