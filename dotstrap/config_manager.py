"""
Configuration Management Module

Loads the optional dotstrap.yaml manifest and turns it, together with the
environment settings, into:
- the tool -> destination config mapping used by the deployer
- the backup policy
- the shell installer settings
"""

from collections import OrderedDict
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .env import EnvConfig, env
from .errors import ConfigurationError
from .logger import get_logger

logger = get_logger(__name__)


# Built-in mapping, destinations relative to the home root
DEFAULT_CONFIGS = OrderedDict([
    ('nvim', '.config/nvim'),
    ('vim', '.vimrc'),
    ('tmux', '.tmux.conf'),
    ('zsh', '.zshrc'),
])

DEFAULT_SHELL = {
    'package': 'zsh',
    'installer_url': 'https://raw.githubusercontent.com/ohmyzsh/ohmyzsh/master/tools/install.sh',
    'installer_sha256': None,
    'template': 'zshrc.append',
    'rc_file': '.zshrc',
}


@dataclass(frozen=True)
class ConfigEntry:
    """Where one tool's configuration comes from and goes to"""
    tool: str
    source: Path
    destination: Path


@dataclass(frozen=True)
class ShellSettings:
    """Settings for the shell environment installer"""
    package: str
    installer_url: str
    installer_sha256: Optional[str]
    template: Path
    rc_file: Path


class ConfigManager:
    """Configuration management system"""

    def __init__(self, settings: Optional[EnvConfig] = None,
                 manifest_file: Optional[Path] = None):
        self.settings = settings or env
        self.home_dir = Path(self.settings.home_dir)
        self.configs_dir = Path(self.settings.configs_dir)
        self.manifest_file = Path(manifest_file or self.settings.manifest_file)

        self.manifest = self._load_manifest()

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """Load and parse a YAML file"""
        try:
            if file_path.exists():
                with open(file_path, 'r', encoding='utf-8') as f:
                    return yaml.safe_load(f) or {}
            return {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML syntax in {file_path}: {e}")
        except OSError as e:
            raise ConfigurationError(f"Error reading config file {file_path}: {e}")

    def _load_manifest(self) -> Dict[str, Any]:
        manifest = self._load_yaml_file(self.manifest_file)
        if not isinstance(manifest, dict):
            raise ConfigurationError(f"{self.manifest_file}: top level must be a mapping")

        if manifest:
            logger.debug(f"Loaded manifest {self.manifest_file}")
        return manifest

    def _section(self, key: str) -> Dict[str, Any]:
        value = self.manifest.get(key)
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise ConfigurationError(f"{self.manifest_file}: '{key}' must be a mapping")
        return value

    def _home_path(self, value: str) -> Path:
        path = Path(value).expanduser()
        return path if path.is_absolute() else self.home_dir / path

    def _configs_path(self, value: str) -> Path:
        path = Path(value).expanduser()
        return path if path.is_absolute() else self.configs_dir / path

    @property
    def backup_enabled(self) -> bool:
        """Backup policy: manifest value wins over DOTSTRAP_BACKUP"""
        value = self.manifest.get('backup')
        if value is None:
            return self.settings.backup_enabled
        if not isinstance(value, bool):
            raise ConfigurationError(f"{self.manifest_file}: 'backup' must be true or false")
        return value

    def get_config_mapping(self) -> "OrderedDict[str, ConfigEntry]":
        """
        Build the tool -> ConfigEntry mapping

        The manifest's 'configs' section replaces the built-in mapping as a
        whole. Entries are either a destination string or a mapping with
        'destination' and optional 'source'.
        """
        if 'configs' in self.manifest:
            configs = self._section('configs')
        else:
            configs = DEFAULT_CONFIGS

        mapping = OrderedDict()
        for tool, spec in configs.items():
            tool = str(tool)
            if isinstance(spec, str):
                source, destination = tool, spec
            elif isinstance(spec, dict) and isinstance(spec.get('destination'), str):
                source = spec.get('source', tool)
                destination = spec['destination']
                if not isinstance(source, str):
                    raise ConfigurationError(f"{self.manifest_file}: source of '{tool}' must be a string")
            else:
                raise ConfigurationError(
                    f"{self.manifest_file}: config '{tool}' needs a destination path"
                )

            mapping[tool] = ConfigEntry(
                tool=tool,
                source=self._configs_path(source),
                destination=self._home_path(destination),
            )

        return mapping

    def get_shell_settings(self) -> ShellSettings:
        """Shell installer settings with built-in defaults filled in"""
        shell = dict(DEFAULT_SHELL)
        shell.update(self._section('shell'))

        for key in ('package', 'installer_url', 'template', 'rc_file'):
            if not isinstance(shell[key], str) or not shell[key]:
                raise ConfigurationError(f"{self.manifest_file}: shell.{key} must be a non-empty string")

        checksum = shell['installer_sha256']
        if checksum is not None and not isinstance(checksum, str):
            raise ConfigurationError(f"{self.manifest_file}: shell.installer_sha256 must be a string")

        return ShellSettings(
            package=shell['package'],
            installer_url=shell['installer_url'],
            installer_sha256=checksum.lower() if checksum else None,
            template=self._configs_path(shell['template']),
            rc_file=self._home_path(shell['rc_file']),
        )
