"""
Environment Management Module for dotstrap

Uses python-dotenv for environment variable management.

Usage:
    from dotstrap.env import env

    print(env.home_dir)
    print(env.configs_dir)
    print(env.log_level)
"""

import os
from pathlib import Path
from dotenv import load_dotenv


# Global constants
DOTSTRAP_VERSION = '0.1.0'

TRUE_VALUES = ('1', 'true', 'yes', 'on')


def _find_env_file() -> Path:
    """Locate the .env file: DOTSTRAP_ENV_FILE or ./.env"""
    explicit = os.getenv('DOTSTRAP_ENV_FILE')
    if explicit:
        return Path(explicit).expanduser()
    return Path.cwd() / '.env'


env_file = _find_env_file()

# Load environment variables (real environment wins)
if env_file.exists():
    load_dotenv(env_file)


def _as_bool(value: str) -> bool:
    return value.strip().lower() in TRUE_VALUES


class EnvConfig:
    """Environment configuration object"""

    def _project_path(self, variable: str, default: str) -> Path:
        value = Path(os.getenv(variable, default)).expanduser()
        if not value.is_absolute():
            value = self.project_dir / value
        return value

    @property
    def home_dir(self) -> Path:
        """Root directory config destinations are resolved under"""
        home = os.getenv('DOTSTRAP_HOME')
        if home:
            return Path(home).expanduser()
        return Path.home()

    @property
    def project_dir(self) -> Path:
        project = os.getenv('DOTSTRAP_PROJECT_DIR')
        if project:
            return Path(project).expanduser()
        return Path.cwd()

    @property
    def configs_dir(self) -> Path:
        return self._project_path('DOTSTRAP_CONFIGS_DIR', 'configs')

    @property
    def packages_file(self) -> Path:
        return self._project_path('DOTSTRAP_PACKAGES_FILE', 'packages.txt')

    @property
    def manifest_file(self) -> Path:
        return self._project_path('DOTSTRAP_MANIFEST', 'dotstrap.yaml')

    @property
    def backup_enabled(self) -> bool:
        return _as_bool(os.getenv('DOTSTRAP_BACKUP', 'true'))

    @property
    def logs_dir(self) -> Path:
        return self._project_path('DOTSTRAP_LOGS_DIR', 'logs')

    @property
    def log_level(self) -> str:
        return os.getenv('DOTSTRAP_LOGGING_CONSOLE_LEVEL', 'INFO')

    @property
    def log_file_enabled(self) -> bool:
        return _as_bool(os.getenv('DOTSTRAP_LOGGING_FILE_ENABLED', 'false'))

    @property
    def log_file_level(self) -> str:
        return os.getenv('DOTSTRAP_LOGGING_FILE_LEVEL', 'DEBUG')

    @property
    def log_simple_format(self) -> bool:
        return _as_bool(os.getenv('DOTSTRAP_LOGGING_CONSOLE_SIMPLE_FORMAT', 'true'))

    @property
    def log_max_files(self) -> int:
        return int(os.getenv('DOTSTRAP_LOGGING_MAX_FILES', '5'))

    @property
    def log_max_size(self) -> str:
        return os.getenv('DOTSTRAP_LOGGING_MAX_SIZE', '10MB')


# Global env object
env = EnvConfig()
