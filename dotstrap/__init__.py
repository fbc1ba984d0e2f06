"""
dotstrap

Workstation bootstrap utility:
- Package manager detection and package installation
- Dotfile deployment with optional single-generation backup
- zsh / Oh My Zsh installation
"""

from .cli import DotstrapCLI
from .config_manager import ConfigManager
from .deployer import ConfigDeployer
from .platform_utils import PlatformUtils
from .shell_installer import ShellInstaller

__version__ = "0.1.0"
__all__ = [
    'DotstrapCLI',
    'ConfigManager',
    'ConfigDeployer',
    'ShellInstaller',
    'PlatformUtils',
]
