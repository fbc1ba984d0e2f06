"""
CLI Module

Command implementations behind the dotstrap entry point:
- init: deploy tool configurations
- install-zsh: install zsh and Oh My Zsh
- setup: detect, install packages, deploy configs, install zsh
"""

from typing import Optional

from rich.console import Console
from rich.panel import Panel

from .config_manager import ConfigManager
from .deployer import ConfigDeployer
from .env import EnvConfig, env
from .errors import DotstrapError
from .logger import get_logger
from .packages import install_packages, read_package_list
from .platform_utils import PackageManagerDescriptor, PlatformUtils
from .shell_installer import ShellInstaller

logger = get_logger(__name__)


class DotstrapCLI:
    """Command line interface for dotstrap"""

    def __init__(self, settings: Optional[EnvConfig] = None):
        self.settings = settings or env
        self.console = Console()
        self.error_console = Console(stderr=True)
        self.platform_utils = PlatformUtils()

    def _print(self, message: str, style: Optional[str] = None) -> None:
        """Print message with optional styling"""
        if style:
            self.console.print(message, style=style)
        else:
            self.console.print(message)

    def _print_error(self, message: str) -> None:
        self.error_console.print(f"❌ {message}", style="red", markup=False,
                                 highlight=False, soft_wrap=True)

    def _print_panel(self, content: str, title: str, style: str = "blue") -> None:
        self.console.print(Panel(content, title=title, border_style=style))

    def _run(self, action, failure: str) -> int:
        """Run an action, mapping dotstrap errors to exit status 1"""
        try:
            action()
        except DotstrapError as e:
            logger.debug(f"{failure}: {e!r}")
            self._print_error(f"{failure}: {e}")
            return 1
        return 0

    def _deploy_configs(self, config_manager: Optional[ConfigManager] = None) -> None:
        config_manager = config_manager or ConfigManager(self.settings)
        deployer = ConfigDeployer(
            config_manager.get_config_mapping(),
            backup=config_manager.backup_enabled,
        )
        results = deployer.deploy()

        backups = [r for r in results if r.backup_path]
        summary = f"Deployed: {', '.join(r.tool for r in results)}"
        if backups:
            summary += f"\nBackups: {', '.join(str(r.backup_path) for r in backups)}"
        self._print_panel(summary, "Configurations", "green")

    def _detect(self) -> PackageManagerDescriptor:
        descriptor = self.platform_utils.require_package_manager()
        logger.info(f"Detected package manager: {descriptor.name}")
        return descriptor

    def _install_zsh(self) -> None:
        descriptor = self._detect()
        config_manager = ConfigManager(self.settings)
        ShellInstaller(descriptor, config_manager.get_shell_settings()).install()

    def _setup(self) -> None:
        logger.info(f"Platform: {self.platform_utils.get_platform_info()}")
        descriptor = self._detect()
        config_manager = ConfigManager(self.settings)

        packages = read_package_list(self.settings.packages_file)
        install_packages(descriptor, packages)

        self._deploy_configs(config_manager)

        ShellInstaller(descriptor, config_manager.get_shell_settings()).install()

    def init_configs(self) -> int:
        """Deploy tool configurations only"""
        return self._run(self._deploy_configs, "Error initializing configurations")

    def install_zsh(self) -> int:
        """Install zsh and Oh My Zsh only"""
        return self._run(self._install_zsh, "Error installing Zsh and Oh My Zsh")

    def setup(self) -> int:
        """Full bootstrap run"""
        status = self._run(self._setup, "Setup failed")
        if status == 0:
            self._print("✅ Setup completed successfully!", "bold green")
        return status
