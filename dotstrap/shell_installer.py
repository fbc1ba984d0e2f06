"""
Shell Environment Installer

Installs zsh through the detected package manager, runs the Oh My Zsh
installer script and appends the local zshrc template to the user's run
control file.

The installer script is downloaded over HTTPS and executed. Unless
shell.installer_sha256 is set in the manifest nothing verifies what runs.
"""

import hashlib
import tempfile
from pathlib import Path
from typing import Callable, List, Optional

from .config_manager import ShellSettings
from .errors import CommandError, ShellInstallError
from .logger import get_logger
from .platform_utils import PackageManagerDescriptor, PlatformUtils

logger = get_logger(__name__)

Runner = Callable[[List[str]], None]


def sha256sum(path: Path) -> str:
    """Hex SHA256 digest of a file"""
    h = hashlib.sha256()
    with open(path, 'rb') as f:
        for chunk in iter(lambda: f.read(8192), b''):
            h.update(chunk)
    return h.hexdigest()


def append_template(template: Path, rc_file: Path) -> None:
    """
    Append the template's contents to rc_file

    The file is only ever appended to, so running this twice leaves two
    copies of the block.
    """
    try:
        content = template.read_bytes()
    except OSError as e:
        raise ShellInstallError(f"failed to read local template {template}: {e}") from e

    try:
        rc_file.parent.mkdir(parents=True, exist_ok=True)
        with open(rc_file, 'ab') as f:
            f.write(content)
    except OSError as e:
        raise ShellInstallError(f"failed to write to {rc_file}: {e}") from e


class ShellInstaller:
    """Installs zsh and Oh My Zsh"""

    def __init__(self, descriptor: PackageManagerDescriptor, settings: ShellSettings,
                 runner: Optional[Runner] = None):
        self.descriptor = descriptor
        self.settings = settings
        self.runner = runner or PlatformUtils.run_command

    def install_shell_package(self) -> None:
        package = self.settings.package
        logger.info(f"Installing {package} using {self.descriptor.name}...")
        try:
            self.runner(self.descriptor.install_command([package]))
        except CommandError as e:
            raise ShellInstallError(f"error installing {package}: {e}") from e

    def run_remote_installer(self) -> None:
        """Download the installer script, verify it if pinned, then run it"""
        url = self.settings.installer_url
        expected_sha = self.settings.installer_sha256

        with tempfile.TemporaryDirectory(prefix='dotstrap-') as temp_dir:
            script = Path(temp_dir) / 'install.sh'

            logger.info(f"Downloading {url}")
            try:
                self.runner(['curl', '-fsSL', url, '-o', str(script)])
            except CommandError as e:
                raise ShellInstallError(f"error downloading Oh My Zsh installer: {e}") from e

            if expected_sha:
                actual = sha256sum(script)
                if actual != expected_sha:
                    raise ShellInstallError(
                        f"checksum mismatch for {url}: expected {expected_sha}, got {actual}"
                    )
                logger.debug("Installer checksum OK")
            else:
                logger.warning(f"Running {url} without checksum verification")

            try:
                self.runner(['sh', str(script)])
            except CommandError as e:
                raise ShellInstallError(f"error installing Oh My Zsh: {e}") from e

    def install(self) -> None:
        """Run all steps in order; the first failure aborts"""
        self.install_shell_package()
        self.run_remote_installer()
        append_template(self.settings.template, self.settings.rc_file)
        logger.info(f"Zsh and Oh My Zsh successfully installed, {self.settings.rc_file.name} updated")
