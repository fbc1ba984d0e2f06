"""
Error Types

All dotstrap failures derive from DotstrapError so the CLI can report them
with a single handler. Nothing here is retried; every error aborts the
routine that raised it.
"""

from typing import List, Optional


class DotstrapError(Exception):
    """Base class for dotstrap errors"""
    pass


class EnvironmentDetectionError(DotstrapError):
    """Unsupported OS or no known package manager on the search path"""
    pass


class ConfigurationError(DotstrapError):
    """Invalid or unreadable dotstrap manifest"""
    pass


class PackageListError(DotstrapError):
    """Package list file missing, unreadable or empty"""
    pass


class DeploymentError(DotstrapError):
    """Filesystem failure while deploying a tool configuration"""

    def __init__(self, tool: str, message: str):
        self.tool = tool
        super().__init__(message)


class MissingConfigSourceError(DeploymentError):
    """Configuration source for a tool does not exist"""

    def __init__(self, tool: str, source: str):
        self.source = source
        super().__init__(tool, f"missing configuration source for {tool}: {source}")


class CommandError(DotstrapError):
    """External command exited non-zero or could not be started"""

    def __init__(self, command: List[str], returncode: Optional[int] = None,
                 reason: Optional[str] = None):
        self.command = list(command)
        self.returncode = returncode
        self.reason = reason

        if reason:
            detail = reason
        else:
            detail = f"exit status {returncode}"
        super().__init__(f"command '{' '.join(self.command)}' failed: {detail}")


class PackageInstallError(DotstrapError):
    """Package manager update or install step failed"""
    pass


class ShellInstallError(DotstrapError):
    """A step of the shell environment installation failed"""
    pass
