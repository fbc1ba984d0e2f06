"""Test configuration and fixtures for the dotstrap test suite"""

import sys
import pytest
from pathlib import Path
from unittest.mock import Mock, patch

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from dotstrap.env import EnvConfig
from dotstrap.platform_utils import PackageManagerDescriptor


@pytest.fixture
def home_dir(tmp_path):
    """Empty stand-in for the user's home directory"""
    home = tmp_path / 'home'
    home.mkdir()
    return home


@pytest.fixture
def project_dir(tmp_path):
    """Project checkout with an empty configs directory"""
    project = tmp_path / 'project'
    (project / 'configs').mkdir(parents=True)
    return project


@pytest.fixture
def configs_dir(project_dir):
    return project_dir / 'configs'


@pytest.fixture
def dotstrap_env(monkeypatch, home_dir, project_dir):
    """Point every dotstrap path setting at the temporary directories"""
    monkeypatch.setenv('DOTSTRAP_HOME', str(home_dir))
    monkeypatch.setenv('DOTSTRAP_PROJECT_DIR', str(project_dir))
    for variable in ('DOTSTRAP_CONFIGS_DIR', 'DOTSTRAP_PACKAGES_FILE',
                     'DOTSTRAP_MANIFEST', 'DOTSTRAP_BACKUP'):
        monkeypatch.delenv(variable, raising=False)
    return EnvConfig()


@pytest.fixture
def sample_configs(configs_dir):
    """Source tree: vim and tmux files, nvim directory, zsh file and template"""
    (configs_dir / 'vim').write_text('set number\n')
    (configs_dir / 'tmux').write_text('set -g mouse on\n')
    nvim = configs_dir / 'nvim'
    (nvim / 'lua').mkdir(parents=True)
    (nvim / 'init.lua').write_text('require("plugins")\n')
    (nvim / 'lua' / 'plugins.lua').write_text('return {}\n')
    (configs_dir / 'zsh').write_text('export EDITOR=nvim\n')
    (configs_dir / 'zshrc.append').write_text('plugins=(git)\n')
    return configs_dir


@pytest.fixture
def apt_descriptor():
    return PackageManagerDescriptor(
        name='apt',
        install_args=('install', '-y'),
        update_args=('update',),
        privilege_cmd='sudo',
    )


@pytest.fixture
def brew_descriptor():
    return PackageManagerDescriptor(
        name='brew',
        install_args=('install',),
        update_args=('update',),
    )


@pytest.fixture
def mock_runner():
    """Command runner that records invocations instead of running them"""
    return Mock(return_value=None)


@pytest.fixture
def mock_subprocess():
    """Mock subprocess for testing system commands"""
    with patch('subprocess.run') as mock_run:
        mock_result = Mock()
        mock_result.returncode = 0
        mock_run.return_value = mock_result
        yield mock_run


# Pytest hooks for better test organization
def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "slow: Slow running tests")


def pytest_collection_modifyitems(config, items):
    """Add markers based on test file location"""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
