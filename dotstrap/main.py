"""
dotstrap entry point

    dotstrap init          deploy tool configurations
    dotstrap install-zsh   install zsh and Oh My Zsh
    dotstrap setup         full bootstrap run
"""

import sys

import click

from .cli import DotstrapCLI
from .env import DOTSTRAP_VERSION, env
from .logger import set_log_level, setup_logging


@click.group(invoke_without_command=True)
@click.option('--verbose', '-v', is_flag=True, help='Show debug output')
@click.version_option(version=DOTSTRAP_VERSION, prog_name='dotstrap')
@click.help_option('--help', '-h')
@click.pass_context
def cli(ctx, verbose):
    """Bootstrap a workstation: packages, dotfiles and zsh."""
    setup_logging()
    set_log_level('DEBUG' if verbose else env.log_level, 'console')

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help(), err=True)
        ctx.exit(2)

    ctx.obj = DotstrapCLI()


@cli.command('init')
@click.pass_obj
def init_command(app):
    """Copy tool configurations into the home directory."""
    sys.exit(app.init_configs())


@cli.command('install-zsh')
@click.pass_obj
def install_zsh_command(app):
    """Install zsh and Oh My Zsh, then extend ~/.zshrc."""
    sys.exit(app.install_zsh())


@cli.command('setup')
@click.pass_obj
def setup_command(app):
    """Install packages, copy configurations and install zsh."""
    sys.exit(app.setup())


def main():
    cli()


if __name__ == '__main__':
    main()
