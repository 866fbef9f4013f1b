"""Self-update check."""

import click

from coursefork.__version__ import __version__
from coursefork.infrastructure.config import get_config
from coursefork.infrastructure.version_check import UpdateCheckError, check_for_update


@click.command(name="check-update")
def check_update():
    """Check whether a newer coursefork release is available.

    Examples:
        coursefork check-update
    """
    updates = get_config().updates
    try:
        status = check_for_update(__version__, updates.check_url, updates.timeout)
    except UpdateCheckError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1) from e

    if status.update_available:
        click.echo(f"A new version is available: {status.latest} (installed: {status.installed})")
        click.echo("Update with: pip install --upgrade coursefork")
    else:
        click.echo(f"coursefork {status.installed} is up to date.")
