"""Configuration management commands."""

import click

from coursefork.infrastructure.config import (
    find_config_files,
    get_config,
    get_config_file_locations,
    write_example_config,
)


@click.group()
def config():
    """Manage coursefork configuration files."""
    pass


@config.command(name="init")
@click.option(
    "--location",
    type=click.Choice(["user", "project"], case_sensitive=False),
    default="user",
    help="Where to create the configuration file.",
)
@click.option(
    "--force",
    is_flag=True,
    help="Overwrite existing configuration file.",
)
def config_init(location, force):
    """Create an example configuration file.

    The file documents every available option. Use --location=project to
    create .coursefork/config.toml in the current directory, e.g. to
    record the course's upstream URL in the repository.

    Examples:
        coursefork config init
        coursefork config init --location=project
        coursefork config init --force
    """
    config_path = get_config_file_locations()[location.lower()]

    if config_path.exists() and not force:
        click.echo(f"Configuration file already exists at {config_path}\nUse --force to overwrite.")
        return

    try:
        created_path = write_example_config(location=location.lower())
    except PermissionError as e:
        click.echo(f"Error: Permission denied creating config file: {e}", err=True)
        raise SystemExit(1) from e
    click.echo(f"Created configuration file: {created_path}")


@config.command(name="show")
def config_show():
    """Show current configuration values.

    Includes values from all sources (config files and environment variables).
    """
    cfg = get_config(reload=True)

    click.echo("Current coursefork configuration:")
    click.echo("=" * 60)
    for section, values in cfg.model_dump().items():
        click.echo(f"\n[{section}]")
        for key, value in values.items():
            shown = value if value not in ("", None) else "(not set)"
            click.echo(f"  {key}: {shown}")


@config.command(name="locate")
def config_locate():
    """Show where coursefork looks for configuration files."""
    locations = get_config_file_locations()
    existing = find_config_files()

    click.echo("Configuration File Locations:")
    click.echo("=" * 60)

    for location, title in (
        ("system", "System config (lowest priority)"),
        ("user", "User config"),
        ("project", "Project config (highest priority)"),
    ):
        click.echo(f"\n{title}:")
        click.echo(f"  Path: {existing[location] or locations[location]}")
        click.echo(f"  Status: {'Exists' if existing[location] else 'Not found'}")

    click.echo("\nEnvironment variables (COURSEFORK_<SECTION>__<KEY>) override all files.")
