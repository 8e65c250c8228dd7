"""Read and change ~/.devdash/config.toml."""

import click

from devdash.cli.ensure import fail
from devdash.cli.output import machine_output, user_output
from devdash.core.config_store import CONFIG_KEYS, config_as_dict, with_value
from devdash.core.context import DevDashContext


def _format_value(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@click.group("config")
def config_group() -> None:
    """Manage devdash configuration."""
    pass


@config_group.command("list")
@click.pass_obj
def config_list(ctx: DevDashContext) -> None:
    """Print all configuration keys and values."""
    if not ctx.config_store.exists():
        user_output(click.style(f"(defaults; {ctx.config_store.path()} does not exist)", dim=True))
    for key, value in config_as_dict(ctx.config).items():
        machine_output(f"{key}={_format_value(value)}")


@config_group.command("get")
@click.argument("key", type=click.Choice(CONFIG_KEYS))
@click.pass_obj
def config_get(ctx: DevDashContext, key: str) -> None:
    """Print the value of a configuration key."""
    machine_output(_format_value(config_as_dict(ctx.config)[key]))


@config_group.command("set")
@click.argument("key", type=click.Choice(CONFIG_KEYS))
@click.argument("value")
@click.pass_obj
def config_set(ctx: DevDashContext, key: str, value: str) -> None:
    """Set a configuration key and write the config file."""
    try:
        updated = with_value(ctx.config, key, value)
    except ValueError as e:
        fail(str(e))

    if ctx.dry_run:
        user_output(f"[DRY RUN] Would set {key}={_format_value(getattr(updated, key))}")
        return

    ctx.config_store.save(updated)
    user_output(f"Set {key}={_format_value(getattr(updated, key))}")
