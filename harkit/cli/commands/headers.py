"""
Header filter list commands.

Manage the persisted list of request headers left out of generated code.
"""
import click

from harkit.codegen.headers import PRESETS, HeaderFilterSettings, header_category


def _settings(ctx) -> HeaderFilterSettings:
    return HeaderFilterSettings(ctx.obj.get_store())


@click.group()
def headers():
    """Manage the header filter list."""
    pass


@headers.command('list')
@click.pass_context
def list_headers(ctx):
    """Show filtered headers grouped by category."""
    settings = _settings(ctx)
    current = settings.get()
    preset = settings.active_preset()
    click.echo(f"Active preset: {preset or 'custom'}")

    if not current:
        click.echo("No headers filtered.")
        return

    grouped = {}
    for name in current:
        grouped.setdefault(header_category(name), []).append(name)
    for category, names in grouped.items():
        click.secho(f"\n{category}", bold=True)
        for name in names:
            click.echo(f"  {name}")


@headers.command('add')
@click.argument('name')
@click.pass_context
def add_header(ctx, name):
    """Add a header name to the filter list."""
    if _settings(ctx).add(name):
        click.secho(f"Filtering '{name.strip().lower()}'", fg='green')
    else:
        click.echo(f"'{name}' is empty or already filtered; nothing changed")


@headers.command('remove')
@click.argument('name')
@click.pass_context
def remove_header(ctx, name):
    """Remove a header name from the filter list."""
    if _settings(ctx).remove(name):
        click.secho(f"No longer filtering '{name.strip().lower()}'", fg='green')
    else:
        click.echo(f"'{name}' is not in the filter list; nothing changed")


@headers.command('preset')
@click.argument('preset_name', type=click.Choice(list(PRESETS)))
@click.pass_context
def apply_preset(ctx, preset_name):
    """Replace the filter list with a preset."""
    _settings(ctx).apply_preset(preset_name)
    click.secho(f"Applied preset '{preset_name}'", fg='green')


@headers.command('reset')
@click.pass_context
def reset_headers(ctx):
    """Restore the default filter list."""
    _settings(ctx).reset()
    click.secho("Header filter list reset to default", fg='green')
