"""
Screen scan and page map commands.
"""
import json
from pathlib import Path

import click

from harkit.cli.common import har_file_argument, read_entries
from harkit.services.capture import MemoryCaptureSource, StaticPageIntrospector
from harkit.services.page_map import PageMapRepository
from harkit.services.scanner import ScanAggregator
from harkit.services.schema import format_schema


def _repository(ctx) -> PageMapRepository:
    return PageMapRepository(ctx.obj.get_store())


@click.command()
@har_file_argument
@click.option('--page-url', required=True, help='URL of the page the HAR was captured on')
@click.option('--link', 'links', multiple=True, help='Link found on the page (repeatable)')
@click.option(
    '--next-data',
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='JSON file with the page\'s __NEXT_DATA__ payload'
)
@click.option('--timeout', type=float, help='Seconds to wait for each response body')
@click.pass_context
def scan(ctx, har_file, page_url, links, next_data, timeout):
    """Map a page to the API calls captured in HAR_FILE.

    Example:
        harkit scan capture.har --page-url https://app.example.com/users --link /users/1
    """
    capture = MemoryCaptureSource(read_entries(har_file))

    if next_data:
        try:
            payload = json.loads(next_data.read_text(encoding='utf-8'))
        except (OSError, json.JSONDecodeError) as e:
            click.secho(f"Could not read {next_data}: {e}", fg='red', err=True)
            raise click.Abort()
        introspector = StaticPageIntrospector.from_next_data(page_url, payload, hrefs=links)
    else:
        introspector = StaticPageIntrospector(page_url, hrefs=links)

    aggregator = ScanAggregator(_repository(ctx), capture, introspector, timeout=timeout)
    result = aggregator.scan_sync()
    page = result.page

    click.secho(f"Scanned {page.url} ({page.framework})", fg='green')
    if page.route:
        click.echo(f"  Route: {page.route}")
    click.echo(f"  APIs: {len(page.apis)}")
    for api in page.apis:
        click.echo(f"    {api.method:<6} {api.status:<4} {api.path}")
    click.echo(f"  Links: {len(page.links)}")


@click.group()
def pages():
    """Inspect, export or clear the page map."""
    pass


@pages.command('list')
@click.option('--search', default='', help='Filter pages by URL substring')
@click.pass_context
def list_pages(ctx, search):
    """List scanned pages and linked pages not scanned yet."""
    scanned, unscanned = _repository(ctx).list_pages(search)

    if not scanned and not unscanned:
        click.echo("No pages scanned yet. Run: harkit scan <har_file> --page-url <url>")
        return

    for page in scanned:
        click.echo(f"{page.url}  [{len(page.apis)} APIs]  {page.scanned_at}")
    if unscanned:
        click.secho("\nNot scanned:", bold=True)
        for link in unscanned:
            click.echo(f"  {link}")


@pages.command('show')
@click.argument('url')
@click.option('--json', 'as_json', is_flag=True, help='Print the raw page record')
@click.pass_context
def show_page(ctx, url, as_json):
    """Show the APIs recorded for a page."""
    page = _repository(ctx).get(url)
    if page is None:
        click.secho(f"Page not scanned: {url}", fg='red', err=True)
        raise click.Abort()

    if as_json:
        click.echo(json.dumps(page.model_dump(mode='json', by_alias=True), indent=2))
        return

    click.secho(page.url, bold=True)
    click.echo(f"  Framework: {page.framework}")
    click.echo(f"  Route: {page.route or '-'}")
    click.echo(f"  Scanned: {page.scanned_at}")
    for api in page.apis:
        click.echo(f"\n  {api.method} {api.path} -> {api.status} ({api.time_ms} ms)")
        click.echo(f"    Request:  {format_schema(api.request_schema)}")
        click.echo(f"    Response: {format_schema(api.response_schema)}")
    if page.links:
        click.echo("\n  Links:")
        for link in page.links:
            click.echo(f"    {link}")


@pages.command('clear')
@click.confirmation_option(prompt='Delete all scanned pages?')
@click.pass_context
def clear_pages(ctx):
    """Delete every scanned page."""
    _repository(ctx).clear()
    click.secho("Page map cleared", fg='green')


@pages.command('export')
@click.option(
    '--output-dir', '-o',
    type=click.Path(file_okay=False, path_type=Path),
    default=Path('.'),
    show_default=True,
    help='Directory for the exported JSON file'
)
@click.pass_context
def export_pages(ctx, output_dir):
    """Export the page map as a dated JSON file."""
    repository = _repository(ctx)
    try:
        path = repository.export_to_file(output_dir)
    except OSError as e:
        click.secho(f"Could not write export ({e}); printing instead", fg='yellow', err=True)
        click.echo(repository.export_json())
        return
    click.secho(f"Exported to {path}", fg='green')
