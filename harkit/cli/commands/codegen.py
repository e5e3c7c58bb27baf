"""
Code generation and response inspection commands.
"""
import json

import click

from harkit.cli.common import har_file_argument, index_option, read_entry
from harkit.codegen import generate_code
from harkit.codegen.headers import HeaderFilterSettings
from harkit.core.models import Dialect
from harkit.services.response import extract_response, format_body, summarize_response


@click.command()
@har_file_argument
@index_option
@click.option(
    '--format', '-f', 'dialect',
    type=click.Choice([d.value for d in Dialect]),
    default=Dialect.CURL.value,
    show_default=True,
    help='Calling convention to generate'
)
@click.option(
    '--no-filter',
    is_flag=True,
    help='Ignore the saved header filter list (built-in noise headers still apply)'
)
@click.pass_context
def generate(ctx, har_file, index, dialect, no_filter):
    """Generate curl/fetch/axios code for one captured exchange.

    Example:
        harkit generate capture.har --index 3 --format axios
    """
    entry = read_entry(har_file, index)
    exclude_list = [] if no_filter else HeaderFilterSettings(ctx.obj.get_store()).get()
    click.echo(generate_code(entry, dialect, exclude_list))


@click.command()
@har_file_argument
@index_option
@click.option('--headers/--no-headers', 'show_headers', default=False, help='Include response headers')
@click.option('--body/--no-body', 'show_body', default=True, help='Include the response body')
@click.option('--json', 'as_json', is_flag=True, help='Print the summary as JSON')
def response(har_file, index, show_headers, show_body, as_json):
    """Summarize the response of one captured exchange."""
    entry = read_entry(har_file, index)
    summary = summarize_response(entry)
    detail = extract_response(entry)

    if as_json:
        payload = summary.model_dump(by_alias=True)
        if show_headers:
            payload["headers"] = [h.model_dump() for h in detail.headers]
        if show_body:
            payload["body"] = detail.body
            payload["bodyParsed"] = detail.body_parsed
        click.echo(json.dumps(payload, indent=2, ensure_ascii=False))
        return

    status_color = 'green' if 200 <= summary.status_code < 300 else 'yellow'
    if summary.status_code >= 400 or summary.status_code == 0:
        status_color = 'red'
    click.secho(f"{summary.status_code} {summary.status_text}".strip(), fg=status_color)
    click.echo(f"  Content-Type: {summary.content_type or '-'}")
    click.echo(f"  Time: {summary.response_time_ms} ms")
    click.echo(f"  Size: {summary.size_bytes} bytes")

    if show_headers and detail.headers:
        click.echo("\nHeaders:")
        for header in detail.headers:
            click.echo(f"  {header.name}: {header.value}")

    if show_body and detail.body:
        click.echo("\nBody:")
        click.echo(format_body(detail))
