"""
API server command.

Starts the FastAPI service with uvicorn.
"""
import os

import click


@click.command()
@click.option(
    '--host',
    default='127.0.0.1',
    help='Host to bind to (default: 127.0.0.1)'
)
@click.option(
    '--port',
    type=int,
    default=5000,
    help='Port to bind to (default: 5000)'
)
@click.option(
    '--reload',
    is_flag=True,
    help='Auto-reload on code changes'
)
@click.pass_context
def serve(ctx, host, port, reload):
    """
    Start the harkit API server.

    Serves code generation, response extraction, header settings and the
    page map over HTTP for editor and browser integrations.
    """
    if ctx.obj.store_path:
        os.environ['HARKIT_STORE_PATH'] = str(ctx.obj.store_path)
    if ctx.obj.ephemeral:
        os.environ['HARKIT_EPHEMERAL'] = 'true'

    import uvicorn

    click.echo(f"Starting harkit server on http://{host}:{port}")
    if reload:
        click.echo("  Auto-reload: enabled (server restarts on code changes)")
    click.echo("\nPress Ctrl+C to stop\n")

    uvicorn.run(
        "harkit.api.main:app",
        host=host,
        port=port,
        reload=reload
    )
