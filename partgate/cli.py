"""partgate CLI — query a SynBioHub registry and run the gateway server."""

from __future__ import annotations

import asyncio
import sys

import click
from rich.console import Console
from rich.table import Table

from partgate import __version__
from partgate.auth import Anonymous, PasswordCredential, TokenCredential
from partgate.config import get_settings
from partgate.convert import GraphConverter
from partgate.errors import ConversionError, GatewayError, RegistryError
from partgate.logger import setup_logging

console = Console()


def _transport(ctx: click.Context):
    return (ctx.obj or {}).get("transport")


def _run(coro):
    """Run *coro*, printing gateway and registry errors instead of a traceback."""
    try:
        return asyncio.run(coro)
    except (GatewayError, RegistryError, ConversionError) as exc:
        console.print(f"[red]Error:[/] {exc}")
        sys.exit(1)


@click.group()
@click.version_option(version=__version__)
@click.option("--log-level", default=None, help="Logging level (default: PARTGATE_LOG_LEVEL)")
@click.pass_context
def main(ctx: click.Context, log_level: str | None):
    """partgate — gateway to SynBioHub part registries.

    Search collections and parts, download designs as graph documents,
    and serve the HTTP gateway used by the design canvas.
    """
    ctx.ensure_object(dict)
    setup_logging(log_level or get_settings().log_level)


# ── Registries ───────────────────────────────────────────────────────


@main.command()
@click.pass_context
def registries(ctx: click.Context):
    """List registry instances known to the Web of Registries."""
    from partgate.registry.client import list_registries

    settings = get_settings()
    instances = _run(
        list_registries(settings.wor_url, timeout=settings.http_timeout, transport=_transport(ctx))
    )

    if not instances:
        console.print("[yellow]No registries found.[/]")
        return

    table = Table(title=f"Registries ({len(instances)} found)")
    table.add_column("URL", style="cyan")
    table.add_column("Name")
    for instance in instances:
        table.add_row(instance.instance_url, instance.name)
    console.print(table)


# ── Login ────────────────────────────────────────────────────────────


@main.command()
@click.argument("server")
@click.argument("email")
@click.password_option(confirmation_prompt=False)
@click.pass_context
def login(ctx: click.Context, server: str, email: str, password: str):
    """Log in to SERVER and print the user token."""
    from partgate.documents import login as do_login
    from partgate.registry.client import RegistryClient

    async def _login() -> str:
        async with RegistryClient(server, transport=_transport(ctx)) as client:
            return await do_login(client, PasswordCredential(email=email, secret=password))

    console.print(_run(_login()))


# ── Parts ────────────────────────────────────────────────────────────


@main.command()
@click.argument("server")
@click.option(
    "--mode",
    "-m",
    required=True,
    type=click.Choice(["collections", "components", "modules"]),
)
@click.option("--collection", "-c", default=None, help="Collection URI")
@click.option("--role", "-r", default=None, help="Role name, e.g. 'Promoter'")
@click.option("--type", "type_", "-t", default=None, help="Type name, e.g. 'DNA molecule'")
@click.option("--token", default=None, help="Registry user token")
@click.pass_context
def parts(
    ctx: click.Context,
    server: str,
    mode: str,
    collection: str | None,
    role: str | None,
    type_: str | None,
    token: str | None,
):
    """Search SERVER for collections, components, or modules."""
    from partgate.registry.client import RegistryClient
    from partgate.search import build_listing_request, dispatch

    async def _search():
        listing = build_listing_request(mode, collection=collection, type_=type_, role=role)
        async with RegistryClient(server, transport=_transport(ctx)) as client:
            await client.authenticate(TokenCredential(token) if token else Anonymous())
            return await dispatch(client, listing)

    records = _run(_search())

    if not records:
        console.print("[yellow]No matching records found.[/]")
        return

    table = Table(title=f"{mode.capitalize()} ({len(records)} found)")
    table.add_column("Name", style="cyan")
    table.add_column("Display ID")
    table.add_column("URI", style="dim")
    for record in records:
        table.add_row(record.name, record.display_id, record.uri)
    console.print(table)


# ── Fetch ────────────────────────────────────────────────────────────


@main.command()
@click.argument("server")
@click.argument("uri")
@click.option("--output", "-o", type=click.Path(dir_okay=False), default=None, help="Write to file")
@click.option("--token", default=None, help="Registry user token")
@click.pass_context
def fetch(ctx: click.Context, server: str, uri: str, output: str | None, token: str | None):
    """Download URI from SERVER as a graph document."""
    from partgate.documents import fetch_document
    from partgate.registry.client import RegistryClient

    async def _fetch() -> bytes:
        async with RegistryClient(server, transport=_transport(ctx)) as client:
            await client.authenticate(TokenCredential(token) if token else Anonymous())
            return await fetch_document(client, GraphConverter(), uri)

    content = _run(_fetch())
    if output:
        with open(output, "wb") as f:
            f.write(content)
        console.print(f"[green]Written to:[/] {output}")
    else:
        click.echo(content.decode("utf-8"))


# ── Vocabulary ───────────────────────────────────────────────────────


@main.command()
def vocab():
    """Print the role and type names accepted by --role and --type."""
    from partgate.vocabulary import default_vocabulary

    vocabulary = default_vocabulary()

    table = Table(title="Roles")
    table.add_column("Name", style="cyan")
    table.add_column("Identifier")
    table.add_column("Table", style="dim")
    for name, uri in vocabulary.roles.items():
        table.add_row(name, uri, "role")
    for name, uri in vocabulary.refinements.items():
        table.add_row(name, uri, "refinement")
    console.print(table)

    table = Table(title="Types")
    table.add_column("Name", style="cyan")
    table.add_column("Identifier")
    for name, uri in vocabulary.types.items():
        table.add_row(name, uri)
    console.print(table)


# ── Serve ────────────────────────────────────────────────────────────


@main.command()
@click.option("--host", default="0.0.0.0", help="Bind address")
@click.option("--port", default=8080, type=int, help="Port")
@click.option("--reload", is_flag=True, help="Reload on code changes")
def serve(host: str, port: int, reload: bool):
    """Run the HTTP gateway."""
    import uvicorn

    uvicorn.run("web.backend.app.main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    main()
