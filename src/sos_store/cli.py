"""CLI for sos-store."""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .client import NodeClient
from .config import NodeConfig, ProxyConfig
from .constants import (
    DOWNLOAD_PORT,
    NODE_HOST,
    NODE_PORT,
    NODE_STORE,
    NODE_TIMEOUT,
    PROXY_HOST,
    UPLOAD_PORT,
)
from .errors import ConfigError
from .registry import NodeRegistry, default_node_files


app = typer.Typer(help="""\
Simple object storage. Run blob-server nodes that keep blobs on local disk,
and an api-server that names uploads by content and routes them to the
first available node.""")

console = Console()


def _configure_logging(level: str) -> None:
    """Send library logging through rich at the requested level."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
        force=True,
    )


def _load_registry(blob_server: Optional[str]) -> NodeRegistry:
    return NodeRegistry.from_sources(default_node_files(), blob_server)


@app.command("blob-server")
def blob_server(
    host: str = typer.Option(NODE_HOST, "--host", envvar="SOS_HOST", help="The IP to listen upon"),
    port: int = typer.Option(NODE_PORT, "--port", envvar="SOS_PORT", help="The port to bind upon"),
    store: Path = typer.Option(Path(NODE_STORE), "--store", envvar="SOS_STORE", help="The location to write the data to"),
    provider: str = typer.Option("fs", "--provider", help="Storage backend"),
    log_level: str = typer.Option("info", "--log-level", envvar="SOS_LOG_LEVEL", help="Logging level"),
):
    """Run a storage node serving blobs from a local directory.

    Examples:
        sos blob-server                          # 127.0.0.1:3001, ./data
        sos blob-server --port 3002 --store /srv/blobs
    """
    from .server import run_node

    _configure_logging(log_level)
    config = NodeConfig(host=host, port=port, store=store, provider=provider, log_level=log_level)

    console.print(f"Launching the server on [cyan]http://{host}:{port}[/cyan]")
    try:
        run_node(config)
    except ConfigError as e:
        console.print(f"[red]✗[/red] {e}")
        raise typer.Exit(1)


@app.command("api-server")
def api_server(
    host: str = typer.Option(PROXY_HOST, "--host", envvar="SOS_HOST", help="The IP to listen upon"),
    blob_server: Optional[str] = typer.Option(
        None, "--blob-server", envvar="SOS_BLOB_SERVERS",
        help="Comma-separated list of blob-servers to contact",
    ),
    upload_port: int = typer.Option(UPLOAD_PORT, "--upload-port", help="The port to bind upon for uploading objects"),
    download_port: int = typer.Option(DOWNLOAD_PORT, "--download-port", help="The port to bind upon for downloading objects"),
    timeout: float = typer.Option(NODE_TIMEOUT, "--timeout", help="Seconds to wait on each blob-server request"),
    log_level: str = typer.Option("info", "--log-level", envvar="SOS_LOG_LEVEL", help="Logging level"),
):
    """Run the routing proxy in front of the known blob-servers.

    Blob-servers are read from /etc/sos.conf, then ~/.sos.conf (one per line),
    then --blob-server. Earlier entries are tried first.

    Examples:
        sos api-server --blob-server http://127.0.0.1:3001,http://127.0.0.1:3002
    """
    from .server import run_proxy

    _configure_logging(log_level)
    registry = _load_registry(blob_server)
    config = ProxyConfig(
        registry=registry,
        host=host,
        upload_port=upload_port,
        download_port=download_port,
        timeout=timeout,
        log_level=log_level,
    )

    console.print("[bold]Launching API-server[/bold]")
    console.print(f"\nUpload service\n  [cyan]http://127.0.0.1:{upload_port}/upload[/cyan]")
    console.print(f"\nDownload service\n  [cyan]http://127.0.0.1:{download_port}/fetch/:id[/cyan]")
    console.print("\nBlob-servers")
    if registry.nodes:
        for node in registry:
            console.print(f"  • {node}")
    else:
        console.print("  [yellow]none configured; every request will fail[/yellow]")
    console.print()

    run_proxy(config)


@app.command()
def nodes(
    blob_server: Optional[str] = typer.Option(
        None, "--blob-server", envvar="SOS_BLOB_SERVERS",
        help="Comma-separated list of blob-servers to contact",
    ),
    timeout: float = typer.Option(5.0, "--timeout", help="Seconds to wait on each probe"),
):
    """Show the blob-servers the api-server would use, in failover order.

    Each node is probed on /alive.
    """
    registry = _load_registry(blob_server)
    if not registry.nodes:
        console.print("[dim]No blob-servers configured[/dim]")
        raise typer.Exit(1)

    client = NodeClient(timeout=timeout)
    table = Table(title="Blob-servers")
    table.add_column("#", justify="right")
    table.add_column("Address", style="cyan")
    table.add_column("Status")

    try:
        for position, node in enumerate(registry, start=1):
            status = "[green]alive[/green]" if client.alive(node) else "[red]unreachable[/red]"
            table.add_row(str(position), node, status)
    finally:
        client.close()

    console.print(table)


def main():
    """Entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
