"""
CLI front-end using Typer framework

edge-snapshot get TYPE [NAME...] prints resources held in an edge node's local
metadata database, in the style of ``kubectl get``.
"""

from typing import List, Optional

import structlog
import typer
from typing_extensions import Annotated

from .. import __version__
from ..config import get_config
from ..exceptions import EdgeSnapshotError
from ..logging_config import setup_logging_from_config
from ..models import DEFAULT_NAMESPACE, DEFAULT_STORE_PATH, GetOptions

logger = structlog.get_logger(__name__)

# Exit status of every failed invocation
DEFAULT_ERROR_EXIT_CODE = 1

# Create the main Typer app
app = typer.Typer(
    name="edge-snapshot",
    help="Inspect resources stored on an edge node",
    add_completion=False,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool):
    """Show version and exit"""
    if value:
        typer.echo(f"edge-snapshot v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[Optional[bool], typer.Option("--version", callback=version_callback, is_eager=True, help="Show version and exit")] = None,
    debug: Annotated[bool, typer.Option("--debug", help="Enable debug logging")] = False,
):
    """
    edge-snapshot: read-only view of an edge node's metadata store

    [bold]Resource types:[/bold] pod, node, service, secret, configmap, endpoints, all
    """
    setup_logging_from_config(get_config().config, debug=debug)


@app.command()
def get(
    resource_type: Annotated[Optional[str], typer.Argument(metavar="TYPE", help="Resource type (po, no, svc, secret, cm, ep, all)", show_default=False)] = None,
    names: Annotated[Optional[List[str]], typer.Argument(metavar="[NAME]...", help="Substrings of resource names to match", show_default=False)] = None,
    namespace: Annotated[Optional[str], typer.Option("--namespace", "-n", help="Namespace to query")] = None,
    output: Annotated[Optional[str], typer.Option("--output", "-o", help="Output format (yaml, json, wide)")] = None,
    selector: Annotated[str, typer.Option("--selector", "-l", help="Label selector, e.g. -l key1=value1,key2!=value2")] = "",
    input_path: Annotated[Optional[str], typer.Option("--input", "-i", help="Path to the edge node database file")] = None,
    all_namespaces: Annotated[bool, typer.Option("--all-namespaces", "-A", help="List resources across all namespaces")] = False,
):
    """
    Display one or many resources from the edge node database

    [bold]Examples:[/bold]
      edge-snapshot get pods
      edge-snapshot get pod nginx -n kube-system -o yaml
      edge-snapshot get svc -A -l app=web
      edge-snapshot get all -i /tmp/edgecore.db
    """
    config = get_config()

    options = GetOptions(
        resource_type=resource_type or "",
        names=names or [],
        namespace=namespace or config.get_str("query.namespace", DEFAULT_NAMESPACE),
        output_format=output if output is not None else config.get_str("output.default_format"),
        selector=selector,
        store_path=input_path or config.get_str("store.path", DEFAULT_STORE_PATH),
        all_namespaces=all_namespaces,
    )

    # Lazy import to speed up --help
    from .commands import GetCommand

    command = GetCommand(width=config.get("output.width"))

    try:
        result = command.execute(options)
    except EdgeSnapshotError as e:
        logger.debug("Command failed", error_type=type(e).__name__, error=str(e))
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(DEFAULT_ERROR_EXIT_CODE)

    typer.echo(result.output, nl=False)


if __name__ == "__main__":
    app()
