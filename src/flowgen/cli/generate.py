"""
flowgen CLI - generate and render commands.

Generate trigger flows for every integration, data collection and event
in the workspace, write them to disk and create them remotely.
"""

import logging
import sys
import time
import traceback
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from flowgen.core.catalog.auth import create_workspace_token
from flowgen.core.catalog.client import IntegrationAppClient
from flowgen.core.catalog.exceptions import FlowgenError
from flowgen.core.config import FlowgenConfig, load_config
from flowgen.core.flows.models import TraversalReport
from flowgen.core.flows.service import FlowTraversalService
from flowgen.core.flows.store import FlowStore, render_flow_yaml
from flowgen.core.flows.sync import FlowSyncExecutor
from flowgen.core.flows.template import generate_flow
from flowgen.core.flows.throttle import RequestThrottle

console = Console()

# Global debug flag
_debug_mode = False


def setup_logging(debug: bool = False, quiet: bool = False) -> None:
    """
    Configure logging for flowgen commands.

    Progress is narrated at INFO level; --debug adds request-level detail,
    --quiet keeps only warnings and errors.

    Args:
        debug: If True, enable DEBUG level logging and full tracebacks
        quiet: If True, only log warnings and errors
    """
    global _debug_mode
    _debug_mode = debug

    if debug:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def handle_error(error: Exception, command_name: str) -> None:
    """
    Display an error with a user-friendly message.

    Args:
        error: The exception that was raised
        command_name: Name of the command that failed
    """
    error_text = Text()
    if isinstance(error, FlowgenError):
        title = "[bold red]Error[/bold red]"
        error_text.append("Error: ", style="bold red")
        error_text.append(str(error))

        if error.context:
            error_text.append("\n\nContext:\n", style="dim")
            for key, value in error.context.items():
                error_text.append(f"  {key}: ", style="cyan")
                error_text.append(f"{value}\n", style="white")
    else:
        title = "[bold red]Unexpected Error[/bold red]"
        error_text.append("Unexpected error in ", style="bold red")
        error_text.append(command_name, style="bold yellow")
        error_text.append(": ", style="bold red")
        error_text.append(str(error))

    console.print()
    console.print(Panel(error_text, title=title, border_style="red", expand=False))

    if _debug_mode:
        console.print("\n[dim]Full traceback:[/dim]")
        console.print(traceback.format_exc())
    else:
        console.print()
        console.print("[dim]Run with --debug for full traceback[/dim]")
    console.print()


def _resolve_token(config: FlowgenConfig) -> str:
    """Use the configured token, or sign one from the workspace key/secret."""
    workspace = config.workspace
    if workspace.token is not None:
        return workspace.token.get_secret_value()
    secret = workspace.secret.get_secret_value() if workspace.secret is not None else None
    return create_workspace_token(workspace.key, secret, workspace.token_ttl_seconds)


def _build_client(config: FlowgenConfig) -> IntegrationAppClient:
    """Create an authenticated catalog client from configuration."""
    return IntegrationAppClient(
        _resolve_token(config),
        base_url=config.api.base_url,
        timeout=config.api.timeout,
    )


def _print_report(report: TraversalReport, elapsed: float, dry_run: bool) -> None:
    console.print()
    summary_text = Text.from_markup(f"Flow generation complete in {elapsed:.2f}s")
    console.print(
        Panel(
            summary_text,
            title=Text("✓", style="bold green"),
            border_style="green",
            expand=False,
        )
    )
    console.print()

    stats_table = Table(title="Flow Statistics", show_header=False, box=None)
    stats_table.add_column("Metric", style="cyan", no_wrap=True, width=24)
    stats_table.add_column("Count", justify="right", style="bold")

    stats_table.add_row(
        "Integrations processed",
        f"{report.integrations_processed}/{report.integrations_total}",
    )
    stats_table.add_row("Collections with events", str(report.collections_processed))
    stats_table.add_row("Collections without events", str(report.collections_skipped))
    if dry_run:
        stats_table.add_row("Flows written", Text(str(report.flows_written), style="green"))
    else:
        stats_table.add_row("Flows created", Text(str(report.flows_created), style="green"))
        stats_table.add_row(
            "Flows already existing", Text(str(report.flows_existing), style="blue")
        )
    stats_table.add_row("Failures", Text(str(len(report.errors)), style="yellow"))

    console.print(stats_table)
    console.print()

    if report.errors:
        error_panel_content = Text()
        for i, error in enumerate(report.errors):
            if i > 0:
                error_panel_content.append("\n")
            error_panel_content.append(f"• {error}")
        console.print(
            Panel(
                error_panel_content,
                title="[bold yellow]Warnings[/bold yellow]",
                border_style="yellow",
                expand=False,
            )
        )
        console.print()


def generate(
    output_dir: Annotated[
        Path | None,
        typer.Option(
            "--output-dir",
            "-o",
            help="Output root; flows are written to <output-dir>/flows/<integration>/",
        ),
    ] = None,
    integration: Annotated[
        list[str] | None,
        typer.Option(
            "--integration",
            "-i",
            help="Only process this integration key (repeatable)",
        ),
    ] = None,
    delay: Annotated[
        float | None,
        typer.Option(
            "--delay",
            min=0.0,
            help="Seconds to wait before each collection fetch",
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            help="Write flow files locally without creating flows remotely",
        ),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option(
            "--debug",
            help="Enable debug mode with full tracebacks and verbose logging",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Only log warnings and errors",
        ),
    ] = False,
) -> None:
    """
    Generate trigger flows for all integrations and sync them.

    Walks every integration's data collections and their events, writes
    one flow per event to disk and creates it in the workspace. Flows
    that already exist are left untouched.

    Examples:
        flowgen generate
        flowgen generate --integration hubspot --integration salesforce
        flowgen generate --dry-run --output-dir build
    """
    setup_logging(debug, quiet)

    try:
        config = load_config()
        output_root = output_dir or Path(config.output.root)
        integration_keys = integration or config.traversal.integrations
        request_delay = delay if delay is not None else config.traversal.request_delay

        store = FlowStore(output_root)
        start_time = time.time()
        with _build_client(config) as client:
            service = FlowTraversalService(
                client,
                FlowSyncExecutor(store, client, submit=not dry_run),
                throttle=RequestThrottle(request_delay),
                integration_keys=integration_keys,
            )
            report = service.run()
        elapsed = time.time() - start_time

        _print_report(report, elapsed, dry_run)

    except Exception as e:
        handle_error(e, "generate")
        raise typer.Exit(1)


def render(
    integration_key: Annotated[str, typer.Argument(..., help="Integration key")],
    collection_key: Annotated[str, typer.Argument(..., help="Data collection key")],
    event: Annotated[
        str | None,
        typer.Option(
            "--event",
            "-e",
            help="Only render this event type",
        ),
    ] = None,
    debug: Annotated[
        bool,
        typer.Option(
            "--debug",
            help="Enable debug mode with full tracebacks and verbose logging",
        ),
    ] = False,
) -> None:
    """
    Print the flows generated for one data collection.

    Nothing is written to disk or created remotely.

    Examples:
        flowgen render hubspot contacts
        flowgen render hubspot contacts --event created
    """
    setup_logging(debug, quiet=not debug)

    try:
        config = load_config()
        with _build_client(config) as client:
            integrations = {i.key: i for i in client.list_integrations()}
            if integration_key not in integrations:
                console.print(f"[red]Integration '{integration_key}' not found[/red]")
                raise typer.Exit(1)

            summary = next(
                (s for s in client.list_collections(integration_key) if s.key == collection_key),
                None,
            )
            if summary is None:
                console.print(
                    f"[red]Collection '{collection_key}' not found for integration "
                    f"'{integration_key}'[/red]"
                )
                raise typer.Exit(1)

            collection = client.get_collection(integration_key, collection_key)
            collection = collection.with_summary(summary)

        event_types = collection.event_types()
        if event is not None:
            if event not in event_types:
                console.print(
                    f"[red]Event '{event}' not available for collection "
                    f"'{collection_key}'[/red]"
                )
                raise typer.Exit(1)
            event_types = [event]

        if not event_types:
            console.print(f"[yellow]No events found for collection '{collection_key}'[/yellow]")
            return

        for event_type in event_types:
            document = generate_flow(event_type, collection, integrations[integration_key])
            console.print(f"[bold cyan]# {document.key}[/bold cyan]")
            console.print(Syntax(render_flow_yaml(document), "yaml"))

    except typer.Exit:
        raise
    except Exception as e:
        handle_error(e, "render")
        raise typer.Exit(1)
