"""
Command-line interface for Directus type generation.

Fetches collection metadata (or reads a schema snapshot), generates the
TypeScript declarations and writes them to a file or stdout.
"""

import argparse
import sys
from typing import Any, Dict, List, Optional

from rich import box
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.syntax import Syntax
from rich.table import Table

from . import __version__
from .api import DirectusClient, MetadataAuthError, MetadataFetchError
from .codegen import (
    ConfigError,
    GeneratorConfig,
    generate_from_collections,
    load_config,
    write_output,
)
from .codegen.core.config import get_config_manager
from .logging_config import get_logger, setup_logging
from .utils import SnapshotLoaderError, load_snapshot

logger = get_logger(__name__)

console = Console()
error_console = Console(stderr=True)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="directus-typegen",
        description="Generate TypeScript types from Directus collections",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  directus-typegen --url https://cms.example.com --token $TOKEN
  directus-typegen -o src/types/schema.ts
  directus-typegen --snapshot snapshot.json --stdout
        """.strip(),
    )

    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    # Input options
    source_group = parser.add_argument_group("metadata source")
    source_group.add_argument(
        "--url", help="Directus URL (default: $DIRECTUS_URL or http://localhost:8055)"
    )
    source_group.add_argument(
        "--token", help="Directus static token (default: $DIRECTUS_TOKEN or 'admin')"
    )
    source_group.add_argument(
        "--snapshot",
        metavar="FILE",
        help="Read a schema snapshot JSON instead of calling the API",
    )
    source_group.add_argument("--timeout", type=int, help="Request timeout in seconds")
    source_group.add_argument(
        "--include-system",
        action="store_true",
        help="Include directus_* system collections",
    )

    # Output options (mutually exclusive)
    output_group = parser.add_mutually_exclusive_group()
    output_group.add_argument(
        "--output", "-o", metavar="FILE", help="Output file (default: ./directus-schema.ts)"
    )
    output_group.add_argument(
        "--stdout", action="store_true", help="Print the generated code instead of writing it"
    )

    # Generation options
    gen_group = parser.add_argument_group("generation options")
    gen_group.add_argument("--config", metavar="FILE", help="JSON configuration file")
    gen_group.add_argument(
        "--schema-name", metavar="NAME", help="Name of the aggregate interface (default: Schema)"
    )
    gen_group.add_argument(
        "--indent-size", type=int, metavar="N", help="Indent with N spaces instead of tabs"
    )
    gen_group.add_argument(
        "--no-comments", action="store_true", help="Don't emit JSDoc comments from notes"
    )
    gen_group.add_argument(
        "--singularize-singletons",
        action="store_true",
        help="Singularize singleton collection names too",
    )

    # Diagnostics
    diag_group = parser.add_argument_group("diagnostics")
    diag_group.add_argument(
        "--verbose", "-v", action="store_true", help="Show generation metadata"
    )
    diag_group.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    diag_group.add_argument("--log-file", metavar="FILE", help="Also log to this file")

    return parser


def build_config(args: argparse.Namespace) -> GeneratorConfig:
    """Build configuration from CLI arguments."""
    overrides: Dict[str, Any] = {}

    if args.url:
        overrides["directus_url"] = args.url
    if args.token:
        overrides["directus_token"] = args.token
    if args.timeout is not None:
        overrides["timeout"] = args.timeout
    if args.include_system:
        overrides["include_system_collections"] = True
    if args.output:
        overrides["output_file"] = args.output
    if args.stdout:
        overrides["output_file"] = None
    if args.schema_name:
        overrides["schema_name"] = args.schema_name
    if args.indent_size is not None:
        overrides["indent_size"] = args.indent_size
        overrides["use_tabs"] = False
    if args.no_comments:
        overrides["add_comments"] = False
    if args.singularize_singletons:
        overrides["singularize_singletons"] = True

    try:
        return load_config(custom_config=overrides, config_file=args.config)
    except ConfigError as e:
        raise CLIError(f"Configuration error: {e}") from e


def _fetch_collections(config: GeneratorConfig, args: argparse.Namespace):
    """Load collections from the snapshot or the API."""
    if args.snapshot:
        return load_snapshot(args.snapshot, include_system=config.include_system_collections)

    with DirectusClient(
        config.directus_url, config.directus_token, timeout=config.timeout
    ) as client:
        return client.fetch_collections(include_system=config.include_system_collections)


def run(args: argparse.Namespace) -> int:
    """Run generation for parsed arguments and return the exit code."""
    config = build_config(args)

    for warning in get_config_manager().validate_config(config):
        logger.warning(warning)

    source = args.snapshot or config.directus_url

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=error_console,
        transient=True,
    ) as progress:
        fetch_task = progress.add_task(f"[cyan]Loading metadata from {source}...", total=None)
        collections = _fetch_collections(config, args)
        progress.remove_task(fetch_task)

        gen_task = progress.add_task("[green]Generating TypeScript types...", total=None)
        result = generate_from_collections(collections, config)
        progress.remove_task(gen_task)

    if not result.success:
        error_console.print(f"[red]✗ {result.error_message}[/red]")
        return 1

    if config.output_file:
        try:
            output_path = write_output(result.code, config.output_file)
        except OSError as e:
            raise CLIError(f"Failed to write to {config.output_file}: {e}") from e
        error_console.print(
            f"[green]✓[/green] Directus types generated at [cyan]{output_path}[/cyan]"
        )
    elif console.is_terminal:
        console.print(Syntax(result.code, "typescript", theme="monokai"))
    else:
        sys.stdout.write(result.code)

    if args.verbose and result.metadata:
        _print_metadata(result.metadata)

    if result.warnings:
        _print_warnings(result.warnings)

    return 0


def _print_metadata(metadata: Dict[str, Any]) -> None:
    metadata_table = Table(
        title="📊 Generation Metadata",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )
    metadata_table.add_column("Property", style="bold")
    metadata_table.add_column("Value", style="green")

    for key, value in metadata.items():
        metadata_table.add_row(key.replace("_", " ").title(), str(value))

    error_console.print()
    error_console.print(metadata_table)


def _print_warnings(warnings: List[str]) -> None:
    error_console.print("\n[yellow]⚠️  Warnings:[/yellow]")
    for warning in warnings:
        error_console.print(f"  [yellow]•[/yellow] {warning}")


def main(argv: Optional[List[str]] = None) -> int:
    """
    Entry point for the ``directus-typegen`` command.

    Args:
        argv: Argument list (defaults to ``sys.argv[1:]``)

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level, args.log_file)

    try:
        return run(args)
    except MetadataAuthError as e:
        error_console.print(f"[red]✗ Authentication failed:[/red] {e}")
        error_console.print("[dim]Check the token passed via --token or $DIRECTUS_TOKEN[/dim]")
        return 1
    except MetadataFetchError as e:
        cause = f" ({e.__cause__})" if e.__cause__ else ""
        error_console.print(f"[red]✗ Failed to fetch metadata:[/red] {e}{cause}")
        return 1
    except SnapshotLoaderError as e:
        error_console.print(f"[red]✗ Failed to load snapshot:[/red] {e}")
        return 1
    except CLIError as e:
        error_console.print(f"[red]✗ Error:[/red] {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
