"""
Command-line interface for OpenAPI client generation.

Loads an OpenAPI document, builds the generation context for the chosen
target and writes or prints the generated files.
"""

import argparse
from pathlib import Path
from typing import Any, Dict, List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from . import __version__
from .codegen import (
    GenerationResult,
    RegistryError,
    TargetConfig,
    get_language_info,
    get_target,
    is_language_supported,
    list_supported_languages,
    load_config,
)
from .codegen.core.config import ConfigError, get_config_manager
from .codegen.registry import get_registry
from .logging_config import get_logger, setup_logging
from .utils import DocumentLoadError, load_document
from .visitor import generate_from_document

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2

_SYNTAX_LEXERS = {"ecmascript": "javascript", "rust": "rust"}

console = Console()


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="openapi-alors",
        description="Generate API clients from OpenAPI documents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  openapi-alors petstore.yaml --target rust -o out/
  openapi-alors --url https://example.com/openapi.json -t js
  openapi-alors --list-targets
  openapi-alors --target-info rust
        """.strip(),
    )

    input_group = parser.add_mutually_exclusive_group(required=False)
    input_group.add_argument("input", nargs="?", help="OpenAPI document (JSON or YAML)")
    input_group.add_argument("--url", help="URL to fetch the OpenAPI document from")

    parser.add_argument("--target", "-t", help="Target language (use --list-targets to see options)")
    parser.add_argument(
        "--output-dir",
        "-o",
        metavar="DIR",
        help="Directory to write generated files to (default: print to stdout)",
    )
    parser.add_argument("--config", metavar="FILE", help="JSON configuration file")

    gen_group = parser.add_argument_group("generation options")
    gen_group.add_argument(
        "--strict",
        action="store_true",
        help="Fail on malformed operations instead of skipping them",
    )
    gen_group.add_argument(
        "--no-comments",
        action="store_true",
        help="Don't add doc comments to generated code",
    )
    gen_group.add_argument(
        "--no-debug-dump",
        action="store_true",
        help="Don't write the JSON dump of the generation context",
    )

    info_group = parser.add_argument_group("information")
    info_group.add_argument(
        "--list-targets", action="store_true", help="List supported targets and exit"
    )
    info_group.add_argument(
        "--target-info", metavar="LANGUAGE", help="Show details about a target and exit"
    )

    log_group = parser.add_argument_group("logging")
    log_group.add_argument(
        "--verbose", "-v", action="store_true", help="Show generation metadata and debug logs"
    )
    log_group.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Logging level (default: WARNING)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point. Returns the process exit code."""
    parser = create_parser()
    args = parser.parse_args(argv)

    level = args.log_level or ("DEBUG" if args.verbose else "WARNING")
    setup_logging(level)

    try:
        if args.list_targets:
            return _list_targets()

        if args.target_info:
            return _show_target_info(args.target_info)

        if not args.target:
            console.print("[red]✗[/red] --target is required for code generation")
            return EXIT_USAGE

        if not (args.input or args.url):
            console.print("[red]✗[/red] Input source required (file or --url)")
            return EXIT_USAGE

        if not is_language_supported(args.target):
            console.print(f"[red]✗ Unsupported target '{args.target}'[/red]")
            console.print(f"[dim]Supported targets: {', '.join(list_supported_languages())}[/dim]")
            return EXIT_USAGE

        return _generate(args)

    except CLIError as e:
        console.print(f"[red]✗ Error:[/red] {e}")
        return EXIT_FAILURE


def _list_targets() -> int:
    table = Table(title="📋 Supported Targets", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("Target", style="bold green", no_wrap=True)
    table.add_column("Extension", style="cyan")
    table.add_column("Output", style="dim")
    table.add_column("Aliases", style="blue")

    for language in list_supported_languages():
        try:
            info = get_language_info(language)
        except RegistryError as e:
            logger.warning("Target %s is unavailable: %s", language, e)
            continue
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(f"🔧 {language}", info["file_extension"], info["output_file"], aliases)

    console.print()
    console.print(table)
    console.print()
    console.print(
        Panel(
            "[bold]Usage:[/bold] openapi-alors [dim]openapi.yaml[/dim] --target [cyan]TARGET[/cyan]\n"
            "[bold]Info:[/bold] openapi-alors --target-info [cyan]TARGET[/cyan]",
            title="💡 Quick Start",
            border_style="blue",
        )
    )
    return EXIT_OK


def _show_target_info(language: str) -> int:
    if not is_language_supported(language):
        console.print(f"[red]✗ Target '{language}' is not supported[/red]")
        console.print("[dim]Use --list-targets to see available options[/dim]")
        return EXIT_USAGE

    try:
        info = get_language_info(language)
    except RegistryError as e:
        raise CLIError(str(e)) from e

    info_text = f"""[bold]Target:[/bold] {info['name']}
[bold]File Extension:[/bold] {info['file_extension']}
[bold]Output File:[/bold] {info['output_file']}
[bold]Type Table:[/bold] {'yes' if info['types_resolved'] else 'none (untyped)'}
[bold]Servers:[/bold] {'yes' if info['supports_servers'] else 'no'}
[bold]Reserved Words:[/bold] {info['reserved_words']}"""
    if info["aliases"]:
        info_text += f"\n[bold]Aliases:[/bold] {', '.join(info['aliases'])}"

    console.print()
    console.print(Panel(info_text, title=f"🔧 {info['name']} target", border_style="green"))

    config = load_config(info["name"])
    config_table = Table(
        title="⚙️  Default Configuration",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )
    config_table.add_column("Setting", style="bold")
    config_table.add_column("Value", style="green")
    for key, value in config.to_dict().items():
        config_table.add_row(key.replace("_", " ").title(), str(value))

    console.print()
    console.print(config_table)
    return EXIT_OK


def _build_config(args: argparse.Namespace, language: str) -> TargetConfig:
    overrides: Dict[str, Any] = {}
    if args.no_comments:
        overrides["add_comments"] = False
    if args.no_debug_dump:
        overrides["emit_debug_dump"] = False
    if args.strict:
        overrides["strict"] = True

    try:
        config = load_config(language, custom_config=overrides, config_file=args.config)
    except ConfigError as e:
        raise CLIError(f"Configuration error: {e}") from e

    for warning in get_config_manager().validate_config(config):
        console.print(f"[yellow]⚠️  {warning}[/yellow]")
    return config


def _generate(args: argparse.Namespace) -> int:
    try:
        source, document = load_document(file_path=args.input, url=args.url)
    except (DocumentLoadError, FileNotFoundError) as e:
        raise CLIError(f"Failed to load input: {e}") from e

    try:
        language = get_registry().resolve_name(args.target)
        target = get_target(language, _build_config(args, language))
    except RegistryError as e:
        raise CLIError(str(e)) from e

    console.print(f"📄 Loaded: {source}")
    result = generate_from_document(document, target, strict=target.config.strict)

    if not result.success:
        console.print(f"[red]✗ Code generation failed:[/red] {result.error_message}")
        return EXIT_FAILURE

    if args.output_dir:
        _write_files(result, Path(args.output_dir))
    else:
        _print_primary(result, target.name)

    if args.verbose and result.metadata:
        _print_metadata(result)

    if result.warnings:
        console.print("\n[yellow]⚠️  Warnings:[/yellow]")
        for warning in result.warnings:
            console.print(f"  [yellow]•[/yellow] {warning}")
        console.print()

    return EXIT_OK


def _write_files(result: GenerationResult, output_dir: Path):
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        for name, content in result.files.items():
            path = output_dir / name
            path.write_text(content, encoding="utf-8")
            console.print(f"[green]✓[/green] Wrote [cyan]{path}[/cyan]")
    except OSError as e:
        raise CLIError(f"Failed to write to {output_dir}: {e}") from e


def _print_primary(result: GenerationResult, language: str):
    border = "═" * 30
    console.print(f"[green]{border} 📄 Generated {language} code {border}[/green]\n")
    console.print(Syntax(result.code, _SYNTAX_LEXERS.get(language, "text"), theme="monokai"))
    console.print(f"\n[green]{border * 3}[/green]")


def _print_metadata(result: GenerationResult):
    table = Table(
        title="📊 Generation Metadata",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Property", style="bold")
    table.add_column("Value", style="green")
    for key, value in result.metadata.items():
        table.add_row(key.replace("_", " ").title(), str(value))

    console.print()
    console.print(table)


if __name__ == "__main__":
    raise SystemExit(main())
