"""
CLI integration for code generation functionality.

Provides the ``generate`` command of the log-bundler command line.
"""

import argparse
from typing import Any, Dict, List

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.syntax import Syntax
from rich import box

from ..logging_config import get_logger
from ..utils import JSONLoaderError, load_declarations, load_json_from_stream
from . import (
    GeneratorError,
    RegistryError,
    get_generator,
    get_language_info,
    list_all_language_info,
    list_supported_languages,
    load_config,
)
from .core.config import ConfigError, GeneratorConfig
from .core.generator import GenerationResult, generate_code
from .core.schema import BundleDeclaration, bundles_from_document

logger = get_logger(__name__)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


# Initialize rich console
console = Console()


def create_codegen_subparser(subparsers) -> argparse.ArgumentParser:
    """
    Create the ``generate`` subcommand parser.

    Args:
        subparsers: Subparser group from main parser

    Returns:
        Configured subparser for the generate command
    """
    parser = subparsers.add_parser(
        "generate",
        help="Generate log bundle implementations",
        description="Generate implementation classes from log bundle declarations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  log-bundler generate bundles.json
  log-bundler generate -l java -o target/generated-sources server.json client.json
  log-bundler generate -l python --stdin < bundles.json
  log-bundler generate --list-languages
  log-bundler generate --language-info python
        """.strip(),
    )

    # Input options
    parser.add_argument("files", nargs="*", help="Declaration JSON files, in discovery order")
    parser.add_argument(
        "--stdin", action="store_true", help="Read one declaration document from standard input"
    )

    # Core generation options
    parser.add_argument(
        "--language", "-l", default="java", help="Target language (default: java)"
    )
    parser.add_argument(
        "--output", "-o", metavar="DIR", help="Output directory (default: print to stdout)"
    )
    parser.add_argument("--config", help="Configuration file path (JSON)")

    # Common options
    parser.add_argument("--impl-suffix", help="Suffix of generated class names (default: _impl)")
    parser.add_argument(
        "--no-comments",
        action="store_true",
        help="Don't emit annotation comments in generated code",
    )
    parser.add_argument(
        "--no-header", action="store_true", help="Don't emit the generated-file header"
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject methods combining two annotation kinds instead of warning",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Show generation result metadata"
    )

    # Informational commands
    info_group = parser.add_argument_group("information")
    info_group.add_argument(
        "--list-languages",
        action="store_true",
        help="List supported languages and exit",
    )
    info_group.add_argument(
        "--language-info",
        metavar="LANGUAGE",
        help="Show detailed info about a language and exit",
    )

    parser.set_defaults(func=handle_codegen_command)
    return parser


def handle_codegen_command(args: argparse.Namespace) -> int:
    """
    Handle the generate command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    try:
        if args.list_languages:
            return _list_languages()

        if args.language_info:
            return _show_language_info(args.language_info)

        if not (args.files or args.stdin):
            console.print("[red]✗[/red] Input required (declaration files or --stdin)")
            return 1

        if not _validate_language(args.language):
            return 1

        bundles = _get_input_bundles(args)
        config = _build_config(args)

        return _generate_and_output(bundles, args.language, config, args)

    except CLIError as e:
        console.print(f"[red]✗ Error:[/red] {e}")
        return 1
    except Exception as e:
        logger.error("Unexpected CLI failure: %s", e, exc_info=True)
        console.print(f"[red]✗ Unexpected error:[/red] {e}")
        return 1


def _list_languages() -> int:
    """List supported languages with details."""
    language_info = list_all_language_info()

    table = Table(
        title="📋 Supported Languages", box=box.ROUNDED, title_style="bold cyan"
    )

    table.add_column("Language", style="bold green", no_wrap=True)
    table.add_column("Extension", style="cyan")
    table.add_column("Logger", style="magenta")
    table.add_column("Generator Class", style="dim")
    table.add_column("Aliases", style="blue")

    for lang_name, info in sorted(language_info.items()):
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(
            f"🔧 {lang_name}",
            info["file_extension"],
            info["logger_type"],
            info["class"],
            aliases,
        )

    console.print()
    console.print(table)
    console.print()
    console.print(
        Panel(
            "[bold]Usage:[/bold] log-bundler generate [dim]bundles.json[/dim] --language [cyan]LANGUAGE[/cyan]\n"
            "[bold]Info:[/bold] log-bundler generate --language-info [cyan]LANGUAGE[/cyan]",
            title="💡 Quick Start",
            border_style="blue",
        )
    )
    return 0


def _show_language_info(language: str) -> int:
    """Show detailed information about a specific language."""
    if not _validate_language(language, silent=True):
        console.print(f"[red]✗ Language '{language}' is not supported[/red]")
        console.print("[dim]Use --list-languages to see available options[/dim]")
        return 1

    info = get_language_info(language)

    info_text = f"""[bold]Language:[/bold] {info['name']}
[bold]File Extension:[/bold] {info['file_extension']}
[bold]Logger Type:[/bold] {info['logger_type']}
[bold]Text Types:[/bold] {', '.join(info['text_types'])}
[bold]Generator Class:[/bold] {info['class']}
[bold]Module:[/bold] {info['module']}"""

    if info["aliases"]:
        info_text += f"\n[bold]Aliases:[/bold] {', '.join(info['aliases'])}"

    console.print()
    console.print(
        Panel(info_text, title=f"🔧 {info['name'].title()} Generator", border_style="green")
    )

    levels_table = Table(
        title="📶 Level Dispatch", box=box.SIMPLE, show_header=True, header_style="bold cyan"
    )
    levels_table.add_column("Level", style="bold")
    levels_table.add_column("Logger Method", style="green")
    for level, method in info["level_methods"].items():
        levels_table.add_row(level, method)

    config = get_generator(language).config
    config_table = Table(
        title="⚙️  Default Configuration",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )
    config_table.add_column("Setting", style="bold")
    config_table.add_column("Value", style="green")
    config_table.add_row("Impl Suffix", config.impl_suffix)
    config_table.add_row("Add Comments", str(config.add_comments))
    config_table.add_row("Add Header", str(config.add_header))
    config_table.add_row("Strict Annotations", str(config.strict_annotations))
    for key, value in sorted(config.custom.items()):
        config_table.add_row(key.replace("_", " ").title(), str(value))

    console.print()
    console.print(levels_table)
    console.print(config_table)
    return 0


def _validate_language(language: str, silent: bool = False) -> bool:
    """Validate that a language (or alias) is supported."""
    try:
        get_language_info(language)
        return True
    except RegistryError:
        if not silent:
            supported = list_supported_languages()
            console.print(f"[red]✗ Unsupported language '{language}'[/red]")
            console.print(f"[dim]Supported languages: {', '.join(supported)}[/dim]")
        return False


def _get_input_bundles(args: argparse.Namespace) -> List[BundleDeclaration]:
    """Load bundle declarations from files or standard input."""
    try:
        if args.stdin:
            return bundles_from_document(load_json_from_stream())
        return load_declarations(args.files)
    except (JSONLoaderError, GeneratorError) as e:
        raise CLIError(f"Failed to load declarations: {e}") from e
    except FileNotFoundError as e:
        raise CLIError(str(e)) from e


def _build_config(args: argparse.Namespace) -> GeneratorConfig:
    """Build configuration from the config file and CLI arguments."""
    overrides: Dict[str, Any] = {}

    if args.output:
        overrides["output_dir"] = args.output
    if args.impl_suffix:
        overrides["impl_suffix"] = args.impl_suffix
    if args.no_comments:
        overrides["add_comments"] = False
    if args.no_header:
        overrides["add_header"] = False
    if args.strict:
        overrides["strict_annotations"] = True

    try:
        return load_config(
            _primary_language(args.language), custom_config=overrides, config_file=args.config
        )
    except ConfigError as e:
        raise CLIError(f"Configuration error: {e}") from e


def _primary_language(language: str) -> str:
    return get_language_info(language)["name"]


def _generate_and_output(
    bundles: List[BundleDeclaration],
    language: str,
    config: GeneratorConfig,
    args: argparse.Namespace,
) -> int:
    """Generate code and handle output with rich formatting."""
    generator = get_generator(language, config)

    with console.status(f"[green]Generating {generator.language_name} code..."):
        result = generate_code(generator, bundles)

    if not result.success:
        console.print(f"[red]✗ Code generation failed:[/red] {result.error_message}")
        _print_warnings(result)
        return 1

    if result.written:
        for path in result.written:
            console.print(f"[green]✓[/green] Wrote [cyan]{path}[/cyan]")
    else:
        for unit in result.units:
            console.print(Panel.fit(unit.identity, border_style="green"))
            console.print(Syntax(unit.code, generator.language_name, theme="monokai"))

    if args.verbose and result.metadata:
        metadata_table = Table(
            title="📊 Generation Metadata",
            box=box.SIMPLE,
            show_header=True,
            header_style="bold cyan",
        )
        metadata_table.add_column("Property", style="bold")
        metadata_table.add_column("Value", style="green")
        for key, value in result.metadata.items():
            metadata_table.add_row(key.replace("_", " ").title(), str(value))
        console.print()
        console.print(metadata_table)

    _print_warnings(result)
    return 0


def _print_warnings(result: GenerationResult) -> None:
    if result.warnings:
        console.print("\n[yellow]⚠️  Warnings:[/yellow]")
        for warning in result.warnings:
            console.print(f"  [yellow]•[/yellow] {warning}")
        console.print()
