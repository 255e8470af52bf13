# src/alphadeduce/cli.py
"""alphadeduce Command Line Interface.

Entry point for the alphadeduce CLI tool.
"""

from __future__ import annotations

import json
from enum import IntEnum, StrEnum
from pathlib import Path

import typer
from dynaconf.vendor.ruamel.yaml.parser import ParserError as YamlParserError
from dynaconf.vendor.ruamel.yaml.scanner import ScannerError as YamlScannerError
from pydantic import ValidationError

from alphadeduce import __version__
from alphadeduce.core.config import DeducerSettings, load_settings
from alphadeduce.core.deducer import Deducer
from alphadeduce.core.export import to_dot, to_mermaid
from alphadeduce.core.graph import DeductionError
from alphadeduce.core.logging import configure_logging

__all__ = [
    "ExitCode",
    "GraphFormat",
    "app",
]


class ExitCode(IntEnum):
    """Process exit codes."""

    OK = 0
    USAGE_ERROR = 1  # missing words file or invalid settings
    UNREADABLE_INPUT = 2
    DEDUCTION_FAILED = 3
    EXPORT_FAILED = 4


class GraphFormat(StrEnum):
    """Diagnostic graph renderings."""

    DOT = "dot"
    MERMAID = "mermaid"


app = typer.Typer(
    name="alphadeduce",
    help="Deduce an unknown alphabet from a list of words sorted by it.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"alphadeduce version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """alphadeduce: recover an alphabet from sorted words."""
    pass


def _fail(message: str, code: ExitCode) -> typer.Exit:
    typer.echo(f"ERROR: {message}", err=True)
    return typer.Exit(int(code))


def _resolve_settings(
    settings: str | None,
    *,
    case_sensitive: bool | None,
    max_symbols: int | None,
    reduction: str | None,
    export_dir: str | None,
    verbose: bool,
) -> DeducerSettings:
    """Load settings (file or defaults) and apply command-line overrides."""
    try:
        base = load_settings(Path(settings).expanduser()) if settings else DeducerSettings()
    except (YamlParserError, YamlScannerError) as e:
        raise _fail(f"YAML syntax error in {settings}: {e.problem}", ExitCode.USAGE_ERROR) from None
    except FileNotFoundError:
        raise _fail(f"Settings file not found: {settings}", ExitCode.USAGE_ERROR) from None
    except ValidationError as e:
        typer.echo("ERROR: Configuration errors:", err=True)
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            typer.echo(f"  - {loc}: {error['msg']}", err=True)
        raise typer.Exit(int(ExitCode.USAGE_ERROR)) from None

    overrides: dict[str, object] = {}
    if case_sensitive is not None:
        overrides["case_policy"] = "sensitive" if case_sensitive else "insensitive"
    if max_symbols is not None:
        overrides["max_symbols"] = max_symbols
    if reduction is not None:
        overrides["reduction"] = reduction
    if export_dir is not None:
        overrides["export_dir"] = Path(export_dir).expanduser()
    if verbose:
        overrides["logging"] = base.logging.model_copy(update={"level": "DEBUG"})

    try:
        return DeducerSettings.model_validate({**base.model_dump(), **overrides})
    except ValidationError as e:
        raise _fail(f"Invalid option: {e.errors()[0]['msg']}", ExitCode.USAGE_ERROR) from None


def _read_words(words_file: str | None) -> list[str]:
    if words_file is None:
        raise _fail("Words file is not specified.", ExitCode.USAGE_ERROR)
    path = Path(words_file).expanduser()
    try:
        with path.open(encoding="utf-8") as f:
            return f.readlines()
    except (OSError, UnicodeDecodeError):
        raise _fail(f"Could not open the file '{words_file}'.", ExitCode.UNREADABLE_INPUT) from None


_WORDS_FILE_ARGUMENT = typer.Argument(None, help="File with one word per line, sorted by the unknown alphabet.")


@app.command("deduce")
def deduce_command(
    words_file: str | None = _WORDS_FILE_ARGUMENT,
    settings: str | None = typer.Option(
        None,
        "--settings",
        "-s",
        help="Path to settings YAML file.",
    ),
    case_sensitive: bool | None = typer.Option(
        None,
        "--case-sensitive/--case-insensitive",
        help="Treat upper and lower case as distinct symbols (default: fold to upper case).",
    ),
    max_symbols: int | None = typer.Option(
        None,
        "--max-symbols",
        help="Maximum number of distinct symbols.",
    ),
    reduction: str | None = typer.Option(
        None,
        "--reduction",
        help="Transitive reduction strategy: 'progressive' or 'canonical'.",
    ),
    export_dir: str | None = typer.Option(
        None,
        "--export-dir",
        help="Write Initial.dot and Final.dot diagnostics into this directory.",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output as JSON.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging on stderr.",
    ),
) -> None:
    """Deduce the alphabet encoded by a sorted word list."""
    config = _resolve_settings(
        settings,
        case_sensitive=case_sensitive,
        max_symbols=max_symbols,
        reduction=reduction,
        export_dir=export_dir,
        verbose=verbose,
    )
    configure_logging(json_output=config.logging.json_output, level=config.logging.level)
    lines = _read_words(words_file)

    try:
        alphabet = Deducer(config).deduce(lines)
    except DeductionError as e:
        raise _fail(str(e), ExitCode.DEDUCTION_FAILED) from None
    except OSError as e:
        raise _fail(f"Could not write graph diagnostics: {e}", ExitCode.EXPORT_FAILED) from None

    if json_output:
        typer.echo(json.dumps({"alphabet": list(alphabet.symbols)}))
    else:
        typer.echo(f"Deduced alphabet: {alphabet}")


@app.command("graph")
def graph_command(
    words_file: str | None = _WORDS_FILE_ARGUMENT,
    output_format: GraphFormat = typer.Option(
        GraphFormat.DOT,
        "--format",
        "-f",
        help="Output format: 'dot' (Graphviz) or 'mermaid'.",
    ),
    reduced: bool = typer.Option(
        True,
        "--reduced/--raw",
        help="Show the graph after (default) or before transitive reduction.",
    ),
    settings: str | None = typer.Option(
        None,
        "--settings",
        "-s",
        help="Path to settings YAML file.",
    ),
    case_sensitive: bool | None = typer.Option(
        None,
        "--case-sensitive/--case-insensitive",
        help="Treat upper and lower case as distinct symbols.",
    ),
) -> None:
    """Print the precedence graph extracted from a sorted word list."""
    config = _resolve_settings(
        settings,
        case_sensitive=case_sensitive,
        max_symbols=None,
        reduction=None,
        export_dir=None,
        verbose=False,
    )
    configure_logging(json_output=config.logging.json_output, level=config.logging.level)
    lines = _read_words(words_file)

    try:
        graph = Deducer(config).build_graph(lines, reduce=reduced)
    except DeductionError as e:
        raise _fail(str(e), ExitCode.DEDUCTION_FAILED) from None

    if output_format is GraphFormat.MERMAID:
        typer.echo(to_mermaid(graph))
    else:
        typer.echo(to_dot(graph), nl=False)


if __name__ == "__main__":
    app()
