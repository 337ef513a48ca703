import logging
import sys
from pathlib import Path
from typing import Dict, Optional

import click
from rich.console import Console

from autogenerate.errors import AutoGenerateError
from autogenerate.patterns import canonicalize_name, compile_pattern
from autogenerate.references import load_generator
from autogenerate.tui import GeneratorConsoleUI


def _ensure_on_path(paths: tuple[Path, ...]) -> None:
    for path in reversed(paths):
        entry = str(path.resolve())
        if entry not in sys.path:
            sys.path.insert(0, entry)


def _match_only(values: tuple[str, ...]) -> Optional[list[str]]:
    return list(values) if values else None


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--path",
    "-p",
    "paths",
    multiple=True,
    type=click.Path(path_type=Path, file_okay=False),
    default=(".",),
    show_default=True,
    help="Directory to search for generator modules.",
)
@click.option("--verbose", "-v", is_flag=True, help="Log dispatch decisions.")
@click.pass_context
def cli(ctx: click.Context, paths: tuple[Path, ...], verbose: bool) -> None:
    """Inspect rule-driven module generators."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    _ensure_on_path(paths)
    ctx.obj = {}


@cli.command(help="Match module names against a glob pattern.")
@click.argument("pattern")
@click.argument("names", nargs=-1, required=True)
@click.option("--delimiter", "-d", default=".", show_default=True)
@click.pass_obj
def match(obj: Dict[str, str], pattern: str, names: tuple[str, ...], delimiter: str) -> None:
    ui = GeneratorConsoleUI(Console())
    try:
        compiled = compile_pattern(pattern, delimiter)
    except AutoGenerateError as exc:
        raise click.ClickException(str(exc))

    results = []
    for name in names:
        canonical = canonicalize_name(name, delimiter)
        results.append((canonical, compiled.match(canonical)))
    ui.render_matches(compiled, results)

    if not any(found is not None for _, found in results):
        raise click.exceptions.Exit(1)


@cli.command(help="List the rules of a generator in evaluation order.")
@click.argument("reference")
@click.option("--match-only", "-m", "match_only", multiple=True)
@click.pass_obj
def rules(obj: Dict[str, str], reference: str, match_only: tuple[str, ...]) -> None:
    ui = GeneratorConsoleUI(Console())
    try:
        generator = load_generator(reference, match_only=_match_only(match_only))
    except AutoGenerateError as exc:
        raise click.ClickException(str(exc))
    ui.render_rules(reference, generator.rules, generator.match_only)


@cli.command(help="Generate a module without importing it and print its source.")
@click.argument("reference")
@click.argument("name")
@click.option("--match-only", "-m", "match_only", multiple=True)
@click.pass_obj
def render(
    obj: Dict[str, str], reference: str, name: str, match_only: tuple[str, ...]
) -> None:
    ui = GeneratorConsoleUI(Console())
    try:
        generator = load_generator(reference, match_only=_match_only(match_only))
    except AutoGenerateError as exc:
        raise click.ClickException(str(exc))

    try:
        unit = generator.dispatch(name)
    except Exception as exc:
        raise click.ClickException(f"Generator failed: {exc}")

    if unit is None:
        ui.render_not_found(canonicalize_name(name, generator.delimiter))
        raise click.exceptions.Exit(1)
    ui.render_unit(unit, repr(generator))


def main() -> int:
    try:
        cli(standalone_mode=False)
    except click.exceptions.Exit as exc:
        code = exc.exit_code
        return code if isinstance(code, int) else 1
    except click.ClickException as exc:
        exc.show()
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
