import logging
import sys
from enum import Enum
from importlib.metadata import version as vers
from typing import Annotated, Optional

import typer

from sort_keys_fix._linter import verify, verify_and_fix

app = typer.Typer(help="Check that dict keys are sorted, and optionally sort them")


class Order(str, Enum):
    asc = "asc"
    desc = "desc"


def version_callback(value: bool) -> None:
    """Callback to show the version of sort-keys-fix"""
    if value:
        print(vers("sort-keys-fix"))
        raise typer.Exit()


@app.command()
def main(
    order: Annotated[Order, typer.Option(help="sort direction")] = Order.asc,
    case_sensitive: Annotated[
        bool,
        typer.Option(
            "--case-sensitive/--case-insensitive", help="compare letter case"
        ),
    ] = True,
    natural: Annotated[
        bool, typer.Option(help="compare runs of digits by their numeric value")
    ] = False,
    min_keys: Annotated[
        int, typer.Option(min=2, help="skip dicts with fewer entries than this")
    ] = 2,
    fix: Annotated[
        bool, typer.Option(help="print the sorted source instead of the problems")
    ] = False,
    verbose: Annotated[bool, typer.Option(help="log debug output to stderr")] = False,
    source: Annotated[
        typer.FileText,
        typer.Option(
            help="the Python file to read. will read from stdin if not specified"
        ),
    ] = None,
    version: Annotated[
        Optional[bool],
        typer.Option(
            help="Show the version of sort-keys-fix",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
):
    if verbose:
        logging.basicConfig(level=logging.DEBUG)

    if source:
        name = source.name
        text = source.read()
    else:
        if hasattr(sys.stdin, "isatty") and sys.stdin.isatty():
            raise ValueError("No input provided via stdin.")
        name = "<stdin>"
        text = sys.stdin.read()

    options = [
        order.value,
        {"caseSensitive": case_sensitive, "natural": natural, "minKeys": min_keys},
    ]
    if fix:
        result = verify_and_fix(text, options)
        typer.echo(result.output, nl=False)
        problems = result.problems
        for p in problems:
            typer.echo(f"{name}:{p.line}:{p.column}: {p.message}", err=True)
    else:
        problems = verify(text, options)
        for p in problems:
            typer.echo(f"{name}:{p.line}:{p.column}: {p.message}")
    raise typer.Exit(1 if problems else 0)
