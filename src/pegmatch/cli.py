"""Command-line entry point.

Usage:
    pegmatch match GRAMMAR_FILE TEXT [--trace] [--verbose]

Loads a YAML grammar, matches TEXT against it and prints the outcome.
Exit codes: 0 on success, 1 when the input produced a diagnostic, 2 when the
grammar itself is broken.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import click

from pegmatch._choice import Choice
from pegmatch._errors import GrammarError
from pegmatch._outcome import match
from pegmatch._registry import Registry
from pegmatch._trace import trace

logger = logging.getLogger("pegmatch")


class _EchoDispatcher:
    """Prints the outcome and returns the process exit code."""

    def success(self, position: int, /, *values: Any) -> int:
        rendered = " ".join(repr(v) for v in values)
        click.echo(f"success {position} {rendered}".rstrip())
        return 0

    def error(self, diagnostic: Any, /) -> int:
        click.echo(f"error {diagnostic!r}")
        return 1


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log grammar loading at DEBUG level.")
def cli(verbose: bool) -> None:
    """Ordered-choice rule matching."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@cli.command("match")
@click.argument("grammar", type=click.Path(exists=True, dir_okay=False))
@click.argument("text")
@click.option("--trace", "show_trace", is_flag=True, help="Print every attempted branch.")
def match_command(grammar: str, text: str, show_trace: bool) -> None:
    """Match TEXT against the rule in GRAMMAR."""
    registry = Registry()
    try:
        rule = registry.load_file(grammar)
    except GrammarError as e:
        logger.debug("grammar load failed", exc_info=True)
        click.echo(f"grammar error: {e}", err=True)
        sys.exit(2)

    if show_trace and isinstance(rule, Choice):
        for step in trace(rule, text).steps:
            branch = "else" if step.index is None else f"#{step.index}"
            click.echo(f"  {branch} tag={step.tag!r} {step.kind} {step.start}->{step.end}")

    sys.exit(match(rule, text, _EchoDispatcher()))


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
