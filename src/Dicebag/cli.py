"""``roll`` command line entry point.

Examples:
  roll 3d6
  roll "2d20 1d6" dF "d{1, 1, 2, 3}"
  roll --seed 7 --json 4dF
"""
from __future__ import annotations

import json

import click

from Dicebag.config import load_settings
from Dicebag.logging import setup_logging
from Dicebag.rules import DiceBag, ParseRollError, Roll, RollResults, parse_rolls

USAGE = """\
USAGE: roll [DICE...]
e.g. roll 3d6

Available Dice:
\tdN (where N is a number) - N sided die
\tdF - Fudge dice: +, +, -, -, _, _
\td% - A number between 1 and 100
\td{A,B,...} - Custom die with the listed faces"""


def format_results(rolls: list[Roll], results: RollResults) -> list[str]:
    """Render one argument's results as output lines."""
    if len(results.values) > 1:
        description = " ".join(str(r) for r in rolls)
        values = ", ".join(str(v) for v in results.values)
        return [
            f"{description}: {values} "
            f"(Total: {results.total}, Highest: {results.highest}, Lowest: {results.lowest})"
        ]
    return [str(v) for v in results.values]


@click.command(name="roll", context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("dice", nargs=-1)
@click.option("--seed", type=int, default=None, help="Seed the random source for repeatable rolls.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print one JSON object per argument.")
@click.pass_context
def main(ctx: click.Context, dice: tuple[str, ...], seed: int | None, as_json: bool) -> None:
    """Roll dice written in tabletop notation."""
    if not dice:
        click.echo(USAGE)
        ctx.exit(1)

    settings = load_settings()
    setup_logging(settings)
    bag = DiceBag(seed=seed) if seed is not None else DiceBag.from_settings(settings)

    for arg in dice:
        try:
            rolls = parse_rolls(arg.strip())
        except ParseRollError as exc:
            click.echo(f"Error: {exc.kind}: {exc}")
            ctx.exit(1)
        results = bag.roll_all(rolls)
        if as_json:
            payload = {"notation": arg.strip(), "rolls": [str(r) for r in rolls], **results.to_dict()}
            click.echo(json.dumps(payload))
            continue
        for line in format_results(rolls, results):
            click.echo(line)


if __name__ == "__main__":  # pragma: no cover
    main()
