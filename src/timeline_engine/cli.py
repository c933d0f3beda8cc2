"""Command-line interface for the Timeline Reconstruction Engine."""

import logging
import random

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from timeline_engine import __version__
from timeline_engine.errors import TimelineError

console = Console()

DIFFICULTY_CHOICE = click.Choice(["easy", "medium", "hard"], case_sensitive=False)


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
def main(verbose: bool) -> None:
    """Timeline Reconstruction Engine - put the evidence of a case in order."""
    from timeline_engine.config import get_settings

    level = logging.DEBUG if verbose else get_settings().log_level.upper()
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _load(case_ref: str):
    """Load a case by path or id, exiting with an error message on failure."""
    from timeline_engine.cases import find_case, load_case

    try:
        return load_case(find_case(case_ref))
    except TimelineError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise SystemExit(1) from e


def _evidence_table(items, evidence_types, title: str, show_time: bool = False) -> Table:
    from timeline_engine.cases import get_evidence_type
    from timeline_engine.timeline import effective_timestamp, format_time_for_display

    table = Table(title=title)
    table.add_column("#", justify="right", style="dim")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Type", style="magenta")
    table.add_column("Anchor", justify="center")
    if show_time:
        table.add_column("Time", style="green")

    for index, item in enumerate(items, 1):
        row = [
            str(index),
            escape(item.id),
            escape(item.name),
            escape(get_evidence_type(item, evidence_types).name),
            "*" if item.is_anchor else "",
        ]
        if show_time:
            row.append(format_time_for_display(effective_timestamp(item)))
        table.add_row(*row)
    return table


def _print_result(result) -> None:
    colour = "green" if result.is_correct else "yellow"
    console.print(f"[bold {colour}]Score: {result.score}/100[/bold {colour}]")
    console.print(escape(result.feedback))
    for error in result.errors:
        marker = "[red]*[/red]" if error.is_anchor_error else "-"
        console.print(
            f"  {marker} {escape(error.evidence_id)}: placed {error.actual_position + 1}, "
            f"belongs {error.expected_position + 1}  [dim]{escape(error.message)}[/dim]"
        )


@main.command(name="cases")
def list_cases_cmd() -> None:
    """List the case ids found in the cases directory."""
    from timeline_engine.cases import list_cases
    from timeline_engine.config import get_settings

    settings = get_settings()
    case_ids = list_cases(settings.cases_dir)
    if not case_ids:
        console.print(f"[yellow]No cases found in {settings.cases_dir}[/yellow]")
        return

    console.print(f"[bold]Cases in {settings.cases_dir}:[/bold]")
    for case_id in case_ids:
        console.print(f"  {case_id}")


@main.command()
@click.argument("case")
def info(case: str) -> None:
    """Show a case's title, objective and evidence categories."""
    from timeline_engine.timeline import eligible_evidence

    case_data = _load(case)
    settings = case_data.game_settings

    console.print(f"[bold]{escape(settings.case_title)}[/bold]")
    if settings.objective:
        console.print(escape(settings.objective))
    if settings.question_text:
        console.print(f"[dim]{escape(settings.question_text)}[/dim]")

    playable = eligible_evidence(case_data.evidence)
    console.print(
        f"\nEvidence: {len(case_data.evidence)} total, {len(playable)} playable, "
        f"{sum(1 for e in playable if e.is_anchor)} anchors\n"
    )

    table = Table(title="Evidence Types")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Count", justify="right", style="green")
    for evidence_type in case_data.evidence_types:
        count = sum(1 for e in case_data.evidence if e.type == evidence_type.id)
        table.add_row(escape(evidence_type.id), escape(evidence_type.name), str(count))
    console.print(table)


@main.command()
@click.argument("case")
@click.option("--difficulty", "-d", type=DIFFICULTY_CHOICE, help="Difficulty tier (default from settings)")
@click.option("--sorted", "show_sorted", is_flag=True, help="Show the selection in chronological order with times")
@click.option("--seed", type=int, help="Shuffle the selection with this seed")
def curate(case: str, difficulty: str | None, show_sorted: bool, seed: int | None) -> None:
    """Show the evidence selected for a difficulty tier."""
    from timeline_engine.config import get_settings
    from timeline_engine.timeline import curate as curate_evidence
    from timeline_engine.timeline import shuffle, sort_chronologically

    case_data = _load(case)
    tier = difficulty or get_settings().default_difficulty

    selected = curate_evidence(case_data.evidence, tier)
    if not selected:
        console.print("[yellow]No playable evidence in this case[/yellow]")
        return

    if show_sorted:
        items = sort_chronologically(selected)
    elif seed is not None:
        items = shuffle(selected, random.Random(seed))
    else:
        items = selected

    console.print(_evidence_table(
        items,
        case_data.evidence_types,
        title=f"{case_data.game_settings.case_title} ({tier}, {len(selected)} items)",
        show_time=show_sorted,
    ))


@main.command()
@click.argument("case")
@click.argument("order", nargs=-1, required=True)
@click.option("--json", "as_json", is_flag=True, help="Print the raw result as JSON")
def validate(case: str, order: tuple[str, ...], as_json: bool) -> None:
    """Check an ordering of evidence ids against the true chronology.

    ORDER lists the evidence ids, earliest first.
    """
    import json

    from timeline_engine.timeline import interpret_score
    from timeline_engine.timeline import validate as validate_order

    case_data = _load(case)
    by_id = {item.id: item for item in case_data.evidence}
    items = [by_id[evidence_id] for evidence_id in dict.fromkeys(order) if evidence_id in by_id]

    try:
        result = validate_order(list(order), items)
    except TimelineError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise SystemExit(1) from e

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    _print_result(result)
    console.print(f"Outcome: [bold]{interpret_score(result.score).value}[/bold]")


@main.command()
@click.argument("case")
@click.argument("order", nargs=-1, required=True)
@click.option("--tier", "-t", type=click.IntRange(1, 3), default=1, show_default=True, help="How much to reveal")
def hint(case: str, order: tuple[str, ...], tier: int) -> None:
    """Get a hint about the first misplaced item of an ordering."""
    from timeline_engine.timeline import generate_hint

    case_data = _load(case)
    by_id = {item.id: item for item in case_data.evidence}
    items = [by_id[evidence_id] for evidence_id in dict.fromkeys(order) if evidence_id in by_id]

    try:
        message = generate_hint(list(order), items, tier)
    except TimelineError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise SystemExit(1) from e

    console.print(escape(message))


PLAY_HELP = """Commands:
  add ID [POS]   move evidence from the pool to the timeline (ID or name)
  remove ID      move evidence back to the pool
  order ID...    reorder the whole timeline
  check          check the timeline
  hint           get the next hint
  reset          move everything back to the pool
  shuffle        shuffle pool and timeline
  quit           give up"""


@main.command()
@click.argument("case")
@click.option("--difficulty", "-d", type=DIFFICULTY_CHOICE, help="Difficulty tier (default from settings)")
@click.option("--attempts", "-a", type=click.IntRange(1, 10), help="Attempts allowed (default from settings)")
@click.option("--seed", type=int, help="Seed for shuffling")
@click.option("--no-hints", is_flag=True, help="Disable hints")
def play(case: str, difficulty: str | None, attempts: int | None, seed: int | None, no_hints: bool) -> None:
    """Play a case interactively."""
    from timeline_engine import session as game
    from timeline_engine.cases import EvidenceIndex
    from timeline_engine.config import get_settings
    from timeline_engine.timeline import Outcome

    case_data = _load(case)
    rng = random.Random(seed)
    show_hints = get_settings().show_hints and not no_hints

    try:
        state = game.start_session(case_data, difficulty, attempts, rng)
    except TimelineError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise SystemExit(1) from e

    console.print(f"[bold]{escape(case_data.game_settings.case_title)}[/bold]")
    if case_data.game_settings.objective:
        console.print(escape(case_data.game_settings.objective))
    console.print(f"\n[dim]{PLAY_HELP}[/dim]\n")
    index = EvidenceIndex(state.selected)

    while not state.is_complete:
        types = case_data.evidence_types
        console.print(_evidence_table(state.pool_items, types, title="Evidence Pool"))
        console.print(_evidence_table(state.timeline_items, types, title="Your Timeline"))
        console.print(f"[dim]Attempts left: {state.attempts_left}  Hints left: {state.hints_left}[/dim]")

        line = click.prompt(">", default="", show_default=False).strip()
        if not line:
            continue
        command, *args = line.split()
        command = command.lower()

        try:
            if command == "add" and args:
                position = None
                if len(args) > 1 and args[-1].isdigit():
                    position = int(args.pop()) - 1
                state = game.move_to_timeline(state, index.resolve(" ".join(args)), position)
            elif command == "remove" and args:
                state = game.move_to_pool(state, index.resolve(" ".join(args)))
            elif command == "order" and args:
                state = game.reorder_timeline(state, [index.resolve(a) for a in args])
            elif command == "check":
                state = game.check_order(state)
                _print_result(state.validation)
            elif command == "hint":
                state = game.request_hint(state, show_hints=show_hints)
                console.print(f"[yellow]{escape(state.current_hint)}[/yellow]")
            elif command == "reset":
                state = game.reset(state, rng)
            elif command == "shuffle":
                state = game.shuffle_board(state, rng)
            elif command in ("quit", "exit"):
                console.print("[dim]Case abandoned.[/dim]")
                return
            else:
                console.print(f"[dim]{PLAY_HELP}[/dim]")
        except (TimelineError, ValueError) as e:
            console.print(f"[red]{escape(str(e))}[/red]")

    colour = "green" if state.outcome is not Outcome.FAILED else "red"
    console.print(f"\n[bold {colour}]Case closed: {state.outcome.value}[/bold {colour}]")


if __name__ == "__main__":
    main()
