"""Interactive terminal loop over a RatingStore, rendered with rich."""

from __future__ import annotations

from collections.abc import Callable

from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt
from rich.table import Table

from movie_elo.core.models import Outcome
from movie_elo.runtime.rating_store import RatingStore, display_rating


CHOICES: dict[str, str] = {
    "1": "left",
    "l": "left",
    "2": "right",
    "r": "right",
    "3": "tie",
    "t": "tie",
    "s": "skip",
    "u": "undo",
    "q": "quit",
}


def rankings_table(store: RatingStore, limit: int | None = None) -> Table:
    table = Table(title="Rankings", header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Title")
    table.add_column("ELO", justify="right")
    table.add_column("Played", justify="right")
    ranked = store.ranked_items()
    if limit is not None:
        ranked = ranked[:limit]
    for position, item in enumerate(ranked, 1):
        table.add_row(str(position), escape(item.title), str(display_rating(item.rating)), str(item.comparison_count))
    return table


def _default_reader(console: Console) -> Callable[[str], str]:
    def _read(prompt: str) -> str:
        return Prompt.ask(prompt, console=console)

    return _read


def run_terminal_session(
    store: RatingStore,
    *,
    k_factor: float,
    console: Console | None = None,
    read_choice: Callable[[str], str] | None = None,
) -> int:
    """Compare pairs until the user quits; returns the number of committed comparisons."""
    console = console or Console()
    read_choice = read_choice or _default_reader(console)

    if not store.can_compare:
        console.print("[yellow]Need at least two movies to compare.[/yellow]")
        return 0

    committed = 0
    store.next_matchup()
    while store.current_matchup is not None:
        left, right = store.current_matchup
        console.print(
            f"\n[green]1[/green] {escape(left.title)} [dim]({display_rating(left.rating)})[/dim]"
            f"  vs  [blue]2[/blue] {escape(right.title)} [dim]({display_rating(right.rating)})[/dim]"
        )
        raw = read_choice("1=left 2=right t=tie s=skip u=undo q=quit")
        action = CHOICES.get(str(raw).strip().lower())
        if action is None:
            console.print(f"[red]Unknown choice:[/red] {escape(repr(raw))}")
            continue
        if action == "quit":
            break
        if action == "skip":
            store.skip()
        elif action == "undo":
            entry = store.undo()
            if entry is None:
                console.print("[dim]Nothing to undo.[/dim]")
            else:
                committed -= 1
                console.print("[dim]Undid last comparison.[/dim]")
        else:
            store.commit_comparison(Outcome(action), k_factor)
            committed += 1

    console.print(rankings_table(store))
    return committed
