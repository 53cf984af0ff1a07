from collections.abc import Sequence

from rich.console import Console
from rich.table import Table
from rich.theme import Theme

from pairkit.common.models import CompetitorId, Pairing, StandingRow

SLATE = "#708090"
AMBER = "#FFBF00"


_standings_theme = Theme(
    {
        "heading": f"bold {SLATE}",
        "accent": AMBER,
        "leader": f"bold {AMBER}",
        "muted": "dim",
    }
)


_console: Console | None = None


def get_theme() -> Theme:
    return _standings_theme


def get_console(force_terminal: bool | None = None) -> Console:
    global _console

    if _console is None or force_terminal is not None:
        _console = Console(
            theme=get_theme(),
            force_terminal=force_terminal,
            legacy_windows=False,
        )

    return _console


def format_percentage(value: float | None) -> str:
    if value is None:
        return "-"
    return f"{value * 100:.1f}%"


def _themed_table(title: str) -> Table:
    return Table(
        title=title,
        title_style="heading",
        border_style="accent",
        header_style="heading",
        row_styles=["", "muted"],
        padding=(0, 1),
    )


def create_standings_table(standings: Sequence[StandingRow]) -> Table:
    table = _themed_table("Standings")

    table.add_column("Rank", style="bold", justify="right")
    table.add_column("Competitor", style="bold")
    table.add_column("W-L-D", justify="right")
    table.add_column("Points", justify="right")
    table.add_column("OMW%", justify="right")
    table.add_column("Games", justify="right")
    table.add_column("Diff", justify="right")

    if not standings:
        table.add_row("-", "-", "-", "-", "-", "-", "-")
        return table

    for rank, row in enumerate(standings, start=1):
        table.add_row(
            str(rank),
            str(row.competitor),
            f"{row.wins}-{row.losses}-{row.draws}",
            str(row.match_points),
            format_percentage(row.opponent_match_win_percentage),
            f"{row.games_won}-{row.games_lost}",
            f"{row.games_diff:+d}",
            style="leader" if rank == 1 and row.matches_played > 0 else None,
        )

    return table


def create_pairings_table(
    pairings: Sequence[Pairing], labels: Sequence[str | None] | None = None
) -> Table:
    table = _themed_table("Pairings")

    table.add_column("Table", style="bold", justify="right")
    table.add_column("Position")
    table.add_column("Player 1", style="bold")
    table.add_column("Player 2", style="bold")

    if not pairings:
        table.add_row("-", "-", "-", "-")
        return table

    for index, pairing in enumerate(pairings):
        label = labels[index] if labels is not None and index < len(labels) else None
        table.add_row(str(index + 1), label or "-", str(pairing.player1), str(pairing.player2))

    return table


def print_standings(standings: Sequence[StandingRow]) -> None:
    get_console().print(create_standings_table(standings))


def print_pairings(
    pairings: Sequence[Pairing],
    labels: Sequence[str | None] | None = None,
    byes: Sequence[CompetitorId] = (),
) -> None:
    """Print a pairings table followed by any competitors sitting out."""
    console = get_console()
    console.print(create_pairings_table(pairings, labels))
    if byes:
        names = ", ".join(str(bye) for bye in byes)
        console.print(f"Bye: {names}", style="muted", highlight=False)
