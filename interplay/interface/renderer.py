"""
Display and rendering helpers for the interplay CLI.

Handles theming and the availability, standings and issue tables.
"""

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..state.schema import EvaluationResult, Interaction


# Shared console instance
console = Console()

# -----------------------------------------------------------------------------
# Theme
# -----------------------------------------------------------------------------

THEME = {
    "primary": "steel_blue",
    "secondary": "grey70",
    "warning": "dark_goldenrod",
    "danger": "dark_red",
    "accent": "cyan",
    "dim": "dim",
    "text": "grey85",
}

# Influence tier colors, coldest to warmest
TIER_COLORS = {
    "Hated": "red",
    "Hostile": "red",
    "Unfriendly": "dark_orange",
    "Indifferent": "grey50",
    "Neutral": "grey70",
    "Friendly": "green3",
    "Honored": "green3",
    "Revered": "cyan",
    "Exalted": "cyan",
}

CATEGORY_TITLES = {
    "influence": "Influence",
    "prestige": "Prestige",
    "alignment": "Alignment",
}


def show_availability(results: list[tuple[Interaction, EvaluationResult]]) -> None:
    """Table of interactions with their availability verdicts."""
    if not results:
        console.print(f"[{THEME['dim']}]No interactions to show[/{THEME['dim']}]")
        return

    table = Table(
        title=f"[bold {THEME['primary']}]Interactions[/bold {THEME['primary']}]",
        box=None,
    )
    table.add_column("ID", style=THEME["dim"])
    table.add_column("Title", style=THEME["secondary"])
    table.add_column("Status")
    table.add_column("Reason", style=THEME["dim"])

    for interaction, result in results:
        if result.satisfied:
            status = f"[{THEME['accent']}]available[/{THEME['accent']}]"
        elif result.visible:
            status = f"[{THEME['warning']}]locked[/{THEME['warning']}]"
        else:
            status = f"[{THEME['danger']}]hidden[/{THEME['danger']}]"
        table.add_row(escape(interaction.id), escape(interaction.title), status, escape(result.reason or ""))

    console.print(table)


def _label_style(category: str, label: str | None) -> str:
    if label is None:
        return f"[{THEME['dim']}]-[/{THEME['dim']}]"
    if category == "influence":
        color = TIER_COLORS.get(label, THEME["secondary"])
        return f"[{color}]{escape(label)}[/{color}]"
    return f"[{THEME['accent']}]{escape(label)}[/{THEME['accent']}]"


def show_standings(standings: dict[str, list[dict]]) -> None:
    """One table per progression category: score and derived label."""
    shown = False
    for category, rows in standings.items():
        if not rows:
            continue
        shown = True
        table = Table(
            title=f"[bold {THEME['primary']}]{CATEGORY_TITLES.get(category, category)}[/bold {THEME['primary']}]",
            box=None,
        )
        table.add_column("Track", style=THEME["secondary"])
        table.add_column("Score", justify="right")
        table.add_column("Standing")

        for row in rows:
            table.add_row(escape(row["name"]), f"{row['value']}", _label_style(category, row["label"]))

        console.print(table)
        console.print()

    if not shown:
        console.print(f"[{THEME['dim']}]No progression tracks defined[/{THEME['dim']}]")


def show_changes(report) -> None:
    """Summarize an EffectReport."""
    for outcome in report.outcomes:
        category = outcome.category.value
        if outcome.applied:
            console.print(
                f"  [{THEME['accent']}]{category}:{outcome.track_id}[/{THEME['accent']}] "
                f"{outcome.change:+d} [{THEME['dim']}]({escape(outcome.reason)})[/{THEME['dim']}]"
            )
        else:
            console.print(
                f"  [{THEME['warning']}]skipped {category}:{outcome.track_id}[/{THEME['warning']}] "
                f"[{THEME['dim']}]unknown track[/{THEME['dim']}]"
            )


def show_issues(issues) -> None:
    """List ConfigIssues, errors first."""
    if not issues:
        console.print(f"[{THEME['accent']}]No issues found[/{THEME['accent']}]")
        return

    ordered = sorted(issues, key=lambda i: i.severity.value != "error")
    for issue in ordered:
        color = THEME["danger"] if issue.severity.value == "error" else THEME["warning"]
        console.print(
            f"[{color}]{issue.severity.value.upper():7}[/{color}] "
            f"[{THEME['dim']}]{issue.category}/{issue.subject_id}[/{THEME['dim']}] {escape(issue.message)}"
        )
