"""
Command-line interface for interplay.

A debug harness over the progression core: check interaction availability,
inspect standings, apply completions or decay ticks to a saved
progression file, and manage saved defaults.
"""

import argparse
import logging
from pathlib import Path

from rich.markup import escape

from ..state import (
    ContentError,
    ContentPack,
    ProgressionSession,
    load_content,
    load_player_state,
    load_progress,
    save_progress,
)
from ..systems.validation import TrackConfigError, has_errors, validate_content
from .config import (
    load_config,
    set_content_path,
    set_log_level,
    set_show_hidden,
    set_state_path,
)
from .renderer import (
    console, THEME,
    show_availability, show_changes, show_issues, show_standings,
)

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------

def _resolve(value: str | None, fallback: str | None, what: str) -> Path:
    path = value or fallback
    if not path:
        raise ContentError(f"No {what} given and none configured")
    return Path(path)


def _open_session(content: ContentPack, args) -> ProgressionSession:
    """Resume from --state if it exists, else start fresh from --player."""
    state_path = Path(args.state) if getattr(args, "state", None) else None
    if state_path and state_path.exists():
        progress = load_progress(state_path)
        logger.info(f"Resuming progression from {state_path}")
        return ProgressionSession.from_progress(content, progress)

    player = None
    if getattr(args, "player", None):
        player = load_player_state(args.player)
    return ProgressionSession(content, player)


# -----------------------------------------------------------------------------
# Commands
# -----------------------------------------------------------------------------

def cmd_check(args, config) -> int:
    content = load_content(_resolve(args.content, config.get("content_path"), "content file"))
    session = _open_session(content, args)

    if args.all or config.get("show_hidden", False):
        snapshot = session.snapshot()
        results = [
            (interaction, session.evaluator.evaluate(interaction, snapshot))
            for interaction in content.interactions
        ]
    else:
        results = session.available_interactions()

    show_availability(results)
    return 0


def cmd_standings(args, config) -> int:
    content = load_content(_resolve(args.content, config.get("content_path"), "content file"))
    session = _open_session(content, args)
    show_standings(session.standings())
    return 0


def cmd_complete(args, config) -> int:
    content = load_content(_resolve(args.content, config.get("content_path"), "content file"))
    args.state = str(_resolve(args.state, config.get("state_path"), "state file"))
    session = _open_session(content, args)

    if content.get_interaction(args.interaction) is None:
        console.print(
            f"[{THEME['danger']}]Unknown interaction:[/{THEME['danger']}] {escape(args.interaction)}"
        )
        return 1

    result = session.evaluate(args.interaction)
    if not result.satisfied and not args.force:
        console.print(
            f"[{THEME['warning']}]Unavailable:[/{THEME['warning']}] {escape(result.reason or '')} "
            f"[{THEME['dim']}](use --force to apply anyway)[/{THEME['dim']}]"
        )
        return 1

    report = session.complete(args.interaction)
    show_changes(report)
    save_progress(session.to_progress(), args.state)
    console.print(f"[{THEME['dim']}]Saved progression to {args.state}[/{THEME['dim']}]")
    return 0


def cmd_decay(args, config) -> int:
    content = load_content(_resolve(args.content, config.get("content_path"), "content file"))
    args.state = str(_resolve(args.state, config.get("state_path"), "state file"))
    session = _open_session(content, args)

    decayed = session.apply_decay()
    if decayed:
        for track_id, amount in decayed.items():
            console.print(
                f"  [{THEME['accent']}]prestige:{track_id}[/{THEME['accent']}] -{amount}"
            )
    else:
        console.print(f"[{THEME['dim']}]Nothing to decay[/{THEME['dim']}]")

    save_progress(session.to_progress(), args.state)
    return 0


def cmd_validate(args, config) -> int:
    content = load_content(_resolve(args.content, config.get("content_path"), "content file"))
    issues = validate_content(content)
    show_issues(issues)
    return 1 if has_errors(issues) else 0


def cmd_config(args, config) -> int:
    """Update saved defaults, then print the resulting configuration."""
    if args.content is not None:
        set_content_path(args.content or None, args.config_dir)
    if args.state is not None:
        set_state_path(args.state or None, args.config_dir)
    if args.level is not None:
        set_log_level(args.level, args.config_dir)
    if args.show_hidden is not None:
        set_show_hidden(args.show_hidden == "on", args.config_dir)

    for key, value in load_config(args.config_dir).items():
        console.print(f"  [{THEME['accent']}]{key}[/{THEME['accent']}] {escape(str(value))}")
    return 0


COMMANDS = {
    "check": cmd_check,
    "standings": cmd_standings,
    "complete": cmd_complete,
    "decay": cmd_decay,
    "validate": cmd_validate,
    "config": cmd_config,
}


# -----------------------------------------------------------------------------
# Entry point
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="interplay",
        description="Interplay - prerequisite and progression debugger",
    )
    parser.add_argument(
        "--config-dir",
        default=".",
        help="Directory holding .interplay_config.json"
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Override configured log level (DEBUG, INFO, WARNING, ERROR)"
    )

    sub = parser.add_subparsers(dest="command", required=True)

    check = sub.add_parser("check", help="Show which interactions are available")
    check.add_argument("content", nargs="?", help="Content pack (.json/.yaml)")
    check.add_argument("--player", help="Base player state file")
    check.add_argument("--state", help="Saved progression file")
    check.add_argument(
        "--all", "-a",
        action="store_true",
        help="Include hidden interactions"
    )

    standings = sub.add_parser("standings", help="Show scores and derived tiers")
    standings.add_argument("content", nargs="?", help="Content pack (.json/.yaml)")
    standings.add_argument("--player", help="Base player state file")
    standings.add_argument("--state", help="Saved progression file")

    complete = sub.add_parser("complete", help="Apply an interaction's effects")
    complete.add_argument("content", nargs="?", help="Content pack (.json/.yaml)")
    complete.add_argument("interaction", help="Interaction id")
    complete.add_argument("--player", help="Base player state file (new progression only)")
    complete.add_argument("--state", help="Progression file to update")
    complete.add_argument(
        "--force", "-f",
        action="store_true",
        help="Apply even if prerequisites are not met"
    )

    decay = sub.add_parser("decay", help="Run one prestige decay tick")
    decay.add_argument("content", nargs="?", help="Content pack (.json/.yaml)")
    decay.add_argument("--player", help="Base player state file (new progression only)")
    decay.add_argument("--state", help="Progression file to update")

    validate = sub.add_parser("validate", help="Report problems in a content pack")
    validate.add_argument("content", nargs="?", help="Content pack (.json/.yaml)")

    settings = sub.add_parser("config", help="Show or change saved defaults")
    settings.add_argument("--content", help="Default content pack (empty string clears)")
    settings.add_argument("--state", help="Default progression file (empty string clears)")
    settings.add_argument("--level", help="Default log level")
    settings.add_argument(
        "--show-hidden",
        choices=["on", "off"],
        help="List hidden interactions in check"
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    config = load_config(args.config_dir)
    level = (args.log_level or config.get("log_level") or "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    )

    try:
        return COMMANDS[args.command](args, config)
    except (ContentError, TrackConfigError) as e:
        console.print(f"[{THEME['danger']}]Error:[/{THEME['danger']}] {escape(str(e))}")
        return 1
