"""
Content boundary: raw authoring-tool exports in, strict models out.

Everything the core evaluates passes through here first. Missing
`prerequisites` / `effects` substructures are filled with the empty shape and
unknown condition types are rejected, so the systems never have to re-check
shape. Track-definition rules (duplicate ids, counter cycles) are enforced
by the managers when they receive the definitions.

Supports JSON and YAML (.yaml / .yml) files.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .schema import (
    ContentPack,
    Interaction,
    PlayerProgress,
    PlayerState,
    dump_json_safe,
)

logger = logging.getLogger(__name__)

YAML_SUFFIXES = {".yaml", ".yml"}


class ContentError(Exception):
    """Content that cannot be read or does not match the schema."""


def read_document(path: Path | str) -> Any:
    """
    Read a JSON or YAML document from disk.

    Raises:
        ContentError: If the file is missing or does not parse
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ContentError(f"Cannot read {path}: {e}") from e

    try:
        if path.suffix.lower() in YAML_SUFFIXES:
            return yaml.safe_load(text)
        return json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ContentError(f"Cannot parse {path}: {e}") from e


def normalize_interaction(raw: dict[str, Any]) -> Interaction:
    """
    Build a fully-populated Interaction from a partial record.

    Raises:
        ContentError: If the record does not match the schema
    """
    try:
        return Interaction.model_validate(raw)
    except ValidationError as e:
        raise ContentError(f"Invalid interaction {raw.get('id', '?')!r}: {e}") from e


def parse_content(data: dict[str, Any] | None) -> ContentPack:
    """
    Normalize a raw content document into a ContentPack.

    Raises:
        ContentError: If the document does not match the schema
    """
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ContentError(f"Content must be a mapping, got {type(data).__name__}")
    try:
        return ContentPack.model_validate(data)
    except ValidationError as e:
        raise ContentError(f"Invalid content: {e}") from e


def load_content(path: Path | str) -> ContentPack:
    """Read and normalize a content file."""
    pack = parse_content(read_document(path))
    logger.info(
        f"Loaded content from {path}: {len(pack.interactions)} interactions, "
        f"{len(pack.influence_domains)} domains, {len(pack.prestige_tracks)} prestige tracks, "
        f"{len(pack.alignment_axes)} alignment axes"
    )
    return pack


def dump_content(pack: ContentPack, path: Path | str) -> None:
    """Write a content pack using the authoring tool's keys (JSON or YAML by suffix)."""
    path = Path(path)
    data = dump_json_safe(pack)
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.suffix.lower() in YAML_SUFFIXES:
        path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
    else:
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")


def load_progress(path: Path | str) -> PlayerProgress:
    """
    Read saved progression written by save_progress().

    Raises:
        ContentError: If the file is unreadable or malformed
    """
    data = read_document(path) or {}
    try:
        return PlayerProgress.model_validate(data)
    except ValidationError as e:
        raise ContentError(f"Invalid progress file {path}: {e}") from e


def save_progress(progress: PlayerProgress, path: Path | str) -> None:
    """Write progression as JSON, keeping a .bak of the previous save."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    if path.exists():
        backup = path.with_suffix(path.suffix + ".bak")
        backup.write_text(path.read_text(encoding="utf-8"), encoding="utf-8")

    progress.saved_at = datetime.now()
    path.write_text(json.dumps(dump_json_safe(progress), indent=2), encoding="utf-8")


def load_player_state(path: Path | str) -> PlayerState:
    """
    Read base player state (level, skills, quests, inventory).

    Raises:
        ContentError: If the file is unreadable or malformed
    """
    data = read_document(path) or {}
    try:
        return PlayerState.model_validate(data)
    except ValidationError as e:
        raise ContentError(f"Invalid player state in {path}: {e}") from e
