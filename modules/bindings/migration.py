"""Import bindings from the legacy single-file format.

Older releases kept every profile in one ``vivecraft_default_bindings.json``::

    {
      "vrControllerBindings": {"<profile>": [{"action": ..., "inputPath": ...}]},
      "keybindBindings": {...}
    }

Each profile found there is seeded into the per-profile layout.  Profiles that
already have a file are left alone, so running the migration twice is safe.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import List

from modules.bindings.model import BindingPair
from modules.bindings.registry import BindingRegistry
from utils.logger import get_migration_logger

LEGACY_BINDINGS_FILE = "vivecraft_default_bindings.json"


def _legacy_pairs(profile_id: str, entries: object) -> List[BindingPair]:
    log = get_migration_logger()
    if not isinstance(entries, list):
        log.warning("Legacy entry for %s is not a list; skipping profile", profile_id)
        return []

    pairs: List[BindingPair] = []
    for entry in entries:
        if not isinstance(entry, dict):
            log.warning("Ignoring malformed legacy binding %r for %s", entry, profile_id)
            continue
        action = entry.get("action")
        input_path = entry.get("inputPath")
        if not isinstance(action, str) or not isinstance(input_path, str):
            log.warning("Ignoring incomplete legacy binding %r for %s", entry, profile_id)
            continue
        pairs.append((action, input_path))
    return pairs


def migrate_legacy_file(registry: BindingRegistry, path: str | Path = LEGACY_BINDINGS_FILE) -> List[str]:
    """Seed every profile stored in the legacy file at ``path``.

    Returns the ids of the profiles that were actually created.
    """

    log = get_migration_logger()
    source = Path(path)
    try:
        data = json.loads(source.read_text(encoding="utf-8"))
    except FileNotFoundError:
        log.info("No legacy bindings file at %s", source)
        return []
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        log.warning("Cannot read legacy bindings file %s: %s", source, exc)
        return []

    profiles = data.get("vrControllerBindings") if isinstance(data, dict) else None
    if not isinstance(profiles, dict):
        log.warning("Legacy bindings file %s has no 'vrControllerBindings' object", source)
        return []

    seeded: List[str] = []
    for profile_id in sorted(profiles):
        pairs = _legacy_pairs(profile_id, profiles[profile_id])
        if not pairs:
            continue
        try:
            created = registry.seed_if_absent(profile_id, pairs)
        except ValueError as exc:
            log.warning("Skipping legacy profile %r: %s", profile_id, exc)
            continue
        if created:
            seeded.append(profile_id)
        else:
            log.info("Profile %s already present, legacy bindings not imported", profile_id)

    log.info("Migrated %s profile(s) from %s", len(seeded), source)
    return seeded


__all__ = ["LEGACY_BINDINGS_FILE", "migrate_legacy_file"]
