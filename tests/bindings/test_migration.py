from __future__ import annotations

import json
from pathlib import Path

from modules.bindings.migration import migrate_legacy_file
from modules.bindings.registry import BindingRegistry
from tests.bindings.helpers import RIGHT_A, RIGHT_B, TOUCH, VIVE


def _write_legacy(path: Path, profiles: object) -> Path:
    path.write_text(json.dumps({"vrControllerBindings": profiles, "keybindBindings": {}}), encoding="utf-8")
    return path


def test_migrates_every_profile(tmp_path: Path, registry: BindingRegistry) -> None:
    legacy = _write_legacy(
        tmp_path / "legacy.json",
        {
            TOUCH: [{"action": "key.modx.dash", "inputPath": RIGHT_A}],
            VIVE: [{"action": "key.modx.dash", "inputPath": RIGHT_B}, {"action": 3}],
        },
    )

    seeded = migrate_legacy_file(registry, legacy)

    assert seeded == [VIVE, TOUCH]
    assert registry.get(TOUCH) == (("key.modx.dash", RIGHT_A),)
    assert registry.get(VIVE) == (("key.modx.dash", RIGHT_B),)


def test_existing_profiles_are_not_overwritten(tmp_path: Path, registry: BindingRegistry) -> None:
    registry.replace(TOUCH, [("key.vivecraft.jump", RIGHT_B)])
    legacy = _write_legacy(tmp_path / "legacy.json", {TOUCH: [{"action": "key.modx.dash", "inputPath": RIGHT_A}]})

    assert migrate_legacy_file(registry, legacy) == []
    assert registry.get(TOUCH) == (("key.vivecraft.jump", RIGHT_B),)


def test_missing_or_broken_legacy_file(tmp_path: Path, registry: BindingRegistry) -> None:
    assert migrate_legacy_file(registry, tmp_path / "absent.json") == []

    broken = tmp_path / "broken.json"
    broken.write_text("{", encoding="utf-8")
    assert migrate_legacy_file(registry, broken) == []

    wrong_shape = _write_legacy(tmp_path / "wrong.json", ["not", "a", "mapping"])
    assert migrate_legacy_file(registry, wrong_shape) == []
    assert registry.available_profiles() == set()


def test_invalid_legacy_profile_ids_are_skipped(tmp_path: Path, registry: BindingRegistry) -> None:
    legacy = _write_legacy(
        tmp_path / "legacy.json",
        {
            "interaction_profiles/no_separator": [{"action": "key.modx.dash", "inputPath": RIGHT_A}],
            TOUCH: [{"action": "key.modx.dash", "inputPath": RIGHT_A}],
        },
    )

    assert migrate_legacy_file(registry, legacy) == [TOUCH]
    assert registry.available_profiles() == {TOUCH}
