from __future__ import annotations

import logging

import pytest

from interface.binding_editor import INVALID_PREFIX, NOT_BOUND_LABEL, BindingEditor
from modules.bindings.categories import ActionCategory
from modules.bindings.registry import BindingRegistry
from tests.bindings.helpers import LEFT_X, RIGHT_A, RIGHT_B, RIGHT_TRIGGER, TOUCH, RecordingBus

JUMP = "/actions/ingame/in/key.jump"
MENU = "/actions/global/in/key.menu"
CLICK = "/actions/gui/in/key.click"
DASH = "/actions/mod/in/key.modx.dash"


@pytest.fixture
def editor(registry: BindingRegistry, bus: RecordingBus) -> BindingEditor:
    registry.replace(TOUCH, [(JUMP, RIGHT_A), (MENU, RIGHT_A), (CLICK, RIGHT_TRIGGER)])
    return BindingEditor(
        registry,
        TOUCH,
        action_source=lambda: [DASH, JUMP, MENU, CLICK],
        event_bus=bus,
    )


def test_rows_cover_button_inputs_left_hand_first(editor: BindingEditor) -> None:
    rows = editor.rows()

    assert rows[0].hand == "Left"
    assert rows[-1].hand == "Right"
    assert len(rows) == 11
    assert all(not row.input.path.endswith("/thumbstick") for row in rows)


def test_row_labels_and_validation(editor: BindingEditor) -> None:
    by_input = {row.input.path: row for row in editor.rows()}

    shared = by_input[RIGHT_A]
    assert shared.actions == (JUMP, MENU)
    assert not shared.validation.legal
    assert shared.label == INVALID_PREFIX + "key.jump [Ingame] (+1)"

    assert by_input[RIGHT_TRIGGER].label == "key.click [GUI]"
    assert by_input[RIGHT_TRIGGER].validation.legal

    assert not by_input[LEFT_X].is_bound
    assert by_input[LEFT_X].label == NOT_BOUND_LABEL


def test_labels_are_translated(registry: BindingRegistry) -> None:
    registry.replace(TOUCH, [(JUMP, RIGHT_B)])
    editor = BindingEditor(registry, TOUCH, translate=str.upper)

    row = next(row for row in editor.rows() if row.input.path == RIGHT_B)
    assert row.label == "KEY.JUMP [Ingame]"


def test_actions_by_category_in_display_order(editor: BindingEditor) -> None:
    grouped = editor.actions_by_category()

    assert list(grouped) == list(ActionCategory)
    assert grouped[ActionCategory.INGAME] == [JUMP]
    assert grouped[ActionCategory.MOD] == [DASH]
    assert grouped[ActionCategory.GLOBAL] == [MENU]
    assert grouped[ActionCategory.KEYBOARD] == []


def test_actions_fall_back_to_bound_actions(registry: BindingRegistry, caplog) -> None:
    registry.replace(TOUCH, [(JUMP, RIGHT_B)])
    editor = BindingEditor(registry, TOUCH, action_source=lambda: [])

    with caplog.at_level(logging.WARNING, logger="interface.binding_editor"):
        grouped = editor.actions_by_category()

    assert grouped[ActionCategory.INGAME] == [JUMP]
    assert "falling back" in caplog.text


def test_apply_selection_moves_selected_actions(editor: BindingEditor, registry: BindingRegistry) -> None:
    assert editor.apply_selection(RIGHT_B, {JUMP})

    assert registry.get(TOUCH) == ((CLICK, RIGHT_TRIGGER), (JUMP, RIGHT_B))
    assert editor.input_to_actions() == {RIGHT_TRIGGER: [CLICK], RIGHT_B: [JUMP]}


def test_apply_empty_selection_unbinds_input(editor: BindingEditor, registry: BindingRegistry) -> None:
    assert editor.apply_selection(RIGHT_A, [])

    assert registry.get(TOUCH) == ((CLICK, RIGHT_TRIGGER),)


def test_request_reload_publishes_event(editor: BindingEditor, bus: RecordingBus) -> None:
    editor.request_reload()

    assert bus.published[-1] == ("bindings.reload_requested", {"profile_id": TOUCH})


def test_editor_on_profile_without_bindings(registry: BindingRegistry) -> None:
    editor = BindingEditor(registry, TOUCH)

    assert editor.bindings() == ()
    assert all(row.label == NOT_BOUND_LABEL for row in editor.rows())
    editor.request_reload()


def test_custom_profile_rows_use_headset_inputs(registry: BindingRegistry) -> None:
    lefty = TOUCH + "/lefty"
    registry.replace(lefty, [(JUMP, RIGHT_A)])

    rows = BindingEditor(registry, lefty).rows()
    paths = [row.input.path for row in rows]

    assert RIGHT_A in paths
    assert LEFT_X in paths
    assert not any("trackpad" in path for path in paths)
    assert next(row for row in rows if row.input.path == RIGHT_A).actions == (JUMP,)


def test_rows_read_the_profile_once(editor: BindingEditor, registry: BindingRegistry, monkeypatch) -> None:
    calls = []
    original_get = registry.get

    def counting_get(profile_id):
        calls.append(profile_id)
        return original_get(profile_id)

    monkeypatch.setattr(registry, "get", counting_get)

    editor.rows()

    assert calls == [TOUCH]
