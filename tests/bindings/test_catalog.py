"""Tests for profile aliases, the input catalog and action categories."""
from __future__ import annotations

import pytest

from modules.bindings.categories import (
    ActionCategory,
    BindingClass,
    action_display_name,
    binding_class_of,
    category_of,
)
from modules.bindings.inputs import (
    COSMOS_INPUTS,
    TOUCH_INPUTS,
    VIVE_INPUTS,
    describe,
    display_name,
    inputs_by_hand,
    inputs_for_profile,
    is_axis_input,
)
from modules.bindings.profiles import (
    VIVE_COSMOS_PROFILE,
    custom_profile_id,
    headset_profile_of,
    unify_profile,
)
from tests.bindings.helpers import LEFT_X, ODYSSEY, RIGHT_A, TOUCH, VIVE


def test_odyssey_is_unified_with_touch() -> None:
    assert unify_profile(ODYSSEY) == TOUCH
    assert unify_profile(TOUCH) == TOUCH


def test_configured_aliases_extend_and_chain() -> None:
    aliases = {"/interaction_profiles/acme/clone": ODYSSEY}

    assert unify_profile("/interaction_profiles/acme/clone", aliases) == TOUCH


def test_alias_cycles_are_rejected() -> None:
    with pytest.raises(ValueError):
        unify_profile("/a", {"/a": "/b", "/b": "/a"})


def test_custom_profile_id() -> None:
    assert custom_profile_id(TOUCH, "lefty") == TOUCH + "/lefty"
    with pytest.raises(ValueError):
        custom_profile_id(TOUCH, "")


def test_inputs_for_profile_selects_catalog() -> None:
    assert inputs_for_profile(TOUCH) is TOUCH_INPUTS
    assert inputs_for_profile(ODYSSEY) is TOUCH_INPUTS
    assert inputs_for_profile(VIVE_COSMOS_PROFILE) is COSMOS_INPUTS
    assert inputs_for_profile(VIVE) is VIVE_INPUTS
    assert inputs_for_profile("/interaction_profiles/unknown/thing") is VIVE_INPUTS


def test_describe_known_and_unknown_inputs() -> None:
    assert display_name(TOUCH, RIGHT_A) == "A Button"
    assert describe(TOUCH, LEFT_X).hand == "Left"

    unknown = describe(TOUCH, "/user/hand/right/input/system/click")
    assert unknown.hand == "Unknown"
    assert unknown.display_name == "/user/hand/right/input/system/click"


@pytest.mark.parametrize(
    ("path", "axis"),
    [
        ("/user/hand/right/input/thumbstick", True),
        ("/user/hand/left/input/trackpad", True),
        ("/user/hand/right/input/thumbstick/click", False),
        ("/user/hand/left/input/trackpad/click", False),
        ("/user/hand/right/input/trigger", False),
    ],
)
def test_is_axis_input(path: str, axis: bool) -> None:
    assert is_axis_input(path) is axis


def test_inputs_by_hand_groups_left_then_right() -> None:
    grouped = inputs_by_hand(TOUCH)

    assert list(grouped) == ["Left", "Right"]
    assert LEFT_X in grouped["Left"]
    assert RIGHT_A in grouped["Right"]
    assert len(grouped["Left"]) + len(grouped["Right"]) == len(TOUCH_INPUTS)


@pytest.mark.parametrize(
    ("action", "category", "binding_class"),
    [
        ("/actions/global/in/key.menu", ActionCategory.GLOBAL, BindingClass.GLOBAL),
        ("/actions/ingame/in/key.jump", ActionCategory.INGAME, BindingClass.PRIMARY),
        ("/actions/mod/in/key.modx.dash", ActionCategory.MOD, BindingClass.PRIMARY),
        ("/actions/contextual/in/key.grab", ActionCategory.CONTEXTUAL, BindingClass.UNRESTRICTED),
        ("/actions/gui/in/key.click", ActionCategory.GUI, BindingClass.UNRESTRICTED),
        ("/actions/keyboard/in/key.shift", ActionCategory.KEYBOARD, BindingClass.UNRESTRICTED),
        ("key.vivecraft.jump", ActionCategory.OTHER, BindingClass.UNRESTRICTED),
    ],
)
def test_action_categories(action: str, category: ActionCategory, binding_class: BindingClass) -> None:
    assert category_of(action) is category
    assert binding_class_of(action) is binding_class


def test_action_display_name_is_last_segment() -> None:
    assert action_display_name("/actions/ingame/in/key.jump") == "key.jump"
    assert action_display_name("key.jump") == "key.jump"


def test_custom_profiles_use_their_headset_catalog() -> None:
    assert headset_profile_of(TOUCH + "/lefty") == TOUCH
    assert headset_profile_of(ODYSSEY + "/lefty") == TOUCH
    assert inputs_for_profile(custom_profile_id(TOUCH, "lefty")) is TOUCH_INPUTS
    assert inputs_for_profile(VIVE_COSMOS_PROFILE + "/seated") is COSMOS_INPUTS


def test_custom_profile_of_configured_alias() -> None:
    aliases = {"/interaction_profiles/acme/clone": TOUCH}

    assert inputs_for_profile("/interaction_profiles/acme/clone/lefty", aliases) is TOUCH_INPUTS
    assert inputs_for_profile("/interaction_profiles/acme/other/lefty") is VIVE_INPUTS
