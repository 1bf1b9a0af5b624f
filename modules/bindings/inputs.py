"""Human-readable catalog of controller inputs per interaction profile."""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Final, Iterable, Mapping, Optional, Tuple

from modules.bindings.profiles import (
    OCULUS_TOUCH_PROFILE,
    VIVE_COSMOS_PROFILE,
    headset_profile_of,
)

HANDS: Final[Tuple[str, ...]] = ("Left", "Right")
UNKNOWN_HAND: Final = "Unknown"


@dataclass(frozen=True)
class InputDescription:
    """Display information for one controller input path."""

    path: str
    hand: str
    display_name: str
    description: str


def _catalog(rows: Iterable[Tuple[str, str, str, str]]) -> Mapping[str, InputDescription]:
    table: Dict[str, InputDescription] = {}
    for hand, suffix, display_name, description in rows:
        path = f"/user/hand/{hand.lower()}/input/{suffix}"
        table[path] = InputDescription(path, hand, display_name, description)
    return MappingProxyType(table)


TOUCH_INPUTS: Final = _catalog(
    [
        ("Right", "trigger", "Trigger", "Right trigger"),
        ("Right", "squeeze", "Grip", "Right grip"),
        ("Right", "thumbstick", "Thumbstick", "Right thumbstick (2D axis)"),
        ("Right", "thumbstick/click", "Thumbstick Click", "Right thumbstick"),
        ("Right", "a/click", "A Button", "A button"),
        ("Right", "b/click", "B Button", "B button"),
        ("Left", "trigger", "Trigger", "Left trigger"),
        ("Left", "squeeze", "Grip", "Left grip"),
        ("Left", "thumbstick", "Thumbstick", "Left thumbstick (2D axis)"),
        ("Left", "thumbstick/click", "Thumbstick Click", "Left thumbstick"),
        ("Left", "x/click", "X Button", "X button"),
        ("Left", "y/click", "Y Button", "Y button"),
        ("Left", "menu/click", "Menu Button", "Left hand menu button"),
    ]
)

VIVE_INPUTS: Final = _catalog(
    [
        ("Right", "trigger", "Trigger", "Right hand trigger button"),
        ("Right", "squeeze", "Grip", "Right hand grip button"),
        ("Right", "trackpad", "Trackpad", "Right hand trackpad (2D axis)"),
        ("Right", "trackpad/click", "Trackpad Click", "Right hand trackpad press"),
        ("Right", "menu/click", "Menu Button", "Right hand menu button"),
        ("Left", "trigger", "Trigger", "Left hand trigger button"),
        ("Left", "squeeze", "Grip", "Left hand grip button"),
        ("Left", "trackpad", "Trackpad", "Left hand trackpad (2D axis)"),
        ("Left", "trackpad/click", "Trackpad Click", "Left hand trackpad press"),
        ("Left", "menu/click", "Menu Button", "Left hand menu button"),
    ]
)

COSMOS_INPUTS: Final = _catalog(
    [
        ("Right", "trigger", "Trigger", "Right trigger"),
        ("Right", "squeeze", "Grip", "Right hand grip button"),
        ("Right", "thumbstick", "Thumbstick", "Right hand thumbstick (2D axis)"),
        ("Right", "thumbstick/click", "Thumbstick Click", "Right hand thumbstick press"),
        ("Right", "a/click", "A Button", "Right hand A button"),
        ("Right", "b/click", "B Button", "Right hand B button"),
        ("Left", "trigger", "Trigger", "Left hand trigger button"),
        ("Left", "squeeze", "Grip", "Left hand grip button"),
        ("Left", "thumbstick", "Thumbstick", "Left hand thumbstick (2D axis)"),
        ("Left", "thumbstick/click", "Thumbstick Click", "Left hand thumbstick press"),
        ("Left", "x/click", "X Button", "Left hand X button"),
        ("Left", "y/click", "Y Button", "Left hand Y button"),
    ]
)

_PROFILE_CATALOGS: Final[Mapping[str, Mapping[str, InputDescription]]] = MappingProxyType(
    {
        OCULUS_TOUCH_PROFILE: TOUCH_INPUTS,
        VIVE_COSMOS_PROFILE: COSMOS_INPUTS,
    }
)


def inputs_for_profile(
    profile_id: str, aliases: Optional[Mapping[str, str]] = None
) -> Mapping[str, InputDescription]:
    """Inputs of the headset behind ``profile_id``; unknown controllers use the Vive layout."""

    return _PROFILE_CATALOGS.get(headset_profile_of(profile_id, aliases), VIVE_INPUTS)


def describe(
    profile_id: str, input_path: str, aliases: Optional[Mapping[str, str]] = None
) -> InputDescription:
    found = inputs_for_profile(profile_id, aliases).get(input_path)
    if found is not None:
        return found
    return InputDescription(input_path, UNKNOWN_HAND, input_path, "Unknown input")


def display_name(profile_id: str, input_path: str, aliases: Optional[Mapping[str, str]] = None) -> str:
    return describe(profile_id, input_path, aliases).display_name


def is_axis_input(input_path: str) -> bool:
    """True for 2D thumbstick or trackpad axes as opposed to their clicks."""

    if "/click" in input_path:
        return False
    return "/thumbstick" in input_path or "/trackpad" in input_path


def inputs_by_hand(
    profile_id: str, aliases: Optional[Mapping[str, str]] = None
) -> Dict[str, Dict[str, InputDescription]]:
    grouped: Dict[str, Dict[str, InputDescription]] = {hand: {} for hand in HANDS}
    for path, description in inputs_for_profile(profile_id, aliases).items():
        grouped.setdefault(description.hand, {})[path] = description
    return grouped


__all__ = [
    "HANDS",
    "InputDescription",
    "TOUCH_INPUTS",
    "VIVE_INPUTS",
    "COSMOS_INPUTS",
    "inputs_for_profile",
    "describe",
    "display_name",
    "is_axis_input",
    "inputs_by_hand",
]
