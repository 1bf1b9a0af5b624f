"""Action-set categories derived from action identifiers."""
from __future__ import annotations

from enum import Enum
from typing import Final


class ActionCategory(str, Enum):
    """Action set an action belongs to, in display order."""

    GLOBAL = "Global"
    INGAME = "Ingame"
    MOD = "Mod"
    CONTEXTUAL = "Contextual"
    GUI = "GUI"
    KEYBOARD = "Keyboard"
    OTHER = "Other"


class BindingClass(str, Enum):
    """Exclusivity class used when validating bindings that share an input."""

    GLOBAL = "global"
    PRIMARY = "primary"
    UNRESTRICTED = "unrestricted"


_PREFIXES: Final[tuple[tuple[str, ActionCategory], ...]] = (
    ("/actions/ingame/in/", ActionCategory.INGAME),
    ("/actions/mod/in/", ActionCategory.MOD),
    ("/actions/global/in/", ActionCategory.GLOBAL),
    ("/actions/contextual/in/", ActionCategory.CONTEXTUAL),
    ("/actions/gui/in/", ActionCategory.GUI),
    ("/actions/keyboard/in/", ActionCategory.KEYBOARD),
)

_BINDING_CLASSES: Final[dict[ActionCategory, BindingClass]] = {
    ActionCategory.GLOBAL: BindingClass.GLOBAL,
    ActionCategory.INGAME: BindingClass.PRIMARY,
    ActionCategory.MOD: BindingClass.PRIMARY,
}


def category_of(action: str) -> ActionCategory:
    for prefix, category in _PREFIXES:
        if action.startswith(prefix):
            return category
    return ActionCategory.OTHER


def binding_class_of(action: str) -> BindingClass:
    return _BINDING_CLASSES.get(category_of(action), BindingClass.UNRESTRICTED)


def action_display_name(action: str) -> str:
    """Return the last path segment of ``action`` (its translation key)."""

    return action.rsplit("/", 1)[-1]


__all__ = [
    "ActionCategory",
    "BindingClass",
    "category_of",
    "binding_class_of",
    "action_display_name",
]
