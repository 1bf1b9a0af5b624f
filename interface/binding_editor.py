"""Binding Editor (view-model for controller binding screens)
==========================================================

Purpose
-------
Supply everything an editing screen needs to show and change the bindings of
one controller profile: one row per physical input with its bound actions and
legality, the list of selectable actions grouped by category, and the
operation that rebinds an input.

This module never draws anything.  A concrete UI toolkit reads
:meth:`BindingEditor.rows` and :meth:`BindingEditor.actions_by_category`,
renders them however it likes, and calls :meth:`BindingEditor.apply_selection`
when the user confirms a choice.

Design Decisions
----------------
* The registry stays the only writer; the editor always rewrites the full
  binding set through :meth:`BindingRegistry.replace`.
* Validation is advisory.  Illegal rows are flagged with ``[!]`` but can be
  saved.
* Axis inputs (thumbstick/trackpad without click) are not listed because
  action bindings target their click or button counterparts.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from core.events import topics
from modules.bindings.categories import ActionCategory, action_display_name, category_of
from modules.bindings.inputs import HANDS, InputDescription, inputs_by_hand, is_axis_input
from modules.bindings.model import BindingPair
from modules.bindings.registry import BindingRegistry
from modules.bindings.validator import ValidationResult, validate_input

logger = logging.getLogger(__name__)

ActionSource = Callable[[], Iterable[str]]
"""Returns every action the host has registered (may be empty before VR starts)."""

NOT_BOUND_LABEL = "Not bound"
INVALID_PREFIX = "[!] "


@dataclass(frozen=True)
class BindingRow:
    """One input line of the binding overview."""

    hand: str
    input: InputDescription
    actions: Tuple[str, ...]
    validation: ValidationResult
    label: str

    @property
    def is_bound(self) -> bool:
        return bool(self.actions)


class BindingEditor:
    """Read and edit the bindings of ``profile_id`` through ``registry``.

    Typical usage from a screen::

        editor = BindingEditor(registry, "/interaction_profiles/oculus/touch_controller",
                               action_source=host.registered_actions)
        for row in editor.rows():
            ...
        editor.apply_selection(row.input.path, {"/actions/ingame/in/key.jump"})
    """

    def __init__(
        self,
        registry: BindingRegistry,
        profile_id: str,
        *,
        action_source: Optional[ActionSource] = None,
        event_bus: Optional[Any] = None,
        translate: Optional[Callable[[str], str]] = None,
    ) -> None:
        self._registry = registry
        self.profile_id = profile_id
        self._action_source = action_source
        self._event_bus = event_bus
        self._translate = translate or (lambda key: key)

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------
    def bindings(self) -> Tuple[BindingPair, ...]:
        return self._registry.get(self.profile_id) or ()

    def input_to_actions(self, bindings: Optional[Sequence[BindingPair]] = None) -> Dict[str, List[str]]:
        if bindings is None:
            bindings = self.bindings()
        mapping: Dict[str, List[str]] = {}
        for action, input_path in bindings:
            mapping.setdefault(input_path, []).append(action)
        return mapping

    def rows(self) -> List[BindingRow]:
        """Overview rows for every non-axis input, left hand first."""

        bindings = self.bindings()
        bound = self.input_to_actions(bindings)
        grouped = inputs_by_hand(self.profile_id, self._registry.profile_aliases)

        rows: List[BindingRow] = []
        for hand in HANDS:
            for path, description in grouped.get(hand, {}).items():
                if is_axis_input(path):
                    continue
                actions = tuple(bound.get(path, ()))
                validation = validate_input(path, bindings)
                rows.append(
                    BindingRow(
                        hand=hand,
                        input=description,
                        actions=actions,
                        validation=validation,
                        label=self.describe_actions(actions, validation),
                    )
                )
        return rows

    def describe_actions(self, actions: Sequence[str], validation: ValidationResult) -> str:
        if not actions:
            return NOT_BOUND_LABEL
        first = actions[0]
        label = f"{self._translate(action_display_name(first))} [{category_of(first).value}]"
        if len(actions) > 1:
            label += f" (+{len(actions) - 1})"
        if not validation.legal:
            label = INVALID_PREFIX + label
        return label

    def actions_by_category(self) -> Dict[ActionCategory, List[str]]:
        """Every selectable action, sorted, grouped in category display order."""

        actions: List[str] = []
        if self._action_source is not None:
            actions = list(self._action_source())
        if not actions:
            logger.warning(
                "No registered actions available for %s, falling back to bound actions",
                self.profile_id,
            )
            actions = [action for action, _ in self.bindings()]

        grouped: Dict[ActionCategory, List[str]] = {category: [] for category in ActionCategory}
        for action in sorted(set(actions)):
            grouped[category_of(action)].append(action)
        return grouped

    # ------------------------------------------------------------------
    # Write side
    # ------------------------------------------------------------------
    def apply_selection(self, input_path: str, selected_actions: Iterable[str]) -> bool:
        """Bind exactly ``selected_actions`` to ``input_path`` and save.

        Bindings of other inputs are preserved, except for selected actions:
        an action maps to one input only, so selecting it here moves it.
        Returns the result of :meth:`BindingRegistry.replace`.
        """

        selected = sorted(set(selected_actions))
        chosen = set(selected)
        updated: List[BindingPair] = [
            (action, bound_input)
            for action, bound_input in self.bindings()
            if bound_input != input_path and action not in chosen
        ]
        updated.extend((action, input_path) for action in selected)

        saved = self._registry.replace(self.profile_id, updated)
        if saved:
            logger.info(
                "Input %s of %s now has %s action(s) bound", input_path, self.profile_id, len(selected)
            )
        return saved

    def request_reload(self) -> None:
        """Ask the host to re-apply the stored bindings to the live session."""

        if self._event_bus is None:
            logger.debug("Reload requested for %s without an event bus", self.profile_id)
            return
        self._event_bus.publish(topics.RELOAD_REQUESTED, profile_id=self.profile_id)


__all__ = ["ActionSource", "BindingEditor", "BindingRow", "INVALID_PREFIX", "NOT_BOUND_LABEL"]
