"""Advisory legality check for the bindings sharing one physical input.

The rules only inform an editor.  The store never rejects or repairs a set
that fails them; the same set is simply flagged again on the next read.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Union

from modules.bindings.categories import BindingClass, binding_class_of
from modules.bindings.model import BindingEntry, BindingPair, ProfileBindings

GLOBAL_EXCLUSIVE_REASON = "global binding cannot coexist with other bindings"
SINGLE_PRIMARY_REASON = "only one primary binding allowed per input"

BindingSource = Union[ProfileBindings, Iterable[BindingEntry], Iterable[BindingPair]]


@dataclass(frozen=True)
class ValidationResult:
    """Container returned by :func:`validate_input`."""

    legal: bool
    reason: Optional[str]
    has_global: bool = False
    primary_count: int = 0


def _pairs(bindings: BindingSource) -> Iterable[BindingPair]:
    for item in bindings:
        if isinstance(item, BindingEntry):
            yield item.to_pair()
        else:
            yield item


def validate_input(input_path: str, bindings: BindingSource) -> ValidationResult:
    """Decide whether the actions bound to ``input_path`` may coexist.

    Global actions exclude every primary (in-game or mod) action on the same
    input, and at most one primary action may target an input.  Contextual,
    GUI, keyboard and other actions never affect the outcome.
    """

    has_global = False
    primary_count = 0
    for action, bound_input in _pairs(bindings):
        if bound_input != input_path:
            continue
        binding_class = binding_class_of(action)
        if binding_class is BindingClass.GLOBAL:
            has_global = True
        elif binding_class is BindingClass.PRIMARY:
            primary_count += 1

    if has_global and primary_count > 0:
        return ValidationResult(False, GLOBAL_EXCLUSIVE_REASON, has_global, primary_count)
    if primary_count > 1:
        return ValidationResult(False, SINGLE_PRIMARY_REASON, has_global, primary_count)
    return ValidationResult(True, None, has_global, primary_count)


__all__ = [
    "GLOBAL_EXCLUSIVE_REASON",
    "SINGLE_PRIMARY_REASON",
    "ValidationResult",
    "validate_input",
]
