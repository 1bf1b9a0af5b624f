"""Value objects describing the bindings stored for one controller profile."""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, Mapping, Tuple

from modules.bindings.namespaces import resolve_namespace

BindingPair = Tuple[str, str]
"""``(action, input_path)`` tuple as exchanged with the host."""


@dataclass(frozen=True, slots=True)
class BindingEntry:
    """One action bound to one physical input.

    ``namespace`` is always derived from ``action`` on construction.
    """

    action: str
    input_path: str
    namespace: str = field(init=False)

    def __post_init__(self) -> None:
        if not isinstance(self.action, str) or not self.action:
            raise ValueError("action must be a non-empty string")
        if not isinstance(self.input_path, str) or not self.input_path:
            raise ValueError("input_path must be a non-empty string")
        object.__setattr__(self, "namespace", resolve_namespace(self.action))

    def to_pair(self) -> BindingPair:
        return (self.action, self.input_path)

    @classmethod
    def from_pair(cls, pair: BindingPair) -> "BindingEntry":
        action, input_path = pair
        return cls(action, input_path)


@dataclass(frozen=True, slots=True)
class NamespaceInfo:
    """Diagnostic record of who owns an action and how contested it was."""

    namespace: str
    original_action: str
    conflict_count: int = 0


@dataclass(frozen=True, slots=True)
class ProfileBindings:
    """Complete, immutable binding set of one profile."""

    profile_id: str
    entries: Tuple[BindingEntry, ...] = ()
    namespace_index: Mapping[str, NamespaceInfo] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def __post_init__(self) -> None:
        entries = tuple(self.entries)
        seen: set[str] = set()
        for entry in entries:
            if entry.action in seen:
                raise ValueError(f"action '{entry.action}' is bound more than once")
            seen.add(entry.action)
        object.__setattr__(self, "entries", entries)
        if not isinstance(self.namespace_index, MappingProxyType):
            object.__setattr__(
                self, "namespace_index", MappingProxyType(dict(self.namespace_index))
            )

    def __iter__(self) -> Iterator[BindingEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def pairs(self) -> Tuple[BindingPair, ...]:
        return tuple(entry.to_pair() for entry in self.entries)

    def actions_for_input(self, input_path: str) -> Tuple[str, ...]:
        return tuple(entry.action for entry in self.entries if entry.input_path == input_path)


__all__ = ["BindingPair", "BindingEntry", "NamespaceInfo", "ProfileBindings"]
