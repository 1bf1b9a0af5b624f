"""First-occurrence-wins deduplication of competing binding claims."""
from __future__ import annotations

import logging
from collections.abc import Mapping, Set as AbstractSet
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, List, Sequence, Tuple

from modules.bindings.model import BindingEntry, BindingPair, NamespaceInfo, ProfileBindings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConflictResolution:
    """Outcome of :func:`resolve_conflicts`."""

    profile_id: str
    entries: Tuple[BindingEntry, ...]
    conflicts: Mapping[str, Tuple[str, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @property
    def has_conflicts(self) -> bool:
        return bool(self.conflicts)

    def to_profile(self) -> ProfileBindings:
        """Build the :class:`ProfileBindings` record including its namespace index."""

        index = {
            entry.action: NamespaceInfo(
                namespace=entry.namespace,
                original_action=entry.action,
                conflict_count=len(self.conflicts.get(entry.action, ())),
            )
            for entry in self.entries
        }
        return ProfileBindings(profile_id=self.profile_id, entries=self.entries, namespace_index=index)


def order_claims(raw: Iterable[BindingPair]) -> Sequence[BindingPair]:
    """Return ``raw`` as a sequence with a stable order.

    Ordered inputs keep their order.  Hash-based containers have no stable
    iteration order across runs, so they are sorted by ``(action, input)``.
    """

    if isinstance(raw, Mapping):
        raise TypeError("bindings must be (action, input_path) pairs, not a mapping")
    if isinstance(raw, AbstractSet):
        return sorted(raw, key=_sort_key)
    if isinstance(raw, Sequence):
        return raw
    return list(raw)


def _sort_key(pair: BindingPair) -> tuple[str, ...]:
    if isinstance(pair, tuple):
        return tuple(str(item) for item in pair)
    return (str(pair),)


def resolve_conflicts(raw: Sequence[BindingPair], profile_id: str) -> ConflictResolution:
    """Keep the first input claimed for every action.

    ``raw`` must be an ordered sequence: the winner of a conflict is decided
    purely by position.  Later claims for an already bound action are
    recorded under ``conflicts`` when they target a different input; exact
    duplicates are dropped silently.  Malformed claims are skipped with a
    warning.
    """

    if isinstance(raw, (AbstractSet, Mapping)) or not isinstance(raw, Sequence):
        raise TypeError(
            "resolve_conflicts requires an ordered sequence; use order_claims() first"
        )

    kept: Dict[str, BindingEntry] = {}
    rejected: Dict[str, List[str]] = {}
    for claim in raw:
        try:
            action, input_path = claim
            entry = BindingEntry(action, input_path)
        except (TypeError, ValueError) as exc:
            logger.warning("Ignoring malformed binding %r for %s: %s", claim, profile_id, exc)
            continue

        winner = kept.get(entry.action)
        if winner is None:
            kept[entry.action] = entry
        elif winner.input_path != entry.input_path:
            rejected.setdefault(entry.action, []).append(entry.input_path)

    conflicts = {action: tuple(paths) for action, paths in rejected.items()}
    for action, paths in conflicts.items():
        logger.info(
            "Conflicting bindings for %s in %s: kept %s, rejected %s",
            action,
            profile_id,
            kept[action].input_path,
            ", ".join(paths),
        )

    return ConflictResolution(
        profile_id=profile_id,
        entries=tuple(kept.values()),
        conflicts=MappingProxyType(conflicts),
    )


__all__ = ["ConflictResolution", "order_claims", "resolve_conflicts"]
