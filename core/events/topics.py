"""Canonical registry of event bus topics used by the binding registry.

Each entry is declared as a :class:`~enum.Enum` member and documents the
producer, the intended consumers and the payload guarantees for the associated
event.  Importing modules should rely on the enum members (e.g.
``topics.EventTopic.BINDINGS_REPLACED``) to avoid drifting topic names between
the registry and the editing front-ends.
"""

from __future__ import annotations

from enum import Enum

__all__ = ["EventTopic"]


class EventTopic(str, Enum):
    """Enumeration of every topic published on the binding event bus."""

    BINDINGS_SEEDED = "bindings.seeded"
    """Published by :class:`BindingRegistry` after first-use defaults are saved.

    Subscribers: host reload hooks, logging sinks.
    Guarantees: provides ``profile_id`` and the ``count`` of stored entries.
    """

    BINDINGS_REPLACED = "bindings.replaced"
    """Published by :class:`BindingRegistry` after a user edit is persisted.

    Subscribers: editor views that need to refresh.
    Guarantees: provides ``profile_id`` and the ``count`` of stored entries.
    """

    CONFLICTS_DETECTED = "bindings.conflicts_detected"
    """Published whenever conflict resolution rejected at least one claim.

    Subscribers: diagnostics overlays.
    Guarantees: contains ``profile_id`` and a ``conflicts`` mapping of
    action to the rejected input paths.
    """

    BINDINGS_DELETED = "bindings.deleted"
    """Published after a single profile file was removed.

    Guarantees: provides ``profile_id``.
    """

    BINDINGS_CLEARED = "bindings.cleared"
    """Published after the whole binding root was removed."""

    WRITE_FAILED = "bindings.write_failed"
    """Published when persisting or deleting a profile failed on disk.

    Subscribers: UI notifications.
    Guarantees: contains ``profile_id`` (``None`` for a full clear) and the
    ``error`` message.
    """

    RELOAD_REQUESTED = "bindings.reload_requested"
    """Published by the binding editor when the user asks for a live reload.

    Subscribers: the host adapter re-running its action binding pipeline.
    Guarantees: provides ``profile_id``.
    """


BINDINGS_SEEDED = EventTopic.BINDINGS_SEEDED
BINDINGS_REPLACED = EventTopic.BINDINGS_REPLACED
CONFLICTS_DETECTED = EventTopic.CONFLICTS_DETECTED
BINDINGS_DELETED = EventTopic.BINDINGS_DELETED
BINDINGS_CLEARED = EventTopic.BINDINGS_CLEARED
WRITE_FAILED = EventTopic.WRITE_FAILED
RELOAD_REQUESTED = EventTopic.RELOAD_REQUESTED
