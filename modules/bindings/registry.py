"""Facade over the profile store, conflict resolution and validation.

A single :class:`BindingRegistry` is created at start-up and handed to every
consumer (host adapter, editor, CLI, HTTP API).  Every public operation holds
one re-entrant lock for its full duration; calls happen at menu cadence, never
per frame, so file I/O under the lock is acceptable.
"""
from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Set, Tuple

from config.config_loader import BindingSettings
from core.events import topics
from modules.bindings.conflicts import ConflictResolution, order_claims, resolve_conflicts
from modules.bindings.errors import BindingRegistryError, ProfileWriteError
from modules.bindings.model import BindingPair, ProfileBindings
from modules.bindings.profiles import DEFAULT_PROFILE_NAME, custom_profile_id
from modules.bindings.store import ProfileStore
from modules.bindings.validator import ValidationResult, validate_input
from utils.logger import log_calls

logger = logging.getLogger(__name__)

DefaultsProvider = Callable[[str], Iterable[BindingPair]]
"""Host callback returning the compiled-in defaults for a profile."""


class BindingRegistry:
    """Persisted binding sets keyed by controller profile id."""

    def __init__(
        self,
        store: ProfileStore,
        *,
        event_bus: Optional[Any] = None,
        active_profiles: Optional[Mapping[str, str]] = None,
        profile_aliases: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._store = store
        self._lock = store.lock
        self._bus = event_bus
        self._active_profiles: Dict[str, str] = dict(active_profiles or {})
        self._aliases: Dict[str, str] = dict(profile_aliases or {})
        self._closed = False

    @classmethod
    def from_settings(
        cls, settings: BindingSettings, *, event_bus: Optional[Any] = None
    ) -> "BindingRegistry":
        store = ProfileStore(Path(settings.root_dir), lock=threading.RLock())
        return cls(
            store,
            event_bus=event_bus,
            active_profiles=settings.active_profiles,
            profile_aliases=settings.profile_aliases,
        )

    @property
    def store(self) -> ProfileStore:
        return self._store

    @property
    def profile_aliases(self) -> Mapping[str, str]:
        return dict(self._aliases)

    # ------------------------------------------------------------------
    # Core operations
    # ------------------------------------------------------------------
    @log_calls
    def seed_if_absent(self, profile_id: str, raw_bindings: Iterable[BindingPair]) -> bool:
        """Persist ``raw_bindings`` unless the profile already has a file.

        Returns ``True`` only when this call created the profile.
        """

        with self._lock:
            self._ensure_open()
            if self._store.exists(profile_id):
                logger.info("Bindings for %s already exist, skipping save", profile_id)
                return False

            logger.info("First use of %s, saving default bindings", profile_id)
            resolution = self._resolve(profile_id, raw_bindings)
            if not self._persist(profile_id, resolution):
                return False
            self._publish(topics.BINDINGS_SEEDED, profile_id=profile_id, count=len(resolution.entries))
            return True

    def get(self, profile_id: str) -> Optional[Tuple[BindingPair, ...]]:
        with self._lock:
            bindings = self._store.load(profile_id)
            if bindings is None:
                logger.info("No saved bindings found for %s", profile_id)
                return None
            logger.info("Loading %s saved bindings for %s", len(bindings), profile_id)
            return bindings.pairs()

    def load_profile(self, profile_id: str) -> Optional[ProfileBindings]:
        """Full record including the namespace index (immutable copy)."""

        with self._lock:
            return self._store.load(profile_id)

    def replace(self, profile_id: str, raw_bindings: Iterable[BindingPair]) -> bool:
        """Overwrite the bindings of ``profile_id``; returns ``False`` on write failure."""

        return self.replace_with_report(profile_id, raw_bindings) is not None

    @log_calls
    def replace_with_report(
        self, profile_id: str, raw_bindings: Iterable[BindingPair]
    ) -> Optional[ConflictResolution]:
        """Like :meth:`replace` but return the resolution that was persisted.

        ``None`` means the write failed.
        """

        with self._lock:
            self._ensure_open()
            resolution = self._resolve(profile_id, raw_bindings)
            if not self._persist(profile_id, resolution):
                return None
            self._publish(topics.BINDINGS_REPLACED, profile_id=profile_id, count=len(resolution.entries))
            return resolution

    def delete(self, profile_id: str) -> bool:
        with self._lock:
            self._ensure_open()
            try:
                removed = self._store.delete(profile_id)
            except ProfileWriteError as exc:
                self._report_write_failure(profile_id, exc)
                return False
            if removed:
                self._publish(topics.BINDINGS_DELETED, profile_id=profile_id)
            return removed

    def available_profiles(self) -> Set[str]:
        with self._lock:
            return self._store.list_profiles()

    def clear_all(self) -> bool:
        with self._lock:
            self._ensure_open()
            try:
                self._store.clear()
            except ProfileWriteError as exc:
                self._report_write_failure(None, exc)
                return False
            self._publish(topics.BINDINGS_CLEARED)
            return True

    def validate(self, profile_id: str, input_path: str) -> Optional[ValidationResult]:
        """Validate one input of a stored profile; ``None`` if the profile is absent."""

        with self._lock:
            bindings = self._store.load(profile_id)
        if bindings is None:
            return None
        return validate_input(input_path, bindings)

    # ------------------------------------------------------------------
    # Active profiles and effective lookup
    # ------------------------------------------------------------------
    def active_profile(self, headset_profile: str) -> str:
        with self._lock:
            return self._active_profiles.get(headset_profile, DEFAULT_PROFILE_NAME)

    def set_active_profile(self, headset_profile: str, name: str) -> None:
        with self._lock:
            if name == DEFAULT_PROFILE_NAME:
                self._active_profiles.pop(headset_profile, None)
            else:
                custom_profile_id(headset_profile, name)
                self._active_profiles[headset_profile] = name
            logger.info("Active binding profile for %s is now '%s'", headset_profile, name)

    def load_effective(
        self, headset_profile: str, defaults_provider: DefaultsProvider
    ) -> Tuple[BindingPair, ...]:
        """Bindings the host should apply for ``headset_profile``.

        The active custom profile wins when it exists, then the saved
        defaults.  On first use the host defaults are fetched, seeded and
        returned in their conflict-resolved form.
        """

        with self._lock:
            active = self.active_profile(headset_profile)
            if active != DEFAULT_PROFILE_NAME:
                custom = self.get(custom_profile_id(headset_profile, active))
                if custom is not None:
                    logger.info("Loading custom profile '%s' for %s", active, headset_profile)
                    return custom
                logger.warning(
                    "Custom profile '%s' not found for %s, falling back to default",
                    active,
                    headset_profile,
                )

            saved = self.get(headset_profile)
            if saved is not None:
                return saved

            ordered = order_claims(defaults_provider(headset_profile))
            if self._closed:
                logger.warning("Registry closed, using unsaved defaults for %s", headset_profile)
            else:
                self.seed_if_absent(headset_profile, ordered)
            return tuple(entry.to_pair() for entry in resolve_conflicts(ordered, headset_profile).entries)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def close(self) -> None:
        """Stop accepting writes.  Every save is already flushed to disk."""

        with self._lock:
            self._closed = True
            self._bus = None
            logger.debug("Binding registry for %s closed", self._store.root)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _ensure_open(self) -> None:
        if self._closed:
            raise BindingRegistryError("binding registry is closed")

    def _resolve(self, profile_id: str, raw_bindings: Iterable[BindingPair]) -> ConflictResolution:
        resolution = resolve_conflicts(order_claims(raw_bindings), profile_id)
        if resolution.has_conflicts:
            self._publish(
                topics.CONFLICTS_DETECTED,
                profile_id=profile_id,
                conflicts={action: list(paths) for action, paths in resolution.conflicts.items()},
            )
        return resolution

    def _persist(self, profile_id: str, resolution: ConflictResolution) -> bool:
        try:
            self._store.save(profile_id, resolution.to_profile())
        except ProfileWriteError as exc:
            self._report_write_failure(profile_id, exc)
            return False
        return True

    def _report_write_failure(self, profile_id: Optional[str], exc: ProfileWriteError) -> None:
        logger.error("%s", exc)
        self._publish(topics.WRITE_FAILED, profile_id=profile_id, error=str(exc))

    def _publish(self, topic: topics.EventTopic, **payload: Any) -> None:
        if self._bus is not None:
            self._bus.publish(topic, **payload)


__all__ = ["BindingRegistry", "DefaultsProvider"]
