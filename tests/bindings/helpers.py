"""Shared constants and doubles for the binding registry tests."""
from __future__ import annotations

from typing import Any

from core.event_bus import EventBus

TOUCH = "/interaction_profiles/oculus/touch_controller"
VIVE = "/interaction_profiles/htc/vive_controller"
ODYSSEY = "/interaction_profiles/samsung/odyssey_controller"

RIGHT_A = "/user/hand/right/input/a/click"
RIGHT_B = "/user/hand/right/input/b/click"
RIGHT_TRIGGER = "/user/hand/right/input/trigger"
RIGHT_GRIP = "/user/hand/right/input/squeeze"
LEFT_X = "/user/hand/left/input/x/click"


class RecordingBus(EventBus):
    """Event bus remembering every published topic and payload."""

    def __init__(self) -> None:
        super().__init__()
        self.published: list[tuple[str, dict[str, Any]]] = []

    def publish(self, topic, payload=None, /, **kwargs: Any) -> None:  # type: ignore[override]
        merged = dict(payload or {})
        merged.update(kwargs)
        self.published.append((self._normalise_topic(topic), merged))
        super().publish(topic, payload, **kwargs)

    def topics(self) -> list[str]:
        return [topic for topic, _ in self.published]
