"""Ownership lookup for binding actions."""
from __future__ import annotations

import re
from typing import Final, Optional

HOST_NAMESPACE: Final[str] = "vivecraft"
"""Namespace reserved for the host application's own actions."""

HAND_INPUT_PREFIX: Final[str] = "/user/"

_KEYBINDING_PATTERN: Final = re.compile(r"^key\.([^.]+)\.(.+)$")


def resolve_namespace(action: Optional[str]) -> str:
    """Return the namespace owning ``action``.

    Hand-input paths belong to the host.  Keybinding identifiers of the form
    ``key.<owner>.<rest>`` belong to ``<owner>``; the form is matched against
    the last ``/`` segment so that action-set paths such as
    ``/actions/mod/in/key.modx.jump`` resolve as well.  Everything else,
    including ``None`` and the empty string, falls back to the host.
    """

    if not action or not isinstance(action, str):
        return HOST_NAMESPACE
    if action.startswith(HAND_INPUT_PREFIX):
        return HOST_NAMESPACE

    match = _KEYBINDING_PATTERN.match(action.rsplit("/", 1)[-1])
    if match is not None:
        return match.group(1)
    return HOST_NAMESPACE


__all__ = ["HOST_NAMESPACE", "HAND_INPUT_PREFIX", "resolve_namespace"]
