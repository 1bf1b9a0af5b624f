"""Controller profile identifiers, aliases and custom profile naming."""
from __future__ import annotations

from types import MappingProxyType
from typing import Final, Mapping, Optional

OCULUS_TOUCH_PROFILE: Final = "/interaction_profiles/oculus/touch_controller"
VIVE_PROFILE: Final = "/interaction_profiles/htc/vive_controller"
VIVE_COSMOS_PROFILE: Final = "/interaction_profiles/htc/vive_cosmos_controller"
ODYSSEY_PROFILE: Final = "/interaction_profiles/samsung/odyssey_controller"

KNOWN_PROFILES: Final = (
    OCULUS_TOUCH_PROFILE,
    VIVE_PROFILE,
    VIVE_COSMOS_PROFILE,
    ODYSSEY_PROFILE,
)

DEFAULT_PROFILE_NAME: Final = "default"

# Controllers sharing a physical layout with a better supported profile
BUILTIN_PROFILE_ALIASES: Final[Mapping[str, str]] = MappingProxyType(
    {ODYSSEY_PROFILE: OCULUS_TOUCH_PROFILE}
)


def unify_profile(profile_id: str, aliases: Optional[Mapping[str, str]] = None) -> str:
    """Return the canonical profile used for ``profile_id``.

    ``aliases`` extend (and may override) the built-in aliases.  Chains are
    followed until a profile without alias is reached.
    """

    table = dict(BUILTIN_PROFILE_ALIASES)
    if aliases:
        table.update(aliases)

    seen = {profile_id}
    current = profile_id
    while current in table:
        current = table[current]
        if current in seen:
            raise ValueError(f"profile alias cycle detected at {current!r}")
        seen.add(current)
    return current


def headset_profile_of(profile_id: str, aliases: Optional[Mapping[str, str]] = None) -> str:
    """Canonical headset profile of ``profile_id``, which may be a custom profile.

    ``<headset>/<name>`` ids resolve through their parent when the parent is a
    known or aliased profile.
    """

    known = set(KNOWN_PROFILES) | set(BUILTIN_PROFILE_ALIASES)
    if aliases:
        known.update(aliases)
        known.update(aliases.values())
    if profile_id not in known:
        parent, _, _ = profile_id.rpartition("/")
        if parent in known:
            return unify_profile(parent, aliases)
    return unify_profile(profile_id, aliases)


def custom_profile_id(headset_profile: str, name: str) -> str:
    """Profile id of a user-named variant stored below ``headset_profile``."""

    name = name.strip().strip("/")
    if not name or "/" in name:
        raise ValueError(f"invalid custom profile name {name!r}")
    return f"{headset_profile.rstrip('/')}/{name}"


__all__ = [
    "OCULUS_TOUCH_PROFILE",
    "VIVE_PROFILE",
    "VIVE_COSMOS_PROFILE",
    "ODYSSEY_PROFILE",
    "DEFAULT_PROFILE_NAME",
    "BUILTIN_PROFILE_ALIASES",
    "KNOWN_PROFILES",
    "unify_profile",
    "headset_profile_of",
    "custom_profile_id",
]
