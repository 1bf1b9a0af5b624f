"""Exception hierarchy raised by the binding persistence layer."""
from __future__ import annotations


class BindingRegistryError(RuntimeError):
    """Base exception raised by the binding registry and its store."""


class ProfileDecodeError(BindingRegistryError):
    """Raised when a profile file exists but fails the schema check."""

    def __init__(self, path: object, message: str) -> None:
        super().__init__(f"Cannot decode binding profile '{path}': {message}")
        self.path = path


class ProfileWriteError(BindingRegistryError):
    """Raised when a profile file cannot be written or removed."""

    def __init__(self, profile_id: str | None, cause: OSError) -> None:
        target = profile_id if profile_id is not None else "<all profiles>"
        super().__init__(f"Failed to update bindings for {target}: {cause}")
        self.profile_id = profile_id
        self.cause = cause


__all__ = ["BindingRegistryError", "ProfileDecodeError", "ProfileWriteError"]
