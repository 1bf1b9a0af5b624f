"""Versioned on-disk schema for binding profile files.

Version 2 is written by this package::

    {
      "bindings": [{"action": ..., "inputPath": ..., "namespace": ...}],
      "namespaces": {"<action>": {"conflictCount": 0, "namespace": ..., "originalAction": ...}},
      "profile": "/interaction_profiles/...",
      "version": 2
    }

Version 1 files only carry ``bindings`` entries without namespaces.  Both
decode into :class:`~modules.bindings.model.ProfileBindings`; namespaces are
always recomputed from the action rather than trusted from disk.
"""
from __future__ import annotations

import json
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from modules.bindings.errors import ProfileDecodeError
from modules.bindings.model import BindingEntry, NamespaceInfo, ProfileBindings

SCHEMA_VERSION = 2


class _FileModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class BindingRecord(_FileModel):
    action: str = Field(min_length=1)
    input_path: str = Field(alias="inputPath", min_length=1)
    namespace: Optional[str] = None


class NamespaceRecord(_FileModel):
    namespace: str = Field(min_length=1)
    original_action: str = Field(alias="originalAction")
    conflict_count: int = Field(alias="conflictCount", default=0, ge=0)


class ProfileFileV1(_FileModel):
    version: Literal[1] = 1
    bindings: List[BindingRecord]


class ProfileFileV2(_FileModel):
    version: Literal[2] = SCHEMA_VERSION
    profile: str
    bindings: List[BindingRecord]
    namespaces: Dict[str, NamespaceRecord] = Field(default_factory=dict)


def encode_profile(bindings: ProfileBindings) -> str:
    """Serialise ``bindings`` to pretty-printed JSON with sorted keys."""

    document = ProfileFileV2(
        profile=bindings.profile_id,
        bindings=[
            BindingRecord(
                action=entry.action,
                input_path=entry.input_path,
                namespace=entry.namespace,
            )
            for entry in bindings.entries
        ],
        namespaces={
            action: NamespaceRecord(
                namespace=info.namespace,
                original_action=info.original_action,
                conflict_count=info.conflict_count,
            )
            for action, info in bindings.namespace_index.items()
        },
    )
    payload = document.model_dump(by_alias=True)
    return json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False) + "\n"


def decode_profile(text: str, profile_id: str, *, source: object = None) -> ProfileBindings:
    """Parse ``text`` into :class:`ProfileBindings` or raise :class:`ProfileDecodeError`."""

    origin = source if source is not None else profile_id
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ProfileDecodeError(origin, f"invalid JSON ({exc.msg} at line {exc.lineno})") from exc
    if not isinstance(data, dict):
        raise ProfileDecodeError(origin, "top-level value must be an object")

    version = data.get("version", 1)
    try:
        if version == 1:
            records = ProfileFileV1.model_validate(data).bindings
            namespaces: Dict[str, NamespaceRecord] = {}
        elif version == SCHEMA_VERSION:
            document = ProfileFileV2.model_validate(data)
            records = document.bindings
            namespaces = document.namespaces
        else:
            raise ProfileDecodeError(origin, f"unsupported schema version {version!r}")
    except ValidationError as exc:
        raise ProfileDecodeError(origin, f"schema check failed: {exc.error_count()} error(s)") from exc

    try:
        entries = tuple(BindingEntry(record.action, record.input_path) for record in records)
        index = {
            entry.action: NamespaceInfo(
                namespace=entry.namespace,
                original_action=namespaces[entry.action].original_action,
                conflict_count=namespaces[entry.action].conflict_count,
            )
            for entry in entries
            if entry.action in namespaces
        }
        if not index:
            index = {
                entry.action: NamespaceInfo(entry.namespace, entry.action, 0)
                for entry in entries
            }
        return ProfileBindings(profile_id=profile_id, entries=entries, namespace_index=index)
    except ValueError as exc:
        raise ProfileDecodeError(origin, str(exc)) from exc


__all__ = [
    "SCHEMA_VERSION",
    "BindingRecord",
    "NamespaceRecord",
    "ProfileFileV1",
    "ProfileFileV2",
    "encode_profile",
    "decode_profile",
]
