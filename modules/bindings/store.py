"""File-backed persistence of one binding set per controller profile.

Each profile id such as ``/interaction_profiles/oculus/touch_controller`` maps
to ``<root>/interaction_profiles/oculus/touch_controller.json``.  Writes go to
a temporary file in the destination directory followed by :func:`os.replace`
so readers only ever see a complete document.
"""
from __future__ import annotations

import logging
import os
import shutil
import tempfile
import threading
from pathlib import Path, PurePosixPath
from typing import Optional, Set

from modules.bindings.errors import ProfileDecodeError, ProfileWriteError
from modules.bindings.model import ProfileBindings
from modules.bindings.schema import decode_profile, encode_profile

logger = logging.getLogger(__name__)

PROFILE_EXTENSION = ".json"
PROFILE_SEPARATOR = "/"
_TEMP_SUFFIX = ".tmp"


class ProfileStore:
    """Load, save and enumerate profile files below ``root``."""

    def __init__(self, root: str | Path, *, lock: Optional[threading.RLock] = None) -> None:
        self._root = Path(root)
        self._lock = lock if lock is not None else threading.RLock()

    @property
    def root(self) -> Path:
        return self._root

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    # ------------------------------------------------------------------
    # Path mapping
    # ------------------------------------------------------------------
    def path_for(self, profile_id: str) -> Path:
        if not profile_id.startswith(PROFILE_SEPARATOR):
            raise ValueError(f"profile id {profile_id!r} must start with {PROFILE_SEPARATOR!r}")
        parts = profile_id[1:].split(PROFILE_SEPARATOR)
        if any(part in ("", ".", "..") or "\\" in part for part in parts):
            raise ValueError(f"invalid profile id {profile_id!r}")
        return self._root.joinpath(*parts[:-1], parts[-1] + PROFILE_EXTENSION)

    def location_to_profile_id(self, location: str | Path) -> str:
        relative = PurePosixPath(Path(location).relative_to(self._root).as_posix())
        text = str(relative)
        if text.endswith(PROFILE_EXTENSION):
            text = text[: -len(PROFILE_EXTENSION)]
        return PROFILE_SEPARATOR + text

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def exists(self, profile_id: str) -> bool:
        with self._lock:
            return self.path_for(profile_id).is_file()

    def load(self, profile_id: str) -> Optional[ProfileBindings]:
        """Return the stored bindings, or ``None`` when missing or corrupt.

        Corrupt files are reported and left untouched on disk.
        """

        with self._lock:
            path = self.path_for(profile_id)
            try:
                text = path.read_text(encoding="utf-8")
            except FileNotFoundError:
                logger.debug("No binding file for %s at %s", profile_id, path)
                return None
            except (OSError, UnicodeDecodeError) as exc:
                logger.warning("Unable to read binding file %s: %s", path, exc)
                return None

            try:
                bindings = decode_profile(text, profile_id, source=path)
            except ProfileDecodeError as exc:
                logger.warning("%s; keeping the file in place and treating it as missing", exc)
                return None

            logger.debug("Loaded %s bindings for %s", len(bindings), profile_id)
            return bindings

    def list_profiles(self) -> Set[str]:
        with self._lock:
            if not self._root.is_dir():
                return set()
            return {
                self.location_to_profile_id(path)
                for path in self._root.rglob("*" + PROFILE_EXTENSION)
                if path.is_file()
            }

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def save(self, profile_id: str, bindings: ProfileBindings) -> Path:
        """Atomically write ``bindings`` to the profile's file.

        Raises :class:`ProfileWriteError` when the file system refuses the
        write; a pre-existing file is left as it was in that case.
        """

        with self._lock:
            path = self.path_for(profile_id)
            payload = encode_profile(bindings)
            temp_name: Optional[str] = None
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                fd, temp_name = tempfile.mkstemp(
                    prefix=f".{path.stem}.", suffix=_TEMP_SUFFIX, dir=path.parent
                )
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(payload)
                    handle.flush()
                    os.fsync(handle.fileno())
                os.replace(temp_name, path)
                temp_name = None
            except OSError as exc:
                raise ProfileWriteError(profile_id, exc) from exc
            finally:
                if temp_name is not None:
                    try:
                        os.unlink(temp_name)
                    except OSError:
                        logger.debug("Temporary file %s already gone", temp_name)

            logger.info("Saved %s bindings for %s to %s", len(bindings), profile_id, path)
            return path

    def delete(self, profile_id: str) -> bool:
        """Remove the profile file; returns ``False`` when there was none."""

        with self._lock:
            path = self.path_for(profile_id)
            try:
                path.unlink()
            except FileNotFoundError:
                return False
            except OSError as exc:
                raise ProfileWriteError(profile_id, exc) from exc
            logger.info("Deleted bindings for %s", profile_id)
            return True

    def clear(self) -> None:
        with self._lock:
            if not self._root.exists():
                return
            try:
                shutil.rmtree(self._root)
            except OSError as exc:
                raise ProfileWriteError(None, exc) from exc
            logger.info("Cleared all saved bindings under %s", self._root)


__all__ = ["PROFILE_EXTENSION", "ProfileStore"]
