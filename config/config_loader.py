import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

import yaml

DEFAULT_CONFIG_FILE = "bindings.yaml"
DEFAULT_ROOT_DIR = "request_bindings"

_MISSING = object()


class ConfigLoader:
    def __init__(self, config_file=DEFAULT_CONFIG_FILE):
        self.config_file = config_file
        self.config = {}
        if config_file and os.path.exists(config_file):
            with open(config_file, "r", encoding="utf-8") as f:
                try:
                    self.config = yaml.safe_load(f) or {}
                except yaml.YAMLError as exc:
                    raise ValueError(f"Invalid YAML in configuration file {config_file}: {exc}") from exc
        if not isinstance(self.config, dict):
            raise ValueError(f"Configuration file {config_file} must contain a mapping at top level.")

    def get(self, *keys, default=_MISSING):
        """
        Récupère une valeur dans la configuration.
        Si un chemin de clé n'existe pas :
          - lève une KeyError si aucun default n'est fourni
          - retourne le default sinon
        """
        ref = self.config
        for key in keys:
            if isinstance(ref, dict) and key in ref:
                ref = ref[key]
            else:
                if default is not _MISSING:
                    return default
                raise KeyError(f"Configuration key {' -> '.join(keys)} not found and no default provided.")
        return ref


def _string_mapping(value: Any, name: str) -> Mapping[str, str]:
    if value is None:
        return MappingProxyType({})
    if not isinstance(value, dict):
        raise ValueError(f"'{name}' must be a mapping of strings")
    return MappingProxyType({str(k): str(v) for k, v in value.items()})


@dataclass(frozen=True)
class BindingSettings:
    """Runtime settings for the binding registry."""

    root_dir: str = DEFAULT_ROOT_DIR
    active_profiles: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    profile_aliases: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    log_level: str = "INFO"

    @classmethod
    def from_loader(cls, loader: ConfigLoader) -> "BindingSettings":
        return cls(
            root_dir=str(loader.get("bindings", "root_dir", default=DEFAULT_ROOT_DIR)),
            active_profiles=_string_mapping(
                loader.get("bindings", "active_profiles", default=None), "active_profiles"
            ),
            profile_aliases=_string_mapping(
                loader.get("bindings", "profile_aliases", default=None), "profile_aliases"
            ),
            log_level=str(loader.get("logging", "level", default="INFO")),
        )

    @classmethod
    def load(cls, config_file: str | None = DEFAULT_CONFIG_FILE) -> "BindingSettings":
        return cls.from_loader(ConfigLoader(config_file))
