"""Controller binding registry: persistence, ownership and validation."""
from .conflicts import ConflictResolution, order_claims, resolve_conflicts
from .errors import BindingRegistryError, ProfileDecodeError, ProfileWriteError
from .model import BindingEntry, BindingPair, NamespaceInfo, ProfileBindings
from .namespaces import HOST_NAMESPACE, resolve_namespace
from .registry import BindingRegistry, DefaultsProvider
from .store import ProfileStore
from .validator import ValidationResult, validate_input

__all__ = [
    "BindingEntry",
    "BindingPair",
    "BindingRegistry",
    "BindingRegistryError",
    "ConflictResolution",
    "DefaultsProvider",
    "HOST_NAMESPACE",
    "NamespaceInfo",
    "ProfileBindings",
    "ProfileDecodeError",
    "ProfileStore",
    "ProfileWriteError",
    "ValidationResult",
    "order_claims",
    "resolve_conflicts",
    "resolve_namespace",
    "validate_input",
]
