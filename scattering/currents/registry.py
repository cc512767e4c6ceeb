"""
Current-builder registry: maps configuration names to builder factories.

The built-in Standard-Model builder is registered as "sm" and is the
default. External amplitude backends register under their own name and are
selected at configuration time.
"""
from typing import Callable, Dict

from .base import CurrentBuilder
from .standard_model import LeptonicCurrent

DEFAULT_BUILDER = "sm"

# Global registry: name -> zero-argument factory returning a fresh builder
_REGISTRY: Dict[str, Callable[[], CurrentBuilder]] = {}


def register(name: str, factory: Callable[[], CurrentBuilder]):
    """
    Register a current builder under a configuration name.

    Example:
        >>> register("sm", LeptonicCurrent)
    """
    key = name.lower()
    if key in _REGISTRY:
        raise ValueError(f"Current builder '{name}' is already registered")
    _REGISTRY[key] = factory


def get_builder(name: str = DEFAULT_BUILDER) -> CurrentBuilder:
    """
    Create a fresh builder by name.

    Unknown names raise KeyError; unlike a decay fallback there is no
    sensible default amplitude to substitute silently.
    """
    key = name.lower()
    if key not in _REGISTRY:
        raise KeyError(f"Unknown current builder '{name}'. Available: {sorted(_REGISTRY)}")
    return _REGISTRY[key]()


def list_registered_builders():
    """List all registered builders."""
    return {k: factory().name for k, factory in _REGISTRY.items()}


# ========== AUTO-REGISTER BUILT-IN PHYSICS ==========
register(DEFAULT_BUILDER, LeptonicCurrent)
