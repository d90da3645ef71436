"""Persistent stores for generated registry documents."""

from .registry_store import BUNDLE_KEY, INDEX_KEY, RegistryStore

__all__ = ["BUNDLE_KEY", "INDEX_KEY", "RegistryStore"]
