"""Stores concretos do SDK."""

from app.infra.stores.memory_key_cache import MemoryPublicKeyCache

__all__ = ["MemoryPublicKeyCache"]
