"""
Tagged Cache
============

Cache com namespace por tag, usado pelo resolvedor de unicidade.

Camadas:
1. Redis (compartilhado entre processos), quando disponível
2. Memória local com TTL, quando o Redis não está configurado/acessível

⚠️ get + put NÃO é atômico: dois processos resolvendo o mesmo slug base
ao mesmo tempo podem receber o mesmo incremento.
"""

import logging
import time
from typing import Any, Optional

from sluggable.core.cache.keys import CacheKeys
from sluggable.core.cache.redis_client import redis_client

logger = logging.getLogger(__name__)


class MemoryStore:
    """
    Cache em memória com expiração por chave

    Chave -> (valor, expira_em). Entradas expiradas são descartadas na
    leitura.
    """

    def __init__(self, max_size: int = 10000):
        self._data: dict[str, tuple[Any, float]] = {}
        self.max_size = max_size

    def get(self, key: str) -> Optional[Any]:
        entry = self._data.get(key)
        if entry is None:
            return None

        value, expires_at = entry
        if expires_at <= time.monotonic():
            del self._data[key]
            return None
        return value

    def set(self, key: str, value: Any, ttl: int) -> bool:
        if key not in self._data and len(self._data) >= self.max_size:
            # Remove item mais antigo (FIFO)
            oldest_key = next(iter(self._data))
            del self._data[oldest_key]

        self._data[key] = (value, time.monotonic() + ttl)
        return True

    def delete_prefix(self, prefix: str) -> int:
        keys = [key for key in self._data if key.startswith(prefix)]
        for key in keys:
            del self._data[key]
        return len(keys)

    def clear(self):
        self._data.clear()


# Instância global (por processo)
memory_store = MemoryStore()


class TaggedCache:
    """
    ✅ Cache com namespace por tag

    Exemplo:
        cache = TaggedCache("sluggable")
        cache.put("hello-world", 0, ttl=3600)
        cache.get("hello-world")  # 0
        cache.flush()
    """

    def __init__(self, tag: str, client=None, local: Optional[MemoryStore] = None):
        self.tag = tag
        self.client = client or redis_client
        self.local = local or memory_store

    def _key(self, key: str) -> str:
        return CacheKeys.tagged(self.tag, key)

    def get(self, key: str) -> Optional[Any]:
        if self.client.is_available:
            return self.client.get(self._key(key))
        return self.local.get(self._key(key))

    def put(self, key: str, value: Any, ttl: int) -> bool:
        if self.client.is_available:
            return self.client.set(self._key(key), value, ttl=ttl)
        return self.local.set(self._key(key), value, ttl)

    def flush(self) -> int:
        """Remove todas as entradas da tag"""
        if self.client.is_available:
            total = self.client.delete_pattern(CacheKeys.tag_pattern(self.tag))
        else:
            total = self.local.delete_prefix(self._key(""))

        logger.info(f"🗑️ Invalidado cache da tag '{self.tag}': {total} chaves")
        return total


# ✅ INSTÂNCIA GLOBAL (namespace "sluggable")
sluggable_cache = TaggedCache(CacheKeys.SLUGGABLE_TAG)
