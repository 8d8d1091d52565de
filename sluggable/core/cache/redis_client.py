# sluggable/core/cache/redis_client.py

"""
Redis Client
============

Backend compartilhado do cache de incrementos de slug. Quando REDIS_URL
não está definido ou o servidor não responde, `is_available` fica False
e o `TaggedCache` usa o store em memória do processo.
"""

import json
import logging
from typing import Any, Optional

import redis
from redis.connection import ConnectionPool
from redis.exceptions import RedisError

from sluggable.core.config import config

logger = logging.getLogger(__name__)


class RedisClient:
    """Singleton com conexão preguiçosa; erros viram log, nunca exceção"""

    _instance: Optional["RedisClient"] = None
    _client: Optional[redis.Redis] = None
    _is_available: bool = False
    _connected: bool = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def _ensure_connection(self):
        # uma única tentativa por processo
        if not self._connected:
            self._connected = True
            self._connect()

    def _connect(self):
        if not config.REDIS_URL:
            logger.warning("⚠️ REDIS_URL ausente: incrementos de slug ficam em memória local")
            return

        try:
            pool = ConnectionPool.from_url(
                config.REDIS_URL,
                decode_responses=True,
                socket_timeout=5,
                socket_connect_timeout=5,
            )
            self._client = redis.Redis(connection_pool=pool)
            self._client.ping()
            self._is_available = True
            logger.info(f"✅ Cache de slugs no Redis ({config.REDIS_URL.split('@')[-1]})")

        except RedisError as e:
            logger.error(f"❌ Redis inacessível, usando memória local: {e}")
            self._is_available = False
            self._client = None

    @property
    def is_available(self) -> bool:
        self._ensure_connection()
        return self._is_available

    def get(self, key: str) -> Optional[Any]:
        """Valor JSON da chave, ou None (ausente ou erro)"""
        if not self.is_available or not self._client:
            return None

        try:
            raw = self._client.get(key)
            return None if raw is None else json.loads(raw)
        except (RedisError, json.JSONDecodeError) as e:
            logger.error(f"❌ Falha lendo '{key}': {e}")
            return None

    def set(self, key: str, value: Any, ttl: int) -> bool:
        if not self.is_available or not self._client:
            return False

        try:
            self._client.setex(key, ttl, json.dumps(value))
            logger.debug(f"💾 {key} = {value!r} ({ttl}s)")
            return True
        except (RedisError, TypeError) as e:
            logger.error(f"❌ Falha gravando '{key}': {e}")
            return False

    def delete_pattern(self, pattern: str) -> int:
        """Apaga as chaves que casam com `pattern` (ex: "sluggable:*")"""
        if not self.is_available or not self._client:
            return 0

        try:
            keys = list(self._client.scan_iter(match=pattern))
            return self._client.delete(*keys) if keys else 0
        except RedisError as e:
            logger.error(f"❌ Falha apagando '{pattern}': {e}")
            return 0


redis_client = RedisClient()
