# sluggable/core/cache/keys.py

"""
Cache Keys Generator
====================

Gerador centralizado de chaves de cache.

Padrão de chaves:
- {tag}:{chave}
- sluggable:{slug base}
"""


class CacheKeys:
    """✅ Gerador de chaves de cache com padrões consistentes"""

    SLUGGABLE_TAG = "sluggable"

    @staticmethod
    def tagged(tag: str, key: str) -> str:
        """Chave dentro do namespace de uma tag"""
        return f"{tag}:{key}"

    @staticmethod
    def tag_pattern(tag: str) -> str:
        """Pattern para invalidar todas as chaves de uma tag"""
        return f"{tag}:*"

