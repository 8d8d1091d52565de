"""
Locale atual
============

Fornece o código de idioma usado para montar a coluna padrão de slug em
modo i18n. O valor é guardado num ContextVar, então cada request/task
enxerga o seu próprio locale.
"""

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

from sluggable.core.config import config

_current_locale: ContextVar[Optional[str]] = ContextVar("sluggable_locale", default=None)


def get_locale() -> str:
    """Retorna o locale atual (ou o LOCALE padrão da configuração)"""
    return _current_locale.get() or config.LOCALE


def set_locale(locale: Optional[str]) -> None:
    _current_locale.set(locale)


@contextmanager
def use_locale(locale: str) -> Iterator[str]:
    """
    Troca o locale temporariamente

    Exemplo:
        with use_locale("fr"):
            Article.find_by_slug(db, "bonjour")
    """
    token = _current_locale.set(locale)
    try:
        yield locale
    finally:
        _current_locale.reset(token)
