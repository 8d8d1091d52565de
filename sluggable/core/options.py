"""
Opções do Sluggable
===================

Representa a configuração de slug de um model já resolvida: padrões do
`config` mesclados com o `__sluggable__` declarado na classe. A instância
é imutável e validada na criação.
"""

from typing import Any, Callable, Optional, Union

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from sluggable.core.config import config
from sluggable.core.exceptions import ConfigurationError

SlugMethod = Callable[[str, str], Any]
ReservedProvider = Callable[[Any], Any]


class SluggableOptions(BaseModel):
    """Configuração imutável de slug para um model"""

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    save_to: str = "slug"
    build_from: Optional[tuple[str, ...]] = None
    separator: str = "-"
    method: Any = None
    max_length: Optional[int] = None
    reserved: Any = None
    unique: bool = True
    on_update: bool = False
    use_cache: Union[int, bool] = False
    include_trashed: bool = False
    i18n_slug: bool = False

    @field_validator("build_from", mode="before")
    @classmethod
    def normalize_build_from(cls, value):
        if value is None:
            return None
        if isinstance(value, str):
            return (value,)
        return tuple(value)

    @field_validator("method", mode="before")
    @classmethod
    def check_method(cls, value):
        if value is not None and not callable(value):
            raise ConfigurationError("Sluggable method is not callable or None.")
        return value

    @field_validator("reserved", mode="before")
    @classmethod
    def check_reserved(cls, value):
        if value is None or callable(value):
            return value
        if isinstance(value, (list, tuple, set, frozenset)):
            return tuple(value)
        raise ConfigurationError(
            "Sluggable reserved is not None, a list, or a callable that returns a list."
        )

    # ═══════════════════════════════════════════════════════════
    # CONSTRUÇÃO
    # ═══════════════════════════════════════════════════════════

    @classmethod
    def resolve(cls, overrides: Optional[dict] = None) -> "SluggableOptions":
        """
        Mescla os padrões do config com as opções do model

        Args:
            overrides: dict declarado em `__sluggable__` (pode ser None)

        Raises:
            ConfigurationError: opção desconhecida ou valor inválido
        """
        options = config.sluggable_defaults()
        overrides = overrides or {}

        unknown = set(overrides) - set(cls.model_fields)
        if unknown:
            raise ConfigurationError(
                f"Unknown sluggable option(s): {', '.join(sorted(unknown))}"
            )

        options.update(overrides)

        try:
            return cls(**options)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid sluggable configuration: {e}") from e

    # ═══════════════════════════════════════════════════════════
    # PROPRIEDADES ÚTEIS
    # ═══════════════════════════════════════════════════════════

    @property
    def cache_ttl(self) -> Optional[int]:
        """TTL em segundos das entradas de cache, ou None sem cache"""
        if self.use_cache is True:
            return config.SLUGGABLE_CACHE_TTL
        if not self.use_cache:
            return None
        return int(self.use_cache)

    @property
    def locale_source(self) -> Optional[str]:
        """Campo cujo mapa define os locales em modo i18n"""
        return self.build_from[0] if self.build_from else None
