# sluggable/core/config.py
"""
Configurações do Sluggable
==========================

Gerencia variáveis de ambiente de forma centralizada e tipada.
Os valores SLUGGABLE_* são os padrões aplicados a todo model que não
sobrescreve a opção no seu próprio `__sluggable__`.
"""

from pathlib import Path
from typing import Optional, Union
from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Carrega .env do diretório raiz
load_dotenv(dotenv_path=Path(__file__).resolve().parent.parent.parent / ".env")


class Config(BaseSettings):
    """Configurações centralizadas do pacote"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ═══════════════════════════════════════════════════════════
    # 🌍 AMBIENTE
    # ═══════════════════════════════════════════════════════════

    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # ═══════════════════════════════════════════════════════════
    # 🗄️ BANCO DE DADOS
    # ═══════════════════════════════════════════════════════════

    DATABASE_URL: str = "sqlite:///./sluggable.db"

    # ═══════════════════════════════════════════════════════════
    # 🔴 REDIS
    # ═══════════════════════════════════════════════════════════

    REDIS_URL: Optional[str] = None

    # ═══════════════════════════════════════════════════════════
    # 🌐 LOCALE
    # ═══════════════════════════════════════════════════════════

    LOCALE: str = "en"

    # ═══════════════════════════════════════════════════════════
    # 🏷️ SLUGGABLE (padrões)
    # ═══════════════════════════════════════════════════════════

    SLUGGABLE_SAVE_TO: str = "slug"
    SLUGGABLE_BUILD_FROM: Optional[str] = None
    SLUGGABLE_SEPARATOR: str = "-"
    SLUGGABLE_MAX_LENGTH: Optional[int] = None
    SLUGGABLE_UNIQUE: bool = True
    SLUGGABLE_ON_UPDATE: bool = False
    # int antes de bool: SLUGGABLE_USE_CACHE=1 vira TTL de 1s, "true" vira True
    SLUGGABLE_USE_CACHE: Union[int, bool] = False
    SLUGGABLE_CACHE_TTL: int = 3600
    SLUGGABLE_INCLUDE_TRASHED: bool = False
    SLUGGABLE_I18N_SLUG: bool = False

    # ═══════════════════════════════════════════════════════════
    # 🔧 PROPRIEDADES ÚTEIS
    # ═══════════════════════════════════════════════════════════

    @property
    def is_test(self) -> bool:
        return self.ENVIRONMENT.lower() == "test"

    def sluggable_defaults(self) -> dict:
        """
        Retorna as opções padrão do sluggable

        `build_from` aceita lista separada por vírgula no .env
        (ex: SLUGGABLE_BUILD_FROM=first_name,last_name).
        """
        build_from = self.SLUGGABLE_BUILD_FROM
        if build_from and "," in build_from:
            build_from = [field.strip() for field in build_from.split(",") if field.strip()]

        return {
            "save_to": self.SLUGGABLE_SAVE_TO,
            "build_from": build_from,
            "separator": self.SLUGGABLE_SEPARATOR,
            "method": None,
            "max_length": self.SLUGGABLE_MAX_LENGTH,
            "reserved": None,
            "unique": self.SLUGGABLE_UNIQUE,
            "on_update": self.SLUGGABLE_ON_UPDATE,
            "use_cache": self.SLUGGABLE_USE_CACHE,
            "include_trashed": self.SLUGGABLE_INCLUDE_TRASHED,
            "i18n_slug": self.SLUGGABLE_I18N_SLUG,
        }


# ✅ Instância global
config = Config()


def validate_config(settings: Config = config):
    """
    Valida as configurações do sluggable

    Não roda no import: ENVIRONMENT pertence à aplicação hospedeira e
    pode ter qualquer valor (staging, prod, ...).
    """
    errors = []

    if not settings.SLUGGABLE_SEPARATOR:
        errors.append("SLUGGABLE_SEPARATOR não pode ser vazio")

    if settings.SLUGGABLE_CACHE_TTL <= 0:
        errors.append("SLUGGABLE_CACHE_TTL deve ser maior que zero")

    if errors:
        raise ValueError(
            "❌ Erros de configuração:\n" + "\n".join(f"  • {e}" for e in errors)
        )
