"""
Database Layer
==============

Engine e sessões usados quando um registro precisa consultar slugs
existentes e não está vinculado a nenhuma Session.

O engine é criado no primeiro uso a partir de DATABASE_URL.
"""

import logging
from contextlib import contextmanager
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool

from sluggable.core.config import config

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════
# ENGINE CONFIGURATION
# ═══════════════════════════════════════════════════════════

def get_engine_config(database_url: str) -> dict:
    """
    Retorna configuração do engine baseada no ambiente

    Returns:
        dict: kwargs para `create_engine`
    """
    if config.is_test:
        return {
            "poolclass": NullPool,
            "echo": False,
        }

    engine_config = {
        "pool_pre_ping": True,
        "echo": config.DEBUG,
    }
    if not database_url.startswith("sqlite"):
        engine_config.update({
            "pool_size": 5,
            "max_overflow": 10,
            "pool_recycle": 1800,
        })
    return engine_config


_engine: Optional[Engine] = None
SessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False)


def get_engine() -> Engine:
    global _engine
    if _engine is None:
        _engine = create_engine(config.DATABASE_URL, **get_engine_config(config.DATABASE_URL))
        SessionLocal.configure(bind=_engine)
        logger.info(f"✅ Engine criado: {_engine.url.render_as_string(hide_password=True)}")
    return _engine


def bind_engine(engine: Engine) -> None:
    """Usa um engine já existente (ex: o da aplicação ou de testes)"""
    global _engine
    _engine = engine
    SessionLocal.configure(bind=engine)


# ═══════════════════════════════════════════════════════════
# SESSIONS
# ═══════════════════════════════════════════════════════════

def get_db():
    """
    Gera uma sessão com rollback em erro

    Features:
    - ✅ Rollback em erro
    - ✅ Logging de exceções
    """
    get_engine()
    db = SessionLocal()
    try:
        yield db
    except Exception as e:
        logger.error(f"❌ Erro na sessão: {e}", exc_info=True)
        db.rollback()
        raise
    finally:
        db.close()


get_db_manager = contextmanager(get_db)
