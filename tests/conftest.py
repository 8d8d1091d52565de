import pytest
from unittest.mock import MagicMock, patch

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from sluggable.core.cache.tagged_cache import memory_store, sluggable_cache
from sluggable.core.database import bind_engine
from tests.sample_models import Base


# ═══════════════════════════════════════════════════════════
# FIXTURES
# ═══════════════════════════════════════════════════════════

@pytest.fixture
def engine():
    """Banco SQLite em memória compartilhado entre sessões"""
    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(engine)
    bind_engine(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture(autouse=True)
def local_slug_cache():
    """Cache de slugs sempre em memória e limpo entre os testes"""
    offline = MagicMock()
    offline.is_available = False

    memory_store.clear()
    with patch.object(sluggable_cache, "client", offline):
        yield memory_store
    memory_store.clear()
