"""
Sluggable Mixin
===============

Gera slugs (identificadores seguros para URL) para models SQLAlchemy a
partir dos campos de origem configurados, garantindo unicidade entre os
registros da mesma tabela e, opcionalmente, um slug por locale.

Fluxo por chave:
1. needs_slugging    -> precisa (re)gerar?
2. get_slug_source   -> texto de origem
3. generate_slug     -> texto -> slug (python-slugify ou `method`)
4. validate_slug     -> palavras reservadas
5. make_slug_unique  -> cache ou consulta ao banco
6. set_slug          -> grava no atributo (sem flush)

Uso:
    class Post(Base, SluggableMixin):
        __tablename__ = "posts"
        __sluggable__ = {"build_from": "title"}

        id: Mapped[int] = mapped_column(primary_key=True)
        title: Mapped[str] = mapped_column()
        slug: Mapped[str | None] = mapped_column(index=True)

    post = Post(title="Hello World")
    post.sluggify(session=db)  # post.slug == "hello-world"
"""

import logging
import re
from contextlib import contextmanager
from typing import Any, ClassVar, Iterator, Optional

from slugify import slugify
from sqlalchemy import inspect
from sqlalchemy.orm import Session, object_session

from sluggable.core.cache.tagged_cache import sluggable_cache
from sluggable.core.database import get_db_manager
from sluggable.core.exceptions import ConfigurationError
from sluggable.core.locale import get_locale
from sluggable.core.options import SluggableOptions
from sluggable.core.utils.hstore import hstore_to_dict

logger = logging.getLogger(__name__)

_INCREMENT_RE = re.compile(r"^\s*([+-]?\d+)")


def parse_increment(value: str) -> int:
    """Inteiro no início do texto, 0 quando não há dígitos"""
    match = _INCREMENT_RE.match(value)
    return int(match.group(1)) if match else 0


@contextmanager
def _session_scope(session: Optional[Session]) -> Iterator[Session]:
    if session is not None:
        yield session
        return

    with get_db_manager() as db:
        yield db


class SluggableMixin:
    """
    Mixin de slug para models declarativos.

    A configuração vem dos padrões SLUGGABLE_* mesclados com o dict
    `__sluggable__` da classe. Em modo i18n a coluna `save_to` precisa ser
    JSON/JSONB (dict locale -> slug) e o primeiro campo de `build_from`
    também é um dict por locale.
    """

    __sluggable__: ClassVar[dict] = {}

    # ═══════════════════════════════════════════════════════════
    # CONFIGURAÇÃO
    # ═══════════════════════════════════════════════════════════

    @classmethod
    def sluggable_options(cls) -> SluggableOptions:
        """Resolve as opções da classe (sem memoização)"""
        options = SluggableOptions.resolve(cls.__sluggable__)
        if options.i18n_slug and not options.build_from:
            raise ConfigurationError("i18n_slug requires build_from to name a locale map field.")
        return options

    def get_sluggable_config(self) -> SluggableOptions:
        """Opções resolvidas uma vez e guardadas na instância"""
        options = getattr(self, "_sluggable_config", None)
        if options is None:
            options = self.sluggable_options()
            self._sluggable_config = options
        return options

    @classmethod
    def slug_column(cls, locale: Optional[str] = None, options: Optional[SluggableOptions] = None):
        """
        Expressão SQL da coluna de slug

        Em modo i18n retorna o elemento JSON do locale informado (ou do
        locale atual).
        """
        options = options or cls.sluggable_options()
        column = getattr(cls, options.save_to)

        if options.i18n_slug:
            return column[locale or get_locale()].as_string()
        return column

    @classmethod
    def _slug_primary_key(cls):
        mapper = inspect(cls)
        prop = mapper.get_property_by_column(mapper.primary_key[0])
        return getattr(cls, prop.key)

    @classmethod
    def _apply_trashed_scope(cls, query, options: SluggableOptions):
        if getattr(cls, "soft_deletes", False) and not options.include_trashed:
            query = query.filter(cls.deleted_at.is_(None))
        return query

    def _slug_record_key(self) -> Any:
        return getattr(self, self._slug_primary_key().key)

    # ═══════════════════════════════════════════════════════════
    # 1. PRECISA GERAR?
    # ═══════════════════════════════════════════════════════════

    def needs_slugging(self, key: Optional[str] = None) -> bool:
        """
        Decide se o slug precisa ser (re)gerado

        - slug vazio: sempre
        - slug editado manualmente (dirty): nunca sobrescreve
        - caso contrário: só registro novo ou `on_update`
        """
        options = self.get_sluggable_config()
        save_to = options.save_to
        state = inspect(self)

        if key is None:
            if not getattr(self, save_to, None):
                return True

            if state.attrs[save_to].history.has_changes():
                return False
        else:
            values = getattr(self, save_to, None) or {}
            if not isinstance(values, dict):
                values = hstore_to_dict(values)
            if not values.get(key):
                return True

        return not state.has_identity or options.on_update

    # ═══════════════════════════════════════════════════════════
    # 2. TEXTO DE ORIGEM
    # ═══════════════════════════════════════════════════════════

    def get_slug_source(self, key: Optional[str] = None) -> str:
        options = self.get_sluggable_config()

        if options.build_from is None:
            return str(self)

        parts = []
        for field in options.build_from:
            if not hasattr(self, field):
                raise ConfigurationError(
                    f"Sluggable build_from field '{field}' does not exist on {type(self).__name__}."
                )

            value = getattr(self, field)
            if key is not None:
                value = value[key]
            parts.append("" if value is None else str(value))

        return " ".join(parts)

    # ═══════════════════════════════════════════════════════════
    # 3. TRANSFORMAÇÃO
    # ═══════════════════════════════════════════════════════════

    def generate_slug(self, source: str):
        options = self.get_sluggable_config()
        separator = options.separator
        method = options.method

        if method is None:
            slug = slugify(source, separator=separator)
        elif callable(method):
            slug = method(source, separator)
        else:
            raise ConfigurationError("Sluggable method is not callable or None.")

        if isinstance(slug, str) and options.max_length:
            slug = slug[:options.max_length]

        return slug

    # ═══════════════════════════════════════════════════════════
    # 4. PALAVRAS RESERVADAS
    # ═══════════════════════════════════════════════════════════

    def validate_slug(self, slug: str) -> str:
        """
        Acrescenta `separator + "1"` quando o slug é reservado

        A troca é feita uma única vez; o resultado não é conferido de novo
        contra a lista.
        """
        options = self.get_sluggable_config()
        reserved = options.reserved

        if reserved is None:
            return slug

        if callable(reserved):
            reserved = reserved(self)
            if reserved is None:
                return slug

        if isinstance(reserved, (list, tuple, set, frozenset)):
            if slug in reserved:
                logger.debug(f"🚫 Slug reservado: {slug!r}")
                return f"{slug}{options.separator}1"
            return slug

        raise ConfigurationError(
            "Sluggable reserved is not None, a list, or a callable that returns a list."
        )

    # ═══════════════════════════════════════════════════════════
    # 5. UNICIDADE
    # ═══════════════════════════════════════════════════════════

    def make_slug_unique(self, slug: str, key: Optional[str] = None,
                         session: Optional[Session] = None) -> str:
        options = self.get_sluggable_config()
        if not options.unique:
            return slug

        separator = options.separator

        # Com cache, consulta o último incremento emitido em vez do banco.
        # ⚠️ Não é atômico entre processos e não enxerga slugs gravados
        # antes do cache existir.
        if options.use_cache:
            increment = sluggable_cache.get(slug)
            if increment is None:
                sluggable_cache.put(slug, 0, ttl=options.cache_ttl)
                return slug

            increment += 1
            sluggable_cache.put(slug, increment, ttl=options.cache_ttl)
            logger.debug(f"🔁 Cache: {slug!r} -> incremento {increment}")
            return f"{slug}{separator}{increment}"

        existing = self.get_existing_slugs(slug, key, session=session)

        # Está ok se:
        #   a) nenhum slug parecido existe
        #   b) o nosso slug não está na lista
        #   c) o nosso slug está na lista, mas é deste próprio registro
        own_key = self._slug_record_key()
        if (
            not existing
            or slug not in existing.values()
            or (own_key is not None and existing.get(own_key) == slug)
        ):
            return slug

        prefix_length = len(slug + separator)
        increment = max(parse_increment(value[prefix_length:]) for value in existing.values()) + 1

        logger.debug(f"🔁 Slug {slug!r} já existe ({len(existing)} parecidos), usando {increment}")
        return f"{slug}{separator}{increment}"

    def get_existing_slugs(self, slug: str, key: Optional[str] = None,
                           session: Optional[Session] = None) -> dict:
        """
        Busca os slugs que começam com `slug`

        Returns:
            dict chave primária -> slug
        """
        options = self.get_sluggable_config()
        cls = type(self)
        column = cls.slug_column(key, options)
        primary_key = cls._slug_primary_key()

        with _session_scope(session or object_session(self)) as db:
            with db.no_autoflush:
                query = db.query(primary_key, column).filter(column.startswith(slug, autoescape=True))
                query = cls._apply_trashed_scope(query, options)
                rows = query.all()

        return {row[0]: row[1] for row in rows}

    # ═══════════════════════════════════════════════════════════
    # 6. GRAVAÇÃO
    # ═══════════════════════════════════════════════════════════

    def set_slug(self, slug: str, key: Optional[str] = None):
        save_to = self.get_sluggable_config().save_to

        if key is None:
            setattr(self, save_to, slug)
        else:
            # Reatribui o dict para o SQLAlchemy detectar a mudança
            values = dict(getattr(self, save_to, None) or {})
            values[key] = slug
            setattr(self, save_to, values)

    def get_slug(self, locale: Optional[str] = None):
        value = getattr(self, self.get_sluggable_config().save_to, None)
        if locale is not None and isinstance(value, dict):
            return value.get(locale)
        return value

    # ═══════════════════════════════════════════════════════════
    # ORQUESTRAÇÃO
    # ═══════════════════════════════════════════════════════════

    def sluggify(self, force: bool = False, session: Optional[Session] = None):
        """
        Gera o slug de cada chave que precisa (ou de todas, com `force`)

        Args:
            force: ignora `needs_slugging`
            session: sessão usada na busca de slugs existentes (padrão:
                a sessão do próprio registro)

        Returns:
            O próprio registro
        """
        options = self.get_sluggable_config()

        def make_slug(key: Optional[str] = None):
            if force or self.needs_slugging(key):
                source = self.get_slug_source(key)
                slug = self.generate_slug(source)

                slug = self.validate_slug(slug)
                slug = self.make_slug_unique(slug, key, session=session)

                self.set_slug(slug, key)
                logger.debug(f"🏷️ {type(self).__name__} slug[{key or '-'}] = {slug!r}")

        if options.i18n_slug:
            save_to = options.save_to
            current = getattr(self, save_to, None)

            # Garante um dict (migra valor legado hstore/JSON)
            if current is None:
                setattr(self, save_to, {})
            elif not isinstance(current, dict):
                setattr(self, save_to, hstore_to_dict(current))

            locales = getattr(self, options.locale_source, None) or {}
            for key in list(locales.keys()):
                make_slug(key)
        else:
            make_slug()

        return self

    def resluggify(self, session: Optional[Session] = None):
        return self.sluggify(True, session=session)

    # ═══════════════════════════════════════════════════════════
    # CONSULTAS
    # ═══════════════════════════════════════════════════════════

    @classmethod
    def _slug_query(cls, db: Session, slug: str):
        options = cls.sluggable_options()
        query = db.query(cls).filter(cls.slug_column(options=options) == slug)
        return cls._apply_trashed_scope(query, options)

    @classmethod
    def get_by_slug(cls, db: Session, slug: str) -> list:
        """Todos os registros com exatamente este slug"""
        return cls._slug_query(db, slug).all()

    @classmethod
    def find_by_slug(cls, db: Session, slug: str):
        """Primeiro registro com exatamente este slug (ou None)"""
        return cls._slug_query(db, slug).first()
