"""
Save hook
=========

Gera os slugs automaticamente antes de cada flush, para todo registro
novo ou alterado que use o SluggableMixin.

Uso:
    from sluggable import register_sluggable_listeners

    register_sluggable_listeners(SessionLocal)  # ou Session, ou uma sessão
"""

import logging

from sqlalchemy import event
from sqlalchemy.orm import Session

from sluggable.core.sluggable import SluggableMixin

logger = logging.getLogger(__name__)


def _sluggify_before_flush(session: Session, flush_context, instances):
    """Executado antes de cada flush da sessão"""
    pending = [
        obj for obj in list(session.new) + list(session.dirty)
        if isinstance(obj, SluggableMixin)
    ]

    for obj in pending:
        obj.sluggify(session=session)

    if pending:
        logger.debug(f"🏷️ before_flush: {len(pending)} registros verificados")


def register_sluggable_listeners(target=Session):
    """
    Registra o hook em uma Session, sessionmaker ou na classe Session

    Registrar duas vezes no mesmo alvo não duplica o hook.
    """
    if not event.contains(target, "before_flush", _sluggify_before_flush):
        event.listen(target, "before_flush", _sluggify_before_flush)
        logger.info(f"✅ Hook de slug registrado em {target!r}")


def unregister_sluggable_listeners(target=Session):
    if event.contains(target, "before_flush", _sluggify_before_flush):
        event.remove(target, "before_flush", _sluggify_before_flush)
