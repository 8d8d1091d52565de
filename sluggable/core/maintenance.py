"""
Manutenção de slugs
===================
Regeneração em massa dos slugs de um model.
"""

import importlib
import logging

from sqlalchemy.orm import Session

from sluggable.core.sluggable import SluggableMixin

logger = logging.getLogger(__name__)


def load_model(path: str) -> type:
    """
    Importa um model a partir de "pacote.modulo:Classe"

    Raises:
        ValueError: caminho mal formado ou classe sem SluggableMixin
    """
    module_name, _, class_name = path.partition(":")
    if not module_name or not class_name:
        raise ValueError(f"Use o formato 'pacote.modulo:Classe' (recebido: {path!r})")

    model = getattr(importlib.import_module(module_name), class_name)
    if not (isinstance(model, type) and issubclass(model, SluggableMixin)):
        raise ValueError(f"{path} não usa SluggableMixin")
    return model


def resluggify_model(db: Session, model: type, force: bool = False, batch_size: int = 500) -> int:
    """
    Percorre todos os registros do model gerando os slugs

    Args:
        db: sessão de escrita
        model: classe com SluggableMixin
        force: regenera mesmo slugs já preenchidos
        batch_size: commit a cada N registros

    Returns:
        Número de registros cujo slug mudou
    """
    primary_key = model._slug_primary_key()
    changed = 0
    processed = 0
    last_key = None

    while True:
        query = db.query(model).order_by(primary_key)
        if last_key is not None:
            query = query.filter(primary_key > last_key)
        batch = query.limit(batch_size).all()
        if not batch:
            break

        for record in batch:
            before = record.get_slug()
            record.sluggify(force=force, session=db)
            # Flush por registro: o próximo precisa enxergar este slug
            db.flush()
            if record.get_slug() != before:
                changed += 1

        processed += len(batch)
        last_key = batch[-1]._slug_record_key()
        db.commit()
        logger.info(f"📦 {model.__name__}: {processed} processados, {changed} alterados")

    logger.info(f"✅ {model.__name__}: regeneração concluída ({changed}/{processed})")
    return changed
