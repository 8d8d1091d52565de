#!/usr/bin/env python3
"""
Script de Regeneração de Slugs
==============================
Gera (ou regenera, com --force) os slugs de todos os registros de um model.

Exemplo:
    python resluggify_all.py app.models:Post --force
"""

import argparse
import logging
import sys

from sluggable.core.config import validate_config
from sluggable.core.database import get_db_manager
from sluggable.core.log_config import configure_logging
from sluggable.core.maintenance import load_model, resluggify_model

logger = logging.getLogger(__name__)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Regenera os slugs de um model")
    parser.add_argument("model", help="caminho do model no formato 'pacote.modulo:Classe'")
    parser.add_argument("--force", action="store_true", help="regenera slugs já preenchidos")
    parser.add_argument("--batch-size", type=int, default=500)
    parser.add_argument("--log-level", default=None)
    args = parser.parse_args(argv)

    configure_logging(args.log_level)

    try:
        validate_config()
    except ValueError as e:
        logger.error(str(e))
        return 1

    try:
        model = load_model(args.model)
    except (ImportError, AttributeError, ValueError) as e:
        logger.error(f"❌ Model inválido: {e}")
        return 1

    with get_db_manager() as db:
        changed = resluggify_model(db, model, force=args.force, batch_size=args.batch_size)

    print(f"{changed} slugs atualizados em {model.__name__}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
