import logging
import sys
from typing import Optional

from sluggable.core.config import config

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(level: Optional[str] = None):
    """Configura o logging raiz no formato padrão (nível padrão: LOG_LEVEL)"""
    logging.basicConfig(
        level=(level or config.LOG_LEVEL).upper(),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True
    )
