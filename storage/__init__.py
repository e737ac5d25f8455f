"""
Armazenamento - BrainQuiz
=========================

- base: interface Repository
- json_file: coleções em arquivos JSON (padrão)
- sql: coleções numa tabela do banco (STORAGE_BACKEND=sql)
- store: Store com todas as coleções e o lock de transições
"""

import logging
import os

from flask import current_app

from .base import Repository
from .json_file import JsonFileRepository
from .sql import SqlRepository, StoredRecord
from .store import Store, COLLECTIONS

logger = logging.getLogger(__name__)

EXTENSION_KEY = 'brainquiz_store'


def init_store(app):
    """Cria o Store conforme STORAGE_BACKEND e o registra em app.extensions"""
    backend = app.config.get('STORAGE_BACKEND', 'json')

    if backend == 'sql':
        from extensions import db
        with app.app_context():
            db.create_all()
        store = Store.from_database()
    elif backend == 'json':
        data_dir = app.config['DATA_DIR']
        try:
            os.makedirs(data_dir, exist_ok=True)
        except OSError:
            logger.exception("Não foi possível criar o diretório de dados %s", data_dir)
        store = Store.from_json_dir(data_dir)
        store.ensure_collections()
    else:
        raise ValueError(f"STORAGE_BACKEND inválido: {backend!r} (use 'json' ou 'sql')")

    app.extensions[EXTENSION_KEY] = store
    logger.info("Armazenamento '%s' inicializado", backend)
    return store


def get_store():
    """Store da aplicação atual"""
    return current_app.extensions[EXTENSION_KEY]


__all__ = [
    'Repository',
    'JsonFileRepository',
    'SqlRepository',
    'StoredRecord',
    'Store',
    'COLLECTIONS',
    'init_store',
    'get_store'
]
