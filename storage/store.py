"""
Conjunto de Coleções - BrainQuiz
================================

Agrupa os repositórios de cada estado das entidades:
- users / pending: usuários aprovados e cadastros pendentes
- quizzes / archived_quizzes / deleted_quizzes: ativo, arquivado, lixeira
- pdfs / deleted_pdfs: ativo e excluído

O lock do Store serializa as transições que mexem em duas coleções.
"""

import logging
import os
import threading

from models import User, Quiz, Pdf
from storage.json_file import JsonFileRepository
from storage.sql import SqlRepository
from utils.errors import StorageError

logger = logging.getLogger(__name__)

# atributo -> (nome da coleção / arquivo, modelo)
COLLECTIONS = {
    'users': ('usuarios', User),
    'pending': ('cadastros_pendentes', User),
    'quizzes': ('quizzes', Quiz),
    'archived_quizzes': ('quizzes_arquivados', Quiz),
    'deleted_quizzes': ('quizzes_excluidos', Quiz),
    'pdfs': ('pdfs', Pdf),
    'deleted_pdfs': ('pdfs_excluidos', Pdf),
}


class Store:

    def __init__(self, repositories):
        self.repositories = dict(repositories)
        self.lock = threading.RLock()
        for attr, repository in self.repositories.items():
            setattr(self, attr, repository)

    @classmethod
    def from_json_dir(cls, data_dir):
        """Uma coleção por arquivo <nome>.json dentro de data_dir"""
        return cls({
            attr: JsonFileRepository(name, model, os.path.join(data_dir, f'{name}.json'))
            for attr, (name, model) in COLLECTIONS.items()
        })

    @classmethod
    def from_database(cls):
        return cls({attr: SqlRepository(name, model) for attr, (name, model) in COLLECTIONS.items()})

    def ensure_collections(self):
        """
        Cria os arquivos ausentes. Falhas são registradas e não impedem a
        inicialização: a coleção é lida como vazia enquanto não existir.
        """
        for repository in self.repositories.values():
            if not isinstance(repository, JsonFileRepository):
                continue
            try:
                repository.ensure_file()
            except StorageError:
                logger.exception("Não foi possível criar a coleção %s", repository.name)

    def counts(self):
        return {attr: repository.count() for attr, repository in self.repositories.items()}
