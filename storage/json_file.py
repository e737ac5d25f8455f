"""
Coleções em Arquivo JSON - BrainQuiz
====================================

Cada coleção é um array JSON legível (indent=2) num arquivo próprio.
Toda leitura-modificação-escrita de um arquivo passa pelo lock desse
arquivo; a gravação vai para um temporário no mesmo diretório e é
movida para o lugar com os.replace.
"""

import json
import logging
import os
import tempfile
import threading

from storage.base import Repository
from utils.errors import StorageError

logger = logging.getLogger(__name__)


class JsonFileRepository(Repository):

    def __init__(self, name, model, path):
        super().__init__(name, model)
        self.path = path
        self._lock = threading.RLock()

    def ensure_file(self):
        """Cria o arquivo vazio ('[]') se ainda não existir"""
        with self._lock:
            if os.path.exists(self.path):
                return False
            self._write([])
            logger.info("Arquivo %s criado", os.path.basename(self.path))
            return True

    def _read(self):
        if not os.path.exists(self.path):
            return []
        try:
            with open(self.path, encoding='utf-8') as fp:
                data = json.load(fp)
        except (OSError, ValueError) as e:
            logger.error("Erro ao ler %s: %s", self.path, e)
            raise StorageError(f'Erro ao ler a coleção {self.name}') from e
        if not isinstance(data, list):
            logger.error("Conteúdo de %s não é um array JSON", self.path)
            raise StorageError(f'Coleção {self.name} corrompida')
        return data

    def _write(self, items):
        directory = os.path.dirname(self.path) or '.'
        try:
            fd, tmp_path = tempfile.mkstemp(prefix='.tmp-', suffix='.json', dir=directory)
            try:
                with os.fdopen(fd, 'w', encoding='utf-8') as fp:
                    json.dump(items, fp, indent=2, ensure_ascii=False)
                os.replace(tmp_path, self.path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.remove(tmp_path)
                raise
        except OSError as e:
            logger.error("Erro ao salvar %s: %s", self.path, e)
            raise StorageError(f'Erro ao salvar a coleção {self.name}') from e

    def _load(self):
        with self._lock:
            return self._read()

    def _append(self, data):
        with self._lock:
            items = self._read()
            items.append(data)
            self._write(items)

    def _replace(self, record_id, data):
        with self._lock:
            items = self._read()
            for index, item in enumerate(items):
                if item.get('id') == record_id:
                    items[index] = data
                    self._write(items)
                    return True
            return False

    def _delete(self, record_id):
        with self._lock:
            items = self._read()
            for index, item in enumerate(items):
                if item.get('id') == record_id:
                    removed = items.pop(index)
                    self._write(items)
                    return removed
            return None

    def _truncate(self):
        with self._lock:
            items = self._read()
            if items:
                self._write([])
            return len(items)
