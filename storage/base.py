"""
Interface de Repositório - BrainQuiz
====================================

Uma coleção de entidades de um mesmo tipo. As implementações trabalham
com dicionários; a conversão para o modelo (from_dict/to_dict) é feita
aqui para que o backend (arquivo JSON ou banco) seja trocável sem mexer
nas regras de ciclo de vida.
"""

from utils.errors import NotFound


class Repository:
    """Coleção tipada com list/find/insert/update/remove"""

    def __init__(self, name, model):
        self.name = name
        self.model = model

    # Backend: cada implementação fornece estes quatro
    def _load(self):
        raise NotImplementedError

    def _append(self, data):
        raise NotImplementedError

    def _replace(self, record_id, data):
        """Substitui o registro; devolve False se não existir"""
        raise NotImplementedError

    def _delete(self, record_id):
        """Remove e devolve o dicionário removido (ou None)"""
        raise NotImplementedError

    def _truncate(self):
        """Esvazia a coleção e devolve quantos registros havia"""
        raise NotImplementedError

    # API pública
    def list(self):
        return [self.model.from_dict(item) for item in self._load()]

    def count(self):
        return len(self._load())

    def find(self, record_id):
        for item in self._load():
            if item.get('id') == record_id:
                return self.model.from_dict(item)
        return None

    def get_or_404(self, record_id, message=None):
        record = self.find(record_id)
        if record is None:
            raise NotFound(message)
        return record

    def find_by(self, **fields):
        """Primeiro registro cujas chaves JSON batem com todos os valores"""
        for item in self._load():
            if all(item.get(key) == value for key, value in fields.items()):
                return self.model.from_dict(item)
        return None

    def insert(self, record):
        self._append(record.to_dict())
        return record

    def update(self, record):
        if not self._replace(record.id, record.to_dict()):
            raise NotFound()
        return record

    def remove(self, record_id):
        data = self._delete(record_id)
        return self.model.from_dict(data) if data is not None else None

    def clear(self):
        return self._truncate()

    def __repr__(self):
        return f'<{type(self).__name__} {self.name}>'
