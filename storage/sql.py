"""
Coleções em Banco de Dados - BrainQuiz
======================================

Mesma interface de Repository sobre uma tabela única do Flask-SQLAlchemy:
cada linha guarda (coleção, id do registro, documento JSON). Ativado com
STORAGE_BACKEND=sql; as regras de ciclo de vida não mudam.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from extensions import db
from storage.base import Repository
from utils.errors import StorageError

logger = logging.getLogger(__name__)


class StoredRecord(db.Model):
    __tablename__ = 'stored_records'
    __table_args__ = (db.UniqueConstraint('collection', 'record_id', name='uq_collection_record'),)

    id = db.Column(db.Integer, primary_key=True)
    collection = db.Column(db.String(50), nullable=False, index=True)
    record_id = db.Column(db.String(64), nullable=False)
    data = db.Column(db.JSON, nullable=False)

    def __repr__(self):
        return f'<StoredRecord {self.collection}/{self.record_id}>'


class SqlRepository(Repository):

    def _query(self):
        return StoredRecord.query.filter_by(collection=self.name)

    def _row(self, record_id):
        return self._query().filter_by(record_id=record_id).first()

    def _commit(self, action):
        try:
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error("Erro ao %s em %s: %s", action, self.name, e)
            raise StorageError(f'Erro ao salvar a coleção {self.name}') from e

    def _load(self):
        try:
            return [row.data for row in self._query().order_by(StoredRecord.id).all()]
        except SQLAlchemyError as e:
            logger.error("Erro ao ler %s: %s", self.name, e)
            raise StorageError(f'Erro ao ler a coleção {self.name}') from e

    def find(self, record_id):
        row = self._row(record_id)
        return self.model.from_dict(row.data) if row else None

    def _append(self, data):
        db.session.add(StoredRecord(collection=self.name, record_id=data['id'], data=data))
        self._commit('inserir')

    def _replace(self, record_id, data):
        row = self._row(record_id)
        if row is None:
            return False
        row.data = data
        self._commit('atualizar')
        return True

    def _delete(self, record_id):
        row = self._row(record_id)
        if row is None:
            return None
        removed = dict(row.data)
        db.session.delete(row)
        self._commit('remover')
        return removed

    def _truncate(self):
        total = self._query().delete()
        self._commit('esvaziar')
        return total
