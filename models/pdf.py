"""
Modelo de PDFs - BrainQuiz
==========================

Material de apoio enviado por moderadores e administradores. O arquivo
fica embutido no próprio registro como data URL em base64.
"""


class Pdf:

    def __init__(self, id, name, data, size=0, locked=False, uploaded_by=None, uploaded_at=None,
                 deleted_at=None, deleted_by=None):
        self.id = id
        self.name = name
        self.data = data
        self.size = size
        self.locked = locked
        self.uploaded_by = uploaded_by
        self.uploaded_at = uploaded_at
        self.deleted_at = deleted_at
        self.deleted_by = deleted_by

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=data['id'],
            name=data.get('nome', ''),
            data=data.get('dados', ''),
            size=data.get('tamanho', 0),
            locked=data.get('bloqueado', False),
            uploaded_by=data.get('uploadedBy'),
            uploaded_at=data.get('uploadedAt'),
            deleted_at=data.get('excluidoEm'),
            deleted_by=data.get('excluidoPor'),
        )

    def to_dict(self, include_data=True):
        data = {
            'id': self.id,
            'nome': self.name,
            'tamanho': self.size,
            'bloqueado': self.locked,
            'uploadedBy': self.uploaded_by,
            'uploadedAt': self.uploaded_at,
        }
        if include_data:
            data['dados'] = self.data
        if self.deleted_at:
            data['excluidoEm'] = self.deleted_at
            data['excluidoPor'] = self.deleted_by
        return data

    def toggle_lock(self):
        """Alterna o bloqueio e devolve o novo estado"""
        self.locked = not self.locked
        return self.locked

    def soft_delete(self, actor_id, when):
        self.deleted_at = when
        self.deleted_by = actor_id

    def __repr__(self):
        return f'<Pdf {self.name} ({"bloqueado" if self.locked else "livre"})>'
