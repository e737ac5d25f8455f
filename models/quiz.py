"""
Modelo de Quizzes - BrainQuiz
=============================

Define a estrutura dos quizzes. O estado (ativo, arquivado, excluído)
não é um campo: é a coleção onde o quiz está gravado. O modelo só
carimba e limpa as datas de cada transição.
"""


class Quiz:

    def __init__(self, id, name, questions=None, description='', category='', created_by=None,
                 created_at=None, updated_at=None, archived_at=None, archived_by=None,
                 deleted_at=None, deleted_by=None):
        self.id = id
        self.name = name
        self.questions = list(questions or [])
        self.description = description or ''
        self.category = category or ''
        self.created_by = created_by
        self.created_at = created_at
        self.updated_at = updated_at
        self.archived_at = archived_at
        self.archived_by = archived_by
        self.deleted_at = deleted_at
        self.deleted_by = deleted_by

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=data['id'],
            name=data.get('nome', ''),
            questions=data.get('perguntas', []),
            description=data.get('descricao', ''),
            category=data.get('categoria', ''),
            created_by=data.get('criadoPor'),
            created_at=data.get('criadoEm'),
            updated_at=data.get('modificadoEm'),
            archived_at=data.get('arquivadoEm'),
            archived_by=data.get('arquivadoPor'),
            deleted_at=data.get('excluidoEm'),
            deleted_by=data.get('excluidoPor'),
        )

    def to_dict(self):
        data = {
            'id': self.id,
            'nome': self.name,
            'descricao': self.description,
            'categoria': self.category,
            'perguntas': self.questions,
            'criadoPor': self.created_by,
            'criadoEm': self.created_at,
        }
        # Carimbos opcionais só aparecem enquanto valem
        stamps = {
            'modificadoEm': self.updated_at,
            'arquivadoEm': self.archived_at,
            'arquivadoPor': self.archived_by,
            'excluidoEm': self.deleted_at,
            'excluidoPor': self.deleted_by,
        }
        data.update({key: value for key, value in stamps.items() if value is not None})
        return data

    @property
    def question_count(self):
        """Número de questões do quiz"""
        return len(self.questions)

    def archive(self, actor_id, when):
        """Carimba o arquivamento"""
        self.archived_at = when
        self.archived_by = actor_id

    def unarchive(self):
        """Remove o carimbo de arquivamento"""
        self.archived_at = None
        self.archived_by = None

    def soft_delete(self, actor_id, when):
        """Carimba a exclusão (lixeira)"""
        self.deleted_at = when
        self.deleted_by = actor_id

    def restore(self):
        """Limpa exclusão e arquivamento: o quiz volta como ativo"""
        self.deleted_at = None
        self.deleted_by = None
        self.unarchive()

    def __repr__(self):
        return f'<Quiz {self.name}>'
