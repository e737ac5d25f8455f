"""
Modelo de Usuários - BrainQuiz
==============================

Define a estrutura dos usuários e suas permissões:
- Administrador: Controle total do sistema
- Moderador: Criar/editar quizzes, aprovar cadastros
- Aluno: Jogar quizzes

O mesmo formato é usado para cadastros pendentes (status 'pendente')
e usuários aprovados (status 'aprovado'). A coleção onde o registro
está gravado é quem define em qual estado ele se encontra.
"""

from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash

ROLE_STUDENT = 'aluno'
ROLE_MODERATOR = 'moderador'
ROLE_ADMIN = 'administrador'
ROLES = (ROLE_STUDENT, ROLE_MODERATOR, ROLE_ADMIN)

STATUS_PENDING = 'pendente'
STATUS_APPROVED = 'aprovado'


class User(UserMixin):
    """
    Usuário do sistema BrainQuiz
    Herda de UserMixin para compatibilidade com Flask-Login
    """

    def __init__(self, id, username, password_hash, first_name, email, last_name='', phone='',
                 user_type=ROLE_STUDENT, status=STATUS_PENDING, active=True, created_at=None,
                 last_login=None, approved_at=None, approved_by=None, updated_at=None, photo=None):
        self.id = id
        self.username = username
        self.password_hash = password_hash
        self.first_name = first_name
        self.last_name = last_name or ''
        self.email = email
        self.phone = phone or ''
        self.user_type = user_type
        self.status = status
        self.active = active
        self.created_at = created_at
        self.last_login = last_login
        self.approved_at = approved_at
        self.approved_by = approved_by
        self.updated_at = updated_at
        self.photo = photo

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=data['id'],
            username=data['usuario'],
            password_hash=data.get('senha', ''),
            first_name=data.get('nome', ''),
            last_name=data.get('sobrenome', ''),
            email=data.get('email', ''),
            phone=data.get('telefone', ''),
            user_type=data.get('tipo', ROLE_STUDENT),
            status=data.get('status', STATUS_PENDING),
            active=data.get('ativo', True),
            created_at=data.get('criadoEm'),
            last_login=data.get('ultimoLogin'),
            approved_at=data.get('aprovadoEm'),
            approved_by=data.get('aprovadoPor'),
            updated_at=data.get('modificadoEm'),
            photo=data.get('fotoBase64'),
        )

    def to_dict(self, include_password=True):
        """Formato persistido (e devolvido pela API, sem a senha)"""
        data = {
            'id': self.id,
            'usuario': self.username,
            'nome': self.first_name,
            'sobrenome': self.last_name,
            'email': self.email,
            'telefone': self.phone,
            'tipo': self.user_type,
            'status': self.status,
            'ativo': self.active,
            'criadoEm': self.created_at,
            'ultimoLogin': self.last_login,
        }
        if self.approved_at:
            data['aprovadoEm'] = self.approved_at
            data['aprovadoPor'] = self.approved_by
        if self.updated_at:
            data['modificadoEm'] = self.updated_at
        if self.photo:
            data['fotoBase64'] = self.photo
        if include_password:
            data['senha'] = self.password_hash
        return data

    def to_public_dict(self):
        return self.to_dict(include_password=False)

    def set_password(self, password):
        """Define nova senha usando hash seguro"""
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        """Verifica se a senha fornecida está correta"""
        if not self.password_hash:
            return False
        return check_password_hash(self.password_hash, password)

    @property
    def is_active(self):
        # Flask-Login recusa login_user() para contas inativas
        return bool(self.active)

    @property
    def full_name(self):
        """Retorna nome completo do usuário"""
        return f"{self.first_name} {self.last_name}".strip()

    # Propriedades de verificação de tipo de usuário
    @property
    def is_admin(self):
        return self.user_type == ROLE_ADMIN

    @property
    def is_moderator(self):
        return self.user_type == ROLE_MODERATOR

    @property
    def is_student(self):
        return self.user_type == ROLE_STUDENT

    @property
    def is_pending(self):
        return self.status == STATUS_PENDING

    @property
    def is_approved(self):
        return self.status == STATUS_APPROVED

    # Propriedades de permissões
    @property
    def can_create_quiz(self):
        """Verifica se pode criar quizzes"""
        return self.user_type in [ROLE_ADMIN, ROLE_MODERATOR]

    @property
    def can_approve_users(self):
        """Verifica se pode aprovar cadastros pendentes"""
        return self.user_type in [ROLE_ADMIN, ROLE_MODERATOR]

    @property
    def can_manage_all_quizzes(self):
        """Verifica se pode excluir/restaurar quizzes e bloquear PDFs"""
        return self.user_type == ROLE_ADMIN

    @property
    def can_promote_users(self):
        """Verifica se pode alterar o tipo de outros usuários"""
        return self.user_type == ROLE_ADMIN

    def get_user_type_display(self):
        """Retorna o tipo de usuário por extenso"""
        types = {
            ROLE_ADMIN: 'Administrador',
            ROLE_MODERATOR: 'Moderador',
            ROLE_STUDENT: 'Aluno'
        }
        return types.get(self.user_type, 'Desconhecido')

    def approve(self, actor_id, when):
        """Converte o cadastro pendente em usuário aprovado e ativo"""
        self.status = STATUS_APPROVED
        self.active = True
        self.approved_at = when
        self.approved_by = actor_id

    def __repr__(self):
        return f'<User {self.username} ({self.user_type}, {self.status})>'
