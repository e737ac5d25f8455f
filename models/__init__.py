"""
Modelos - BrainQuiz
===================

Este módulo contém as entidades gravadas nas coleções JSON:
- User: Usuários e cadastros pendentes (Administrador, Moderador, Aluno)
- Quiz: Quizzes ativos, arquivados e excluídos
- Pdf: Materiais em PDF, com bloqueio de download
"""

from .user import (
    User, ROLES, ROLE_ADMIN, ROLE_MODERATOR, ROLE_STUDENT, STATUS_APPROVED, STATUS_PENDING
)
from .quiz import Quiz
from .pdf import Pdf

__all__ = [
    'User',
    'Quiz',
    'Pdf',
    'ROLES',
    'ROLE_ADMIN',
    'ROLE_MODERATOR',
    'ROLE_STUDENT',
    'STATUS_APPROVED',
    'STATUS_PENDING'
]
