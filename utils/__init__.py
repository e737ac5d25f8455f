"""
Utilitários do Sistema BrainQuiz
================================

Este módulo contém funções auxiliares e decoradores:
- decorators: Controle de permissões para rotas
- errors: Exceções convertidas em respostas JSON
- helpers: Funções auxiliares gerais (ids, datas, validação)
- tokens: Tokens de acesso assinados
"""

from .decorators import (
    admin_required,
    admin_or_moderator_required,
    approved_user_required
)

from .helpers import (
    generate_id,
    utc_now_iso,
    format_datetime,
    format_file_size,
    validate_email,
    validate_password,
    validate_registration_data,
    validate_quiz_data
)

# Lista de todas as funções disponíveis para import
__all__ = [
    # Decoradores de permissão
    'admin_required',
    'admin_or_moderator_required',
    'approved_user_required',

    # Funções auxiliares
    'generate_id',
    'utc_now_iso',
    'format_datetime',
    'format_file_size',
    'validate_email',
    'validate_password',
    'validate_registration_data',
    'validate_quiz_data'
]
