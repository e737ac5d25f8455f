"""
Decoradores de Permissão - BrainQuiz
====================================

Decoradores para controlar acesso às rotas baseado no tipo de usuário:
- approved_user_required: Qualquer usuário autenticado e aprovado
- admin_or_moderator_required: Administradores ou moderadores
- admin_required: Apenas administradores

Sem usuário autenticado a rota falha com Unauthorized (401); com
usuário sem permissão, Forbidden (403).
"""

from functools import wraps

from flask_login import current_user

from utils.errors import Forbidden, Unauthorized


def _authenticated_principal():
    if not current_user.is_authenticated:
        raise Unauthorized('Você precisa fazer login para acessar este recurso.')
    if not current_user.is_approved:
        raise Forbidden('Sua conta ainda não foi aprovada.')
    return current_user


def approved_user_required(f):
    """
    Decorador que exige usuário aprovado (qualquer tipo)
    Uso: @approved_user_required
    """

    @wraps(f)
    def decorated_function(*args, **kwargs):
        _authenticated_principal()
        return f(*args, **kwargs)

    return decorated_function


def admin_or_moderator_required(f):
    """
    Decorador que exige usuário administrador ou moderador
    Uso: @admin_or_moderator_required
    """

    @wraps(f)
    def decorated_function(*args, **kwargs):
        user = _authenticated_principal()
        if not (user.is_admin or user.is_moderator):
            raise Forbidden('Acesso negado. Esta área é restrita a administradores e moderadores.')
        return f(*args, **kwargs)

    return decorated_function


def admin_required(f):
    """
    Decorador que exige usuário administrador
    Uso: @admin_required
    """

    @wraps(f)
    def decorated_function(*args, **kwargs):
        user = _authenticated_principal()
        if not user.is_admin:
            raise Forbidden('Acesso negado. Esta área é restrita a administradores.')
        return f(*args, **kwargs)

    return decorated_function
