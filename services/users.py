"""
Usuários - BrainQuiz
====================

Autenticação e administração de usuários aprovados:
- login por username ou email
- edição, ativação/desativação, troca de tipo e exclusão
- criação do administrador padrão
"""

import logging

from models import User, ROLES, ROLE_ADMIN, STATUS_APPROVED
from services.registrations import email_taken
from utils.errors import Conflict, Forbidden, Unauthorized, ValidationError
from utils.helpers import generate_id, utc_now_iso

logger = logging.getLogger(__name__)

USER_NOT_FOUND = 'Usuário não encontrado'


def _find_by_login(repository, identifier):
    """Busca por username ou email"""
    email = identifier.lower()
    for user in repository.list():
        if user.username == identifier or user.email.lower() == email:
            return user
    return None


def _require_manager(actor):
    if not actor.can_approve_users:
        raise Forbidden('Acesso negado. Esta área é restrita a administradores e moderadores.')


def _check_target(actor, target, action):
    """Regras comuns: ninguém age sobre si mesmo; moderador não age sobre administrador"""
    if target.id == actor.id:
        raise Forbidden(f'Você não pode {action} a sua própria conta.')
    if target.is_admin and not actor.is_admin:
        raise Forbidden(f'Moderadores não podem {action} administradores.')


def authenticate(store, form):
    """
    Confere as credenciais e carimba o último login

    Raises:
        Forbidden: cadastro ainda pendente de aprovação
        Unauthorized: usuário inexistente, inativo ou senha incorreta
    """
    with store.lock:
        user = _find_by_login(store.users, form.username)

        if user is None:
            pending = _find_by_login(store.pending, form.username)
            if pending is not None and pending.check_password(form.password):
                raise Forbidden('Sua conta ainda não foi aprovada. Aguarde a aprovação de um administrador.')
            raise Unauthorized('Usuário ou senha incorretos')

        if not user.check_password(form.password):
            raise Unauthorized('Usuário ou senha incorretos')

        if not user.active:
            raise Unauthorized('Usuário inativo. Entre em contato com um administrador.')

        user.last_login = utc_now_iso()
        store.users.update(user)

    logger.info("Login de %s", user.username)
    return user


def load_principal(store, user_id):
    """Usuário ativo e aprovado com este id, ou None"""
    user = store.users.find(user_id)
    if user is None or not user.active or not user.is_approved:
        return None
    return user


def update_user(store, user_id, form, actor):
    """Edita dados pessoais; exige a senha de quem está editando"""
    _require_manager(actor)

    if not actor.check_password(form.confirmation_password):
        raise Forbidden('Senha de confirmação incorreta')

    with store.lock:
        target = store.users.get_or_404(user_id, USER_NOT_FOUND)
        if target.is_admin and not actor.is_admin and target.id != actor.id:
            raise Forbidden('Moderadores não podem editar administradores.')

        changes = form.changes
        if 'email' in changes and email_taken(store, changes['email'], exclude_id=target.id):
            raise Conflict('Este email já está em uso')

        target.first_name = changes.get('nome', target.first_name)
        target.last_name = changes.get('sobrenome', target.last_name)
        target.email = changes.get('email', target.email)
        target.phone = changes.get('telefone', target.phone)
        if form.new_password:
            target.set_password(form.new_password)
        target.updated_at = utc_now_iso()
        store.users.update(target)

    logger.info("Usuário %s atualizado por %s", target.username, actor.username)
    return target


def set_active(store, user_id, active, actor):
    """Ativa ou desativa a conta"""
    _require_manager(actor)

    with store.lock:
        target = store.users.get_or_404(user_id, USER_NOT_FOUND)
        _check_target(actor, target, 'alterar o status de')
        target.active = bool(active)
        target.updated_at = utc_now_iso()
        store.users.update(target)

    logger.info("Usuário %s %s por %s",
                target.username, 'ativado' if target.active else 'desativado', actor.username)
    return target


def change_role(store, user_id, role, actor):
    """Promove/rebaixa usuário (apenas administradores)"""
    if not actor.can_promote_users:
        raise Forbidden('Acesso negado. Apenas administradores alteram o tipo de usuário.')
    if role not in ROLES:
        raise ValidationError(f'Tipo inválido. Use: {", ".join(ROLES)}')

    with store.lock:
        target = store.users.get_or_404(user_id, USER_NOT_FOUND)
        if target.id == actor.id:
            raise Forbidden('Você não pode alterar seu próprio tipo de usuário.')
        previous = target.user_type
        target.user_type = role
        target.updated_at = utc_now_iso()
        store.users.update(target)

    logger.info("Usuário %s: %s -> %s por %s", target.username, previous, role, actor.username)
    return target


def delete_user(store, user_id, actor):
    _require_manager(actor)

    with store.lock:
        target = store.users.get_or_404(user_id, USER_NOT_FOUND)
        if target.id == actor.id:
            raise Forbidden('Você não pode excluir sua própria conta.')
        if target.is_admin:
            raise Forbidden('Não é possível excluir outro administrador.')
        store.users.remove(target.id)

    logger.info("Usuário %s excluído por %s", target.username, actor.username)
    return target


def ensure_admin_user(store, username, password, email):
    """Cria usuário administrador padrão se não existir"""
    with store.lock:
        if store.users.find_by(usuario=username) is not None:
            return None

        admin = User(
            id=generate_id(),
            username=username,
            password_hash='',
            first_name='Administrador',
            last_name='BrainQuiz',
            email=email,
            user_type=ROLE_ADMIN,
            status=STATUS_APPROVED,
            active=True,
            created_at=utc_now_iso(),
        )
        admin.set_password(password)
        store.users.insert(admin)

    logger.warning("Usuário administrador '%s' criado. Altere a senha após o primeiro login!", username)
    return admin
