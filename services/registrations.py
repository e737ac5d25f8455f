"""
Ciclo de Vida dos Cadastros - BrainQuiz
=======================================

pendente -> aprovado (vira usuário) | rejeitado (removido sem rastro)

Um mesmo usuário/email nunca está ao mesmo tempo em usuarios e em
cadastros_pendentes: o cadastro só entra se ambos estiverem livres nas
duas coleções, e a aprovação move o registro de uma para a outra.
"""

import logging

from models import User, ROLE_STUDENT, STATUS_PENDING
from services.lifecycle import transfer
from utils.errors import AppError, Conflict, Forbidden
from utils.helpers import generate_id, utc_now_iso

logger = logging.getLogger(__name__)


def _same_email(a, b):
    return (a or '').strip().lower() == (b or '').strip().lower()


def username_taken(store, username, exclude_id=None, repositories=None):
    """Verifica se o username já existe em usuários ou cadastros pendentes"""
    for repository in repositories or (store.users, store.pending):
        for user in repository.list():
            if user.username == username and user.id != exclude_id:
                return True
    return False


def email_taken(store, email, exclude_id=None, repositories=None):
    """Verifica se o email já existe (sem diferenciar maiúsculas)"""
    for repository in repositories or (store.users, store.pending):
        for user in repository.list():
            if _same_email(user.email, email) and user.id != exclude_id:
                return True
    return False


def _require_approver(actor):
    if not actor.can_approve_users:
        raise Forbidden('Acesso negado. Apenas administradores e moderadores gerenciam cadastros.')


def list_pending(store):
    return store.pending.list()


def submit_registration(store, form):
    """
    Grava um novo cadastro pendente

    Args:
        form (RegistrationForm): dados já validados

    Returns:
        User: cadastro criado (status 'pendente')
    """
    with store.lock:
        if username_taken(store, form.username) or email_taken(store, form.email):
            raise Conflict('Usuário ou email já cadastrado')

        registration = User(
            id=generate_id(),
            username=form.username,
            password_hash='',
            first_name=form.first_name,
            last_name=form.last_name,
            email=form.email,
            phone=form.phone,
            photo=form.photo or None,
            user_type=ROLE_STUDENT,  # Por padrão, novos usuários são alunos
            status=STATUS_PENDING,
            active=False,
            created_at=utc_now_iso(),
        )
        registration.set_password(form.password)
        store.pending.insert(registration)

    logger.info("Novo cadastro pendente: %s", registration.username)
    return registration


def approve_registration(store, registration_id, actor):
    """Aprova o cadastro: insere em usuarios e só então remove dos pendentes"""
    _require_approver(actor)

    with store.lock:
        registration = store.pending.get_or_404(registration_id, 'Cadastro não encontrado')

        # O mesmo usuário pode ter sido criado por outro caminho nesse meio tempo
        approved = (store.users,)
        if (username_taken(store, registration.username, repositories=approved) or
                email_taken(store, registration.email, repositories=approved)):
            raise Conflict('Já existe um usuário aprovado com este username ou email')

        registration.approve(actor.id, utc_now_iso())
        transfer(store, registration, store.pending, store.users, 'aprovar cadastro')

    logger.info("Cadastro de %s aprovado por %s", registration.username, actor.username)
    return registration


def approve_many(store, registration_ids, actor):
    """
    Aprova vários cadastros de uma vez

    Returns:
        tuple: (lista de usuários aprovados, lista de {id, message} com falhas)
    """
    _require_approver(actor)

    approved, failed = [], []
    for registration_id in registration_ids:
        try:
            approved.append(approve_registration(store, registration_id, actor))
        except AppError as e:
            failed.append({'id': registration_id, 'message': e.message})

    logger.info("Aprovação em lote por %s: %d aprovado(s), %d falha(s)",
                actor.username, len(approved), len(failed))
    return approved, failed


def reject_registration(store, registration_id, actor, reason=None):
    """Rejeita e remove o cadastro; só fica a linha de auditoria no log"""
    _require_approver(actor)

    with store.lock:
        registration = store.pending.get_or_404(registration_id, 'Cadastro não encontrado')
        store.pending.remove(registration.id)

    logger.info("Cadastro de %s rejeitado por %s. Motivo: %s",
                registration.username, actor.username, reason or 'não informado')
    return registration
