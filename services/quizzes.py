"""
Ciclo de Vida dos Quizzes - BrainQuiz
=====================================

ativo <-> arquivado, {ativo, arquivado} -> excluído (lixeira),
excluído -> ativo (restaurar), excluído -> removido (limpar lixeira).

Cada estado é uma coleção; um quiz está sempre em exatamente uma delas.
"""

import logging

from models import Quiz
from services.lifecycle import transfer
from utils.errors import Forbidden, NotFound
from utils.helpers import generate_id, utc_now_iso

logger = logging.getLogger(__name__)

QUIZ_NOT_FOUND = 'Quiz não encontrado'


def _require_editor(actor):
    if not actor.can_create_quiz:
        raise Forbidden('Acesso negado. Esta ação é restrita a administradores e moderadores.')


def _require_admin(actor):
    if not actor.can_manage_all_quizzes:
        raise Forbidden('Acesso negado. Esta ação é restrita a administradores.')


def list_active(store):
    return store.quizzes.list()


def list_archived(store):
    return store.archived_quizzes.list()


def list_deleted(store):
    return store.deleted_quizzes.list()


def get_quiz(store, quiz_id):
    return store.quizzes.get_or_404(quiz_id, QUIZ_NOT_FOUND)


def create_quiz(store, form, actor):
    """Cria quiz na coleção de ativos"""
    _require_editor(actor)

    quiz = Quiz(
        id=generate_id(),
        name=form.name,
        questions=form.questions,
        description=form.description,
        category=form.category,
        created_by=actor.username,
        created_at=utc_now_iso(),
    )
    store.quizzes.insert(quiz)

    logger.info("Quiz %s (%s) criado por %s com %d questões",
                quiz.id, quiz.name, actor.username, quiz.question_count)
    return quiz


def update_quiz(store, quiz_id, form, actor):
    """Edita um quiz ativo"""
    _require_editor(actor)

    with store.lock:
        quiz = store.quizzes.get_or_404(quiz_id, QUIZ_NOT_FOUND)
        quiz.name = form.name
        quiz.questions = form.questions
        quiz.description = form.description
        quiz.category = form.category
        quiz.updated_at = utc_now_iso()
        store.quizzes.update(quiz)

    logger.info("Quiz %s atualizado por %s", quiz.id, actor.username)
    return quiz


def archive_quiz(store, quiz_id, actor):
    """Ativo -> arquivado"""
    _require_editor(actor)

    with store.lock:
        quiz = store.quizzes.get_or_404(quiz_id, QUIZ_NOT_FOUND)
        quiz.archive(actor.username, utc_now_iso())
        return transfer(store, quiz, store.quizzes, store.archived_quizzes, 'arquivar quiz')


def unarchive_quiz(store, quiz_id, actor):
    """Arquivado -> ativo, sem carimbo de arquivamento"""
    _require_editor(actor)

    with store.lock:
        quiz = store.archived_quizzes.get_or_404(quiz_id, QUIZ_NOT_FOUND)
        quiz.unarchive()
        return transfer(store, quiz, store.archived_quizzes, store.quizzes, 'desarquivar quiz')


def delete_quiz(store, quiz_id, actor):
    """Ativo ou arquivado -> lixeira (procura primeiro nos ativos)"""
    _require_admin(actor)

    with store.lock:
        source = store.quizzes
        quiz = source.find(quiz_id)
        if quiz is None:
            source = store.archived_quizzes
            quiz = source.find(quiz_id)
        if quiz is None:
            raise NotFound(QUIZ_NOT_FOUND)

        quiz.soft_delete(actor.username, utc_now_iso())
        return transfer(store, quiz, source, store.deleted_quizzes, 'excluir quiz')


def restore_quiz(store, quiz_id, actor):
    """Lixeira -> ativo"""
    _require_admin(actor)

    with store.lock:
        quiz = store.deleted_quizzes.get_or_404(quiz_id, QUIZ_NOT_FOUND)
        quiz.restore()
        return transfer(store, quiz, store.deleted_quizzes, store.quizzes, 'restaurar quiz')


def purge_quiz(store, quiz_id, actor):
    """Remove definitivamente um quiz da lixeira"""
    _require_admin(actor)

    removed = store.deleted_quizzes.remove(quiz_id)
    if removed is None:
        raise NotFound(QUIZ_NOT_FOUND)

    logger.warning("Quiz %s (%s) excluído definitivamente por %s",
                   removed.id, removed.name, actor.username)
    return removed


def purge_all(store, actor):
    """Esvazia a lixeira. Irreversível."""
    _require_admin(actor)

    total = store.deleted_quizzes.clear()
    logger.warning("Lixeira de quizzes esvaziada por %s (%d removido(s))", actor.username, total)
    return total
