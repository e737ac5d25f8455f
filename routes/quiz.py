"""
Rotas de Quiz - BrainQuiz
=========================

Responsável por:
- Criar e editar quizzes
- Listar ativos, arquivados e excluídos
- Arquivar/desarquivar, excluir, restaurar e limpar a lixeira
"""

from flask import Blueprint, jsonify
from flask_login import current_user

from models.forms import QuizForm
from services import quizzes as quiz_service
from storage import get_store
from utils.decorators import admin_or_moderator_required, admin_required, approved_user_required
from utils.helpers import get_request_data

# Criar blueprint para rotas de quiz
quiz = Blueprint('quiz', __name__)


def _quiz_list(items):
    return jsonify({'success': True, 'quizzes': [item.to_dict() for item in items]})


@quiz.route('/quizzes')
@approved_user_required
def list_active():
    """Quizzes ativos"""
    return _quiz_list(quiz_service.list_active(get_store()))


@quiz.route('/quizzes/arquivados')
@admin_or_moderator_required
def list_archived():
    return _quiz_list(quiz_service.list_archived(get_store()))


@quiz.route('/quizzes/excluidos')
@admin_or_moderator_required
def list_deleted():
    return _quiz_list(quiz_service.list_deleted(get_store()))


@quiz.route('/quizzes', methods=['POST'])
@admin_or_moderator_required
def create():
    """Criar novo quiz"""
    form = QuizForm.from_json(get_request_data())
    new_quiz = quiz_service.create_quiz(get_store(), form, current_user)
    return jsonify({'success': True, 'message': 'Quiz criado com sucesso!', 'quiz': new_quiz.to_dict()}), 201


@quiz.route('/quizzes/<quiz_id>')
@approved_user_required
def view(quiz_id):
    quiz_obj = quiz_service.get_quiz(get_store(), quiz_id)
    return jsonify({'success': True, 'quiz': quiz_obj.to_dict()})


@quiz.route('/quizzes/<quiz_id>', methods=['PUT'])
@admin_or_moderator_required
def edit(quiz_id):
    """Editar quiz ativo"""
    form = QuizForm.from_json(get_request_data())
    quiz_obj = quiz_service.update_quiz(get_store(), quiz_id, form, current_user)
    return jsonify({'success': True, 'message': 'Quiz atualizado com sucesso!', 'quiz': quiz_obj.to_dict()})


@quiz.route('/quizzes/<quiz_id>/arquivar', methods=['PUT', 'POST'])
@admin_or_moderator_required
def archive(quiz_id):
    """Arquivar quiz"""
    quiz_obj = quiz_service.archive_quiz(get_store(), quiz_id, current_user)
    return jsonify({'success': True, 'message': 'Quiz arquivado com sucesso!', 'quiz': quiz_obj.to_dict()})


@quiz.route('/quizzes/<quiz_id>/desarquivar', methods=['PUT', 'POST'])
@admin_or_moderator_required
def unarchive(quiz_id):
    """Desarquivar quiz"""
    quiz_obj = quiz_service.unarchive_quiz(get_store(), quiz_id, current_user)
    return jsonify({'success': True, 'message': 'Quiz desarquivado com sucesso!', 'quiz': quiz_obj.to_dict()})


@quiz.route('/quizzes/<quiz_id>', methods=['DELETE'])
@admin_required
def delete(quiz_id):
    """Excluir quiz (vai para a lixeira)"""
    quiz_obj = quiz_service.delete_quiz(get_store(), quiz_id, current_user)
    return jsonify({'success': True, 'message': 'Quiz excluído com sucesso!', 'quiz': quiz_obj.to_dict()})


@quiz.route('/quizzes/<quiz_id>/restaurar', methods=['POST'])
@admin_required
def restore(quiz_id):
    """Restaurar quiz excluído"""
    quiz_obj = quiz_service.restore_quiz(get_store(), quiz_id, current_user)
    return jsonify({'success': True, 'message': 'Quiz restaurado com sucesso!', 'quiz': quiz_obj.to_dict()})


@quiz.route('/quizzes/<quiz_id>/definitivo', methods=['DELETE'])
@admin_required
def purge(quiz_id):
    """Excluir definitivamente um quiz da lixeira"""
    quiz_service.purge_quiz(get_store(), quiz_id, current_user)
    return jsonify({'success': True, 'message': 'Quiz excluído definitivamente'})


@quiz.route('/quizzes/lixeira', methods=['DELETE'])
@admin_required
def purge_all():
    """Esvaziar a lixeira"""
    total = quiz_service.purge_all(get_store(), current_user)
    return jsonify({'success': True, 'message': f'{total} quiz(zes) removido(s) da lixeira', 'removidos': total})
