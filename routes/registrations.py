"""
Rotas de Cadastros Pendentes - BrainQuiz
========================================

Aprovação e rejeição de cadastros por administradores e moderadores.
"""

from flask import Blueprint, jsonify
from flask_login import current_user

from services import registrations as registration_service
from storage import get_store
from utils.decorators import admin_or_moderator_required
from utils.errors import ValidationError
from utils.helpers import get_request_data

# Criar blueprint para rotas de cadastros
registrations = Blueprint('registrations', __name__)


@registrations.route('/cadastros')
@registrations.route('/cadastros-pendentes')
@admin_or_moderator_required
def pending():
    """Lista de cadastros pendentes de aprovação"""
    pending_list = registration_service.list_pending(get_store())
    return jsonify({
        'success': True,
        'cadastros': [registration.to_public_dict() for registration in pending_list]
    })


@registrations.route('/cadastros/<registration_id>/aprovar', methods=['POST'])
@admin_or_moderator_required
def approve(registration_id):
    """Aprovar cadastro pendente"""
    user = registration_service.approve_registration(get_store(), registration_id, current_user)
    return jsonify({
        'success': True,
        'message': f'Usuário {user.full_name} aprovado com sucesso!',
        'usuario': user.to_public_dict()
    })


@registrations.route('/cadastros/aprovar-lote', methods=['POST'])
@admin_or_moderator_required
def bulk_approve():
    """Aprovar múltiplos cadastros de uma vez"""
    ids = get_request_data().get('ids')
    if not isinstance(ids, list) or not ids or not all(isinstance(item, str) for item in ids):
        raise ValidationError('Nenhum cadastro selecionado.')

    approved, failed = registration_service.approve_many(get_store(), ids, current_user)
    return jsonify({
        'success': not failed,
        'message': f'{len(approved)} usuário(s) aprovado(s) com sucesso!',
        'aprovados': [user.id for user in approved],
        'falhas': failed
    })


@registrations.route('/cadastros/<registration_id>', methods=['DELETE'])
@registrations.route('/cadastros/<registration_id>/rejeitar', methods=['POST'])
@admin_or_moderator_required
def reject(registration_id):
    """Rejeitar e remover cadastro pendente"""
    reason = get_request_data().get('motivo')
    registration = registration_service.reject_registration(
        get_store(), registration_id, current_user, reason=reason
    )
    return jsonify({
        'success': True,
        'message': f'Cadastro de {registration.full_name} rejeitado e removido.'
    })
