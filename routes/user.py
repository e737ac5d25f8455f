"""
Rotas de Usuários - BrainQuiz
=============================

Responsável por:
- Listagem de usuários aprovados
- Edição e exclusão (administradores e moderadores)
- Ativação/desativação de contas
- Promoção/rebaixamento de usuários (administradores)
- Exportação CSV
"""

import csv
from io import StringIO

from flask import Blueprint, jsonify, make_response
from flask_login import current_user

from models.forms import UserUpdateForm
from services import users as user_service
from storage import get_store
from utils.decorators import admin_or_moderator_required, admin_required, approved_user_required
from utils.errors import ValidationError
from utils.helpers import format_datetime, get_request_data

# Criar blueprint para rotas de usuário
user = Blueprint('user', __name__)


@user.route('/usuarios')
@approved_user_required
def list_users():
    """Usuários aprovados (sem senha)"""
    users = get_store().users.list()
    return jsonify({'success': True, 'usuarios': [u.to_public_dict() for u in users]})


@user.route('/usuarios/<user_id>', methods=['PUT'])
@admin_or_moderator_required
def edit_user(user_id):
    """Editar dados de um usuário"""
    form = UserUpdateForm.from_json(get_request_data())
    target = user_service.update_user(get_store(), user_id, form, current_user)
    return jsonify({
        'success': True,
        'message': 'Usuário atualizado com sucesso',
        'usuario': target.to_public_dict()
    })


@user.route('/usuarios/<user_id>/status', methods=['PATCH'])
@admin_or_moderator_required
def set_status(user_id):
    """Ativar/desativar usuário"""
    active = get_request_data().get('ativo')
    if not isinstance(active, bool):
        raise ValidationError('Campo "ativo" deve ser true ou false')

    target = user_service.set_active(get_store(), user_id, active, current_user)
    action = 'ativado' if target.active else 'desativado'
    return jsonify({
        'success': True,
        'message': f'{target.full_name} {action} com sucesso!',
        'usuario': target.to_public_dict()
    })


@user.route('/usuarios/<user_id>/tipo', methods=['PUT'])
@admin_required
def change_type(user_id):
    """Promover/rebaixar usuário"""
    role = get_request_data().get('tipo')
    target = user_service.change_role(get_store(), user_id, role, current_user)
    return jsonify({
        'success': True,
        'message': f'{target.full_name} agora é {target.get_user_type_display()}!',
        'usuario': target.to_public_dict()
    })


@user.route('/usuarios/<user_id>', methods=['DELETE'])
@admin_or_moderator_required
def delete_user(user_id):
    """Excluir usuário"""
    target = user_service.delete_user(get_store(), user_id, current_user)
    return jsonify({'success': True, 'message': f'Usuário {target.full_name} excluído com sucesso.'})


@user.route('/usuarios/exportar')
@admin_required
def export_users():
    """Exportar lista de usuários (CSV)"""

    # Criar CSV em memória
    output = StringIO()
    writer = csv.writer(output)

    # Cabeçalho
    writer.writerow(['ID', 'Usuário', 'Nome', 'Email', 'Tipo', 'Ativo', 'Data Criação', 'Último Login'])

    for user_obj in get_store().users.list():
        writer.writerow([
            user_obj.id,
            user_obj.username,
            user_obj.full_name,
            user_obj.email,
            user_obj.get_user_type_display(),
            'Sim' if user_obj.active else 'Não',
            format_datetime(user_obj.created_at, 'full'),
            format_datetime(user_obj.last_login, 'full') if user_obj.last_login else '-'
        ])

    # Criar resposta
    response = make_response(output.getvalue())
    response.headers['Content-Type'] = 'text/csv; charset=utf-8'
    response.headers['Content-Disposition'] = 'attachment; filename=usuarios_brainquiz.csv'

    return response
