"""
Rotas de PDFs - BrainQuiz
=========================

Responsável por:
- Envio de PDFs (multipart ou JSON em base64)
- Download (recusado enquanto bloqueado)
- Bloqueio/desbloqueio e exclusão (administradores)
"""

from io import BytesIO

from flask import Blueprint, current_app, jsonify, request, send_file
from flask_login import current_user

from models.forms import PdfUpload
from services import pdfs as pdf_service
from storage import get_store
from utils.decorators import admin_or_moderator_required, admin_required, approved_user_required
from utils.errors import ValidationError
from utils.helpers import get_request_data

# Criar blueprint para rotas de PDF
pdf = Blueprint('pdf', __name__)


def _pdf_list(items):
    # Listagens não carregam o conteúdo em base64
    return jsonify({'success': True, 'pdfs': [item.to_dict(include_data=False) for item in items]})


@pdf.route('/pdfs')
@approved_user_required
def list_pdfs():
    return _pdf_list(pdf_service.list_pdfs(get_store()))


@pdf.route('/pdfs/excluidos')
@admin_required
def list_deleted():
    return _pdf_list(pdf_service.list_deleted(get_store()))


@pdf.route('/pdfs', methods=['POST'])
@pdf.route('/upload-pdf', methods=['POST'])
@admin_or_moderator_required
def upload():
    """Enviar PDF (campo 'pdf' no multipart, ou JSON {nome, dados})"""
    if 'pdf' in request.files:
        upload_data = PdfUpload.from_file(request.files['pdf'])
    else:
        upload_data = PdfUpload.from_json(get_request_data())

    new_pdf = pdf_service.upload_pdf(
        get_store(), upload_data, current_user, current_app.config['PDF_MAX_SIZE']
    )
    return jsonify({
        'success': True,
        'message': 'PDF enviado com sucesso',
        'pdf': new_pdf.to_dict(include_data=False)
    }), 201


@pdf.route('/pdfs/<pdf_id>/download')
@approved_user_required
def download(pdf_id):
    pdf_obj, content = pdf_service.get_download(get_store(), pdf_id)
    return send_file(
        BytesIO(content),
        mimetype='application/pdf',
        as_attachment=True,
        download_name=pdf_obj.name
    )


@pdf.route('/pdfs/<pdf_id>/toggle-lock', methods=['PUT'])
@admin_required
def toggle_lock(pdf_id):
    pdf_obj = pdf_service.toggle_lock(get_store(), pdf_id, current_user)
    return _lock_response(pdf_obj)


@pdf.route('/pdfs/<pdf_id>/bloqueio', methods=['PATCH'])
@admin_required
def set_lock(pdf_id):
    locked = get_request_data().get('bloqueado')
    if not isinstance(locked, bool):
        raise ValidationError('Campo "bloqueado" deve ser true ou false')

    pdf_obj = pdf_service.set_lock(get_store(), pdf_id, locked, current_user)
    return _lock_response(pdf_obj)


def _lock_response(pdf_obj):
    action = 'bloqueado' if pdf_obj.locked else 'desbloqueado'
    return jsonify({
        'success': True,
        'message': f'PDF {action} com sucesso',
        'pdf': pdf_obj.to_dict(include_data=False)
    })


@pdf.route('/pdfs/<pdf_id>', methods=['DELETE'])
@admin_required
def delete(pdf_id):
    pdf_service.delete_pdf(get_store(), pdf_id, current_user)
    return jsonify({'success': True, 'message': 'PDF excluído com sucesso'})
