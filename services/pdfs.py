"""
Ciclo de Vida dos PDFs - BrainQuiz
==================================

Bloqueio: livre <-> bloqueado, alterado no próprio registro.
Exclusão: ativo -> excluído, sem volta.
"""

import base64
import binascii
import logging

from models import Pdf
from services.lifecycle import transfer
from utils.errors import Forbidden, InternalError, ValidationError
from utils.helpers import format_file_size, generate_id, is_pdf, sanitize_filename, utc_now_iso

logger = logging.getLogger(__name__)

PDF_NOT_FOUND = 'PDF não encontrado'


def _require_editor(actor):
    if not actor.can_create_quiz:
        raise Forbidden('Acesso negado. Apenas administradores e moderadores enviam PDFs.')


def _require_admin(actor):
    if not actor.is_admin:
        raise Forbidden('Acesso negado. Esta ação é restrita a administradores.')


def list_pdfs(store):
    return store.pdfs.list()


def list_deleted(store):
    return store.deleted_pdfs.list()


def upload_pdf(store, upload, actor, max_size):
    """
    Grava um PDF enviado

    Args:
        upload (PdfUpload): arquivo recebido
        actor (User): quem está enviando
        max_size (int): limite em bytes (PDF_MAX_SIZE)
    """
    _require_editor(actor)

    if not upload.content:
        raise ValidationError('Arquivo vazio')
    if len(upload.content) > max_size:
        raise ValidationError(f'Arquivo excede o limite de {format_file_size(max_size)}')
    if not is_pdf(upload.filename, upload.mimetype, upload.content):
        raise ValidationError('Apenas arquivos PDF são permitidos')

    encoded = base64.b64encode(upload.content).decode('ascii')
    pdf = Pdf(
        id=generate_id(),
        name=sanitize_filename(upload.filename),
        data=f'data:application/pdf;base64,{encoded}',
        size=len(upload.content),
        locked=False,
        uploaded_by=actor.username,
        uploaded_at=utc_now_iso(),
    )
    store.pdfs.insert(pdf)

    logger.info("PDF %s (%s, %s) enviado por %s",
                pdf.id, pdf.name, format_file_size(pdf.size), actor.username)
    return pdf


def set_lock(store, pdf_id, locked, actor):
    _require_admin(actor)

    with store.lock:
        pdf = store.pdfs.get_or_404(pdf_id, PDF_NOT_FOUND)
        pdf.locked = bool(locked)
        store.pdfs.update(pdf)

    logger.info("PDF %s %s por %s", pdf.id, 'bloqueado' if pdf.locked else 'desbloqueado', actor.username)
    return pdf


def toggle_lock(store, pdf_id, actor):
    _require_admin(actor)

    with store.lock:
        pdf = store.pdfs.get_or_404(pdf_id, PDF_NOT_FOUND)
        pdf.toggle_lock()
        store.pdfs.update(pdf)

    logger.info("PDF %s %s por %s", pdf.id, 'bloqueado' if pdf.locked else 'desbloqueado', actor.username)
    return pdf


def get_download(store, pdf_id):
    """
    Conteúdo do PDF para download

    Returns:
        tuple: (Pdf, bytes)
    """
    pdf = store.pdfs.get_or_404(pdf_id, PDF_NOT_FOUND)
    if pdf.locked:
        raise Forbidden('Este PDF está bloqueado para download. Entre em contato com um administrador.')

    payload = pdf.data.split(',', 1)[-1]
    try:
        return pdf, base64.b64decode(payload)
    except (binascii.Error, ValueError) as e:
        logger.error("PDF %s com conteúdo inválido: %s", pdf.id, e)
        raise InternalError('Conteúdo do PDF corrompido') from e


def delete_pdf(store, pdf_id, actor):
    """Ativo -> excluído"""
    _require_admin(actor)

    with store.lock:
        pdf = store.pdfs.get_or_404(pdf_id, PDF_NOT_FOUND)
        pdf.soft_delete(actor.username, utc_now_iso())
        return transfer(store, pdf, store.pdfs, store.deleted_pdfs, 'excluir pdf')
