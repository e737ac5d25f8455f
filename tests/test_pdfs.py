import base64
from io import BytesIO

import pytest

from models.forms import PdfUpload
from services import pdfs
from utils.errors import Forbidden, ValidationError

PDF_BYTES = b'%PDF-1.4\n1 0 obj <<>> endobj\ntrailer <<>>\n%%EOF\n'
MAX_SIZE = 10 * 1024 * 1024


def _upload(content=PDF_BYTES, filename='apostila.pdf', mimetype='application/pdf'):
    return PdfUpload(filename=filename, mimetype=mimetype, content=content)


def test_upload_stores_data_url(store, moderator):
    pdf = pdfs.upload_pdf(store, _upload(), moderator, MAX_SIZE)

    stored = store.pdfs.find(pdf.id)
    assert stored.data.startswith('data:application/pdf;base64,')
    assert stored.size == len(PDF_BYTES)
    assert stored.locked is False
    assert stored.uploaded_by == moderator.username


def test_upload_rejects_non_pdf_and_oversized(store, admin):
    with pytest.raises(ValidationError):
        pdfs.upload_pdf(store, _upload(content=b'texto qualquer'), admin, MAX_SIZE)
    with pytest.raises(ValidationError):
        pdfs.upload_pdf(store, _upload(filename='foto.png', mimetype='image/png'), admin, MAX_SIZE)
    with pytest.raises(ValidationError):
        pdfs.upload_pdf(store, _upload(content=b''), admin, MAX_SIZE)
    with pytest.raises(ValidationError):
        pdfs.upload_pdf(store, _upload(), admin, 10)
    assert store.pdfs.list() == []


def test_student_cannot_upload(store, student):
    with pytest.raises(Forbidden):
        pdfs.upload_pdf(store, _upload(), student, MAX_SIZE)


def test_toggle_twice_restores_state(store, admin):
    pdf = pdfs.upload_pdf(store, _upload(), admin, MAX_SIZE)

    assert pdfs.toggle_lock(store, pdf.id, admin).locked is True
    assert store.pdfs.find(pdf.id).locked is True
    assert pdfs.toggle_lock(store, pdf.id, admin).locked is False
    assert store.pdfs.find(pdf.id).locked is False


def test_moderator_cannot_lock(store, admin, moderator):
    pdf = pdfs.upload_pdf(store, _upload(), admin, MAX_SIZE)
    with pytest.raises(Forbidden):
        pdfs.toggle_lock(store, pdf.id, moderator)


def test_locked_pdf_cannot_be_downloaded(store, admin):
    pdf = pdfs.upload_pdf(store, _upload(), admin, MAX_SIZE)
    assert pdfs.get_download(store, pdf.id)[1] == PDF_BYTES

    pdfs.set_lock(store, pdf.id, True, admin)
    with pytest.raises(Forbidden):
        pdfs.get_download(store, pdf.id)


def test_delete_moves_to_deleted(store, admin):
    pdf = pdfs.upload_pdf(store, _upload(), admin, MAX_SIZE)
    pdfs.delete_pdf(store, pdf.id, admin)

    assert pdfs.list_pdfs(store) == []
    deleted = pdfs.list_deleted(store)
    assert [item.id for item in deleted] == [pdf.id]
    assert deleted[0].deleted_at


def test_json_upload_accepts_data_url_and_plain_base64():
    encoded = base64.b64encode(PDF_BYTES).decode('ascii')

    from_data_url = PdfUpload.from_json({'nome': 'a.pdf', 'dados': f'data:application/pdf;base64,{encoded}'})
    assert from_data_url.content == PDF_BYTES
    assert from_data_url.mimetype == 'application/pdf'

    assert PdfUpload.from_json({'nome': 'a.pdf', 'dados': encoded}).content == PDF_BYTES

    with pytest.raises(ValidationError):
        PdfUpload.from_json({'nome': 'a.pdf', 'dados': 'não é base64!'})


# HTTP

def _post_pdf(client, filename='apostila.pdf', content=PDF_BYTES):
    return client.post(
        '/api/pdfs',
        data={'pdf': (BytesIO(content), filename)},
        content_type='multipart/form-data'
    )


def test_upload_and_download_over_http(admin_client, student_client):
    response = _post_pdf(admin_client)
    assert response.status_code == 201
    pdf = response.get_json()['pdf']
    assert 'dados' not in pdf

    listed = student_client.get('/api/pdfs').get_json()['pdfs']
    assert [item['id'] for item in listed] == [pdf['id']]
    assert 'dados' not in listed[0]

    download = student_client.get(f"/api/pdfs/{pdf['id']}/download")
    assert download.status_code == 200
    assert download.data == PDF_BYTES
    assert download.mimetype == 'application/pdf'


def test_json_upload_alias(moderator_client):
    encoded = base64.b64encode(PDF_BYTES).decode('ascii')
    response = moderator_client.post('/api/upload-pdf', json={'nome': 'resumo.pdf', 'dados': encoded})
    assert response.status_code == 201
    assert response.get_json()['pdf']['nome'] == 'resumo.pdf'


def test_toggle_lock_over_http(admin_client, student_client):
    pdf_id = _post_pdf(admin_client).get_json()['pdf']['id']

    response = admin_client.put(f'/api/pdfs/{pdf_id}/toggle-lock')
    assert response.get_json()['pdf']['bloqueado'] is True
    assert student_client.get(f'/api/pdfs/{pdf_id}/download').status_code == 403

    response = admin_client.patch(f'/api/pdfs/{pdf_id}/bloqueio', json={'bloqueado': False})
    assert response.get_json()['pdf']['bloqueado'] is False
    assert student_client.get(f'/api/pdfs/{pdf_id}/download').status_code == 200


def test_lock_requires_boolean(admin_client):
    pdf_id = _post_pdf(admin_client).get_json()['pdf']['id']
    response = admin_client.patch(f'/api/pdfs/{pdf_id}/bloqueio', json={'bloqueado': 'sim'})
    assert response.status_code == 400


def test_non_pdf_upload_over_http(admin_client):
    response = _post_pdf(admin_client, filename='nota.txt', content=b'ola')
    assert response.status_code == 400
    assert response.get_json()['success'] is False


def test_delete_over_http(admin_client, moderator_client):
    pdf_id = _post_pdf(admin_client).get_json()['pdf']['id']

    assert moderator_client.delete(f'/api/pdfs/{pdf_id}').status_code == 403
    assert admin_client.delete(f'/api/pdfs/{pdf_id}').status_code == 200
    assert admin_client.get('/api/pdfs').get_json()['pdfs'] == []
    assert len(admin_client.get('/api/pdfs/excluidos').get_json()['pdfs']) == 1


def test_lock_rejects_non_object_body(admin_client):
    pdf_id = _post_pdf(admin_client).get_json()['pdf']['id']
    assert admin_client.patch(f'/api/pdfs/{pdf_id}/bloqueio', json=[True]).status_code == 400
