import pytest

from conftest import ADMIN_PASSWORD, DEFAULT_PASSWORD, login, make_user
from models import ROLE_ADMIN, ROLE_MODERATOR
from models.forms import UserUpdateForm
from services import users
from utils.errors import Conflict, Forbidden, ValidationError


def test_ensure_admin_user_is_idempotent(store, admin):
    assert admin.is_admin
    assert users.ensure_admin_user(store, 'admin', 'outra', 'x@x.com') is None
    assert store.users.count() == 1


def test_update_requires_confirmation_password(store, admin, student):
    form = UserUpdateForm.from_json({'senhaConfirmacao': 'errada', 'nome': 'Novo'})
    with pytest.raises(Forbidden):
        users.update_user(store, student.id, form, admin)

    with pytest.raises(ValidationError):
        UserUpdateForm.from_json({'nome': 'Novo'})


def test_update_changes_fields_and_password(store, admin, student):
    form = UserUpdateForm.from_json({
        'senhaConfirmacao': ADMIN_PASSWORD, 'nome': 'Joana', 'email': 'JOANA@x.com', 'senha': 'novasenha'
    })
    updated = users.update_user(store, student.id, form, admin)

    stored = store.users.find(student.id)
    assert stored.first_name == 'Joana'
    assert stored.email == 'joana@x.com'
    assert stored.check_password('novasenha')
    assert updated.updated_at


def test_update_rejects_taken_email(store, admin, student, moderator):
    form = UserUpdateForm.from_json({'senhaConfirmacao': ADMIN_PASSWORD, 'email': moderator.email})
    with pytest.raises(Conflict):
        users.update_user(store, student.id, form, admin)


def test_moderator_cannot_touch_admin(store, admin, moderator):
    form = UserUpdateForm.from_json({'senhaConfirmacao': DEFAULT_PASSWORD, 'nome': 'Hack'})
    with pytest.raises(Forbidden):
        users.update_user(store, admin.id, form, moderator)
    with pytest.raises(Forbidden):
        users.set_active(store, admin.id, False, moderator)
    with pytest.raises(Forbidden):
        users.delete_user(store, admin.id, moderator)


def test_nobody_acts_on_own_account(store, admin):
    with pytest.raises(Forbidden):
        users.set_active(store, admin.id, False, admin)
    with pytest.raises(Forbidden):
        users.change_role(store, admin.id, ROLE_MODERATOR, admin)
    with pytest.raises(Forbidden):
        users.delete_user(store, admin.id, admin)


def test_change_role(store, admin, student, moderator):
    assert users.change_role(store, student.id, ROLE_MODERATOR, admin).is_moderator
    with pytest.raises(ValidationError):
        users.change_role(store, student.id, 'superusuario', admin)
    with pytest.raises(Forbidden):
        users.change_role(store, student.id, ROLE_ADMIN, moderator)


def test_cannot_delete_another_admin(store, admin):
    other = make_user(store, 'chefe', ROLE_ADMIN)
    with pytest.raises(Forbidden):
        users.delete_user(store, other.id, admin)


def test_last_login_is_stamped(client, store, student):
    assert store.users.find(student.id).last_login is None
    login(client, student.username)
    assert store.users.find(student.id).last_login


# HTTP

def test_list_users_hides_passwords(student_client):
    body = student_client.get('/api/usuarios').get_json()
    assert {user['usuario'] for user in body['usuarios']} == {'admin', 'aluno1'}
    assert all('senha' not in user for user in body['usuarios'])


def test_deactivate_over_http(app, moderator_client, student):
    response = moderator_client.patch(f'/api/usuarios/{student.id}/status', json={'ativo': False})
    assert response.status_code == 200
    assert response.get_json()['usuario']['ativo'] is False

    assert login(app.test_client(), student.username).status_code == 401
    assert moderator_client.patch(f'/api/usuarios/{student.id}/status', json={'ativo': 'nao'}).status_code == 400


def test_edit_over_http(moderator_client, student):
    response = moderator_client.put(f'/api/usuarios/{student.id}', json={
        'senhaConfirmacao': DEFAULT_PASSWORD, 'telefone': '(11) 99999-0000'
    })
    assert response.status_code == 200
    assert response.get_json()['usuario']['telefone'] == '(11) 99999-0000'


def test_promote_over_http(admin_client, moderator_client, student):
    assert moderator_client.put(f'/api/usuarios/{student.id}/tipo', json={'tipo': 'moderador'}).status_code == 403

    response = admin_client.put(f'/api/usuarios/{student.id}/tipo', json={'tipo': 'moderador'})
    assert response.get_json()['usuario']['tipo'] == 'moderador'


def test_delete_over_http(admin_client, store, student):
    assert admin_client.delete(f'/api/usuarios/{student.id}').status_code == 200
    assert store.users.find(student.id) is None
    assert admin_client.delete(f'/api/usuarios/{student.id}').status_code == 404


def test_export_csv(admin_client, moderator_client, student):
    response = admin_client.get('/api/usuarios/exportar')
    assert response.status_code == 200
    assert response.mimetype == 'text/csv'
    lines = response.get_data(as_text=True).strip().splitlines()
    assert lines[0].startswith('ID,Usuário,Nome')
    assert len(lines) == 4  # cabeçalho + admin + moderador + aluno

    assert moderator_client.get('/api/usuarios/exportar').status_code == 403


def test_dashboard_is_scoped_by_role(admin_client, student_client):
    admin_view = admin_client.get('/api/dashboard').get_json()
    student_view = student_client.get('/api/dashboard').get_json()

    for view in (admin_view, student_view):
        assert view['intervaloAtualizacao'] == 300
        assert view['totalUsuarios'] == 2
        assert view['totalCadastros'] == 0
    assert 'cadastros' in admin_view
    assert 'pdfsExcluidos' in admin_view
    assert 'cadastros' not in student_view
    assert 'usuarios' not in student_view


def test_status_and_role_reject_non_object_body(admin_client, student):
    assert admin_client.patch(f'/api/usuarios/{student.id}/status', json=[True]).status_code == 400
    assert admin_client.put(f'/api/usuarios/{student.id}/tipo', json=['moderador']).status_code == 400
