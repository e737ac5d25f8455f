import pytest

from app import create_app
from conftest import ADMIN_PASSWORD, QUESTIONS, login
from storage import SqlRepository, get_store


@pytest.fixture
def sql_app(tmp_path):
    return create_app({
        'TESTING': True,
        'SECRET_KEY': 'test-secret',
        'STORAGE_BACKEND': 'sql',
        'SQLALCHEMY_DATABASE_URI': 'sqlite://',
        'DATA_DIR': str(tmp_path / 'nao-usado'),
        'ADMIN_PASSWORD': ADMIN_PASSWORD,
        'LOG_LEVEL': 'WARNING',
    })


def test_store_uses_database(sql_app, tmp_path):
    with sql_app.app_context():
        store = get_store()
        assert isinstance(store.users, SqlRepository)
        assert store.users.find_by(usuario='admin').is_admin
    assert not (tmp_path / 'nao-usado').exists()


def test_lifecycle_on_database(sql_app):
    client = sql_app.test_client()
    assert login(client, 'admin', ADMIN_PASSWORD).status_code == 200

    registration_id = client.post('/api/cadastro', json={
        'usuario': 'ana', 'senha': 'abcdef', 'nome': 'Ana', 'email': 'a@x.com'
    }).get_json()['cadastro']['id']
    assert client.post(f'/api/cadastros/{registration_id}/aprovar').status_code == 200
    assert client.get('/api/cadastros').get_json()['cadastros'] == []

    quiz_id = client.post('/api/quizzes', json={'nome': 'Q1', 'perguntas': QUESTIONS}).get_json()['quiz']['id']
    client.put(f'/api/quizzes/{quiz_id}/arquivar')
    client.delete(f'/api/quizzes/{quiz_id}')

    summary = client.get('/api/dashboard').get_json()
    assert summary['totalUsuarios'] == 2
    assert summary['totalQuizzes'] == 0
    assert summary['totalArquivados'] == 0
    assert summary['totalExcluidos'] == 1

    assert client.delete('/api/quizzes/lixeira').get_json()['removidos'] == 1


def test_invalid_backend_is_rejected(tmp_path):
    with pytest.raises(ValueError):
        create_app({
            'STORAGE_BACKEND': 'mongo',
            'SQLALCHEMY_DATABASE_URI': 'sqlite://',
            'DATA_DIR': str(tmp_path),
        })
