import pytest

from app import create_app
from models import User, ROLE_MODERATOR, ROLE_STUDENT, STATUS_APPROVED
from storage import get_store
from utils.helpers import generate_id, utc_now_iso

ADMIN_PASSWORD = 'admin123'
DEFAULT_PASSWORD = 'senha123'

QUESTIONS = [
    {'pergunta': 'Quanto é 2 + 2?', 'alternativas': ['3', '4', '5'], 'correta': 1},
    {'pergunta': 'Capital do Brasil?', 'alternativas': ['Brasília', 'Rio'], 'correta': 0},
]


@pytest.fixture
def app(tmp_path):
    app = create_app({
        'TESTING': True,
        'SECRET_KEY': 'test-secret',
        'STORAGE_BACKEND': 'json',
        'SQLALCHEMY_DATABASE_URI': 'sqlite://',
        'DATA_DIR': str(tmp_path / 'data'),
        'ADMIN_USERNAME': 'admin',
        'ADMIN_PASSWORD': ADMIN_PASSWORD,
        'ADMIN_EMAIL': 'admin@brainquiz.com',
        'LOG_LEVEL': 'WARNING',
    })
    yield app


@pytest.fixture
def store(app):
    # Sem contexto aberto durante o teste: cada requisição do client cria o seu
    with app.app_context():
        return get_store()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin(store):
    return store.users.find_by(usuario='admin')


def make_user(store, username, user_type=ROLE_STUDENT, password=DEFAULT_PASSWORD, active=True):
    """Usuário já aprovado gravado direto na coleção"""
    user = User(
        id=generate_id(),
        username=username,
        password_hash='',
        first_name=username.capitalize(),
        last_name='Teste',
        email=f'{username}@example.com',
        user_type=user_type,
        status=STATUS_APPROVED,
        active=active,
        created_at=utc_now_iso(),
    )
    user.set_password(password)
    store.users.insert(user)
    return user


@pytest.fixture
def moderator(store):
    return make_user(store, 'moderador1', ROLE_MODERATOR)


@pytest.fixture
def student(store):
    return make_user(store, 'aluno1', ROLE_STUDENT)


def login(client, username, password=DEFAULT_PASSWORD):
    return client.post('/api/login', json={'usuario': username, 'senha': password})


@pytest.fixture
def admin_client(app, admin):
    client = app.test_client()
    response = login(client, 'admin', ADMIN_PASSWORD)
    assert response.status_code == 200
    return client


@pytest.fixture
def moderator_client(app, moderator):
    client = app.test_client()
    assert login(client, moderator.username).status_code == 200
    return client


@pytest.fixture
def student_client(app, student):
    client = app.test_client()
    assert login(client, student.username).status_code == 200
    return client
