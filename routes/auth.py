"""
Rotas de Autenticação - BrainQuiz
=================================

Responsável por:
- Login (cookie de sessão + token de acesso)
- Logout
- Cadastro com aprovação pendente
- Usuário autenticado atual
- Verificação de disponibilidade de username/email
"""

from flask import Blueprint, jsonify
from flask_login import current_user, login_required, login_user, logout_user

from models.forms import LoginForm, RegistrationForm
from services import registrations, users
from storage import get_store
from utils.decorators import approved_user_required
from utils.helpers import get_request_data, parse_bool, validate_email, validate_username
from utils.tokens import generate_token

# Criar blueprint para rotas de autenticação
auth = Blueprint('auth', __name__)


@auth.route('/login', methods=['POST'])
def login():
    """Login por username ou email"""
    data = get_request_data()
    form = LoginForm.from_json(data)
    user = users.authenticate(get_store(), form)

    login_user(user, remember=parse_bool(data.get('lembrar')))

    return jsonify({
        'success': True,
        'message': f'Bem-vindo, {user.full_name}!',
        'token': generate_token(user),
        'usuario': user.to_public_dict()
    })


@auth.route('/logout', methods=['POST'])
@login_required
def logout():
    """Logout do usuário"""
    user_name = current_user.full_name
    logout_user()
    return jsonify({'success': True, 'message': f'Até logo, {user_name}!'})


@auth.route('/cadastro', methods=['POST'])
def register():
    """Cadastro de novo usuário (fica pendente de aprovação)"""
    form = RegistrationForm.from_json(get_request_data())
    registration = registrations.submit_registration(get_store(), form)

    return jsonify({
        'success': True,
        'message': 'Cadastro realizado com sucesso! Aguarde a aprovação de um administrador.',
        'cadastro': registration.to_public_dict()
    }), 201


@auth.route('/usuario')
@approved_user_required
def current():
    """Usuário autenticado atual"""
    return jsonify({'success': True, 'usuario': current_user.to_public_dict()})


@auth.route('/check_username', methods=['POST'])
def check_username():
    """API para verificar disponibilidade do username"""
    username = str(get_request_data().get('usuario', '')).strip()

    is_valid, message = validate_username(username)
    if not is_valid:
        return jsonify({'available': False, 'message': message})

    exists = registrations.username_taken(get_store(), username)

    return jsonify({
        'available': not exists,
        'message': 'Username já está em uso' if exists else 'Username disponível'
    })


@auth.route('/check_email', methods=['POST'])
def check_email():
    """API para verificar disponibilidade do email"""
    email = str(get_request_data().get('email', '')).strip().lower()

    if not email:
        return jsonify({'available': False, 'message': 'Email não informado'})

    if not validate_email(email):
        return jsonify({'available': False, 'message': 'Formato de email inválido'})

    exists = registrations.email_taken(get_store(), email)

    return jsonify({
        'available': not exists,
        'message': 'Email já está cadastrado' if exists else 'Email disponível'
    })


# Login, cadastro e usuário atual também na raiz, sem o prefixo /api
auth_root = Blueprint('auth_root', __name__)
auth_root.add_url_rule('/login', view_func=login, methods=['POST'])
auth_root.add_url_rule('/cadastro', view_func=register, methods=['POST'])
auth_root.add_url_rule('/usuario', view_func=current)
