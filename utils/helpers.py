"""
Funções Auxiliares - BrainQuiz
==============================

Funções utilitárias para:
- Geração de ids e carimbos de data
- Validação de dados de cadastro, usuário, quiz e PDF
- Formatação de datas e tamanhos
"""

import re
import uuid
from datetime import datetime, timezone

from flask import request
from werkzeug.utils import secure_filename

from utils.errors import ValidationError

USERNAME_PATTERN = re.compile(r'^[a-zA-Z0-9_.-]+$')
EMAIL_PATTERN = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')
PHONE_PATTERN = re.compile(r'^[\d\s\-\(\)\+]+$')
PHOTO_PATTERN = re.compile(r'^data:image/[\w.+-]+;base64,[A-Za-z0-9+/=\s]+$')

PDF_MAGIC = b'%PDF-'


def generate_id():
    """Gera id único para um registro"""
    return uuid.uuid4().hex


def utc_now_iso():
    """Data/hora atual em UTC no formato ISO 8601"""
    return datetime.now(timezone.utc).isoformat()


def parse_datetime(value):
    """Converte texto ISO 8601 em datetime (None se inválido)"""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except (TypeError, ValueError):
        return None


def format_datetime(value, format_type='full'):
    """
    Formata data/hora para exibição

    Args:
        value (str | datetime): Data/hora (ISO 8601 ou datetime)
        format_type (str): 'full', 'date', 'time', 'short'

    Returns:
        str: Data formatada
    """
    dt = value if isinstance(value, datetime) else parse_datetime(value)
    if not dt:
        return 'Data não informada'

    if format_type == 'full':
        return dt.strftime('%d/%m/%Y às %H:%M')
    elif format_type == 'date':
        return dt.strftime('%d/%m/%Y')
    elif format_type == 'time':
        return dt.strftime('%H:%M')
    elif format_type == 'short':
        return dt.strftime('%d/%m às %H:%M')
    else:
        return str(dt)


def format_file_size(size_bytes):
    """Tamanho em formato legível (ex: "1.5 MB")"""
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KB"
    return f"{size_bytes / (1024 * 1024):.1f} MB"


def validate_email(email):
    if not email:
        return False
    return EMAIL_PATTERN.match(email) is not None


def validate_password(password):
    """
    Valida a senha

    Returns:
        tuple: (bool, str) - (é_válida, mensagem)
    """
    if not password:
        return False, "Senha é obrigatória"

    if len(password) < 6:
        return False, "Senha deve ter pelo menos 6 caracteres"

    if len(password) > 128:
        return False, "Senha muito longa"

    return True, "Senha válida"


def validate_username(username):
    """
    Valida o nome de usuário

    Returns:
        tuple: (bool, str) - (é_válido, mensagem)
    """
    if not username:
        return False, 'Nome de usuário é obrigatório'
    if len(username) < 3:
        return False, 'Nome de usuário deve ter pelo menos 3 caracteres'
    if len(username) > 80:
        return False, 'Nome de usuário muito longo'
    if not USERNAME_PATTERN.match(username):
        return False, 'Nome de usuário deve conter apenas letras, números, ponto, hífen e underscore'
    return True, 'Nome de usuário válido'


def validate_registration_data(data):
    """
    Valida dados de cadastro

    Args:
        data (dict): Campos já normalizados (usuario, senha, nome, email, ...)

    Returns:
        tuple: (bool, list) - (é_válido, lista_de_erros)
    """
    errors = []

    if not all([data.get('usuario'), data.get('senha'), data.get('nome'), data.get('email')]):
        errors.append('Campos obrigatórios: usuário, senha, nome e email')

    if data.get('usuario'):
        is_valid, message = validate_username(data['usuario'])
        if not is_valid:
            errors.append(message)

    if data.get('senha'):
        is_valid, message = validate_password(data['senha'])
        if not is_valid:
            errors.append(message)

    if data.get('email') and not validate_email(data['email']):
        errors.append('Formato de email inválido')

    if data.get('nome') and len(data['nome']) > 50:
        errors.append('Nome muito longo (máximo 50 caracteres)')
    if data.get('sobrenome') and len(data['sobrenome']) > 50:
        errors.append('Sobrenome muito longo (máximo 50 caracteres)')

    if data.get('telefone') and not PHONE_PATTERN.match(data['telefone']):
        errors.append('Formato de telefone inválido')

    # Foto opcional, enviada como data URL de imagem
    if data.get('fotoBase64') and not PHOTO_PATTERN.match(data['fotoBase64']):
        errors.append('Foto deve ser uma imagem em base64 (data:image/...;base64,...)')

    return len(errors) == 0, errors


def validate_user_update_data(data):
    """Valida a edição de um usuário existente (campos opcionais)"""
    errors = []

    if 'nome' in data and not data['nome']:
        errors.append('Nome não pode ficar vazio')
    if 'email' in data and not validate_email(data['email']):
        errors.append('Formato de email inválido')
    if data.get('telefone') and not PHONE_PATTERN.match(data['telefone']):
        errors.append('Formato de telefone inválido')
    if data.get('senha'):
        is_valid, message = validate_password(data['senha'])
        if not is_valid:
            errors.append(message)

    return len(errors) == 0, errors


def validate_question_data(question, position):
    """
    Valida uma questão do quiz

    Args:
        question (dict): Questão enviada pelo painel
        position (int): Posição (1-based) para as mensagens

    Returns:
        list: Erros encontrados
    """
    if not isinstance(question, dict):
        return [f"Questão {position} inválida"]

    errors = []
    text = question.get('pergunta')
    if not isinstance(text, str) or not text.strip():
        errors.append(f"Questão {position} sem texto")
    elif len(text) > 2000:
        errors.append(f"Questão {position} muito longa (máximo 2000 caracteres)")

    if 'alternativas' in question:
        alternatives = question['alternativas']
        if not isinstance(alternatives, list) or len(alternatives) < 2:
            errors.append(f"Questão {position} precisa de pelo menos 2 alternativas")

    return errors


def validate_quiz_data(data):
    """
    Valida dados de criação/edição de quiz

    Returns:
        tuple: (bool, list) - (é_válido, lista_de_erros)
    """
    errors = []

    name = data.get('nome', '')
    if not name:
        errors.append("Nome do quiz é obrigatório")
    elif len(name) > 200:
        errors.append("Nome muito longo (máximo 200 caracteres)")

    description = data.get('descricao', '')
    if description and len(description) > 1000:
        errors.append("Descrição muito longa (máximo 1000 caracteres)")

    questions = data.get('perguntas')
    if not isinstance(questions, list) or not questions:
        errors.append("Adicione pelo menos uma questão ao quiz")
    else:
        for position, question in enumerate(questions, start=1):
            errors.extend(validate_question_data(question, position))

    return len(errors) == 0, errors


def sanitize_filename(filename):
    """
    Sanitiza nome de arquivo removendo caracteres perigosos

    Returns:
        str: Nome sanitizado
    """
    safe_name = secure_filename(filename or '')
    return safe_name or 'arquivo.pdf'


def is_pdf(filename, mimetype=None, content=b''):
    """Confere extensão/mimetype e a assinatura %PDF- do conteúdo"""
    declared = mimetype == 'application/pdf' or (filename or '').lower().endswith('.pdf')
    return declared and content.startswith(PDF_MAGIC)


def get_request_data():
    """
    Corpo da requisição: JSON quando enviado como JSON, senão o formulário

    Corpo ausente ou JSON ilegível vira {}; JSON que não é objeto é recusado.
    """
    if not request.is_json:
        return request.form.to_dict()

    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError('Corpo da requisição deve ser um objeto JSON')
    return data


def parse_bool(value):
    """Booleano de JSON ou de formulário ('true', 'on', '1', 'sim')"""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in ('true', 'on', '1', 'sim')
    return False
