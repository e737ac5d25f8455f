"""
Formulários (DTOs) - BrainQuiz
==============================

Converte o corpo das requisições em objetos tipados e validados antes de
qualquer acesso às coleções. Erros viram ValidationError (400).
"""

import base64
import binascii
import re
from dataclasses import dataclass, field

from utils.errors import ValidationError
from utils.helpers import (
    validate_registration_data, validate_user_update_data, validate_quiz_data
)

DATA_URL_PATTERN = re.compile(r'^data:(?P<mimetype>[\w.+/-]+);base64,(?P<payload>.*)$', re.DOTALL)


def _require_object(data):
    if not isinstance(data, dict):
        raise ValidationError('Corpo da requisição deve ser um objeto JSON')
    return data


def _text(data, key, strip=True):
    value = data.get(key)
    if value is None:
        return ''
    if not isinstance(value, str):
        raise ValidationError(f'Campo "{key}" deve ser texto')
    return value.strip() if strip else value


def _raise_if_invalid(is_valid, errors):
    if not is_valid:
        raise ValidationError(errors[0], errors=errors)


@dataclass
class LoginForm:
    username: str
    password: str

    @classmethod
    def from_json(cls, data):
        data = _require_object(data)
        username = _text(data, 'usuario')
        password = _text(data, 'senha')
        if not username or not password:
            raise ValidationError('Usuário e senha são obrigatórios')
        return cls(username=username, password=password)


@dataclass
class RegistrationForm:
    username: str
    password: str
    first_name: str
    email: str
    last_name: str = ''
    phone: str = ''
    photo: str = ''

    @classmethod
    def from_json(cls, data):
        data = _require_object(data)
        fields = {
            'usuario': _text(data, 'usuario'),
            'senha': _text(data, 'senha', strip=False),
            'nome': _text(data, 'nome'),
            'sobrenome': _text(data, 'sobrenome'),
            'email': _text(data, 'email').lower(),
            'telefone': _text(data, 'telefone'),
            'fotoBase64': _text(data, 'fotoBase64'),
        }
        _raise_if_invalid(*validate_registration_data(fields))
        return cls(
            username=fields['usuario'],
            password=fields['senha'],
            first_name=fields['nome'],
            last_name=fields['sobrenome'],
            email=fields['email'],
            phone=fields['telefone'],
            photo=fields['fotoBase64'],
        )


@dataclass
class UserUpdateForm:
    """Edição feita por moderador/administrador; exige a senha de quem edita"""

    confirmation_password: str
    changes: dict = field(default_factory=dict)
    new_password: str = ''

    EDITABLE = ('nome', 'sobrenome', 'email', 'telefone')

    @classmethod
    def from_json(cls, data):
        data = _require_object(data)
        confirmation = _text(data, 'senhaConfirmacao', strip=False)
        if not confirmation:
            raise ValidationError('Digite sua senha para confirmar as alterações')

        changes = {key: _text(data, key) for key in cls.EDITABLE if key in data}
        if 'email' in changes:
            changes['email'] = changes['email'].lower()
        new_password = _text(data, 'senha', strip=False)

        _raise_if_invalid(*validate_user_update_data(dict(changes, senha=new_password)))
        return cls(confirmation_password=confirmation, changes=changes, new_password=new_password)


@dataclass
class QuizForm:
    name: str
    questions: list
    description: str = ''
    category: str = ''

    @classmethod
    def from_json(cls, data):
        data = _require_object(data)
        fields = {
            'nome': _text(data, 'nome'),
            'descricao': _text(data, 'descricao'),
            'categoria': _text(data, 'categoria'),
            'perguntas': data.get('perguntas'),
        }
        _raise_if_invalid(*validate_quiz_data(fields))
        return cls(
            name=fields['nome'],
            questions=fields['perguntas'],
            description=fields['descricao'],
            category=fields['categoria'],
        )


@dataclass
class PdfUpload:
    filename: str
    mimetype: str
    content: bytes

    @classmethod
    def from_file(cls, file_storage):
        """Arquivo enviado via multipart (campo 'pdf')"""
        if file_storage is None or not file_storage.filename:
            raise ValidationError('Arquivo não encontrado')
        return cls(
            filename=file_storage.filename,
            mimetype=file_storage.mimetype or '',
            content=file_storage.read(),
        )

    @classmethod
    def from_json(cls, data):
        """JSON {nome, dados} com base64 puro ou data URL"""
        data = _require_object(data)
        filename = _text(data, 'nome')
        payload = _text(data, 'dados')
        if not filename or not payload:
            raise ValidationError('Campos obrigatórios: nome e dados')

        mimetype = ''
        match = DATA_URL_PATTERN.match(payload)
        if match:
            mimetype = match.group('mimetype')
            payload = match.group('payload')

        try:
            content = base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError):
            raise ValidationError('Conteúdo do PDF não está em base64 válido')

        return cls(filename=filename, mimetype=mimetype, content=content)
