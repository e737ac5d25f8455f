"""
Tokens de Acesso - BrainQuiz
============================

Token assinado (sem estado no servidor) com id, usuario e tipo, válido
por TOKEN_MAX_AGE segundos. Enviado no cabeçalho
``Authorization: Bearer <token>`` como alternativa ao cookie de sessão.
"""

from flask import current_app
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

TOKEN_SALT = 'brainquiz-auth-token'


def _serializer():
    return URLSafeTimedSerializer(current_app.config['SECRET_KEY'], salt=TOKEN_SALT)


def generate_token(user):
    return _serializer().dumps({'id': user.id, 'usuario': user.username, 'tipo': user.user_type})


def load_token(token):
    """Claims do token, ou None se inválido/expirado"""
    try:
        return _serializer().loads(token, max_age=current_app.config['TOKEN_MAX_AGE'])
    except SignatureExpired:
        current_app.logger.info("Token expirado recebido")
        return None
    except BadSignature:
        return None


def token_from_header(header):
    """Extrai o token de 'Bearer <token>'"""
    if not header:
        return None
    scheme, _, token = header.partition(' ')
    if scheme.lower() != 'bearer' or not token.strip():
        return None
    return token.strip()
