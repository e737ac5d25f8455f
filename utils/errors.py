"""
Erros da Aplicação - BrainQuiz
==============================

Hierarquia de exceções convertidas em respostas JSON
``{"success": false, "message": ...}`` pelos handlers registrados no app:
- ValidationError: campos ausentes ou inválidos (400)
- Unauthorized: credenciais ausentes ou inválidas (401)
- Forbidden: permissão insuficiente (403)
- NotFound: registro inexistente (404)
- Conflict: usuário ou email duplicado (409)
- InternalError / StorageError: falha de E/S ou erro inesperado (500)
"""


class AppError(Exception):
    """Erro base da aplicação"""

    status_code = 500
    default_message = 'Erro interno do servidor'

    def __init__(self, message=None, errors=None):
        self.message = message or self.default_message
        self.errors = list(errors or [])
        super().__init__(self.message)

    def to_dict(self):
        """Corpo JSON da resposta de erro"""
        body = {'success': False, 'message': self.message}
        if self.errors:
            body['errors'] = self.errors
        return body


class ValidationError(AppError):
    status_code = 400
    default_message = 'Dados inválidos'


class Unauthorized(AppError):
    status_code = 401
    default_message = 'Autenticação necessária'


class Forbidden(AppError):
    status_code = 403
    default_message = 'Acesso negado'


class NotFound(AppError):
    status_code = 404
    default_message = 'Registro não encontrado'


class Conflict(AppError):
    status_code = 409
    default_message = 'Usuário ou email já cadastrado'


class InternalError(AppError):
    status_code = 500


class StorageError(InternalError):
    """Falha ao ler ou gravar uma coleção. A operação pode ser repetida."""

    default_message = 'Erro ao acessar os dados. Tente novamente.'
    retryable = True

    def to_dict(self):
        body = super().to_dict()
        body['retryable'] = True
        return body
