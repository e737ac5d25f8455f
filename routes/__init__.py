"""
Rotas do Sistema BrainQuiz
==========================
Este módulo contém todas as rotas organizadas por funcionalidade:
- auth: Autenticação (login, cadastro, logout, token)
- registrations: Aprovação e rejeição de cadastros pendentes
- user: Gerenciamento de usuários
- quiz: Criar, editar, arquivar, excluir e restaurar quizzes
- pdf: Envio, download, bloqueio e exclusão de PDFs
- dashboard: Página inicial e agregado do dashboard
"""
from .auth import auth, auth_root
from .dashboard import dashboard
from .pdf import pdf
from .quiz import quiz
from .registrations import registrations
from .user import user

# Blueprints servidos sob o prefixo /api
API_BLUEPRINTS = [auth, registrations, user, quiz, pdf]

# Lista de todos os blueprints disponíveis
__all__ = [
    'auth',
    'auth_root',
    'dashboard',
    'pdf',
    'quiz',
    'registrations',
    'user',
    'API_BLUEPRINTS'
]
