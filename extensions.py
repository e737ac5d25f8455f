"""
Extensões Flask - BrainQuiz
===========================

Instâncias criadas sem app e ligadas em create_app(), evitando import
circular entre app.py, modelos e rotas.
"""

from flask_login import LoginManager
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy

# Banco de dados (apenas para STORAGE_BACKEND=sql)
db = SQLAlchemy()

# Migrações do banco
migrate = Migrate()

# Sistema de login
login_manager = LoginManager()
