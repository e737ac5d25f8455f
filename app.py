import logging
import os

from dotenv import load_dotenv
from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from extensions import db, login_manager, migrate
from services import users as user_service
from storage import get_store, init_store
from utils.errors import AppError, StorageError, Unauthorized
from utils.tokens import load_token, token_from_header

# Carregar variáveis de ambiente do arquivo .env
load_dotenv()

logger = logging.getLogger(__name__)


# ================================
# CONFIGURAÇÕES DO BRAINQUIZ
# ================================

def _default_config(app):
    return {
        # Chave secreta para sessões e tokens
        'SECRET_KEY': os.environ.get('SECRET_KEY') or 'brainquiz-dev-secret',

        # Armazenamento: 'json' (arquivos em DATA_DIR) ou 'sql'
        'STORAGE_BACKEND': os.environ.get('STORAGE_BACKEND', 'json'),
        'DATA_DIR': os.environ.get('DATA_DIR') or os.path.join(app.root_path, 'data'),
        'SQLALCHEMY_DATABASE_URI': os.environ.get('DATABASE_URL') or 'sqlite:///brainquiz.db',
        'SQLALCHEMY_TRACK_MODIFICATIONS': False,

        # Validade do token de acesso (24h)
        'TOKEN_MAX_AGE': int(os.environ.get('TOKEN_MAX_AGE', 24 * 60 * 60)),

        'MAX_CONTENT_LENGTH': 50 * 1024 * 1024,  # 50MB máximo por requisição
        'PDF_MAX_SIZE': int(os.environ.get('PDF_MAX_SIZE', 10 * 1024 * 1024)),

        # Administrador padrão
        'CREATE_ADMIN': True,
        'ADMIN_USERNAME': os.environ.get('ADMIN_USERNAME', 'admin'),
        'ADMIN_PASSWORD': os.environ.get('ADMIN_PASSWORD', 'admin123'),
        'ADMIN_EMAIL': os.environ.get('ADMIN_EMAIL', 'admin@brainquiz.com'),

        'DASHBOARD_REFRESH_SECONDS': 300,
        'LOG_LEVEL': os.environ.get('LOG_LEVEL', 'INFO'),
    }


def create_app(test_config=None):
    """Cria e configura a aplicação BrainQuiz"""
    app = Flask(__name__)

    app.config.from_mapping(_default_config(app))
    if test_config:
        app.config.update(test_config)

    # Fix para PostgreSQL no Render (substitui postgres:// por postgresql://)
    uri = app.config['SQLALCHEMY_DATABASE_URI']
    if uri.startswith("postgres://"):
        app.config['SQLALCHEMY_DATABASE_URI'] = uri.replace("postgres://", "postgresql://", 1)

    logging.basicConfig(
        level=app.config['LOG_LEVEL'],
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s'
    )
    app.logger.setLevel(app.config['LOG_LEVEL'])

    # Respostas JSON com acentos e na ordem dos campos
    app.json.ensure_ascii = False
    app.json.sort_keys = False

    # ================================
    # INICIALIZAR EXTENSÕES
    # ================================

    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)

    init_store(app)

    if app.config['CREATE_ADMIN']:
        with app.app_context():
            try:
                user_service.ensure_admin_user(
                    get_store(),
                    app.config['ADMIN_USERNAME'],
                    app.config['ADMIN_PASSWORD'],
                    app.config['ADMIN_EMAIL']
                )
            except StorageError:
                app.logger.exception("Não foi possível criar o usuário administrador")

    # ================================
    # REGISTRAR ROTAS
    # ================================

    from routes import API_BLUEPRINTS, auth_root, dashboard

    for blueprint in API_BLUEPRINTS:
        app.register_blueprint(blueprint, url_prefix='/api')
    app.register_blueprint(auth_root)
    app.register_blueprint(dashboard)

    @app.context_processor
    def inject_global_vars():
        """Disponibiliza variáveis em todos os templates"""
        return {'app_name': 'BrainQuiz'}

    _register_error_handlers(app)

    app.logger.info("BrainQuiz inicializado (armazenamento: %s)", app.config['STORAGE_BACKEND'])
    return app


# ================================
# RESPOSTAS DE ERRO EM JSON
# ================================

def _register_error_handlers(app):

    @app.errorhandler(AppError)
    def handle_app_error(error):
        if error.status_code >= 500:
            app.logger.error("%s: %s", type(error).__name__, error.message)
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({'success': False, 'message': error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        app.logger.exception("Erro inesperado em %s %s", request.method, request.path)
        return jsonify({'success': False, 'message': 'Erro interno do servidor'}), 500


# ================================
# FLASK-LOGIN
# ================================

@login_manager.user_loader
def load_user(user_id):
    """Usuário da sessão (cookie)"""
    return user_service.load_principal(get_store(), user_id)


@login_manager.request_loader
def load_user_from_request(req):
    """Usuário do cabeçalho Authorization: Bearer <token>"""
    token = token_from_header(req.headers.get('Authorization'))
    if token is None:
        return None

    claims = load_token(token)
    if not claims:
        return None
    return user_service.load_principal(get_store(), claims.get('id'))


@login_manager.unauthorized_handler
def unauthorized():
    raise Unauthorized('Você precisa fazer login para acessar este recurso.')


# ================================
# EXECUTAR APLICAÇÃO
# ================================

if __name__ == '__main__':
    # Determinar se está em desenvolvimento ou produção
    debug_mode = os.environ.get('FLASK_ENV') == 'development'

    application = create_app()

    print("🧠 Iniciando BrainQuiz...")
    print(f"🔧 Modo: {'Desenvolvimento' if debug_mode else 'Produção'}")
    print(f"🗄️  Armazenamento: {application.config['STORAGE_BACKEND']}")

    # Rodar aplicação
    application.run(
        debug=debug_mode,
        host='0.0.0.0',  # Permite acesso externo
        port=int(os.environ.get('PORT', 5000))  # Porta flexível para deploy
    )
