"""
Rotas do Dashboard - BrainQuiz
==============================

- Página inicial (login ou dashboard conforme autenticação)
- Agregado /api/dashboard consultado periodicamente pela página
"""

from flask import Blueprint, current_app, jsonify, render_template
from flask_login import current_user

from storage import get_store
from utils.decorators import approved_user_required

# Criar blueprint para rotas do dashboard
dashboard = Blueprint('dashboard', __name__)


@dashboard.route('/')
def index():
    """Página inicial - login para anônimos, dashboard para aprovados"""
    if current_user.is_authenticated and current_user.is_approved:
        return render_template(
            'dashboard.html',
            user=current_user,
            refresh_seconds=current_app.config['DASHBOARD_REFRESH_SECONDS']
        )
    return render_template('login.html')


@dashboard.route('/api/dashboard')
@approved_user_required
def summary():
    """Contagens e coleções visíveis para o tipo do usuário"""
    store = get_store()

    quizzes = store.quizzes.list()
    pdfs = store.pdfs.list()
    archived = store.archived_quizzes.list()
    deleted = store.deleted_quizzes.list()

    response = {
        'success': True,
        'totalQuizzes': len(quizzes),
        'totalPDFs': len(pdfs),
        'totalArquivados': len(archived),
        'totalExcluidos': len(deleted),
        'totalUsuarios': store.users.count(),
        'totalCadastros': store.pending.count(),
        'intervaloAtualizacao': current_app.config['DASHBOARD_REFRESH_SECONDS'],
        'quizzes': [quiz.to_dict() for quiz in quizzes],
        'pdfs': [pdf.to_dict(include_data=False) for pdf in pdfs]
    }

    # Moderadores e administradores veem arquivo, lixeira e cadastros
    if current_user.can_approve_users:
        response['quizzesArquivados'] = [quiz.to_dict() for quiz in archived]
        response['quizzesExcluidos'] = [quiz.to_dict() for quiz in deleted]
        response['cadastros'] = [item.to_public_dict() for item in store.pending.list()]
        response['usuarios'] = [user.to_public_dict() for user in store.users.list()]

    if current_user.is_admin:
        response['pdfsExcluidos'] = [pdf.to_dict(include_data=False) for pdf in store.deleted_pdfs.list()]

    return jsonify(response)
