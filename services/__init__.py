"""
Regras de Negócio - BrainQuiz
=============================

- lifecycle: mover registros entre coleções com compensação
- registrations: cadastros pendentes (enviar, aprovar, rejeitar)
- quizzes: arquivar, excluir, restaurar e limpar lixeira
- pdfs: envio, bloqueio e exclusão
- users: login e administração de usuários
"""
