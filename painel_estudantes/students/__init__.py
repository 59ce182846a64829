"""
Módulo de Estudantes (Blueprint)

Listagem, cadastro, detalhe, edição e desativação de estudantes.
"""

from flask import Blueprint

students_bp = Blueprint(
    'students_bp',
    __name__,
    template_folder='templates',
    url_prefix='/estudantes'  # Todas as rotas começarão com /estudantes
)

# Importa as rotas no final para evitar dependência circular
from . import routes
