"""
Módulo Principal da Aplicação (Application Factory)
"""

from datetime import datetime

from flask import Flask, render_template
from werkzeug.middleware.proxy_fix import ProxyFix  # Necessário atrás de proxy reverso
from config import Config

from .core import formatters
from .core.constants import NOME_SISTEMA
from .core.extensions import csrf, limiter, student_api
from .core.logger import configurar_nivel, get_logger

logger = get_logger(__name__)


def create_app(config_class=Config):
    """
    Cria e configura uma instância da aplicação Flask.
    """

    app = Flask(__name__,
                instance_relative_config=True,
                static_folder='static',
                template_folder='templates')

    # Ajusta o Flask para gerar URLs corretas atrás de um proxy (https)
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)

    # 1. Carrega a configuração
    app.config.from_object(config_class)
    configurar_nivel(app.config.get('LOG_LEVEL', 'INFO'))

    # 2. Inicializa as extensões
    csrf.init_app(app)
    limiter.init_app(app)
    student_api.init_app(app)
    logger.info(f"API de estudantes: {app.config.get('STUDENT_API_URL')}")

    # 3. Filtros de exibição usados pelos templates
    app.add_template_filter(formatters.formatar_cpf, 'cpf')
    app.add_template_filter(formatters.formatar_data, 'data_longa')
    app.add_template_filter(formatters.formatar_data_hora, 'data_hora')
    app.add_template_filter(formatters.formatar_nota, 'nota')
    app.add_template_filter(formatters.iniciais, 'iniciais')

    # Injeta o nome do sistema e o horário da página em todos os templates
    @app.context_processor
    def inject_dados_globais():
        return dict(NOME_SISTEMA=NOME_SISTEMA, agora=datetime.now())

    # 4. Configura os Blueprints (Módulos)
    from .students import students_bp
    app.register_blueprint(students_bp)

    # 5. Páginas gerais
    @app.route("/")
    def home():
        return render_template('home.html')

    @app.route("/health")
    def health_check():
        return "Painel de Estudantes no ar!", 200

    @app.errorhandler(404)
    def pagina_nao_encontrada(e):
        return render_template('404.html'), 404

    return app
