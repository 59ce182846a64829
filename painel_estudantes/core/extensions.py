"""
Módulo Central de Extensões.
Evita importações circulares centralizando as instâncias das extensões.
"""
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_wtf.csrf import CSRFProtect

from painel_estudantes.core.api_client import StudentApiClient

# 1. Limiter (Rate Limiting)
# Aplicado apenas às rotas que disparam escrita na API.
limiter = Limiter(key_func=get_remote_address)

# 2. CSRF Protection
csrf = CSRFProtect()

# 3. Gateway da API de Estudantes (configurado em create_app)
student_api = StudentApiClient()
