"""
Módulo de Configuração

Define a classe de configuração principal. Implementa o padrão 'Fail Fast':
se uma variável crítica estiver faltando, a aplicação nem inicia.
"""

import os
from dotenv import load_dotenv

# Carrega variáveis do arquivo .env
load_dotenv()


def _float_opcional(nome: str):
    valor = os.environ.get(nome)
    if not valor:
        return None
    try:
        return float(valor)
    except ValueError:
        raise ValueError(f"ERRO CRÍTICO: '{nome}' deve ser um número (recebido: {valor!r}).")


class Config:
    """
    Classe de configuração base da aplicação.
    """

    # === SEGURANÇA CRÍTICA (Fail Fast) ===
    SECRET_KEY = os.environ.get('SECRET_KEY')
    if not SECRET_KEY:
        raise ValueError("ERRO CRÍTICO: 'SECRET_KEY' não encontrada no .env. A aplicação não pode iniciar insegura.")

    # === API DE ESTUDANTES (Backend remoto) ===
    STUDENT_API_URL = os.environ.get('STUDENT_API_URL')
    if not STUDENT_API_URL:
        print("AVISO: 'STUDENT_API_URL' não configurada. Usando http://localhost:3000.")
        STUDENT_API_URL = 'http://localhost:3000'

    # None = timeout padrão do httpx
    STUDENT_API_TIMEOUT = _float_opcional('STUDENT_API_TIMEOUT')

    # === FLASK ===
    DEBUG = os.environ.get('FLASK_DEBUG', 'False').lower() in ('true', '1')

    # === LOGGING ===
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()

    # === RATE LIMITING (Flask-Limiter) ===
    RATELIMIT_ENABLED = os.environ.get('RATELIMIT_ENABLED', 'True').lower() in ('true', '1')
    RATELIMIT_STORAGE_URI = os.environ.get('RATELIMIT_STORAGE_URI', 'memory://')
