import os

# O Config é "fail fast": as variáveis precisam existir antes do import
os.environ.setdefault('SECRET_KEY', 'chave-de-teste')
os.environ.setdefault('STUDENT_API_URL', 'http://api.teste')

import pytest

from config import Config
from painel_estudantes import create_app
from painel_estudantes.core.models import Estudante, parse_timestamp


class ConfigTeste(Config):
    TESTING = True
    WTF_CSRF_ENABLED = False
    RATELIMIT_ENABLED = False
    STUDENT_API_URL = 'http://api.teste'


@pytest.fixture
def app():
    app = create_app(ConfigTeste)
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


def fazer_estudante(id='1', nome='Ana Souza', cpf='12345678901', nota=9.5,
                    email='ana@escola.com.br', criado_em='2024-03-15T10:00:00.000Z'):
    return Estudante(
        id=id,
        nome=nome,
        cpf=cpf,
        nota=nota,
        email=email,
        primeira_letra_unica=nome[0] if nome else None,
        criado_em=parse_timestamp(criado_em),
        atualizado_em=parse_timestamp(criado_em),
    )


@pytest.fixture
def estudantes():
    return [
        fazer_estudante('1', 'Ana Souza', '12345678901', 9.5, 'ana@escola.com.br', '2024-03-15T10:00:00Z'),
        fazer_estudante('2', 'Bob Lima', '98765432100', 6.0, 'bob@escola.com.br', '2024-01-10T08:30:00Z'),
        fazer_estudante('3', 'carla dias', '11122233344', 7.5, 'carla@escola.com.br', '2024-05-02T14:00:00Z'),
        fazer_estudante('4', 'Davi Melo', '55566677788', 3.0, None, '2023-12-01T09:00:00Z'),
    ]


@pytest.fixture
def fabrica_estudante():
    return fazer_estudante
