from unittest.mock import patch

import pytest

from painel_estudantes.core.exceptions import ApiError, EstudanteNaoEncontradoError
from painel_estudantes.students import services


@pytest.fixture
def api():
    with patch('painel_estudantes.students.routes.student_api') as mock_api:
        yield mock_api


def test_home_page(client):
    """A página inicial carrega e aponta para a lista."""
    response = client.get('/')
    assert response.status_code == 200
    content = response.data.decode('utf-8')
    assert "Sistema de Gestão de Estudantes" in content
    assert "/estudantes/" in content


def test_health_check(client):
    response = client.get('/health')
    assert response.status_code == 200
    assert b"Painel de Estudantes no ar!" in response.data


def test_404_page(client):
    response = client.get('/rota-que-nao-existe')
    assert response.status_code == 404
    assert "Página não encontrada" in response.data.decode('utf-8')


# === LISTAGEM ===

def test_lista_exibe_estudantes_e_estatisticas(client, api, estudantes):
    api.listar.return_value = estudantes

    response = client.get('/estudantes/')
    content = response.data.decode('utf-8')

    assert response.status_code == 200
    assert 'Ana Souza' in content
    assert '123.456.789-01' in content
    assert '15 de março de 2024' in content
    assert '<strong id="stat-total">4</strong>' in content
    assert 'Exibindo 4 de 4 estudante(s)' in content


def test_lista_aplica_filtro_mas_estatistica_e_do_total(client, api, estudantes):
    api.listar.return_value = estudantes

    response = client.get('/estudantes/?nota=6')
    content = response.data.decode('utf-8')

    assert 'Bob Lima' in content
    assert 'Ana Souza' not in content
    assert '<strong id="stat-total">4</strong>' in content
    assert 'Exibindo 1 de 4 estudante(s)' in content


def test_lista_ordenada_por_nome_desc(client, api, estudantes):
    api.listar.return_value = estudantes

    content = client.get('/estudantes/?campo=name&ordem=desc').data.decode('utf-8')

    posicoes = [content.index(nome) for nome in ('Davi Melo', 'carla dias', 'Bob Lima', 'Ana Souza')]
    assert posicoes == sorted(posicoes)


def test_lista_vazia(client, api):
    api.listar.return_value = []
    content = client.get('/estudantes/').data.decode('utf-8')
    assert 'Nenhum estudante cadastrado' in content


def test_lista_sem_resultado_na_busca(client, api, estudantes):
    api.listar.return_value = estudantes
    content = client.get('/estudantes/?busca=zzz').data.decode('utf-8')
    assert 'Nenhum estudante encontrado' in content


def test_lista_com_erro_de_rede(client, api):
    api.listar.side_effect = ApiError("fora do ar")

    response = client.get('/estudantes/')
    content = response.data.decode('utf-8')

    assert response.status_code == 502
    assert 'Ocorreu um erro ao carregar a lista de estudantes.' in content
    assert 'Tentar novamente' in content


# === CADASTRO ===

def test_cadastro_valido_redireciona_para_lista(client, api):
    response = client.post('/estudantes/novo', data={'nome': 'Ana', 'cpf': '123.456.789-01', 'nota': '9,5'})

    assert response.status_code == 302
    assert response.headers['Location'].endswith('/estudantes/')
    api.criar.assert_called_once_with('Ana', '12345678901', 9.5)


def test_cadastro_com_cpf_curto_nao_chama_api(client, api):
    response = client.post('/estudantes/novo', data={'nome': 'Ana', 'cpf': '1234567890', 'nota': '9'})

    assert response.status_code == 400
    assert 'CPF deve conter exatamente 11 números' in response.data.decode('utf-8')
    api.criar.assert_not_called()


def test_cadastro_com_erro_da_api_mostra_mensagem_geral(client, api):
    api.criar.side_effect = ApiError("CPF já cadastrado", 409)

    response = client.post('/estudantes/novo', data={'nome': 'Ana', 'cpf': '12345678901', 'nota': '9'})

    assert response.status_code == 502
    assert 'Erro ao adicionar estudante. Tente novamente.' in response.data.decode('utf-8')


# === DETALHE ===

def test_detalhe(client, api, fabrica_estudante):
    api.buscar.return_value = fabrica_estudante(id='1', nota=4.0)

    content = client.get('/estudantes/1').data.decode('utf-8')

    assert 'Perfil do Estudante' in content
    assert 'Precisa Melhorar' in content
    api.buscar.assert_called_once_with('1')


def test_detalhe_inexistente(client, api):
    api.buscar.side_effect = EstudanteNaoEncontradoError("não existe", 404)
    response = client.get('/estudantes/nada')
    assert response.status_code == 404


# === EDIÇÃO ===

def test_edicao_carrega_formulario_preenchido(client, api, fabrica_estudante):
    api.buscar.return_value = fabrica_estudante(id='1')

    content = client.get('/estudantes/1/editar').data.decode('utf-8')

    assert 'value="Ana Souza"' in content
    assert 'value="ana@escola.com.br"' in content


def test_edicao_sem_alteracoes_nao_dispara_patch(client, api, fabrica_estudante):
    original = fabrica_estudante(id='1')
    api.buscar.return_value = original

    response = client.post('/estudantes/1/editar', data={
        'nome': original.nome,
        'cpf': original.cpf,
        'email': original.email,
        'nota': '9.5',
    })

    assert response.status_code == 302
    api.alterar_nome.assert_not_called()
    api.alterar_cpf.assert_not_called()
    api.alterar_email.assert_not_called()
    api.alterar_nota.assert_not_called()


def test_edicao_altera_somente_o_necessario(client, api, fabrica_estudante):
    original = fabrica_estudante(id='1')
    api.buscar.return_value = original

    response = client.post('/estudantes/1/editar', data={
        'nome': original.nome,
        'cpf': original.cpf,
        'email': 'novo@escola.com.br',
        'nota': '9,5',
    })

    assert response.status_code == 302
    api.alterar_email.assert_called_once_with('1', 'novo@escola.com.br')
    api.alterar_nome.assert_not_called()
    api.alterar_nota.assert_not_called()


def test_edicao_com_nota_invalida(client, api, fabrica_estudante):
    api.buscar.return_value = fabrica_estudante(id='1')

    response = client.post('/estudantes/1/editar', data={
        'nome': 'Ana', 'cpf': '12345678901', 'email': 'ana@escola.com.br', 'nota': '10.1'
    })

    assert response.status_code == 400
    assert 'Nota máxima é 10' in response.data.decode('utf-8')
    api.alterar_nota.assert_not_called()


def test_edicao_com_falha_parcial(client, api, fabrica_estudante):
    api.buscar.return_value = fabrica_estudante(id='1')
    api.alterar_cpf.side_effect = ApiError("CPF já cadastrado", 409)

    response = client.post('/estudantes/1/editar', data={
        'nome': 'Ana Maria', 'cpf': '99999999999', 'email': 'ana@escola.com.br', 'nota': '9.5'
    })

    assert response.status_code == 502
    assert 'Erro inesperado. Tente novamente.' in response.data.decode('utf-8')
    api.alterar_nome.assert_called_once_with('1', 'Ana Maria')


# === DESATIVAÇÃO ===

def test_confirmacao_de_desativacao(client, api, fabrica_estudante):
    api.buscar.return_value = fabrica_estudante(id='1')
    content = client.get('/estudantes/1/desativar').data.decode('utf-8')
    assert 'Confirmar Desativação' in content
    assert 'Ana Souza' in content


def test_desativar_redireciona_e_relista(client, api, estudantes):
    api.listar.return_value = estudantes[1:]

    response = client.post('/estudantes/1/desativar', follow_redirects=True)

    assert response.status_code == 200
    api.desativar.assert_called_once_with('1')
    api.listar.assert_called_once_with()
    assert 'Estudante desativado.' in response.data.decode('utf-8')


def test_desativar_com_erro(client, api, estudantes):
    api.desativar.side_effect = ApiError("fora do ar")
    api.listar.return_value = estudantes

    response = client.post('/estudantes/1/desativar', follow_redirects=True)

    assert 'Erro ao desativar estudante.' in response.data.decode('utf-8')


def test_filtro_de_nota_fica_selecionado_mesmo_com_zero_decimal(client, api, estudantes):
    api.listar.return_value = estudantes

    content = client.get('/estudantes/?nota=6.0').data.decode('utf-8')

    assert '<option value="6" selected>' in content
    assert '<option value="" selected>' not in content


def test_sem_filtro_de_nota_seleciona_todas(client, api, estudantes):
    api.listar.return_value = estudantes
    content = client.get('/estudantes/').data.decode('utf-8')
    assert '<option value="" selected>' in content


# === SUBMISSÃO EM ANDAMENTO ===

def test_formulario_de_edicao_desabilitado_durante_submissao(client, api, fabrica_estudante):
    api.buscar.return_value = fabrica_estudante(id='1')

    with services.registro_operacoes.ocupar('1'):
        content = client.get('/estudantes/1/editar').data.decode('utf-8')

    assert 'type="submit" disabled' in content
    assert 'Já existe uma operação em andamento' in content

    # Liberado, o formulário volta ao normal
    content = client.get('/estudantes/1/editar').data.decode('utf-8')
    assert 'type="submit" disabled' not in content


def test_confirmacao_de_desativacao_desabilitada_durante_submissao(client, api, fabrica_estudante):
    api.buscar.return_value = fabrica_estudante(id='1')

    with services.registro_operacoes.ocupar('1'):
        content = client.get('/estudantes/1/desativar').data.decode('utf-8')

    assert 'type="submit" disabled' in content


def test_submissao_em_andamento_recusa_cadastro(client, api):
    with services.registro_operacoes.ocupar('novo'):
        response = client.post('/estudantes/novo', data={'nome': 'Ana', 'cpf': '12345678901', 'nota': '9'})

    assert response.status_code == 409
    assert 'type="submit" disabled' in response.data.decode('utf-8')
    api.criar.assert_not_called()
