"""
Camada de Serviço (Service Layer) dos Estudantes

Orquestra as ações do usuário sobre o gateway da API:
- Cada entidade tem no máximo uma submissão em andamento (busy flag).
- Comandos de escrita não devolvem nada para a tela: depois de qualquer
  sucesso a rota redireciona para a listagem, que relê a API inteira.
"""

import threading
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List

from painel_estudantes.core.constants import CHAVE_NOVO_ESTUDANTE
from painel_estudantes.core.exceptions import ApiError, AtualizacaoParcialError, OperacaoEmAndamentoError
from painel_estudantes.core.logger import get_logger
from painel_estudantes.core.models import Estudante
from painel_estudantes.students.view import EstadoVisao, Visao, derivar_visao

logger = get_logger(__name__)

# Ordem em que os PATCHs de edição são disparados
ORDEM_CAMPOS = ('nome', 'cpf', 'nota', 'email')


class EstadoSubmissao(Enum):
    IDLE = 'idle'
    SUBMITTING = 'submitting'


class RegistroOperacoes:
    """
    Busy flag por entidade. Enquanto uma submissão está em andamento,
    uma segunda para a mesma chave é recusada sem tocar na API.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._em_andamento = set()

    def estado(self, chave: str) -> EstadoSubmissao:
        with self._lock:
            if chave in self._em_andamento:
                return EstadoSubmissao.SUBMITTING
        return EstadoSubmissao.IDLE

    @contextmanager
    def ocupar(self, chave: str):
        with self._lock:
            if chave in self._em_andamento:
                raise OperacaoEmAndamentoError(chave)
            self._em_andamento.add(chave)
        try:
            yield
        finally:
            with self._lock:
                self._em_andamento.discard(chave)


registro_operacoes = RegistroOperacoes()


def em_andamento(chave: str, registro: RegistroOperacoes = registro_operacoes) -> bool:
    """True enquanto houver submissão em andamento para a entidade."""
    return registro.estado(chave) == EstadoSubmissao.SUBMITTING



@dataclass(frozen=True)
class Painel:
    """Tudo que a página de listagem precisa, derivado de uma leitura fresca."""

    estudantes: List[Estudante]
    visao: Visao
    estado: EstadoVisao


# === LEITURA ===

def carregar_painel(api, estado: EstadoVisao) -> Painel:
    """
    Relê a lista completa na API e deriva a visão.
    Erros de rede propagam como ApiError.
    """
    estudantes = api.listar()
    logger.info(f"Listagem carregada: {len(estudantes)} estudante(s)")
    return Painel(estudantes=estudantes, visao=derivar_visao(estudantes, estado), estado=estado)


# === ESCRITA ===

def cadastrar_estudante(api, nome: str, cpf: str, nota: float, registro: RegistroOperacoes = registro_operacoes) -> None:
    with registro.ocupar(CHAVE_NOVO_ESTUDANTE):
        novo = api.criar(nome, cpf, nota)
        logger.info(f"Estudante cadastrado: {novo.id}")


def campos_alterados(original: Estudante, validados: dict) -> Dict[str, object]:
    """
    Apenas os campos cujo valor validado difere do original.
    Email em branco nunca gera chamada (a API não aceita remover o email).
    """
    alterados = {}
    if validados['nome'] != original.nome:
        alterados['nome'] = validados['nome']
    if validados['cpf'] != original.cpf:
        alterados['cpf'] = validados['cpf']
    if validados['nota'] != original.nota:
        alterados['nota'] = validados['nota']
    email = validados.get('email')
    if email and email != original.email:
        alterados['email'] = email
    return alterados


def _chamar_alteracao(api, estudante_id: str, campo: str, valor) -> None:
    if campo == 'nome':
        api.alterar_nome(estudante_id, valor)
    elif campo == 'cpf':
        api.alterar_cpf(estudante_id, valor)
    elif campo == 'nota':
        api.alterar_nota(estudante_id, f"{valor:.2f}")
    elif campo == 'email':
        api.alterar_email(estudante_id, valor)


def atualizar_estudante(
    api,
    original: Estudante,
    validados: dict,
    registro: RegistroOperacoes = registro_operacoes,
) -> List[str]:
    """
    Dispara um PATCH por campo alterado. Não há atomicidade: se um falhar,
    os anteriores permanecem aplicados e só o erro do que falhou sobe.

    Returns:
        list: campos efetivamente atualizados (vazia se nada mudou).
    """
    alterados = campos_alterados(original, validados)
    if not alterados:
        return []

    aplicados = []
    with registro.ocupar(original.id):
        for campo in ORDEM_CAMPOS:
            if campo not in alterados:
                continue
            try:
                _chamar_alteracao(api, original.id, campo, alterados[campo])
            except ApiError as e:
                logger.error(
                    f"Edição parcial de {original.id}: '{campo}' falhou, aplicados={aplicados}: {e}"
                )
                raise AtualizacaoParcialError(campo, aplicados, e) from e
            aplicados.append(campo)

    logger.info(f"Estudante {original.id} atualizado: {', '.join(aplicados)}")
    return aplicados


def desativar_estudante(api, estudante_id: str, registro: RegistroOperacoes = registro_operacoes) -> None:
    with registro.ocupar(estudante_id):
        api.desativar(estudante_id)
        logger.info(f"Estudante desativado: {estudante_id}")


def buscar_estudante(api, estudante_id: str) -> Estudante:
    """Leitura fresca para detalhe/edição. Não encontrado propaga como erro."""
    return api.buscar(estudante_id)
