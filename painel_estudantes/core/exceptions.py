"""
Exceções do Painel de Estudantes.

A API remota é tratada como uma caixa-preta: qualquer falha vira um ApiError
opaco, sem interpretação de códigos de erro do backend.
"""

from typing import Optional, Sequence


class ApiError(Exception):
    """Falha em uma chamada à API de estudantes."""

    def __init__(self, mensagem: str, status_code: Optional[int] = None):
        super().__init__(mensagem)
        self.status_code = status_code


class EstudanteNaoEncontradoError(ApiError):
    """O estudante solicitado não existe (ou foi desativado)."""


class AtualizacaoParcialError(ApiError):
    """Uma das alterações de campo falhou; as anteriores já foram aplicadas."""

    def __init__(self, campo: str, aplicados: Sequence[str], causa: ApiError):
        super().__init__(f"Falha ao alterar '{campo}': {causa}", causa.status_code)
        self.campo = campo
        self.aplicados = list(aplicados)
        self.causa = causa


class OperacaoEmAndamentoError(Exception):
    """Já existe uma submissão em andamento para a mesma entidade."""

    def __init__(self, chave: str):
        super().__init__(f"Operação em andamento para '{chave}'.")
        self.chave = chave
