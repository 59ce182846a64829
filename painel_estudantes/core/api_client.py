"""
Cliente da API de Estudantes (Gateway Remoto)

Chamadas finas sobre o recurso '/student' do backend. Não há cache, retry
nem agrupamento: cada método é exatamente uma requisição HTTP e qualquer
falha vira um ApiError.
"""

from typing import Any, List, Optional

import httpx

from painel_estudantes.core.exceptions import ApiError, EstudanteNaoEncontradoError
from painel_estudantes.core.logger import get_logger
from painel_estudantes.core.models import Estudante

logger = get_logger(__name__)

RECURSO = '/student'


class StudentApiClient:
    """
    Gateway para o backend de estudantes.

    Pode ser instanciado diretamente (base_url) ou configurado pela
    Application Factory via init_app(app).
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.base_url = base_url
        self.timeout = timeout
        self.transport = transport
        self._client: Optional[httpx.Client] = None

    def init_app(self, app) -> None:
        """Lê STUDENT_API_URL / STUDENT_API_TIMEOUT da configuração do Flask."""
        self.close()
        self.base_url = app.config.get('STUDENT_API_URL')
        self.timeout = app.config.get('STUDENT_API_TIMEOUT')
        app.extensions['student_api'] = self

    @property
    def client(self) -> httpx.Client:
        """Cria (uma única vez) o cliente HTTP."""
        if self._client is None:
            if not self.base_url:
                raise ApiError("URL da API de estudantes não configurada.")

            kwargs: dict = {
                'base_url': self.base_url.rstrip('/'),
                'headers': {'Accept': 'application/json'},
            }
            # Sem timeout configurado, vale o padrão do httpx
            if self.timeout is not None:
                kwargs['timeout'] = self.timeout
            if self.transport is not None:
                kwargs['transport'] = self.transport

            self._client = httpx.Client(**kwargs)
        return self._client

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def _requisitar(self, metodo: str, caminho: str, json: Optional[dict] = None) -> httpx.Response:
        try:
            response = self.client.request(metodo, caminho, json=json)
        except httpx.HTTPError as e:
            logger.error(f"Falha de comunicação em {metodo} {caminho}: {e}")
            raise ApiError(f"Falha de comunicação com a API: {e}") from e

        if response.status_code == 404:
            raise EstudanteNaoEncontradoError(f"Recurso não encontrado: {caminho}", 404)

        if response.is_error:
            logger.warning(f"{metodo} {caminho} retornou {response.status_code}: {response.text[:200]}")
            raise ApiError(
                f"A API respondeu com status {response.status_code}.",
                response.status_code,
            )

        return response

    def _json(self, response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise ApiError("Resposta da API não é um JSON válido.", response.status_code) from e

    def _estudante(self, response: httpx.Response) -> Estudante:
        dados = self._json(response)
        try:
            return Estudante.from_dict(dados)
        except (KeyError, TypeError, ValueError) as e:
            raise ApiError(f"Estudante em formato inesperado: {e}", response.status_code) from e

    # === LEITURA ===

    def listar(self) -> List[Estudante]:
        """GET /student -> todos os estudantes ativos."""
        dados = self._json(self._requisitar('GET', RECURSO))
        if not isinstance(dados, list):
            raise ApiError("A listagem de estudantes não retornou uma lista.")
        try:
            return [Estudante.from_dict(item) for item in dados]
        except (KeyError, TypeError, ValueError) as e:
            raise ApiError(f"Estudante em formato inesperado: {e}") from e

    def buscar(self, estudante_id: str) -> Estudante:
        """GET /student/{id}. Levanta EstudanteNaoEncontradoError em 404."""
        return self._estudante(self._requisitar('GET', f"{RECURSO}/{estudante_id}"))

    # === ESCRITA ===

    def criar(self, nome: str, cpf: str, nota: float) -> Estudante:
        """POST /student. O email não faz parte do cadastro."""
        payload = {'name': nome, 'cpf': cpf, 'grade': nota}
        return self._estudante(self._requisitar('POST', RECURSO, json=payload))

    def alterar_nome(self, estudante_id: str, nome: str) -> Estudante:
        payload = {'id': estudante_id, 'name': nome}
        return self._estudante(self._requisitar('PATCH', f"{RECURSO}/change/name", json=payload))

    def alterar_cpf(self, estudante_id: str, cpf: str) -> Estudante:
        payload = {'id': estudante_id, 'cpf': cpf}
        return self._estudante(self._requisitar('PATCH', f"{RECURSO}/change/cpf", json=payload))

    def alterar_email(self, estudante_id: str, email: str) -> Estudante:
        payload = {'id': estudante_id, 'email': email}
        return self._estudante(self._requisitar('PATCH', f"{RECURSO}/change/email", json=payload))

    def alterar_nota(self, estudante_id: str, nota: str) -> Estudante:
        """A API espera a nota como texto (ex.: '7.50')."""
        payload = {'id': estudante_id, 'grade': nota}
        return self._estudante(self._requisitar('PATCH', f"{RECURSO}/change/grade", json=payload))

    def desativar(self, estudante_id: str) -> None:
        """DELETE /student/{id}: desativação lógica, sem corpo de resposta."""
        self._requisitar('DELETE', f"{RECURSO}/{estudante_id}")
