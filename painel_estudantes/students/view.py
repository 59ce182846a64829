"""
Motor de Visualização da Coleção de Estudantes

Única parte do painel com lógica própria: recebe a lista completa vinda da
API e o estado de visualização (busca, filtro de nota, ordenação) e deriva a
lista exibida, as estatísticas e as opções do filtro de nota.

Tudo aqui é puro: sem rede, sem sessão, sem Flask.
"""

import re
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple

from painel_estudantes.core.formatters import formatar_numero, somente_digitos
from painel_estudantes.core.models import Estudante, FaixaNota

OPCAO_TODAS_AS_NOTAS = ('', 'Todas as notas')

_CONSULTA_CPF = re.compile(r'^[\d.\-\s]+$')
_DATA_MINIMA = datetime.min.replace(tzinfo=timezone.utc)


class CampoOrdenacao(str, Enum):
    NOME = 'name'
    EMAIL = 'email'
    NOTA = 'grade'
    CRIADO_EM = 'createdAt'


class Ordem(str, Enum):
    ASC = 'asc'
    DESC = 'desc'


@dataclass(frozen=True)
class EstadoVisao:
    """Estado de visualização (só do cliente, nunca persistido)."""

    busca: str = ''
    nota: str = ''
    campo: CampoOrdenacao = CampoOrdenacao.NOME
    ordem: Ordem = Ordem.ASC

    @classmethod
    def from_args(cls, args: Mapping[str, str]) -> 'EstadoVisao':
        """Lê o estado da query string; valores desconhecidos caem no padrão."""
        try:
            campo = CampoOrdenacao(args.get('campo', CampoOrdenacao.NOME.value))
        except ValueError:
            campo = CampoOrdenacao.NOME
        try:
            ordem = Ordem(args.get('ordem', Ordem.ASC.value))
        except ValueError:
            ordem = Ordem.ASC

        return cls(
            busca=args.get('busca', '') or '',
            nota=args.get('nota', '') or '',
            campo=campo,
            ordem=ordem,
        )

    def to_args(self) -> dict:
        args = {'campo': self.campo.value, 'ordem': self.ordem.value}
        if self.busca:
            args['busca'] = self.busca
        if self.nota:
            args['nota'] = self.nota
        return args

    def alternar(self, campo: CampoOrdenacao) -> 'EstadoVisao':
        """
        Clique no cabeçalho: mesmo campo inverte a ordem, outro campo
        volta para ascendente.
        """
        if campo == self.campo:
            nova_ordem = Ordem.DESC if self.ordem == Ordem.ASC else Ordem.ASC
            return replace(self, ordem=nova_ordem)
        return replace(self, campo=campo, ordem=Ordem.ASC)

    @property
    def nota_filtro(self) -> Optional[float]:
        """Valor numérico do filtro de nota; texto inválido desliga o filtro."""
        if not self.nota.strip():
            return None
        try:
            return float(self.nota.replace(',', '.'))
        except ValueError:
            return None


@dataclass(frozen=True)
class Estatisticas:
    total: int = 0
    excelente: int = 0
    bom: int = 0
    regular: int = 0
    baixo: int = 0
    media: float = 0.0

    @property
    def media_formatada(self) -> str:
        return f"{self.media:.1f}"


@dataclass(frozen=True)
class Visao:
    exibidos: List[Estudante]
    estatisticas: Estatisticas
    opcoes_nota: List[Tuple[str, str]]

    @property
    def total_exibidos(self) -> int:
        return len(self.exibidos)


# === FILTRAGEM ===

def _corresponde_busca(estudante: Estudante, termo: str) -> bool:
    if termo in estudante.nome.lower():
        return True
    if termo in (estudante.email or '').lower():
        return True
    if termo in estudante.cpf:
        return True

    # Consulta com pontuação de CPF ("123.456") compara só os dígitos
    if _CONSULTA_CPF.match(termo):
        digitos = somente_digitos(termo)
        return bool(digitos) and digitos in estudante.cpf
    return False


def filtrar(estudantes: Iterable[Estudante], estado: EstadoVisao) -> List[Estudante]:
    """Aplica busca textual E filtro de nota (ambos precisam passar)."""
    resultado = list(estudantes)

    if estado.busca.strip():
        termo = estado.busca.lower()
        resultado = [e for e in resultado if _corresponde_busca(e, termo)]

    nota = estado.nota_filtro
    if nota is not None:
        resultado = [e for e in resultado if e.nota == nota]

    return resultado


# === ORDENAÇÃO ===

def _chave(campo: CampoOrdenacao):
    if campo == CampoOrdenacao.NOME:
        return lambda e: e.nome.lower()
    if campo == CampoOrdenacao.EMAIL:
        return lambda e: (e.email or '').lower()
    if campo == CampoOrdenacao.NOTA:
        return lambda e: e.nota
    return lambda e: e.criado_em or _DATA_MINIMA


def ordenar(estudantes: Sequence[Estudante], campo: CampoOrdenacao, ordem: Ordem) -> List[Estudante]:
    # sorted() é estável também com reverse=True: chaves iguais mantêm a ordem anterior
    return sorted(estudantes, key=_chave(campo), reverse=(ordem == Ordem.DESC))


# === ESTATÍSTICAS ===

def calcular_estatisticas(estudantes: Sequence[Estudante]) -> Estatisticas:
    """Sempre sobre a coleção completa, nunca sobre a lista filtrada."""
    contagem = {faixa: 0 for faixa in FaixaNota}
    for estudante in estudantes:
        contagem[estudante.faixa] += 1

    total = len(estudantes)
    media = sum(e.nota for e in estudantes) / total if total else 0.0

    return Estatisticas(
        total=total,
        excelente=contagem[FaixaNota.EXCELENTE],
        bom=contagem[FaixaNota.BOM],
        regular=contagem[FaixaNota.REGULAR],
        baixo=contagem[FaixaNota.BAIXO],
        media=media,
    )


def opcoes_de_nota(estudantes: Iterable[Estudante]) -> List[Tuple[str, str]]:
    """Notas distintas (maior primeiro), precedidas de 'Todas as notas'."""
    notas = sorted({e.nota for e in estudantes}, reverse=True)
    opcoes = [OPCAO_TODAS_AS_NOTAS]
    for nota in notas:
        valor = formatar_numero(nota)
        opcoes.append((valor, f"Nota {valor}"))
    return opcoes


def derivar_visao(estudantes: Sequence[Estudante], estado: EstadoVisao) -> Visao:
    exibidos = ordenar(filtrar(estudantes, estado), estado.campo, estado.ordem)
    return Visao(
        exibidos=exibidos,
        estatisticas=calcular_estatisticas(estudantes),
        opcoes_nota=opcoes_de_nota(estudantes),
    )
