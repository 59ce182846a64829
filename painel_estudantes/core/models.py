"""
Modelos de Domínio (Estudante)

Representa o estudante exatamente como o backend o devolve. O cliente nunca
cria ids nem timestamps: tudo isso vem da API.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional


class FaixaNota(Enum):
    """
    Faixas de desempenho usadas nos cards de estatística e nos badges.
    Cada membro carrega (chave, nota mínima, cor, rótulo).
    """

    EXCELENTE = ('excelente', 9.0, 'green', 'Excelente')
    BOM = ('bom', 7.0, 'blue', 'Bom')
    REGULAR = ('regular', 5.0, 'yellow', 'Regular')
    BAIXO = ('baixo', float('-inf'), 'red', 'Precisa Melhorar')

    def __init__(self, chave, minimo, cor, rotulo):
        self.chave = chave
        self.minimo = minimo
        self.cor = cor
        self.rotulo = rotulo


def faixa_da_nota(nota: float) -> FaixaNota:
    # Membros declarados do maior limite para o menor
    for faixa in FaixaNota:
        if nota >= faixa.minimo:
            return faixa
    return FaixaNota.BAIXO


def parse_timestamp(valor: Any) -> Optional[datetime]:
    """
    Converte o timestamp ISO-8601 da API em datetime com fuso.
    Valores sem fuso são tratados como UTC; valores ilegíveis viram None.
    """
    if isinstance(valor, datetime):
        data = valor
    elif isinstance(valor, str) and valor.strip():
        texto = valor.strip()
        if texto.endswith('Z'):
            texto = texto[:-1] + '+00:00'
        try:
            data = datetime.fromisoformat(texto)
        except ValueError:
            return None
    else:
        return None

    if data.tzinfo is None:
        data = data.replace(tzinfo=timezone.utc)
    return data


@dataclass(frozen=True)
class Estudante:
    id: str
    nome: str
    cpf: str
    nota: float
    email: Optional[str] = None
    primeira_letra_unica: Optional[str] = None
    criado_em: Optional[datetime] = None
    atualizado_em: Optional[datetime] = None

    @classmethod
    def from_dict(cls, dados: dict) -> 'Estudante':
        """Monta o estudante a partir do JSON da API (chaves em camelCase)."""
        return cls(
            id=str(dados['id']),
            nome=dados.get('name') or '',
            cpf=str(dados.get('cpf') or ''),
            nota=float(dados.get('grade') or 0),
            email=dados.get('email') or None,
            primeira_letra_unica=dados.get('firstLetterThatDontRepeat'),
            criado_em=parse_timestamp(dados.get('createdAt')),
            atualizado_em=parse_timestamp(dados.get('updatedAt')),
        )

    @property
    def faixa(self) -> FaixaNota:
        return faixa_da_nota(self.nota)

    @property
    def percentual(self) -> float:
        """Nota em escala 0-100, usada na barra de progresso."""
        return self.nota / 10 * 100
