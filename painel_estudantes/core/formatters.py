"""
Formatadores de Exibição.

Funções puras usadas pelos templates (registradas como filtros Jinja em
create_app). Nada aqui altera o dado armazenado: o CPF continua cru no
modelo, só a apresentação muda.
"""

import re
from datetime import datetime
from typing import Optional

from painel_estudantes.core.constants import CPF_DIGITOS, MESES


def somente_digitos(valor: Optional[str]) -> str:
    if not valor:
        return ''
    return re.sub(r'\D', '', valor)


def formatar_cpf(cpf: Optional[str]) -> str:
    """
    '12345678901' -> '123.456.789-01'. Valores que não têm 11 dígitos
    são devolvidos como vieram.
    """
    digitos = somente_digitos(cpf)
    if len(digitos) != CPF_DIGITOS:
        return cpf or ''
    return f"{digitos[:3]}.{digitos[3:6]}.{digitos[6:9]}-{digitos[9:]}"


def formatar_data(data: Optional[datetime]) -> str:
    """Data por extenso: '15 de março de 2024'."""
    if data is None:
        return '-'
    return f"{data.day} de {MESES[data.month - 1]} de {data.year}"


def formatar_data_hora(data: Optional[datetime]) -> str:
    if data is None:
        return '-'
    return data.strftime('%d/%m/%Y %H:%M:%S')


def formatar_nota(nota: Optional[float]) -> str:
    """Uma casa decimal, como nos badges: 9.5, 7.0."""
    if nota is None:
        return '-'
    return f"{nota:.1f}"


def formatar_numero(valor: float) -> str:
    """
    Representação exata, sem o '.0' final: 6.0 -> '6', 9.5 -> '9.5'.
    float(formatar_numero(x)) == x, então serve como valor de filtro.
    """
    texto = repr(float(valor))
    return texto[:-2] if texto.endswith('.0') else texto


def iniciais(nome: Optional[str]) -> str:
    # Primeira letra das duas primeiras palavras
    partes = (nome or '').split()
    return ''.join(parte[0] for parte in partes).upper()[:2]
