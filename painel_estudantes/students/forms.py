"""
Formulários do Módulo de Estudantes (Regras de Validação)

Toda validação acontece aqui, antes de qualquer chamada à API.
Os mesmos campos servem ao cadastro e à edição.
"""

import math

from flask_wtf import FlaskForm
from wtforms import FloatField, StringField
from wtforms.validators import DataRequired, Email, NumberRange, Regexp, StopValidation, ValidationError

from painel_estudantes.core import constants as c
from painel_estudantes.core.formatters import somente_digitos


def _aparar(valor):
    return valor.strip() if isinstance(valor, str) else valor


def _limpar_cpf(valor):
    # Remove a pontuação (123.456.789-01) antes da validação
    return somente_digitos(valor) if isinstance(valor, str) else valor


class NotaField(FloatField):
    """
    Campo de nota que aceita vírgula como separador decimal ("7,5").
    Texto que não vira número gera 'Nota inválida', separado dos erros de faixa.
    """

    def process_formdata(self, valuelist):
        if not valuelist:
            return

        texto = str(valuelist[0]).strip().replace(',', '.')
        try:
            valor = float(texto)
        except ValueError:
            self.data = None
            raise ValueError(c.MSG_NOTA_INVALIDA)

        if not math.isfinite(valor):
            self.data = None
            raise ValueError(c.MSG_NOTA_INVALIDA)

        self.data = valor


def nota_numerica(form, field):
    # Se a conversão falhou o erro já está registrado; evita somar erros de faixa
    if field.data is None:
        if not field.errors:
            raise StopValidation(c.MSG_NOTA_INVALIDA)
        raise StopValidation()


def _validadores_nota():
    return [
        nota_numerica,
        NumberRange(min=c.NOTA_MINIMA, message=c.MSG_NOTA_MINIMA),
        NumberRange(max=c.NOTA_MAXIMA, message=c.MSG_NOTA_MAXIMA),
    ]


class CadastroEstudanteForm(FlaskForm):
    """Cadastro: nome, CPF e nota. O email entra depois, pela edição."""

    nome = StringField('Nome Completo', filters=[_aparar], validators=[
        DataRequired(message=c.MSG_NOME_OBRIGATORIO)
    ])
    cpf = StringField('CPF', filters=[_limpar_cpf], validators=[
        Regexp(r'^\d{11}$', message=c.MSG_CPF_INVALIDO)
    ])
    nota = NotaField('Nota', validators=_validadores_nota())


class EdicaoEstudanteForm(CadastroEstudanteForm):
    """
    Edição: valida o registro completo (inclusive email).

    O email só pode ficar em branco enquanto o estudante ainda não tiver um.
    """

    email = StringField('Email', filters=[_aparar])

    def __init__(self, *args, exige_email=True, **kwargs):
        super().__init__(*args, **kwargs)
        self.exige_email = exige_email

    def validate_email(self, field):
        if not field.data:
            if self.exige_email:
                raise ValidationError(c.MSG_EMAIL_INVALIDO)
            return
        Email(message=c.MSG_EMAIL_INVALIDO)(self, field)

    def dados_validados(self) -> dict:
        return {
            'nome': self.nome.data,
            'cpf': self.cpf.data,
            'email': self.email.data or None,
            'nota': self.nota.data,
        }


class ConfirmarDesativacaoForm(FlaskForm):
    """Sem campos: existe para carregar o token CSRF da confirmação."""
