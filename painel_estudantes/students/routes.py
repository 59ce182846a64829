"""
Rotas do Módulo de Estudantes

Fluxo de cada formulário:
idle -> submetendo -> (sucesso -> redireciona para a listagem, que relê a API)
                    | (erro de validação -> formulário com erros por campo)
                    | (erro de rede -> formulário/listagem com mensagem geral)
"""

from flask import (
    render_template,
    redirect,
    url_for,
    flash,
    abort,
    request
)

from . import students_bp
from . import services
from .forms import CadastroEstudanteForm, EdicaoEstudanteForm, ConfirmarDesativacaoForm
from .view import CampoOrdenacao, EstadoVisao, Ordem
from painel_estudantes.core import constants as c
from painel_estudantes.core.exceptions import ApiError, EstudanteNaoEncontradoError, OperacaoEmAndamentoError
from painel_estudantes.core.extensions import limiter, student_api
from painel_estudantes.core.logger import get_logger

logger = get_logger(__name__)


def _carregar_ou_404(estudante_id):
    """
    Busca o estudante na API. Inexistente vira 404; outras falhas
    sobem como ApiError para a rota decidir.
    """
    try:
        return services.buscar_estudante(student_api, estudante_id)
    except EstudanteNaoEncontradoError:
        logger.warning(f"Estudante não encontrado: {estudante_id}")
        abort(404)


# === LISTAGEM ===

@students_bp.route('/')
def listar():
    """Lista completa + busca, filtro de nota, ordenação e estatísticas."""
    estado = EstadoVisao.from_args(request.args)

    try:
        painel = services.carregar_painel(student_api, estado)
    except ApiError as e:
        logger.error(f"Erro ao carregar listagem: {e}", exc_info=True)
        return render_template('students/lista.html', erro=c.MSG_ERRO_LISTAGEM, estado=estado), 502

    return render_template(
        'students/lista.html',
        painel=painel,
        estado=estado,
        campos=CampoOrdenacao,
        ordem_asc=Ordem.ASC,
    )


# === CADASTRO ===

@students_bp.route('/novo', methods=['GET', 'POST'])
@limiter.limit(c.LIMITE_ESCRITA, methods=['POST'])
def novo():
    form = CadastroEstudanteForm()

    if request.method == 'POST':
        if not form.validate_on_submit():
            return render_template('students/novo.html', form=form), 400

        try:
            services.cadastrar_estudante(student_api, form.nome.data, form.cpf.data, form.nota.data)
        except OperacaoEmAndamentoError:
            return render_template('students/novo.html', form=form, erro_geral=c.MSG_OPERACAO_EM_ANDAMENTO, ocupado=True), 409
        except ApiError as e:
            logger.error(f"Erro ao cadastrar estudante: {e}")
            return render_template('students/novo.html', form=form, erro_geral=c.MSG_ERRO_CADASTRO), 502

        flash(c.MSG_SUCESSO_CADASTRO, 'success')
        return redirect(url_for('students_bp.listar'))

    return render_template('students/novo.html', form=form, ocupado=services.em_andamento(c.CHAVE_NOVO_ESTUDANTE))


# === DETALHE ===

@students_bp.route('/<estudante_id>')
def detalhe(estudante_id):
    try:
        estudante = _carregar_ou_404(estudante_id)
    except ApiError as e:
        logger.error(f"Erro ao carregar estudante {estudante_id}: {e}")
        flash(c.MSG_ERRO_DETALHE, 'error')
        return redirect(url_for('students_bp.listar'))

    return render_template('students/detalhe.html', estudante=estudante)


# === EDIÇÃO ===

@students_bp.route('/<estudante_id>/editar', methods=['GET', 'POST'])
@limiter.limit(c.LIMITE_ESCRITA, methods=['POST'])
def editar(estudante_id):
    try:
        original = _carregar_ou_404(estudante_id)
    except ApiError as e:
        logger.error(f"Erro ao carregar estudante {estudante_id}: {e}")
        flash(c.MSG_ERRO_DETALHE, 'error')
        return redirect(url_for('students_bp.listar'))

    exige_email = bool(original.email)

    if request.method == 'GET':
        form = EdicaoEstudanteForm(
            data={
                'nome': original.nome,
                'cpf': original.cpf,
                'email': original.email or '',
                'nota': original.nota,
            },
            exige_email=exige_email,
        )
        return render_template(
            'students/editar.html', form=form, estudante=original,
            ocupado=services.em_andamento(estudante_id)
        )

    form = EdicaoEstudanteForm(exige_email=exige_email)
    if not form.validate_on_submit():
        return render_template('students/editar.html', form=form, estudante=original), 400

    try:
        aplicados = services.atualizar_estudante(student_api, original, form.dados_validados())
    except OperacaoEmAndamentoError:
        return render_template(
            'students/editar.html', form=form, estudante=original,
            erro_geral=c.MSG_OPERACAO_EM_ANDAMENTO, ocupado=True
        ), 409
    except ApiError as e:
        logger.error(f"Erro ao editar estudante {estudante_id}: {e}")
        return render_template(
            'students/editar.html', form=form, estudante=original,
            erro_geral=c.MSG_ERRO_EDICAO
        ), 502

    if aplicados:
        flash(c.MSG_SUCESSO_EDICAO, 'success')
    else:
        flash(c.MSG_SUCESSO_SEM_ALTERACAO, 'info')
    return redirect(url_for('students_bp.listar'))


# === DESATIVAÇÃO ===

@students_bp.route('/<estudante_id>/desativar', methods=['GET', 'POST'])
@limiter.limit(c.LIMITE_ESCRITA, methods=['POST'])
def desativar(estudante_id):
    form = ConfirmarDesativacaoForm()

    if request.method == 'GET':
        try:
            estudante = _carregar_ou_404(estudante_id)
        except ApiError as e:
            logger.error(f"Erro ao carregar estudante {estudante_id}: {e}")
            flash(c.MSG_ERRO_DETALHE, 'error')
            return redirect(url_for('students_bp.listar'))
        return render_template(
            'students/desativar.html', form=form, estudante=estudante,
            ocupado=services.em_andamento(estudante_id)
        )

    if not form.validate_on_submit():
        abort(400)

    try:
        services.desativar_estudante(student_api, estudante_id)
    except OperacaoEmAndamentoError:
        flash(c.MSG_OPERACAO_EM_ANDAMENTO, 'warning')
        return redirect(url_for('students_bp.listar'))
    except ApiError as e:
        logger.error(f"Erro ao desativar estudante {estudante_id}: {e}")
        flash(c.MSG_ERRO_DESATIVACAO, 'error')
        return redirect(url_for('students_bp.listar'))

    flash(c.MSG_SUCESSO_DESATIVACAO, 'success')
    return redirect(url_for('students_bp.listar'))
