"""
Constantes Globais do Painel.
Fonte Única da Verdade para mensagens e limites exibidos ao usuário.
"""

NOME_SISTEMA = 'Sistema de Gestão de Estudantes'

# === REGRAS DE NEGÓCIO (Cliente) ===
CPF_DIGITOS = 11
NOTA_MINIMA = 0.0
NOTA_MAXIMA = 10.0

# Chave do busy flag do formulário de cadastro (ainda sem id)
CHAVE_NOVO_ESTUDANTE = 'novo'

# Limite das rotas de escrita (Flask-Limiter)
LIMITE_ESCRITA = '30 per minute'

# === MENSAGENS DE VALIDAÇÃO ===
MSG_NOME_OBRIGATORIO = 'Nome é obrigatório'
MSG_CPF_INVALIDO = 'CPF deve conter exatamente 11 números'
MSG_EMAIL_INVALIDO = 'Email inválido'
MSG_NOTA_INVALIDA = 'Nota inválida'
MSG_NOTA_MINIMA = 'Nota mínima é 0'
MSG_NOTA_MAXIMA = 'Nota máxima é 10'

# === MENSAGENS DE FLUXO (uma por operação) ===
MSG_ERRO_LISTAGEM = 'Ocorreu um erro ao carregar a lista de estudantes.'
MSG_ERRO_DETALHE = 'Ocorreu um erro ao carregar o estudante.'
MSG_ERRO_CADASTRO = 'Erro ao adicionar estudante. Tente novamente.'
MSG_ERRO_EDICAO = 'Erro inesperado. Tente novamente.'
MSG_ERRO_DESATIVACAO = 'Erro ao desativar estudante.'
MSG_OPERACAO_EM_ANDAMENTO = 'Já existe uma operação em andamento para este estudante. Aguarde.'

MSG_SUCESSO_CADASTRO = 'Estudante cadastrado com sucesso.'
MSG_SUCESSO_EDICAO = 'Estudante atualizado com sucesso.'
MSG_SUCESSO_SEM_ALTERACAO = 'Nenhuma alteração para salvar.'
MSG_SUCESSO_DESATIVACAO = 'Estudante desativado.'

MESES = [
    'janeiro', 'fevereiro', 'março', 'abril', 'maio', 'junho',
    'julho', 'agosto', 'setembro', 'outubro', 'novembro', 'dezembro'
]
