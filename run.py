"""
Ponto de Entrada da Aplicação (Runner)

Este script importa a "Application Factory" (create_app) do pacote
'painel_estudantes' e inicia o servidor de desenvolvimento do Flask.

Para executar o servidor:
(Com o ambiente virtual .venv ativo e STUDENT_API_URL no .env)
$ python run.py
"""

from painel_estudantes import create_app

# Cria a instância da aplicação usando a factory
app = create_app()

if __name__ == "__main__":
    # debug=True (auto-reload) quando FLASK_DEBUG=True estiver no .env
    app.run(host='0.0.0.0', port=5000, debug=app.config['DEBUG'])
