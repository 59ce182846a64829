"""
Módulo de Logging Centralizado.

Todos os módulos do painel obtêm seus loggers por aqui, garantindo o mesmo
formato de saída (stdout) para o servidor de desenvolvimento e para containers.
"""

import logging
import os
import sys

FORMATO_LOG = '[%(asctime)s] %(levelname)s in %(module)s: %(message)s'


def _nivel_configurado() -> int:
    nivel = os.environ.get('LOG_LEVEL', 'INFO').upper()
    return getattr(logging, nivel, logging.INFO)


def get_logger(name: str) -> logging.Logger:
    """
    Configura e retorna uma instância de logger com formatação padronizada.

    Args:
        name (str): O nome do módulo que está chamando o log (geralmente __name__).

    Returns:
        logging.Logger: Instância configurada do logger.
    """
    logger = logging.getLogger(name)

    # Evita adicionar múltiplos handlers se o logger já estiver configurado
    if not logger.handlers:
        logger.setLevel(_nivel_configurado())

        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(FORMATO_LOG))
        logger.addHandler(handler)

    return logger


def configurar_nivel(nivel: str) -> None:
    """
    Reaplica o nível de log (vindo de app.config['LOG_LEVEL']) aos loggers do painel.
    """
    valor = getattr(logging, str(nivel).upper(), logging.INFO)
    for nome, logger in logging.root.manager.loggerDict.items():
        if nome.startswith('painel_estudantes') and isinstance(logger, logging.Logger):
            logger.setLevel(valor)
