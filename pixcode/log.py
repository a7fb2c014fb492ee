from logging.handlers import RotatingFileHandler
from pixcode import config
import os
import logging


_FORMATO_ARQUIVO = '[%(asctime)s] [%(levelname)s] - [%(message)s]'
_FORMATO_CONSOLE = '%(levelname)s: %(message)s'


def configurar_logging(diretorio=None, nivel=None):
    diretorio = diretorio or config.LOG_DIR
    nivel = nivel or config.LOG_LEVEL

    logger = logging.getLogger()

    # Cada módulo chama esta função ao ser importado.
    if getattr(logger, '_pixcode_configurado', False):
        return logger

    logger.setLevel(nivel)

    if not os.path.exists(diretorio):
        os.makedirs(diretorio)

    file_handler = RotatingFileHandler(
        os.path.join(diretorio, 'app.log'),
        maxBytes=config.LOG_MAX_BYTES,
        backupCount=config.LOG_BACKUP_COUNT
    )

    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(logging.Formatter(_FORMATO_ARQUIVO))

    console = logging.StreamHandler()
    console.setLevel(logging.DEBUG)
    console.setFormatter(logging.Formatter(_FORMATO_CONSOLE))

    logger.addHandler(file_handler)
    logger.addHandler(console)
    logger._pixcode_configurado = True

    return logger
