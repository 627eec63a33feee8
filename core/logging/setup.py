"""
MangaPanelCut - Configuração de Logging

Um único logger raiz ("MangaPanelCut") com handler de console e, opcionalmente,
arquivo. Os módulos pegam filhos via get_logger("Pipeline") etc.; a CLI chama
setup_logging() uma vez por execução e os testes desfazem com reset_logging().
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

from config.settings import LOG_LEVEL

ROOT_LOGGER_NAME = "MangaPanelCut"

CONSOLE_FORMAT = '[%(levelname)s] %(message)s'
FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def resolve_level(verbose: bool = False, level_name: str = LOG_LEVEL) -> int:
    """
    Converte o nível configurado em constante do logging.

    verbose sempre vence; nomes desconhecidos caem em INFO.
    """
    if verbose:
        return logging.DEBUG
    level = logging.getLevelName(str(level_name).upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(
    name: str = ROOT_LOGGER_NAME,
    verbose: bool = False,
    log_file: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """
    Configura o logger principal da CLI.

    Chamadas repetidas não duplicam handlers: o nível do console é
    reajustado e o arquivo só é adicionado se ainda não houver um.

    Args:
        name: Nome do logger
        verbose: Se True, console em DEBUG (senão usa LOG_LEVEL)
        log_file: Caminho opcional para arquivo de log (sempre DEBUG)
    """
    logger = logging.getLogger(name)
    level = resolve_level(verbose)

    console = _find_handler(logger, logging.StreamHandler, exclude=logging.FileHandler)
    if console is None:
        console = logging.StreamHandler(sys.stdout)
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        logger.addHandler(console)
    console.setLevel(level)

    if log_file and _find_handler(logger, logging.FileHandler) is None:
        fh = logging.FileHandler(str(log_file), encoding='utf-8')
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(fh)

    # Logger deixa passar DEBUG quando há arquivo; cada handler filtra o seu
    has_file = _find_handler(logger, logging.FileHandler) is not None
    logger.setLevel(logging.DEBUG if has_file else level)
    logger.propagate = False

    # warnings.warn(...) vai para o logger "py.warnings"
    logging.captureWarnings(True)

    return logger


def reset_logging(name: str = ROOT_LOGGER_NAME) -> None:
    """Remove e fecha os handlers instalados por setup_logging."""
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


def get_logger(name: str) -> logging.Logger:
    """Retorna um logger filho com o namespace correto."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def _find_handler(logger, kind, exclude=None):
    for handler in logger.handlers:
        if isinstance(handler, kind) and not (exclude and isinstance(handler, exclude)):
            return handler
    return None
