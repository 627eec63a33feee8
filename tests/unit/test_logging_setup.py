"""
Testes unitários para a configuração de logging da CLI
"""

import logging
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from core.logging.setup import (
    ROOT_LOGGER_NAME, get_logger, reset_logging, resolve_level, setup_logging
)


class TestResolveLevel:

    def test_verbose_wins(self):
        assert resolve_level(verbose=True, level_name="ERROR") == logging.DEBUG

    @pytest.mark.parametrize("name, expected", [
        ("warning", logging.WARNING),
        ("ERROR", logging.ERROR),
        ("barulhento", logging.INFO),
    ])
    def test_level_names(self, name, expected):
        assert resolve_level(level_name=name) == expected


class TestSetupLogging:

    def test_repeated_setup_does_not_duplicate_handlers(self):
        """Testa que chamar setup duas vezes mantém um único handler de console."""
        logger = setup_logging()
        setup_logging()
        assert len(logger.handlers) == 1
        assert logger.name == ROOT_LOGGER_NAME

    def test_second_call_applies_verbose(self):
        """Testa que a segunda chamada com verbose reajusta o nível do console."""
        logger = setup_logging(verbose=False)
        setup_logging(verbose=True)
        assert logger.handlers[0].level == logging.DEBUG
        assert logger.level == logging.DEBUG

    def test_log_file_receives_debug(self, tmp_path):
        log_file = tmp_path / "mpc.log"
        setup_logging(log_file=log_file)

        get_logger("Pipeline").debug("detalhe interno")
        reset_logging()

        text = log_file.read_text(encoding="utf-8")
        assert "MangaPanelCut.Pipeline - DEBUG - detalhe interno" in text

    def test_console_format(self, capsys):
        setup_logging()
        get_logger("Pipeline").warning("atenção")
        assert capsys.readouterr().out == "[WARNING] atenção\n"

    def test_reset_removes_handlers(self):
        setup_logging()
        reset_logging()
        logger = logging.getLogger(ROOT_LOGGER_NAME)
        assert logger.handlers == []
        assert logger.propagate


def test_get_logger_namespace():
    assert get_logger("Pipeline").name == "MangaPanelCut.Pipeline"
    root = logging.getLogger(ROOT_LOGGER_NAME)
    assert get_logger("Pipeline").parent is root
