"""Tests for settings, logging and exceptions."""

import logging

from rich.logging import RichHandler

from regime_analyzer.shared.exceptions import InputValidationError, RegimeAnalyzerError
from regime_analyzer.shared.logging import configure_logging, get_logger
from regime_analyzer.shared.settings import Settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("REGIME_ANALYZER_ANO_REFERENCIA", raising=False)
        settings = Settings(_env_file=None)

        assert settings.log_level == "WARNING"
        assert settings.ano_referencia == 2025
        assert settings.reference_data_path is None

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("REGIME_ANALYZER_ANO_REFERENCIA", "2024")
        monkeypatch.setenv("REGIME_ANALYZER_UF_PADRAO", "PE")

        settings = Settings(_env_file=None)

        assert settings.ano_referencia == 2024
        assert settings.uf_padrao == "PE"


class TestLogging:
    def test_loggers_share_package_prefix(self):
        assert get_logger("regime_analyzer.core").name == "regime_analyzer.core"
        assert get_logger("tests").name == "regime_analyzer.tests"

    def test_handler_added_once(self):
        configure_logging("INFO")
        logger = configure_logging("WARNING")

        assert logger.level == logging.WARNING
        assert sum(isinstance(h, RichHandler) for h in logger.handlers) == 1


class TestExceptions:
    def test_hint_in_message(self):
        erro = InputValidationError("Receita inválida", campo="receita_periodo", dica="informe um valor positivo")

        assert isinstance(erro, RegimeAnalyzerError)
        assert erro.campo == "receita_periodo"
        assert str(erro) == "Receita inválida (informe um valor positivo)"
