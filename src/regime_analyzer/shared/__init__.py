"""Shared utilities for Regime Analyzer."""

from regime_analyzer.shared.formatters import format_currency, format_percentage, format_rate
from regime_analyzer.shared.logging import configure_logging, get_logger
from regime_analyzer.shared.validators import (
    UFS,
    format_cnae,
    format_cnpj,
    is_valid_uf,
    normalize_text,
    normalize_uf,
    validar_cnpj,
)

__all__ = [
    # Formatters
    "format_currency",
    "format_percentage",
    "format_rate",
    # Logging
    "configure_logging",
    "get_logger",
    # Validators
    "UFS",
    "format_cnae",
    "format_cnpj",
    "is_valid_uf",
    "normalize_text",
    "normalize_uf",
    "validar_cnpj",
]
