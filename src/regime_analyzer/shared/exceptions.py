"""Custom exceptions for Regime Analyzer."""

from typing import Optional


class RegimeAnalyzerError(Exception):
    """Base exception for all Regime Analyzer errors."""

    pass


class InputValidationError(RegimeAnalyzerError):
    """Mandatory input missing or invalid.

    Carries the offending field and a remediation hint so callers can tell
    the user what to fix instead of getting a silently defaulted figure.
    """

    def __init__(self, message: str, campo: Optional[str] = None, dica: Optional[str] = None):
        super().__init__(message)
        self.campo = campo
        self.dica = dica

    def __str__(self) -> str:
        message = super().__str__()
        if self.dica:
            return f"{message} ({self.dica})"
        return message


class ReferenceDataError(RegimeAnalyzerError):
    """Reference data file could not be read or has an invalid layout."""

    pass


class CalculationError(RegimeAnalyzerError):
    """Internal inconsistency detected while computing a regime."""

    pass
