"""Rich console configuration for CLI output."""

from rich.console import Console
from rich.theme import Theme

from regime_analyzer.core.models.enums import Severity

# Custom theme for Regime Analyzer
THEME = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "red bold",
        "critical": "red bold reverse",
        "success": "green",
        "highlight": "magenta",
        "muted": "dim",
        "header": "bold blue",
        "value": "bold",
        "currency": "green",
        "best": "bold green",
        "excluded": "dim strike",
        "opportunity": "green",
    }
)

# Global console instance
console = Console(theme=THEME)

SEVERITY_STYLES = {
    Severity.INFO: "info",
    Severity.OPORTUNIDADE: "opportunity",
    Severity.ATENCAO: "warning",
    Severity.CRITICO: "critical",
}

SEVERITY_LABELS = {
    Severity.INFO: "INFO",
    Severity.OPORTUNIDADE: "OPORTUNIDADE",
    Severity.ATENCAO: "ATENÇÃO",
    Severity.CRITICO: "CRÍTICO",
}


def print_error(message: str) -> None:
    """Print error message."""
    console.print(f"[error]Erro:[/error] {message}")


def print_warning(message: str) -> None:
    """Print warning message."""
    console.print(f"[warning]Aviso:[/warning] {message}")


def print_success(message: str) -> None:
    """Print success message."""
    console.print(f"[success]{message}[/success]")
