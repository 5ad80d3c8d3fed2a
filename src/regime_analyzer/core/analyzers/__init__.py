"""Analyzers for regime comparison."""

from regime_analyzer.core.analyzers.advisories import (
    AdvisoryBuilder,
    gerar_recomendacao,
    gerar_vantagens,
)
from regime_analyzer.core.analyzers.comparison import (
    RegimeComparator,
    compare_regimes,
    rank_results,
)
from regime_analyzer.core.analyzers.scenarios import analyze_scenarios, compare_states

__all__ = [
    "AdvisoryBuilder",
    "RegimeComparator",
    "analyze_scenarios",
    "compare_regimes",
    "compare_states",
    "gerar_recomendacao",
    "gerar_vantagens",
    "rank_results",
]
