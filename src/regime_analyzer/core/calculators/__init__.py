"""Regime calculators."""

from regime_analyzer.core.calculators.lucro_real import LucroRealEngine
from regime_analyzer.core.calculators.presumido import LucroPresumidoCalculator
from regime_analyzer.core.calculators.simples import SimplesNacionalCalculator

__all__ = [
    "LucroPresumidoCalculator",
    "LucroRealEngine",
    "SimplesNacionalCalculator",
]
