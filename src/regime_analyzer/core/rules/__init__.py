"""National tax rules, CNAE tables and rate configuration."""

from regime_analyzer.core.rules.cnae_rules import (
    CATEGORIAS,
    REGRAS_CNAE,
    REGRAS_PREFIXO,
    RegraCNAE,
    RegraCategoria,
    buscar_regra_cnae,
)
from regime_analyzer.core.rules.config import DEFAULT_RULES, SimplesBracket, TaxRulesConfig
from regime_analyzer.core.rules.tax_constants import (
    LIMITE_LUCRO_PRESUMIDO,
    LIMITE_SIMPLES_NACIONAL,
    PRESUNCAO,
    SUBLIMITE_ICMS_ISS,
    TABELAS_SIMPLES,
    calcular_aliquota_efetiva_simples,
)

__all__ = [
    "CATEGORIAS",
    "DEFAULT_RULES",
    "LIMITE_LUCRO_PRESUMIDO",
    "LIMITE_SIMPLES_NACIONAL",
    "PRESUNCAO",
    "REGRAS_CNAE",
    "REGRAS_PREFIXO",
    "RegraCNAE",
    "RegraCategoria",
    "SUBLIMITE_ICMS_ISS",
    "SimplesBracket",
    "TABELAS_SIMPLES",
    "TaxRulesConfig",
    "buscar_regra_cnae",
    "calcular_aliquota_efetiva_simples",
]
