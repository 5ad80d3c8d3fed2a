"""Immutable rate configuration injected into the calculators.

``DEFAULT_RULES`` mirrors the national tables in ``tax_constants``. Tests and
what-if simulations build their own ``TaxRulesConfig`` (for example with
``DEFAULT_RULES.model_copy(update={...})``) instead of patching globals.
"""

from decimal import Decimal

from pydantic import BaseModel, Field

from regime_analyzer.core.rules import tax_constants as tc


class SimplesBracket(BaseModel):
    """One Simples Nacional bracket."""

    faixa: int = Field(..., ge=1, description="1-based bracket index")
    limite: Decimal = Field(..., description="Upper bound of RBT12")
    aliquota: Decimal = Field(..., description="Nominal rate")
    deducao: Decimal = Field(..., description="Amount to deduct")

    model_config = {"frozen": True}


def _brackets(tabela: list[tuple[Decimal, Decimal, Decimal]]) -> tuple[SimplesBracket, ...]:
    return tuple(
        SimplesBracket(faixa=i, limite=limite, aliquota=aliquota, deducao=deducao)
        for i, (limite, aliquota, deducao) in enumerate(tabela, 1)
    )


class TaxRulesConfig(BaseModel):
    """National rates, limits and bracket tables."""

    # Limits
    limite_simples: Decimal = tc.LIMITE_SIMPLES_NACIONAL
    sublimite_padrao: Decimal = tc.SUBLIMITE_ICMS_ISS
    limite_presumido: Decimal = tc.LIMITE_LUCRO_PRESUMIDO

    # IRPJ / CSLL
    aliquota_irpj: Decimal = tc.ALIQUOTA_IRPJ
    aliquota_adicional_irpj: Decimal = tc.ALIQUOTA_ADICIONAL_IRPJ
    limite_adicional_mensal: Decimal = tc.LIMITE_ADICIONAL_MENSAL
    aliquota_csll: Decimal = tc.ALIQUOTA_CSLL

    # PIS / COFINS
    pis_cumulativo: Decimal = tc.PIS_CUMULATIVO
    cofins_cumulativo: Decimal = tc.COFINS_CUMULATIVO
    pis_nao_cumulativo: Decimal = tc.PIS_NAO_CUMULATIVO
    cofins_nao_cumulativo: Decimal = tc.COFINS_NAO_CUMULATIVO

    # Payroll
    aliquota_cpp: Decimal = tc.CPP_TOTAL

    # Lucro Real
    limite_compensacao: Decimal = tc.LIMITE_COMPENSACAO_PREJUIZO
    aliquota_irrf_jcp: Decimal = tc.ALIQUOTA_IRRF_JCP
    limite_jcp_lucro: Decimal = tc.LIMITE_JCP_LUCRO
    limite_jcp_reservas: Decimal = tc.LIMITE_JCP_RESERVAS
    parcelas_credito_imobilizado: int = tc.PARCELAS_CREDITO_IMOBILIZADO
    parcelas_credito_edificacoes: int = tc.PARCELAS_CREDITO_EDIFICACOES
    taxas_depreciacao: dict[str, Decimal] = Field(default_factory=lambda: dict(tc.TAXAS_DEPRECIACAO))

    # Simples Nacional
    limite_fator_r: Decimal = tc.LIMITE_FATOR_R
    tabelas_simples: dict[str, tuple[SimplesBracket, ...]] = Field(
        default_factory=lambda: {anexo: _brackets(t) for anexo, t in tc.TABELAS_SIMPLES.items()}
    )
    partilha_icms_iss: dict[str, Decimal] = Field(default_factory=lambda: dict(tc.PARTILHA_ICMS_ISS))

    # State / municipal
    credito_icms_estimado: Decimal = tc.CREDITO_ICMS_ESTIMADO

    # Presumption: category -> (IRPJ, CSLL)
    presuncao: dict[str, tuple[Decimal, Decimal]] = Field(default_factory=lambda: dict(tc.PRESUNCAO))

    model_config = {"frozen": True}

    @property
    def pis_cofins_cumulativo(self) -> Decimal:
        return self.pis_cumulativo + self.cofins_cumulativo

    @property
    def pis_cofins_nao_cumulativo(self) -> Decimal:
        return self.pis_nao_cumulativo + self.cofins_nao_cumulativo

    def tabela_simples(self, anexo: str) -> tuple[SimplesBracket, ...]:
        """Bracket table for an annex ("I".."V")."""
        return self.tabelas_simples[anexo]

    def limite_adicional(self, meses: int) -> Decimal:
        """IRPJ surtax threshold prorated to the period length."""
        return self.limite_adicional_mensal * meses


DEFAULT_RULES = TaxRulesConfig()
