"""Helpers shared by the regime calculators."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from regime_analyzer.core.models.activity import ActivityProfile
from regime_analyzer.core.models.jurisdiction import IncentiveFlag, JurisdictionProfile
from regime_analyzer.core.rules.config import TaxRulesConfig
from regime_analyzer.core.rules.tax_constants import CENTAVOS

ZERO = Decimal("0")


def arredondar(valor: Decimal) -> Decimal:
    """Round to cents, half up, floored at zero."""
    return max(valor, ZERO).quantize(CENTAVOS, rounding=ROUND_HALF_UP)


def fechar_componentes(componentes: dict[str, Decimal]) -> tuple[dict[str, Decimal], Decimal]:
    """Round every component and return them with their exact sum."""
    arredondados = {nome: arredondar(valor) for nome, valor in componentes.items()}
    return arredondados, sum(arredondados.values(), ZERO)


def imposto_irpj(
    base: Decimal,
    meses: int,
    rules: TaxRulesConfig,
    jurisdicao: Optional[JurisdictionProfile] = None,
) -> Decimal:
    """IRPJ at the normal rate plus the surtax above the prorated threshold."""
    aliquota, adicional, limite = aliquotas_irpj(meses, rules, jurisdicao)
    if base <= 0:
        return ZERO
    return base * aliquota + max(base - limite, ZERO) * adicional


def aliquotas_irpj(
    meses: int,
    rules: TaxRulesConfig,
    jurisdicao: Optional[JurisdictionProfile] = None,
) -> tuple[Decimal, Decimal, Decimal]:
    """(normal rate, surtax rate, surtax threshold for the period)."""
    federal = jurisdicao.federal if jurisdicao else None
    aliquota = (federal and federal.aliquota_irpj) or rules.aliquota_irpj
    adicional = (federal and federal.aliquota_adicional_irpj) or rules.aliquota_adicional_irpj
    limite_mensal = (federal and federal.limite_adicional_mensal) or rules.limite_adicional_mensal
    return aliquota, adicional, limite_mensal * meses


def aliquota_csll(rules: TaxRulesConfig, jurisdicao: Optional[JurisdictionProfile] = None) -> Decimal:
    if jurisdicao and jurisdicao.federal.aliquota_csll:
        return jurisdicao.federal.aliquota_csll
    return rules.aliquota_csll


def aliquotas_pis_cofins(
    rules: TaxRulesConfig,
    jurisdicao: Optional[JurisdictionProfile] = None,
    cumulativo: bool = True,
) -> tuple[Decimal, Decimal]:
    """(PIS, COFINS) rates for the cumulative or non-cumulative system."""
    federal = jurisdicao.federal if jurisdicao else None
    if cumulativo:
        pis = (federal and federal.pis_cumulativo) or rules.pis_cumulativo
        cofins = (federal and federal.cofins_cumulativo) or rules.cofins_cumulativo
    else:
        pis = (federal and federal.pis_nao_cumulativo) or rules.pis_nao_cumulativo
        cofins = (federal and federal.cofins_nao_cumulativo) or rules.cofins_nao_cumulativo
    return pis, cofins


def tributos_consumo(
    receita: Decimal,
    atividade: ActivityProfile,
    jurisdicao: JurisdictionProfile,
    rules: TaxRulesConfig,
) -> dict[str, Decimal]:
    """ISS or ICMS (plus the state surcharge) outside the Simples Nacional.

    ICMS is charged at the standard rate net of the estimated share offset by
    input credits. The poverty-fund surcharge applies only to goods.
    """
    if receita <= 0:
        return {}

    if atividade.is_servico:
        return {"iss": receita * jurisdicao.iss_aliquota_referencia}

    fator_debito = Decimal("1") - rules.credito_icms_estimado
    componentes = {"icms": receita * jurisdicao.icms_aliquota_padrao * fator_debito}
    if jurisdicao.adicional.existe and jurisdicao.adicional.aliquota > 0:
        componentes["adicional_icms"] = receita * jurisdicao.adicional.aliquota * fator_debito
    return componentes


def contribuicao_patronal(folha: Decimal, rules: TaxRulesConfig) -> Decimal:
    """Employer social security (INSS + RAT + third parties) on payroll."""
    if folha <= 0:
        return ZERO
    return folha * rules.aliquota_cpp


def reducao_incentivo(
    irpj: Decimal,
    jurisdicao: Optional[JurisdictionProfile],
) -> tuple[Decimal, Optional[IncentiveFlag]]:
    """IRPJ reduction of the active SUDAM/SUDENE program, if any.

    Returns:
        (reduction amount, incentive flag or None)
    """
    if jurisdicao is None or irpj <= 0:
        return ZERO, None
    incentivo = jurisdicao.incentivo_irpj
    if incentivo is None:
        return ZERO, None
    return irpj * incentivo.percentual_reducao, incentivo
