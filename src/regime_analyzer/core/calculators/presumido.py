"""Lucro Presumido calculator (Lei 9.249/1995, arts. 15 e 20)."""

from decimal import Decimal
from typing import Optional

from regime_analyzer.core.calculators.common import (
    ZERO,
    aliquota_csll,
    aliquotas_irpj,
    aliquotas_pis_cofins,
    arredondar,
    contribuicao_patronal,
    fechar_componentes,
    imposto_irpj,
    reducao_incentivo,
    tributos_consumo,
)
from regime_analyzer.core.models.activity import ActivityProfile
from regime_analyzer.core.models.enums import ExclusionReason
from regime_analyzer.core.models.jurisdiction import JurisdictionProfile
from regime_analyzer.core.models.results import PresumidoResult
from regime_analyzer.core.rules.config import DEFAULT_RULES, TaxRulesConfig
from regime_analyzer.shared.formatters import format_currency, format_rate
from regime_analyzer.shared.logging import get_logger

logger = get_logger(__name__)

BASE_LEGAL = (
    "Lei 9.249/1995, arts. 15 e 20; Lei 9.430/1996, arts. 25 e 29; "
    "Lei 9.718/1998 (PIS/COFINS cumulativos); RIR/2018, arts. 587 a 601"
)


class LucroPresumidoCalculator:
    """IRPJ/CSLL on presumed profit plus cumulative PIS/COFINS."""

    def __init__(self, rules: TaxRulesConfig = DEFAULT_RULES):
        self.rules = rules

    def check_eligibility(self, receita_anual: Decimal, atividade: ActivityProfile) -> Optional[ExclusionReason]:
        """Reason the entity is barred from Lucro Presumido, or None."""
        if atividade.lucro_real_obrigatorio:
            return ExclusionReason.LUCRO_REAL_MANDATORY
        if receita_anual > self.rules.limite_presumido:
            return ExclusionReason.PRESUMIDO_CEILING_EXCEEDED
        return None

    def calculate(
        self,
        receita_periodo: Decimal,
        atividade: ActivityProfile,
        jurisdicao: JurisdictionProfile,
        meses: int = 3,
        folha_periodo: Decimal = ZERO,
    ) -> PresumidoResult:
        """Compute the Lucro Presumido liability for the period.

        Args:
            receita_periodo: Gross revenue of the period
            atividade: Classified activity (presumption percentages, tax type)
            jurisdicao: State profile (ICMS/ISS rates, incentives)
            meses: Period length; scales the surtax threshold
            folha_periodo: Payroll of the period (CPP)

        Returns:
            PresumidoResult with bases, components and incentive detail
        """
        receita = max(receita_periodo, ZERO)
        alertas: list[str] = []

        base_irpj = receita * atividade.presuncao_irpj
        base_csll = receita * atividade.presuncao_csll
        _, _, limite_adicional = aliquotas_irpj(meses, self.rules, jurisdicao)

        irpj = imposto_irpj(base_irpj, meses, self.rules, jurisdicao)
        reducao, incentivo = reducao_incentivo(irpj, jurisdicao)
        if incentivo is not None:
            alertas.append(
                f"Redução de {format_rate(incentivo.percentual_reducao, 0)} do IRPJ "
                f"({incentivo.programa.value.upper()}): {incentivo.condicao}"
            )
        if base_irpj > limite_adicional:
            alertas.append(
                f"Adicional de IRPJ sobre {format_currency(base_irpj - limite_adicional)} "
                f"acima de {format_currency(limite_adicional)}"
            )

        pis, cofins = aliquotas_pis_cofins(self.rules, jurisdicao, cumulativo=True)

        componentes: dict[str, Decimal] = {
            "irpj": irpj - reducao,
            "csll": base_csll * aliquota_csll(self.rules, jurisdicao),
            "pis": receita * pis,
            "cofins": receita * cofins,
        }
        componentes.update(tributos_consumo(receita, atividade, jurisdicao, self.rules))

        cpp = contribuicao_patronal(folha_periodo, self.rules)
        if cpp > 0:
            componentes["cpp"] = cpp

        componentes, total = fechar_componentes(componentes)

        logger.debug(
            "presumido_calculated",
            extra={"presuncao": atividade.presuncao.value, "meses": meses, "total": str(total)},
        )

        return PresumidoResult(
            receita_bruta=arredondar(receita),
            componentes=componentes,
            total=total,
            alertas=tuple(alertas),
            base_legal=BASE_LEGAL,
            meses=meses,
            presuncao=atividade.presuncao,
            presuncao_irpj=atividade.presuncao_irpj,
            presuncao_csll=atividade.presuncao_csll,
            base_irpj=arredondar(base_irpj),
            base_csll=arredondar(base_csll),
            limite_adicional=limite_adicional,
            reducao_incentivo=arredondar(reducao),
            programa_incentivo=incentivo.programa if incentivo else None,
        )
