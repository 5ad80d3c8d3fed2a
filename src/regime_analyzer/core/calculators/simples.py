"""Simples Nacional calculator (LC 123/2006)."""

from decimal import Decimal
from typing import Optional

from regime_analyzer.core.calculators.common import (
    ZERO,
    arredondar,
    contribuicao_patronal,
    fechar_componentes,
)
from regime_analyzer.core.models.activity import ActivityProfile
from regime_analyzer.core.models.enums import Anexo, ExclusionReason, TipoTributo
from regime_analyzer.core.models.jurisdiction import JurisdictionProfile
from regime_analyzer.core.models.results import SimplesResult
from regime_analyzer.core.rules.config import DEFAULT_RULES, SimplesBracket, TaxRulesConfig
from regime_analyzer.core.rules.tax_constants import calcular_aliquota_efetiva_simples
from regime_analyzer.shared.formatters import format_currency, format_rate
from regime_analyzer.shared.logging import get_logger

logger = get_logger(__name__)

BASE_LEGAL = "LC 123/2006, arts. 18 e 18-A; Anexos I a V (redação da LC 155/2016)"


class SimplesNacionalCalculator:
    """Computes the monthly DAS for an activity and trailing revenue."""

    def __init__(self, rules: TaxRulesConfig = DEFAULT_RULES):
        self.rules = rules

    def check_eligibility(self, receita_12m: Decimal, atividade: ActivityProfile) -> Optional[ExclusionReason]:
        """Reason the entity cannot opt for the Simples Nacional, or None."""
        if atividade.vedado_simples or atividade.anexo is None:
            return ExclusionReason.SIMPLES_ACTIVITY_PROHIBITED
        if receita_12m > self.rules.limite_simples:
            return ExclusionReason.SIMPLES_CEILING_EXCEEDED
        return None

    def calculate_fator_r(self, folha_12m: Decimal, receita_12m: Decimal) -> Optional[Decimal]:
        """Payroll over trailing revenue (None when revenue is not positive)."""
        if receita_12m <= 0:
            return None
        return folha_12m / receita_12m

    def select_anexo(self, atividade: ActivityProfile, fator_r: Optional[Decimal]) -> Optional[Anexo]:
        """Annex III when the fator "r" reaches 28%, Annex V otherwise."""
        if not atividade.fator_r:
            return atividade.anexo
        if fator_r is not None and fator_r >= self.rules.limite_fator_r:
            return Anexo.III
        return Anexo.V

    def find_bracket(self, anexo: Anexo, receita_12m: Decimal) -> SimplesBracket:
        """First bracket whose upper bound covers the trailing revenue.

        Revenue above the last bound stays in the last bracket; the ceiling
        itself is an eligibility matter.
        """
        tabela = self.rules.tabela_simples(anexo.value)
        for faixa in tabela:
            if receita_12m <= faixa.limite:
                return faixa
        return tabela[-1]

    def calculate(
        self,
        receita_bruta_12m: Decimal,
        folha_mensal: Decimal,
        atividade: ActivityProfile,
        jurisdicao: JurisdictionProfile,
        receita_periodo: Optional[Decimal] = None,
        folha_12m: Optional[Decimal] = None,
        meses: int = 1,
    ) -> SimplesResult:
        """Compute the Simples Nacional liability.

        Args:
            receita_bruta_12m: Trailing 12-month gross revenue (RBT12)
            folha_mensal: Monthly payroll, including pro-labore
            atividade: Classified activity
            jurisdicao: State profile (sublimit and local rates)
            receita_periodo: Revenue of the period (default RBT12 / 12 per month)
            folha_12m: Trailing 12-month payroll for the fator "r"
            meses: Period length in months

        Returns:
            SimplesResult, not applicable when RBT12 is not positive or the
            activity has no annex
        """
        if receita_bruta_12m <= 0:
            return self._nao_aplicavel(
                receita_periodo or ZERO,
                "Receita bruta dos últimos 12 meses não informada ou zero",
            )
        if atividade.anexo is None:
            return self._nao_aplicavel(
                receita_periodo or ZERO,
                f"Atividade vedada ao Simples Nacional: {atividade.nota}",
            )

        if receita_periodo is None:
            receita_periodo = receita_bruta_12m / 12 * meses
        folha_anual = folha_12m if folha_12m is not None else folha_mensal * 12

        alertas: list[str] = []
        fator_r = self.calculate_fator_r(folha_anual, receita_bruta_12m) if atividade.fator_r else None
        anexo = self.select_anexo(atividade, fator_r)

        if fator_r is not None:
            alertas.append(
                f"Fator r de {format_rate(fator_r)}: Anexo {anexo.value}"
                f" ({'≥' if anexo == Anexo.III else '<'} {format_rate(self.rules.limite_fator_r, 0)})"
            )

        faixa = self.find_bracket(anexo, receita_bruta_12m)
        aliquota = calcular_aliquota_efetiva_simples(receita_bruta_12m, faixa.aliquota, faixa.deducao)
        das = receita_periodo * aliquota

        if receita_bruta_12m > self.rules.limite_simples:
            alertas.append(
                f"RBT12 de {format_currency(receita_bruta_12m)} acima do teto de "
                f"{format_currency(self.rules.limite_simples)}"
            )

        componentes: dict[str, Decimal] = {"das": das}

        sublimite = jurisdicao.sublimite_simples
        excedido = receita_bruta_12m > sublimite
        if excedido:
            proporcao = (receita_bruta_12m - sublimite) / receita_bruta_12m
            partilha = self.rules.partilha_icms_iss.get(anexo.value, ZERO)
            componentes["das"] = das - das * partilha * proporcao

            nome, aliquota_local = self._tributo_local(atividade, jurisdicao)
            componentes[f"{nome}_fora_das"] = receita_periodo * proporcao * aliquota_local
            alertas.append(
                f"Sublimite estadual de {format_currency(sublimite)} excedido: "
                f"{nome.upper()} recolhido fora do DAS sobre {format_rate(proporcao)} da receita"
            )

        if anexo == Anexo.IV:
            cpp = contribuicao_patronal(folha_mensal * meses, self.rules)
            if cpp > 0:
                componentes["cpp"] = cpp
            alertas.append("Anexo IV: CPP (INSS patronal) recolhida fora do DAS")

        componentes, total = fechar_componentes(componentes)

        logger.debug(
            "simples_calculated",
            extra={"anexo": anexo.value, "faixa": faixa.faixa, "aliquota": str(aliquota), "total": str(total)},
        )

        return SimplesResult(
            receita_bruta=arredondar(receita_periodo),
            componentes=componentes,
            total=total,
            alertas=tuple(alertas),
            base_legal=BASE_LEGAL,
            anexo=anexo,
            faixa=faixa.faixa,
            fator_r=fator_r,
            aliquota_nominal=faixa.aliquota,
            aliquota_efetiva_das=aliquota,
            receita_12m=receita_bruta_12m,
            sublimite=sublimite,
            sublimite_excedido=excedido,
        )

    def _tributo_local(self, atividade: ActivityProfile, jurisdicao: JurisdictionProfile) -> tuple[str, Decimal]:
        """Ordinary ICMS/ISS rate charged outside the DAS."""
        if atividade.tipo_tributo == TipoTributo.ISS:
            return "iss", jurisdicao.iss_aliquota_referencia
        return "icms", jurisdicao.icms_aliquota_efetiva * (Decimal("1") - self.rules.credito_icms_estimado)

    def _nao_aplicavel(self, receita: Decimal, motivo: str) -> SimplesResult:
        return SimplesResult(
            aplicavel=False,
            receita_bruta=arredondar(receita),
            motivo=motivo,
            alertas=(motivo,),
            base_legal=BASE_LEGAL,
        )
