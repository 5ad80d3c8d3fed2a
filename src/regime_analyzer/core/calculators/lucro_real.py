"""Lucro Real engine.

Pipeline, in order:

1. Adjusted income (LALUR): profit + additions - exclusions
2. Loss compensation, capped at 30% of adjusted income (Lei 9.065/1995)
3. IRPJ (15% + 10% surtax) and CSLL (9%)
4. Interest on equity (JCP) deduction, recomputing step 3 (Lei 9.249/1995, art. 9)
5. Non-cumulative PIS/COFINS ledger (Lei 10.637/2002 e Lei 10.833/2003)

The engine is stateless: it receives the prior LossLedger and returns the
posterior one inside the result.
"""

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
from regime_analyzer.core.models.enums import AssetCategory
from regime_analyzer.core.models.inputs import (
    CreditContext,
    EquityContext,
    LossLedger,
    LucroRealInputs,
)
from regime_analyzer.core.models.jurisdiction import JurisdictionProfile
from regime_analyzer.core.models.results import (
    CreditLedgerResult,
    JCPResult,
    LossCompensation,
    LucroRealResult,
)
from regime_analyzer.core.rules.config import DEFAULT_RULES, TaxRulesConfig
from regime_analyzer.shared.exceptions import InputValidationError
from regime_analyzer.shared.formatters import format_currency
from regime_analyzer.shared.logging import get_logger

logger = get_logger(__name__)

BASE_LEGAL = (
    "RIR/2018 (Decreto 9.580/2018), arts. 258 a 261 e 580 a 590; Lei 9.065/1995, art. 15; "
    "Lei 9.249/1995, art. 9º; Lei 10.637/2002; Lei 10.833/2003"
)


class LucroRealEngine:
    """Computes IRPJ, CSLL and non-cumulative PIS/COFINS on actual profit."""

    def __init__(self, rules: TaxRulesConfig = DEFAULT_RULES):
        self.rules = rules

    def calculate(
        self,
        lucro_contabil: Decimal,
        adicoes: Decimal,
        exclusoes: Decimal,
        ledger: LossLedger,
        equity: Optional[EquityContext],
        creditos: Optional[CreditContext],
        meses: int,
        *,
        resultado_nao_operacional: Decimal = ZERO,
        atividade: Optional[ActivityProfile] = None,
        jurisdicao: Optional[JurisdictionProfile] = None,
        folha_periodo: Decimal = ZERO,
        receita_bruta: Optional[Decimal] = None,
        lucro_estimado: bool = False,
    ) -> LucroRealResult:
        """Run the full Lucro Real pipeline for one period.

        Args:
            lucro_contabil: Accounting profit before IRPJ/CSLL
            adicoes: LALUR additions
            exclusoes: LALUR exclusions
            ledger: Carryforward balances before the period
            equity: Equity figures for JCP (None skips the deduction)
            creditos: Revenue and expenses for the PIS/COFINS ledger
            meses: Period length (1, 3 or 12)
            resultado_nao_operacional: Signed non-operating result in the profit
            atividade: Activity, for ISS/ICMS
            jurisdicao: State profile, for ISS/ICMS, incentives and overrides
            folha_periodo: Payroll of the period (CPP)
            receita_bruta: Gross revenue when ``creditos`` does not carry it
            lucro_estimado: Profit was estimated from a margin

        Returns:
            LucroRealResult with component breakdown and posterior ledger

        Raises:
            InputValidationError: If equity is given without the TJLP
        """
        alertas: list[str] = []
        if lucro_estimado:
            alertas.append("Lucro estimado a partir da margem informada; use dados contábeis para precisão")

        lucro_ajustado = lucro_contabil + adicoes - exclusoes
        compensacao, posterior = self.compensate_losses(lucro_ajustado, ledger, resultado_nao_operacional)

        if lucro_ajustado <= 0:
            alertas.append(
                f"Prejuízo fiscal de {format_currency(-lucro_ajustado)} registrado para compensação futura"
            )
        elif compensacao.compensacao_irpj > 0 or compensacao.compensacao_csll > 0:
            alertas.append(
                f"Compensação de prejuízos: {format_currency(compensacao.compensacao_irpj)} (IRPJ) e "
                f"{format_currency(compensacao.compensacao_csll)} (CSLL), limite de "
                f"{format_currency(compensacao.limite_compensacao)}"
            )

        taxa_csll = aliquota_csll(self.rules, jurisdicao)
        irpj_antes_jcp = imposto_irpj(compensacao.base_irpj, meses, self.rules, jurisdicao)

        jcp = self.calculate_jcp(
            equity,
            meses,
            lucro_contabil,
            compensacao.base_irpj,
            compensacao.base_csll,
            jurisdicao,
        )
        if jcp.observacao:
            alertas.append(jcp.observacao)

        base_irpj = max(compensacao.base_irpj - jcp.valor, ZERO)
        base_csll = max(compensacao.base_csll - jcp.valor, ZERO)
        irpj = imposto_irpj(base_irpj, meses, self.rules, jurisdicao)
        csll = base_csll * taxa_csll

        reducao, incentivo = reducao_incentivo(irpj, jurisdicao)
        if incentivo is not None:
            alertas.append(
                f"Redução de IRPJ ({incentivo.programa.value.upper()}) sobre o lucro da exploração: "
                f"{incentivo.condicao}"
            )

        if receita_bruta is not None:
            if creditos is None:
                creditos = CreditContext(receita_bruta=max(receita_bruta, ZERO))
            elif creditos.receita_bruta is None:
                # Expenses without revenue: the entity's revenue is the debit base
                creditos = creditos.model_copy(update={"receita_bruta": max(receita_bruta, ZERO)})
        ledger_creditos = self.calculate_credits(creditos, meses, jurisdicao)
        if creditos is None:
            alertas.append("Receita não informada: PIS/COFINS não calculados")
        if ledger_creditos.divergencia_depreciacao:
            alertas.append(
                "Depreciação contábil difere do método legal (1/48 ou 1/60 ao mês); "
                "crédito calculado pelo método legal"
            )
        if ledger_creditos.saldo_credor > 0:
            alertas.append(
                f"Saldo credor de PIS/COFINS de {format_currency(ledger_creditos.saldo_credor)} "
                "transportado para os próximos períodos"
            )

        componentes: dict[str, Decimal] = {
            "irpj": irpj - reducao,
            "csll": csll,
            "pis": ledger_creditos.pis_devido,
            "cofins": ledger_creditos.cofins_devido,
        }
        if jcp.irrf > 0:
            componentes["irrf_jcp"] = jcp.irrf

        receita_consumo = self._receita_bruta(creditos)
        if atividade is not None and jurisdicao is not None:
            componentes.update(tributos_consumo(receita_consumo, atividade, jurisdicao, self.rules))

        cpp = contribuicao_patronal(folha_periodo, self.rules)
        if cpp > 0:
            componentes["cpp"] = cpp

        componentes, total = fechar_componentes(componentes)
        _, _, limite_adicional = aliquotas_irpj(meses, self.rules, jurisdicao)

        logger.debug(
            "lucro_real_calculated",
            extra={
                "lucro_ajustado": str(lucro_ajustado),
                "compensacao": str(compensacao.compensacao_irpj),
                "jcp": str(jcp.valor),
                "total": str(total),
            },
        )

        return LucroRealResult(
            receita_bruta=arredondar(receita_consumo),
            componentes=componentes,
            total=total,
            alertas=tuple(alertas),
            base_legal=BASE_LEGAL,
            meses=meses,
            lucro_contabil=lucro_contabil,
            compensacao=compensacao,
            prejuizos_anterior=ledger,
            prejuizos_posterior=posterior,
            jcp=jcp,
            creditos=ledger_creditos,
            irpj_antes_jcp=arredondar(irpj_antes_jcp),
            limite_adicional=limite_adicional,
            reducao_incentivo=arredondar(reducao),
            programa_incentivo=incentivo.programa if incentivo else None,
            lucro_estimado=lucro_estimado,
        )

    def calculate_from_inputs(
        self,
        entrada: LucroRealInputs,
        meses: int,
        *,
        atividade: Optional[ActivityProfile] = None,
        jurisdicao: Optional[JurisdictionProfile] = None,
        folha_periodo: Decimal = ZERO,
        receita_bruta: Optional[Decimal] = None,
        lucro_estimado: bool = False,
    ) -> LucroRealResult:
        """Same as ``calculate`` with the figures bundled in LucroRealInputs."""
        return self.calculate(
            entrada.lucro_contabil,
            entrada.adicoes,
            entrada.exclusoes,
            entrada.prejuizos,
            entrada.patrimonio,
            entrada.creditos,
            meses,
            resultado_nao_operacional=entrada.resultado_nao_operacional,
            atividade=atividade,
            jurisdicao=jurisdicao,
            folha_periodo=folha_periodo,
            receita_bruta=receita_bruta,
            lucro_estimado=lucro_estimado,
        )

    def compensate_losses(
        self,
        lucro_ajustado: Decimal,
        ledger: LossLedger,
        resultado_nao_operacional: Decimal = ZERO,
    ) -> tuple[LossCompensation, LossLedger]:
        """Apply the 30% carryforward cap and move the ledger.

        A loss is added to the ledger: the part explained by a negative
        non-operating result goes to the non-operating balance, the rest to
        the operating one. A profit consumes non-operating losses only up to
        the non-operating gain, then operating losses, within the same 30%
        limit. The CSLL negative base is compensated independently under its
        own 30% limit.

        Returns:
            (compensation detail, posterior ledger)
        """
        if lucro_ajustado <= 0:
            prejuizo = -lucro_ajustado
            nao_operacional = min(prejuizo, max(-resultado_nao_operacional, ZERO))
            operacional = prejuizo - nao_operacional

            posterior = LossLedger(
                prejuizo_operacional=ledger.prejuizo_operacional + operacional,
                prejuizo_nao_operacional=ledger.prejuizo_nao_operacional + nao_operacional,
                base_negativa_csll=ledger.base_negativa_csll + prejuizo,
            )
            compensacao = LossCompensation(
                lucro_ajustado=lucro_ajustado,
                prejuizo_gerado_operacional=operacional,
                prejuizo_gerado_nao_operacional=nao_operacional,
                base_negativa_gerada=prejuizo,
            )
            return compensacao, posterior

        limite = lucro_ajustado * self.rules.limite_compensacao

        comp_nao_operacional = min(
            ledger.prejuizo_nao_operacional,
            max(resultado_nao_operacional, ZERO),
            limite,
        )
        comp_operacional = min(ledger.prejuizo_operacional, limite - comp_nao_operacional)
        comp_csll = min(ledger.base_negativa_csll, limite)

        posterior = LossLedger(
            prejuizo_operacional=ledger.prejuizo_operacional - comp_operacional,
            prejuizo_nao_operacional=ledger.prejuizo_nao_operacional - comp_nao_operacional,
            base_negativa_csll=ledger.base_negativa_csll - comp_csll,
        )
        compensacao = LossCompensation(
            lucro_ajustado=lucro_ajustado,
            limite_compensacao=limite,
            compensacao_operacional=comp_operacional,
            compensacao_nao_operacional=comp_nao_operacional,
            compensacao_csll=comp_csll,
            base_irpj=lucro_ajustado - comp_operacional - comp_nao_operacional,
            base_csll=lucro_ajustado - comp_csll,
        )
        return compensacao, posterior

    def calculate_jcp(
        self,
        equity: Optional[EquityContext],
        meses: int,
        lucro_contabil: Decimal,
        base_irpj: Decimal,
        base_csll: Decimal,
        jurisdicao: Optional[JurisdictionProfile] = None,
    ) -> JCPResult:
        """Interest-on-equity deduction bounded by TJLP, profit and reserves.

        Legal limit = min(PL x TJLP x meses/12, max(50% net income, 50% retained earnings))

        The amount paid is the legal limit capped at the IRPJ base: above it
        only CSLL (9%) is saved, less than the 15% withholding. Nothing is
        paid when the tax saved does not exceed the withholding.

        Raises:
            InputValidationError: If equity is given without the TJLP
        """
        if equity is None:
            return JCPResult()

        if equity.tjlp is None:
            raise InputValidationError(
                "TJLP não informada para o cálculo de JCP",
                campo="tjlp",
                dica="informe a TJLP anual vigente no período; ela muda a cada trimestre e não há valor padrão",
            )

        if equity.patrimonio_liquido_ajustado <= 0 or equity.tjlp <= 0:
            return JCPResult(
                calculado=True,
                observacao="JCP zerado: patrimônio líquido ajustado ou TJLP igual a zero",
            )

        limite_tjlp = equity.patrimonio_liquido_ajustado * equity.tjlp * Decimal(meses) / 12
        lucro_liquido = equity.lucro_liquido if equity.lucro_liquido is not None else lucro_contabil
        limite_lucro = max(lucro_liquido, ZERO) * self.rules.limite_jcp_lucro
        limite_reservas = equity.lucros_acumulados * self.rules.limite_jcp_reservas
        limites = {
            "limite_tjlp": limite_tjlp,
            "limite_lucro": limite_lucro,
            "limite_reservas": limite_reservas,
        }

        limite_legal = min(limite_tjlp, max(limite_lucro, limite_reservas))
        if limite_legal <= 0:
            return JCPResult(
                calculado=True,
                limite_tjlp=arredondar(limite_tjlp),
                observacao="JCP zerado: sem lucro do período nem reservas de lucros",
            )

        valor = min(limite_legal, max(base_irpj, ZERO))

        taxa_csll = aliquota_csll(self.rules, jurisdicao)
        economia_irpj = imposto_irpj(base_irpj, meses, self.rules, jurisdicao) - imposto_irpj(
            max(base_irpj - valor, ZERO), meses, self.rules, jurisdicao
        )
        economia_csll = (base_csll - max(base_csll - valor, ZERO)) * taxa_csll
        irrf = valor * self.rules.aliquota_irrf_jcp

        if valor <= 0 or economia_irpj + economia_csll <= irrf:
            return JCPResult(
                calculado=True,
                observacao=(
                    f"JCP não distribuído: a economia de IRPJ/CSLL não supera o IRRF "
                    f"(limite legal de {format_currency(limite_legal)}, base tributável insuficiente)"
                ),
                **limites,
            )

        observacao = f"JCP de {format_currency(valor)} deduzido; IRRF de {format_currency(irrf)} retido"
        if valor < limite_legal:
            observacao += f" (limitado à base do IRPJ; limite legal de {format_currency(limite_legal)})"

        return JCPResult(
            calculado=True,
            valor=valor,
            irrf=irrf,
            economia_irpj=economia_irpj,
            economia_csll=economia_csll,
            observacao=observacao,
            **limites,
        )

    def calculate_credits(
        self,
        creditos: Optional[CreditContext],
        meses: int,
        jurisdicao: Optional[JurisdictionProfile] = None,
    ) -> CreditLedgerResult:
        """Non-cumulative PIS/COFINS debits, credits and carryforward.

        Depreciation credit always uses the statutory fixed fraction of the
        acquisition cost (1/48 per month, 1/60 for buildings). A declared
        straight-line rate is only compared against it.
        """
        if creditos is None:
            return CreditLedgerResult()

        aliquota_pis, aliquota_cofins = aliquotas_pis_cofins(self.rules, jurisdicao, cumulativo=False)

        receita = self._receita_bruta(creditos)
        tributavel = max(receita - creditos.receita_isenta - creditos.receita_exportacao, ZERO)

        base_despesas = sum(
            (valor for categoria, valor in creditos.despesas.items() if categoria.gera_credito),
            ZERO,
        )

        base_depreciacao = ZERO
        base_contabil = ZERO
        divergencia = False
        for ativo in creditos.ativos:
            parcelas = (
                self.rules.parcelas_credito_edificacoes
                if ativo.categoria == AssetCategory.EDIFICACOES
                else self.rules.parcelas_credito_imobilizado
            )
            legal = ativo.custo_aquisicao * Decimal(meses) / parcelas
            base_depreciacao += legal

            taxa = ativo.taxa_depreciacao_contabil
            if taxa is None:
                taxa = self.rules.taxas_depreciacao.get(ativo.categoria.value, ZERO)
            elif arredondar(ativo.custo_aquisicao * taxa * Decimal(meses) / 12) != arredondar(legal):
                divergencia = True
            base_contabil += ativo.custo_aquisicao * taxa * Decimal(meses) / 12

        base_creditos = base_despesas + base_depreciacao

        debito_pis = tributavel * aliquota_pis
        debito_cofins = tributavel * aliquota_cofins
        credito_pis = base_creditos * aliquota_pis
        credito_cofins = base_creditos * aliquota_cofins

        disponivel_pis = credito_pis + creditos.saldo_pis_anterior
        disponivel_cofins = credito_cofins + creditos.saldo_cofins_anterior

        return CreditLedgerResult(
            receita_tributavel=arredondar(tributavel),
            debito_pis=arredondar(debito_pis),
            debito_cofins=arredondar(debito_cofins),
            base_creditos=arredondar(base_creditos),
            base_depreciacao=arredondar(base_depreciacao),
            base_depreciacao_contabil=arredondar(base_contabil),
            divergencia_depreciacao=divergencia,
            credito_pis=arredondar(credito_pis),
            credito_cofins=arredondar(credito_cofins),
            saldo_pis_anterior=creditos.saldo_pis_anterior,
            saldo_cofins_anterior=creditos.saldo_cofins_anterior,
            pis_devido=arredondar(debito_pis - disponivel_pis),
            cofins_devido=arredondar(debito_cofins - disponivel_cofins),
            saldo_pis=arredondar(disponivel_pis - debito_pis),
            saldo_cofins=arredondar(disponivel_cofins - debito_cofins),
        )

    @staticmethod
    def _receita_bruta(creditos: Optional[CreditContext]) -> Decimal:
        if creditos is None or creditos.receita_bruta is None:
            return ZERO
        return creditos.receita_bruta
