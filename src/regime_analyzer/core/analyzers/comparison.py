"""Regime comparison: runs the three calculators and ranks the results."""

from decimal import Decimal
from typing import Optional

from regime_analyzer.core.analyzers.advisories import (
    AdvisoryBuilder,
    gerar_recomendacao,
    gerar_vantagens,
)
from regime_analyzer.core.calculators.lucro_real import LucroRealEngine
from regime_analyzer.core.calculators.presumido import LucroPresumidoCalculator
from regime_analyzer.core.calculators.simples import SimplesNacionalCalculator
from regime_analyzer.core.models.activity import ActivityProfile
from regime_analyzer.core.models.comparison import (
    ComparisonResult,
    EligibilityExclusion,
    RankedRegime,
)
from regime_analyzer.core.models.enums import CreditCategory, ExclusionReason, TaxRegime
from regime_analyzer.core.models.inputs import CreditContext, EntityInputs, LucroRealInputs
from regime_analyzer.core.models.jurisdiction import JurisdictionProfile
from regime_analyzer.core.models.results import LucroRealResult, RegimeResult
from regime_analyzer.core.rules.config import DEFAULT_RULES, TaxRulesConfig
from regime_analyzer.core.services.activity import ActivityClassifier
from regime_analyzer.core.services.jurisdiction import JurisdictionNormalizer
from regime_analyzer.shared.exceptions import InputValidationError
from regime_analyzer.shared.formatters import format_currency
from regime_analyzer.shared.logging import get_logger

logger = get_logger(__name__)

DESCRICOES_EXCLUSAO = {
    ExclusionReason.SIMPLES_CEILING_EXCEEDED: "Receita bruta dos últimos 12 meses acima do teto do Simples Nacional",
    ExclusionReason.SIMPLES_ACTIVITY_PROHIBITED: "Atividade vedada ao Simples Nacional (LC 123/2006, art. 17)",
    ExclusionReason.SIMPLES_NOT_APPLICABLE: "Simples Nacional não aplicável aos dados informados",
    ExclusionReason.PRESUMIDO_CEILING_EXCEEDED: "Receita anual acima do limite de R$ 78 milhões do Lucro Presumido",
    ExclusionReason.LUCRO_REAL_MANDATORY: "Atividade obrigada ao Lucro Real (Lei 9.718/1998, art. 14)",
}


def rank_results(resultados: list[RegimeResult]) -> tuple[RankedRegime, ...]:
    """Order by total ascending; ties go to Simples, then Presumido, then Real."""
    ordenados = sorted(resultados, key=lambda r: (r.total, r.regime.ordem))
    return tuple(RankedRegime(posicao=i, resultado=r) for i, r in enumerate(ordenados, 1))


class RegimeComparator:
    """Compares Simples Nacional, Lucro Presumido and Lucro Real for one entity.

    The normalizer is shared across comparisons so state profiles are
    normalized once per (UF, year).
    """

    def __init__(
        self,
        normalizer: Optional[JurisdictionNormalizer] = None,
        classifier: Optional[ActivityClassifier] = None,
        rules: TaxRulesConfig = DEFAULT_RULES,
    ):
        self.rules = rules
        self.normalizer = normalizer or JurisdictionNormalizer()
        self.classifier = classifier or ActivityClassifier(rules)
        self.simples = SimplesNacionalCalculator(rules)
        self.presumido = LucroPresumidoCalculator(rules)
        self.lucro_real = LucroRealEngine(rules)

    def validate(self, entrada: EntityInputs) -> None:
        """Reject inputs no regime can be computed from.

        Raises:
            InputValidationError: If period revenue is not positive
        """
        if entrada.receita_periodo <= 0:
            raise InputValidationError(
                f"Receita do período deve ser positiva (informado: {format_currency(entrada.receita_periodo)})",
                campo="receita_periodo",
                dica="informe o faturamento bruto do período, em reais",
            )
        if entrada.receita_12m is not None and entrada.receita_12m < 0:
            raise InputValidationError(
                "Receita dos últimos 12 meses não pode ser negativa",
                campo="receita_12m",
                dica="omita o campo para anualizar a receita do período",
            )

    def compare(self, entrada: EntityInputs) -> ComparisonResult:
        """Run the full comparison for one entity and period.

        Raises:
            InputValidationError: If the inputs are invalid, or equity is
                given without the TJLP
        """
        self.validate(entrada)

        atividade = self.classifier.classify(entrada.cnae, entrada.categoria)
        jurisdicao = self.normalizer.normalize(entrada.uf, ano=entrada.ano)

        resultados: dict[TaxRegime, RegimeResult] = {
            TaxRegime.SIMPLES_NACIONAL: self._run_simples(entrada, atividade, jurisdicao),
            TaxRegime.LUCRO_PRESUMIDO: self.presumido.calculate(
                entrada.receita_periodo,
                atividade,
                jurisdicao,
                meses=entrada.meses,
                folha_periodo=entrada.folha_periodo,
            ),
            TaxRegime.LUCRO_REAL: self._run_lucro_real(entrada, atividade, jurisdicao),
        }

        exclusoes = self._exclusions(entrada, atividade, resultados)
        excluidos = {e.regime for e in exclusoes}
        ranking = rank_results([r for regime, r in resultados.items() if regime not in excluidos])

        advisories = AdvisoryBuilder(entrada, atividade, jurisdicao, resultados, self.rules).build()

        melhor = ranking[0].resultado if ranking else None
        economia = ranking[-1].total - ranking[0].total if ranking else Decimal("0")
        economia_anual = economia * 12 / entrada.meses

        resultado = ComparisonResult(
            meses=entrada.meses,
            receita_periodo=entrada.receita_periodo,
            atividade=atividade,
            jurisdicao=jurisdicao,
            ranking=ranking,
            exclusoes=tuple(exclusoes),
            resultados=resultados,
            advisories=tuple(advisories),
            vantagens=tuple(gerar_vantagens(melhor, atividade, jurisdicao)) if melhor else (),
            recomendacao=gerar_recomendacao(
                melhor, atividade, jurisdicao, economia_anual, entrada.margem_lucro_estimada
            ),
        )

        logger.info(
            "comparison_completed",
            extra={
                "uf": jurisdicao.codigo,
                "cnae": atividade.cnae,
                "melhor": resultado.regime_recomendado.value if resultado.regime_recomendado else None,
                "economia": str(resultado.economia),
                "excluidos": [e.regime.value for e in exclusoes],
            },
        )
        return resultado

    def _run_simples(
        self,
        entrada: EntityInputs,
        atividade: ActivityProfile,
        jurisdicao: JurisdictionProfile,
    ) -> RegimeResult:
        return self.simples.calculate(
            entrada.rbt12,
            entrada.folha_mensal,
            atividade,
            jurisdicao,
            receita_periodo=entrada.receita_periodo,
            folha_12m=entrada.folha_12m,
            meses=entrada.meses,
        )

    def _run_lucro_real(
        self,
        entrada: EntityInputs,
        atividade: ActivityProfile,
        jurisdicao: JurisdictionProfile,
    ) -> LucroRealResult:
        dados = entrada.lucro_real
        estimado = dados is None
        if dados is None:
            dados = self.estimate_lucro_real(entrada)

        return self.lucro_real.calculate_from_inputs(
            dados,
            entrada.meses,
            atividade=atividade,
            jurisdicao=jurisdicao,
            folha_periodo=entrada.folha_periodo,
            receita_bruta=entrada.receita_periodo,
            lucro_estimado=estimado,
        )

    @staticmethod
    def estimate_lucro_real(entrada: EntityInputs) -> LucroRealInputs:
        """Lucro Real figures estimated from the margin and credit share."""
        receita = entrada.receita_periodo
        return LucroRealInputs(
            lucro_contabil=receita * entrada.margem_lucro_estimada,
            creditos=CreditContext(
                receita_bruta=receita,
                despesas={CreditCategory.INSUMOS: receita * entrada.percentual_creditos_estimado},
            ),
        )

    def _exclusions(
        self,
        entrada: EntityInputs,
        atividade: ActivityProfile,
        resultados: dict[TaxRegime, RegimeResult],
    ) -> list[EligibilityExclusion]:
        exclusoes: list[EligibilityExclusion] = []

        motivo = self.simples.check_eligibility(entrada.rbt12, atividade)
        if motivo is None and not resultados[TaxRegime.SIMPLES_NACIONAL].aplicavel:
            motivo = ExclusionReason.SIMPLES_NOT_APPLICABLE
        if motivo is not None:
            exclusoes.append(self._exclusao(TaxRegime.SIMPLES_NACIONAL, motivo))

        motivo = self.presumido.check_eligibility(entrada.receita_anual_estimada, atividade)
        if motivo is not None:
            exclusoes.append(self._exclusao(TaxRegime.LUCRO_PRESUMIDO, motivo))

        return exclusoes

    @staticmethod
    def _exclusao(regime: TaxRegime, motivo: ExclusionReason) -> EligibilityExclusion:
        return EligibilityExclusion(regime=regime, motivo=motivo, descricao=DESCRICOES_EXCLUSAO[motivo])


def compare_regimes(
    entrada: EntityInputs,
    normalizer: Optional[JurisdictionNormalizer] = None,
    rules: TaxRulesConfig = DEFAULT_RULES,
) -> ComparisonResult:
    """One-shot comparison with a fresh comparator."""
    return RegimeComparator(normalizer=normalizer, rules=rules).compare(entrada)
