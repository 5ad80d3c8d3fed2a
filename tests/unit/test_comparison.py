"""Tests for the regime comparison."""

from decimal import Decimal

import pytest

from regime_analyzer.core.analyzers import RegimeComparator, compare_regimes, rank_results
from regime_analyzer.core.models import (
    CreditContext,
    EntityInputs,
    LossLedger,
    LucroRealInputs,
    LucroRealResult,
    PresumidoResult,
    SimplesResult,
)
from regime_analyzer.core.models.enums import CreditCategory, ExclusionReason, Severity, SourceQuality, TaxRegime
from regime_analyzer.shared.exceptions import InputValidationError


def _titulos(resultado) -> list[str]:
    return [a.titulo for a in resultado.advisories]


class TestRanking:
    """Tests for ordering and tie-breaking."""

    def test_tie_prefers_simpler_regime(self):
        """Equal totals rank Simples, then Presumido, then Real."""
        valor = Decimal("100.00")
        simples = SimplesResult(receita_bruta=Decimal("1000"), componentes={"das": valor}, total=valor)
        presumido = PresumidoResult(receita_bruta=Decimal("1000"), componentes={"irpj": valor}, total=valor)
        real = LucroRealResult(receita_bruta=Decimal("1000"), componentes={"irpj": valor}, total=valor)

        ranking = rank_results([real, presumido, simples])

        assert [r.regime for r in ranking] == [
            TaxRegime.SIMPLES_NACIONAL,
            TaxRegime.LUCRO_PRESUMIDO,
            TaxRegime.LUCRO_REAL,
        ]
        assert [r.posicao for r in ranking] == [1, 2, 3]

    def test_cheapest_first(self):
        simples = SimplesResult(receita_bruta=Decimal("1000"), componentes={"das": Decimal("90")}, total=Decimal("90"))
        real = LucroRealResult(receita_bruta=Decimal("1000"), componentes={"irpj": Decimal("80")}, total=Decimal("80"))

        assert rank_results([simples, real])[0].regime == TaxRegime.LUCRO_REAL


class TestCompare:
    """Tests for the full comparison."""

    def test_small_software_house(self, comparator: RegimeComparator, software_inputs: EntityInputs):
        """R$ 10k/month with 20% payroll: Simples Annex V wins."""
        resultado = comparator.compare(software_inputs)

        assert resultado.regime_recomendado == TaxRegime.SIMPLES_NACIONAL
        assert resultado.melhor.total == Decimal("1550.00")
        assert resultado.resultados[TaxRegime.LUCRO_PRESUMIDO].total == Decimal("2189.00")
        assert resultado.resultados[TaxRegime.LUCRO_REAL].total == Decimal("2183.50")
        assert resultado.posicao(TaxRegime.LUCRO_REAL) == 2
        assert resultado.posicao(TaxRegime.LUCRO_PRESUMIDO) == 3
        assert resultado.economia == Decimal("639.00")
        assert resultado.economia_anual == Decimal("7668.00")
        assert resultado.exclusoes == ()
        assert resultado.recomendacao.startswith("O Simples Nacional (Anexo V)")

    def test_every_result_is_consistent(self, comparator: RegimeComparator, software_inputs: EntityInputs):
        resultado = comparator.compare(software_inputs)

        for r in resultado.resultados.values():
            assert sum(r.componentes.values(), Decimal("0")) == r.total
            assert r.aliquota_efetiva >= 0

    def test_prohibited_activity(self, comparator: RegimeComparator):
        """A bank is left with Lucro Real only."""
        entrada = EntityInputs(uf="SP", cnae="6410-7/00", receita_periodo=Decimal("1000000"))
        resultado = comparator.compare(entrada)

        assert [r.regime for r in resultado.ranking] == [TaxRegime.LUCRO_REAL]
        assert resultado.melhor is resultado.pior
        assert resultado.exclusao(TaxRegime.SIMPLES_NACIONAL).motivo == ExclusionReason.SIMPLES_ACTIVITY_PROHIBITED
        assert resultado.exclusao(TaxRegime.LUCRO_PRESUMIDO).motivo == ExclusionReason.LUCRO_REAL_MANDATORY
        assert resultado.economia == Decimal("0")
        assert "CNAE vedado ao Simples Nacional" in _titulos(resultado)
        assert "Lucro Real obrigatório" in _titulos(resultado)

    def test_simples_ceiling(self, comparator: RegimeComparator):
        entrada = EntityInputs(uf="SP", categoria="comércio", receita_periodo=Decimal("500000"))
        resultado = comparator.compare(entrada)

        exclusao = resultado.exclusao(TaxRegime.SIMPLES_NACIONAL)
        assert exclusao.motivo == ExclusionReason.SIMPLES_CEILING_EXCEEDED
        assert exclusao.descricao
        assert resultado.posicao(TaxRegime.SIMPLES_NACIONAL) is None
        assert len(resultado.ranking) == 2

    def test_presumido_ceiling(self, comparator: RegimeComparator):
        entrada = EntityInputs(uf="SP", categoria="indústria", meses=12, receita_periodo=Decimal("80000000"))
        resultado = comparator.compare(entrada)

        assert resultado.exclusao(TaxRegime.LUCRO_PRESUMIDO).motivo == ExclusionReason.PRESUMIDO_CEILING_EXCEEDED
        assert resultado.regime_recomendado == TaxRegime.LUCRO_REAL

    @pytest.mark.parametrize("receita", [Decimal("0"), Decimal("-1000")])
    def test_non_positive_revenue_rejected(self, comparator: RegimeComparator, receita: Decimal):
        with pytest.raises(InputValidationError) as exc:
            comparator.compare(EntityInputs(uf="SP", receita_periodo=receita))

        assert exc.value.campo == "receita_periodo"

    def test_negative_trailing_revenue_rejected(self, comparator: RegimeComparator):
        entrada = EntityInputs(uf="SP", receita_periodo=Decimal("1000"), receita_12m=Decimal("-1"))
        with pytest.raises(InputValidationError):
            comparator.compare(entrada)

    def test_accounting_figures_used(self, comparator: RegimeComparator):
        """Supplied Lucro Real figures replace the margin estimate."""
        entrada = EntityInputs(
            uf="SP",
            cnae="6201-5/01",
            meses=12,
            receita_periodo=Decimal("6000000"),
            folha_periodo=Decimal("1200000"),
            lucro_real=LucroRealInputs(
                lucro_contabil=Decimal("300000"),
                prejuizos=LossLedger(prejuizo_operacional=Decimal("1000000")),
            ),
        )
        resultado = comparator.compare(entrada)
        real = resultado.resultados[TaxRegime.LUCRO_REAL]

        assert real.lucro_estimado is False
        assert real.compensacao.compensacao_irpj == Decimal("90000")
        assert "Lucro Real estimado" not in _titulos(resultado)

    def test_credit_expenses_keep_revenue(self, comparator: RegimeComparator):
        """Expenses declared without revenue still tax the entity's revenue."""
        entrada = EntityInputs(
            uf="SP",
            cnae="6201-5/01",
            receita_periodo=Decimal("100000"),
            lucro_real=LucroRealInputs(
                lucro_contabil=Decimal("20000"),
                creditos=CreditContext(despesas={CreditCategory.INSUMOS: Decimal("10000")}),
            ),
        )
        real = comparator.compare(entrada).resultados[TaxRegime.LUCRO_REAL]

        assert real.receita_bruta == Decimal("100000.00")
        assert real.componente("pis") > 0
        assert real.componente("cofins") > 0
        assert real.componente("iss") > 0

    def test_estimated_lucro_real(self, comparator: RegimeComparator, software_inputs: EntityInputs):
        resultado = comparator.compare(software_inputs)
        real = resultado.resultados[TaxRegime.LUCRO_REAL]

        assert real.lucro_estimado is True
        assert real.lucro_contabil == Decimal("2000")
        assert "Lucro Real estimado" in _titulos(resultado)

    def test_compare_regimes_helper(self, normalizer, software_inputs: EntityInputs):
        resultado = compare_regimes(software_inputs, normalizer=normalizer)
        assert resultado.regime_recomendado == TaxRegime.SIMPLES_NACIONAL

    def test_compare_regimes_reads_bundled_states(self, software_inputs: EntityInputs):
        """Without an injected normalizer the shipped state records are used."""
        resultado = compare_regimes(software_inputs)

        assert resultado.jurisdicao.source_quality == SourceQuality.AUTHORITATIVE
        assert resultado.jurisdicao.nome == "São Paulo"
        assert "Dados estaduais estimados" not in _titulos(resultado)

    def test_vantagens_have_legal_basis(self, comparator: RegimeComparator, software_inputs: EntityInputs):
        resultado = comparator.compare(software_inputs)

        assert resultado.vantagens
        assert all(v.base_legal for v in resultado.vantagens)


class TestAdvisories:
    """Tests for the advisory catalogue."""

    def test_reform_notice_always_last(self, comparator: RegimeComparator, software_inputs: EntityInputs):
        resultado = comparator.compare(software_inputs)

        assert resultado.advisories[-1].citacao == "LC 214/2025"
        assert resultado.advisories[-1].severidade == Severity.INFO

    def test_fator_r_risk_zone(self, comparator: RegimeComparator, software_inputs: EntityInputs):
        entrada = software_inputs.model_copy(update={"folha_periodo": Decimal("2600")})
        resultado = comparator.compare(entrada)

        advisory = next(a for a in resultado.advisories if a.titulo == 'Fator "r" em zona de risco')
        assert advisory.severidade == Severity.CRITICO

    def test_fator_r_narrow_margin(self, comparator: RegimeComparator, software_inputs: EntityInputs):
        entrada = software_inputs.model_copy(update={"folha_periodo": Decimal("3000")})
        resultado = comparator.compare(entrada)

        assert 'Fator "r" em margem estreita' in _titulos(resultado)

    def test_near_simples_ceiling(self, comparator: RegimeComparator, software_inputs: EntityInputs):
        entrada = software_inputs.model_copy(update={"receita_12m": Decimal("4700000")})
        resultado = comparator.compare(entrada)

        advisory = next(a for a in resultado.advisories if "teto do Simples" in a.titulo)
        assert advisory.severidade == Severity.CRITICO

    def test_sublimit(self, comparator: RegimeComparator, software_inputs: EntityInputs):
        entrada = software_inputs.model_copy(update={"receita_12m": Decimal("4000000")})
        resultado = comparator.compare(entrada)

        assert "Sublimite estadual ultrapassado" in _titulos(resultado)

    def test_incentive_opportunity(self, comparator: RegimeComparator, software_inputs: EntityInputs):
        entrada = software_inputs.model_copy(update={"uf": "PE"})
        resultado = comparator.compare(entrada)

        advisory = next(a for a in resultado.advisories if a.titulo.startswith("Incentivo SUDENE"))
        assert advisory.severidade == Severity.OPORTUNIDADE
        assert advisory.citacao

    def test_fallback_data(self, comparator: RegimeComparator, software_inputs: EntityInputs):
        entrada = software_inputs.model_copy(update={"uf": "GO"})
        resultado = comparator.compare(entrada)

        assert resultado.jurisdicao.is_fallback
        assert "Dados estaduais estimados" in _titulos(resultado)

    def test_default_activity(self, comparator: RegimeComparator):
        entrada = EntityInputs(uf="SP", categoria="xyz", receita_periodo=Decimal("10000"))
        resultado = comparator.compare(entrada)

        assert "Atividade classificada como serviços em geral" in _titulos(resultado)

    def test_surcharge_notice(self, comparator: RegimeComparator):
        entrada = EntityInputs(uf="RJ", categoria="comércio", receita_periodo=Decimal("50000"))
        resultado = comparator.compare(entrada)

        assert any(t.startswith("FECP") for t in _titulos(resultado))


class TestRows:
    """Tests for the flat export."""

    def test_to_rows(self, comparator: RegimeComparator):
        entrada = EntityInputs(uf="SP", cnae="6410-7/00", receita_periodo=Decimal("1000000"))
        rows = comparator.compare(entrada).to_rows()

        assert len(rows) == 3
        assert rows[0]["regime"] == "lucro_real"
        assert rows[0]["posicao"] == 1
        assert rows[0]["elegivel"] is True
        assert "irpj" in rows[0]
        assert {r["motivo"] for r in rows[1:]} == {"simples_activity_prohibited", "lucro_real_mandatory"}
        assert all(r["posicao"] is None for r in rows[1:])
