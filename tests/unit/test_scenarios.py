"""Tests for multi-state rankings and revenue scenarios."""

from decimal import Decimal

from regime_analyzer.core.analyzers import analyze_scenarios, compare_states
from regime_analyzer.core.analyzers.scenarios import FAIXAS_CENARIO
from regime_analyzer.core.models import LucroRealInputs
from regime_analyzer.core.models.enums import TaxRegime


class TestCompareStates:
    """Tests for the state ranking."""

    def test_ties_ordered_by_state_code(self, comparator, software_inputs):
        """Simples Nacional costs the same everywhere below the sublimit."""
        ranking = compare_states(software_inputs, ["sp", "PE", "go"], comparator=comparator)

        assert [r.uf for r in ranking] == ["GO", "PE", "SP"]
        assert [r.posicao for r in ranking] == [1, 2, 3]
        assert all(r.melhor_regime == TaxRegime.SIMPLES_NACIONAL for r in ranking)
        assert all(r.total == Decimal("1550.00") for r in ranking)

    def test_state_details(self, comparator, software_inputs):
        ranking = {r.uf: r for r in compare_states(software_inputs, ["SP", "PE", "GO"], comparator=comparator)}

        assert ranking["PE"].incentivo == "SUDENE"
        assert ranking["PE"].regiao == "Nordeste"
        assert ranking["SP"].incentivo is None
        assert ranking["SP"].nome == "São Paulo"
        assert ranking["GO"].fallback is True
        assert ranking["SP"].fallback is False

    def test_all_states_by_default(self, comparator, software_inputs):
        assert len(compare_states(software_inputs, comparator=comparator)) == 27

    def test_default_comparator_uses_bundled_states(self, software_inputs):
        ranking = {r.uf: r for r in compare_states(software_inputs, ["SP", "GO"])}

        assert ranking["SP"].fallback is False
        assert ranking["GO"].fallback is True


class TestScenarios:
    """Tests for the revenue sweep."""

    def test_default_levels(self, comparator, software_inputs):
        pontos = analyze_scenarios(software_inputs, comparator=comparator)

        assert len(pontos) == len(FAIXAS_CENARIO) == 8
        assert [p.receita_mensal for p in pontos] == list(FAIXAS_CENARIO)

    def test_small_revenue_favors_simples(self, comparator, software_inputs):
        """40% payroll keeps software in Annex III at 6%."""
        ponto = analyze_scenarios(software_inputs, [Decimal("10000")], comparator=comparator)[0]

        assert ponto.folha_mensal == Decimal("4000.00")
        assert ponto.melhor_regime == TaxRegime.SIMPLES_NACIONAL
        assert ponto.total_mensal == Decimal("600.00")
        assert ponto.receita_anual == Decimal("120000")
        assert set(ponto.totais) == set(TaxRegime)

    def test_large_revenue_leaves_simples(self, comparator, software_inputs):
        ponto = analyze_scenarios(software_inputs, [Decimal("500000")], comparator=comparator)[0]

        assert ponto.melhor_regime != TaxRegime.SIMPLES_NACIONAL
        assert TaxRegime.SIMPLES_NACIONAL not in ponto.totais

    def test_accounting_figures_ignored(self, comparator, software_inputs):
        """Each level is priced with estimated Lucro Real figures."""
        entrada = software_inputs.model_copy(
            update={"meses": 12, "lucro_real": LucroRealInputs(lucro_contabil=Decimal("1"))}
        )
        ponto = analyze_scenarios(entrada, [Decimal("10000")], comparator=comparator)[0]

        assert ponto.total_mensal == Decimal("600.00")

    def test_custom_payroll_share(self, comparator, software_inputs):
        """10% payroll drops software to Annex V."""
        ponto = analyze_scenarios(
            software_inputs, [Decimal("10000")], percentual_folha=Decimal("0.10"), comparator=comparator
        )[0]

        assert ponto.melhor_regime == TaxRegime.SIMPLES_NACIONAL
        assert ponto.total_mensal == Decimal("1550.00")
