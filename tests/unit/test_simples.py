"""Tests for the Simples Nacional calculator."""

from decimal import Decimal

import pytest

from regime_analyzer.core.calculators.simples import SimplesNacionalCalculator
from regime_analyzer.core.models.enums import Anexo, ExclusionReason
from regime_analyzer.core.rules.config import DEFAULT_RULES
from regime_analyzer.core.rules.tax_constants import calcular_aliquota_efetiva_simples


class TestEffectiveRate:
    """Tests for bracket lookup and the effective rate formula."""

    def test_first_bracket_has_no_deduction(self):
        assert calcular_aliquota_efetiva_simples(
            Decimal("120000"), Decimal("0.06"), Decimal("0")
        ) == Decimal("0.06")

    def test_zero_revenue(self):
        assert calcular_aliquota_efetiva_simples(Decimal("0"), Decimal("0.06"), Decimal("0")) == Decimal("0")

    @pytest.mark.parametrize("anexo", list(Anexo))
    def test_continuity_up_to_fifth_bracket(self, anexo: Anexo):
        """Brackets 1 to 5 meet exactly at their limits."""
        tabela = DEFAULT_RULES.tabela_simples(anexo.value)
        for anterior, seguinte in zip(tabela[:4], tabela[1:5]):
            limite = anterior.limite
            antes = calcular_aliquota_efetiva_simples(limite, anterior.aliquota, anterior.deducao)
            depois = calcular_aliquota_efetiva_simples(limite, seguinte.aliquota, seguinte.deducao)
            assert antes == depois, f"Anexo {anexo.value}, limite {limite}"

    @pytest.mark.parametrize("anexo", list(Anexo))
    def test_jump_bounded_by_deduction_delta(self, anexo: Anexo):
        """Annual liability never jumps more than the deduction difference."""
        tabela = DEFAULT_RULES.tabela_simples(anexo.value)
        for anterior, seguinte in zip(tabela, tabela[1:]):
            limite = anterior.limite
            antes = limite * calcular_aliquota_efetiva_simples(limite, anterior.aliquota, anterior.deducao)
            depois = limite * calcular_aliquota_efetiva_simples(limite, seguinte.aliquota, seguinte.deducao)
            assert abs(antes - depois) <= seguinte.deducao - anterior.deducao

    def test_find_bracket(self, simples: SimplesNacionalCalculator):
        assert simples.find_bracket(Anexo.III, Decimal("180000")).faixa == 1
        assert simples.find_bracket(Anexo.III, Decimal("180000.01")).faixa == 2
        assert simples.find_bracket(Anexo.III, Decimal("4800000")).faixa == 6

    def test_above_last_bracket(self, simples: SimplesNacionalCalculator):
        """Revenue above the ceiling stays in the last bracket."""
        assert simples.find_bracket(Anexo.I, Decimal("6000000")).faixa == 6


class TestFatorR:
    """Tests for the payroll ratio and annex selection."""

    def test_below_threshold_uses_annex_v(self, simples, classifier):
        atividade = classifier.classify("6201-5/01")
        fator_r = simples.calculate_fator_r(Decimal("24000"), Decimal("120000"))

        assert fator_r == Decimal("0.2")
        assert simples.select_anexo(atividade, fator_r) == Anexo.V

    def test_threshold_is_inclusive(self, simples, classifier):
        atividade = classifier.classify("6201-5/01")
        assert simples.select_anexo(atividade, Decimal("0.28")) == Anexo.III

    def test_activity_without_fator_r(self, simples, classifier):
        atividade = classifier.classify("8121-4/00")
        assert simples.select_anexo(atividade, Decimal("0.01")) == Anexo.IV

    def test_no_revenue(self, simples):
        assert simples.calculate_fator_r(Decimal("1000"), Decimal("0")) is None


class TestCalculate:
    """Tests for the full Simples Nacional calculation."""

    def test_software_annex_v(self, simples, classifier, sp):
        """R$ 10k/month with R$ 2k payroll: fator r 20%, Annex V, 15.5%."""
        atividade = classifier.classify("6201-5/01")
        resultado = simples.calculate(Decimal("120000"), Decimal("2000"), atividade, sp)

        assert resultado.aplicavel
        assert resultado.anexo == Anexo.V
        assert resultado.faixa == 1
        assert resultado.fator_r == Decimal("0.2")
        assert resultado.aliquota_efetiva_das == Decimal("0.155")
        assert resultado.componentes == {"das": Decimal("1550.00")}
        assert resultado.total == Decimal("1550.00")
        assert resultado.aliquota_efetiva == Decimal("0.155")

    def test_software_annex_iii(self, simples, classifier, sp):
        """30% payroll moves the same activity to Annex III."""
        atividade = classifier.classify("6201-5/01")
        resultado = simples.calculate(Decimal("120000"), Decimal("3000"), atividade, sp)

        assert resultado.anexo == Anexo.III
        assert resultado.total == Decimal("600.00")

    def test_trailing_payroll_overrides_monthly(self, simples, classifier, sp):
        atividade = classifier.classify("6201-5/01")
        resultado = simples.calculate(
            Decimal("120000"), Decimal("2000"), atividade, sp, folha_12m=Decimal("36000")
        )

        assert resultado.fator_r == Decimal("0.3")
        assert resultado.anexo == Anexo.III

    def test_quarter_period(self, simples, classifier, sp):
        """Period revenue defaults to RBT12 / 12 per month."""
        atividade = classifier.classify(categoria="comercio")
        resultado = simples.calculate(Decimal("120000"), Decimal("0"), atividade, sp, meses=3)

        assert resultado.receita_bruta == Decimal("30000.00")
        assert resultado.total == Decimal("1200.00")

    def test_annex_iv_adds_cpp(self, simples, classifier, sp):
        """Cleaning company: 4.5% DAS plus employer contribution on payroll."""
        atividade = classifier.classify("8121-4/00")
        resultado = simples.calculate(
            Decimal("120000"), Decimal("5000"), atividade, sp, receita_periodo=Decimal("10000")
        )

        assert resultado.anexo == Anexo.IV
        assert resultado.componente("das") == Decimal("450.00")
        assert resultado.componente("cpp") == Decimal("1390.00")
        assert resultado.total == Decimal("1840.00")
        assert any("Anexo IV" in alerta for alerta in resultado.alertas)

    def test_zero_revenue_not_applicable(self, simples, classifier, sp):
        atividade = classifier.classify("6201-5/01")
        resultado = simples.calculate(Decimal("0"), Decimal("0"), atividade, sp)

        assert resultado.aplicavel is False
        assert resultado.total == Decimal("0")
        assert resultado.motivo

    def test_prohibited_activity_not_applicable(self, simples, classifier, sp):
        atividade = classifier.classify("6410-7/00")
        resultado = simples.calculate(Decimal("120000"), Decimal("0"), atividade, sp)

        assert resultado.aplicavel is False
        assert "vedada" in resultado.motivo

    def test_sublimit_exceeded(self, simples, classifier, sp):
        """Above R$ 3.6M the ISS share leaves the DAS for the excess share of revenue."""
        atividade = classifier.classify("5611-2/01")
        resultado = simples.calculate(
            Decimal("4200000"), Decimal("0"), atividade, sp, receita_periodo=Decimal("350000")
        )

        assert resultado.sublimite_excedido is True
        assert resultado.faixa == 6
        assert resultado.componente("iss_fora_das") == Decimal("2500.00")
        assert resultado.componente("das") == Decimal("58556.79")
        assert resultado.total == Decimal("61056.79")

    def test_components_sum_to_total(self, simples, classifier, sp):
        atividade = classifier.classify(categoria="comercio")
        resultado = simples.calculate(
            Decimal("4000000"), Decimal("20000"), atividade, sp, receita_periodo=Decimal("333333.33")
        )

        assert sum(resultado.componentes.values()) == resultado.total
        assert all(v >= 0 for v in resultado.componentes.values())


class TestEligibility:
    """Tests for Simples Nacional eligibility."""

    def test_eligible(self, simples, classifier):
        atividade = classifier.classify("6201-5/01")
        assert simples.check_eligibility(Decimal("4800000"), atividade) is None

    def test_ceiling(self, simples, classifier):
        atividade = classifier.classify("6201-5/01")
        assert simples.check_eligibility(
            Decimal("4800000.01"), atividade
        ) == ExclusionReason.SIMPLES_CEILING_EXCEEDED

    def test_prohibited(self, simples, classifier):
        atividade = classifier.classify("6410-7/00")
        assert simples.check_eligibility(Decimal("100000"), atividade) == ExclusionReason.SIMPLES_ACTIVITY_PROHIBITED
