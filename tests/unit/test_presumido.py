"""Tests for the Lucro Presumido calculator."""

from decimal import Decimal

from regime_analyzer.core.calculators.presumido import LucroPresumidoCalculator
from regime_analyzer.core.models.enums import ExclusionReason, ProgramaIncentivo
from regime_analyzer.core.rules.config import DEFAULT_RULES


class TestServices:
    """Tests for service activities (32% presumption, ISS)."""

    def test_quarter_with_surtax(self, presumido: LucroPresumidoCalculator, classifier, sp):
        """R$ 300k in a quarter: base 96k, surtax on 36k above 60k."""
        atividade = classifier.classify("6201-5/01")
        resultado = presumido.calculate(Decimal("300000"), atividade, sp, meses=3)

        assert resultado.base_irpj == Decimal("96000.00")
        assert resultado.base_csll == Decimal("96000.00")
        assert resultado.limite_adicional == Decimal("60000")
        assert resultado.componente("irpj") == Decimal("18000.00")
        assert resultado.componente("csll") == Decimal("8640.00")
        assert resultado.componente("pis") == Decimal("1950.00")
        assert resultado.componente("cofins") == Decimal("9000.00")
        assert resultado.componente("iss") == Decimal("15000.00")
        assert resultado.total == Decimal("52590.00")
        assert any("Adicional de IRPJ" in alerta for alerta in resultado.alertas)

    def test_monthly_threshold_is_prorated(self, presumido, classifier, sp):
        """The same base in one month pays surtax above R$ 20k."""
        atividade = classifier.classify("6201-5/01")
        resultado = presumido.calculate(Decimal("100000"), atividade, sp, meses=1)

        # base 32k: 32k x 15% + 12k x 10%
        assert resultado.componente("irpj") == Decimal("6000.00")
        assert resultado.limite_adicional == Decimal("20000")

    def test_payroll_adds_cpp(self, presumido, classifier, sp):
        atividade = classifier.classify("6201-5/01")
        resultado = presumido.calculate(
            Decimal("30000"), atividade, sp, meses=1, folha_periodo=Decimal("10000")
        )

        assert resultado.componente("cpp") == Decimal("2780.00")

    def test_zero_revenue(self, presumido, classifier, sp):
        atividade = classifier.classify("6201-5/01")
        resultado = presumido.calculate(Decimal("0"), atividade, sp, meses=1)

        assert resultado.total == Decimal("0")
        assert resultado.aliquota_efetiva == Decimal("0")


class TestGoods:
    """Tests for commerce and industry (8%/12% presumption, ICMS)."""

    def test_commerce_month(self, presumido, classifier, sp):
        atividade = classifier.classify(categoria="comércio")
        resultado = presumido.calculate(Decimal("100000"), atividade, sp, meses=1)

        assert resultado.componente("irpj") == Decimal("1200.00")
        assert resultado.componente("csll") == Decimal("1080.00")
        assert resultado.componente("pis") == Decimal("650.00")
        assert resultado.componente("cofins") == Decimal("3000.00")
        # 18% net of the estimated 30% input credit
        assert resultado.componente("icms") == Decimal("12600.00")
        assert "adicional_icms" not in resultado.componentes
        assert resultado.total == Decimal("18530.00")

    def test_surcharge_on_goods(self, presumido, classifier, normalizer):
        """Rio de Janeiro adds the 2% FECP on goods."""
        atividade = classifier.classify(categoria="comércio")
        rj = normalizer.normalize("RJ")
        resultado = presumido.calculate(Decimal("100000"), atividade, rj, meses=1)

        assert resultado.componente("icms") == Decimal("14000.00")
        assert resultado.componente("adicional_icms") == Decimal("1400.00")

    def test_surcharge_not_on_services(self, presumido, classifier, normalizer):
        atividade = classifier.classify("6201-5/01")
        resultado = presumido.calculate(Decimal("100000"), atividade, normalizer.normalize("RJ"), meses=1)

        assert "adicional_icms" not in resultado.componentes


class TestIncentives:
    """Tests for the SUDAM/SUDENE IRPJ reduction."""

    def test_sudene_reduces_irpj(self, presumido, classifier, pe):
        atividade = classifier.classify("6201-5/01")
        resultado = presumido.calculate(Decimal("300000"), atividade, pe, meses=3)

        assert resultado.programa_incentivo == ProgramaIncentivo.SUDENE
        assert resultado.reducao_incentivo == Decimal("13500.00")
        assert resultado.componente("irpj") == Decimal("4500.00")
        assert any("SUDENE" in alerta for alerta in resultado.alertas)

    def test_no_incentive_in_sp(self, presumido, classifier, sp):
        atividade = classifier.classify("6201-5/01")
        resultado = presumido.calculate(Decimal("300000"), atividade, sp, meses=3)

        assert resultado.programa_incentivo is None
        assert resultado.reducao_incentivo == Decimal("0")


class TestEligibility:
    """Tests for Lucro Presumido eligibility."""

    def test_ceiling(self, presumido, classifier):
        atividade = classifier.classify("6201-5/01")

        assert presumido.check_eligibility(Decimal("78000000"), atividade) is None
        assert presumido.check_eligibility(
            Decimal("78000000.01"), atividade
        ) == ExclusionReason.PRESUMIDO_CEILING_EXCEEDED

    def test_mandatory_lucro_real(self, presumido, classifier):
        atividade = classifier.classify("6410-7/00")
        assert presumido.check_eligibility(Decimal("1000000"), atividade) == ExclusionReason.LUCRO_REAL_MANDATORY

    def test_custom_rules(self, classifier, sp):
        """Rates come from the injected configuration."""
        regras = DEFAULT_RULES.model_copy(update={"aliquota_csll": Decimal("0.15")})
        calculadora = LucroPresumidoCalculator(regras)
        atividade = classifier.classify("6201-5/01")

        # SP carries its own federal CSLL rate, so use a profile without overrides
        perfil = sp.model_copy(update={"federal": sp.federal.model_copy(update={"aliquota_csll": None})})
        resultado = calculadora.calculate(Decimal("100000"), atividade, perfil, meses=1)

        assert resultado.componente("csll") == Decimal("4800.00")
