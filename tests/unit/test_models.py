"""Tests for domain models."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from regime_analyzer.core.models import (
    CreditContext,
    EntityInputs,
    IncentiveFlag,
    JurisdictionProfile,
    LossLedger,
    PresumidoResult,
    ProgramaIncentivo,
    SimplesResult,
    SourceQuality,
    SurchargeInfo,
    TaxRegime,
)
from regime_analyzer.core.models.enums import CreditCategory


class TestEntityInputs:
    """Tests for EntityInputs."""

    def test_defaults(self):
        entrada = EntityInputs(uf=" sp ", receita_periodo=Decimal("10000"))

        assert entrada.uf == "SP"
        assert entrada.meses == 1
        assert entrada.margem_lucro_estimada == Decimal("0.20")
        assert entrada.rbt12 == Decimal("120000")

    def test_quarter_annualization(self):
        entrada = EntityInputs(
            uf="SP", meses=3, receita_periodo=Decimal("300000"), folha_periodo=Decimal("60000")
        )

        assert entrada.receita_mensal == Decimal("100000")
        assert entrada.folha_mensal == Decimal("20000")
        assert entrada.rbt12 == Decimal("1200000")
        assert entrada.receita_anual_estimada == Decimal("1200000")

    def test_trailing_revenue_overrides_annualization(self):
        entrada = EntityInputs(uf="SP", receita_periodo=Decimal("10000"), receita_12m=Decimal("500000"))

        assert entrada.rbt12 == Decimal("500000")
        assert entrada.receita_anual_estimada == Decimal("120000")

    @pytest.mark.parametrize("meses", [0, 2, 6])
    def test_invalid_period(self, meses: int):
        with pytest.raises(ValidationError):
            EntityInputs(uf="SP", meses=meses, receita_periodo=Decimal("1000"))

    def test_negative_payroll_rejected(self):
        with pytest.raises(ValidationError):
            EntityInputs(uf="SP", receita_periodo=Decimal("1000"), folha_periodo=Decimal("-1"))

    def test_margin_bounds(self):
        with pytest.raises(ValidationError):
            EntityInputs(uf="SP", receita_periodo=Decimal("1000"), margem_lucro_estimada=Decimal("1.5"))

    def test_cnpj_is_validated(self):
        entrada = EntityInputs(uf="SP", receita_periodo=Decimal("1000"), cnpj="11.222.333/0001-81")
        assert entrada.cnpj == "11222333000181"

        with pytest.raises(ValidationError, match="CNPJ inválido"):
            EntityInputs(uf="SP", receita_periodo=Decimal("1000"), cnpj="11222333000182")

    def test_frozen(self):
        entrada = EntityInputs(uf="SP", receita_periodo=Decimal("1000"))
        with pytest.raises(ValidationError):
            entrada.uf = "RJ"


class TestLossLedger:
    """Tests for the carryforward ledger."""

    def test_zeroed(self):
        ledger = LossLedger.zerado()

        assert ledger.total_prejuizos == Decimal("0")
        assert ledger.base_negativa_csll == Decimal("0")

    def test_totals(self):
        ledger = LossLedger(
            prejuizo_operacional=Decimal("1000"), prejuizo_nao_operacional=Decimal("500")
        )
        assert ledger.total_prejuizos == Decimal("1500")

    def test_negative_balance_rejected(self):
        with pytest.raises(ValidationError):
            LossLedger(prejuizo_operacional=Decimal("-1"))


class TestCreditContext:
    def test_negative_expense_rejected(self):
        with pytest.raises(ValidationError, match="Despesa negativa"):
            CreditContext(despesas={CreditCategory.INSUMOS: Decimal("-10")})


class TestRegimeResult:
    """Tests for result invariants."""

    def test_total_must_match_components(self):
        with pytest.raises(ValidationError, match="difere da soma"):
            SimplesResult(
                receita_bruta=Decimal("10000"),
                componentes={"das": Decimal("100")},
                total=Decimal("200"),
            )

    def test_negative_component_rejected(self):
        """A negative component is rejected even when the total is valid."""
        with pytest.raises(ValidationError, match="irpj negativo"):
            PresumidoResult(
                receita_bruta=Decimal("10000"),
                componentes={"irpj": Decimal("-1"), "csll": Decimal("1")},
                total=Decimal("0"),
            )

    def test_negative_total_rejected(self):
        with pytest.raises(ValidationError, match="total"):
            PresumidoResult(
                receita_bruta=Decimal("10000"),
                componentes={"irpj": Decimal("-1")},
                total=Decimal("-1"),
            )

    def test_effective_rate(self):
        resultado = SimplesResult(
            receita_bruta=Decimal("10000"), componentes={"das": Decimal("600")}, total=Decimal("600")
        )

        assert resultado.regime == TaxRegime.SIMPLES_NACIONAL
        assert resultado.aliquota_efetiva == Decimal("0.06")
        assert resultado.componente("cpp") == Decimal("0")

    def test_effective_rate_without_revenue(self):
        resultado = SimplesResult(receita_bruta=Decimal("0"), aplicavel=False)
        assert resultado.aliquota_efetiva == Decimal("0")

    def test_to_row(self):
        resultado = PresumidoResult(
            receita_bruta=Decimal("1000"),
            componentes={"irpj": Decimal("48"), "csll": Decimal("28.80")},
            total=Decimal("76.80"),
        )
        row = resultado.to_row()

        assert row["regime"] == "lucro_presumido"
        assert row["nome"] == "Lucro Presumido"
        assert row["irpj"] == Decimal("48")
        assert row["total"] == Decimal("76.80")


class TestJurisdictionProfile:
    """Tests for the canonical state profile."""

    @staticmethod
    def _perfil(**kwargs) -> JurisdictionProfile:
        dados = {
            "codigo": "XX",
            "ano": 2025,
            "icms_aliquota_padrao": Decimal("0.18"),
            "iss_aliquota_minima": Decimal("0.02"),
            "iss_aliquota_maxima": Decimal("0.05"),
            "iss_aliquota_referencia": Decimal("0.05"),
            "sublimite_simples": Decimal("3600000"),
        }
        dados.update(kwargs)
        return JurisdictionProfile(**dados)

    def test_effective_icms_with_surcharge(self):
        perfil = self._perfil(adicional=SurchargeInfo(existe=True, nome="FECP", aliquota=Decimal("0.02")))
        assert perfil.icms_aliquota_efetiva == Decimal("0.20")

    def test_inactive_surcharge_ignored(self):
        perfil = self._perfil(adicional=SurchargeInfo(existe=False, aliquota=Decimal("0.02")))
        assert perfil.icms_aliquota_efetiva == Decimal("0.18")

    def test_incentive_lookup(self):
        perfil = self._perfil(
            incentivos=(
                IncentiveFlag(programa=ProgramaIncentivo.ZFM),
                IncentiveFlag(programa=ProgramaIncentivo.SUDAM, percentual_reducao=Decimal("0.75")),
            )
        )

        assert perfil.incentivo_irpj.programa == ProgramaIncentivo.SUDAM
        assert perfil.possui_zfm
        assert perfil.programas_ativos() == [ProgramaIncentivo.ZFM, ProgramaIncentivo.SUDAM]

    def test_inactive_incentive_ignored(self):
        perfil = self._perfil(
            incentivos=(
                IncentiveFlag(programa=ProgramaIncentivo.SUDENE, ativo=False, percentual_reducao=Decimal("0.75")),
            )
        )

        assert perfil.incentivo_irpj is None
        assert perfil.programas_ativos() == []

    def test_quality(self):
        assert not self._perfil().is_fallback
        assert self._perfil(source_quality=SourceQuality.FALLBACK).is_fallback

    def test_rates_are_bounded(self):
        with pytest.raises(ValidationError):
            self._perfil(icms_aliquota_padrao=Decimal("18"))
