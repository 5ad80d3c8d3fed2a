"""Tests for activity classification."""

import logging
from decimal import Decimal

import pytest

from regime_analyzer.core.models.enums import (
    Anexo,
    CategoriaAtividade,
    OrigemClassificacao,
    PresumptionCategory,
    TipoTributo,
)
from regime_analyzer.core.services.activity import ActivityClassifier


class TestCNAEClassification:
    """Tests for CNAE subclass and prefix lookup."""

    def test_software_uses_fator_r(self, classifier: ActivityClassifier):
        """Software development depends on the payroll ratio."""
        atividade = classifier.classify("6201-5/01")

        assert atividade.cnae == "62.01-5/01"
        assert atividade.anexo == Anexo.III
        assert atividade.fator_r is True
        assert atividade.tipo_tributo == TipoTributo.ISS
        assert atividade.presuncao_irpj == Decimal("0.32")
        assert atividade.origem == OrigemClassificacao.CNAE

    def test_any_layout_is_accepted(self, classifier: ActivityClassifier):
        """Digits-only and formatted codes classify the same way."""
        assert classifier.classify("6201501") == classifier.classify("62.01-5/01")

    def test_annex_iv(self, classifier: ActivityClassifier):
        """Cleaning services pay CPP outside the DAS."""
        atividade = classifier.classify("8121-4/00")

        assert atividade.anexo == Anexo.IV
        assert atividade.fator_r is False

    def test_installation_services_stay_in_annex_iii(self, classifier: ActivityClassifier):
        """Electrical installation is Annex III even inside the construction division."""
        atividade = classifier.classify("4321-5/00")

        assert atividade.anexo == Anexo.III
        assert atividade.fator_r is False
        assert atividade.presuncao == PresumptionCategory.SERVICOS_GERAIS

    def test_real_estate_development(self, classifier: ActivityClassifier):
        atividade = classifier.classify("4110-7/00")

        assert atividade.anexo == Anexo.IV
        assert atividade.presuncao == PresumptionCategory.CONSTRUCAO_EMPREITADA
        assert atividade.presuncao_irpj == Decimal("0.08")

    def test_fuel_resale(self, classifier: ActivityClassifier):
        """Fuel resale is commerce with 1.6% presumption."""
        atividade = classifier.classify("4731-8/00")

        assert atividade.anexo == Anexo.I
        assert atividade.categoria == CategoriaAtividade.COMERCIO
        assert atividade.tipo_tributo == TipoTributo.ICMS
        assert atividade.presuncao_irpj == Decimal("0.016")

    def test_explicit_tax_type(self, classifier: ActivityClassifier):
        """Freight transport is in Annex III but levies ICMS."""
        atividade = classifier.classify("4930-2/02")

        assert atividade.anexo == Anexo.III
        assert atividade.tipo_tributo == TipoTributo.ICMS

    def test_hospital_presumption(self, classifier: ActivityClassifier):
        atividade = classifier.classify("8610-1/01")

        assert atividade.presuncao == PresumptionCategory.SAUDE_HOSPITALAR
        assert atividade.presuncao_irpj == Decimal("0.08")
        assert atividade.presuncao_csll == Decimal("0.12")

    def test_bank_is_prohibited(self, classifier: ActivityClassifier):
        """Banks are barred from the Simples and obliged to Lucro Real."""
        atividade = classifier.classify("6410-7/00")

        assert atividade.vedado_simples is True
        assert atividade.anexo is None
        assert atividade.lucro_real_obrigatorio is True
        assert atividade.tipo_tributo == TipoTributo.ISS

    def test_prohibited_goods_activity(self, classifier: ActivityClassifier):
        """A prohibited CNAE takes its tax type from the declared category."""
        atividade = classifier.classify("6410-7/00", "Comércio")

        assert atividade.tipo_tributo == TipoTributo.ICMS
        assert atividade.categoria == CategoriaAtividade.COMERCIO

    def test_retail_subclass(self, classifier: ActivityClassifier):
        """Supermarkets are listed subclass by subclass."""
        atividade = classifier.classify("4711-3/01")

        assert atividade.cnae == "47.11-3/01"
        assert atividade.anexo == Anexo.I
        assert atividade.categoria == CategoriaAtividade.COMERCIO
        assert atividade.tipo_tributo == TipoTributo.ICMS
        assert atividade.presuncao_irpj == Decimal("0.08")
        assert atividade.origem == OrigemClassificacao.CNAE

    def test_manufacturing_division_prefix(self, classifier: ActivityClassifier):
        """An unlisted food-industry subclass matches division 10."""
        atividade = classifier.classify("1011-2/01")

        assert atividade.anexo == Anexo.II
        assert atividade.categoria == CategoriaAtividade.INDUSTRIA
        assert atividade.tipo_tributo == TipoTributo.ICMS
        assert atividade.presuncao_csll == Decimal("0.12")
        assert atividade.origem == OrigemClassificacao.CNAE

    def test_retail_division_prefix_wins_over_category(self, classifier: ActivityClassifier):
        """An unlisted retail subclass is commerce even when declared as a service."""
        atividade = classifier.classify("4789-0/03", "serviços")

        assert atividade.anexo == Anexo.I
        assert atividade.tipo_tributo == TipoTributo.ICMS

    def test_group_prefix(self, classifier: ActivityClassifier):
        """Three-digit groups split division 43 between Annex III and IV."""
        assert classifier.classify("4322-3/99").anexo == Anexo.III
        assert classifier.classify("4313-4/99").anexo == Anexo.IV

    def test_class_prefix(self, classifier: ActivityClassifier):
        """Passenger transport matches its four-digit class."""
        atividade = classifier.classify("4929-9/98")

        assert atividade.presuncao == PresumptionCategory.TRANSPORTE_PASSAGEIROS
        assert atividade.presuncao_irpj == Decimal("0.16")

    def test_partial_code_uses_prefix(self, classifier: ActivityClassifier):
        atividade = classifier.classify("62")

        assert atividade.cnae == "62"
        assert atividade.fator_r is True
        assert atividade.origem == OrigemClassificacao.CNAE

    def test_prohibited_manufacturing(self, classifier: ActivityClassifier):
        """Tobacco manufacturing is barred from the Simples but stays an ICMS industry."""
        atividade = classifier.classify("1220-4/01", "serviços")

        assert atividade.vedado_simples is True
        assert atividade.anexo is None
        assert atividade.categoria == CategoriaAtividade.INDUSTRIA
        assert atividade.tipo_tributo == TipoTributo.ICMS
        assert atividade.lucro_real_obrigatorio is False

    def test_unlisted_cnae_uses_category(self, classifier: ActivityClassifier):
        """A CNAE matching no subclass or prefix defers to the category."""
        atividade = classifier.classify("9800-0/00", "Comércio varejista")

        assert atividade.cnae == "98.00-0/00"
        assert atividade.anexo == Anexo.I
        assert atividade.origem == OrigemClassificacao.CATEGORIA


class TestCategoryResolution:
    """Tests for free-text category resolution."""

    @pytest.mark.parametrize(
        "texto,esperado",
        [
            ("Comércio", "comercio"),
            ("COMERCIO VAREJISTA", "comercio"),
            ("atacado de alimentos", "comercio"),
            ("Indústria", "industria"),
            ("fabricação de móveis", "industria"),
            ("Prestação de Serviços", "servico"),
            ("com", "comercio"),
            ("comercial", "comercio"),
            ("ind", "industria"),
            ("II", "industria"),
        ],
    )
    def test_recognized(self, texto: str, esperado: str):
        assert ActivityClassifier.resolve_category(texto) == (esperado, True)

    @pytest.mark.parametrize("texto", [None, "", "   ", "agropecuária", "xyz"])
    def test_unrecognized_defaults_to_service(self, texto):
        assert ActivityClassifier.resolve_category(texto) == ("servico", False)

    def test_industry_profile(self, classifier: ActivityClassifier):
        atividade = classifier.classify(categoria="industria")

        assert atividade.anexo == Anexo.II
        assert atividade.tipo_tributo == TipoTributo.ICMS
        assert atividade.presuncao_irpj == Decimal("0.08")
        assert atividade.presuncao_csll == Decimal("0.12")

    def test_default_profile(self, classifier: ActivityClassifier):
        """Nothing recognized: general services with fator r."""
        atividade = classifier.classify()

        assert atividade.categoria == CategoriaAtividade.SERVICO
        assert atividade.anexo == Anexo.III
        assert atividade.fator_r is True
        assert atividade.origem == OrigemClassificacao.PADRAO

    def test_unrecognized_category_logged(self, classifier: ActivityClassifier, caplog):
        """An unrecognized non-empty category is reported."""
        with caplog.at_level(logging.WARNING, logger="regime_analyzer"):
            classifier.classify(categoria="agropecuária")
            classifier.classify()

        registros = [r for r in caplog.records if r.getMessage() == "activity_category_unrecognized"]
        assert len(registros) == 1
        assert registros[0].categoria == "agropecuária"
