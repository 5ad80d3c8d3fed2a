"""Pytest configuration and fixtures."""

from decimal import Decimal

import pytest

from regime_analyzer.core.analyzers import RegimeComparator
from regime_analyzer.core.calculators import (
    LucroPresumidoCalculator,
    LucroRealEngine,
    SimplesNacionalCalculator,
)
from regime_analyzer.core.models import EntityInputs, JurisdictionProfile
from regime_analyzer.core.services import ActivityClassifier, JurisdictionNormalizer
from regime_analyzer.infrastructure.reference_data import ReferenceDataSource


@pytest.fixture
def reference_data() -> ReferenceDataSource:
    """Bundled state records."""
    return ReferenceDataSource.bundled()


@pytest.fixture
def normalizer(reference_data: ReferenceDataSource) -> JurisdictionNormalizer:
    """Normalizer over the bundled records, with an empty cache."""
    return JurisdictionNormalizer(reference_data)


@pytest.fixture
def classifier() -> ActivityClassifier:
    return ActivityClassifier()


@pytest.fixture
def comparator(normalizer: JurisdictionNormalizer) -> RegimeComparator:
    return RegimeComparator(normalizer=normalizer)


@pytest.fixture
def simples() -> SimplesNacionalCalculator:
    return SimplesNacionalCalculator()


@pytest.fixture
def presumido() -> LucroPresumidoCalculator:
    return LucroPresumidoCalculator()


@pytest.fixture
def engine() -> LucroRealEngine:
    return LucroRealEngine()


@pytest.fixture
def sp(normalizer: JurisdictionNormalizer) -> JurisdictionProfile:
    """São Paulo: no surcharge, no regional incentive."""
    return normalizer.normalize("SP")


@pytest.fixture
def pe(normalizer: JurisdictionNormalizer) -> JurisdictionProfile:
    """Pernambuco: SUDENE area with FECEP surcharge."""
    return normalizer.normalize("PE")


@pytest.fixture
def software_inputs() -> EntityInputs:
    """Software house in SP billing R$ 10k/month with R$ 2k payroll."""
    return EntityInputs(
        uf="SP",
        cnae="6201-5/01",
        receita_periodo=Decimal("10000"),
        folha_periodo=Decimal("2000"),
    )
