"""Domain models for corporate tax regime comparison."""

from regime_analyzer.core.models.activity import ActivityProfile
from regime_analyzer.core.models.comparison import (
    Advisory,
    ComparisonResult,
    EligibilityExclusion,
    RankedRegime,
    ScenarioPoint,
    StateRanking,
    Vantagem,
)
from regime_analyzer.core.models.enums import (
    Anexo,
    AssetCategory,
    CategoriaAtividade,
    CreditCategory,
    ExclusionReason,
    OrigemClassificacao,
    PresumptionCategory,
    ProgramaIncentivo,
    Severity,
    SourceQuality,
    TaxRegime,
    TipoTributo,
)
from regime_analyzer.core.models.inputs import (
    CapitalAsset,
    CreditContext,
    EntityInputs,
    EquityContext,
    LossLedger,
    LucroRealInputs,
)
from regime_analyzer.core.models.jurisdiction import (
    FederalRateOverrides,
    IncentiveFlag,
    JurisdictionProfile,
    SurchargeInfo,
)
from regime_analyzer.core.models.results import (
    CreditLedgerResult,
    JCPResult,
    LossCompensation,
    LucroRealResult,
    PresumidoResult,
    RegimeResult,
    SimplesResult,
)

__all__ = [
    "ActivityProfile",
    "Advisory",
    "Anexo",
    "AssetCategory",
    "CapitalAsset",
    "CategoriaAtividade",
    "ComparisonResult",
    "CreditCategory",
    "CreditContext",
    "CreditLedgerResult",
    "EligibilityExclusion",
    "EntityInputs",
    "EquityContext",
    "ExclusionReason",
    "FederalRateOverrides",
    "IncentiveFlag",
    "JCPResult",
    "JurisdictionProfile",
    "LossCompensation",
    "LossLedger",
    "LucroRealInputs",
    "LucroRealResult",
    "OrigemClassificacao",
    "PresumidoResult",
    "PresumptionCategory",
    "ProgramaIncentivo",
    "RankedRegime",
    "RegimeResult",
    "ScenarioPoint",
    "Severity",
    "SimplesResult",
    "SourceQuality",
    "StateRanking",
    "TaxRegime",
    "TipoTributo",
    "Vantagem",
]
