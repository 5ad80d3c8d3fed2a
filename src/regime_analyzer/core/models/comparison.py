"""Comparison result models."""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, computed_field

from regime_analyzer.core.models.activity import ActivityProfile
from regime_analyzer.core.models.enums import ExclusionReason, Severity, TaxRegime
from regime_analyzer.core.models.jurisdiction import JurisdictionProfile
from regime_analyzer.core.models.results import RegimeResult


class Advisory(BaseModel):
    """Generated alert or advice attached to a comparison."""

    titulo: str
    descricao: str
    severidade: Severity = Severity.INFO
    citacao: Optional[str] = Field(default=None, description="Legal basis")
    regime: Optional[TaxRegime] = None

    model_config = {"frozen": True}


class Vantagem(BaseModel):
    """Advantage of the recommended regime."""

    titulo: str
    descricao: str
    base_legal: Optional[str] = None

    model_config = {"frozen": True}


class EligibilityExclusion(BaseModel):
    """Regime left out of the ranking because a precondition failed."""

    regime: TaxRegime
    motivo: ExclusionReason
    descricao: str = ""

    model_config = {"frozen": True}


class RankedRegime(BaseModel):
    """Regime result with its ranking position (1 = cheapest)."""

    posicao: int = Field(..., ge=1)
    resultado: RegimeResult

    model_config = {"frozen": True}

    @property
    def regime(self) -> TaxRegime:
        return self.resultado.regime

    @property
    def total(self) -> Decimal:
        return self.resultado.total


class ComparisonResult(BaseModel):
    """Ranked comparison of the eligible regimes."""

    meses: int = 1
    receita_periodo: Decimal
    atividade: ActivityProfile
    jurisdicao: JurisdictionProfile
    ranking: tuple[RankedRegime, ...] = Field(default_factory=tuple)
    exclusoes: tuple[EligibilityExclusion, ...] = Field(default_factory=tuple)
    resultados: dict[TaxRegime, RegimeResult] = Field(
        default_factory=dict, description="Every computed regime, eligible or not"
    )
    advisories: tuple[Advisory, ...] = Field(default_factory=tuple)
    vantagens: tuple[Vantagem, ...] = Field(default_factory=tuple)
    recomendacao: str = ""

    model_config = {"frozen": True}

    @property
    def melhor(self) -> Optional[RankedRegime]:
        return self.ranking[0] if self.ranking else None

    @property
    def pior(self) -> Optional[RankedRegime]:
        return self.ranking[-1] if self.ranking else None

    @computed_field
    @property
    def economia(self) -> Decimal:
        """Savings of the cheapest over the most expensive regime for the period."""
        if not self.ranking:
            return Decimal("0")
        return self.ranking[-1].total - self.ranking[0].total

    @computed_field
    @property
    def economia_anual(self) -> Decimal:
        return self.economia * 12 / self.meses

    @property
    def regime_recomendado(self) -> Optional[TaxRegime]:
        return self.melhor.regime if self.melhor else None

    def posicao(self, regime: TaxRegime) -> Optional[int]:
        for item in self.ranking:
            if item.regime == regime:
                return item.posicao
        return None

    def exclusao(self, regime: TaxRegime) -> Optional[EligibilityExclusion]:
        for item in self.exclusoes:
            if item.regime == regime:
                return item
        return None

    def to_rows(self) -> list[dict[str, object]]:
        """One flat record per regime (ranked first, then excluded)."""
        rows = []
        for item in self.ranking:
            row = item.resultado.to_row()
            row["posicao"] = item.posicao
            rows.append(row)
        for exclusao in self.exclusoes:
            rows.append(
                {
                    "regime": exclusao.regime.value,
                    "nome": exclusao.regime.nome,
                    "elegivel": False,
                    "motivo": exclusao.motivo.value,
                    "posicao": None,
                }
            )
        return rows


class StateRanking(BaseModel):
    """Best regime of one state in a multi-state comparison."""

    posicao: int = Field(..., ge=1)
    uf: str
    nome: str = ""
    regiao: str = ""
    melhor_regime: Optional[TaxRegime] = None
    total: Optional[Decimal] = None
    aliquota_efetiva: Decimal = Decimal("0")
    incentivo: Optional[str] = None
    fallback: bool = False

    model_config = {"frozen": True}


class ScenarioPoint(BaseModel):
    """Best regime at one revenue level of a scenario sweep."""

    receita_mensal: Decimal
    folha_mensal: Decimal
    melhor_regime: Optional[TaxRegime] = None
    total_mensal: Optional[Decimal] = None
    economia_anual: Decimal = Decimal("0")
    totais: dict[TaxRegime, Decimal] = Field(default_factory=dict)

    model_config = {"frozen": True}

    @property
    def receita_anual(self) -> Decimal:
        return self.receita_mensal * 12
