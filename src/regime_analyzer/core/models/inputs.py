"""Input models for regime comparison."""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from regime_analyzer.core.models.enums import AssetCategory, CreditCategory
from regime_analyzer.shared.validators import normalize_uf, validar_cnpj

PERIODOS_VALIDOS = (1, 3, 12)


class LossLedger(BaseModel):
    """Carryforward balances of an entity under Lucro Real.

    Owned by the caller; the engine receives the prior ledger and returns a
    new posterior ledger.
    """

    prejuizo_operacional: Decimal = Field(default=Decimal("0"), ge=0)
    prejuizo_nao_operacional: Decimal = Field(default=Decimal("0"), ge=0)
    base_negativa_csll: Decimal = Field(default=Decimal("0"), ge=0)

    model_config = {"frozen": True}

    @property
    def total_prejuizos(self) -> Decimal:
        return self.prejuizo_operacional + self.prejuizo_nao_operacional

    @classmethod
    def zerado(cls) -> "LossLedger":
        """Explicitly zeroed ledger."""
        return cls()


class EquityContext(BaseModel):
    """Figures needed for the interest-on-equity (JCP) deduction."""

    patrimonio_liquido_ajustado: Decimal = Field(default=Decimal("0"), ge=0)
    # Annual TJLP; mandatory whenever JCP is simulated
    tjlp: Optional[Decimal] = Field(default=None, ge=0)
    lucros_acumulados: Decimal = Field(
        default=Decimal("0"), ge=0, description="Retained earnings and profit reserves"
    )
    lucro_liquido: Optional[Decimal] = Field(
        default=None, description="Net income before the JCP deduction (default: accounting profit)"
    )

    model_config = {"frozen": True}


class CapitalAsset(BaseModel):
    """Fixed asset generating PIS/COFINS credit on depreciation."""

    descricao: str = ""
    categoria: AssetCategory = AssetCategory.MAQUINAS
    custo_aquisicao: Decimal = Field(..., ge=0)
    taxa_depreciacao_contabil: Optional[Decimal] = Field(
        default=None, ge=0, le=1, description="Annual straight-line rate used in the books"
    )

    model_config = {"frozen": True}


class CreditContext(BaseModel):
    """Revenue and expenses for the non-cumulative PIS/COFINS ledger."""

    receita_bruta: Optional[Decimal] = Field(default=None, ge=0)
    receita_isenta: Decimal = Field(default=Decimal("0"), ge=0)
    receita_exportacao: Decimal = Field(default=Decimal("0"), ge=0)
    despesas: dict[CreditCategory, Decimal] = Field(default_factory=dict)
    ativos: list[CapitalAsset] = Field(default_factory=list)
    saldo_pis_anterior: Decimal = Field(default=Decimal("0"), ge=0)
    saldo_cofins_anterior: Decimal = Field(default=Decimal("0"), ge=0)

    model_config = {"frozen": True}

    @field_validator("despesas")
    @classmethod
    def validate_despesas(cls, v: dict[CreditCategory, Decimal]) -> dict[CreditCategory, Decimal]:
        """Expense amounts cannot be negative."""
        for categoria, valor in v.items():
            if valor < 0:
                raise ValueError(f"Despesa negativa na categoria {categoria.value}")
        return v


class LucroRealInputs(BaseModel):
    """Accounting figures for the Lucro Real pipeline."""

    lucro_contabil: Decimal = Field(..., description="Profit before IRPJ/CSLL")
    adicoes: Decimal = Field(default=Decimal("0"), ge=0)
    exclusoes: Decimal = Field(default=Decimal("0"), ge=0)
    resultado_nao_operacional: Decimal = Field(
        default=Decimal("0"), description="Signed capital gains/losses included in the profit"
    )
    prejuizos: LossLedger = Field(default_factory=LossLedger)
    patrimonio: Optional[EquityContext] = None
    creditos: Optional[CreditContext] = None

    model_config = {"frozen": True}


class EntityInputs(BaseModel):
    """Everything the comparator needs about one entity and period."""

    uf: str = Field(..., description="State code")
    cnae: str = Field(default="")
    categoria: Optional[str] = Field(default=None, description="Declared category, free text")
    cnpj: Optional[str] = None

    meses: int = Field(default=1, description="Period length: 1, 3 or 12 months")
    receita_periodo: Decimal = Field(..., description="Gross revenue of the period")
    receita_12m: Optional[Decimal] = Field(default=None, description="RBT12; default annualized period revenue")
    folha_periodo: Decimal = Field(default=Decimal("0"), ge=0)
    folha_12m: Optional[Decimal] = Field(default=None, ge=0)

    lucro_real: Optional[LucroRealInputs] = None
    # Used to estimate Lucro Real when no accounting figures are supplied
    margem_lucro_estimada: Decimal = Field(default=Decimal("0.20"), ge=0, le=1)
    percentual_creditos_estimado: Decimal = Field(default=Decimal("0.30"), ge=0, le=1)

    ano: Optional[int] = None

    model_config = {"frozen": True}

    @field_validator("uf")
    @classmethod
    def validate_uf(cls, v: str) -> str:
        return normalize_uf(v)

    @field_validator("meses")
    @classmethod
    def validate_meses(cls, v: int) -> int:
        """Only monthly, quarterly and annual periods are supported."""
        if v not in PERIODOS_VALIDOS:
            raise ValueError("Período deve ser de 1, 3 ou 12 meses")
        return v

    @field_validator("cnpj")
    @classmethod
    def validate_cnpj(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        valido, motivo = validar_cnpj(v)
        if not valido:
            raise ValueError(f"CNPJ inválido: {motivo}")
        return "".join(filter(str.isdigit, v))

    @property
    def receita_mensal(self) -> Decimal:
        return self.receita_periodo / self.meses

    @property
    def folha_mensal(self) -> Decimal:
        return self.folha_periodo / self.meses

    @property
    def rbt12(self) -> Decimal:
        """Trailing 12-month revenue (annualized period revenue when not given)."""
        if self.receita_12m is not None:
            return self.receita_12m
        return self.receita_mensal * 12

    @property
    def receita_anual_estimada(self) -> Decimal:
        return self.receita_mensal * 12
