"""Per-regime calculation results."""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, computed_field, model_validator

from regime_analyzer.core.models.enums import (
    Anexo,
    PresumptionCategory,
    ProgramaIncentivo,
    TaxRegime,
)
from regime_analyzer.core.models.inputs import LossLedger

# Total must match the sum of components within one cent
TOLERANCIA = Decimal("0.01")


class RegimeResult(BaseModel):
    """Liability of one regime for the period."""

    regime: TaxRegime
    aplicavel: bool = True
    receita_bruta: Decimal = Field(..., ge=0, description="Gross revenue of the period")
    componentes: dict[str, Decimal] = Field(default_factory=dict)
    total: Decimal = Field(default=Decimal("0"), ge=0)
    alertas: tuple[str, ...] = Field(default_factory=tuple)
    motivo: Optional[str] = Field(default=None, description="Why the regime is not applicable")
    base_legal: str = ""

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_components(self) -> "RegimeResult":
        """Total equals the sum of non-negative components."""
        for nome, valor in self.componentes.items():
            if valor < 0:
                raise ValueError(f"Componente {nome} negativo: {valor}")
        soma = sum(self.componentes.values(), Decimal("0"))
        if abs(soma - self.total) > TOLERANCIA:
            raise ValueError(f"Total {self.total} difere da soma dos componentes {soma}")
        return self

    @computed_field
    @property
    def aliquota_efetiva(self) -> Decimal:
        """Liability divided by gross revenue."""
        if self.receita_bruta <= 0:
            return Decimal("0")
        return self.total / self.receita_bruta

    @property
    def nome(self) -> str:
        return self.regime.nome

    def componente(self, nome: str) -> Decimal:
        return self.componentes.get(nome, Decimal("0"))

    def to_row(self) -> dict[str, object]:
        """Flat record for external renderers."""
        row: dict[str, object] = {
            "regime": self.regime.value,
            "nome": self.nome,
            "elegivel": self.aplicavel,
            "receita_bruta": self.receita_bruta,
            "total": self.total,
            "aliquota_efetiva": self.aliquota_efetiva,
        }
        row.update(self.componentes)
        return row


class SimplesResult(RegimeResult):
    """Simples Nacional result with bracket details."""

    regime: TaxRegime = TaxRegime.SIMPLES_NACIONAL
    anexo: Optional[Anexo] = None
    faixa: int = Field(default=0, ge=0)
    fator_r: Optional[Decimal] = None
    aliquota_nominal: Decimal = Decimal("0")
    aliquota_efetiva_das: Decimal = Decimal("0")
    receita_12m: Decimal = Decimal("0")
    sublimite: Decimal = Decimal("0")
    sublimite_excedido: bool = False


class PresumidoResult(RegimeResult):
    """Lucro Presumido result with presumption details."""

    regime: TaxRegime = TaxRegime.LUCRO_PRESUMIDO
    meses: int = 3
    presuncao: PresumptionCategory = PresumptionCategory.SERVICOS_GERAIS
    presuncao_irpj: Decimal = Decimal("0")
    presuncao_csll: Decimal = Decimal("0")
    base_irpj: Decimal = Decimal("0")
    base_csll: Decimal = Decimal("0")
    limite_adicional: Decimal = Decimal("0")
    reducao_incentivo: Decimal = Decimal("0")
    programa_incentivo: Optional[ProgramaIncentivo] = None


class LossCompensation(BaseModel):
    """Loss compensation step of Lucro Real (LALUR part B movements)."""

    lucro_ajustado: Decimal
    limite_compensacao: Decimal = Decimal("0")
    compensacao_operacional: Decimal = Decimal("0")
    compensacao_nao_operacional: Decimal = Decimal("0")
    compensacao_csll: Decimal = Decimal("0")
    prejuizo_gerado_operacional: Decimal = Decimal("0")
    prejuizo_gerado_nao_operacional: Decimal = Decimal("0")
    base_negativa_gerada: Decimal = Decimal("0")
    base_irpj: Decimal = Decimal("0")
    base_csll: Decimal = Decimal("0")

    model_config = {"frozen": True}

    @property
    def compensacao_irpj(self) -> Decimal:
        return self.compensacao_operacional + self.compensacao_nao_operacional


class JCPResult(BaseModel):
    """Interest-on-equity deduction and its net benefit."""

    calculado: bool = False
    valor: Decimal = Decimal("0")
    limite_tjlp: Decimal = Decimal("0")
    limite_lucro: Decimal = Decimal("0")
    limite_reservas: Decimal = Decimal("0")
    irrf: Decimal = Decimal("0")
    economia_irpj: Decimal = Decimal("0")
    economia_csll: Decimal = Decimal("0")
    observacao: str = ""

    model_config = {"frozen": True}

    @property
    def economia_tributos(self) -> Decimal:
        return self.economia_irpj + self.economia_csll

    @property
    def beneficio_liquido(self) -> Decimal:
        """Tax saved minus the withholding on the amount paid."""
        return self.economia_tributos - self.irrf


class CreditLedgerResult(BaseModel):
    """Non-cumulative PIS/COFINS debit/credit ledger for the period."""

    receita_tributavel: Decimal = Decimal("0")
    debito_pis: Decimal = Decimal("0")
    debito_cofins: Decimal = Decimal("0")
    base_creditos: Decimal = Decimal("0")
    base_depreciacao: Decimal = Decimal("0")
    base_depreciacao_contabil: Decimal = Decimal("0")
    divergencia_depreciacao: bool = False
    credito_pis: Decimal = Decimal("0")
    credito_cofins: Decimal = Decimal("0")
    saldo_pis_anterior: Decimal = Decimal("0")
    saldo_cofins_anterior: Decimal = Decimal("0")
    pis_devido: Decimal = Decimal("0")
    cofins_devido: Decimal = Decimal("0")
    saldo_pis: Decimal = Field(default=Decimal("0"), description="Credit carried forward")
    saldo_cofins: Decimal = Field(default=Decimal("0"), description="Credit carried forward")

    model_config = {"frozen": True}

    @property
    def total_devido(self) -> Decimal:
        return self.pis_devido + self.cofins_devido

    @property
    def saldo_credor(self) -> Decimal:
        return self.saldo_pis + self.saldo_cofins


class LucroRealResult(RegimeResult):
    """Lucro Real result with full pipeline detail."""

    regime: TaxRegime = TaxRegime.LUCRO_REAL
    meses: int = 1
    lucro_contabil: Decimal = Decimal("0")
    compensacao: Optional[LossCompensation] = None
    prejuizos_anterior: LossLedger = Field(default_factory=LossLedger)
    prejuizos_posterior: LossLedger = Field(default_factory=LossLedger)
    jcp: JCPResult = Field(default_factory=JCPResult)
    creditos: CreditLedgerResult = Field(default_factory=CreditLedgerResult)
    irpj_antes_jcp: Decimal = Decimal("0")
    limite_adicional: Decimal = Decimal("0")
    reducao_incentivo: Decimal = Decimal("0")
    programa_incentivo: Optional[ProgramaIncentivo] = None
    lucro_estimado: bool = Field(default=False, description="Profit estimated from a margin")
