"""Canonical per-state tax profile."""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, computed_field

from regime_analyzer.core.models.enums import ProgramaIncentivo, SourceQuality


class SurchargeInfo(BaseModel):
    """State poverty-fund ICMS surcharge (FECOP, FECOEP, FUNCEP...)."""

    existe: bool = False
    nome: str = "N/A"
    aliquota: Decimal = Field(default=Decimal("0"), ge=0)

    model_config = {"frozen": True}


class IncentiveFlag(BaseModel):
    """Regional incentive program available in the state."""

    programa: ProgramaIncentivo
    ativo: bool = True
    percentual_reducao: Decimal = Field(default=Decimal("0"), ge=0, le=1)
    condicao: str = ""

    model_config = {"frozen": True}


class FederalRateOverrides(BaseModel):
    """Federal rates published in the state record.

    Rarely populated; ``None`` means the national constant applies.
    """

    aliquota_irpj: Optional[Decimal] = None
    aliquota_adicional_irpj: Optional[Decimal] = None
    limite_adicional_mensal: Optional[Decimal] = None
    aliquota_csll: Optional[Decimal] = None
    pis_cumulativo: Optional[Decimal] = None
    cofins_cumulativo: Optional[Decimal] = None
    pis_nao_cumulativo: Optional[Decimal] = None
    cofins_nao_cumulativo: Optional[Decimal] = None

    model_config = {"frozen": True}

    @property
    def vazio(self) -> bool:
        return all(value is None for value in self.model_dump().values())


class JurisdictionProfile(BaseModel):
    """Normalized tax data of one federative unit for one tax year."""

    codigo: str = Field(..., description="UF")
    nome: str = Field(default="")
    regiao: str = Field(default="")
    ano: int

    icms_aliquota_padrao: Decimal = Field(..., gt=0, le=1)
    adicional: SurchargeInfo = Field(default_factory=SurchargeInfo)

    iss_aliquota_minima: Decimal = Field(..., ge=0, le=1)
    iss_aliquota_maxima: Decimal = Field(..., gt=0, le=1)
    iss_aliquota_referencia: Decimal = Field(..., gt=0, le=1)
    municipio_referencia: Optional[str] = None

    sublimite_simples: Decimal = Field(..., gt=0)
    incentivos: tuple[IncentiveFlag, ...] = Field(default_factory=tuple)
    federal: FederalRateOverrides = Field(default_factory=FederalRateOverrides)

    source_quality: SourceQuality = SourceQuality.AUTHORITATIVE
    campos_fallback: tuple[str, ...] = Field(default_factory=tuple)

    model_config = {"frozen": True}

    @computed_field
    @property
    def icms_aliquota_efetiva(self) -> Decimal:
        """Standard ICMS plus the state surcharge, when active."""
        if self.adicional.existe:
            return self.icms_aliquota_padrao + self.adicional.aliquota
        return self.icms_aliquota_padrao

    @property
    def is_fallback(self) -> bool:
        return self.source_quality == SourceQuality.FALLBACK

    @property
    def incentivo_irpj(self) -> Optional[IncentiveFlag]:
        """Active SUDAM/SUDENE program granting an IRPJ reduction."""
        for incentivo in self.incentivos:
            if (
                incentivo.ativo
                and incentivo.programa in (ProgramaIncentivo.SUDAM, ProgramaIncentivo.SUDENE)
                and incentivo.percentual_reducao > 0
            ):
                return incentivo
        return None

    @property
    def possui_zfm(self) -> bool:
        return any(
            i.ativo and i.programa == ProgramaIncentivo.ZFM for i in self.incentivos
        )

    def programas_ativos(self) -> list[ProgramaIncentivo]:
        return [i.programa for i in self.incentivos if i.ativo]
