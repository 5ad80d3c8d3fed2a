"""Activity classification model."""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from regime_analyzer.core.models.enums import (
    Anexo,
    CategoriaAtividade,
    OrigemClassificacao,
    PresumptionCategory,
    TipoTributo,
)


class ActivityProfile(BaseModel):
    """Regime rules for one economic activity (CNAE)."""

    cnae: str = Field(default="", description="CNAE in DD.DD-D/DD layout")
    categoria: CategoriaAtividade
    anexo: Optional[Anexo] = Field(default=None, description="None when prohibited from Simples")
    fator_r: bool = Field(default=False, description="Annex III/V chosen by payroll ratio")
    vedado_simples: bool = False
    lucro_real_obrigatorio: bool = False
    presuncao: PresumptionCategory
    presuncao_irpj: Decimal = Field(..., gt=0, le=1)
    presuncao_csll: Decimal = Field(..., gt=0, le=1)
    tipo_tributo: TipoTributo
    origem: OrigemClassificacao = OrigemClassificacao.PADRAO
    nota: str = ""

    model_config = {"frozen": True}

    @property
    def is_servico(self) -> bool:
        return self.tipo_tributo == TipoTributo.ISS
