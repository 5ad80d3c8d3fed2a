"""Jurisdiction-independent defaults used when a state record is incomplete.

These are reference values only: a profile built from them is always marked
as fallback quality.
"""

from decimal import Decimal

# Standard internal ICMS rate by state (reference values for 2025)
ICMS_FALLBACK = {
    "AC": Decimal("0.19"), "AL": Decimal("0.19"), "AP": Decimal("0.18"),
    "AM": Decimal("0.20"), "BA": Decimal("0.205"), "CE": Decimal("0.20"),
    "DF": Decimal("0.20"), "ES": Decimal("0.17"), "GO": Decimal("0.19"),
    "MA": Decimal("0.22"), "MT": Decimal("0.17"), "MS": Decimal("0.17"),
    "MG": Decimal("0.18"), "PA": Decimal("0.19"), "PB": Decimal("0.20"),
    "PR": Decimal("0.195"), "PE": Decimal("0.205"), "PI": Decimal("0.21"),
    "RJ": Decimal("0.22"), "RN": Decimal("0.20"), "RS": Decimal("0.17"),
    "RO": Decimal("0.195"), "RR": Decimal("0.20"), "SC": Decimal("0.17"),
    "SP": Decimal("0.18"), "SE": Decimal("0.19"), "TO": Decimal("0.20"),
}

NOMES_UF = {
    "AC": "Acre", "AL": "Alagoas", "AP": "Amapá", "AM": "Amazonas",
    "BA": "Bahia", "CE": "Ceará", "DF": "Distrito Federal",
    "ES": "Espírito Santo", "GO": "Goiás", "MA": "Maranhão",
    "MT": "Mato Grosso", "MS": "Mato Grosso do Sul", "MG": "Minas Gerais",
    "PA": "Pará", "PB": "Paraíba", "PR": "Paraná", "PE": "Pernambuco",
    "PI": "Piauí", "RJ": "Rio de Janeiro", "RN": "Rio Grande do Norte",
    "RS": "Rio Grande do Sul", "RO": "Rondônia", "RR": "Roraima",
    "SC": "Santa Catarina", "SP": "São Paulo", "SE": "Sergipe",
    "TO": "Tocantins",
}

REGIOES = {
    "Norte": ("AC", "AP", "AM", "PA", "RO", "RR", "TO"),
    "Nordeste": ("AL", "BA", "CE", "MA", "PB", "PE", "PI", "RN", "SE"),
    "Centro-Oeste": ("DF", "GO", "MT", "MS"),
    "Sudeste": ("ES", "MG", "RJ", "SP"),
    "Sul": ("PR", "RS", "SC"),
}

CAPITAIS = {
    "AC": "Rio Branco", "AL": "Maceió", "AP": "Macapá", "AM": "Manaus",
    "BA": "Salvador", "CE": "Fortaleza", "DF": "Brasília", "ES": "Vitória",
    "GO": "Goiânia", "MA": "São Luís", "MT": "Cuiabá", "MS": "Campo Grande",
    "MG": "Belo Horizonte", "PA": "Belém", "PB": "João Pessoa",
    "PR": "Curitiba", "PE": "Recife", "PI": "Teresina", "RJ": "Rio de Janeiro",
    "RN": "Natal", "RS": "Porto Alegre", "RO": "Porto Velho", "RR": "Boa Vista",
    "SC": "Florianópolis", "SP": "São Paulo", "SE": "Aracaju", "TO": "Palmas",
}

# Regional development areas (federal incentives)
AREA_SUDAM = ("AC", "AM", "AP", "PA", "RO", "RR", "TO", "MT", "MA")
AREA_SUDENE = ("MA", "AL", "BA", "CE", "PB", "PE", "PI", "RN", "SE")
AREA_ZFM = ("AM",)

CONDICAO_SUDAM = "Projeto aprovado pela SUDAM em setor prioritário (lucro da exploração)"
CONDICAO_SUDENE = "Projeto aprovado pela SUDENE em setor prioritário (lucro da exploração)"
CONDICAO_ZFM = "Estabelecimento na Zona Franca de Manaus com projeto SUFRAMA"


def regiao_da_uf(uf: str) -> str:
    """Region name of a state ("" when unknown)."""
    for regiao, ufs in REGIOES.items():
        if uf in ufs:
            return regiao
    return ""
