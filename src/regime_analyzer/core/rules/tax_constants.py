"""National tax constants for corporate regime comparison.

Federal rates are jurisdiction-independent; values follow the legislation in
force for 2025.
Sources:
- LC 123/2006 (Simples Nacional), Anexos I a V, redação da LC 155/2016
- Lei 9.249/1995, arts. 15 e 20 (presunção IRPJ/CSLL)
- Lei 9.430/1996 e RIR/2018 (IRPJ, adicional, compensação de prejuízos)
- Lei 10.637/2002 e Lei 10.833/2003 (PIS/COFINS não cumulativos)
- Lei 9.249/1995, art. 9º (juros sobre capital próprio)
"""

from decimal import Decimal

# === Regime limits (annual gross revenue) ===

LIMITE_SIMPLES_NACIONAL = Decimal("4800000")
SUBLIMITE_ICMS_ISS = Decimal("3600000")
LIMITE_MICROEMPRESA = Decimal("360000")
LIMITE_LUCRO_PRESUMIDO = Decimal("78000000")

# Advisory thresholds
LIMITE_ALERTA_SIMPLES = Decimal("4000000")
PROXIMIDADE_LIMITE = Decimal("0.05")  # within 5% of a ceiling

# === IRPJ ===

ALIQUOTA_IRPJ = Decimal("0.15")
ALIQUOTA_ADICIONAL_IRPJ = Decimal("0.10")
LIMITE_ADICIONAL_MENSAL = Decimal("20000")  # 60k/quarter, 240k/year

# === CSLL ===

ALIQUOTA_CSLL = Decimal("0.09")
ALIQUOTA_CSLL_FINANCEIRAS = Decimal("0.15")

# === PIS/COFINS ===

PIS_CUMULATIVO = Decimal("0.0065")
COFINS_CUMULATIVO = Decimal("0.03")
PIS_NAO_CUMULATIVO = Decimal("0.0165")
COFINS_NAO_CUMULATIVO = Decimal("0.076")

# === Payroll charges (employer) ===

INSS_PATRONAL = Decimal("0.20")
RAT = Decimal("0.02")
TERCEIROS = Decimal("0.058")
CPP_TOTAL = INSS_PATRONAL + RAT + TERCEIROS

# === Lucro Real ===

# Compensation of prior losses capped at 30% of adjusted income (Lei 9.065/1995)
LIMITE_COMPENSACAO_PREJUIZO = Decimal("0.30")

# JCP: IRRF withheld on the amount credited to shareholders
ALIQUOTA_IRRF_JCP = Decimal("0.15")
LIMITE_JCP_LUCRO = Decimal("0.50")
LIMITE_JCP_RESERVAS = Decimal("0.50")

# Statutory fixed-fraction credit on capital assets (months)
PARCELAS_CREDITO_IMOBILIZADO = 48
PARCELAS_CREDITO_EDIFICACOES = 60

# Straight-line accounting depreciation (annual), IN RFB 1.700/2017 Anexo III
TAXAS_DEPRECIACAO = {
    "edificacoes": Decimal("0.04"),
    "instalacoes": Decimal("0.10"),
    "maquinas": Decimal("0.10"),
    "moveis": Decimal("0.10"),
    "veiculos": Decimal("0.20"),
    "computadores": Decimal("0.20"),
    "tratores": Decimal("0.25"),
}

# === Simples Nacional ===

# Fator "r" threshold (payroll / revenue) for Anexo III instead of V
LIMITE_FATOR_R = Decimal("0.28")
FATOR_R_ZONA_RISCO = Decimal("0.25")
FATOR_R_MARGEM_ESTREITA = Decimal("0.31")

# Brackets per annex: (upper limit RBT12, nominal rate, deduction)
ANEXO_I = [
    (Decimal("180000"), Decimal("0.04"), Decimal("0")),
    (Decimal("360000"), Decimal("0.073"), Decimal("5940")),
    (Decimal("720000"), Decimal("0.095"), Decimal("13860")),
    (Decimal("1800000"), Decimal("0.107"), Decimal("22500")),
    (Decimal("3600000"), Decimal("0.143"), Decimal("87300")),
    (Decimal("4800000"), Decimal("0.19"), Decimal("378000")),
]

ANEXO_II = [
    (Decimal("180000"), Decimal("0.045"), Decimal("0")),
    (Decimal("360000"), Decimal("0.078"), Decimal("5940")),
    (Decimal("720000"), Decimal("0.10"), Decimal("13860")),
    (Decimal("1800000"), Decimal("0.112"), Decimal("22500")),
    (Decimal("3600000"), Decimal("0.147"), Decimal("85500")),
    (Decimal("4800000"), Decimal("0.30"), Decimal("720000")),
]

ANEXO_III = [
    (Decimal("180000"), Decimal("0.06"), Decimal("0")),
    (Decimal("360000"), Decimal("0.112"), Decimal("9360")),
    (Decimal("720000"), Decimal("0.135"), Decimal("17640")),
    (Decimal("1800000"), Decimal("0.16"), Decimal("35640")),
    (Decimal("3600000"), Decimal("0.21"), Decimal("125640")),
    (Decimal("4800000"), Decimal("0.33"), Decimal("648000")),
]

# CPP not included in the DAS
ANEXO_IV = [
    (Decimal("180000"), Decimal("0.045"), Decimal("0")),
    (Decimal("360000"), Decimal("0.09"), Decimal("8100")),
    (Decimal("720000"), Decimal("0.102"), Decimal("12420")),
    (Decimal("1800000"), Decimal("0.14"), Decimal("39780")),
    (Decimal("3600000"), Decimal("0.22"), Decimal("183780")),
    (Decimal("4800000"), Decimal("0.33"), Decimal("828000")),
]

ANEXO_V = [
    (Decimal("180000"), Decimal("0.155"), Decimal("0")),
    (Decimal("360000"), Decimal("0.18"), Decimal("4500")),
    (Decimal("720000"), Decimal("0.195"), Decimal("9900")),
    (Decimal("1800000"), Decimal("0.205"), Decimal("17100")),
    (Decimal("3600000"), Decimal("0.23"), Decimal("62100")),
    (Decimal("4800000"), Decimal("0.305"), Decimal("540000")),
]

TABELAS_SIMPLES = {
    "I": ANEXO_I,
    "II": ANEXO_II,
    "III": ANEXO_III,
    "IV": ANEXO_IV,
    "V": ANEXO_V,
}

NOMES_ANEXOS = {
    "I": "Comércio",
    "II": "Indústria",
    "III": "Serviços (com CPP)",
    "IV": "Serviços (CPP por fora)",
    "V": "Serviços (fator r < 28%)",
}

# ICMS/ISS share of the DAS in the 5th bracket (LC 123, repartição dos
# tributos). Used to carve the state/municipal tax out of the DAS once RBT12
# exceeds the state sublimit.
PARTILHA_ICMS_ISS = {
    "I": Decimal("0.335"),
    "II": Decimal("0.32"),
    "III": Decimal("0.335"),
    "IV": Decimal("0.40"),
    "V": Decimal("0.235"),
}

# === ICMS / ISS defaults ===

ICMS_PADRAO = Decimal("0.18")
ISS_PADRAO = Decimal("0.05")
ISS_MINIMO = Decimal("0.02")
ISS_MAXIMO = Decimal("0.05")

# Share of ICMS debits assumed offset by input credits (purchases with invoice)
CREDITO_ICMS_ESTIMADO = Decimal("0.30")

# Regional development incentives: IRPJ reduction on lucro da exploração
REDUCAO_IRPJ_INCENTIVO = Decimal("0.75")

# === Presumption percentages: (IRPJ, CSLL) ===

PRESUNCAO = {
    "combustivel": (Decimal("0.016"), Decimal("0.12")),
    "comercio_industria": (Decimal("0.08"), Decimal("0.12")),
    "transporte_passageiros": (Decimal("0.16"), Decimal("0.12")),
    "servicos_gerais": (Decimal("0.32"), Decimal("0.32")),
    "intermediacao": (Decimal("0.32"), Decimal("0.32")),
    "locacao_cessao": (Decimal("0.32"), Decimal("0.32")),
    "construcao_empreitada": (Decimal("0.08"), Decimal("0.12")),
    "construcao_concessao": (Decimal("0.32"), Decimal("0.32")),
    "saude_hospitalar": (Decimal("0.08"), Decimal("0.12")),
    "factoring": (Decimal("0.32"), Decimal("0.32")),
    "esc": (Decimal("0.384"), Decimal("0.384")),
}

# Reference tax year of the bundled tables
ANO_REFERENCIA = 2025

# Decimal places for monetary rounding
CENTAVOS = Decimal("0.01")


def calcular_aliquota_efetiva_simples(
    receita_12m: Decimal,
    aliquota_nominal: Decimal,
    deducao: Decimal,
) -> Decimal:
    """Effective Simples Nacional rate for a bracket.

    ((RBT12 x nominal rate) - deduction) / RBT12, floored at zero.

    Args:
        receita_12m: Gross revenue of the trailing 12 months (RBT12)
        aliquota_nominal: Bracket nominal rate
        deducao: Bracket deduction

    Returns:
        Effective rate (0 when RBT12 is not positive)
    """
    if receita_12m <= 0:
        return Decimal("0")
    aliquota = (receita_12m * aliquota_nominal - deducao) / receita_12m
    return max(aliquota, Decimal("0"))
