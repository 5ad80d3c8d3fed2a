"""Enumerations for corporate tax regime models."""

from enum import Enum


class TaxRegime(str, Enum):
    """Corporate tax regimes, in tie-break preference order."""

    SIMPLES_NACIONAL = "simples_nacional"
    LUCRO_PRESUMIDO = "lucro_presumido"
    LUCRO_REAL = "lucro_real"

    @property
    def nome(self) -> str:
        return _NOMES_REGIME[self]

    @property
    def ordem(self) -> int:
        """Fixed preference used to break ties between equal liabilities."""
        return list(TaxRegime).index(self)


_NOMES_REGIME = {
    TaxRegime.SIMPLES_NACIONAL: "Simples Nacional",
    TaxRegime.LUCRO_PRESUMIDO: "Lucro Presumido",
    TaxRegime.LUCRO_REAL: "Lucro Real",
}


class Anexo(str, Enum):
    """Simples Nacional annexes."""

    I = "I"
    II = "II"
    III = "III"
    IV = "IV"
    V = "V"


class TipoTributo(str, Enum):
    """Consumption tax levied on the activity's revenue."""

    ICMS = "ICMS"  # goods (state)
    ISS = "ISS"  # services (municipal)


class CategoriaAtividade(str, Enum):
    """Coarse activity category."""

    COMERCIO = "comercio"
    INDUSTRIA = "industria"
    SERVICO = "servico"


class PresumptionCategory(str, Enum):
    """Presumption profiles for IRPJ/CSLL (Lei 9.249/1995, art. 15 e 20)."""

    COMBUSTIVEL = "combustivel"
    COMERCIO_INDUSTRIA = "comercio_industria"
    TRANSPORTE_PASSAGEIROS = "transporte_passageiros"
    SERVICOS_GERAIS = "servicos_gerais"
    INTERMEDIACAO = "intermediacao"
    LOCACAO_CESSAO = "locacao_cessao"
    CONSTRUCAO_EMPREITADA = "construcao_empreitada"
    CONSTRUCAO_CONCESSAO = "construcao_concessao"
    SAUDE_HOSPITALAR = "saude_hospitalar"
    FACTORING = "factoring"
    ESC = "esc"


class OrigemClassificacao(str, Enum):
    """Where an activity profile came from."""

    CNAE = "cnae"  # subclass or prefix table
    CATEGORIA = "categoria"  # declared category recognized
    PADRAO = "padrao"  # nothing matched, default category


class SourceQuality(str, Enum):
    """Quality marker for normalized reference data."""

    AUTHORITATIVE = "authoritative"
    FALLBACK = "fallback"


class ProgramaIncentivo(str, Enum):
    """Regional incentive programs."""

    SUDAM = "sudam"
    SUDENE = "sudene"
    ZFM = "zfm"
    ALC = "alc"
    SUFRAMA = "suframa"
    SUDECO = "sudeco"


class Severity(str, Enum):
    """Advisory severity."""

    INFO = "info"
    OPORTUNIDADE = "oportunidade"
    ATENCAO = "atencao"
    CRITICO = "critico"


class ExclusionReason(str, Enum):
    """Why a regime was left out of the ranking."""

    SIMPLES_CEILING_EXCEEDED = "simples_ceiling_exceeded"
    SIMPLES_ACTIVITY_PROHIBITED = "simples_activity_prohibited"
    SIMPLES_NOT_APPLICABLE = "simples_not_applicable"
    PRESUMIDO_CEILING_EXCEEDED = "presumido_ceiling_exceeded"
    LUCRO_REAL_MANDATORY = "lucro_real_mandatory"


class CreditCategory(str, Enum):
    """Expense categories for non-cumulative PIS/COFINS credits."""

    BENS_REVENDA = "bens_revenda"
    INSUMOS = "insumos"
    ENERGIA = "energia"
    ALUGUEL_PJ = "aluguel_pj"
    ARRENDAMENTO = "arrendamento"
    FRETE = "frete"
    DEVOLUCOES = "devolucoes"
    PAGAMENTO_PF = "pagamento_pf"  # natural persons: no credit
    OUTRAS_SEM_CREDITO = "outras_sem_credito"

    @property
    def gera_credito(self) -> bool:
        return self not in (CreditCategory.PAGAMENTO_PF, CreditCategory.OUTRAS_SEM_CREDITO)


class AssetCategory(str, Enum):
    """Capital asset categories."""

    EDIFICACOES = "edificacoes"
    INSTALACOES = "instalacoes"
    MAQUINAS = "maquinas"
    MOVEIS = "moveis"
    VEICULOS = "veiculos"
    COMPUTADORES = "computadores"
    TRATORES = "tratores"
