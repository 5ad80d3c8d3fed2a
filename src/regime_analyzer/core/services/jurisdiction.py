"""Normalization of heterogeneous state records into JurisdictionProfile.

Each logical attribute has an ordered list of candidate paths into the raw
record. The first present, well-typed value wins; when none is found the
attribute falls back to a jurisdiction-independent default and the profile is
flagged. Supporting a new layout means adding a path, never a branch per
state.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Mapping, Optional, Protocol

from regime_analyzer.core.models.enums import ProgramaIncentivo, SourceQuality
from regime_analyzer.core.models.jurisdiction import (
    FederalRateOverrides,
    IncentiveFlag,
    JurisdictionProfile,
    SurchargeInfo,
)
from regime_analyzer.core.rules import jurisdiction_defaults as defaults
from regime_analyzer.core.rules.state_records import ESTADOS
from regime_analyzer.core.rules.tax_constants import (
    ANO_REFERENCIA,
    ICMS_PADRAO,
    ISS_MAXIMO,
    ISS_MINIMO,
    ISS_PADRAO,
    REDUCAO_IRPJ_INCENTIVO,
    SUBLIMITE_ICMS_ISS,
)
from regime_analyzer.shared.logging import get_logger
from regime_analyzer.shared.validators import normalize_uf

logger = get_logger(__name__)

_MISSING = object()

# Candidate paths, in priority order. "{ano}" is replaced by the tax year.
ICMS_PADRAO_PATHS = (
    "icms.aliquotas_por_ano.{ano}.padrao",
    "icms.aliquota_padrao",
    "icms.aliquota_interna_padrao",
    "icms.aliquota_interna",
    "icms.aliquotas_internas.geral.aliquota",
    "icms.aliquota_geral",
)

ISS_REFERENCIA_PATHS = (
    "iss.aliquotas_por_ano.{ano}.geral",
    "iss.aliquota_geral",
    "iss.aliquotas.geral",
    "iss.aliquotas.geral.aliquota",
    "iss.aliquotas.padrao",
    "iss.aliquota_padrao",
    "iss.aliquotas.mais_comum",
    "iss.aliquota_maxima",
    "iss.aliquotas.maxima",
)

ISS_MINIMA_PATHS = ("iss.aliquota_minima", "iss.aliquotas.minima", "iss.aliquota_minima_federal")
ISS_MAXIMA_PATHS = ("iss.aliquota_maxima", "iss.aliquotas.maxima", "iss.aliquota_maxima_federal")
MUNICIPIO_PATHS = ("iss.municipio_referencia", "iss.municipio", "dados_gerais.capital")

NOME_PATHS = ("dados_gerais.nome", "nome")
REGIAO_PATHS = ("dados_gerais.regiao", "regiao")

SUBLIMITE_PATHS = (
    "simples_nacional.sublimites_por_ano.{ano}",
    "simples_nacional.sublimite_estadual",
    "simples_nacional.sublimite",
    "sublimite_simples",
)

# Poverty-fund surcharges, searched under "icms.<name>" and "<name>"
SURCHARGE_NAMES = ("fecop", "fecoep", "fecp", "funcep", "fumacop", "fecep")
SURCHARGE_RATE_KEYS = ("adicional", "adicional_padrao", "aliquota", "percentual_adicional")

INCENTIVE_PATHS = {
    ProgramaIncentivo.SUDAM: ("incentivos.sudam", "dados_gerais.sudam", "dados_gerais.abrangencia_sudam"),
    ProgramaIncentivo.SUDENE: ("incentivos.sudene", "dados_gerais.sudene", "dados_gerais.abrangencia_sudene"),
    ProgramaIncentivo.ZFM: ("incentivos.zfm", "incentivos.zona_franca", "dados_gerais.zfm"),
    ProgramaIncentivo.ALC: ("incentivos.alc", "dados_gerais.alc"),
    ProgramaIncentivo.SUFRAMA: ("incentivos.suframa",),
    ProgramaIncentivo.SUDECO: ("incentivos.sudeco", "dados_gerais.sudeco"),
}

FEDERAL_RATE_PATHS = {
    "aliquota_irpj": ("federal.irpj.aliquota_normal", "federal.irpj.aliquota", "federal.irpj.aliquota_basica"),
    "aliquota_adicional_irpj": ("federal.irpj.adicional", "federal.irpj.aliquota_adicional"),
    "aliquota_csll": ("federal.csll.aliquota", "federal.csll.aliquota_geral"),
    "pis_cumulativo": ("federal.pis_pasep.cumulativo", "federal.pis.cumulativo"),
    "cofins_cumulativo": ("federal.cofins.cumulativo",),
    "pis_nao_cumulativo": ("federal.pis_pasep.nao_cumulativo", "federal.pis.nao_cumulativo"),
    "cofins_nao_cumulativo": ("federal.cofins.nao_cumulativo",),
}
FEDERAL_AMOUNT_PATHS = {
    "limite_adicional_mensal": ("federal.irpj.limite_adicional_mensal", "federal.irpj.excedente_mensal"),
}

CAMPOS_OBRIGATORIOS = ("icms_aliquota_padrao", "iss_aliquota_referencia")


class RawRecordSource(Protocol):
    """Anything that returns the raw record of a state (or None)."""

    def get(self, uf: str) -> Optional[Mapping[str, Any]]: ...


def resolve_path(record: Mapping[str, Any], path: str, ano: int) -> Any:
    """Walk a dotted path; returns a sentinel when any segment is absent."""
    node: Any = record
    for part in path.format(ano=ano).split("."):
        if not isinstance(node, Mapping) or part not in node:
            return _MISSING
        node = node[part]
    return node


def to_decimal(value: Any) -> Optional[Decimal]:
    """Coerce numbers and numeric strings ("20,5%", "0.18") to Decimal.

    Percentage strings are divided by 100. Booleans and anything
    non-numeric return None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value
    if isinstance(value, (int, float)):
        return Decimal(str(value))
    if isinstance(value, str):
        text = value.strip().replace(" ", "")
        percent = text.endswith("%")
        text = text.rstrip("%").replace(",", ".")
        try:
            number = Decimal(text)
        except InvalidOperation:
            return None
        return number / 100 if percent else number
    return None


def to_rate(value: Any) -> Optional[Decimal]:
    """Rate in (0, 1], or None."""
    rate = to_decimal(value)
    if rate is None or not (Decimal("0") < rate <= Decimal("1")):
        return None
    return rate


def to_amount(value: Any) -> Optional[Decimal]:
    """Positive amount, or None."""
    amount = to_decimal(value)
    if amount is None or amount <= 0:
        return None
    return amount


def to_text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def first_valid(
    record: Mapping[str, Any],
    paths: tuple[str, ...],
    coerce: Callable[[Any], Any],
    ano: int,
) -> Any:
    """First candidate path holding a value accepted by ``coerce``."""
    for path in paths:
        value = resolve_path(record, path, ano)
        if value is _MISSING:
            continue
        coerced = coerce(value)
        if coerced is not None:
            return coerced
    return None


class JurisdictionNormalizer:
    """Builds canonical state profiles with a read-through cache.

    The cache is keyed by (UF, year), written once per key and never
    mutated, so concurrent readers need no lock: ``dict.setdefault`` keeps
    the first profile if two callers race on the same key.

    Without a source the bundled state records are used; pass an empty
    mapping to normalize from defaults only.
    """

    def __init__(self, source: Optional[RawRecordSource] = None, ano: int = ANO_REFERENCIA):
        self.source = ESTADOS if source is None else source
        self.ano = ano
        self._cache: dict[tuple[str, int], JurisdictionProfile] = {}

    def normalize(
        self,
        codigo: str,
        raw: Optional[Mapping[str, Any]] = None,
        ano: Optional[int] = None,
    ) -> JurisdictionProfile:
        """Canonical profile of a state.

        Args:
            codigo: State code (UF)
            raw: Raw record; looked up in the source when omitted
            ano: Tax year (default: normalizer year)

        Returns:
            Cached profile; unknown states get a fully defaulted profile
        """
        uf = normalize_uf(codigo)
        ano = ano or self.ano
        key = (uf, ano)

        cached = self._cache.get(key)
        if cached is not None:
            return cached

        if raw is None:
            raw = self.source.get(uf)

        profile = self._build(uf, raw, ano)
        if profile.is_fallback:
            logger.warning(
                "jurisdiction_fallback",
                extra={"uf": uf, "ano": ano, "campos": list(profile.campos_fallback)},
            )
        return self._cache.setdefault(key, profile)

    def invalidate(self, codigo: str) -> None:
        """Drop every cached year of a state (source data replaced)."""
        uf = normalize_uf(codigo)
        for key in [k for k in self._cache if k[0] == uf]:
            self._cache.pop(key, None)

    def clear_cache(self) -> None:
        self._cache.clear()

    @property
    def cached_codes(self) -> list[str]:
        return sorted({uf for uf, _ in self._cache})

    def _build(self, uf: str, raw: Optional[Mapping[str, Any]], ano: int) -> JurisdictionProfile:
        record: Mapping[str, Any] = raw if isinstance(raw, Mapping) else {}
        fallback: list[str] = []

        icms = first_valid(record, ICMS_PADRAO_PATHS, to_rate, ano)
        if icms is None:
            icms = defaults.ICMS_FALLBACK.get(uf, ICMS_PADRAO)
            fallback.append("icms_aliquota_padrao")

        iss = first_valid(record, ISS_REFERENCIA_PATHS, to_rate, ano)
        if iss is None:
            iss = ISS_PADRAO
            fallback.append("iss_aliquota_referencia")

        iss_min = first_valid(record, ISS_MINIMA_PATHS, to_rate, ano)
        if iss_min is None:
            iss_min = min(ISS_MINIMO, iss)
            fallback.append("iss_aliquota_minima")
        iss_max = first_valid(record, ISS_MAXIMA_PATHS, to_rate, ano)
        if iss_max is None:
            iss_max = max(ISS_MAXIMO, iss)
            fallback.append("iss_aliquota_maxima")

        sublimite = first_valid(record, SUBLIMITE_PATHS, to_amount, ano)
        if sublimite is None:
            sublimite = SUBLIMITE_ICMS_ISS
            fallback.append("sublimite_simples")

        incentivos = self._extract_incentives(record, ano)
        if incentivos is None:
            incentivos = self._default_incentives(uf)
            fallback.append("incentivos")

        nome = first_valid(record, NOME_PATHS, to_text, ano) or defaults.NOMES_UF.get(uf, uf)
        regiao = first_valid(record, REGIAO_PATHS, to_text, ano) or defaults.regiao_da_uf(uf)
        municipio = first_valid(record, MUNICIPIO_PATHS, to_text, ano) or defaults.CAPITAIS.get(uf)

        degraded = not record or any(campo in fallback for campo in CAMPOS_OBRIGATORIOS)

        return JurisdictionProfile(
            codigo=uf,
            nome=nome,
            regiao=regiao,
            ano=ano,
            icms_aliquota_padrao=icms,
            adicional=self._extract_surcharge(record, ano),
            iss_aliquota_minima=iss_min,
            iss_aliquota_maxima=iss_max,
            iss_aliquota_referencia=iss,
            municipio_referencia=municipio,
            sublimite_simples=sublimite,
            incentivos=tuple(incentivos),
            federal=self._extract_federal(record, ano),
            source_quality=SourceQuality.FALLBACK if degraded else SourceQuality.AUTHORITATIVE,
            campos_fallback=tuple(fallback),
        )

    def _extract_surcharge(self, record: Mapping[str, Any], ano: int) -> SurchargeInfo:
        for name in SURCHARGE_NAMES:
            for path in (f"icms.{name}", name):
                node = resolve_path(record, path, ano)
                if node is _MISSING:
                    continue

                if isinstance(node, Mapping):
                    rate = next(
                        (r for r in (to_rate(node.get(k)) for k in SURCHARGE_RATE_KEYS) if r is not None),
                        None,
                    )
                    flagged = node.get("existe") is True or node.get("ativo") is True
                    if flagged or rate is not None:
                        return SurchargeInfo(existe=True, nome=name.upper(), aliquota=rate or Decimal("0"))
                else:
                    rate = to_rate(node)
                    if rate is not None:
                        return SurchargeInfo(existe=True, nome=name.upper(), aliquota=rate)
        return SurchargeInfo()

    def _extract_incentives(self, record: Mapping[str, Any], ano: int) -> Optional[list[IncentiveFlag]]:
        """Incentive flags, or None when the record says nothing about them."""
        found = False
        flags: list[IncentiveFlag] = []

        for programa, paths in INCENTIVE_PATHS.items():
            for path in paths:
                node = resolve_path(record, path, ano)
                if node is _MISSING:
                    continue
                found = True
                flags.append(self._incentive_flag(programa, node, ano))
                break

        return flags if found else None

    def _incentive_flag(self, programa: ProgramaIncentivo, node: Any, ano: int) -> IncentiveFlag:
        ativo = _is_active(node)

        reducao = Decimal("0")
        if programa in (ProgramaIncentivo.SUDAM, ProgramaIncentivo.SUDENE):
            reducao = REDUCAO_IRPJ_INCENTIVO
            if isinstance(node, Mapping):
                reducao = first_valid(node, ("reducao_irpj.percentual", "percentual_reducao"), to_rate, ano) or reducao

        condicao = ""
        if isinstance(node, Mapping):
            condicao = to_text(node.get("condicao")) or to_text(node.get("obs")) or ""
        if not condicao:
            condicao = _CONDICOES.get(programa, "")

        return IncentiveFlag(programa=programa, ativo=ativo, percentual_reducao=reducao, condicao=condicao)

    def _default_incentives(self, uf: str) -> list[IncentiveFlag]:
        flags = []
        if uf in defaults.AREA_SUDAM:
            flags.append(IncentiveFlag(
                programa=ProgramaIncentivo.SUDAM,
                percentual_reducao=REDUCAO_IRPJ_INCENTIVO,
                condicao=defaults.CONDICAO_SUDAM,
            ))
        if uf in defaults.AREA_SUDENE:
            flags.append(IncentiveFlag(
                programa=ProgramaIncentivo.SUDENE,
                percentual_reducao=REDUCAO_IRPJ_INCENTIVO,
                condicao=defaults.CONDICAO_SUDENE,
            ))
        if uf in defaults.AREA_ZFM:
            flags.append(IncentiveFlag(programa=ProgramaIncentivo.ZFM, condicao=defaults.CONDICAO_ZFM))
        return flags

    def _extract_federal(self, record: Mapping[str, Any], ano: int) -> FederalRateOverrides:
        values: dict[str, Decimal] = {}
        for campo, paths in FEDERAL_RATE_PATHS.items():
            rate = first_valid(record, paths, to_rate, ano)
            if rate is not None:
                values[campo] = rate
        for campo, paths in FEDERAL_AMOUNT_PATHS.items():
            amount = first_valid(record, paths, to_amount, ano)
            if amount is not None:
                values[campo] = amount
        return FederalRateOverrides(**values)


_CONDICOES = {
    ProgramaIncentivo.SUDAM: defaults.CONDICAO_SUDAM,
    ProgramaIncentivo.SUDENE: defaults.CONDICAO_SUDENE,
    ProgramaIncentivo.ZFM: defaults.CONDICAO_ZFM,
}


def _is_active(node: Any) -> bool:
    """Interpret the many ways a state record flags a program."""
    if isinstance(node, bool):
        return node
    if isinstance(node, Mapping):
        for key in ("ativo", "existe"):
            if key in node:
                return node[key] is True
        if "abrangencia" in node:
            abrangencia = node["abrangencia"]
            if isinstance(abrangencia, bool):
                return abrangencia
            return bool(abrangencia) and abrangencia != "nao_abrangido"
        return bool(node)
    if isinstance(node, str):
        return bool(node.strip()) and node != "nao_abrangido"
    return False
