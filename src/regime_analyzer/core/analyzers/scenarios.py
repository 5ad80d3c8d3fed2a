"""Multi-state ranking and revenue scenario sweeps built on RegimeComparator."""

from decimal import Decimal
from typing import Iterable, Optional

from regime_analyzer.core.analyzers.comparison import RegimeComparator
from regime_analyzer.core.models.comparison import ScenarioPoint, StateRanking
from regime_analyzer.core.models.inputs import EntityInputs
from regime_analyzer.shared.logging import get_logger
from regime_analyzer.shared.validators import UFS, normalize_uf

logger = get_logger(__name__)

# Monthly revenue levels swept by default
FAIXAS_CENARIO = tuple(
    Decimal(v) for v in ("10000", "30000", "50000", "100000", "200000", "300000", "400000", "500000")
)
PERCENTUAL_FOLHA_PADRAO = Decimal("0.40")


def compare_states(
    entrada: EntityInputs,
    ufs: Optional[Iterable[str]] = None,
    comparator: Optional[RegimeComparator] = None,
) -> list[StateRanking]:
    """Best regime of the same entity in each state, cheapest state first.

    States with no eligible regime go last.

    Args:
        entrada: Entity inputs; its own UF is replaced per state
        ufs: States to compare (default: all 27)
        comparator: Comparator to reuse (its normalizer cache is shared)
    """
    comparator = comparator or RegimeComparator()
    linhas = []

    for uf in (normalize_uf(u) for u in (ufs or UFS)):
        resultado = comparator.compare(entrada.model_copy(update={"uf": uf}))
        melhor = resultado.melhor
        jurisdicao = resultado.jurisdicao
        incentivo = jurisdicao.incentivo_irpj

        linhas.append({
            "uf": uf,
            "nome": jurisdicao.nome,
            "regiao": jurisdicao.regiao,
            "melhor_regime": melhor.regime if melhor else None,
            "total": melhor.total if melhor else None,
            "aliquota_efetiva": melhor.resultado.aliquota_efetiva if melhor else Decimal("0"),
            "incentivo": incentivo.programa.value.upper() if incentivo else None,
            "fallback": jurisdicao.is_fallback,
        })

    linhas.sort(key=lambda l: (l["total"] is None, l["total"] or Decimal("0"), l["uf"]))
    logger.info("states_compared", extra={"ufs": len(linhas)})
    return [StateRanking(posicao=i, **linha) for i, linha in enumerate(linhas, 1)]


def analyze_scenarios(
    entrada: EntityInputs,
    faturamentos: Optional[Iterable[Decimal]] = None,
    percentual_folha: Decimal = PERCENTUAL_FOLHA_PADRAO,
    comparator: Optional[RegimeComparator] = None,
) -> list[ScenarioPoint]:
    """Best regime at each monthly revenue level, payroll a fixed share of it.

    The sweep is monthly and uses estimated Lucro Real figures; the trailing
    revenue and payroll are annualized from each level.
    """
    comparator = comparator or RegimeComparator()
    pontos = []

    for faturamento in faturamentos or FAIXAS_CENARIO:
        faturamento = Decimal(faturamento)
        folha = faturamento * percentual_folha
        cenario = entrada.model_copy(update={
            "meses": 1,
            "receita_periodo": faturamento,
            "receita_12m": None,
            "folha_periodo": folha,
            "folha_12m": None,
            "lucro_real": None,
        })
        resultado = comparator.compare(cenario)
        melhor = resultado.melhor

        pontos.append(ScenarioPoint(
            receita_mensal=faturamento,
            folha_mensal=folha,
            melhor_regime=melhor.regime if melhor else None,
            total_mensal=melhor.total if melhor else None,
            economia_anual=resultado.economia_anual,
            totais={item.regime: item.total for item in resultado.ranking},
        ))

    return pontos
