"""Activity classification: CNAE and declared category to regime rules."""

from typing import Optional

from regime_analyzer.core.models.activity import ActivityProfile
from regime_analyzer.core.models.enums import (
    Anexo,
    CategoriaAtividade,
    OrigemClassificacao,
    PresumptionCategory,
    TipoTributo,
)
from regime_analyzer.core.rules import cnae_rules
from regime_analyzer.core.rules.config import DEFAULT_RULES, TaxRulesConfig
from regime_analyzer.shared.logging import get_logger
from regime_analyzer.shared.validators import format_cnae, normalize_text

logger = get_logger(__name__)

# Annexes I and II cover goods (ICMS); III to V cover services (ISS)
_ANEXOS_ICMS = ("I", "II")


class ActivityClassifier:
    """Maps a CNAE (or a free-text category) to an ActivityProfile.

    A CNAE subclass or prefix rule wins; otherwise the declared category
    decides. Classification never fails: anything unrecognized becomes a
    general service activity.
    """

    def __init__(self, rules: TaxRulesConfig = DEFAULT_RULES):
        self.rules = rules

    def classify(self, cnae: Optional[str] = None, categoria: Optional[str] = None) -> ActivityProfile:
        """Classify an activity.

        Args:
            cnae: CNAE code in any layout ("6201-5/01", "6201501")
            categoria: Declared category, free text ("Comércio", "ind")

        Returns:
            ActivityProfile with annex, presumption and tax type
        """
        cnae_canonico = format_cnae(cnae or "")

        if cnae_canonico:
            chave_regra, regra = cnae_rules.buscar_regra_cnae(cnae_canonico)
            if regra is not None:
                logger.debug("activity_classified", extra={"cnae": cnae_canonico, "regra": chave_regra})
                return self._from_cnae_rule(cnae_canonico, regra, categoria)

        chave, reconhecida = self.resolve_category(categoria)
        if not reconhecida and (categoria or "").strip():
            logger.warning(
                "activity_category_unrecognized",
                extra={"categoria": categoria, "padrao": chave},
            )
        return self._from_category(
            cnae_canonico,
            chave,
            OrigemClassificacao.CATEGORIA if reconhecida else OrigemClassificacao.PADRAO,
        )

    @staticmethod
    def resolve_category(categoria: Optional[str]) -> tuple[str, bool]:
        """Coarse category key and whether the text was recognized.

        Substring synonyms are tried first, then exact shorthands
        ("com", "ind").
        """
        texto = normalize_text(categoria or "")
        if not texto:
            return cnae_rules.CATEGORIA_PADRAO, False

        if any(s in texto for s in cnae_rules.SINONIMOS_COMERCIO):
            return "comercio", True
        if any(s in texto for s in cnae_rules.SINONIMOS_INDUSTRIA):
            return "industria", True
        if any(s in texto for s in cnae_rules.SINONIMOS_SERVICO):
            return "servico", True

        if texto in cnae_rules.ABREVIACOES_COMERCIO:
            return "comercio", True
        if texto in cnae_rules.ABREVIACOES_INDUSTRIA:
            return "industria", True

        return cnae_rules.CATEGORIA_PADRAO, False

    def _from_cnae_rule(
        self,
        cnae: str,
        regra: cnae_rules.RegraCNAE,
        categoria: Optional[str],
    ) -> ActivityProfile:
        if regra.tipo_tributo:
            tipo = regra.tipo_tributo
        elif regra.anexo:
            tipo = "ICMS" if regra.anexo in _ANEXOS_ICMS else "ISS"
        else:
            # Prohibited activities have no annex; the declared category decides
            chave, _ = self.resolve_category(categoria)
            tipo = cnae_rules.CATEGORIAS[chave].tipo_tributo

        if regra.categoria:
            categoria_atividade = CategoriaAtividade(regra.categoria)
        elif regra.anexo in _ANEXOS_ICMS:
            categoria_atividade = CategoriaAtividade.COMERCIO if regra.anexo == "I" else CategoriaAtividade.INDUSTRIA
        elif regra.anexo is None and tipo == "ICMS":
            categoria_atividade = CategoriaAtividade(self.resolve_category(categoria)[0])
        else:
            categoria_atividade = CategoriaAtividade.SERVICO

        presuncao_irpj, presuncao_csll = self.rules.presuncao[regra.presuncao]

        return ActivityProfile(
            cnae=cnae,
            categoria=categoria_atividade,
            anexo=Anexo(regra.anexo) if regra.anexo else None,
            fator_r=regra.fator_r,
            vedado_simples=regra.vedado,
            lucro_real_obrigatorio=regra.lucro_real_obrigatorio,
            presuncao=PresumptionCategory(regra.presuncao),
            presuncao_irpj=presuncao_irpj,
            presuncao_csll=presuncao_csll,
            tipo_tributo=TipoTributo(tipo),
            origem=OrigemClassificacao.CNAE,
            nota=regra.nota,
        )

    def _from_category(self, cnae: str, chave: str, origem: OrigemClassificacao) -> ActivityProfile:
        regra = cnae_rules.CATEGORIAS[chave]
        presuncao_irpj, presuncao_csll = self.rules.presuncao[regra.presuncao]

        return ActivityProfile(
            cnae=cnae,
            categoria=CategoriaAtividade(chave),
            anexo=Anexo(regra.anexo),
            fator_r=regra.fator_r,
            presuncao=PresumptionCategory(regra.presuncao),
            presuncao_irpj=presuncao_irpj,
            presuncao_csll=presuncao_csll,
            tipo_tributo=TipoTributo(regra.tipo_tributo),
            origem=origem,
            nota=regra.descricao,
        )
