"""Advisories, advantages and recommendation text for a regime comparison.

Thresholds watched:
- Simples Nacional ceiling (R$ 4,8M) and the R$ 4M attention zone
- Fator "r" risk zone (25% to 28%) and narrow margin (28% to 31%)
- State sublimit for ICMS/ISS inside the DAS
- Lucro Presumido ceiling (R$ 78M)

Each advisory carries a severity and, where one applies, the legal basis.
"""

from decimal import Decimal
from typing import Optional

from regime_analyzer.core.models.activity import ActivityProfile
from regime_analyzer.core.models.comparison import Advisory, Vantagem
from regime_analyzer.core.models.enums import OrigemClassificacao, Severity, TaxRegime
from regime_analyzer.core.models.inputs import EntityInputs
from regime_analyzer.core.models.jurisdiction import JurisdictionProfile
from regime_analyzer.core.models.results import (
    LucroRealResult,
    PresumidoResult,
    RegimeResult,
    SimplesResult,
)
from regime_analyzer.core.rules.config import DEFAULT_RULES, TaxRulesConfig
from regime_analyzer.core.rules.tax_constants import (
    FATOR_R_MARGEM_ESTREITA,
    FATOR_R_ZONA_RISCO,
    LIMITE_ALERTA_SIMPLES,
    PROXIMIDADE_LIMITE,
)
from regime_analyzer.shared.formatters import format_currency, format_rate

CITACAO_REFORMA = "LC 214/2025"
CITACAO_INCENTIVO = {
    "sudam": "RIR/2018, arts. 615 a 627; MP 2.199-14/2001",
    "sudene": "RIR/2018, art. 627; MP 2.199-14/2001",
}


class AdvisoryBuilder:
    """Builds the advisory list for one comparison.

    Usage::

        builder = AdvisoryBuilder(entrada, atividade, jurisdicao, resultados)
        advisories = builder.build()
    """

    def __init__(
        self,
        entrada: EntityInputs,
        atividade: ActivityProfile,
        jurisdicao: JurisdictionProfile,
        resultados: dict[TaxRegime, RegimeResult],
        rules: TaxRulesConfig = DEFAULT_RULES,
    ):
        self.entrada = entrada
        self.atividade = atividade
        self.jurisdicao = jurisdicao
        self.resultados = resultados
        self.rules = rules
        self.advisories: list[Advisory] = []

    def build(self) -> list[Advisory]:
        """Run every check and return the advisories in catalogue order."""
        self.advisories = []
        self._check_limite_simples()
        self._check_fator_r()
        self._check_atividade()
        self._check_sublimite()
        self._check_limite_presumido()
        self._check_incentivos()
        self._check_adicional_icms()
        self._check_lucro_real()
        self._check_qualidade_dados()
        self._add(
            "Reforma Tributária (LC 214/2025)",
            "IBS e CBS substituirão ICMS, ISS, PIS, COFINS e IPI entre 2026 e 2033. "
            "Refaça a comparação a cada etapa da transição.",
            Severity.INFO,
            CITACAO_REFORMA,
        )
        return self.advisories

    def _add(
        self,
        titulo: str,
        descricao: str,
        severidade: Severity = Severity.INFO,
        citacao: Optional[str] = None,
        regime: Optional[TaxRegime] = None,
    ) -> None:
        self.advisories.append(
            Advisory(titulo=titulo, descricao=descricao, severidade=severidade, citacao=citacao, regime=regime)
        )

    def _check_limite_simples(self) -> None:
        rbt12 = self.entrada.rbt12
        limite = self.rules.limite_simples
        if rbt12 > limite:
            return

        if rbt12 >= limite * (1 - PROXIMIDADE_LIMITE):
            self._add(
                "Faturamento a menos de 5% do teto do Simples Nacional",
                f"RBT12 de {format_currency(rbt12)} está a {format_currency(limite - rbt12)} do teto de "
                f"{format_currency(limite)}. Ultrapassá-lo exclui a empresa do regime.",
                Severity.CRITICO,
                "LC 123/2006, art. 3º, II",
                TaxRegime.SIMPLES_NACIONAL,
            )
        elif rbt12 > LIMITE_ALERTA_SIMPLES:
            self._add(
                "Faturamento próximo do limite do Simples Nacional",
                f"RBT12 de {format_currency(rbt12)} está a {format_currency(limite - rbt12)} do teto. "
                "Planeje a transição de regime.",
                Severity.ATENCAO,
                "LC 123/2006, art. 3º, II",
                TaxRegime.SIMPLES_NACIONAL,
            )

    def _check_fator_r(self) -> None:
        simples = self.resultados.get(TaxRegime.SIMPLES_NACIONAL)
        if not isinstance(simples, SimplesResult) or simples.fator_r is None:
            return

        fator_r = simples.fator_r
        if FATOR_R_ZONA_RISCO <= fator_r < self.rules.limite_fator_r:
            self._add(
                'Fator "r" em zona de risco',
                f'Fator "r" de {format_rate(fator_r)}, muito próximo do limiar de '
                f"{format_rate(self.rules.limite_fator_r, 0)}. Um pequeno aumento da folha "
                "levaria a atividade do Anexo V para o Anexo III.",
                Severity.CRITICO,
                "Resolução CGSN 140/2018, art. 18, § 5º-J",
                TaxRegime.SIMPLES_NACIONAL,
            )
        elif self.rules.limite_fator_r <= fator_r <= FATOR_R_MARGEM_ESTREITA:
            self._add(
                'Fator "r" em margem estreita',
                f'Fator "r" de {format_rate(fator_r)}, acima do limiar mas com margem apertada. '
                "Uma queda da folha leva a atividade ao Anexo V.",
                Severity.ATENCAO,
                "Resolução CGSN 140/2018, art. 18, § 5º-J",
                TaxRegime.SIMPLES_NACIONAL,
            )

    def _check_atividade(self) -> None:
        if self.atividade.vedado_simples:
            self._add(
                "CNAE vedado ao Simples Nacional",
                f"Compare apenas Lucro Presumido e Lucro Real. {self.atividade.nota}".strip(),
                Severity.INFO,
                "LC 123/2006, art. 17",
                TaxRegime.SIMPLES_NACIONAL,
            )
        if self.atividade.lucro_real_obrigatorio:
            self._add(
                "Lucro Real obrigatório",
                "Instituições financeiras, seguradoras e factoring estão obrigadas ao Lucro Real.",
                Severity.ATENCAO,
                "Lei 9.718/1998, art. 14",
                TaxRegime.LUCRO_PRESUMIDO,
            )
        if self.atividade.origem == OrigemClassificacao.PADRAO:
            self._add(
                "Atividade classificada como serviços em geral",
                "CNAE e categoria não reconhecidos; foram usadas as regras de prestação de serviços "
                "(Anexo III/V, presunção de 32%). Informe o CNAE para um resultado preciso.",
                Severity.ATENCAO,
            )

    def _check_sublimite(self) -> None:
        rbt12 = self.entrada.rbt12
        sublimite = self.jurisdicao.sublimite_simples
        if sublimite < rbt12 <= self.rules.limite_simples:
            self._add(
                "Sublimite estadual ultrapassado",
                f"RBT12 de {format_currency(rbt12)} ultrapassou o sublimite de {format_currency(sublimite)} "
                f"de {self.jurisdicao.nome or self.jurisdicao.codigo}. ICMS/ISS recolhidos fora do DAS.",
                Severity.ATENCAO,
                "LC 123/2006, arts. 19 e 20",
                TaxRegime.SIMPLES_NACIONAL,
            )

    def _check_limite_presumido(self) -> None:
        receita_anual = self.entrada.receita_anual_estimada
        limite = self.rules.limite_presumido
        if limite * (1 - PROXIMIDADE_LIMITE) <= receita_anual <= limite:
            self._add(
                "Faturamento próximo do limite do Lucro Presumido",
                f"Receita anual estimada de {format_currency(receita_anual)} está a "
                f"{format_currency(limite - receita_anual)} do teto de {format_currency(limite)}.",
                Severity.ATENCAO,
                "Lei 9.718/1998, art. 13",
                TaxRegime.LUCRO_PRESUMIDO,
            )

    def _check_incentivos(self) -> None:
        nome_uf = self.jurisdicao.nome or self.jurisdicao.codigo
        incentivo = self.jurisdicao.incentivo_irpj
        if incentivo is not None:
            programa = incentivo.programa.value
            self._add(
                f"Incentivo {programa.upper()} disponível em {nome_uf}",
                f"Redução de até {format_rate(incentivo.percentual_reducao, 0)} do IRPJ sobre o lucro da "
                f"exploração. {incentivo.condicao}.",
                Severity.OPORTUNIDADE,
                CITACAO_INCENTIVO.get(programa),
            )
        if self.jurisdicao.possui_zfm:
            self._add(
                "Zona Franca de Manaus",
                "Incentivos ZFM: isenção de IPI, redução de ICMS e créditos fiscais especiais.",
                Severity.OPORTUNIDADE,
                "Decreto-Lei 288/1967",
            )

    def _check_adicional_icms(self) -> None:
        adicional = self.jurisdicao.adicional
        if not adicional.existe:
            return
        self._add(
            f"{adicional.nome} de {format_rate(adicional.aliquota)} em {self.jurisdicao.nome or self.jurisdicao.codigo}",
            f"Adicional de {format_rate(adicional.aliquota)} sobre determinados produtos. "
            f"ICMS efetivo: {format_rate(self.jurisdicao.icms_aliquota_efetiva)}.",
            Severity.INFO,
            "ADCT, arts. 82 e 83",
        )

    def _check_lucro_real(self) -> None:
        real = self.resultados.get(TaxRegime.LUCRO_REAL)
        if not isinstance(real, LucroRealResult):
            return

        if real.lucro_estimado:
            self._add(
                "Lucro Real estimado",
                f"Lucro estimado com margem de {format_rate(self.entrada.margem_lucro_estimada, 0)} e créditos "
                f"de PIS/COFINS sobre {format_rate(self.entrada.percentual_creditos_estimado, 0)} da receita. "
                "Informe os dados contábeis para um resultado preciso.",
                Severity.INFO,
                regime=TaxRegime.LUCRO_REAL,
            )
        if real.jcp.calculado and real.jcp.valor > 0:
            severidade = Severity.OPORTUNIDADE if real.jcp.beneficio_liquido > 0 else Severity.ATENCAO
            self._add(
                "Juros sobre Capital Próprio",
                f"JCP de {format_currency(real.jcp.valor)}: economia de {format_currency(real.jcp.economia_tributos)} "
                f"em IRPJ/CSLL menos IRRF de {format_currency(real.jcp.irrf)} "
                f"(benefício líquido de {format_currency(real.jcp.beneficio_liquido)}).",
                severidade,
                "Lei 9.249/1995, art. 9º; RIR/2018, arts. 355 a 358",
                TaxRegime.LUCRO_REAL,
            )
        if real.creditos.divergencia_depreciacao:
            self._add(
                "Método de depreciação divergente",
                "A taxa contábil informada difere da fração legal (1/48 ao mês, 1/60 para edificações). "
                "O crédito de PIS/COFINS foi calculado pela fração legal.",
                Severity.ATENCAO,
                "Lei 10.833/2003, art. 3º, § 14; Lei 11.488/2007, art. 6º",
                TaxRegime.LUCRO_REAL,
            )

    def _check_qualidade_dados(self) -> None:
        if not self.jurisdicao.is_fallback:
            return
        campos = ", ".join(self.jurisdicao.campos_fallback) or "todos"
        self._add(
            "Dados estaduais estimados",
            f"Valores padrão usados para {self.jurisdicao.codigo} ({campos}). ICMS, ISS e incentivos "
            "são estimativas; confira a legislação local.",
            Severity.ATENCAO,
        )


def gerar_vantagens(
    melhor: RegimeResult,
    atividade: ActivityProfile,
    jurisdicao: JurisdictionProfile,
) -> list[Vantagem]:
    """Advantages of the winning regime, with their legal bases."""
    vantagens: list[Vantagem] = []
    nome_uf = jurisdicao.nome or jurisdicao.codigo

    if isinstance(melhor, SimplesResult):
        vantagens.append(Vantagem(
            titulo="Guia única (DAS)",
            descricao="Até 8 tributos recolhidos em uma única guia mensal.",
            base_legal="LC 123/2006, art. 13",
        ))
        vantagens.append(Vantagem(
            titulo=f"Alíquota efetiva de {format_rate(melhor.aliquota_efetiva_das)}",
            descricao="Alíquota progressiva sobre a RBT12: quanto menor o faturamento, menor a alíquota.",
            base_legal=f"LC 123/2006, Anexo {melhor.anexo.value if melhor.anexo else ''}".strip(),
        ))
        if melhor.anexo is not None and melhor.anexo.value != "IV":
            vantagens.append(Vantagem(
                titulo="CPP incluída no DAS",
                descricao="Contribuição previdenciária patronal já inclusa, sem recolhimento separado.",
                base_legal=f"LC 123/2006, Anexo {melhor.anexo.value}",
            ))
        if not atividade.is_servico:
            vantagens.append(Vantagem(
                titulo=f"ICMS de {format_rate(jurisdicao.icms_aliquota_padrao)} incluído no DAS",
                descricao=f"Em {nome_uf} o ICMS padrão é recolhido na guia única enquanto a RBT12 "
                "não ultrapassar o sublimite estadual.",
                base_legal="LC 123/2006, art. 13, VII",
            ))
        if melhor.fator_r is not None and melhor.anexo is not None and melhor.anexo.value == "III":
            vantagens.append(Vantagem(
                titulo=f'Fator "r" favorável: {format_rate(melhor.fator_r)}',
                descricao="Folha/faturamento ≥ 28% garante o Anexo III, com alíquotas menores que o Anexo V.",
                base_legal="Resolução CGSN 140/2018, art. 18, § 5º-J",
            ))
        vantagens.append(Vantagem(
            titulo="Obrigações acessórias simplificadas",
            descricao="Dispensa de ECD, ECF e EFD-Contribuições; apenas PGDAS-D mensal e DEFIS anual.",
            base_legal="LC 123/2006, arts. 25 e 26",
        ))
        vantagens.append(Vantagem(
            titulo="Distribuição de lucros isenta",
            descricao="Lucros distribuídos aos sócios são isentos de IR na pessoa física.",
            base_legal="LC 123/2006, art. 14",
        ))

    elif isinstance(melhor, PresumidoResult):
        vantagens.append(Vantagem(
            titulo="Simplicidade de apuração",
            descricao="Base de cálculo por percentual de presunção, sem LALUR.",
            base_legal="Lei 9.249/1995, arts. 15 e 20",
        ))
        vantagens.append(Vantagem(
            titulo=(
                f"Presunção de {format_rate(melhor.presuncao_irpj, 0)} (IRPJ) / "
                f"{format_rate(melhor.presuncao_csll, 0)} (CSLL)"
            ),
            descricao="Se a margem real supera a presunção, a tributação recai sobre base menor.",
            base_legal="Lei 9.249/1995, art. 15, § 1º",
        ))
        if atividade.is_servico:
            vantagens.append(Vantagem(
                titulo=f"ISS de {format_rate(jurisdicao.iss_aliquota_referencia)} em "
                f"{jurisdicao.municipio_referencia or nome_uf}",
                descricao=(
                    f"Faixa municipal de {format_rate(jurisdicao.iss_aliquota_minima)} a "
                    f"{format_rate(jurisdicao.iss_aliquota_maxima)}."
                ),
                base_legal="LC 116/2003",
            ))
        else:
            vantagens.append(Vantagem(
                titulo=f"ICMS de {format_rate(jurisdicao.icms_aliquota_efetiva)} em {nome_uf}",
                descricao="Direito a créditos de ICMS nas compras com nota fiscal.",
                base_legal="LC 87/1996 (Lei Kandir)",
            ))
        if melhor.programa_incentivo is not None:
            vantagens.append(Vantagem(
                titulo=f"{melhor.programa_incentivo.value.upper()}: redução do IRPJ",
                descricao=f"Economia de {format_currency(melhor.reducao_incentivo)} no período.",
                base_legal=CITACAO_INCENTIVO.get(melhor.programa_incentivo.value),
            ))
        vantagens.append(Vantagem(
            titulo="PIS/COFINS cumulativos (3,65%)",
            descricao="PIS de 0,65% e COFINS de 3% sem controle de créditos.",
            base_legal="Lei 9.718/1998, arts. 2º a 8º",
        ))
        vantagens.append(Vantagem(
            titulo="Distribuição de lucros isenta",
            descricao="O lucro presumido, menos os tributos, é distribuível aos sócios sem IR.",
            base_legal="Lei 9.249/1995, art. 10",
        ))

    elif isinstance(melhor, LucroRealResult):
        vantagens.append(Vantagem(
            titulo="Tributa o lucro efetivo",
            descricao="IRPJ e CSLL sobre o lucro contábil ajustado, vantajoso para margens baixas.",
            base_legal="RIR/2018, arts. 258 a 261",
        ))
        vantagens.append(Vantagem(
            titulo="Créditos de PIS/COFINS não cumulativos",
            descricao=(
                f"Créditos de {format_currency(melhor.creditos.credito_pis + melhor.creditos.credito_cofins)} "
                "no período sobre insumos, energia, aluguéis e depreciação."
            ),
            base_legal="Lei 10.637/2002, art. 3º; Lei 10.833/2003, art. 3º",
        ))
        vantagens.append(Vantagem(
            titulo="Compensação de prejuízos fiscais",
            descricao="Prejuízos compensáveis com lucros futuros até 30% por período, sem prazo.",
            base_legal="Lei 9.065/1995, art. 15; RIR/2018, art. 580",
        ))
        vantagens.append(Vantagem(
            titulo="JCP: Juros sobre Capital Próprio",
            descricao="JCP dedutível do IRPJ/CSLL (até 34% de economia, menos 15% de IRRF).",
            base_legal="Lei 9.249/1995, art. 9º; RIR/2018, arts. 355 a 358",
        ))
        if melhor.programa_incentivo is not None:
            vantagens.append(Vantagem(
                titulo=f"{melhor.programa_incentivo.value.upper()}: redução do IRPJ",
                descricao=f"Economia de {format_currency(melhor.reducao_incentivo)} no período.",
                base_legal=CITACAO_INCENTIVO.get(melhor.programa_incentivo.value),
            ))
        if jurisdicao.possui_zfm:
            vantagens.append(Vantagem(
                titulo="Zona Franca de Manaus",
                descricao="Isenção de IPI, redução de ICMS e créditos fiscais especiais.",
                base_legal="Decreto-Lei 288/1967",
            ))

    return vantagens


def gerar_recomendacao(
    melhor: Optional[RegimeResult],
    atividade: ActivityProfile,
    jurisdicao: JurisdictionProfile,
    economia_anual: Decimal,
    margem_lucro: Decimal,
) -> str:
    """Recommendation paragraph for the cheapest regime."""
    if melhor is None:
        return "Nenhum regime elegível para os dados informados."

    nome_uf = jurisdicao.nome or jurisdicao.codigo
    partes: list[str] = []

    if isinstance(melhor, SimplesResult):
        anexo = melhor.anexo.value if melhor.anexo else ""
        partes.append(f"O Simples Nacional (Anexo {anexo}) é o regime mais econômico em {nome_uf}.")
        partes.append(
            f"A alíquota efetiva de {format_rate(melhor.aliquota_efetiva)} resulta em carga de "
            f"{format_currency(melhor.total)} no período."
        )
        if melhor.fator_r is not None:
            if anexo == "III":
                partes.append(
                    f'O fator "r" de {format_rate(melhor.fator_r)} garante o Anexo III. '
                    "Mantenha a folha acima de 28% do faturamento."
                )
            else:
                partes.append(
                    f'O fator "r" de {format_rate(melhor.fator_r)} enquadra a atividade no Anexo V. '
                    "Avalie aumentar a folha para migrar ao Anexo III."
                )
        if melhor.sublimite_excedido:
            partes.append(
                f"Faturamento acima do sublimite de {format_currency(melhor.sublimite)}: "
                "ICMS/ISS recolhidos fora do DAS."
            )

    elif isinstance(melhor, PresumidoResult):
        partes.append(f"O Lucro Presumido é o regime mais econômico em {nome_uf}.")
        partes.append(
            f"Com presunção de {format_rate(melhor.presuncao_irpj, 0)} (IRPJ) e "
            f"{format_rate(melhor.presuncao_csll, 0)} (CSLL), a carga é de {format_currency(melhor.total)} "
            f"({format_rate(melhor.aliquota_efetiva)} efetiva)."
        )
        partes.append(_texto_tributo_local(atividade, jurisdicao))
        if melhor.programa_incentivo is not None:
            partes.append(
                f"O benefício {melhor.programa_incentivo.value.upper()} reduz o IRPJ em "
                f"{format_currency(melhor.reducao_incentivo)} no período."
            )

    else:
        partes.append(f"O Lucro Real é o regime mais econômico em {nome_uf}.")
        estimado = isinstance(melhor, LucroRealResult) and melhor.lucro_estimado
        base = f"margem estimada de {format_rate(margem_lucro, 0)}" if estimado else "lucro contábil informado"
        partes.append(
            f"Tributando o lucro efetivo ({base}), a carga é de {format_currency(melhor.total)} "
            f"({format_rate(melhor.aliquota_efetiva)} efetiva)."
        )
        partes.append(_texto_tributo_local(atividade, jurisdicao))
        partes.append("Permite créditos de PIS/COFINS, JCP e compensação de prejuízos.")

    partes.append(f"Economia de {format_currency(economia_anual)}/ano em relação ao regime mais caro.")
    return " ".join(p for p in partes if p)


def _texto_tributo_local(atividade: ActivityProfile, jurisdicao: JurisdictionProfile) -> str:
    if atividade.is_servico:
        local = jurisdicao.municipio_referencia or jurisdicao.nome or jurisdicao.codigo
        return f"ISS de {format_rate(jurisdicao.iss_aliquota_referencia)} ({local})."
    texto = f"ICMS de {format_rate(jurisdicao.icms_aliquota_efetiva)}"
    if jurisdicao.adicional.existe:
        texto += f" (inclui {format_rate(jurisdicao.adicional.aliquota)} de {jurisdicao.adicional.nome})"
    return texto + "."
