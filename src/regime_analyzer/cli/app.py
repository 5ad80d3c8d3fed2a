"""Main Typer application for Regime Analyzer."""

import json
from decimal import Decimal, InvalidOperation
from typing import Annotated, Optional

import typer
from pydantic import ValidationError
from rich.panel import Panel
from rich.table import Table

from regime_analyzer import __version__
from regime_analyzer.cli.console import (
    SEVERITY_LABELS,
    SEVERITY_STYLES,
    console,
    print_error,
    print_success,
    print_warning,
)
from regime_analyzer.core.analyzers import RegimeComparator, analyze_scenarios, compare_states
from regime_analyzer.core.models import (
    ComparisonResult,
    EntityInputs,
    EquityContext,
    LossLedger,
    LucroRealInputs,
)
from regime_analyzer.core.services import ActivityClassifier, JurisdictionNormalizer
from regime_analyzer.infrastructure.reference_data import load_reference_data
from regime_analyzer.shared.exceptions import RegimeAnalyzerError
from regime_analyzer.shared.formatters import format_currency, format_rate
from regime_analyzer.shared.logging import configure_logging
from regime_analyzer.shared.settings import get_settings
from regime_analyzer.shared.validators import is_valid_uf, normalize_uf

app = typer.Typer(
    name="regime-analyzer",
    help="Comparador de regimes tributários: Simples Nacional, Lucro Presumido e Lucro Real",
    add_completion=True,
    no_args_is_help=True,
)

# Labels of the result components
NOMES_COMPONENTES = {
    "das": "DAS",
    "irpj": "IRPJ",
    "csll": "CSLL",
    "pis": "PIS",
    "cofins": "COFINS",
    "iss": "ISS",
    "icms": "ICMS",
    "adicional_icms": "Adicional ICMS",
    "iss_fora_das": "ISS fora do DAS",
    "icms_fora_das": "ICMS fora do DAS",
    "irrf_jcp": "IRRF sobre JCP",
    "cpp": "CPP (INSS patronal)",
}


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"Regime Analyzer v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            "-v",
            help="Mostra a versão e sai",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Mostra mensagens de diagnóstico"),
    ] = False,
) -> None:
    """Regime Analyzer - Comparador de regimes tributários para pessoas jurídicas."""
    configure_logging("DEBUG" if verbose else get_settings().log_level)


def _decimal(valor: Optional[str], campo: str) -> Optional[Decimal]:
    """Parse a CLI amount ("150000", "150.000,50", "1500.5")."""
    if valor is None:
        return None
    texto = valor.strip().replace("R$", "").replace(" ", "")
    if "," in texto:
        texto = texto.replace(".", "").replace(",", ".")
    try:
        return Decimal(texto)
    except InvalidOperation:
        raise typer.BadParameter(f"valor inválido: {valor}", param_hint=campo)


def _build_comparator() -> RegimeComparator:
    settings = get_settings()
    source = load_reference_data(settings.reference_data_path)
    normalizer = JurisdictionNormalizer(source, ano=settings.ano_referencia)
    return RegimeComparator(normalizer=normalizer)


@app.command()
def comparar(
    receita: Annotated[str, typer.Option("--receita", "-r", help="Faturamento bruto do período")],
    uf: Annotated[Optional[str], typer.Option("--uf", "-u", help="Estado (sigla)")] = None,
    cnae: Annotated[str, typer.Option("--cnae", "-c", help="Código CNAE")] = "",
    categoria: Annotated[
        Optional[str], typer.Option("--categoria", help="Comércio, Indústria ou Serviço")
    ] = None,
    meses: Annotated[int, typer.Option("--meses", "-m", help="Período: 1, 3 ou 12 meses")] = 1,
    receita_12m: Annotated[
        Optional[str], typer.Option("--receita-12m", help="Receita bruta dos últimos 12 meses (RBT12)")
    ] = None,
    folha: Annotated[str, typer.Option("--folha", "-f", help="Folha de pagamento do período")] = "0",
    folha_12m: Annotated[
        Optional[str], typer.Option("--folha-12m", help="Folha dos últimos 12 meses (fator r)")
    ] = None,
    lucro: Annotated[
        Optional[str], typer.Option("--lucro", help="Lucro contábil antes de IRPJ/CSLL (Lucro Real)")
    ] = None,
    adicoes: Annotated[str, typer.Option("--adicoes", help="Adições do LALUR")] = "0",
    exclusoes: Annotated[str, typer.Option("--exclusoes", help="Exclusões do LALUR")] = "0",
    prejuizo: Annotated[str, typer.Option("--prejuizo", help="Saldo de prejuízo fiscal operacional")] = "0",
    base_negativa: Annotated[str, typer.Option("--base-negativa", help="Saldo de base negativa de CSLL")] = "0",
    patrimonio: Annotated[
        Optional[str], typer.Option("--pl", help="Patrimônio líquido ajustado (JCP)")
    ] = None,
    tjlp: Annotated[Optional[str], typer.Option("--tjlp", help="TJLP anual, ex.: 0.0797")] = None,
    lucros_acumulados: Annotated[
        str, typer.Option("--lucros-acumulados", help="Lucros acumulados e reservas de lucros")
    ] = "0",
    margem: Annotated[
        str, typer.Option("--margem", help="Margem de lucro estimada quando --lucro não é informado")
    ] = "0.20",
    output: Annotated[str, typer.Option("--output", "-o", help="Formato de saída: table, json")] = "table",
) -> None:
    """Compara os três regimes tributários para uma empresa."""
    try:
        lucro_real = None
        lucro_contabil = _decimal(lucro, "--lucro")
        if lucro_contabil is not None:
            equity = None
            if patrimonio is not None:
                equity = EquityContext(
                    patrimonio_liquido_ajustado=_decimal(patrimonio, "--pl"),
                    tjlp=_decimal(tjlp, "--tjlp"),
                    lucros_acumulados=_decimal(lucros_acumulados, "--lucros-acumulados"),
                )
            lucro_real = LucroRealInputs(
                lucro_contabil=lucro_contabil,
                adicoes=_decimal(adicoes, "--adicoes"),
                exclusoes=_decimal(exclusoes, "--exclusoes"),
                prejuizos=LossLedger(
                    prejuizo_operacional=_decimal(prejuizo, "--prejuizo"),
                    base_negativa_csll=_decimal(base_negativa, "--base-negativa"),
                ),
                patrimonio=equity,
            )

        entrada = EntityInputs(
            uf=uf or get_settings().uf_padrao,
            cnae=cnae,
            categoria=categoria,
            meses=meses,
            receita_periodo=_decimal(receita, "--receita"),
            receita_12m=_decimal(receita_12m, "--receita-12m"),
            folha_periodo=_decimal(folha, "--folha"),
            folha_12m=_decimal(folha_12m, "--folha-12m"),
            lucro_real=lucro_real,
            margem_lucro_estimada=_decimal(margem, "--margem"),
        )

        resultado = _build_comparator().compare(entrada)

        if output == "json":
            print(json.dumps(resultado.model_dump(mode="json"), indent=2, ensure_ascii=False, default=str))
            return

        _display_comparison(resultado)

    except ValidationError as e:
        for erro in e.errors():
            campo = ".".join(str(p) for p in erro["loc"])
            print_error(f"{campo}: {erro['msg']}")
        raise typer.Exit(1)
    except RegimeAnalyzerError as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command()
def estados(
    receita: Annotated[str, typer.Option("--receita", "-r", help="Faturamento mensal")],
    cnae: Annotated[str, typer.Option("--cnae", "-c", help="Código CNAE")] = "",
    categoria: Annotated[Optional[str], typer.Option("--categoria", help="Categoria da atividade")] = None,
    folha: Annotated[str, typer.Option("--folha", "-f", help="Folha mensal")] = "0",
    ufs: Annotated[
        Optional[str], typer.Option("--ufs", help="Estados separados por vírgula (padrão: todos)")
    ] = None,
    top: Annotated[int, typer.Option("--top", "-n", help="Quantidade de estados exibidos")] = 27,
) -> None:
    """Ranking dos estados pelo menor custo tributário."""
    try:
        lista = [normalize_uf(u) for u in ufs.split(",")] if ufs else None
        invalidas = [u for u in (lista or []) if not is_valid_uf(u)]
        if invalidas:
            print_error(f"UF inválida: {', '.join(invalidas)}")
            raise typer.Exit(1)

        entrada = EntityInputs(
            uf=(lista or [get_settings().uf_padrao])[0],
            cnae=cnae,
            categoria=categoria,
            receita_periodo=_decimal(receita, "--receita"),
            folha_periodo=_decimal(folha, "--folha"),
        )
        ranking = compare_states(entrada, lista, comparator=_build_comparator())

        table = Table(title="Ranking de Estados", show_header=True, header_style="bold")
        table.add_column("#", justify="right", style="dim")
        table.add_column("UF")
        table.add_column("Estado")
        table.add_column("Região")
        table.add_column("Melhor regime")
        table.add_column("Carga mensal", justify="right")
        table.add_column("Alíquota", justify="right")
        table.add_column("Incentivo")

        for linha in ranking[:top]:
            estado = f"{linha.nome} [muted](estimado)[/muted]" if linha.fallback else linha.nome
            table.add_row(
                str(linha.posicao),
                linha.uf,
                estado,
                linha.regiao,
                linha.melhor_regime.nome if linha.melhor_regime else "-",
                format_currency(linha.total) if linha.total is not None else "-",
                format_rate(linha.aliquota_efetiva),
                linha.incentivo or "-",
            )

        console.print()
        console.print(table)

        if len(ranking) >= 2 and ranking[0].total is not None and ranking[-1].total is not None:
            economia = (ranking[-1].total - ranking[0].total) * 12
            print_success(
                f"{ranking[0].nome} é o estado mais econômico: até {format_currency(economia)}/ano "
                f"a menos que {ranking[-1].nome}"
            )

    except ValidationError as e:
        print_error(str(e))
        raise typer.Exit(1)
    except RegimeAnalyzerError as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command()
def cenarios(
    uf: Annotated[Optional[str], typer.Option("--uf", "-u", help="Estado (sigla)")] = None,
    cnae: Annotated[str, typer.Option("--cnae", "-c", help="Código CNAE")] = "",
    categoria: Annotated[Optional[str], typer.Option("--categoria", help="Categoria da atividade")] = None,
    percentual_folha: Annotated[
        str, typer.Option("--percentual-folha", "-p", help="Folha como fração do faturamento")
    ] = "0.40",
    faixas: Annotated[
        Optional[str], typer.Option("--faixas", help="Faturamentos mensais separados por vírgula")
    ] = None,
) -> None:
    """Melhor regime em diferentes níveis de faturamento."""
    try:
        valores = [_decimal(v, "--faixas") for v in faixas.split(",")] if faixas else None
        base = valores[0] if valores else Decimal("10000")
        entrada = EntityInputs(
            uf=uf or get_settings().uf_padrao,
            cnae=cnae,
            categoria=categoria,
            receita_periodo=base,
        )
        pontos = analyze_scenarios(
            entrada,
            valores,
            _decimal(percentual_folha, "--percentual-folha"),
            comparator=_build_comparator(),
        )

        table = Table(title=f"Cenários de Faturamento ({entrada.uf})", show_header=True, header_style="bold")
        table.add_column("Faturamento mensal", justify="right")
        table.add_column("Folha mensal", justify="right")
        table.add_column("Melhor regime")
        table.add_column("Carga mensal", justify="right")
        table.add_column("Economia anual", justify="right")

        for ponto in pontos:
            table.add_row(
                format_currency(ponto.receita_mensal),
                format_currency(ponto.folha_mensal),
                ponto.melhor_regime.nome if ponto.melhor_regime else "-",
                format_currency(ponto.total_mensal) if ponto.total_mensal is not None else "-",
                f"[currency]{format_currency(ponto.economia_anual)}[/currency]",
            )

        console.print()
        console.print(table)

    except ValidationError as e:
        print_error(str(e))
        raise typer.Exit(1)
    except RegimeAnalyzerError as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command(name="uf")
def ficha_uf(
    sigla: Annotated[str, typer.Argument(help="Sigla do estado, ex.: SP")],
) -> None:
    """Ficha tributária normalizada de um estado."""
    try:
        if not is_valid_uf(sigla):
            print_warning(f"{normalize_uf(sigla)} não é uma UF conhecida; exibindo valores padrão")

        normalizer = _build_comparator().normalizer
        perfil = normalizer.normalize(sigla)

        linhas = [
            f"[header]Estado:[/header] {perfil.nome} ({perfil.codigo})",
            f"[header]Região:[/header] {perfil.regiao or '-'}",
            f"[header]Ano de referência:[/header] {perfil.ano}",
            f"[header]ICMS padrão:[/header] {format_rate(perfil.icms_aliquota_padrao)}",
        ]
        if perfil.adicional.existe:
            linhas.append(
                f"[header]{perfil.adicional.nome}:[/header] +{format_rate(perfil.adicional.aliquota)} "
                f"(ICMS efetivo {format_rate(perfil.icms_aliquota_efetiva)})"
            )
        linhas += [
            f"[header]ISS:[/header] {format_rate(perfil.iss_aliquota_referencia)} "
            f"em {perfil.municipio_referencia or '-'} "
            f"(faixa {format_rate(perfil.iss_aliquota_minima)} a {format_rate(perfil.iss_aliquota_maxima)})",
            f"[header]Sublimite do Simples:[/header] {format_currency(perfil.sublimite_simples)}",
        ]

        ativos = [i for i in perfil.incentivos if i.ativo]
        if ativos:
            for incentivo in ativos:
                reducao = (
                    f" ({format_rate(incentivo.percentual_reducao, 0)} do IRPJ)"
                    if incentivo.percentual_reducao > 0
                    else ""
                )
                linhas.append(f"[opportunity]{incentivo.programa.value.upper()}[/opportunity]{reducao}")
        else:
            linhas.append("[muted]Sem incentivos regionais federais[/muted]")

        qualidade = "[success]oficial[/success]"
        if perfil.is_fallback:
            qualidade = f"[warning]estimada[/warning] ({', '.join(perfil.campos_fallback)})"
        linhas.append(f"[header]Qualidade dos dados:[/header] {qualidade}")

        console.print()
        console.print(Panel.fit("\n".join(linhas), title="Ficha Tributária", border_style="blue"))

    except RegimeAnalyzerError as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command(name="cnae")
def classificar_cnae(
    codigo: Annotated[str, typer.Argument(help="Código CNAE, ex.: 6201-5/01")],
    categoria: Annotated[Optional[str], typer.Option("--categoria", help="Categoria declarada")] = None,
) -> None:
    """Classificação de uma atividade para os três regimes."""
    atividade = ActivityClassifier().classify(codigo, categoria)

    if atividade.vedado_simples:
        simples = "[error]Vedado[/error]"
    elif atividade.fator_r:
        simples = "Anexo III ou V (fator r)"
    else:
        simples = f"Anexo {atividade.anexo.value}" if atividade.anexo else "-"

    console.print()
    console.print(
        Panel.fit(
            f"[header]CNAE:[/header] {atividade.cnae or '-'}\n"
            f"[header]Categoria:[/header] {atividade.categoria.value}\n"
            f"[header]Simples Nacional:[/header] {simples}\n"
            f"[header]Presunção IRPJ/CSLL:[/header] {format_rate(atividade.presuncao_irpj, 1)} / "
            f"{format_rate(atividade.presuncao_csll, 1)} ({atividade.presuncao.value})\n"
            f"[header]Tributo local:[/header] {atividade.tipo_tributo.value}\n"
            f"[header]Lucro Real obrigatório:[/header] {'Sim' if atividade.lucro_real_obrigatorio else 'Não'}\n"
            f"[header]Origem:[/header] {atividade.origem.value}\n"
            f"[muted]{atividade.nota}[/muted]",
            title="Classificação da Atividade",
            border_style="blue",
        )
    )


def _display_comparison(resultado: ComparisonResult) -> None:
    """Display the ranked comparison with components, advisories and recommendation."""
    jurisdicao = resultado.jurisdicao
    atividade = resultado.atividade

    console.print()
    console.print(
        Panel.fit(
            f"[header]Estado:[/header] {jurisdicao.nome} ({jurisdicao.codigo})\n"
            f"[header]Atividade:[/header] {atividade.cnae or '-'} {atividade.nota}\n"
            f"[header]Receita do período:[/header] {format_currency(resultado.receita_periodo)} "
            f"({resultado.meses} {'mês' if resultado.meses == 1 else 'meses'})",
            title="Comparação de Regimes Tributários",
            border_style="blue",
        )
    )

    regimes = [item.resultado for item in resultado.ranking]
    componentes: list[str] = []
    for r in regimes:
        for nome in r.componentes:
            if nome not in componentes:
                componentes.append(nome)

    table = Table(show_header=True, header_style="bold")
    table.add_column("Tributo")
    for item in resultado.ranking:
        style = "best" if item.posicao == 1 else None
        table.add_column(f"{item.posicao}º {item.resultado.nome}", justify="right", style=style)

    for nome in componentes:
        table.add_row(
            NOMES_COMPONENTES.get(nome, nome),
            *[format_currency(r.componente(nome)) for r in regimes],
        )
    table.add_row("[bold]Total[/bold]", *[f"[bold]{format_currency(r.total)}[/bold]" for r in regimes])
    table.add_row("Alíquota efetiva", *[format_rate(r.aliquota_efetiva) for r in regimes])

    console.print(table)

    for exclusao in resultado.exclusoes:
        console.print(f"[excluded]{exclusao.regime.nome}[/excluded] [muted]{exclusao.descricao}[/muted]")

    if resultado.melhor is not None:
        console.print()
        console.print(
            Panel(
                resultado.recomendacao,
                title=f"Recomendação: {resultado.melhor.resultado.nome}",
                border_style="green",
            )
        )
        console.print(
            f"Economia: [currency]{format_currency(resultado.economia)}[/currency] no período, "
            f"[currency]{format_currency(resultado.economia_anual)}[/currency] por ano"
        )

    if resultado.vantagens:
        console.print()
        console.print("[header]Vantagens:[/header]")
        for vantagem in resultado.vantagens:
            base = f" [muted]({vantagem.base_legal})[/muted]" if vantagem.base_legal else ""
            console.print(f"  • [value]{vantagem.titulo}[/value]: {vantagem.descricao}{base}")

    if resultado.advisories:
        console.print()
        console.print("[header]Alertas:[/header]")
        for advisory in resultado.advisories:
            style = SEVERITY_STYLES[advisory.severidade]
            citacao = f" [muted]({advisory.citacao})[/muted]" if advisory.citacao else ""
            console.print(
                f"  [{style}]{SEVERITY_LABELS[advisory.severidade]}[/{style}] "
                f"[value]{advisory.titulo}[/value]: {advisory.descricao}{citacao}"
            )

    console.print()


if __name__ == "__main__":
    app()
