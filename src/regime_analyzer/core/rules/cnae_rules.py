"""CNAE-to-regime mapping tables.

Two tables, both keyed by digits only:

- REGRAS_CNAE: full seven-digit subclasses ("6201501").
- REGRAS_PREFIXO: division, group and class prefixes ("62", "432", "4930"),
  tried longest first when the subclass itself is not listed.

Activities matched by neither are classified by their declared category.
"""

import re
from typing import Iterable, NamedTuple, Optional


class RegraCNAE(NamedTuple):
    """Regime rules attached to a CNAE subclass or prefix."""

    anexo: Optional[str]
    fator_r: bool
    presuncao: str
    nota: str
    tipo_tributo: Optional[str] = None
    vedado: bool = False
    lucro_real_obrigatorio: bool = False
    categoria: Optional[str] = None


class RegraCategoria(NamedTuple):
    """Default rules for a coarse activity category."""

    anexo: str
    fator_r: bool
    presuncao: str
    tipo_tributo: str
    descricao: str


CATEGORIAS = {
    "comercio": RegraCategoria("I", False, "comercio_industria", "ICMS", "Comércio varejista e atacadista"),
    "industria": RegraCategoria("II", False, "comercio_industria", "ICMS", "Indústria e transformação"),
    "servico": RegraCategoria("III", True, "servicos_gerais", "ISS", "Prestação de serviços em geral"),
}

CATEGORIA_PADRAO = "servico"

# Substring synonyms, checked after accent stripping
SINONIMOS_COMERCIO = ("comercio", "varejo", "atacado", "revenda", "loja")
SINONIMOS_INDUSTRIA = ("industria", "fabricacao", "fabricante", "transformacao", "manufatura")
SINONIMOS_SERVICO = ("servico", "prestacao")

# Exact-match shorthands
ABREVIACOES_COMERCIO = ("com", "comercial", "1", "i")
ABREVIACOES_INDUSTRIA = ("ind", "industrial", "2", "ii")


def somente_digitos(cnae: str) -> str:
    return re.sub(r"\D", "", cnae or "")


def _tabela(*grupos: tuple[Iterable[str], RegraCNAE]) -> dict[str, RegraCNAE]:
    """Flatten (codes, rule) groups into a digits-keyed dict; later groups win."""
    tabela = {}
    for codigos, regra in grupos:
        for codigo in codigos:
            tabela[somente_digitos(codigo)] = regra
    return tabela


def _comercio(nota: str) -> RegraCNAE:
    return RegraCNAE("I", False, "comercio_industria", nota)


def _industria(nota: str) -> RegraCNAE:
    return RegraCNAE("II", False, "comercio_industria", nota)


def _servico(nota: str, anexo: str = "III", presuncao: str = "servicos_gerais") -> RegraCNAE:
    return RegraCNAE(anexo, False, presuncao, nota)


def _fator_r(nota: str, presuncao: str = "servicos_gerais") -> RegraCNAE:
    # Annex III at fator "r" >= 28%, Annex V below
    return RegraCNAE("III", True, presuncao, nota)


def _financeira(nota: str, presuncao: str = "servicos_gerais", lucro_real: bool = True) -> RegraCNAE:
    return RegraCNAE(None, False, presuncao, nota, vedado=True, lucro_real_obrigatorio=lucro_real)


def _industria_vedada(nota: str) -> RegraCNAE:
    return RegraCNAE(None, False, "comercio_industria", nota, "ICMS", vedado=True, categoria="industria")


REGRAS_CNAE = _tabela(
    # Anexo I
    (
        ("4711-3/01", "4711-3/02", "4712-1/00", "4721-1/02", "4721-1/04", "4729-6/01", "4729-6/99"),
        _comercio("Supermercados e comércio de alimentos"),
    ),
    (("4723-7/00",), _comercio("Comércio de bebidas")),
    (
        ("4744-0/01", "4744-0/02", "4744-0/03", "4744-0/04", "4744-0/05", "4744-0/99"),
        _comercio("Materiais de construção"),
    ),
    (("4751-2/01", "4753-9/00", "4754-7/01"), _comercio("Eletrodomésticos e eletrônicos")),
    (("4771-7/01",), _comercio("Farmácia: medicamentos em regime monofásico de PIS/COFINS")),
    (("4771-7/02", "4771-7/03", "4771-7/04"), _comercio("Farmácia e produtos veterinários")),
    (("4772-5/00",), _comercio("Cosméticos e perfumaria: regime monofásico de PIS/COFINS")),
    (("4781-4/00", "4782-2/01"), _comercio("Vestuário e calçados")),
    (
        (
            "4511-1/01", "4511-1/02", "4512-9/01", "4512-9/02",
            "4530-7/01", "4530-7/02", "4530-7/04", "4530-7/05", "4530-7/06",
            "4541-2/01", "4541-2/02", "4542-1/01", "4542-1/02", "4543-9/00",
        ),
        _comercio("Veículos, motocicletas e peças"),
    ),
    (("4530-7/03",), _comercio("Autopeças: parte em regime monofásico de PIS/COFINS")),
    (("4731-8/00",), RegraCNAE("I", False, "combustivel", "Revenda de combustíveis: presunção 1,6%")),
    (("4732-6/00",), RegraCNAE("I", False, "combustivel", "Revenda de lubrificantes: presunção 1,6%")),
    (("4784-9/00",), RegraCNAE("I", False, "combustivel", "Revenda de GLP: presunção 1,6%")),
    (("4761-0/01", "4761-0/02", "4761-0/03"), _comercio("Livraria e papelaria")),
    (
        ("4789-0/01", "4789-0/02", "4789-0/04", "4789-0/05", "4789-0/07", "4789-0/08", "4789-0/09", "4789-0/99"),
        _comercio("Varejo de outros produtos"),
    ),
    (("4691-5/00", "4693-1/00"), _comercio("Comércio atacadista")),
    (("4713-0/01", "4713-0/02", "4713-0/04", "4713-0/05"), _comercio("Lojas de departamento e e-commerce")),
    # Anexo II
    (
        ("1091-1/01", "1091-1/02", "1092-9/00", "1093-7/01", "1099-6/99"),
        _industria("Panificação e produtos alimentícios"),
    ),
    (("1411-8/01", "1411-8/02", "1412-6/01", "1412-6/02", "1412-6/03"), _industria("Confecção")),
    (
        ("2511-0/00", "2512-8/00", "2539-0/01", "2542-0/00", "2543-8/00", "2599-3/99"),
        _industria("Produtos de metal e serralheria"),
    ),
    (
        (
            "1610-2/01", "1610-2/02", "1621-8/00", "1622-6/01", "1622-6/02", "1629-3/01", "1629-3/02",
            "3101-2/00", "3102-1/00", "3103-9/00", "3104-7/00",
        ),
        _industria("Madeira e móveis"),
    ),
    (("1811-3/01", "1812-1/00", "1813-0/01"), _industria("Gráfica")),
    (
        ("2330-3/01", "2330-3/02", "2330-3/03", "2330-3/04", "2330-3/05", "2330-3/99"),
        _industria("Artefatos de concreto e pré-moldados"),
    ),
    # Anexo III regardless of payroll
    (
        ("4520-0/01", "4520-0/02", "4520-0/03", "4520-0/04", "4520-0/05", "4520-0/06", "4520-0/07", "4520-0/08"),
        _servico("Manutenção e reparação de veículos"),
    ),
    (
        (
            "4321-5/00", "4322-3/01", "4322-3/02", "4322-3/03",
            "4329-1/01", "4329-1/02", "4329-1/03", "4329-1/04", "4329-1/05", "4329-1/99",
        ),
        _servico("Instalações elétricas, hidráulicas e afins"),
    ),
    (
        (
            "9511-8/00", "9512-6/00", "9521-5/00",
            "9529-1/01", "9529-1/02", "9529-1/03", "9529-1/04", "9529-1/05", "9529-1/99",
        ),
        _servico("Reparação de equipamentos e objetos"),
    ),
    (("6920-6/01",), _servico("Escritório de contabilidade")),
    (
        (
            "8511-2/00", "8512-1/00", "8513-9/00", "8520-1/00", "8531-7/00", "8532-5/00", "8533-3/00",
            "8541-4/00", "8542-2/00", "8550-3/01", "8550-3/02", "8591-1/00",
            "8592-9/01", "8592-9/02", "8592-9/03", "8592-9/99", "8593-7/00",
            "8599-6/01", "8599-6/02", "8599-6/03", "8599-6/04", "8599-6/05", "8599-6/99",
        ),
        _servico("Educação e ensino"),
    ),
    (
        ("4930-2/01", "4930-2/02", "4930-2/03", "4930-2/04"),
        RegraCNAE("III", False, "comercio_industria", "Transporte rodoviário de cargas: presunção 8%", "ICMS"),
    ),
    (
        (
            "4921-3/01", "4921-3/02", "4922-1/01", "4922-1/02", "4922-1/03", "4923-0/01", "4923-0/02",
            "4924-8/00", "4929-9/01", "4929-9/02", "4929-9/03", "4929-9/04", "4929-9/99",
        ),
        _servico("Transporte de passageiros: presunção 16%", presuncao="transporte_passageiros"),
    ),
    (
        ("5510-8/01", "5510-8/02", "5590-6/01", "5590-6/02", "5590-6/03"),
        _servico("Hotéis e alojamento"),
    ),
    (("5611-2/01", "5611-2/02", "5611-2/03", "5612-1/00"), _servico("Restaurantes, bares e lanchonetes")),
    (("7911-2/00", "7912-1/00"), _servico("Agências de viagem e turismo")),
    (("9311-5/00", "9312-3/00", "9313-1/00", "9319-1/01", "9319-1/99"), _servico("Academias e atividades esportivas")),
    (
        (
            "9601-7/01", "9601-7/02", "9602-5/01", "9602-5/02",
            "9603-3/01", "9603-3/02", "9603-3/03", "9603-3/04", "9603-3/05",
            "9609-2/02", "9609-2/04", "9609-2/05", "9609-2/06", "9609-2/07", "9609-2/08", "9609-2/99",
        ),
        _servico("Serviços pessoais"),
    ),
    (("6810-2/01",), _servico("Compra e venda de imóveis próprios: presunção 8%", presuncao="comercio_industria")),
    (("6810-2/02", "6810-2/03"), _servico("Aluguel de imóveis próprios", presuncao="locacao_cessao")),
    (
        ("7711-0/00", "7719-5/01", "7719-5/02", "7719-5/99"),
        _servico("Locação de veículos e bens móveis", presuncao="locacao_cessao"),
    ),
    (("5310-5/01", "5310-5/02", "5320-2/01", "5320-2/02"), _servico("Correio e entregas")),
    (("6622-3/00",), _servico("Corretagem de seguros", presuncao="intermediacao")),
    # Anexo III / V by fator "r"
    (
        ("6201-5/01", "6201-5/02", "6202-3/00", "6203-1/00", "6204-0/00", "6209-1/00", "6311-9/00", "6319-4/00"),
        _fator_r("Tecnologia da informação e software"),
    ),
    (
        ("7111-1/00", "7112-0/00", "7119-7/01", "7119-7/02", "7119-7/03", "7119-7/04", "7119-7/99"),
        _fator_r("Engenharia e arquitetura"),
    ),
    (("7120-1/00",), _fator_r("Testes e análises técnicas, cartografia e georreferenciamento")),
    (("7020-4/00",), _fator_r("Consultoria em gestão empresarial")),
    (("7210-0/00", "7220-7/00"), _fator_r("Pesquisa e desenvolvimento")),
    (
        ("7311-4/00", "7312-2/00", "7319-0/01", "7319-0/02", "7319-0/03", "7319-0/04", "7319-0/99", "7320-3/00"),
        _fator_r("Publicidade e pesquisa de mercado"),
    ),
    (
        (
            "7410-2/01", "7410-2/02", "7410-2/03", "7410-2/99",
            "7420-0/01", "7420-0/02", "7420-0/03", "7420-0/04",
            "7490-1/01", "7490-1/02", "7490-1/03", "7490-1/05", "7490-1/99",
        ),
        _fator_r("Design, fotografia, tradução e serviços técnicos"),
    ),
    (("7490-1/04",), _fator_r("Gestão ambiental")),
    (("7500-1/00",), _fator_r("Veterinária")),
    (("6910-8/00", "6920-6/02"), _fator_r("Auditoria, perícia e consultoria contábil")),
    (("6391-7/00", "6399-2/00"), _fator_r("Agências de notícias e serviços de informação")),
    (
        (
            "8610-1/01", "8610-1/02", "8621-6/01", "8621-6/02", "8622-4/00",
            "8630-5/01", "8630-5/02", "8630-5/03", "8630-5/04", "8630-5/06", "8630-5/07", "8630-5/99",
        ),
        _fator_r("Serviços hospitalares e clínicas: presunção 8%", presuncao="saude_hospitalar"),
    ),
    (
        (
            "8640-2/01", "8640-2/02", "8640-2/03", "8640-2/04", "8640-2/05", "8640-2/06", "8640-2/07",
            "8640-2/08", "8640-2/09", "8640-2/10", "8640-2/11", "8640-2/12", "8640-2/13", "8640-2/14",
            "8640-2/99",
        ),
        _fator_r("Diagnóstico e terapia: presunção 8%", presuncao="saude_hospitalar"),
    ),
    (
        (
            "8650-0/01", "8650-0/02", "8650-0/03", "8650-0/04", "8650-0/05", "8650-0/06", "8650-0/07",
            "8650-0/99", "8660-7/00", "8690-9/01", "8690-9/02", "8690-9/03", "8690-9/99",
        ),
        _fator_r("Profissionais de saúde: presunção 8%", presuncao="saude_hospitalar"),
    ),
    (
        ("9001-9/01", "9001-9/02", "9001-9/03", "9001-9/99", "9002-7/01", "9002-7/02"),
        _fator_r("Artes cênicas e produção cultural"),
    ),
    # Anexo IV: CPP paid outside the DAS
    (("4110-7/00",), _servico("Incorporação imobiliária: presunção 8%", "IV", "construcao_empreitada")),
    (
        (
            "4120-4/00", "4211-1/01", "4211-1/02", "4212-0/00", "4213-8/00",
            "4221-9/01", "4221-9/02", "4221-9/03", "4221-9/04", "4221-9/05", "4222-7/01", "4223-5/00",
            "4291-0/00", "4292-8/01", "4292-8/02", "4299-5/01", "4299-5/99",
        ),
        _servico("Construção civil e infraestrutura: INSS por fora", "IV"),
    ),
    (
        (
            "4311-8/01", "4311-8/02", "4312-6/00", "4313-4/00", "4319-3/00",
            "4330-4/01", "4330-4/02", "4330-4/03", "4330-4/04", "4330-4/05", "4330-4/99",
            "4391-6/00", "4399-1/01", "4399-1/02", "4399-1/03", "4399-1/04", "4399-1/05", "4399-1/99",
        ),
        _servico("Serviços especializados de construção: INSS por fora", "IV"),
    ),
    (("6911-7/01", "6911-7/02", "6911-7/03"), _servico("Advocacia: INSS por fora", "IV")),
    (("8011-1/01", "8012-9/00", "8020-0/01", "8020-0/02"), _servico("Vigilância e segurança: INSS por fora", "IV")),
    (
        ("8111-7/00", "8112-5/00", "8121-4/00", "8122-2/00", "8129-0/00"),
        _servico("Limpeza e conservação: INSS por fora", "IV"),
    ),
    # Prohibited from Simples Nacional (LC 123, art. 17)
    (
        (
            "6421-2/00", "6422-1/00", "6423-9/00", "6424-7/01", "6431-0/00", "6432-8/00", "6433-6/00",
            "6435-2/01", "6435-2/02", "6435-2/03", "6436-1/00", "6437-9/00", "6438-7/01",
        ),
        _financeira("Instituição financeira: vedada (art. 17, I)"),
    ),
    (("6434-4/00",), _financeira("Factoring: vedado (art. 17, IV)", presuncao="factoring")),
    (("6440-9/00",), _financeira("Arrendamento mercantil: vedado (art. 17, I)")),
    (("6450-6/00",), _financeira("Sociedade de capitalização: vedada (art. 17, I)")),
    (
        ("6511-1/01", "6511-1/02", "6512-0/00", "6520-1/00", "6530-8/00"),
        _financeira("Seguros e previdência: vedados (art. 17, I)"),
    ),
    (("6611-8/01", "6611-8/02"), _financeira("Bolsas de valores e mercadorias: vedadas", lucro_real=False)),
    (
        ("6612-6/01", "6612-6/02", "6612-6/03", "6612-6/04", "6612-6/05"),
        _financeira("Corretoras e distribuidoras de valores: vedadas", presuncao="intermediacao"),
    ),
    (("6613-4/00",), _financeira("Administração de cartões de crédito: vedada", lucro_real=False)),
    (
        ("1210-7/00", "1220-4/01", "1220-4/02", "1220-4/03", "1220-4/99"),
        _industria_vedada("Fabricação de produtos do fumo: vedada (art. 17, X)"),
    ),
    (("2550-1/01", "2550-1/02"), _industria_vedada("Fabricação de armas e munições: vedada (art. 17, X)")),
    (
        ("1111-9/01", "1111-9/02", "1112-7/00", "1113-5/01", "1113-5/02"),
        _industria_vedada("Fabricação de bebidas alcoólicas: vedada (art. 17, X)"),
    ),
)

REGRAS_PREFIXO = _tabela(
    # Agriculture and extraction
    (("01", "02", "03"), _industria("Agropecuária, produção florestal e pesca")),
    (("05", "06", "07", "08"), _industria("Indústria extrativa")),
    (("09",), _servico("Apoio à extração mineral")),
    # Manufacturing
    (
        (
            "10", "13", "14", "15", "16", "17", "18", "19", "20", "21", "22", "23",
            "24", "25", "26", "27", "28", "29", "30", "31", "32",
        ),
        _industria("Indústria de transformação"),
    ),
    (("1121", "1122"), _industria("Fabricação de bebidas não alcoólicas")),
    (("111",), _industria_vedada("Fabricação de bebidas alcoólicas: vedada (art. 17, X)")),
    (("12",), _industria_vedada("Fabricação de produtos do fumo: vedada (art. 17, X)")),
    (("33",), _servico("Manutenção e instalação de máquinas")),
    # Utilities
    (("35", "36", "37", "38", "39"), _servico("Eletricidade, água, esgoto e resíduos")),
    # Construction
    (("41", "42", "431", "433", "439"), _servico("Construção: INSS por fora", "IV")),
    (("432",), _servico("Instalações elétricas, hidráulicas e afins")),
    # Trade
    (("45",), _comercio("Comércio e reparação de veículos")),
    (("46",), _comercio("Comércio atacadista")),
    (("47",), _comercio("Comércio varejista")),
    # Transport
    (
        ("491", "4921", "4922", "4923", "4924", "4929", "50", "51"),
        _servico("Transporte de passageiros: presunção 16%", presuncao="transporte_passageiros"),
    ),
    (
        ("4930",),
        RegraCNAE("III", False, "comercio_industria", "Transporte rodoviário de cargas: presunção 8%", "ICMS"),
    ),
    (("52", "53"), _servico("Armazenagem, correio e entregas")),
    # Lodging, food and media
    (("55", "56"), _servico("Alojamento e alimentação")),
    (("58", "60", "61"), _servico("Edição, rádio, televisão e telecomunicações")),
    (("59",), _fator_r("Cinema, vídeo e som")),
    (("62", "63"), _fator_r("Tecnologia da informação")),
    # Finance
    (("64",), _financeira("Atividade financeira: vedada (art. 17, I)")),
    (("65",), _financeira("Seguros e previdência: vedados (art. 17, I)")),
    (("6621", "6622", "6629"), _servico("Atividades auxiliares de seguros", presuncao="intermediacao")),
    (("68",), _servico("Atividades imobiliárias")),
    # Professional services
    (("6911",), _servico("Advocacia: INSS por fora", "IV")),
    (("6920",), _servico("Contabilidade")),
    (("70", "71", "72", "73", "74", "75"), _fator_r("Atividades profissionais, científicas e técnicas")),
    # Administrative services
    (("77",), _servico("Locação de bens móveis", presuncao="locacao_cessao")),
    (("78", "79", "82"), _servico("Serviços administrativos e de turismo")),
    (("80", "811", "812"), _servico("Vigilância, limpeza e conservação: INSS por fora", "IV")),
    (("84",), _servico("Administração pública")),
    (("85",), _servico("Educação")),
    (("86",), _fator_r("Atenção à saúde: presunção 8%", presuncao="saude_hospitalar")),
    (("87", "88"), _servico("Assistência residencial e social")),
    (("90",), _fator_r("Atividades artísticas e culturais")),
    (("91", "92", "93"), _servico("Cultura, esporte e recreação")),
    (("94", "95", "96", "97", "99"), _servico("Outras atividades de serviço")),
)

# Prefix lengths tried, longest first, after the exact subclass
TAMANHOS_PREFIXO = (5, 4, 3, 2)


def buscar_regra_cnae(cnae: str) -> tuple[Optional[str], Optional[RegraCNAE]]:
    """Exact subclass lookup, then longest prefix.

    Args:
        cnae: CNAE in any layout; only its digits are used

    Returns:
        (matched digits, rule) or (None, None)
    """
    digitos = somente_digitos(cnae)
    if digitos in REGRAS_CNAE:
        return digitos, REGRAS_CNAE[digitos]

    for tamanho in TAMANHOS_PREFIXO:
        prefixo = digitos[:tamanho]
        if len(prefixo) == tamanho and prefixo in REGRAS_PREFIXO:
            return prefixo, REGRAS_PREFIXO[prefixo]
    return None, None
