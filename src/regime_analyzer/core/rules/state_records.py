"""Raw tax records of the 27 federative units.

Each record keeps the layout of the state dataset it was transcribed from:
field names, nesting and rate formats differ between states. Consumers must
go through ``JurisdictionNormalizer``, which reads them by default; nothing
here is read directly by the calculators.
"""

ESTADOS = {
    "AC": {
        "dados_gerais": {"nome": "Acre", "regiao": "Norte", "capital": "Rio Branco"},
        "icms": {
            "aliquota_padrao": 0.19,
            "fecop": {"existe": True, "adicional": 0.02},
        },
        "iss": {
            "municipio_referencia": "Rio Branco",
            "aliquotas": {"minima": 0.02, "maxima": 0.05, "mais_comum": 0.05},
        },
        "simples_nacional": {"sublimite_estadual": 3600000},
        "incentivos": {
            "sudam": {"ativo": True, "reducao_irpj": {"percentual": 0.75}},
            "sudene": {"ativo": False},
            "alc": {"ativo": True, "obs": "Áreas de Livre Comércio de Cruzeiro do Sul e Brasiléia"},
        },
    },
    "AL": {
        "dados_gerais": {
            "nome": "Alagoas",
            "regiao": "Nordeste",
            "sudam": {"abrangencia": False},
            "sudene": {"abrangencia": True},
        },
        "icms": {
            "aliquota_padrao": 0.19,
            "fecoep": {"existe": True, "adicional_padrao": 0.01},
        },
        "iss": {
            "municipio_referencia": "Maceió",
            "aliquota_minima": 0.02,
            "aliquota_maxima": 0.05,
            "aliquota_geral": 0.05,
        },
        "simples_nacional": {"sublimite_estadual": 3600000},
    },
    "AP": {
        "dados_gerais": {"nome": "Amapá", "regiao": "Norte"},
        "icms": {
            "aliquota_interna": 0.18,
            "fecop": {"ativo": False},
        },
        "iss": {
            "municipio_referencia": "Macapá",
            "aliquota_padrao": 0.05,
            "aliquota_minima": 0.02,
            "aliquota_maxima": 0.05,
        },
        "incentivos": {
            "sudam": True,
            "alc": {"ativo": True, "obs": "ALC de Macapá e Santana"},
        },
    },
    "AM": {
        "dados_gerais": {"nome": "Amazonas", "regiao": "Norte"},
        "icms": {
            "aliquota_padrao": 0.20,
            "fecop": {"existe": False, "adicional": 0},
        },
        "iss": {
            "municipio_referencia": "Manaus",
            "aliquotas": {"geral": 0.05, "minima": 0.02, "maxima": 0.05},
        },
        "simples_nacional": {"sublimite_estadual": 3600000},
        "incentivos": {
            "sudam": {"ativo": True, "reducao_irpj": {"percentual": 0.75, "aliquota_efetiva": 0.075}},
            "zfm": {"nome": "Zona Franca de Manaus (ZFM)", "abrangencia": "Município de Manaus"},
            "suframa": {"pis_diferenciado": 0.0065, "cofins_diferenciado": 0.03, "ativo": True},
        },
    },
    "BA": {
        "dados_gerais": {
            "nome": "Bahia",
            "regiao": "Nordeste",
            "sudam": {"abrangencia": False},
            "sudene": {"abrangencia": True},
        },
        "icms": {
            "aliquota_padrao": 0.205,
            "aliquota_padrao_percentual": "20,5%",
            "fecoep": {"existe": False},
            "aliquota_efetiva_padrao": 0.205,
        },
        "iss": {
            "municipio_referencia": "Salvador",
            "aliquota_minima": 0.02,
            "aliquota_maxima": 0.05,
            "aliquota_geral": 0.05,
        },
    },
    "CE": {
        "dados_gerais": {"nome": "Ceará", "regiao": "Nordeste"},
        "icms": {
            "aliquotas_por_ano": {
                "2024": {"padrao": 0.20},
                "2025": {"padrao": 0.20},
            },
            "fecop": {"existe": False, "adicional": 0},
        },
        "iss": {"municipio_referencia": "Fortaleza", "aliquota_geral": 0.05},
        "incentivos": {"sudene": {"existe": True, "reducao_irpj": {"percentual": 0.75}}},
    },
    "DF": {
        "dados_gerais": {"nome": "Distrito Federal", "regiao": "Centro-Oeste"},
        "icms": {
            "aliquota_interna_padrao": 0.20,
            "fecop": {"existe": False},
        },
        "iss": {
            "municipio_referencia": "Brasília",
            "aliquotas": {"geral": {"aliquota": 0.05}, "minima": 0.02, "maxima": 0.05},
        },
        "incentivos": {"sudeco": {"ativo": True, "obs": "Financiamento FCO; sem redução de IRPJ"}},
    },
    "ES": {
        "dados_gerais": {"nome": "Espírito Santo", "regiao": "Sudeste"},
        "icms": {"aliquotas_internas": {"geral": {"aliquota": 0.17}}},
        "iss": {"municipio_referencia": "Vitória", "aliquota_geral": 0.05},
        "incentivos": {"sudene": {"abrangencia": "nao_abrangido"}},
    },
    "GO": {
        "dados_gerais": {
            "nome": "Goiás",
            "regiao": "Centro-Oeste",
            "sudam": {"abrangencia": False},
            "sudene": {"abrangencia": False},
        },
        "icms": {
            "aliquota_padrao": 0.19,
            "fecop": {"existe": False, "adicional": 0},
        },
        "iss": {
            "municipio_referencia": "Goiânia",
            "aliquota_minima_federal": 0.02,
            "aliquota_maxima_federal": 0.05,
            "aliquota_geral": None,
            "aliquota_geral_obs": "Goiânia não possui alíquota geral única: varia de 2% a 5% conforme serviço",
        },
        "incentivos": {"sudeco": True},
    },
    "MA": {
        "dados_gerais": {"nome": "Maranhão", "regiao": "Nordeste"},
        "icms": {
            "aliquota_padrao": 0.23,
            "fumacop": {"existe": True, "aliquota": 0.02},
        },
        "iss": {"municipio_referencia": "São Luís", "aliquota_geral": 0.05},
        "incentivos": {
            "sudam": {"ativo": True},
            "sudene": {"ativo": True, "reducao_irpj": {"percentual": 0.75}},
        },
    },
    "MT": {
        "dados_gerais": {"nome": "Mato Grosso", "regiao": "Centro-Oeste"},
        "icms": {"aliquota_padrao": 0.17},
        "iss": {
            "municipio_referencia": "Cuiabá",
            "aliquota_geral": 0.05,
            "aliquota_minima": 0.02,
            "aliquota_maxima": 0.05,
        },
        "incentivos": {"sudam": {"ativo": True}, "sudeco": {"ativo": True}},
    },
    "MS": {
        "dados_gerais": {"nome": "Mato Grosso do Sul", "regiao": "Centro-Oeste"},
        "icms": {"aliquota_padrao": 0.17},
        "iss": {"municipio_referencia": "Campo Grande", "aliquota_geral": 0.05},
        "incentivos": {"sudeco": {"ativo": True}},
    },
    "MG": {
        "dados_gerais": {"nome": "Minas Gerais", "regiao": "Sudeste"},
        "icms": {"aliquota_padrao": 0.18},
        "iss": {
            "municipio_referencia": "Belo Horizonte",
            "aliquota_geral": 0.05,
            "aliquota_minima": 0.02,
            "aliquota_maxima": 0.05,
        },
        "simples_nacional": {"sublimite_estadual": 3600000},
        "incentivos": {"sudene": {"abrangencia": "nao_abrangido", "obs": "Apenas municípios do norte de MG"}},
    },
    "PA": {
        "dados_gerais": {"nome": "Pará", "regiao": "Norte"},
        "icms": {"aliquota_padrao": 0.19},
        "iss": {
            "municipio_referencia": "Belém",
            "aliquota_padrao": 0.05,
            "aliquota_minima": 0.02,
            "aliquota_maxima": 0.05,
        },
        "simples_nacional": {"sublimite_estadual": 3600000},
        "incentivos": {"sudam": {"ativo": True, "reducao_irpj": {"percentual": 0.75}}},
    },
    "PB": {
        "dados_gerais": {"nome": "Paraíba", "regiao": "Nordeste"},
        "icms": {
            "aliquota_padrao": 0.20,
            "funcep": {"existe": True, "adicional": 0.02},
        },
        "iss": {"municipio_referencia": "João Pessoa", "aliquota_geral": 0.05},
        "incentivos": {"sudene": {"ativo": True}},
    },
    "PR": {
        "dados_gerais": {"nome": "Paraná", "regiao": "Sul"},
        "icms": {
            "aliquota_padrao": 0.195,
            "aliquota_padrao_percentual": "19,5%",
            "aliquota_interna": 0.195,
        },
        "iss": {
            "municipio_referencia": "Curitiba",
            "aliquotas": {"minima": 0.02, "maxima": 0.05, "mais_comum": 0.05},
        },
        "simples_nacional": {"sublimite_estadual": 3600000},
    },
    "PE": {
        "dados_gerais": {"nome": "Pernambuco", "regiao": "Nordeste"},
        "icms": {
            "aliquota_padrao": 0.205,
            "fecep": {"ativo": True, "percentual_adicional": 0.02},
        },
        "iss": {"municipio_referencia": "Recife", "aliquota_geral": 0.05},
        "incentivos": {"sudene": {"ativo": True, "reducao_irpj": {"percentual": 0.75}}},
    },
    "PI": {
        "dados_gerais": {"nome": "Piauí", "regiao": "Nordeste"},
        "icms": {"aliquota_padrao": "22,5%"},
        "fecop": {"existe": True, "adicional": 0.02},
        "iss": {"municipio_referencia": "Teresina", "aliquota_geral": 0.05},
        "incentivos": {"sudene": True},
    },
    "RJ": {
        "dados_gerais": {"nome": "Rio de Janeiro", "regiao": "Sudeste"},
        "icms": {
            "aliquota_padrao": 0.20,
            "fecp": {"existe": True, "adicional": 0.02},
            "aliquota_efetiva_padrao": 0.22,
        },
        "iss": {
            "municipio_referencia": "Rio de Janeiro",
            "aliquota_geral": 0.05,
            "aliquota_minima": 0.02,
            "aliquota_maxima": 0.05,
        },
        "simples_nacional": {"sublimite_estadual": 3600000},
    },
    "RN": {
        "dados_gerais": {"nome": "Rio Grande do Norte", "regiao": "Nordeste"},
        "icms": {"aliquota_padrao": 0.20},
        "iss": {"municipio_referencia": "Natal", "aliquota_geral": 0.05},
        "incentivos": {"sudene": {"ativo": True}},
    },
    "RS": {
        "dados_gerais": {"nome": "Rio Grande do Sul", "regiao": "Sul"},
        "icms": {"aliquota_interna": 0.17},
        "iss": {
            "municipio_referencia": "Porto Alegre",
            "aliquotas": {"padrao": 0.05, "minima": 0.02, "maxima": 0.05},
        },
    },
    "RO": {
        "dados_gerais": {"nome": "Rondônia", "regiao": "Norte"},
        "icms": {"aliquota_geral": 0.195},
        "iss": {"municipio_referencia": "Porto Velho", "aliquota_geral": 0.05},
        "incentivos": {"sudam": {"ativo": True}},
    },
    "RR": {
        "dados_gerais": {"nome": "Roraima", "regiao": "Norte"},
        "icms": {"aliquota_padrao": 0.20},
        "iss": {"municipio_referencia": "Boa Vista", "aliquotas": {"geral": 0.05}},
        "incentivos": {
            "sudam": {"ativo": True},
            "alc": {"ativo": True, "obs": "ALC de Boa Vista e Bonfim"},
        },
    },
    "SC": {
        "dados_gerais": {"nome": "Santa Catarina", "regiao": "Sul"},
        "icms": {"aliquota_padrao": 0.17},
        "iss": {"municipio_referencia": "Florianópolis", "aliquota_geral": 0.05},
    },
    "SP": {
        "dados_gerais": {"nome": "São Paulo", "regiao": "Sudeste", "capital": "São Paulo"},
        "icms": {
            "aliquota_padrao": 0.18,
            "fecop": {"ativo": False, "adicional": 0},
        },
        "iss": {
            "municipio_referencia": "São Paulo",
            "aliquota_minima": 0.02,
            "aliquota_maxima": 0.05,
            "aliquota_geral": 0.05,
        },
        "simples_nacional": {"sublimite_estadual": 3600000},
        "incentivos": {
            "sudam": {"ativo": False},
            "sudene": {"ativo": False},
            "zona_franca": {"ativo": False},
        },
        "federal": {
            "irpj": {"aliquota_normal": 0.15, "adicional": 0.10, "limite_adicional_mensal": 20000},
            "csll": {"aliquota_geral": 0.09},
            "pis_pasep": {"cumulativo": 0.0065, "nao_cumulativo": 0.0165},
            "cofins": {"cumulativo": 0.03, "nao_cumulativo": 0.076},
        },
    },
    "SE": {
        "dados_gerais": {"nome": "Sergipe", "regiao": "Nordeste"},
        "icms": {"aliquota_padrao": 0.19},
        "iss": {"municipio_referencia": "Aracaju", "aliquota_geral": 0.05},
        "incentivos": {"sudene": {"ativo": True}},
    },
    "TO": {
        "dados_gerais": {"nome": "Tocantins", "regiao": "Norte"},
        "icms": {"aliquota_padrao": 0.20},
        "iss": {"municipio_referencia": "Palmas", "aliquota_geral": 0.05},
        "incentivos": {"sudam": {"ativo": True}},
    },
}
