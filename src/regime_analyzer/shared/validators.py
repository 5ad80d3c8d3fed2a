"""Input normalization and validation helpers."""

import re
import unicodedata

UFS = (
    "AC", "AL", "AP", "AM", "BA", "CE", "DF", "ES", "GO",
    "MA", "MT", "MS", "MG", "PA", "PB", "PR", "PE", "PI",
    "RJ", "RN", "RS", "RO", "RR", "SC", "SP", "SE", "TO",
)


def normalize_text(value: str) -> str:
    """Lower-case, strip accents and drop every non-alphanumeric character.

    "Comércio Varejista" -> "comerciovarejista"
    """
    text = unicodedata.normalize("NFD", str(value).strip().lower())
    text = "".join(ch for ch in text if not unicodedata.combining(ch))
    return re.sub(r"[^a-z0-9]", "", text)


def normalize_uf(uf: str) -> str:
    """Upper-case state code without surrounding whitespace."""
    return (uf or "").strip().upper()


def is_valid_uf(uf: str) -> bool:
    """Check whether the code is one of the 27 federative units."""
    return normalize_uf(uf) in UFS


def format_cnae(cnae: str) -> str:
    """Canonical CNAE subclass layout DD.DD-D/DD.

    Partial codes are formatted as far as they go ("6201" -> "62.01",
    "62015" -> "62.01-5"). Anything without digits returns "".
    """
    digits = re.sub(r"\D", "", cnae or "")
    if not digits:
        return ""

    formatted = digits[:2]
    if len(digits) > 2:
        formatted += f".{digits[2:4]}"
    if len(digits) > 4:
        formatted += f"-{digits[4]}"
    if len(digits) > 5:
        formatted += f"/{digits[5:7]}"
    return formatted


def format_cnpj(cnpj: str) -> str:
    """Format CNPJ as XX.XXX.XXX/XXXX-XX."""
    cnpj = re.sub(r"\D", "", cnpj)
    if len(cnpj) != 14:
        return cnpj
    return f"{cnpj[:2]}.{cnpj[2:5]}.{cnpj[5:8]}/{cnpj[8:12]}-{cnpj[12:]}"


def validar_cnpj(cnpj: str) -> tuple[bool, str]:
    """Validate CNPJ and return reason if invalid.

    Uses módulo 11 algorithm for check digit calculation.

    Args:
        cnpj: CNPJ string (can contain formatting characters)

    Returns:
        (True, "") if valid
        (False, "reason") if invalid
    """
    cnpj = re.sub(r"\D", "", cnpj)

    if len(cnpj) != 14:
        return False, f"CNPJ deve ter 14 dígitos, tem {len(cnpj)}"

    if cnpj == cnpj[0] * 14:
        return False, "CNPJ com todos dígitos iguais é inválido"

    for posicao in (12, 13):
        pesos = [6, 5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2][13 - posicao:]
        soma = sum(int(cnpj[i]) * pesos[i] for i in range(posicao))
        resto = soma % 11
        digito = 0 if resto < 2 else 11 - resto
        if int(cnpj[posicao]) != digito:
            ordem = "Primeiro" if posicao == 12 else "Segundo"
            return False, f"{ordem} dígito verificador inválido (esperado {digito})"

    return True, ""
