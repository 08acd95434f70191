import math
import re
from typing import Optional

_CURRENCY_MARKERS = re.compile(r"R\$|BRL", re.IGNORECASE)
_NON_PRICE_CHARS = re.compile(r"[^\d.,]")
_LEADING_NUMBER = re.compile(r"^\d*\.?\d+")
_ARIA_PREFIX = re.compile(r"^\s*(Agora|Antes)\s*:\s*", re.IGNORECASE)
_ARIA_PRICE = re.compile(
    r"(\d[\d.]*)\s*rea(?:is|l)(?:\s+com\s+(\d+)\s+centavos?)?", re.IGNORECASE
)


def _to_float(number: str) -> Optional[float]:
    """Converte o início numérico da string, como o parseFloat do navegador"""
    match = _LEADING_NUMBER.match(number)
    if not match:
        return None
    value = float(match.group(0))
    if math.isnan(value) or math.isinf(value):
        return None
    return value


def parse_price(text: Optional[str]) -> Optional[float]:
    """Extrai valor numérico de um texto de preço.

    Aceita o formato brasileiro (1.234,56) e o americano (1,234.56), com ou sem
    símbolo de moeda. Quando os dois separadores aparecem, o mais à direita é o
    decimal. Uma vírgula sozinha só é decimal se tiver exatamente dois dígitos
    depois dela. Retorna None quando não há número.
    """
    if not text:
        return None

    cleaned = _CURRENCY_MARKERS.sub("", str(text))
    cleaned = _NON_PRICE_CHARS.sub("", cleaned).strip()
    if not cleaned:
        return None

    if "," in cleaned and "." in cleaned:
        if cleaned.rfind(",") > cleaned.rfind("."):
            # Formato: 1.234,56
            cleaned = cleaned.replace(".", "").replace(",", ".")
        else:
            # Formato: 1,234.56
            cleaned = cleaned.replace(",", "")
    elif "," in cleaned:
        after_comma = cleaned[cleaned.index(",") + 1 :]
        if len(after_comma) == 2:
            # Formato: 123,45
            cleaned = cleaned.replace(",", ".")
        else:
            # Formato: 1,234
            cleaned = cleaned.replace(",", "")

    return _to_float(cleaned)


def parse_aria_label_price(label: Optional[str]) -> Optional[float]:
    """Converte o texto de acessibilidade do Mercado Livre em preço.

    Ex.: "Agora: 78 reais com 90 centavos" -> 78.9, "Antes: 1.299 reais" -> 1299.0
    """
    if not label:
        return None

    match = _ARIA_PRICE.search(_ARIA_PREFIX.sub("", label))
    if not match:
        return None

    reais = int(match.group(1).replace(".", ""))
    centavos = int(match.group(2)) if match.group(2) else 0
    return reais + centavos / 100


def calculate_discount(original_price: float, current_price: float) -> int:
    """Percentual de desconto arredondado para exibição"""
    if original_price <= 0 or current_price >= original_price:
        return 0
    discount = (original_price - current_price) / original_price * 100
    return int(math.floor(discount + 0.5))


def format_price(value: float) -> str:
    """Formata valor em Real: 1234.5 -> 'R$ 1.234,50'"""
    formatted = f"{value:,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    return f"R$ {formatted}"
