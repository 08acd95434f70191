from typing import Optional
from urllib.parse import urlsplit

DEFAULT_STORE_NAME = "Loja"

# Ordem importa: o primeiro domínio contido no hostname vence
STORE_DOMAINS = [
    ("amazon.com.br", "Amazon"),
    ("amazon.com", "Amazon"),
    ("shopee.com.br", "Shopee"),
    ("magazineluiza.com.br", "Magalu"),
    ("magazinevoce.com.br", "Magalu"),
    ("mercadolivre.com.br", "Mercado Livre"),
    ("americanas.com.br", "Americanas"),
    ("casasbahia.com.br", "Casas Bahia"),
    ("kabum.com.br", "KaBuM!"),
    ("aliexpress.com", "AliExpress"),
    ("terabyteshop.com.br", "Terabyte"),
    ("pichau.com.br", "Pichau"),
    ("carrefour.com.br", "Carrefour"),
    ("extra.com.br", "Extra"),
    ("pontofrio.com.br", "Ponto Frio"),
    ("submarino.com.br", "Submarino"),
    ("fastshop.com.br", "Fast Shop"),
    ("samsung.com.br", "Samsung"),
    ("apple.com.br", "Apple"),
    ("apple.com", "Apple"),
]


def get_hostname(url: str) -> Optional[str]:
    """Hostname em minúsculas, ou None se a URL não puder ser interpretada"""
    try:
        hostname = urlsplit(url).hostname
    except (ValueError, TypeError, AttributeError):
        return None
    return hostname.lower() if hostname else None


def get_store_name(url: str) -> str:
    """Nome da loja para exibição a partir da URL do produto"""
    hostname = get_hostname(url)
    if not hostname:
        return DEFAULT_STORE_NAME

    for domain, name in STORE_DOMAINS:
        if domain in hostname:
            return name

    label = hostname.replace("www.", "", 1).split(".")[0]
    if not label:
        return DEFAULT_STORE_NAME
    return label[0].upper() + label[1:]
