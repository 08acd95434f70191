"""Regras de extração reutilizáveis.

Cada regra é uma função pura ``BeautifulSoup -> Optional[str]``. Os scrapers
declaram listas ordenadas dessas regras e ``first_match`` devolve o primeiro
valor não vazio, então a ordem de fallback fica explícita nos dados.
"""

import json
from typing import Callable, Iterable, List, Optional
from bs4 import BeautifulSoup
from loguru import logger

from ..utils.pricing import parse_price

Rule = Callable[[BeautifulSoup], Optional[str]]


def _clean(value) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, list):
        value = " ".join(value)
    value = str(value).strip()
    return value or None


def meta_property(prop: str) -> Rule:
    """<meta property="..." content="...">"""

    def rule(soup: BeautifulSoup) -> Optional[str]:
        element = soup.select_one(f'meta[property="{prop}"]')
        return _clean(element.get("content")) if element else None

    return rule


def meta_name(name: str) -> Rule:
    """<meta name="..." content="...">"""

    def rule(soup: BeautifulSoup) -> Optional[str]:
        element = soup.select_one(f'meta[name="{name}"]')
        return _clean(element.get("content")) if element else None

    return rule


def text_of(selector: str) -> Rule:
    """Texto do primeiro elemento que casa com o seletor"""

    def rule(soup: BeautifulSoup) -> Optional[str]:
        element = soup.select_one(selector)
        return _clean(element.get_text()) if element else None

    return rule


def attr_of(selector: str, attribute: str) -> Rule:
    """Atributo do primeiro elemento que casa com o seletor"""

    def rule(soup: BeautifulSoup) -> Optional[str]:
        element = soup.select_one(selector)
        return _clean(element.get(attribute)) if element else None

    return rule


def first_match(soup: BeautifulSoup, rules: Iterable[Rule]) -> Optional[str]:
    """Aplica as regras em ordem e retorna o primeiro valor encontrado"""
    for rule in rules:
        value = rule(soup)
        if value:
            return value
    return None


def first_price(soup: BeautifulSoup, rules: Iterable[Rule]) -> Optional[float]:
    """Primeira regra cujo texto resulta em um preço positivo"""
    for rule in rules:
        price = parse_price(rule(soup))
        if price:
            return price
    return None


def _json_ld_nodes(data) -> List[dict]:
    if isinstance(data, list):
        nodes = []
        for item in data:
            nodes.extend(_json_ld_nodes(item))
        return nodes
    if isinstance(data, dict):
        if "@graph" in data:
            return _json_ld_nodes(data["@graph"])
        return [data]
    return []


def _is_product(node: dict) -> bool:
    node_type = node.get("@type")
    if isinstance(node_type, list):
        return "Product" in node_type
    return node_type == "Product"


def find_json_ld_product(soup: BeautifulSoup) -> Optional[dict]:
    """Primeiro objeto JSON-LD do tipo Product da página"""
    for script in soup.select('script[type="application/ld+json"]'):
        content = script.string or script.get_text()
        if not content or not content.strip():
            continue
        try:
            data = json.loads(content)
        except ValueError:
            logger.debug("JSON-LD inválido ignorado")
            continue
        for node in _json_ld_nodes(data):
            if _is_product(node):
                return node
    return None


def json_ld_price(product: Optional[dict]) -> Optional[float]:
    """Preço de ``offers`` (objeto ou lista), aceitando price ou lowPrice"""
    if not product:
        return None
    offers = product.get("offers")
    if isinstance(offers, list):
        offers = offers[0] if offers else None
    if not isinstance(offers, dict):
        return None
    value = offers.get("price", offers.get("lowPrice"))
    if value is None:
        return None
    return parse_price(str(value))


def json_ld_image(product: Optional[dict]) -> Optional[str]:
    """Imagem do produto; aceita string, lista ou ImageObject"""
    if not product:
        return None
    image = product.get("image")
    if isinstance(image, list):
        image = image[0] if image else None
    if isinstance(image, dict):
        image = image.get("url") or image.get("contentUrl")
    return _clean(image) if isinstance(image, str) else None


def json_ld_name(product: Optional[dict]) -> Optional[str]:
    if not product:
        return None
    name = product.get("name")
    return _clean(name) if isinstance(name, str) else None
