import re
from typing import Optional
from bs4 import BeautifulSoup

from .base_scraper import BaseScraper
from .extraction_rules import (
    attr_of,
    find_json_ld_product,
    first_match,
    json_ld_image,
    json_ld_name,
    json_ld_price,
    meta_name,
    meta_property,
    text_of,
)
from .redirects import DESKTOP_USER_AGENT
from ..models import ScrapedData, SiteConfig
from ..utils.pricing import parse_aria_label_price, parse_price
from ..utils.text import clean_title, normalize_image_url

# Regras de preço pelo texto de acessibilidade
CURRENT_PRICE_LABEL = attr_of('[aria-label^="Agora:"]', "aria-label")
ORIGINAL_PRICE_LABEL = attr_of('[aria-label^="Antes:"]', "aria-label")
ANY_PRICE_LABEL = attr_of(
    '[aria-label*="reais"]:not([aria-label^="Antes:"])', "aria-label"
)
ITEMPROP_PRICE = attr_of('meta[itemprop="price"]', "content")


class MercadoLivreScraper(BaseScraper):
    """Scraper específico para Mercado Livre.

    O preço vem primeiro do texto de acessibilidade ("Agora: 78 reais com 90
    centavos"), que muda menos entre layouts do que as classes visuais.
    """

    TITLE_RULES = [
        meta_property("og:title"),
        text_of("h1.ui-pdp-title"),
        text_of("title"),
    ]

    IMAGE_RULES = [
        meta_property("og:image"),
        meta_name("twitter:image"),
        attr_of("figure.ui-pdp-gallery__figure img", "src"),
        attr_of("img.ui-pdp-image", "src"),
    ]

    PRICE_CONTAINERS = [
        ".ui-pdp-price__second-line .andes-money-amount",
        ".andes-money-amount--cents-superscript",
    ]

    def __init__(self, session=None, timeout=None):
        config = SiteConfig(
            name="Mercado Livre",
            base_url="https://www.mercadolivre.com.br",
            error_label="do Mercado Livre",
            headers={
                "User-Agent": DESKTOP_USER_AGENT,
                "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
                "Accept-Language": "pt-BR,pt;q=0.9,en-US;q=0.8,en;q=0.7",
            },
        )
        super().__init__(config, session=session, timeout=timeout)

    def extract(self, url: str) -> ScrapedData:
        response = self.fetch(url)
        if not self.is_success(response):
            return self.http_failure(response)

        soup = self.parse_html(response.text)

        title = first_match(soup, self.TITLE_RULES)
        image = first_match(soup, self.IMAGE_RULES)
        price = parse_aria_label_price(CURRENT_PRICE_LABEL(soup))
        original_price = parse_aria_label_price(ORIGINAL_PRICE_LABEL(soup))

        if not price:
            price = self._price_from_fraction(soup)
        if not price:
            price = parse_price(ITEMPROP_PRICE(soup))
        if not price:
            price = parse_aria_label_price(ANY_PRICE_LABEL(soup))

        if not (title and image and price):
            product = find_json_ld_product(soup)
            title = title or json_ld_name(product)
            image = image or json_ld_image(product)
            price = price or json_ld_price(product)

        return ScrapedData(
            title=clean_title(title) if title else None,
            image=normalize_image_url(image, url) if image else None,
            price=price,
            original_price=original_price,
        )

    def _price_from_fraction(self, soup: BeautifulSoup) -> Optional[float]:
        """Preço das classes visuais: parte inteira e centavos separadas"""
        for container_selector in self.PRICE_CONTAINERS:
            container = soup.select_one(container_selector)
            if container is None:
                continue
            fraction = container.select_one(".andes-money-amount__fraction")
            if fraction is None:
                continue
            reais = re.sub(r"[^\d]", "", fraction.get_text())
            if not reais:
                continue
            cents_element = container.select_one(".andes-money-amount__cents")
            cents = re.sub(r"[^\d]", "", cents_element.get_text()) if cents_element else ""
            return float(f"{reais}.{cents or '00'}")
        return None
