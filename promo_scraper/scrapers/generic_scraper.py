import re
from typing import Optional
from bs4 import BeautifulSoup
from loguru import logger

from .base_scraper import BaseScraper
from .extraction_rules import attr_of, first_match, meta_name, meta_property, text_of
from .redirects import DESKTOP_USER_AGENT
from ..models import ScrapedData, SiteConfig
from ..utils.pricing import parse_price
from ..utils.text import clean_title, normalize_image_url

MAX_REASONABLE_PRICE = 1_000_000


class GenericScraper(BaseScraper):
    """Scraper para lojas sem estratégia própria (Open Graph e heurísticas)"""

    TITLE_RULES = [
        meta_property("og:title"),
        meta_name("twitter:title"),
        text_of("title"),
        text_of("h1"),
    ]

    IMAGE_RULES = [
        meta_property("og:image"),
        meta_name("twitter:image"),
        attr_of("img", "src"),
    ]

    DESCRIPTION_RULES = [
        meta_property("og:description"),
        meta_name("description"),
        meta_name("twitter:description"),
    ]

    # Classes e atributos comuns de exibição de preço
    PRICE_SELECTORS = [
        ".price",
        ".a-price-whole",
        "[data-price]",
        ".price-tag",
        ".product-price",
        ".sale-price",
        '[itemprop="price"]',
        ".current-price",
        ".andes-money-amount__fraction",
    ]

    PRICE_PATTERNS = [
        re.compile(r"R\$\s*(\d{1,3}(?:[.,]\d{3})*(?:[.,]\d{2})?)", re.IGNORECASE),
        re.compile(r"BRL\s*(\d+[.,]\d{2})", re.IGNORECASE),
        re.compile(r'"price"\s*:\s*(\d+\.?\d*)', re.IGNORECASE),
        re.compile(r'"amount"\s*:\s*(\d+\.?\d*)', re.IGNORECASE),
        re.compile(r'"salePrice"\s*:\s*(\d+\.?\d*)', re.IGNORECASE),
    ]

    def __init__(self, session=None, timeout=None):
        config = SiteConfig(
            name="Genérico",
            base_url="",
            error_label="",
            headers={
                "User-Agent": DESKTOP_USER_AGENT,
                "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
                "Accept-Language": "pt-BR,pt;q=0.9,en-US;q=0.8,en;q=0.7",
                "Accept-Encoding": "gzip, deflate",
                "Connection": "keep-alive",
            },
        )
        super().__init__(config, session=session, timeout=timeout)

    def error_message(self, error: Exception) -> str:
        return str(error) or "Erro desconhecido"

    def http_failure(self, response) -> ScrapedData:
        logger.warning(f"Página respondeu HTTP {response.status_code}: {response.url}")
        reason = getattr(response, "reason", None)
        if reason:
            return ScrapedData.failure(f"HTTP {response.status_code}: {reason}")
        return ScrapedData.failure(f"HTTP {response.status_code}")

    def extract(self, url: str) -> ScrapedData:
        response = self.fetch(url)
        if not self.is_success(response):
            return self.http_failure(response)

        html_content = response.text
        soup = self.parse_html(html_content)

        title = first_match(soup, self.TITLE_RULES)
        image = first_match(soup, self.IMAGE_RULES)
        description = first_match(soup, self.DESCRIPTION_RULES)

        return ScrapedData(
            title=clean_title(title) if title else None,
            image=normalize_image_url(image, url) if image else None,
            description=description,
            price=self.extract_price(soup, html_content),
        )

    def extract_price(self, soup: BeautifulSoup, html_content: str) -> Optional[float]:
        """Procura o preço por seletores e, se falhar, por padrões no HTML bruto"""
        for selector in self.PRICE_SELECTORS:
            element = soup.select_one(selector)
            if element is None:
                continue
            for candidate in (
                element.get_text(strip=True),
                element.get("content"),
                element.get("data-price"),
            ):
                price = parse_price(candidate)
                if price:
                    return price

        for pattern in self.PRICE_PATTERNS:
            for match in pattern.finditer(html_content):
                price = parse_price(match.group(1))
                if price and 0 < price < MAX_REASONABLE_PRICE:
                    return price

        return None
