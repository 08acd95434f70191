import json
import re
from typing import Optional
from bs4 import BeautifulSoup
from loguru import logger

from .base_scraper import BaseScraper
from .extraction_rules import (
    attr_of,
    find_json_ld_product,
    first_match,
    first_price,
    json_ld_image,
    json_ld_name,
    json_ld_price,
    meta_name,
    meta_property,
    text_of,
)
from .redirects import MOBILE_USER_AGENT
from ..models import ScrapedData, SiteConfig
from ..utils.text import clean_title, normalize_image_url

ASIN_PATTERNS = [
    re.compile(r"/dp/([A-Z0-9]{10})", re.IGNORECASE),
    re.compile(r"/gp/product/([A-Z0-9]{10})", re.IGNORECASE),
    re.compile(r"/d/([A-Z0-9]{10})", re.IGNORECASE),
]

# Trechos presentes na página de verificação anti-robô
BOT_BLOCK_MARKERS = [
    "validateCaptcha",
    "Robot Check",
    "Type the characters you see in this image",
    "Digite os caracteres que você vê",
    "api-services-support@amazon.com",
]

MANUAL_ENTRY_HINT = "Por favor, adicione os dados manualmente."


def extract_asin(url: str) -> Optional[str]:
    """ASIN de 10 caracteres a partir dos formatos comuns de URL da Amazon"""
    for pattern in ASIN_PATTERNS:
        match = pattern.search(url)
        if match:
            return match.group(1)
    return None


def largest_dynamic_image(raw: Optional[str]) -> Optional[str]:
    """Escolhe a maior imagem do atributo data-a-dynamic-image.

    O atributo é um JSON ``{url: [largura, altura]}``; vence a URL com o maior
    primeiro elemento.
    """
    if not raw:
        return None
    try:
        images = json.loads(raw)
    except ValueError:
        logger.debug("data-a-dynamic-image inválido ignorado")
        return None
    if not isinstance(images, dict) or not images:
        return None

    def size(image_url: str) -> float:
        dimensions = images.get(image_url)
        if isinstance(dimensions, list) and dimensions:
            try:
                return float(dimensions[0])
            except (TypeError, ValueError):
                return 0
        return 0

    best = None
    for image_url in images:
        if best is None or size(image_url) > size(best):
            best = image_url
    return best


class AmazonBRScraper(BaseScraper):
    """Scraper específico para páginas de produto da Amazon BR"""

    TITLE_RULES = [
        text_of("#productTitle"),
        meta_property("og:title"),
        meta_name("title"),
        text_of("title"),
    ]

    IMAGE_RULES = [
        attr_of("img#landingImage", "data-old-hires"),
        attr_of("#landingImage", "src"),
        attr_of("#imgBlkFront", "src"),
        attr_of(".a-dynamic-image", "src"),
        meta_property("og:image"),
    ]

    PRICE_RULES = [
        text_of("#priceblock_ourprice"),
        text_of("#priceblock_dealprice"),
        text_of("#corePrice_feature_div .a-offscreen"),
        text_of(".a-price .a-offscreen"),
        text_of('[data-a-color="price"] .a-offscreen'),
    ]

    LIST_PRICE_RULES = [
        text_of(".a-text-price .a-offscreen"),
        text_of("#listPrice"),
        text_of('.a-price[data-a-strike="true"] .a-offscreen'),
        text_of(".basisPrice .a-offscreen"),
    ]

    def __init__(self, session=None, timeout=None):
        config = SiteConfig(
            name="Amazon BR",
            base_url="https://www.amazon.com.br",
            error_label="da Amazon",
            headers={
                "User-Agent": MOBILE_USER_AGENT,
                "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
                "Accept-Language": "pt-BR,pt;q=0.9,en;q=0.8",
                "Accept-Encoding": "gzip, deflate",
                "Cache-Control": "no-cache",
            },
        )
        super().__init__(config, session=session, timeout=timeout)

    def build_product_url(self, url: str) -> str:
        """URL canônica /dp/ASIN, sem parâmetros de rastreamento"""
        asin = extract_asin(url)
        if asin:
            return f"{self.config.base_url}/dp/{asin}"
        return url

    def http_failure(self, response) -> ScrapedData:
        logger.warning(f"Amazon respondeu HTTP {response.status_code}: {response.url}")
        return ScrapedData.failure(
            f"Amazon bloqueou a requisição (HTTP {response.status_code}). {MANUAL_ENTRY_HINT}"
        )

    def is_blocked(self, html_content: str) -> bool:
        return any(marker in html_content for marker in BOT_BLOCK_MARKERS)

    def extract(self, url: str) -> ScrapedData:
        product_url = self.build_product_url(url)
        response = self.fetch(product_url)
        if not self.is_success(response):
            return self.http_failure(response)

        html_content = response.text
        if self.is_blocked(html_content):
            logger.warning(f"Amazon exigiu CAPTCHA para {product_url}")
            return ScrapedData.failure(f"Amazon exigiu CAPTCHA. {MANUAL_ENTRY_HINT}")

        soup = self.parse_html(html_content)

        title = first_match(soup, self.TITLE_RULES)
        image = first_match(soup, self.IMAGE_RULES) or largest_dynamic_image(
            attr_of("[data-a-dynamic-image]", "data-a-dynamic-image")(soup)
        )
        price = self.extract_price(soup)
        original_price = first_price(soup, self.LIST_PRICE_RULES)

        # Dados estruturados completam o que faltou
        if not (title and image and price):
            product = find_json_ld_product(soup)
            title = title or json_ld_name(product)
            image = image or json_ld_image(product)
            price = price or json_ld_price(product)

        return ScrapedData(
            title=clean_title(title) if title else None,
            image=normalize_image_url(image, product_url) if image else None,
            price=price,
            original_price=original_price,
        )

    def extract_price(self, soup: BeautifulSoup) -> Optional[float]:
        """Preço em partes inteira/fração e, depois, blocos de oferta"""
        whole = text_of(".a-price-whole")(soup)
        if whole:
            whole_digits = re.sub(r"[^\d]", "", whole)
            fraction_digits = re.sub(r"[^\d]", "", text_of(".a-price-fraction")(soup) or "")
            if whole_digits:
                price = float(f"{whole_digits}.{fraction_digits or '00'}")
                if price > 0:
                    return price

        return first_price(soup, self.PRICE_RULES)
