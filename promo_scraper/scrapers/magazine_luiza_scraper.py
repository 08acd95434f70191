from .base_scraper import BaseScraper
from .extraction_rules import (
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
from .redirects import DESKTOP_USER_AGENT
from ..models import ScrapedData, SiteConfig
from ..utils.text import clean_title, normalize_image_url


class MagazineLuizaScraper(BaseScraper):
    """Scraper específico para Magazine Luiza"""

    TITLE_RULES = [
        meta_property("og:title"),
        text_of('h1[data-testid="heading-product-title"]'),
        text_of("title"),
    ]

    IMAGE_RULES = [
        meta_property("og:image"),
        meta_name("twitter:image"),
    ]

    PRICE_RULES = [
        text_of('[data-testid="price-value"]'),
        text_of(".price-template__text"),
    ]

    def __init__(self, session=None, timeout=None):
        config = SiteConfig(
            name="Magazine Luiza",
            base_url="https://www.magazineluiza.com.br",
            error_label="da Magalu",
            headers={
                "User-Agent": DESKTOP_USER_AGENT,
                "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
                "Accept-Language": "pt-BR,pt;q=0.9",
                "Cache-Control": "no-cache",
                "Pragma": "no-cache",
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
        price = first_price(soup, self.PRICE_RULES)

        if not (title and image and price):
            product = find_json_ld_product(soup)
            title = title or json_ld_name(product)
            image = image or json_ld_image(product)
            price = price or json_ld_price(product)

        return ScrapedData(
            title=clean_title(title) if title else None,
            image=normalize_image_url(image, url) if image else None,
            price=price,
        )
