import json
import re
from typing import Optional, Tuple
from loguru import logger

from .base_scraper import BaseScraper
from .extraction_rules import first_match, meta_name, meta_property, text_of
from .redirects import MOBILE_USER_AGENT
from ..models import ScrapedData, SiteConfig
from ..utils.text import clean_title, normalize_image_url

# Formato interno da Shopee (não documentado): preço em unidades de 1/100000
PRICE_SCALE = 100_000
IMAGE_CDN_TEMPLATE = "https://down-br.img.susercontent.com/file/{}"

_PATH_IDS = [
    re.compile(r"-i\.(\d+)\.(\d+)"),
    re.compile(r"/(\d+)/(\d+)"),
]
_QUERY_SHOP_ID = re.compile(r"[?&]shopid=(\d+)", re.IGNORECASE)
_QUERY_ITEM_ID = re.compile(r"[?&]itemid=(\d+)", re.IGNORECASE)

# Varredura textual de baixa confiança sobre o JSON embutido nos scripts
_ITEM_NAME = re.compile(r'"item_basic"\s*:\s*\{[^}]*?"name"\s*:\s*"((?:[^"\\]|\\.)+)"')
_PRICE = re.compile(r'"price"\s*:\s*(\d+)(?![\d.])')
_IMAGE = re.compile(r'"image"\s*:\s*"([^"]+)"')


def extract_shopee_ids(url: str) -> Optional[Tuple[str, str]]:
    """(shop_id, item_id) a partir do caminho ou da query string"""
    for pattern in _PATH_IDS:
        match = pattern.search(url)
        if match:
            return match.group(1), match.group(2)

    shop_match = _QUERY_SHOP_ID.search(url)
    item_match = _QUERY_ITEM_ID.search(url)
    if shop_match and item_match:
        return shop_match.group(1), item_match.group(1)
    return None


def _decode_json_string(raw: str) -> str:
    try:
        return json.loads(f'"{raw}"')
    except ValueError:
        logger.debug("Nome de item com escape inválido, usando texto bruto")
        return raw


class ShopeeScraper(BaseScraper):
    """Scraper para Shopee.

    As páginas dependem de JavaScript, então o resultado costuma ser parcial:
    título e imagem sem preço ainda contam como sucesso.
    """

    TITLE_RULES = [
        meta_property("og:title"),
        meta_name("twitter:title"),
        text_of("title"),
    ]

    IMAGE_RULES = [
        meta_property("og:image"),
        meta_name("twitter:image"),
    ]

    def __init__(self, session=None, timeout=None, price_scale: int = PRICE_SCALE):
        config = SiteConfig(
            name="Shopee",
            base_url="https://shopee.com.br",
            error_label="da Shopee",
            headers={
                "User-Agent": MOBILE_USER_AGENT,
                "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
                "Accept-Language": "pt-BR,pt;q=0.9",
            },
        )
        super().__init__(config, session=session, timeout=timeout)
        self.price_scale = price_scale

    def extract(self, url: str) -> ScrapedData:
        if extract_shopee_ids(url) is None:
            logger.warning(f"Link da Shopee sem shopid/itemid: {url}")
            return ScrapedData.failure(
                "Não foi possível extrair dados do link da Shopee. "
                "O link pode estar incorreto ou expirado."
            )

        response = self.fetch(url)
        if not self.is_success(response):
            return self.http_failure(response)

        soup = self.parse_html(response.text)
        title = first_match(soup, self.TITLE_RULES)
        image = first_match(soup, self.IMAGE_RULES)

        for script in soup.find_all("script"):
            # JSON-LD traz preço decimal, fora da escala interna
            if script.get("type") == "application/ld+json":
                continue
            content = script.string or script.get_text()
            if not content:
                continue

            name_match = _ITEM_NAME.search(content)
            if name_match:
                title = _decode_json_string(name_match.group(1))

            image_match = _IMAGE.search(content)
            if image_match and not image:
                image = self._image_url(image_match.group(1))

            price = self._scaled_price(content)
            if price is not None:
                return ScrapedData(
                    title=clean_title(title) if title else None,
                    image=normalize_image_url(image, url) if image else None,
                    price=price,
                )

        return ScrapedData(
            title=clean_title(title) if title else None,
            image=normalize_image_url(image, url) if image else None,
            error="Preço não encontrado na página da Shopee. Informe o preço manualmente.",
        )

    def _scaled_price(self, content: str) -> Optional[float]:
        """Primeiro preço inteiro do script que, convertido, vale pelo menos um centavo"""
        for match in _PRICE.finditer(content):
            price = round(int(match.group(1)) / self.price_scale, 2)
            if price > 0:
                return price
        return None

    def _image_url(self, image_hash: str) -> str:
        if image_hash.startswith("http"):
            return image_hash
        return IMAGE_CDN_TEMPLATE.format(image_hash)
