import asyncio
from typing import Dict, Iterable, List, Optional, Type
import requests
from loguru import logger

from .models import ScrapedData, Storefront
from .scrapers import (
    AmazonBRScraper,
    BaseScraper,
    GenericScraper,
    MagazineLuizaScraper,
    MercadoLivreScraper,
    ShopeeScraper,
    resolve_redirects,
)
from .utils.stores import get_hostname

# Checados em ordem; só lojas com estratégia própria
DISPATCH_DOMAINS = [
    (Storefront.SHOPEE, ("shopee.com", "s.shopee")),
    (Storefront.AMAZON, ("amazon.com", "amzn.to", "amzn.com")),
    (Storefront.MERCADO_LIVRE, ("mercadolivre.com", "mercadolibre.com", "mlstatic.com")),
    (Storefront.MAGALU, ("magazineluiza.com", "magalu.com")),
]

SCRAPERS: Dict[Storefront, Type[BaseScraper]] = {
    Storefront.GENERIC: GenericScraper,
    Storefront.AMAZON: AmazonBRScraper,
    Storefront.SHOPEE: ShopeeScraper,
    Storefront.MERCADO_LIVRE: MercadoLivreScraper,
    Storefront.MAGALU: MagazineLuizaScraper,
}


def detect_storefront(url: str) -> Storefront:
    """Escolhe a estratégia de extração pelo hostname da URL"""
    hostname = get_hostname(url)
    if hostname:
        for storefront, domains in DISPATCH_DOMAINS:
            if any(domain in hostname for domain in domains):
                return storefront
    return Storefront.GENERIC


def create_scraper(
    storefront: Storefront,
    session: Optional[requests.Session] = None,
    timeout: Optional[float] = None,
) -> BaseScraper:
    return SCRAPERS[storefront](session=session, timeout=timeout)


def scrape_url(
    url: str, session: Optional[requests.Session] = None, timeout: Optional[float] = None
) -> ScrapedData:
    """Extrai título, imagem e preços de uma URL de produto.

    Segue redirecionamentos, escolhe a estratégia da loja e sempre retorna um
    ScrapedData; falhas viram ``success=False`` com a mensagem em ``error``.
    Sem ``session``, cada scraper abre e fecha a própria sessão HTTP.
    """
    try:
        final_url = resolve_redirects(url, session=session, timeout=timeout)
        storefront = detect_storefront(final_url)
        logger.debug(f"Estratégia {storefront.value} para {final_url}")
        return create_scraper(storefront, session=session, timeout=timeout).scrape(
            final_url
        )
    except Exception as e:
        logger.exception(f"Erro inesperado ao processar {url}")
        return ScrapedData.failure(str(e) or "Erro desconhecido")


async def scrape_urls(
    urls: Iterable[str],
    session: Optional[requests.Session] = None,
    timeout: Optional[float] = None,
) -> List[ScrapedData]:
    """Executa scrape_url para várias URLs em paralelo, mantendo a ordem.

    Cada URL roda em uma thread. Uma ``session`` informada é compartilhada
    entre essas threads e precisa suportar uso concorrente; sem ela, cada
    scraper usa uma sessão própria.
    """
    tasks = [
        asyncio.to_thread(scrape_url, url, session=session, timeout=timeout)
        for url in urls
    ]
    return list(await asyncio.gather(*tasks))
