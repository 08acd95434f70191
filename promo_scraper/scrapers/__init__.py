from .base_scraper import BaseScraper
from .generic_scraper import GenericScraper
from .amazon_scraper import AmazonBRScraper
from .mercado_livre_scraper import MercadoLivreScraper
from .shopee_scraper import ShopeeScraper
from .magazine_luiza_scraper import MagazineLuizaScraper
from .redirects import resolve_redirects

__all__ = [
    "BaseScraper",
    "GenericScraper",
    "AmazonBRScraper",
    "MercadoLivreScraper",
    "ShopeeScraper",
    "MagazineLuizaScraper",
    "resolve_redirects",
]
