from .models import ProductDraft, ScrapedData, Storefront
from .dispatcher import detect_storefront, scrape_url, scrape_urls
from .utils.stores import get_store_name

__all__ = [
    "ProductDraft",
    "ScrapedData",
    "Storefront",
    "detect_storefront",
    "scrape_url",
    "scrape_urls",
    "get_store_name",
]
