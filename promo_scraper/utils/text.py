import re
from urllib.parse import urlsplit

MAX_TITLE_LENGTH = 200

STORE_NAMES = [
    "Amazon",
    "Shopee",
    "Mercado Livre",
    "Magazine Luiza",
    "Magalu",
    "Americanas",
    "Casas Bahia",
    "KaBuM",
]

_PIPE_SUFFIX = re.compile(r"\s*\|.*$", re.DOTALL)
_STORE_SUFFIX = re.compile(
    r"\s*[-–—]\s*(?:%s).*$" % "|".join(re.escape(name) for name in STORE_NAMES),
    re.IGNORECASE | re.DOTALL,
)
_REVIEW_COUNT = re.compile(
    r"\s*\(\s*[\d.,]+\s+avalia[çc](?:[ãa]o|[õo]es)\s*\).*$",
    re.IGNORECASE | re.DOTALL,
)
_WHITESPACE = re.compile(r"\s+")


def clean_title(title: str) -> str:
    """Remove sufixos de loja, contagem de avaliações e espaços extras do título"""
    if not title:
        return ""

    title = _PIPE_SUFFIX.sub("", title)
    title = _STORE_SUFFIX.sub("", title)
    title = _REVIEW_COUNT.sub("", title)
    title = _WHITESPACE.sub(" ", title).strip()
    return title[:MAX_TITLE_LENGTH]


def normalize_image_url(image_url: str, base_url: str) -> str:
    """Torna absoluta a URL de uma imagem usando a URL da página como base"""
    if image_url.startswith(("http://", "https://")):
        return image_url

    if image_url.startswith("//"):
        return "https:" + image_url

    try:
        base = urlsplit(base_url)
    except ValueError:
        return image_url
    if not base.scheme or not base.netloc:
        return image_url

    origin = f"{base.scheme}://{base.netloc}"
    if image_url.startswith("/"):
        return origin + image_url
    return f"{origin}/{image_url}"
