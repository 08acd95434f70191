from typing import Optional
import requests
from loguru import logger

DESKTOP_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
MOBILE_USER_AGENT = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 16_0 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/16.0 Mobile/15E148 Safari/604.1"
)
DEFAULT_TIMEOUT = 30


def resolve_redirects(
    url: str, session: Optional[requests.Session] = None, timeout: Optional[float] = None
) -> str:
    """Segue redirecionamentos (links curtos, afiliados) e retorna a URL final.

    Usa HEAD para não baixar o corpo. Qualquer falha devolve a URL original.
    """
    client = session or requests
    try:
        response = client.head(
            url,
            allow_redirects=True,
            headers={"User-Agent": DESKTOP_USER_AGENT},
            timeout=timeout or DEFAULT_TIMEOUT,
        )
    except (requests.exceptions.RequestException, ValueError) as e:
        logger.debug(f"Não foi possível seguir redirecionamentos de {url}: {e}")
        return url

    final_url = getattr(response, "url", None) or url
    if final_url != url:
        logger.info(f"Redirecionado: {url} -> {final_url}")
    return final_url
