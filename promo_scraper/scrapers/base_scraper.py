from abc import ABC, abstractmethod
from typing import Optional
import time
import requests
from bs4 import BeautifulSoup
from loguru import logger

from ..models import ScrapedData, SiteConfig
from .redirects import DEFAULT_TIMEOUT


class BaseScraper(ABC):
    """Scraper base para páginas de produto de e-commerce"""

    def __init__(
        self,
        site_config: SiteConfig,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        self.config = site_config
        self.timeout = timeout or DEFAULT_TIMEOUT
        self.session = session
        # sessão criada aqui é fechada ao fim de cada scrape
        self._owns_session = session is None
        if self._owns_session:
            self._setup_session()

    def _setup_session(self):
        """Configura sessão HTTP"""
        self.session = requests.Session()
        if self.config.headers:
            self.session.headers.update(self.config.headers)

    @abstractmethod
    def extract(self, url: str) -> ScrapedData:
        """Baixa a página e extrai os dados do produto"""
        pass

    def fetch(self, url: str, headers: Optional[dict] = None) -> requests.Response:
        """GET com os cabeçalhos da loja, seguindo redirecionamentos"""
        return self.session.get(
            url,
            headers=headers or self.config.headers,
            timeout=self.timeout,
            allow_redirects=True,
        )

    def is_success(self, response: requests.Response) -> bool:
        return 200 <= response.status_code < 300

    def parse_html(self, html_content: str) -> BeautifulSoup:
        return BeautifulSoup(html_content, "html.parser")

    def http_failure(self, response: requests.Response) -> ScrapedData:
        """Resultado de falha para respostas fora da faixa 2xx"""
        logger.warning(
            f"{self.config.name} respondeu HTTP {response.status_code} para {response.url}"
        )
        return ScrapedData.failure(f"HTTP {response.status_code}")

    def error_message(self, error: Exception) -> str:
        return f"Erro ao processar link {self.config.error_label}: {error}"

    def scrape(self, url: str) -> ScrapedData:
        """Executa a extração; nenhuma exceção escapa deste método"""
        start_time = time.time()
        logger.info(f"Iniciando scraping {self.config.name}: {url}")

        try:
            result = self.extract(url)
        except requests.exceptions.RequestException as e:
            logger.warning(f"Erro na requisição para {self.config.name}: {str(e)}")
            return ScrapedData.failure(self.error_message(e))
        except Exception as e:
            logger.warning(f"Erro no scraping de {self.config.name}: {str(e)}")
            return ScrapedData.failure(self.error_message(e))
        finally:
            if self._owns_session:
                self.session.close()

        execution_time = time.time() - start_time
        if result.success:
            logger.success(
                f"Scraping {self.config.name} concluído em {execution_time:.2f}s "
                f"(título={'sim' if result.title else 'não'}, "
                f"preço={result.price if result.price else 'não'})"
            )
        else:
            logger.warning(f"Scraping {self.config.name} falhou: {result.error}")
        return result
