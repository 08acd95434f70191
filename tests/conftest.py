import pytest


class FakeResponse:
    """Resposta mínima compatível com o uso de requests.Response pelos scrapers"""

    def __init__(self, url, text="", status_code=200, reason="OK"):
        self.url = url
        self.text = text
        self.status_code = status_code
        self.reason = reason


class FakeSession:
    """Sessão HTTP em memória: páginas por URL, redirecionamentos e registro de chamadas"""

    def __init__(self, pages=None, redirects=None):
        self.pages = pages or {}
        self.redirects = redirects or {}
        self.headers = {}
        self.calls = []
        self.closed = False

    def head(self, url, **kwargs):
        self.calls.append(("HEAD", url))
        target = self.redirects.get(url, url)
        if isinstance(target, Exception):
            raise target
        return FakeResponse(url=target)

    def get(self, url, **kwargs):
        self.calls.append(("GET", url))
        page = self.pages.get(url)
        if isinstance(page, Exception):
            raise page
        if isinstance(page, FakeResponse):
            return page
        if page is None:
            return FakeResponse(url=url, status_code=404, reason="Not Found")
        return FakeResponse(url=url, text=page)

    def close(self):
        self.closed = True

    @property
    def get_calls(self):
        return [url for method, url in self.calls if method == "GET"]


@pytest.fixture
def make_session():
    """Cria uma FakeSession: make_session(pages={url: html}, redirects={url: final})"""

    def factory(pages=None, redirects=None):
        return FakeSession(pages=pages, redirects=redirects)

    return factory


@pytest.fixture
def response_factory():
    return FakeResponse
