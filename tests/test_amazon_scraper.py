from promo_scraper.scrapers import AmazonBRScraper
from promo_scraper.scrapers.amazon_scraper import extract_asin, largest_dynamic_image

CANONICAL_URL = "https://www.amazon.com.br/dp/B0CHX3QBCH"
SHARED_URL = "https://www.amazon.com.br/Fone-Bluetooth-JBL/dp/B0CHX3QBCH?tag=promo-20&ref=xyz"

PRODUCT_PAGE = """
<html>
<head>
  <title>Amazon.com.br : Fone Bluetooth JBL</title>
  <meta name="robots" content="index, follow">
  <meta property="og:image" content="https://m.media-amazon.com/images/og.jpg">
</head>
<body>
  <span id="productTitle">   Fone de Ouvido Bluetooth JBL Tune 520BT   </span>
  <img id="landingImage" src="https://m.media-amazon.com/images/small.jpg"
       data-old-hires="https://m.media-amazon.com/images/large.jpg">
  <div id="corePrice_feature_div">
    <span class="a-price"><span class="a-offscreen">R$ 1.299,90</span>
      <span class="a-price-whole">1.299<span class="a-price-decimal">,</span></span>
      <span class="a-price-fraction">90</span>
    </span>
  </div>
  <span class="a-price a-text-price" data-a-strike="true">
    <span class="a-offscreen">R$ 1.599,00</span>
  </span>
</body>
</html>
"""


def test_extract_asin_url_shapes():
    assert extract_asin(SHARED_URL) == "B0CHX3QBCH"
    assert extract_asin("https://www.amazon.com.br/gp/product/B08N5WRWNW/ref=x") == "B08N5WRWNW"
    assert extract_asin("https://www.amazon.com.br/d/b08n5wrwnw") == "b08n5wrwnw"
    assert extract_asin("https://www.amazon.com.br/s?k=fone") is None


def test_scrape_product_page_uses_canonical_url(make_session):
    session = make_session(pages={CANONICAL_URL: PRODUCT_PAGE})
    result = AmazonBRScraper(session=session).scrape(SHARED_URL)

    assert session.get_calls == [CANONICAL_URL]
    assert result.success is True
    assert result.title == "Fone de Ouvido Bluetooth JBL Tune 520BT"
    assert result.image == "https://m.media-amazon.com/images/large.jpg"
    assert result.price == 1299.90
    assert result.original_price == 1599.00
    assert result.discount_percentage() == 19


def test_url_without_asin_is_fetched_as_is(make_session):
    url = "https://www.amazon.com.br/s?k=fone"
    session = make_session(pages={url: PRODUCT_PAGE})
    AmazonBRScraper(session=session).scrape(url)

    assert session.get_calls == [url]


def test_captcha_page_is_reported(make_session):
    page = """
    <html><head><title>Amazon.com.br</title></head><body>
      <form method="get" action="/errors/validateCaptcha" name="">
        <input type="text" id="captchacharacters">
      </form>
    </body></html>
    """
    session = make_session(pages={CANONICAL_URL: page})
    result = AmazonBRScraper(session=session).scrape(CANONICAL_URL)

    assert result.success is False
    assert "CAPTCHA" in result.error
    assert "manualmente" in result.error


def test_http_error_asks_for_manual_entry(make_session, response_factory):
    blocked = response_factory(url=CANONICAL_URL, status_code=503, reason="Service Unavailable")
    session = make_session(pages={CANONICAL_URL: blocked})
    result = AmazonBRScraper(session=session).scrape(CANONICAL_URL)

    assert result.success is False
    assert "503" in result.error
    assert "manualmente" in result.error


def test_offer_block_and_dynamic_image_fallbacks(make_session):
    page = """
    <html><head><title>Kindle 11ª Geração | Amazon.com.br</title></head><body>
      <img id="imgTagWrapperId" data-a-dynamic-image='{"https://m.media-amazon.com/a.jpg": [300, 300],
        "https://m.media-amazon.com/b.jpg": [1500, 1500],
        "https://m.media-amazon.com/c.jpg": [679, 679]}'>
      <span class="a-price" data-a-color="price"><span class="a-offscreen">R$ 499,00</span></span>
    </body></html>
    """
    session = make_session(pages={CANONICAL_URL: page})
    result = AmazonBRScraper(session=session).scrape(CANONICAL_URL)

    assert result.title == "Kindle 11ª Geração"
    assert result.image == "https://m.media-amazon.com/b.jpg"
    assert result.price == 499.0
    assert result.original_price is None


def test_json_ld_backfills_missing_fields(make_session):
    page = """
    <html><body>
      <script type="application/ld+json">
        {"@context": "https://schema.org", "@type": "Product", "name": "Echo Dot 5ª geração",
         "image": ["/images/I/echo.jpg"], "offers": {"@type": "Offer", "price": "379.05"}}
      </script>
    </body></html>
    """
    session = make_session(pages={CANONICAL_URL: page})
    result = AmazonBRScraper(session=session).scrape(CANONICAL_URL)

    assert result.success is True
    assert result.title == "Echo Dot 5ª geração"
    assert result.image == "https://www.amazon.com.br/images/I/echo.jpg"
    assert result.price == 379.05


def test_largest_dynamic_image_heuristic():
    # Formato presumido do atributo; revalidar periodicamente com páginas reais
    raw = '{"https://x/a.jpg": [500, 100], "https://x/b.jpg": [400, 900]}'
    assert largest_dynamic_image(raw) == "https://x/a.jpg"
    assert largest_dynamic_image("{não é json") is None
    assert largest_dynamic_image(None) is None
    assert largest_dynamic_image("[]") is None
