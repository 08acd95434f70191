import math

from promo_scraper.models import ProductDraft, ScrapedData


def test_failure_clears_all_fields():
    """Test that a failed result never carries data."""
    result = ScrapedData(
        title="Produto", image="https://a.com/x.jpg", price=10.0, success=False, error="HTTP 500"
    )
    assert result.success is False
    assert result.error == "HTTP 500"
    assert result.title is None
    assert result.image is None
    assert result.price is None
    assert result.original_price is None


def test_failure_factory():
    result = ScrapedData.failure("Erro")
    assert result.success is False
    assert result.error == "Erro"
    assert result.title is None


def test_zero_and_nan_prices_are_absent():
    assert ScrapedData(price=0).price is None
    assert ScrapedData(price=-5.0).price is None
    assert ScrapedData(price=math.nan).price is None
    assert ScrapedData(price=math.inf).price is None


def test_price_rounded_to_cents():
    assert ScrapedData(price=123.456).price == 123.46


def test_amounts_rounding_to_zero_are_absent():
    """Valores abaixo de meio centavo não viram preço 0,00"""
    assert ScrapedData(price=0.004).price is None
    assert ScrapedData(price=10.0, original_price=0.004).original_price is None


def test_original_price_kept_only_when_greater():
    assert ScrapedData(price=99.90, original_price=199.90).original_price == 199.90
    assert ScrapedData(price=99.90, original_price=99.90).original_price is None
    assert ScrapedData(price=99.90, original_price=50.0).original_price is None


def test_original_price_dropped_without_price():
    assert ScrapedData(original_price=199.90).original_price is None


def test_title_capped_and_blank_removed():
    assert len(ScrapedData(title="x" * 300).title) == 200
    assert ScrapedData(title="   ").title is None


def test_discount_percentage():
    assert ScrapedData(price=99.90, original_price=199.90).discount_percentage() == 50
    assert ScrapedData(price=99.90).discount_percentage() == 0


def test_product_draft_from_scrape():
    data = ScrapedData(title="Fone", price=79.9, original_price=129.9)
    draft = ProductDraft.from_scrape("https://www.amazon.com.br/dp/B0CHX3QBCH", data)

    assert draft.store_name == "Amazon"
    assert draft.title == "Fone"
    assert draft.price == 79.9
    assert draft.affiliate_link == draft.url
    assert draft.missing_fields() == ["image"]


def test_product_draft_preview():
    data = ScrapedData(title="Fone", price=99.90, original_price=199.90)
    preview = ProductDraft.from_scrape("https://www.kabum.com.br/p/1", data).format_preview()

    assert "🏪 Loja: KaBuM!" in preview
    assert "📝 Título: Fone" in preview
    assert "R$ 99,90" in preview
    assert "(-50%)" in preview
    assert "❌ Não encontrada" in preview


def test_product_draft_preview_missing_fields():
    draft = ProductDraft.from_scrape("https://loja.com/p", ScrapedData())
    preview = draft.format_preview()

    assert "📝 Título: ❌ Não encontrado" in preview
    assert "💰 Preço: ❌ Não encontrado" in preview
    assert draft.missing_fields() == ["title", "image", "price"]
