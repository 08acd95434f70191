import math
from enum import Enum
from typing import ClassVar, Dict, List, Optional, Tuple
from pydantic import BaseModel, Field, model_validator

from ..utils.pricing import calculate_discount, format_price
from ..utils.stores import get_store_name
from ..utils.text import MAX_TITLE_LENGTH


class Storefront(str, Enum):
    """Lojas com estratégia de extração própria"""

    GENERIC = "generic"
    AMAZON = "amazon"
    SHOPEE = "shopee"
    MERCADO_LIVRE = "mercado_livre"
    MAGALU = "magalu"


def _valid_amount(value: Optional[float]) -> Optional[float]:
    if value is None or math.isnan(value) or math.isinf(value):
        return None
    value = round(value, 2)
    # valores abaixo de meio centavo arredondam para zero
    return value if value > 0 else None


class ScrapedData(BaseModel):
    """Resultado de uma extração de página de produto"""

    title: Optional[str] = Field(default=None, description="Título do produto")
    image: Optional[str] = Field(
        default=None, description="URL absoluta da imagem do produto"
    )
    description: Optional[str] = Field(
        default=None, description="Descrição do produto"
    )
    price: Optional[float] = Field(default=None, description="Preço atual")
    original_price: Optional[float] = Field(
        default=None, description="Preço original (sem desconto)"
    )
    success: bool = Field(default=True, description="Extração sem falha fatal")
    error: Optional[str] = Field(
        default=None, description="Mensagem de erro ou aviso"
    )

    @model_validator(mode="after")
    def enforce_invariants(self) -> "ScrapedData":
        if not self.success:
            self.title = None
            self.image = None
            self.description = None
            self.price = None
            self.original_price = None
            return self

        self.price = _valid_amount(self.price)
        self.original_price = _valid_amount(self.original_price)
        if self.original_price is not None and (
            self.price is None or self.original_price <= self.price
        ):
            self.original_price = None

        if self.title is not None:
            self.title = self.title.strip()[:MAX_TITLE_LENGTH] or None
        if self.description is not None:
            self.description = self.description.strip() or None
        if self.image is not None:
            self.image = self.image.strip() or None
        return self

    @classmethod
    def failure(cls, error: str) -> "ScrapedData":
        """Cria um resultado de falha sem dados"""
        return cls(success=False, error=error)

    def discount_percentage(self) -> int:
        """Percentual de desconto arredondado (0 sem preço original)"""
        if self.original_price is None or self.price is None:
            return 0
        return calculate_discount(self.original_price, self.price)


class SiteConfig(BaseModel):
    """Configuração específica de cada loja"""

    name: str
    base_url: str
    error_label: str = Field(
        description="Complemento usado nas mensagens de erro, ex.: 'da Amazon'"
    )
    headers: Dict[str, str] = Field(default_factory=dict)


class ProductDraft(BaseModel):
    """Rascunho de produto montado a partir de uma extração para revisão do admin"""

    url: str = Field(description="Link enviado pelo admin")
    store_name: str = Field(description="Nome da loja para exibição")
    title: Optional[str] = None
    image: Optional[str] = None
    price: Optional[float] = None
    original_price: Optional[float] = None
    affiliate_link: Optional[str] = None

    REQUIRED_FIELDS: ClassVar[Tuple[str, ...]] = ("title", "image", "price")

    @classmethod
    def from_scrape(
        cls, url: str, data: ScrapedData, store_name: Optional[str] = None
    ) -> "ProductDraft":
        """Mapeia um ScrapedData para o rascunho editável"""
        return cls(
            url=url,
            store_name=store_name or get_store_name(url),
            title=data.title,
            image=data.image,
            price=data.price,
            original_price=data.original_price,
            affiliate_link=url,
        )

    def missing_fields(self) -> List[str]:
        """Campos obrigatórios que ainda precisam ser preenchidos manualmente"""
        return [name for name in self.REQUIRED_FIELDS if getattr(self, name) is None]

    def format_preview(self) -> str:
        """Resumo dos dados encontrados, no formato mostrado ao admin"""
        lines = [
            "📦 Dados encontrados:",
            "",
            f"🏪 Loja: {self.store_name}",
            f"📝 Título: {self.title or '❌ Não encontrado'}",
            f"💰 Preço: {format_price(self.price) if self.price else '❌ Não encontrado'}",
        ]
        if self.original_price and self.price and self.original_price > self.price:
            discount = calculate_discount(self.original_price, self.price)
            lines.append(
                f"🏷️  Preço original: {format_price(self.original_price)} (-{discount}%)"
            )
        lines.append(
            f"🖼️ Imagem: {'✅ Encontrada' if self.image else '❌ Não encontrada'}"
        )
        return "\n".join(lines)
