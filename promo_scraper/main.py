#!/usr/bin/env python3
"""
Promo Scraper
=============

Extrai título, imagem e preços de links de produtos para montar rascunhos de
promoções que depois são revisados e publicados pelo admin.

Lojas com estratégia própria:
- Amazon BR
- Mercado Livre
- Shopee
- Magazine Luiza

Demais lojas usam o extrator genérico (Open Graph e heurísticas de preço).

Uso:
    python -m promo_scraper.main "https://www.amazon.com.br/dp/B0CHX3QBCH"
    python -m promo_scraper.main URL1 URL2 --timeout 15
"""

import argparse
import asyncio
import sys
from typing import List

from .dispatcher import scrape_urls
from .models import ProductDraft, ScrapedData
from .utils import ConfigManager, Logger


def setup_environment(debug: bool = False) -> ConfigManager:
    """Configura o ambiente da aplicação"""
    config = ConfigManager()

    log_level = "DEBUG" if debug or config.debug else "INFO"
    Logger.setup_logging(level=log_level, log_file=config.log_file)

    return config


def print_result(url: str, result: ScrapedData):
    """Exibe o resultado de um link no formato de pré-visualização"""
    print("\n" + "=" * 80)
    print(f"🔗 {url}")
    print("=" * 80)

    if not result.success:
        print(f"❌ Não consegui ler este link.\n\nErro: {result.error}")
        return

    draft = ProductDraft.from_scrape(url, result)
    print(draft.format_preview())

    if result.image:
        print(f"   {result.image}")

    missing = draft.missing_fields()
    if missing:
        print(f"\n✏️  Preencher manualmente: {', '.join(missing)}")

    if result.error:
        print(f"\n⚠️  {result.error}")


async def main(argv: List[str] = None) -> int:
    """Função principal"""
    parser = argparse.ArgumentParser(
        description="Extrai dados de produtos a partir de links de lojas",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Exemplos de uso:
  python -m promo_scraper.main "https://www.amazon.com.br/dp/B0CHX3QBCH"
  python -m promo_scraper.main "https://produto.mercadolivre.com.br/MLB-123" --timeout 15
        """,
    )

    parser.add_argument("urls", nargs="+", help="Links de produtos")

    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Timeout das requisições em segundos (padrão: REQUEST_TIMEOUT ou 30)",
    )

    parser.add_argument(
        "--debug", action="store_true", help="Exibe logs de depuração"
    )

    args = parser.parse_args(argv)

    config = setup_environment(debug=args.debug)
    timeout = args.timeout or config.request_timeout

    print(f"🔍 Analisando {len(args.urls)} link(s)... Por favor, aguarde.")

    results = await scrape_urls(args.urls, timeout=timeout)

    for url, result in zip(args.urls, results):
        print_result(url, result)

    print("\n" + "=" * 80)

    # Retorna código de saída baseado no sucesso
    return 0 if all(result.success for result in results) else 1


def run():
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        print("\n⏹️  Programa interrompido")
        sys.exit(1)


if __name__ == "__main__":
    run()
