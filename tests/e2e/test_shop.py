"""Product listing and search, using the seeded catalog."""

import pytest
from playwright.sync_api import Page

from storefront_e2e.fixtures import get_in_stock_product
from storefront_e2e.pages import ShopPage

pytestmark = pytest.mark.e2e


@pytest.fixture
def shop(page: Page, base_url: str) -> ShopPage:
    shop_page = ShopPage(page, base_url)
    shop_page.goto()
    shop_page.wait_for_products_load()
    return shop_page


def test_seeded_products_are_listed(shop: ShopPage) -> None:
    slugs = {card.slug for card in shop.get_products()}
    assert get_in_stock_product().slug in slugs


def test_search_narrows_results(shop: ShopPage) -> None:
    product = get_in_stock_product()

    shop.search(product.name)

    names = [card.name for card in shop.get_products()]
    assert product.name in names


def test_open_product_detail(shop: ShopPage) -> None:
    product = get_in_stock_product()

    shop.open_product(product.name)

    shop.page.wait_for_url(f"**/shop/{product.slug}")
