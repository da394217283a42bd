import re

from playwright.sync_api import Locator
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError
from pydantic import BaseModel

from storefront_e2e.pages.base import BasePage


class ProductCard(BaseModel):
    name: str
    slug: str


class ShopPage(BasePage):
    path = "/shop"

    @property
    def page_heading(self) -> Locator:
        return self.page.get_by_role("heading", name="Products", level=1)

    @property
    def search_input(self) -> Locator:
        return self.page.get_by_role("textbox", name="Search Products")

    @property
    def product_cards(self) -> Locator:
        return self.page.get_by_role("link", name=re.compile("View details for", re.IGNORECASE))

    @property
    def loading_status(self) -> Locator:
        return self.page.get_by_role("status").filter(
            has_text=re.compile("loading", re.IGNORECASE)
        )

    def wait_for_products_load(self, timeout: float = 15_000) -> None:
        """Wait for the loading indicator to clear and at least one card to render."""
        try:
            self.loading_status.wait_for(state="hidden", timeout=timeout)
        except PlaywrightTimeoutError:
            pass
        self.product_cards.first.wait_for(state="visible", timeout=timeout)

    def search(self, query: str) -> None:
        self.search_input.fill(query)
        self.search_input.press("Enter")
        self.wait_for_products_load()

    def get_products(self) -> list[ProductCard]:
        self.wait_for_products_load()
        products = []
        for card in self.product_cards.all():
            href = card.get_attribute("href") or ""
            name = card.get_by_role("heading", level=5).text_content() or ""
            products.append(ProductCard(name=name.strip(), slug=href.removeprefix("/shop/")))
        return products

    def open_product(self, name: str) -> None:
        self.page.get_by_role("link", name=f"View details for {name}").first.click()
        self.wait_for_page_load()
