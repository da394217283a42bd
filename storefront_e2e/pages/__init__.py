from storefront_e2e.pages.activation import ActivationPage
from storefront_e2e.pages.base import BasePage
from storefront_e2e.pages.login import LoginPage
from storefront_e2e.pages.password_reset import ForgotPasswordPage, ResetPasswordPage
from storefront_e2e.pages.shop import ProductCard, ShopPage

__all__ = [
    "ActivationPage",
    "BasePage",
    "ForgotPasswordPage",
    "LoginPage",
    "ProductCard",
    "ResetPasswordPage",
    "ShopPage",
]
