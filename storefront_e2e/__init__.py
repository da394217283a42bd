"""Test-environment bootstrap and browser helpers for the storefront e2e suite."""

__version__ = "1.0.0"
