"""Crypto storefront commerce core."""
