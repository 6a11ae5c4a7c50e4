"""Storefront ordering service."""
