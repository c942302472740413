# storefront/__init__.py
"""Storefront discount engine"""
__version__ = "0.1.0"
