"""Hosted product table access"""

from .client import ProductStoreClient, ProductStoreError

__all__ = ["ProductStoreClient", "ProductStoreError"]
