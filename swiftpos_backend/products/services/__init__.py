from .catalog import (
    CatalogError,
    CatalogService,
    InvalidProductError,
    NegativeStockError,
    ProductNotFoundError,
)

__all__ = [
    "CatalogService",
    "CatalogError",
    "ProductNotFoundError",
    "NegativeStockError",
    "InvalidProductError",
]
