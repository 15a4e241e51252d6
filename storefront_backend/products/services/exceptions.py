# products/services/exceptions.py


class CatalogError(Exception):
    pass


class ProductNotFoundError(CatalogError):
    pass
