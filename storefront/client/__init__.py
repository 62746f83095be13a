from storefront.client.api import ApiError, StorefrontClient

__all__ = ["ApiError", "StorefrontClient"]
