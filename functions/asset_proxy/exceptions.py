class AssetProxyError(Exception):
    pass


class ValidationError(AssetProxyError):
    """The request is malformed and the caller must fix it (400)."""


class StorageError(AssetProxyError):
    """A put or delete against the bucket failed (500)."""
