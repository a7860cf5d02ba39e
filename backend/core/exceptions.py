"""Error kinds raised by the inventory core, the store and the catalog proxy.

The router maps each kind onto an HTTP status; nothing below the router
knows about HTTP.
"""

from typing import Dict, Optional


class InventoryError(Exception):
    pass


class ValidationError(InventoryError):
    """Missing or invalid input. ``fields`` maps field name -> missing?"""

    def __init__(self, message: str, fields: Optional[Dict[str, bool]] = None):
        super().__init__(message)
        self.message = message
        self.fields = fields


class InvalidIdentifier(InventoryError):
    def __init__(self, item_id):
        super().__init__(f"Invalid product ID: {item_id!r}")
        self.item_id = item_id


class NotFound(InventoryError):
    pass


class ExpiryUnchanged(NotFound):
    """The record exists but already carries the requested expiry date."""


class EmptyStore(NotFound):
    """Bulk delete found nothing to remove."""


class UpstreamError(InventoryError):
    pass


class StoreError(InventoryError):
    pass
