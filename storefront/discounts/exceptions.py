# storefront/discounts/exceptions.py

class DiscountError(Exception):
    """Base error for the discount subsystem"""

class UnsupportedDiscountKindError(DiscountError):
    """The kind is known but has no rule yet"""

    def __init__(self, kind, message: str):
        super().__init__(message)
        self.kind = kind

class UnrecognizedDiscountKindError(DiscountError):
    """The kind is not one the shop knows about"""

    def __init__(self, kind):
        super().__init__(f"Unrecognized discount kind: {kind}")
        self.kind = kind

class DiscountStorageError(DiscountError):
    """Policy lookup or query failed"""
