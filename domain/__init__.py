from .outcome import FailureKind, ScanOutcome
from .product import ConsumerContact, NutritionalInfo, ProductRecord

__all__ = [
    "ConsumerContact",
    "FailureKind",
    "NutritionalInfo",
    "ProductRecord",
    "ScanOutcome",
]
