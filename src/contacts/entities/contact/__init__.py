"""Entity package: Contact (with its owned Phones)."""

from .entity import PHONE_TYPES, Contact, ContactAttributes, Phone, PhoneAttributes
from .repository import ContactRepository
from .table import ContactTable, PhoneTable

__all__ = [
    "PHONE_TYPES",
    "Contact",
    "ContactAttributes",
    "ContactRepository",
    "ContactTable",
    "Phone",
    "PhoneAttributes",
    "PhoneTable",
]
