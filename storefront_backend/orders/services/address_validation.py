# orders/services/address_validation.py

"""
SHIPPING ADDRESS RULES

Checked in order; the first violated rule aborts checkout:
1. name, phone, address_line1, city, state, pincode are non-empty
2. phone is exactly 10 digits
3. pincode is exactly 6 digits

address_line2 is optional.
"""

from __future__ import annotations

from orders.models import Address
from orders.services.exceptions import AddressValidationError

REQUIRED_FIELDS = ("name", "phone", "address_line1", "city", "state", "pincode")

MISSING_FIELDS_MESSAGE = "Please fill all required fields"
INVALID_PHONE_MESSAGE = "Please enter a valid 10-digit phone number"
INVALID_PINCODE_MESSAGE = "Please enter a valid 6-digit pincode"


def _clean(value) -> str:
    return str(value or "").strip()


def _digits(value: str, length: int) -> bool:
    return len(value) == length and value.isascii() and value.isdigit()


def validate_address(data: dict) -> Address:
    values = {name: _clean(data.get(name)) for name in REQUIRED_FIELDS}

    for name in REQUIRED_FIELDS:
        if not values[name]:
            raise AddressValidationError(MISSING_FIELDS_MESSAGE, field=name)

    if not _digits(values["phone"], 10):
        raise AddressValidationError(INVALID_PHONE_MESSAGE, field="phone")

    if not _digits(values["pincode"], 6):
        raise AddressValidationError(INVALID_PINCODE_MESSAGE, field="pincode")

    return Address(address_line2=_clean(data.get("address_line2")), **values)
