"""
Customer and address reconciliation

Merges the customer sheet row, the Shopify customer object and the order's own
contact/address fields into one normalized record. Precedence is applied per
field, so a result can mix values from different sources. Empty strings count
as missing.
"""

from typing import Any, Dict, List, Mapping, Optional

ADDRESS_FIELDS = (
    "first_name",
    "last_name",
    "company",
    "address1",
    "address2",
    "city",
    "province",
    "zip",
    "country",
    "phone",
)


def _present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip() != ""
    return True


def first_present(*values: Any) -> Any:
    """First value that is neither None nor blank, else None"""
    for value in values:
        if _present(value):
            return value
    return None


def build_full_name(first_name: Optional[str], last_name: Optional[str]) -> Optional[str]:
    """Space-joined non-empty name parts, or None when both are missing"""
    parts = [part for part in (first_name, last_name) if _present(part)]
    if not parts:
        return None
    return " ".join(parts)


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def reconcile_customer(
    order: Mapping[str, Any], sheet_entry: Optional[Mapping[str, Any]] = None
) -> Dict[str, Any]:
    """Normalized customer record: sheet, then Shopify customer, then order-level fallbacks"""
    sheet = _mapping(sheet_entry)
    customer = _mapping(order.get("customer"))
    shipping = _mapping(order.get("shipping_address"))
    billing = _mapping(order.get("billing_address"))

    first_name = first_present(
        sheet.get("first_name"),
        customer.get("first_name"),
        shipping.get("first_name"),
        billing.get("first_name"),
    )
    last_name = first_present(
        sheet.get("last_name"),
        customer.get("last_name"),
        shipping.get("last_name"),
        billing.get("last_name"),
    )

    return {
        "id": first_present(customer.get("id")),
        "email": first_present(
            sheet.get("email"),
            customer.get("email"),
            order.get("email"),
            order.get("contact_email"),
        ),
        "first_name": first_name,
        "last_name": last_name,
        "full_name": build_full_name(first_name, last_name),
        "phone": first_present(
            sheet.get("phone"),
            customer.get("phone"),
            order.get("phone"),
            shipping.get("phone"),
            billing.get("phone"),
        ),
        "accepts_marketing": bool(customer.get("accepts_marketing") or False),
    }


def reconcile_shipping_address(
    order: Mapping[str, Any], sheet_entry: Optional[Mapping[str, Any]] = None
) -> Dict[str, Any]:
    """
    Normalized shipping address: sheet, then order shipping address, then
    customer default address, then billing address

    Unlike the customer fields, the order's own ship-to outranks the platform
    customer record here.
    """
    sheet = _mapping(sheet_entry)
    layers: List[Mapping[str, Any]] = [
        sheet,
        _mapping(order.get("shipping_address")),
        _mapping(_mapping(order.get("customer")).get("default_address")),
        _mapping(order.get("billing_address")),
    ]

    address = {
        field: first_present(*(layer.get(field) for layer in layers))
        for field in ADDRESS_FIELDS
    }
    address["name"] = build_full_name(address["first_name"], address["last_name"])
    return address


def has_address_data(address: Mapping[str, Any]) -> bool:
    return any(_present(value) for value in address.values())
