# app/services/pricing.py
from decimal import Decimal
from typing import Iterable


def compute_total(cart_items: Iterable) -> Decimal:
    """Suma cost * quantity po pozycjach koszyka (snapshot, bez katalogu)."""
    return sum(
        (Decimal(item.product.cost) * item.quantity for item in cart_items),
        Decimal("0.00"),
    )
