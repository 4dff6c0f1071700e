"""Backend-facing services: money, pricing, catalog, checkout, database."""
from .money import format_amount, format_money, round_money, to_decimal
from .pricing import NormalizedPrice, normalize_price

__all__ = [
    "format_amount",
    "format_money",
    "round_money",
    "to_decimal",
    "NormalizedPrice",
    "normalize_price",
]
