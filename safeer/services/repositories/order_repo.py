"""Order Repository - order and order item inserts and lookups."""

from safeer.services.models import Order, OrderItem
from safeer.services.money import to_float

from .base import BaseRepository


class OrderRepository(BaseRepository):
    """Order database operations."""

    async def create(
        self,
        customer_name: str,
        customer_phone: str,
        customer_address: str,
        total_amount,
        notes: str | None = None,
        payment_method: str = "cashOnDelivery",
    ) -> Order:
        """Insert a pending order and return it with its generated id."""
        data = {
            "customer_name": customer_name,
            "customer_phone": customer_phone,
            "customer_address": customer_address,
            "notes": notes,
            "payment_method": payment_method,
            "total_amount": to_float(total_amount),
            "status": "pending",
        }
        result = await self.client.table("orders").insert(data).execute()
        if not result.data:
            raise RuntimeError("Order insert returned no rows")
        return Order(**result.data[0])

    async def add_items(self, order_id: str, items: list[dict]) -> list[OrderItem]:
        """Insert order lines. Each dict: product_id, product_name, quantity, price."""
        rows = [
            {
                "order_id": order_id,
                "product_id": item.get("product_id"),
                "product_name": item["product_name"],
                "quantity": item["quantity"],
                "price": to_float(item["price"]),
            }
            for item in items
        ]
        result = await self.client.table("order_items").insert(rows).execute()
        return [OrderItem(**row) for row in result.data or []]

    async def get_by_id(self, order_id: str) -> Order | None:
        result = await self.client.table("orders").select("*").eq("id", order_id).execute()
        return Order(**result.data[0]) if result.data else None

    async def get_items(self, order_id: str) -> list[OrderItem]:
        result = await self.client.table("order_items").select("*").eq("order_id", order_id).execute()
        return [OrderItem(**row) for row in result.data or []]
