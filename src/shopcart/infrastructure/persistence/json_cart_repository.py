"""JSON-file-backed implementation of CartRepository."""

from __future__ import annotations

import json
import threading
from datetime import datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path

from shopcart.domain.model.cart import AppliedCoupon, Cart, CartLineItem, CartStatus
from shopcart.domain.repository.cart_repository import CartRepository


def _decode_amount(value: object) -> Decimal:
    """Decode a stored amount; unreadable values become NaN."""
    try:
        return Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        return Decimal("NaN")


class JsonCartRepository(CartRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._io_lock = threading.Lock()
        self._ensure_file()

    # --- CartRepository interface ---------------------------------------------

    def get_active_for_user(self, user_id: str) -> Cart | None:
        with self._io_lock:
            records = self._load_raw()
        for raw in records:
            if raw["user_id"] == user_id and raw["status"] == CartStatus.ACTIVE.value:
                return self._to_domain(raw)
        return None

    def save(self, cart: Cart) -> None:
        with self._io_lock:
            records = self._load_raw()

            # Upsert: replace if exists, otherwise append
            replaced = False
            for i, raw in enumerate(records):
                if raw["id"] == cart.id:
                    records[i] = self._to_raw(cart)
                    replaced = True
                    break
            if not replaced:
                records.append(self._to_raw(cart))

            self._persist_raw(records)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(cart: Cart) -> dict:
        coupon = cart.applied_coupon
        return {
            "id": cart.id,
            "user_id": cart.user_id,
            "status": cart.status.value,
            "items": [
                {
                    "product_id": item.product_id,
                    "quantity": item.quantity,
                    "size": item.size,
                    "color": item.color,
                    "price": str(item.price),
                    "subtotal": str(item.subtotal),
                }
                for item in cart.items
            ],
            "applied_coupon": (
                {"code": coupon.code, "discount": str(coupon.discount)}
                if coupon
                else None
            ),
            "total_amount": str(cart.total_amount),
            "total_items": cart.total_items,
            "last_updated": cart.last_updated.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Cart:
        # A corrupt amount such as "NaN" or "abc" loads as NaN and is
        # neutralized by the aggregate when totals are recomputed.
        items = [
            CartLineItem(
                product_id=i["product_id"],
                quantity=i["quantity"],
                price=_decode_amount(i["price"]),
                subtotal=_decode_amount(i["subtotal"]),
                size=i.get("size"),
                color=i.get("color"),
            )
            for i in raw["items"]
        ]
        coupon = raw.get("applied_coupon")
        return Cart(
            id=raw["id"],
            user_id=raw["user_id"],
            items=items,
            status=CartStatus(raw["status"]),
            applied_coupon=(
                AppliedCoupon(coupon["code"], _decode_amount(coupon["discount"]))
                if coupon
                else None
            ),
            total_amount=_decode_amount(raw.get("total_amount", "0")),
            total_items=raw.get("total_items", 0),
            last_updated=datetime.fromisoformat(raw["last_updated"]),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, records: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(records, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
