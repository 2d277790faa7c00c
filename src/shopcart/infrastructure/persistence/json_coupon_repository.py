"""JSON-file-backed implementation of CouponRepository."""

from __future__ import annotations

import json
import threading
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from shopcart.domain.model.coupon import Coupon
from shopcart.domain.repository.coupon_repository import CouponRepository


class JsonCouponRepository(CouponRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._io_lock = threading.Lock()
        self._ensure_file()

    # --- CouponRepository interface -------------------------------------------

    def get_by_code(self, code: str) -> Coupon | None:
        with self._io_lock:
            records = self._load_raw()
        for raw in records:
            if raw["code"] == code:
                return self._to_domain(raw)
        return None

    def save(self, coupon: Coupon) -> None:
        with self._io_lock:
            records = [r for r in self._load_raw() if r["code"] != coupon.code]
            records.append(self._to_raw(coupon))
            self._persist_raw(records)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(coupon: Coupon) -> dict:
        return {
            "code": coupon.code,
            "discount": str(coupon.discount),
            "valid_until": coupon.valid_until.isoformat(),
            "max_uses": coupon.max_uses,
            "used_by": list(coupon.used_by),
            "min_purchase": str(coupon.min_purchase),
            "created_at": coupon.created_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Coupon:
        return Coupon(
            code=raw["code"],
            discount=Decimal(raw["discount"]),
            valid_until=datetime.fromisoformat(raw["valid_until"]),
            max_uses=raw.get("max_uses"),
            used_by=list(raw.get("used_by", [])),
            min_purchase=Decimal(raw.get("min_purchase", "0")),
            created_at=datetime.fromisoformat(raw["created_at"]),
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
