from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SessionType:
    key: str
    display_name: str
    price: int  # full session price, major currency units
    deposit_percent: int = 30
    duration_minutes: int = 120
    description: str | None = None

    def deposit_amount(self) -> int:
        return round(self.price * self.deposit_percent / 100)
