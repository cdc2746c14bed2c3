from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class PaymentWebhookDTO(BaseModel):
    """Monobank invoice status callback. Unknown fields are kept for logging."""

    model_config = ConfigDict(extra="allow")

    invoiceId: str = Field(min_length=1)
    status: str
    amount: int | None = None
    ccy: int | None = None
    finalAmount: int | None = None
    failureReason: str | None = None
    reference: str | None = None
    createdDate: str | None = None
    modifiedDate: str | None = None
    cancelList: list[dict[str, Any]] = Field(default_factory=list)
