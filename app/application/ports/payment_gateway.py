from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class InvoiceRequest:
    amount_minor_units: int
    currency: int
    reference: str
    description: str
    redirect_url: str
    webhook_url: str
    validity_seconds: int
    basket_item_name: str | None = None


@dataclass(frozen=True)
class Invoice:
    invoice_id: str
    hosted_page_url: str


class PaymentGatewayPort(ABC):
    @abstractmethod
    def create_invoice(self, request: InvoiceRequest) -> Invoice:
        """Open an invoice on the provider. Raises PaymentUpstreamError on failure."""
        raise NotImplementedError
