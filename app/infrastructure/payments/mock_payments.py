from __future__ import annotations

import logging
import uuid

from app.application.ports.payment_gateway import Invoice, InvoiceRequest, PaymentGatewayPort


class MockPaymentGateway(PaymentGatewayPort):
    """Issues fake invoices whose hosted page is the redirect URL itself."""

    def __init__(self) -> None:
        self.requests: list[InvoiceRequest] = []
        self._logger = logging.getLogger(__name__)

    def create_invoice(self, request: InvoiceRequest) -> Invoice:
        self.requests.append(request)
        invoice_id = f"mock_inv_{uuid.uuid4().hex[:12]}"
        self._logger.info("Mock invoice created", extra={"invoice_id": invoice_id})
        return Invoice(invoice_id=invoice_id, hosted_page_url=f"{request.redirect_url}?invoiceId={invoice_id}")
