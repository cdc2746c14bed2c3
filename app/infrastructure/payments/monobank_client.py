from __future__ import annotations

import logging

import httpx

from app.application.exceptions import ConfigurationError, PaymentUpstreamError
from app.application.ports.payment_gateway import Invoice, InvoiceRequest, PaymentGatewayPort
from app.core.config import settings


class MonobankGateway(PaymentGatewayPort):
    def __init__(
        self,
        token: str | None = None,
        base_url: str | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._token = token or settings.MONOBANK_TOKEN
        self._base_url = (base_url or settings.MONOBANK_API_URL).rstrip("/")
        self._client = client or httpx.Client(timeout=10.0)
        self._logger = logging.getLogger(__name__)

    def create_invoice(self, request: InvoiceRequest) -> Invoice:
        if not self._token:
            raise ConfigurationError("Monobank token not configured")

        payload = {
            "amount": request.amount_minor_units,
            "ccy": request.currency,
            "merchantPaymInfo": {
                "reference": request.reference,
                "destination": request.description,
                "comment": request.description,
                "basketOrder": [
                    {
                        "name": request.basket_item_name or request.description,
                        "qty": 1,
                        "sum": request.amount_minor_units,
                        "unit": "pcs",
                    }
                ],
            },
            "redirectUrl": request.redirect_url,
            "webHookUrl": request.webhook_url,
            "validity": request.validity_seconds,
            "paymentType": "debit",
        }
        headers = {"X-Token": self._token, "Content-Type": "application/json"}

        try:
            resp = self._client.post(f"{self._base_url}/api/merchant/invoice/create", json=payload, headers=headers)
        except httpx.HTTPError as e:
            self._logger.error("Monobank unreachable", extra={"error": str(e)})
            raise PaymentUpstreamError("Payment provider unreachable", detail=str(e)) from e

        if resp.status_code >= 400:
            try:
                error_json = resp.json()
            except ValueError:
                error_json = {"errText": resp.text}
            if not isinstance(error_json, dict):
                error_json = {"errText": error_json}
            self._logger.error(
                "Monobank invoice creation failed",
                extra={"status": resp.status_code, "error": error_json.get("errText") or error_json},
            )
            raise PaymentUpstreamError(
                "Failed to create invoice", detail=error_json, status_code=resp.status_code
            )

        try:
            data = resp.json()
            invoice = Invoice(invoice_id=str(data["invoiceId"]), hosted_page_url=str(data["pageUrl"]))
        except (ValueError, KeyError, TypeError) as e:
            raise PaymentUpstreamError("Unexpected invoice response", detail=resp.text) from e

        self._logger.info("Invoice created", extra={"invoice_id": invoice.invoice_id})
        return invoice
