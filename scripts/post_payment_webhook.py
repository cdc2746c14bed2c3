#!/usr/bin/env python3
from __future__ import annotations

import argparse
import base64
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import httpx
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from httpx import ConnectError


def build_payload(invoice_id: str, status: str, amount: int) -> dict[str, Any]:
    now = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    return {
        "invoiceId": invoice_id,
        "status": status,
        "amount": amount,
        "ccy": 980,
        "finalAmount": amount if status == "success" else 0,
        "createdDate": now,
        "modifiedDate": now,
    }


def sign_body(private_key_path: str, body: bytes) -> str:
    """X-Sign header value: base64 ECDSA/SHA256 signature of the raw body."""
    key = serialization.load_pem_private_key(Path(private_key_path).read_bytes(), password=None)
    if not isinstance(key, ec.EllipticCurvePrivateKey):
        raise SystemExit("Signing key must be an EC private key")
    return base64.b64encode(key.sign(body, ec.ECDSA(hashes.SHA256()))).decode("ascii")


def main() -> None:
    parser = argparse.ArgumentParser(description="Send a test Monobank payment webhook POST")
    parser.add_argument("invoice_id")
    parser.add_argument("--url", default="http://127.0.0.1:8000/payment-webhook")
    parser.add_argument("--status", default="success", help="success, failure, reversed, expired, processing...")
    parser.add_argument("--amount", type=int, default=90000, help="minor units")
    parser.add_argument("--key", default="", help="PEM EC private key matching MONOBANK_PUBLIC_KEY")
    args = parser.parse_args()

    body = json.dumps(build_payload(args.invoice_id, args.status, args.amount)).encode("utf-8")

    headers = {"Content-Type": "application/json"}
    if args.key:
        headers["X-Sign"] = sign_body(args.key, body)

    try:
        resp = httpx.post(args.url, content=body, headers=headers, timeout=10.0)
    except ConnectError:
        print("Connection refused. Is the FastAPI server running?")
        print("Try: uvicorn app.main:app --reload --port 8000")
        return

    print(resp.status_code)
    if resp.text:
        print(resp.text)


if __name__ == "__main__":
    main()
