from __future__ import annotations

import base64
import binascii
import logging

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec


logger = logging.getLogger(__name__)


def load_public_key(public_key_b64: str) -> ec.EllipticCurvePublicKey:
    """Monobank publishes its webhook key as base64 of a PEM document."""
    pem = base64.b64decode(public_key_b64)
    key = serialization.load_pem_public_key(pem)
    if not isinstance(key, ec.EllipticCurvePublicKey):
        raise ValueError("Monobank public key is not an EC key")
    return key


def verify_x_sign(body: bytes, signature_header: str | None, public_key_b64: str | None, env: str) -> bool:
    if not signature_header:
        if env.lower() in {"dev", "local"}:
            logger.warning("Missing X-Sign header; accepting in dev mode")
            return True
        return False

    if not public_key_b64:
        logger.error("Missing MONOBANK_PUBLIC_KEY for signature verification")
        return False

    try:
        key = load_public_key(public_key_b64)
        signature = base64.b64decode(signature_header)
    except (ValueError, binascii.Error) as e:
        logger.error("Cannot decode webhook signature material", extra={"error": str(e)})
        return False

    try:
        key.verify(signature, body, ec.ECDSA(hashes.SHA256()))
    except InvalidSignature:
        return False
    return True
