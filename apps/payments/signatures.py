"""
Gateway callback signatures.

The gateway signs ``"<order_id>|<payment_id>"`` with HMAC-SHA256 using the
merchant secret. A callback is genuine only when the signature it carries is
the hex digest of exactly that string.
"""

import hashlib
import hmac


def compute_signature(order_id: str, payment_id: str, secret: str) -> str:
    message = f"{order_id}|{payment_id}"
    return hmac.new(
        secret.encode("utf-8"),
        message.encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()


def verify_signature(order_id: str, payment_id: str, signature: str, secret: str) -> bool:
    if not secret or not signature:
        return False
    expected = compute_signature(order_id, payment_id, secret)
    return hmac.compare_digest(expected.encode("utf-8"), str(signature).encode("utf-8"))
