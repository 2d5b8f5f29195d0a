"""Payment signature check (HMAC-SHA256 over "order_id|payment_id").

The gateway signs the pair with the merchant key secret; the server
recomputes and compares in constant time.
"""

import hashlib
import hmac


def compute_payment_signature(order_id: str, payment_id: str, secret: str) -> str:
    """Return the hex HMAC-SHA256 of f"{order_id}|{payment_id}" keyed by secret."""
    message = f"{order_id}|{payment_id}"
    return hmac.new(
        secret.encode("utf-8"),
        message.encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()


def verify_payment_signature(
    order_id: str, payment_id: str, signature: str, secret: str
) -> bool:
    """Return True if signature matches the recomputed HMAC for (order_id, payment_id)."""
    if not signature or not secret:
        return False
    expected = compute_payment_signature(order_id, payment_id, secret)
    return hmac.compare_digest(expected.encode("utf-8"), signature.encode("utf-8"))
