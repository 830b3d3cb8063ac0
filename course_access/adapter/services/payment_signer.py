"""
Payment provider signature.

WayForPay signs requests and callbacks with HMAC over the ';'-joined field
values. The provider mandates MD5; the digest is configurable so a stronger
one can be used wherever the provider allows it.
"""

import hashlib
import hmac
from typing import Iterable


def field_text(value) -> str:
    # JSON numbers arrive as floats; 499.0 must sign as "499"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class HmacPaymentSigner:
    def __init__(self, secret_key: str, algorithm: str = "md5"):
        if algorithm not in hashlib.algorithms_available:
            raise ValueError(f"Unsupported signature algorithm: {algorithm}")
        self.secret_key = secret_key.encode("utf-8")
        self.algorithm = algorithm

    @staticmethod
    def message(fields: Iterable) -> bytes:
        return ";".join(field_text(value) for value in fields).encode("utf-8")

    def sign(self, fields: Iterable) -> str:
        return hmac.new(self.secret_key, self.message(fields), self.algorithm).hexdigest()

    def verify(self, fields: Iterable, signature) -> bool:
        if not signature or not isinstance(signature, str):
            return False
        return hmac.compare_digest(self.sign(fields), signature.lower())
