from __future__ import annotations

from typing import Mapping, Optional, Union
from urllib.parse import quote

PayloadValue = Optional[Union[str, int]]
Payload = Mapping[str, PayloadValue]

# Characters left unescaped by JavaScript's encodeURIComponent; the merchant
# handler has always been fed this encoding.
_UNRESERVED = "-_.!~*'()"


def _encode(value: Union[str, int]) -> str:
    return quote(str(value), safe=_UNRESERVED)


def encode_payload(payload: Payload) -> str:
    """Serialize ``payload`` as an ``application/x-www-form-urlencoded`` body.

    Fields whose value is ``None`` are dropped before encoding, they never show
    up as empty ``name=`` pairs. The remaining pairs keep the payload's
    iteration order.
    """
    return "&".join(
        f"{_encode(name)}={_encode(value)}"
        for name, value in payload.items()
        if value is not None
    )
