from __future__ import annotations

import base64
import binascii
from typing import Any

import msgspec

from keyset.app.common.tools import convert_from, msgspec_decoder, msgspec_encoder
from keyset.app.contracts.exceptions import InvalidCursorError
from keyset.app.contracts.pagination import KeysetSpec
from keyset.app.keyset.comparators import coerce
from keyset.shared.types import JsonDumps, JsonLoads


def cursor_encoder(spec: KeysetSpec, row: Any, encoder: JsonDumps = msgspec_encoder) -> str:
    values = {key.name: convert_from(key.value_of(row)) for key in spec}
    encoded = base64.urlsafe_b64encode(encoder(values).encode())

    return encoded.decode()


def cursor_decoder(
    spec: KeysetSpec, value: str, decoder: JsonLoads = msgspec_decoder
) -> dict[str, Any]:
    try:
        decoded = decoder(base64.urlsafe_b64decode(value.encode()).decode())
    except (binascii.Error, UnicodeDecodeError, ValueError, msgspec.DecodeError) as exc:
        raise InvalidCursorError(detail=str(exc)) from exc

    if not isinstance(decoded, dict):
        raise InvalidCursorError("Cursor does not hold a mapping of column values")

    return {
        key.name: coerce(key.reference_value(decoded), key.declared_type, name=key.name)
        for key in spec
    }
