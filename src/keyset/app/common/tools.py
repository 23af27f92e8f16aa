from __future__ import annotations

import uuid
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Any

import msgspec


BUILTIN_TYPES: tuple[type[Any], ...] = (
    bytes,
    bytearray,
    datetime,
    time,
    date,
    timedelta,
    uuid.UUID,
    Decimal,
)


def convert_to[T](cls: type[T], value: Any, **kw: Any) -> T:
    return msgspec.convert(
        value,
        cls,
        dec_hook=kw.pop("dec_hook", None),
        builtin_types=BUILTIN_TYPES,
        **kw,
    )


def convert_from(value: Any, **kw: Any) -> Any:
    return msgspec.to_builtins(value, **kw)


def msgspec_encoder(obj: Any, *args: Any, **kw: Any) -> str:
    return msgspec.json.encode(obj, *args, **kw).decode(encoding="utf-8")


def msgspec_decoder(obj: Any, *args: Any, **kw: Any) -> Any:
    return msgspec.json.decode(obj, *args, **kw)
