from .common import cursor_decoder, cursor_encoder


__all__ = (
    "cursor_decoder",
    "cursor_encoder",
)
