# protocol/__init__.py

from .guard import ExclusiveAccessGuard
from .engine import ExchangeSession, QueryEngine, strip_response
from .error_map import classify, raise_if_error
from .codec import Position, ValueCodec, decode_position, encode_position

__all__ = [
    "ExclusiveAccessGuard",
    "ExchangeSession", "QueryEngine", "strip_response",
    "classify", "raise_if_error",
    "Position", "ValueCodec", "decode_position", "encode_position",
]
