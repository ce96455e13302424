# sercalo_tf/protocol/error_map.py
from __future__ import annotations

import re
from typing import Union

from sercalo_tf.core.errors import DeviceError
from sercalo_tf.model.enums import ErrorCode, describe

_ERR_RE = re.compile(r"^ERR (?:(?P<n>\d+)|(?P<t>.+))$")


def classify(response: str) -> Union[str, DeviceError]:
    """
    Classify a stripped response line.

    Returns a DeviceError (not raised) for `ERR <n>` / `ERR <text>` frames and
    the response unchanged for anything else.
    """
    m = _ERR_RE.match(response)
    if m is None:
        return response

    if m.group("n") is not None:
        number = int(m.group("n"))
        code = ErrorCode.from_number(number)
        if code is ErrorCode.UNKNOWN and number != int(ErrorCode.UNKNOWN):
            return DeviceError(
                f"Device error {number} (unknown code).",
                error_code=ErrorCode.UNKNOWN,
                description=None,
                number=number,
                details={"response": response},
            )
        description = describe(code)
        return DeviceError(
            description or f"Device error {number}.",
            error_code=code,
            description=description,
            number=number,
            details={"response": response},
        )

    text = m.group("t")
    return DeviceError(
        text,
        error_code=ErrorCode.UNKNOWN,
        details={"response": response},
    )


def raise_if_error(response: str) -> str:
    """Raise the DeviceError for an `ERR` frame, otherwise return the response."""
    result = classify(response)
    if isinstance(result, DeviceError):
        raise result
    return result
