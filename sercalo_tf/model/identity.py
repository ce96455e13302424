from __future__ import annotations

import re
from dataclasses import dataclass

from sercalo_tf.core.errors import MalformedResponse

_ID_RE = re.compile(r"(?P<pn>\S+)\|(?P<sn>\S*)\|(?P<ver>\S*)")


@dataclass(frozen=True)
class DeviceIdentity:
    """
    Identification reported by the `ID` command.

    The device answers `<product>|<serial>|<firmware>`; serial and firmware may
    be empty.
    """

    product_name: str
    serial_number: str
    firmware_version: str

    @classmethod
    def from_id_string(cls, text: str) -> "DeviceIdentity":
        m = _ID_RE.search(text)
        if m is None:
            raise MalformedResponse(
                f"Cannot parse device identification {text!r}.",
                details={"response": text},
            )
        return cls(
            product_name=m.group("pn"),
            serial_number=m.group("sn"),
            firmware_version=m.group("ver"),
        )
