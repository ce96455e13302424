from .enums import ErrorCode, ErrorMode, PowerMode
from .uart import BAUD_RATES, PARITIES, Parity

__all__ = ["ErrorCode",
           "ErrorMode",
           "PowerMode",
           "BAUD_RATES",
           "PARITIES",
           "Parity"]
