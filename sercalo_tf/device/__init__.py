from .tunable_filter import TunableFilter
from .aio import AsyncTunableFilter

__all__ = ["TunableFilter",
           "AsyncTunableFilter"]
