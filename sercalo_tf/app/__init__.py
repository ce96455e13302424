from .config import TunableFilterConfig, load_config
from .factory import create, open_device

__all__ = ["TunableFilterConfig",
           "load_config",
           "create",
           "open_device"]
