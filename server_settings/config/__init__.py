from .address import DEFAULT_PORT, Address
from .freezable_model import FreezableModel
from .mode import Mode
from .settings import Settings

__all__ = (
    "Address",
    "DEFAULT_PORT",
    "FreezableModel",
    "Mode",
    "Settings",
)
