from . import ledger
from . import models
from . import system
from . import users

__all__ = [
    "ledger",
    "models",
    "system",
    "users",
]
