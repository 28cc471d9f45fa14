"""file_trash package init"""
from . import archive, config, errors, ids, inventory, models, preview, remover, restorer, selector, utils

__all__ = [
    "archive",
    "config",
    "errors",
    "ids",
    "inventory",
    "models",
    "preview",
    "remover",
    "restorer",
    "selector",
    "utils",
]

__version__ = "0.3.0"
