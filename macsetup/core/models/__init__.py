"""
Domain models for macsetup.

All models are re-exported here for convenient access:

    from macsetup.core.models import Catalog, Item, InstallResult, Settings
"""

from macsetup.core.models.action import CommandResult, InstallResult
from macsetup.core.models.item import (
    Catalog,
    Category,
    InstallAction,
    Item,
    Signal,
    all_of,
    any_of,
)
from macsetup.core.models.settings import (
    GitIdentity,
    PathSettings,
    Settings,
    UninstallSettings,
)

__all__ = [
    # item.py
    "Catalog",
    "Category",
    "InstallAction",
    "Item",
    "Signal",
    "all_of",
    "any_of",
    # action.py
    "CommandResult",
    "InstallResult",
    # settings.py
    "GitIdentity",
    "PathSettings",
    "Settings",
    "UninstallSettings",
]
