"""
Domain models — Pydantic types for nixdots.

All models are re-exported here for convenient access:

    from nixdots.core.models import Action, Receipt, Settings, GeneratedFile
"""

from nixdots.core.models.action import Action, Receipt
from nixdots.core.models.settings import Settings
from nixdots.core.models.template import GeneratedFile

__all__ = [
    "Action",
    "GeneratedFile",
    "Receipt",
    "Settings",
]
