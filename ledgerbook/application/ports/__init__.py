"""Application ports package."""

from .database import DatabaseEnginePort
from .entity_store import EntityStorePort
from .identity import IdentityProviderPort

__all__ = [
    "DatabaseEnginePort",
    "EntityStorePort",
    "IdentityProviderPort",
]
