"""
Domain models — Pydantic types for the scaffolder.

All models are re-exported here for convenient access:

    from alterforge.core.models import ServiceDescriptor, Feature, Receipt
"""

from alterforge.core.models.action import Action, Receipt
from alterforge.core.models.project import ProjectLayout
from alterforge.core.models.service import (
    DATABASE_PROFILES,
    Database,
    DatabaseProfile,
    Feature,
    Frontend,
    ResolvedFeatures,
    ServiceDescriptor,
    database_profile,
)
from alterforge.core.models.settings import Settings
from alterforge.core.models.template import GeneratedFile

__all__ = [
    # action.py
    "Action",
    "Receipt",
    # project.py
    "ProjectLayout",
    # service.py
    "DATABASE_PROFILES",
    "Database",
    "DatabaseProfile",
    "Feature",
    "Frontend",
    "ResolvedFeatures",
    "ServiceDescriptor",
    "database_profile",
    # settings.py
    "Settings",
    # template.py
    "GeneratedFile",
]
