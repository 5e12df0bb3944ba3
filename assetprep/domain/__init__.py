"""Domain models and business logic."""

from assetprep.domain.models import Action, ActionPlan, RemoteListing, RemoteObject
from assetprep.domain.services import ActionPlanService

__all__ = [
    "Action",
    "ActionPlan",
    "RemoteObject",
    "RemoteListing",
    "ActionPlanService",
]
