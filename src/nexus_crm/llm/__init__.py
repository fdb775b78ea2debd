"""Relationship-intelligence backend access."""

from .factory import create_intelligence_service
from .intelligence import IntelligenceService
from .interface import EmailDraft, MeetingSummary, RelationshipIntelligence, SocialUpdate

__all__ = [
    "EmailDraft",
    "IntelligenceService",
    "MeetingSummary",
    "RelationshipIntelligence",
    "SocialUpdate",
    "create_intelligence_service",
]
