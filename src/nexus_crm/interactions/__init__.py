"""Interaction logging."""

from .logger import MeetingAnalysis, analyze_notes, log_interaction, suggest_next_date

__all__ = ["MeetingAnalysis", "analyze_notes", "log_interaction", "suggest_next_date"]
