"""Emotion-based star suggestions."""

from starnamer.suggestions.models import EmotionSuggestion, SuggestionSource
from starnamer.suggestions.resolver import SuggestionResolver

__all__ = ["EmotionSuggestion", "SuggestionResolver", "SuggestionSource"]
