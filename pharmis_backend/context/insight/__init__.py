"""Daily health insight context builders."""

from .builder import InsightContextBuilder
from .context_window import InsightContextWindow, WINDOW_DAYS, window_bounds
from .providers import DailyLogProvider, LifestyleLogProvider
from .prompts import InsightPrompts, NO_INSIGHT_PHRASE

__all__ = [
    "InsightContextBuilder",
    "InsightContextWindow",
    "WINDOW_DAYS",
    "window_bounds",
    "DailyLogProvider",
    "LifestyleLogProvider",
    "InsightPrompts",
    "NO_INSIGHT_PHRASE",
]
