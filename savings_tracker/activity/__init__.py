"""Activity logging package."""

from savings_tracker.activity.logger import ActivityLogger

__all__ = ["ActivityLogger"]
