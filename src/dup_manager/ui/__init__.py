"""User interface components (prompts and reporting)."""

from dup_manager.ui.review import GroupOutcome, ReviewDecision, ReviewUI

__all__ = ["GroupOutcome", "ReviewDecision", "ReviewUI"]
