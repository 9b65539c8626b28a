"""Scoring of listening attempts."""
from .accuracy import accuracy_percent, calculate_accuracy, character_overlap_score

__all__ = ["accuracy_percent", "calculate_accuracy", "character_overlap_score"]
