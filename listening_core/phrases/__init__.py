"""Phrase-level grouping of alignment errors."""
from .spans import attach_phrase_spans, cluster_events, find_pattern_span, span_id

__all__ = ["attach_phrase_spans", "cluster_events", "find_pattern_span", "span_id"]
