"""
conftest.py - shared fixtures for the listening engine tests.
"""
from types import MappingProxyType

import pytest

from listening_core.lexicon import DEFAULT_LEXICON, Lexicon


# =============================================================================
# MARKERS
# =============================================================================

def pytest_configure(config):
    config.addinivalue_line("markers", "crosscheck: comparisons against the jiwer reference implementation")


# =============================================================================
# SHARED FIXTURES
# =============================================================================

SCENARIO_REFERENCE = "I am going to the store"
SCENARIO_ATTEMPT = "im gonna the store"

FOX_SENTENCE = "the quick brown fox jumps over the lazy old dog"


@pytest.fixture
def fox_sentence():
    return FOX_SENTENCE


@pytest.fixture
def tiny_lexicon():
    """A lexicon with a single casual reduction and no phrase patterns."""
    return Lexicon(
        function_words=frozenset({"the", "a", "to"}),
        contractions=frozenset({"i'm"}),
        casual_reductions=MappingProxyType({"going to": "gonna"}),
        contracted_phrases=MappingProxyType({}),
        sound_alike_groups=(),
        phrase_patterns=(),
    )


@pytest.fixture
def default_lexicon():
    return DEFAULT_LEXICON


@pytest.fixture
def recording_hasher():
    """Hasher that records every field dict it is given."""
    calls = []

    def hasher(fields):
        calls.append(dict(fields))
        return f"h{len(calls):011d}"

    hasher.calls = calls
    return hasher
