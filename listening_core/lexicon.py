"""Word tables shared by the confidence gate, phrase spans and the classifier.

A :class:`Lexicon` is immutable. Pass a custom instance to the engine entry
points to swap the tables without touching module state.
"""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, FrozenSet, List, Mapping, Tuple


# canonical contraction -> expanded meaning
CONTRACTIONS: Dict[str, str] = {
    "i'm": "i am",
    "i'll": "i will",
    "i'd": "i would",
    "i've": "i have",
    "you're": "you are",
    "you'll": "you will",
    "you'd": "you would",
    "you've": "you have",
    "we're": "we are",
    "we'll": "we will",
    "we'd": "we would",
    "we've": "we have",
    "they're": "they are",
    "they'll": "they will",
    "they'd": "they would",
    "they've": "they have",
    "it's": "it is",
    "it'll": "it will",
    "it'd": "it would",
    "that's": "that is",
    "that'll": "that will",
    "what's": "what is",
    "what'll": "what will",
    "who's": "who is",
    "who'll": "who will",
    "he's": "he is",
    "she's": "she is",
    "don't": "do not",
    "doesn't": "does not",
    "didn't": "did not",
    "can't": "cannot",
    "won't": "will not",
    "wouldn't": "would not",
    "shouldn't": "should not",
    "couldn't": "could not",
    "aren't": "are not",
    "isn't": "is not",
    "wasn't": "was not",
    "weren't": "were not",
    "hasn't": "has not",
    "haven't": "have not",
    "hadn't": "had not",
}

FUNCTION_WORDS = frozenset({
    "a", "an", "the",
    "is", "are", "was", "were", "be", "been",
    "have", "has", "had",
    "do", "does", "did",
    "will", "would", "could", "should",
    "to", "for", "of", "in", "on", "at", "by", "with",
    "and", "or", "but",
    "this", "that", "these", "those",
    "i", "you", "he", "she", "it", "we", "they",
    "my", "your", "his", "her", "its", "our", "their",
    "please", "thanks", "thank",
})

# contractions the normalizer has no split rule for, but learners still drop
_EXTRA_CONTRACTIONS = frozenset({"he'll", "she'll", "he'd", "she'd"})

# full phrase -> casual spoken form
CASUAL_REDUCTIONS: Dict[str, str] = {
    "going to": "gonna",
    "want to": "wanna",
    "got to": "gotta",
    "kind of": "kinda",
    "sort of": "sorta",
    "give me": "gimme",
    "let me": "lemme",
}

# full phrase -> contracted form
CONTRACTED_PHRASES: Dict[str, str] = {"what are": "what're"}
CONTRACTED_PHRASES.update({expanded: canonical for canonical, expanded in CONTRACTIONS.items()})

SOUND_ALIKE_GROUPS: Tuple[FrozenSet[str], ...] = (
    frozenset({"a", "the"}),
    frozenset({"an", "a"}),
    frozenset({"is", "it's"}),
    frozenset({"are", "our"}),
    frozenset({"your", "you're"}),
    frozenset({"their", "there"}),
    frozenset({"to", "too", "two"}),
    frozenset({"hear", "here"}),
    frozenset({"know", "no"}),
)

# chunks that are heard as one unit even when only one word is lost
PHRASE_PATTERNS: Tuple[Tuple[str, ...], ...] = (
    ("want", "to"),
    ("going", "to"),
    ("got", "to"),
    ("have", "to"),
    ("it'll", "be"),
    ("catch", "up"),
    ("hang", "out"),
    ("pick", "up"),
    ("grab", "a"),
    ("grab", "some"),
    ("what", "do", "you", "say"),
)


@dataclass(frozen=True)
class Lexicon:
    """Immutable bundle of the word tables used for diagnosis.

    Attributes:
        function_words: Articles, auxiliaries, prepositions and pronouns
        contractions: Canonical contracted forms ("i'm", "don't")
        casual_reductions: Full phrase to casual form ("going to" -> "gonna")
        contracted_phrases: Full phrase to contraction ("i am" -> "i'm")
        sound_alike_groups: Words commonly confused by ear
        phrase_patterns: Multi-word chunks used for phrase hints
    """
    function_words: FrozenSet[str]
    contractions: FrozenSet[str]
    casual_reductions: Mapping[str, str]
    contracted_phrases: Mapping[str, str]
    sound_alike_groups: Tuple[FrozenSet[str], ...]
    phrase_patterns: Tuple[Tuple[str, ...], ...]

    @property
    def reduced_forms(self) -> Dict[str, str]:
        """Every full phrase mapped to its reduced spoken form."""
        merged = dict(self.casual_reductions)
        merged.update(self.contracted_phrases)
        return merged

    @property
    def reduced_words(self) -> FrozenSet[str]:
        return frozenset(self.reduced_forms.values())

    def is_function_word(self, word: str) -> bool:
        return word.lower() in self.function_words

    def is_contraction(self, word: str) -> bool:
        return word.lower() in self.contractions

    def expansions_of(self, word: str) -> List[Tuple[str, ...]]:
        """Multi-word phrases that ``word`` is a reduced form of."""
        word = word.lower()
        return [
            tuple(full.split())
            for full, reduced in self.reduced_forms.items()
            if reduced == word and len(full.split()) > 1
        ]


DEFAULT_LEXICON = Lexicon(
    function_words=FUNCTION_WORDS,
    contractions=frozenset(CONTRACTIONS) | _EXTRA_CONTRACTIONS,
    casual_reductions=MappingProxyType(dict(CASUAL_REDUCTIONS)),
    contracted_phrases=MappingProxyType(dict(CONTRACTED_PHRASES)),
    sound_alike_groups=SOUND_ALIKE_GROUPS,
    phrase_patterns=PHRASE_PATTERNS,
)
