"""Catchiness ratings, IPA hints and nicknames for release notes.

Display only: nothing here feeds back into encoding or decoding.
"""

import re
from dataclasses import dataclass, field
from typing import List

from ..engine.parser import parse_syllables

STRONG_CLUSTERS = ("br", "dr", "fl", "gl", "pr", "tr")

RATINGS = (
    (80, "Legendary"),
    (60, "Memorable"),
    (40, "Good"),
    (20, "Plain"),
)

_IPA = str.maketrans({"a": "ə", "e": "ɛ", "i": "ɪ", "o": "ɒ", "u": "ʌ", "r": "ɹ"})
_SEPARATOR_RUN = re.compile(r"[\s.\-~':]+")


@dataclass
class Catchiness:
    score: int
    rating: str
    features: List[str] = field(default_factory=list)


def rate(score):
    for floor, rating in RATINGS:
        if score >= floor:
            return rating
    return "Simple"


def analyze_catchiness(version, context):
    """Score a version on alliteration, rhyme, rhythm and similar features."""
    syllables = parse_syllables(version, context.inventory)
    ph = context.phonotactics
    features = []
    score = 10

    first_letters = [s[0] for s in syllables]
    alliteration = first_letters.count(first_letters[0])
    if alliteration >= 3:
        features.append(f"Alliteration (x{alliteration})")
        score += 20 * alliteration
    elif alliteration == 2:
        features.append("Alliteration (x2)")
        score += 10

    endings = {s[-2:] for s in syllables}
    if len(endings) < len(syllables):
        rhymes = len(syllables) - len(endings)
        features.append(f"Rhyme (x{rhymes})")
        score += 15 * rhymes

    if len(syllables) >= 3 and len({len(s) for s in syllables}) == 1:
        features.append("Rhythmic")
        score += 15

    if len(version) <= 10:
        features.append("Compact")
        score += 10

    clusters = sum(1 for s in syllables if any(c in s for c in STRONG_CLUSTERS))
    if clusters:
        features.append(f"Strong clusters (x{clusters})")
        score += 5 * clusters

    if len(syllables) >= 2:
        first, last = syllables[0], syllables[-1]
        if first == last:
            features.append("Palindromic")
            score += 20
        elif ph.consonant_skeleton(first) == ph.consonant_skeleton(last):
            features.append("Symmetric consonants")
            score += 10

    if ":" in version:
        features.append("Colon separator")
        score += 5
    if "~" in version:
        features.append("Tilde separator")
        score += 5
    if "'" in version:
        features.append("Apostrophe")
        score += 10

    # rating uses the uncapped score
    rating = rate(score)
    return Catchiness(min(100, score), rating, features)


def ipa(version):
    """Rough IPA transcription with "." at every separator."""
    text = version.lower().translate(_IPA)
    return "/" + _SEPARATOR_RUN.sub(".", text) + "/"


def nickname(version, context):
    """Fantasy-style nickname, e.g. "BakatLan the Brave"."""
    syllables = parse_syllables(version, context.inventory)
    result = analyze_catchiness(version, context)
    features = result.features
    base = "".join(s.capitalize() for s in syllables)

    alliterative = any(f.startswith("Alliteration") for f in features)
    if "Palindromic" in features:
        title = "the Mirror"
    elif alliterative:
        title = "the Brave"
    elif any(f.startswith("Rhyme") for f in features):
        title = "the Poet"
    elif any(f.startswith("Strong clusters") for f in features):
        title = "the Bold"
    elif "Compact" in features:
        title = "the Swift"
    else:
        title = "the Wanderer"

    if result.score >= 70:
        if len(syllables) >= 4:
            title += " Walker"
        elif not alliterative:
            title += " Knight"

    return f"{base} {title}"
