"""Parser: version string to syllable sequence.

Separators carry no information, so parsing starts by throwing away every
character that is not a letter. The remaining letters are segmented by
greedy longest match against the inventory, which is unambiguous because
the inventory is prefix free.
"""

import re

from ..core.errors import UnparseableVersion

_NON_LETTER = re.compile(r"[^a-z]+")


def strip_separators(text):
    """Lower-case and drop everything outside a-z ("Ba. Kat-Lan" -> "bakatlan")."""
    return _NON_LETTER.sub("", text.lower())


def parse_syllables(version, inventory):
    """Split a version string into inventory syllables.

    Args:
        version: Version string, decorated or not, any case.
        inventory: SyllableInventory to match against.

    Returns:
        List of syllables, in order.

    Raises:
        UnparseableVersion: no letters at all, or no syllable matches at
            some position (the exception carries the unmatched remainder).
    """
    clean = strip_separators(version)
    if not clean:
        raise UnparseableVersion(version, "")

    syllables = []
    i = 0
    while i < len(clean):
        # Longest candidate first, then shrink
        for length in range(inventory.max_length, inventory.min_length - 1, -1):
            sub = clean[i:i + length]
            if len(sub) == length and sub in inventory:
                syllables.append(sub)
                i += length
                break
        else:
            raise UnparseableVersion(version, clean[i:])
    return syllables
