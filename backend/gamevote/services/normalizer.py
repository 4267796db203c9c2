"""Game name normalization.

Two policies turn a free-text game name into the key used for dedup:

- ``aggressive``: lower-case, strip diacritics, keep only ``[a-z0-9]`` and
  collapse runs of a repeated character. "Counter-Strike", "counterstrike"
  and "Counter Strike" all become ``counterstrike``. Also over-collapses
  real words: "book" becomes ``bok``.
- ``slug``: lower-case, strip diacritics, keep ``[a-z0-9]`` and whitespace,
  join words with single hyphens. "Counter Strike" becomes
  ``counter-strike`` but "Counter-Strike" becomes ``counterstrike``.

The two are not interchangeable: switching policy on a populated database
changes which names collide.
"""
import re
import unicodedata

AGGRESSIVE = 'aggressive'
SLUG = 'slug'
POLICIES = (AGGRESSIVE, SLUG)

_NOT_ALNUM = re.compile(r'[^a-z0-9]')
_NOT_ALNUM_OR_SPACE = re.compile(r'[^a-z0-9\s]')
_REPEATED_CHAR = re.compile(r'(.)\1+')
_WHITESPACE = re.compile(r'\s+')


def strip_diacritics(text: str) -> str:
    """Decompose to NFD and drop the combining marks."""
    decomposed = unicodedata.normalize('NFD', text)
    return ''.join(ch for ch in decomposed if not unicodedata.combining(ch))


def normalize(raw, policy: str = AGGRESSIVE) -> str:
    """Return the matching key for ``raw``; empty when nothing usable remains."""
    if policy not in POLICIES:
        raise ValueError(f"Unknown name policy: {policy!r}")
    if not raw:
        return ''
    text = strip_diacritics(str(raw).lower())
    if policy == SLUG:
        text = _NOT_ALNUM_OR_SPACE.sub('', text).strip()
        return _WHITESPACE.sub('-', text).strip('-')
    text = _NOT_ALNUM.sub('', text)
    return _REPEATED_CHAR.sub(r'\1', text)


def is_prefix_compatible(a: str, b: str) -> bool:
    """True when one non-empty key is a prefix of the other.

    Not an equivalence relation: "mario" matches both "mariokart" and
    "marioparty", but those two do not match each other.
    """
    if not a or not b:
        return False
    return a.startswith(b) or b.startswith(a)
