"""
Naming utilities for safe code generation.

Handles case conversion of collection names, best-effort singularization
and quoting of property keys that are not plain identifiers.
"""

import re

# Non-alphanumeric runs separate words: user_profile, blog-post, "my table"
_WORD_SEPARATOR = re.compile(r"[^A-Za-z0-9]+")

# Lower/digit followed by upper starts a new word: userProfile
_CASE_TRANSITION = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")

_SAFE_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

# Nouns that keep their form in the plural
UNCOUNTABLE_NOUNS = frozenset(
    {
        "news",
        "series",
        "species",
        "data",
        "metadata",
        "media",
        "information",
        "equipment",
        "feedback",
    }
)

# "-ses" after any other letter is a plain "-s" plural: courses, cases
_SIBILANT_ENDINGS = ("ss", "us", "x", "z", "ch", "sh")

# A trailing "s" after these is not a plural marker: class, status, analysis
_NON_PLURAL_S_ENDINGS = ("ss", "us", "is")

_STRING_ESCAPES = {
    "\\": "\\\\",
    "'": "\\'",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def split_words(name: str) -> list[str]:
    """Split an identifier-like string into its words."""
    words = []
    for chunk in _WORD_SEPARATOR.split(name):
        words.extend(word for word in _CASE_TRANSITION.split(chunk) if word)
    return words


def pascal_case(name: str) -> str:
    """Convert to PascalCase.

    Each word keeps its remaining letters as written, so ``"userID"``
    becomes ``"UserID"``. Empty input yields an empty string.
    """
    return "".join(word[0].upper() + word[1:] for word in split_words(name))


def singularize(name: str) -> str:
    """
    Best-effort English singularization of a plural collection name.

    This is a heuristic, not a dictionary lookup: irregular plurals
    (``people``, ``children``) and many ``-ies`` words (``movies``) come out
    wrong. An "es" ending is dropped only after ss, us, x, z, ch or sh,
    so "addresses" gives "address" while "courses" gives "course". Names
    that match no rule are returned unchanged.

    Args:
        name: Collection name such as ``"blog_categories"``

    Returns:
        Singular form such as ``"blog_category"``
    """
    words = split_words(name)
    if not words or words[-1].lower() in UNCOUNTABLE_NOUNS:
        return name

    lowered = name.lower()

    if lowered.endswith("ies") and len(name) > 3:
        return name[:-3] + "y"

    if lowered.endswith("es") and lowered[:-2].endswith(_SIBILANT_ENDINGS):
        return name[:-2]

    if (
        len(name) > 1
        and lowered.endswith("s")
        and not lowered.endswith(_NON_PLURAL_S_ENDINGS)
    ):
        return name[:-1]

    return name


def is_safe_identifier(name: str) -> bool:
    """Check whether a name can be emitted as a bare property key."""
    return _SAFE_IDENTIFIER.fullmatch(name) is not None


def quote_string(value: str) -> str:
    """Render a single-quoted string literal."""
    escaped = "".join(_STRING_ESCAPES.get(char, char) for char in value)
    return f"'{escaped}'"


def format_property_key(name: str) -> str:
    """Return the name as-is when it is an identifier, else quoted."""
    if is_safe_identifier(name):
        return name
    return quote_string(name)
