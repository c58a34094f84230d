"""Category label normalization.

Category names are free text and are often prefixed with an emoji
("🍔 Food"). Grouping uses the label with that prefix removed, so that
"🍔 Food" and "Food" land in the same bucket.

Emoji are recognised by code-point block rather than by Unicode category
alone: emoji added after the interpreter's Unicode tables were built report
as unassigned, and categories such as Sk also cover ASCII ("^", "`").
"""

import unicodedata

UNCATEGORIZED = "Sin categoría"

# Zero-width joiner, variation selectors, combining keycap
_EMOJI_JOINERS = frozenset({"\u200d", "\ufe0e", "\ufe0f", "\u20e3"})
_KEYCAP_BASES = frozenset("0123456789#*")

_PICTOGRAPHIC_BLOCKS = (
    (0x1F000, 0x1FAFF),  # Mahjong .. Symbols and Pictographs Extended-A
    (0x2600, 0x27BF),  # Miscellaneous Symbols, Dingbats
    (0x2B00, 0x2BFF),  # Arrows and stars (⭐, ⬛)
    (0xE0020, 0xE007F),  # Tag characters (subdivision flags)
)


def _is_pictographic(char: str) -> bool:
    if char in _EMOJI_JOINERS:
        return True
    code = ord(char)
    if any(low <= code <= high for low, high in _PICTOGRAPHIC_BLOCKS):
        return True
    # Other symbols outside ASCII/Latin-1 (⌚, ™, ⏰)
    return code >= 0x2000 and unicodedata.category(char) == "So"


def _keycap_length(label: str, index: int) -> int:
    """Length of a keycap sequence ("1️⃣") starting at index, 0 if none."""
    if label[index] not in _KEYCAP_BASES:
        return 0
    if label[index + 1 : index + 3] == "\ufe0f\u20e3":
        return 3
    if label[index + 1 : index + 2] == "\u20e3":
        return 2
    return 0


def category_label(category: str | None) -> str:
    """Display label for a category, "Sin categoría" when empty."""
    if category is None or not category.strip():
        return UNCATEGORIZED
    return category.strip()


def strip_emoji_prefix(label: str) -> str:
    """Remove a leading run of emoji (and the whitespace after it).

    A label made only of emoji is returned unchanged (trimmed), so that it
    still has a usable key.
    """
    index = 0
    while index < len(label):
        keycap = _keycap_length(label, index)
        if keycap:
            index += keycap
        elif _is_pictographic(label[index]):
            index += 1
        else:
            break
    if index == 0:
        return label.strip()
    return label[index:].strip() or label.strip()


def category_key(category: str | None) -> str:
    """Canonical grouping key for a movement category."""
    return strip_emoji_prefix(category_label(category))
