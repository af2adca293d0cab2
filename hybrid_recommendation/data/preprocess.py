from typing import Optional, Set

MIN_SHARED_WORD_LENGTH = 4


def normalize_text(text: Optional[str]) -> str:
    if not text:
        return ""
    return text.strip().lower()


def description_words(text: Optional[str]) -> Set[str]:
    """Lowercased whitespace tokens long enough to count as a shared keyword."""
    return {w for w in normalize_text(text).split() if len(w) >= MIN_SHARED_WORD_LENGTH}
