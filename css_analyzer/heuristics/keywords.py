"""Case-insensitive keyword sets."""

from collections.abc import Iterable


class KeywordSet(frozenset):
    """A frozenset of lowercase keywords with case-insensitive lookups.

    Example:
        >>> "ReD" in KeywordSet(["red"])
        True
    """

    def __new__(cls, keywords: Iterable[str]) -> "KeywordSet":
        return super().__new__(cls, (keyword.lower() for keyword in keywords))

    def __contains__(self, keyword: object) -> bool:
        if not isinstance(keyword, str):
            return False
        return super().__contains__(keyword.lower())
