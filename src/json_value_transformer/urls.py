"""URL value produced by the ``string → url`` rule."""

from __future__ import annotations

from typing import Any
from urllib.parse import SplitResult, urlsplit


class URLValue(SplitResult):
    """A ``SplitResult`` that remembers the exact text it was parsed from.

    ``urlsplit``/``urlunsplit`` lowercase the scheme and drop an empty ``?``
    or ``#``; ``geturl`` here returns the original text instead.
    """

    text: str

    def __new__(cls, text: str) -> URLValue:
        self = super().__new__(cls, *urlsplit(text))
        self.text = text
        return self

    def geturl(self) -> str:
        return self.text

    def __getnewargs__(self) -> tuple[str]:
        return (self.text,)

    def _replace(self, **kwargs: Any) -> SplitResult:
        # edited parts no longer match self.text
        return SplitResult(*self)._replace(**kwargs)
