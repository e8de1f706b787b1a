"""Mutable string value produced by the ``string → mutable-string`` rule."""

from __future__ import annotations

from collections import UserString
from typing import Any


class MutableString(UserString):
    """A ``UserString`` whose contents can be changed in place.

    Compares equal to ``str`` with the same text.  Unhashable, like every
    other mutable container.
    """

    __hash__ = None  # type: ignore[assignment]

    def __iadd__(self, other: Any) -> MutableString:
        self.data += str(other)
        return self

    def __setitem__(self, index: int | slice, value: Any) -> None:
        chars = list(self.data)
        chars[index] = str(value) if isinstance(index, int) else list(str(value))
        self.data = "".join(chars)

    def __delitem__(self, index: int | slice) -> None:
        chars = list(self.data)
        del chars[index]
        self.data = "".join(chars)

    def append(self, text: Any) -> None:
        self.data += str(text)

    def insert(self, index: int, text: Any) -> None:
        self.data = self.data[:index] + str(text) + self.data[index:]

    def clear(self) -> None:
        self.data = ""
