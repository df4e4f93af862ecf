"""Random text over a fixed alphabet."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from genopt.utils.validation import ConfigurationError, DomainValueError, require_positive_int

DEFAULT_VALID_CHARS = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz "

_CODEC = "utf-32-le"


def _utf32(text: str, name: str, error: type = DomainValueError) -> bytes:
    try:
        return text.encode(_CODEC)
    except UnicodeEncodeError as exc:
        # lone surrogates have no encoding
        raise error("unencodable_text", f"{name} contains a character that cannot be encoded",
                    field=name, position=exc.start) from exc


class RandomTextHelper:
    """Draws characters uniformly from ``valid_chars``.

    Methods use the helper's own generator unless one is passed, which lets a
    strategy draw from per-chunk generators while sharing one alphabet.

    Strings convert to and from arrays of alphabet indices with ``encode`` and
    ``decode``; characters outside the alphabet encode as -1.
    """

    def __init__(self, rng: np.random.Generator | None = None, valid_chars: str = DEFAULT_VALID_CHARS) -> None:
        if not isinstance(valid_chars, str) or not valid_chars:
            raise ConfigurationError("empty_alphabet", "valid_chars must be a non-empty string")
        if len(set(valid_chars)) != len(valid_chars):
            raise ConfigurationError("duplicate_chars", "valid_chars cannot repeat characters",
                                     valid_chars=valid_chars)
        self.rng = rng if rng is not None else np.random.default_rng()
        self.valid_chars = valid_chars
        encoded = _utf32(valid_chars, "valid_chars", ConfigurationError)
        self.codes = np.frombuffer(encoded, dtype=np.uint32).astype(np.int64)
        self._lookup = np.full(int(self.codes.max()) + 1, -1, dtype=np.int64)
        self._lookup[self.codes] = np.arange(len(valid_chars))

    def __len__(self) -> int:
        return len(self.valid_chars)

    def __contains__(self, text: object) -> bool:
        return isinstance(text, str) and all(c in self.valid_chars for c in text)

    def generate_string(self, length: int, rng: np.random.Generator | None = None) -> str:
        length = require_positive_int(length, "length", DomainValueError)
        indices = (rng or self.rng).integers(0, len(self.valid_chars), size=length)
        return self.decode(indices)

    def generate_char(self, rng: np.random.Generator | None = None) -> str:
        return self.valid_chars[int((rng or self.rng).integers(0, len(self.valid_chars)))]

    def encode(self, texts: Sequence[str]) -> np.ndarray:
        """Alphabet indices of equal-length strings as a ``(len(texts), length)`` array."""
        if not texts:
            return np.empty((0, 0), dtype=np.int64)
        length = len(texts[0])
        if any(len(t) != length for t in texts):
            raise DomainValueError("length_mismatch", "Cannot encode strings of different length")
        points = np.frombuffer(_utf32("".join(texts), "text"), dtype=np.uint32).astype(np.int64)
        indices = np.full(points.shape, -1, dtype=np.int64)
        known = points < self._lookup.size
        indices[known] = self._lookup[points[known]]
        return indices.reshape(len(texts), length)

    def decode(self, indices: np.ndarray) -> str:
        """String for a 1-d array of alphabet indices."""
        return from_code_points(self.codes[np.asarray(indices, dtype=np.int64)])


def code_points(texts: Sequence[str]) -> np.ndarray:
    """Unicode code points of equal-length strings, one row per string."""
    length = len(texts[0]) if texts else 0
    points = np.frombuffer(_utf32("".join(texts), "text"), dtype=np.uint32).astype(np.int64)
    return points.reshape(len(texts), length)


def from_code_points(points: np.ndarray) -> str:
    return np.asarray(points).astype(np.uint32).tobytes().decode(_CODEC)


__all__ = ["DEFAULT_VALID_CHARS", "RandomTextHelper", "code_points", "from_code_points"]
