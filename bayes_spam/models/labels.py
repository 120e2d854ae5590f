"""Class labels shared by training, scoring and evaluation."""

from __future__ import annotations

from enum import Enum
from numbers import Integral


class Label(str, Enum):
    """Binary document class."""

    HAM = "ham"
    SPAM = "spam"

    @property
    def label_id(self) -> int:
        """Numeric id used by the metrics helpers (ham=0, spam=1)."""
        return 1 if self is Label.SPAM else 0

    @classmethod
    def coerce(cls, value) -> "Label":
        """
        Accept a Label, its string value (case-insensitive), a bool
        (True meaning spam) or a numeric id, including numpy integers.

        Raises
        ------
        ValueError
            If the value does not name a known label.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            return cls.SPAM if value else cls.HAM
        if isinstance(value, Integral):
            if value in (0, 1):
                return cls.SPAM if value == 1 else cls.HAM
            raise ValueError(f"Unknown label id: {value!r}")
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise ValueError(f"Unknown label: {value!r}. Expected 'spam' or 'ham'.")
