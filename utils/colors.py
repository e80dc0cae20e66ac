"""Deterministic publisher badge colours."""

from typing import Dict, List, Optional

from models.constants import COLOR_PALETTE


def hash_string(text: str) -> int:
    """
    Non-negative 32-bit string hash (``h = h * 31 + code_unit``).

    Operates on UTF-16 code units so the same publisher maps to the same
    colour as in the browser build of the tool.
    """
    value = 0
    data = text.encode("utf-16-le")
    for i in range(0, len(data), 2):
        code_unit = data[i] | (data[i + 1] << 8)
        value = ((value << 5) - value + code_unit) & 0xFFFFFFFF
    if value >= 0x80000000:
        value -= 0x100000000
    return abs(value)


class SourceColorPicker:
    """Assigns each publisher a palette colour, memoized per name."""

    def __init__(self, palette: Optional[List[str]] = None):
        self.palette = list(palette or COLOR_PALETTE)
        self._cache: Dict[str, str] = {}

    def color_for(self, source: str) -> str:
        """Return the badge colour for ``source`` (first colour if empty)."""
        if not source:
            return self.palette[0]

        if source not in self._cache:
            index = hash_string(source) % len(self.palette)
            self._cache[source] = self.palette[index]

        return self._cache[source]
