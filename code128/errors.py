"""
code128.errors - Exception hierarchy for the encoder.
"""


class Code128Error(ValueError):
    """Base class for every encoder failure."""


class PatternError(Code128Error):
    """Symbol value has no pattern in the Code 128 table."""

    def __init__(self, value: int):
        super().__init__(f"no Code 128 pattern for value {value}")
        self.value = value


class UnencodableCharacterError(Code128Error):
    """Character falls outside Code Set B (ASCII 32-126)."""

    def __init__(self, char: str, position: int):
        super().__init__(
            f"character {char!r} at position {position} is not in Code Set B"
        )
        self.char = char
        self.position = position
