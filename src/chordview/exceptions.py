class ChordViewError(Exception):
    """Base exception for chordview."""


class UnknownModeError(ChordViewError):
    """Raised when a display mode name is not recognized."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown display mode: {name!r}")


class ConfigError(ChordViewError):
    """Raised when a configuration file cannot be loaded."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Config error in {path}: {reason}")
