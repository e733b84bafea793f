"""Custom exceptions for Dispute Delta."""


class DisputeDeltaError(Exception):
    """Base exception for Dispute Delta errors."""


class ConfigurationError(DisputeDeltaError):
    """Raised when a setting cannot be parsed."""

    def __init__(self, setting: str, message: str):
        self.setting = setting
        super().__init__(f"Invalid setting '{setting}': {message}")


class DecodeError(DisputeDeltaError):
    """Raised when a tabular file cannot be decoded into rows."""

    def __init__(self, source: str, message: str):
        self.source = source
        super().__init__(f"Could not decode {source}: {message}")


class UnsupportedFormatError(DecodeError):
    """Raised when no decoder handles the file's extension."""

    def __init__(self, source: str, suffix: str):
        self.suffix = suffix
        super().__init__(
            source,
            f"unsupported file type '{suffix or '(none)'}'. Use .csv, .txt, .xlsx or .xlsm.",
        )
