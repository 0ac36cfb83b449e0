"""
Custom exception hierarchy for signing-resolver.
"""


class SigningError(Exception):
    """Base exception for all signing-resolver errors."""
    pass


# === Source Errors ===

class SourceError(SigningError):
    """Base exception for a credential source that could not produce a bundle."""
    def __init__(self, message: str, source: str = ""):
        self.source = source
        super().__init__(message)


class SourceUnavailable(SourceError):
    """The source has nothing to offer (file missing, variables unset)."""
    pass


class SourceMalformed(SourceError):
    """The source exists but its content could not be used."""
    pass


class IncompleteCredentialsError(SourceMalformed):
    """Some, but not all, of the four credential fields were provided."""
    def __init__(self, missing: list[str], source: str = ""):
        self.missing = list(missing)
        where = f" from {source}" if source else ""
        super().__init__(
            f"Incomplete signing credentials{where}: missing {', '.join(self.missing)}",
            source=source,
        )


# === Resolution ===

class AllSourcesExhausted(SigningError):
    """
    No production source produced credentials.

    The resolver never raises this. It builds one to describe why the debug
    identity was used and attaches it to the resolution.
    """
    def __init__(self, reasons: list[str] | None = None):
        self.reasons = list(reasons or [])
        message = "No production keystore found; release will be signed with the debug keystore"
        if self.reasons:
            message += f" ({'; '.join(self.reasons)})"
        super().__init__(message)


# === Config Errors ===

class ConfigError(SigningError):
    """Configuration error."""
    pass


class PropertiesSyntaxError(ValueError):
    """A .properties file could not be parsed."""
    def __init__(self, message: str, lineno: int = 0):
        self.lineno = lineno
        if lineno:
            message = f"line {lineno}: {message}"
        super().__init__(message)
