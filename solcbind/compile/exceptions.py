

class EncodeError(ValueError):
    """Raised when a compilation input cannot be rendered as a Standard JSON input document."""


class DecodeError(RuntimeError):
    """Raised when a Standard JSON output document cannot be decoded."""


class MalformedOutput(DecodeError):
    """The compiler output is not a JSON document at all (transport corruption, truncated output)."""


class SchemaMismatch(DecodeError):
    """
    The compiler output is valid JSON, but its shape does not match the expected
    Standard JSON output schema (most likely compiler version skew).
    """

    def __init__(self, message, messages=None):
        super().__init__(message)
        self.messages = messages or dict()
