# Binding Errors #
##################


class SolcError(RuntimeError):
    """Base class for every failure raised by the solidity compiler bindings."""


class DownloadError(SolcError):
    """
    Raised when release metadata or compiler artifact bytes cannot be fetched,
    decoded or written to disk.
    """


class VersionNotFound(SolcError):
    """Raised when the requested compiler version is absent from the release index."""


class FFIError(SolcError):
    """
    Raised when a compiler module fails to load, fails the post-load
    version probe, or a foreign call into it cannot be completed.
    """


class InvalidInput(SolcError):
    """Raised when a compilation request cannot be encoded into a Standard JSON document."""


class CompilationFailed(SolcError):
    """
    Raised when the foreign compile call fails or its output
    cannot be decoded into the expected schema.
    """
