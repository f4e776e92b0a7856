"""Error taxonomy for the conversion pipeline.

Every failure is terminal: the CLI reports the message and exits non-zero.
"""


class ConversionError(Exception):
    """Base class for all errors raised while converting a report."""


class IoError(ConversionError):
    """Raised when the input cannot be read or the output cannot be written."""


class DecodeError(ConversionError):
    """Raised when the input is not a well-formed Perl::Critic JSON report."""


class RepositoryError(ConversionError):
    """Raised when no git repository, remote or HEAD commit can be resolved."""


class UnparseableRemoteError(RepositoryError):
    """Raised when a remote URL matches neither the SSH nor the HTTP(S) shape."""


class AssemblyError(ConversionError):
    """Raised when a SARIF object cannot be constructed."""
