"""tokenexport exceptions."""

from typing import List, Optional
from dataclasses import dataclass


@dataclass
class ValidationError:
    """Single validation error."""
    message: str
    path: str = ""
    exit_code: int = 2


class TokenExportValidationError(Exception):
    """Raised when an input document fails validation.

    Errors are accumulated by the loaders and raised together, allowing the
    CLI to report all of them and map to the validation exit code.
    """

    kind = "Validation"

    def __init__(self, errors: List[ValidationError]):
        self.errors = errors
        self.exit_code = 2

        messages = []
        for error in errors:
            location = f" (at {error.path})" if error.path else ""
            messages.append(f"{self.kind} error: {error.message}{location}")

        super().__init__("\n".join(messages))


class SnapshotValidationError(TokenExportValidationError):
    """Raised when a variable snapshot is malformed."""

    kind = "Snapshot"


class ConfigValidationError(TokenExportValidationError):
    """Raised when an export config fails validation."""

    kind = "Config"


class TransportFailure(Exception):
    """Raised when a remote collaborator (Figma, GitHub) fails.

    Never retried. Callers surface the message to the user.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)
