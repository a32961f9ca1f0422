"""Error taxonomy for the Roster data layer.

Update and delete of an unknown id are deliberately absent here: they
are silent no-ops, not errors.
"""

from .models import FieldErrors


class RosterError(Exception):
    """Base class for all Roster errors."""


class StructuralValidationError(RosterError):
    """One or more form fields failed local shape checks.

    Recoverable: the caller re-prompts and never proceeds to mutation.
    """

    def __init__(self, field_errors: FieldErrors):
        self.field_errors = field_errors
        summary = "; ".join(f"{name}: {message}" for name, message in field_errors.items())
        super().__init__(f"Invalid student data ({summary})")


class RemoteValidationError(RosterError):
    """The remote check refused the submission (e.g. duplicate email).

    Terminal for the current submission.
    """


class TransportError(RosterError):
    """Simulated transport fault talking to a remote collaborator.

    Retryable by manual re-invoke; never retried automatically.
    """
