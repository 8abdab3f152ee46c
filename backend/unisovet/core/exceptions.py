"""
Custom exceptions for the application.
Centralized error handling for form, reference and assistant failures.
"""

from typing import Iterable


class FormValidationError(ValueError):
    """
    Raised when a record editor is submitted with required fields empty.
    Nothing is emitted to the stores when this is raised.
    """

    def __init__(self, missing_fields: Iterable[str]):
        self.missing_fields = list(missing_fields)
        super().__init__(
            "Campos obrigatórios não preenchidos: " + ", ".join(self.missing_fields)
        )


class RecordNotFoundError(LookupError):
    """Raised when an id does not match any record of a collection."""

    def __init__(self, kind: str, record_id: str):
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind} '{record_id}' não encontrado")


class InvalidReferenceError(ValueError):
    """
    Raised when a new record points at a parent that does not exist,
    e.g. a pet whose owner is not a registered client.
    """

    pass


class AssistantServiceError(Exception):
    """
    Raised by the text-completion client on network errors, non-success
    responses, malformed bodies or a missing credential.
    Never propagated past the virtual assistant.
    """

    pass
