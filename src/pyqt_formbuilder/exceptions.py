"""Form builder exceptions."""


class FormBuilderError(Exception):
    """Base class for all form builder errors."""


class MissingFormError(FormBuilderError):
    """Raised when a field operation needs a form but none was injected."""

    def __init__(self, field_name: str, operation: str):
        self.field_name = field_name
        self.operation = operation
        super().__init__(
            f"Field '{field_name}' has no FormState attached; cannot {operation}. "
            f"Pass form=... when constructing the field."
        )


class InvalidFieldNameError(FormBuilderError, ValueError):
    """Raised when a field is registered under an empty name."""
