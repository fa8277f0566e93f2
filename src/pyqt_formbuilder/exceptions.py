"""Form builder exceptions."""


class FormBuilderError(Exception):
    """Base class for all pyqt-formbuilder errors."""


class SchemaError(FormBuilderError):
    """Raised when a form schema is malformed or internally inconsistent."""


class UnknownFieldError(FormBuilderError, KeyError):
    """Raised when an engine operation names a field that has no control."""

    def __init__(self, field_name: str):
        super().__init__(field_name)
        self.field_name = field_name

    def __str__(self) -> str:
        return f"No control registered for field '{self.field_name}'"
