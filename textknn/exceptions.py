"""
Custom exceptions for the TextKNN library.
"""

from typing import Any


class TextKNNError(Exception):
    """Base exception for all TextKNN errors."""

    pass


class ConfigurationError(TextKNNError):
    """Raised when configuration parameters are invalid."""

    def __init__(self, message: str, parameter: str = None, suggested_fix: str = None):
        self.parameter = parameter
        self.suggested_fix = suggested_fix

        full_message = f"Configuration Error: {message}"
        if parameter:
            full_message += f" (Parameter: {parameter})"
        if suggested_fix:
            full_message += f" Suggested fix: {suggested_fix}"

        super().__init__(full_message)


class ClassificationError(TextKNNError):
    """Raised when a classification call cannot be carried out."""

    def __init__(self, message: str, text: str = None):
        self.text = text

        full_message = f"Classification Error: {message}"
        if text:
            preview = text[:40] + "..." if len(text) > 40 else text
            full_message += f" (Text: {preview!r})"

        super().__init__(full_message)


class NotTrainedError(ClassificationError):
    """Raised when a classifier is queried before train() was called."""

    def __init__(self, message: str = "You must first call Classifier.train", text: str = None):
        super().__init__(message, text=text)


class DatabaseError(TextKNNError):
    """Raised when database operations fail."""

    def __init__(self, message: str, operation: str = None, table: str = None):
        self.operation = operation
        self.table = table

        full_message = f"Database Error: {message}"
        if operation:
            full_message += f" (Operation: {operation})"
        if table:
            full_message += f" (Table: {table})"

        super().__init__(full_message)


class SearchError(TextKNNError):
    """Raised when the index fails to execute a query or fetch a document."""

    def __init__(self, message: str, query: Any = None, doc_id: int = None):
        self.query = query
        self.doc_id = doc_id

        full_message = f"Search Error: {message}"
        if doc_id is not None:
            full_message += f" (Document ID: {doc_id})"

        super().__init__(full_message)


class ValidationError(TextKNNError):
    """Raised when input validation fails."""

    def __init__(self, message: str, field: str = None, value: Any = None):
        self.field = field
        self.value = value

        full_message = f"Validation Error: {message}"
        if field:
            full_message += f" (Field: {field})"
        if value is not None:
            full_message += f" (Value: {value})"

        super().__init__(full_message)
