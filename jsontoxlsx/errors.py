"""Custom exceptions used across jsontoxlsx."""


class JsonToXlsxError(Exception):
    """Base error for the package."""


class ConfigError(JsonToXlsxError):
    """Configuration related error."""


class TemplateError(JsonToXlsxError):
    """Raised when the template workbook cannot be read."""


class JsonSourceError(JsonToXlsxError):
    """Raised when the JSON input cannot be decoded."""


class BindingError(JsonToXlsxError):
    """Raised when a cell without placeholders is handed to the coercer."""
