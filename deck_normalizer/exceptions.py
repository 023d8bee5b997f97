from typing import Optional
from datetime import datetime


class NormalizationError(Exception):
    """Base exception for all deck normalization errors"""

    def __init__(
        self,
        message: str,
        stage: str = "",
        error_type: str = "general",
        original_error: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.stage = stage
        self.error_type = error_type
        self.original_error = original_error
        self.timestamp = datetime.now()

    def __str__(self):
        return f"[{self.stage}] {self.error_type}: {self.message}"


class TemplateConfigurationError(NormalizationError):
    """A layout or shape the pipeline requires is missing from the template"""

    def __init__(self, message: str, stage: str = "", **kwargs):
        kwargs.setdefault("error_type", "configuration_missing")
        super().__init__(message, stage=stage, **kwargs)


class DocumentAccessError(NormalizationError):
    """A presentation file could not be opened, read or saved"""

    def __init__(self, message: str, stage: str = "engine", **kwargs):
        kwargs.setdefault("error_type", "document_access")
        super().__init__(message, stage=stage, **kwargs)


class RulesValidationError(NormalizationError):
    """The normalization rules table is malformed"""

    def __init__(self, message: str, stage: str = "rules", **kwargs):
        kwargs.setdefault("error_type", "invalid_rules")
        super().__init__(message, stage=stage, **kwargs)


class SessionError(NormalizationError):
    """The editor session was used after it had been released"""

    def __init__(self, message: str, stage: str = "session", **kwargs):
        kwargs.setdefault("error_type", "session_closed")
        super().__init__(message, stage=stage, **kwargs)
