"""Custom exception hierarchy for scope analysis."""

from typing import Optional, Any


class ScopeAnalysisError(Exception):
    """Base exception for all scope analysis errors."""

    def __init__(self, message: str, details: Optional[str] = None, cause: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.details = details
        self.cause = cause

    def __str__(self) -> str:
        result = self.message
        if self.details:
            result += f"\nDetails: {self.details}"
        if self.cause:
            result += f"\nCaused by: {self.cause}"
        return result


# Frame input errors
class PixelBufferError(ScopeAnalysisError):
    """Base class for pixel buffer errors."""
    pass


class InvalidPixelBufferError(PixelBufferError):
    """Raw frame data cannot be shaped into an RGBA pixel buffer."""

    def __init__(self, width: int, height: int, length: int, reason: str,
                 cause: Optional[Exception] = None):
        super().__init__(
            f"Invalid pixel buffer ({width}x{height}, {length} bytes)",
            f"Reason: {reason}",
            cause
        )
        self.width = width
        self.height = height
        self.length = length
        self.reason = reason


class ImageLoadError(PixelBufferError):
    """Image file could not be decoded into a frame."""

    def __init__(self, file_path: str, reason: str, cause: Optional[Exception] = None):
        super().__init__(
            f"Failed to load image: {file_path}",
            f"Reason: {reason}",
            cause
        )
        self.file_path = file_path
        self.reason = reason


# Analysis errors
class AnalysisError(ScopeAnalysisError):
    """Base class for analysis-related errors."""
    pass


class AnalysisConfigError(AnalysisError):
    """Invalid analysis configuration."""

    def __init__(self, config_errors: list[str]):
        super().__init__(
            "Invalid analysis configuration",
            f"Errors: {'; '.join(config_errors)}"
        )
        self.config_errors = config_errors


class AnalysisExecutionError(AnalysisError):
    """An analyzer failed while producing its scope."""

    def __init__(self, stage: str, cause: Optional[Exception] = None):
        super().__init__(f"Analysis failed at stage: {stage}", None, cause)
        self.stage = stage


# Settings and configuration errors
class SettingsError(ScopeAnalysisError):
    """Base class for settings-related errors."""
    pass


class SettingsLoadError(SettingsError):
    """Error loading settings from file."""

    def __init__(self, file_path: str, cause: Optional[Exception] = None):
        super().__init__(
            f"Failed to load settings from: {file_path}",
            "Settings will be reset to defaults",
            cause
        )
        self.file_path = file_path


class SettingsSaveError(SettingsError):
    """Error saving settings to file."""

    def __init__(self, file_path: str, cause: Optional[Exception] = None):
        super().__init__(
            f"Failed to save settings to: {file_path}",
            "Settings changes may be lost",
            cause
        )
        self.file_path = file_path


class InvalidSettingError(SettingsError):
    """Invalid setting name or value."""

    def __init__(self, setting_name: str, value: Any, valid_values: Optional[list] = None):
        details = f"Value: {value}"
        if valid_values:
            details += f", Valid values: {valid_values}"

        super().__init__(
            f"Invalid setting: {setting_name}",
            details
        )
        self.setting_name = setting_name
        self.value = value
        self.valid_values = valid_values
