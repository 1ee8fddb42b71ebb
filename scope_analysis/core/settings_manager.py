"""Analysis options and persisted scope settings."""

import json
import os
import logging
from dataclasses import dataclass, asdict, fields, replace
from typing import Any, Dict, List, Mapping, Optional

from ..constants import (
    DEFAULT_SAMPLE_RATE,
    DEFAULT_SETTINGS_FILE,
    DEFAULT_TARGET_SAMPLE_PIXELS,
    DEFAULT_VECTORSCOPE_SIZE,
    DEFAULT_WAVEFORM_WIDTH,
    OVEREXPOSURE_THRESHOLD,
    UNDEREXPOSURE_THRESHOLD,
)
from ..utils.math_utils import recommend_sample_rate
from .exceptions import (
    AnalysisConfigError,
    InvalidSettingError,
    SettingsLoadError,
    SettingsSaveError,
)

# Option names as the scope renderers send them
_CAMEL_CASE_KEYS = {
    'waveformWidth': 'waveform_width',
    'vectorscopeSize': 'vectorscope_size',
    'sampleRate': 'sample_rate',
}


@dataclass(frozen=True)
class AnalysisOptions:
    """Per-call knobs for frame analysis."""

    waveform_width: int = DEFAULT_WAVEFORM_WIDTH
    vectorscope_size: int = DEFAULT_VECTORSCOPE_SIZE
    sample_rate: float = DEFAULT_SAMPLE_RATE
    # Fan the four analyzers out on a thread pool
    parallel: bool = False

    def validate(self) -> List[str]:
        """Return a list of problems, empty when the options are usable."""
        errors = []

        if self.waveform_width < 1:
            errors.append("Waveform width must be at least 1")

        if self.vectorscope_size < 1:
            errors.append("Vectorscope size must be at least 1")

        if self.sample_rate < 1:
            errors.append("Sample rate must be at least 1")

        return errors

    def validated(self) -> 'AnalysisOptions':
        """Return self, raising AnalysisConfigError if any option is invalid."""
        errors = self.validate()
        if errors:
            raise AnalysisConfigError(errors)
        return self

    def with_overrides(self, **kwargs) -> 'AnalysisOptions':
        return replace(self, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'waveformWidth': self.waveform_width,
            'vectorscopeSize': self.vectorscope_size,
            'sampleRate': self.sample_rate,
        }

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> 'AnalysisOptions':
        """Build options from camelCase or snake_case keys; missing keys keep defaults."""
        known = {f.name for f in fields(cls)}
        values = {}
        unknown = []

        for key, value in mapping.items():
            name = _CAMEL_CASE_KEYS.get(key, key)
            if name in known:
                values[name] = value
            else:
                unknown.append(key)

        if unknown:
            raise AnalysisConfigError([f"Unknown option: {key}" for key in unknown])
        return cls(**values)


def resolve_options(options=None) -> AnalysisOptions:
    """Accept None, a mapping, or AnalysisOptions and return validated options."""
    if options is None:
        return AnalysisOptions()
    if isinstance(options, AnalysisOptions):
        return options.validated()
    return AnalysisOptions.from_mapping(options).validated()


@dataclass
class ScopeSettings:
    """User-level scope preferences persisted between sessions."""

    waveform_width: int = DEFAULT_WAVEFORM_WIDTH
    vectorscope_size: int = DEFAULT_VECTORSCOPE_SIZE
    sample_rate: int = DEFAULT_SAMPLE_RATE

    # Raise the stride automatically for large frames
    auto_sample_rate: bool = True
    target_sample_pixels: int = DEFAULT_TARGET_SAMPLE_PIXELS

    parallel_analysis: bool = False

    # Exposure indicator
    underexposure_threshold: float = UNDEREXPOSURE_THRESHOLD
    overexposure_threshold: float = OVEREXPOSURE_THRESHOLD

    # Display
    logarithmic_scale: bool = False


_DEFAULT_SETTINGS = ScopeSettings()


def _setting_type(name: str) -> type:
    return type(getattr(_DEFAULT_SETTINGS, name))


def _has_setting_type(name: str, value: Any) -> bool:
    """Whether ``value`` fits the setting's type; ints pass for floats, bools never pass for numbers."""
    expected = _setting_type(name)
    if expected is bool or isinstance(value, bool):
        return expected is bool and isinstance(value, bool)
    if expected is float:
        return isinstance(value, (int, float))
    return isinstance(value, expected)


class SettingsManager:
    """Loads, saves and validates scope settings stored as JSON."""

    def __init__(self, settings_file: str = DEFAULT_SETTINGS_FILE):
        self.settings_file = settings_file
        self.settings = ScopeSettings()
        self._load_settings()

    def _load_settings(self):
        """Load settings from file, keeping defaults if it is missing or unreadable."""
        if not os.path.exists(self.settings_file):
            logging.info("No settings file found, using defaults")
            return

        try:
            with open(self.settings_file, 'r') as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("settings file must contain a JSON object")
        except (OSError, ValueError) as e:
            logging.warning(str(SettingsLoadError(self.settings_file, e)))
            self.settings = ScopeSettings()
            return

        for key, value in data.items():
            if not hasattr(self.settings, key):
                logging.warning(f"Ignoring unknown setting in {self.settings_file}: {key}")
            elif not _has_setting_type(key, value):
                logging.warning(f"Ignoring setting {key} in {self.settings_file}: "
                                f"expected {_setting_type(key).__name__}, got {value!r}")
            else:
                setattr(self.settings, key, value)

        logging.info(f"Settings loaded from {self.settings_file}")

    def save_settings(self):
        """Save current settings to file."""
        try:
            with open(self.settings_file, 'w') as f:
                json.dump(asdict(self.settings), f, indent=2)
        except OSError as e:
            raise SettingsSaveError(self.settings_file, e) from e

        logging.info(f"Settings saved to {self.settings_file}")

    def get_setting(self, key: str, default: Any = None) -> Any:
        """Get a specific setting value."""
        return getattr(self.settings, key, default)

    def set_setting(self, key: str, value: Any, save: bool = True):
        """Set a specific setting value."""
        if not hasattr(self.settings, key):
            raise InvalidSettingError(key, value, [f.name for f in fields(ScopeSettings)])
        if not _has_setting_type(key, value):
            raise InvalidSettingError(key, value, [f"any {_setting_type(key).__name__}"])

        setattr(self.settings, key, value)
        if save:
            self.save_settings()

    def reset_to_defaults(self):
        """Reset all settings to defaults."""
        self.settings = ScopeSettings()
        self.save_settings()
        logging.info("Settings reset to defaults")

    def validate_settings(self) -> List[str]:
        """Validate current settings and return list of issues."""
        s = self.settings
        type_issues = self._type_issues()
        if type_issues:
            return type_issues

        issues = self._options_from_settings(s.sample_rate).validate()

        if s.target_sample_pixels < 1:
            issues.append("Target sample pixels must be at least 1")

        if s.underexposure_threshold >= s.overexposure_threshold:
            issues.append("Underexposure threshold must be below overexposure threshold")

        return issues

    def get_analysis_options(self, width: Optional[int] = None,
                             height: Optional[int] = None) -> AnalysisOptions:
        """
        Analysis options for the current settings.

        When ``auto_sample_rate`` is on and frame dimensions are given, the
        stride is raised so roughly ``target_sample_pixels`` pixels get
        sampled; it is never lowered below the configured ``sample_rate``.

        Raises:
            AnalysisConfigError: if a setting has the wrong type or value
        """
        type_issues = self._type_issues()
        if type_issues:
            raise AnalysisConfigError(type_issues)

        sample_rate = self.settings.sample_rate
        if self.settings.auto_sample_rate and width is not None and height is not None:
            recommended = recommend_sample_rate(width, height, self.settings.target_sample_pixels)
            if recommended > sample_rate:
                logging.debug(f"Raising sample rate to {recommended} for {width}x{height} frame")
                sample_rate = recommended

        return self._options_from_settings(sample_rate).validated()

    def _type_issues(self) -> List[str]:
        return [
            f"Setting {f.name} must be {_setting_type(f.name).__name__}, got {getattr(self.settings, f.name)!r}"
            for f in fields(ScopeSettings)
            if not _has_setting_type(f.name, getattr(self.settings, f.name))
        ]

    def _options_from_settings(self, sample_rate) -> AnalysisOptions:
        return AnalysisOptions(
            waveform_width=self.settings.waveform_width,
            vectorscope_size=self.settings.vectorscope_size,
            sample_rate=sample_rate,
            parallel=self.settings.parallel_analysis,
        )

    def __repr__(self) -> str:
        return f"SettingsManager(file='{self.settings_file}', settings={self.settings})"
