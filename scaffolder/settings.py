"""Persisted settings: loading, validation and saving."""

import os
import re
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
import yaml

from scaffolder.exceptions import SettingsValidationError, ValidationError
from scaffolder.variables import VariableMapping, VariableResolver


CONFIG_ENV_VAR = "SCAFFOLD_CONFIG"
CONFIG_DIR_NAME = "scaffolder"
CONFIG_FILE_NAME = "config.yaml"


@dataclass
class UserPlaceholder:
    """A configurable placeholder whose value is supplied per run."""
    key: str
    label: str

    @property
    def token(self) -> str:
        return VariableMapping.token(self.key)


@dataclass
class Settings:
    """Settings persisted between runs."""
    template_path: str = ""
    target_base_path: str = ""
    replace_readme_content: bool = True
    user_placeholders: List[UserPlaceholder] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def find_placeholder(self, key: str) -> Optional[UserPlaceholder]:
        """Look up a placeholder by bare key or token, case-insensitively."""
        wanted = VariableMapping.token(key).casefold()
        for placeholder in self.user_placeholders:
            if placeholder.token.casefold() == wanted:
                return placeholder
        return None


def default_config_path() -> Path:
    """Location of the settings file.

    $SCAFFOLD_CONFIG wins, then $XDG_CONFIG_HOME, then ~/.config.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()

    config_home = os.environ.get("XDG_CONFIG_HOME")
    base = Path(config_home) if config_home else Path.home() / ".config"
    return base / CONFIG_DIR_NAME / CONFIG_FILE_NAME


def default_settings() -> Settings:
    """Settings written on first run."""
    return Settings(
        template_path=str(Path("~") / "Templates" / "[%project_name%]"),
        target_base_path=str(Path("~") / "Projects" / "%year%" / "%month%"),
        replace_readme_content=True,
        user_placeholders=[
            UserPlaceholder(key="project_name", label="Project name"),
            UserPlaceholder(key="order_no", label="Order number"),
        ]
    )


class SettingsLoader:
    """Loads settings YAML and enforces placeholder rules."""

    KNOWN_FIELDS = {'template_path', 'target_base_path', 'replace_readme_content', 'user_placeholders'}
    KEY_PATTERN = re.compile(r'^[A-Za-z0-9_]+$')

    def __init__(self, resolver: Optional[VariableResolver] = None):
        """Initialize loader; the resolver supplies preset keys for collision checks."""
        self.resolver = resolver or VariableResolver()
        self.errors: List[ValidationError] = []

    def load(self, config_path: Union[str, Path]) -> Settings:
        """Load and validate a settings file.

        Raises:
            FileNotFoundError: If the file does not exist
            SettingsValidationError: If the document is malformed or invalid
        """
        self.errors = []
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Settings file not found: {config_path}")

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            self._add_error(f"Failed to parse settings: {e}", str(config_path))
            self._raise_validation_errors()

        return self.from_dict(data)

    def from_dict(self, data: Any) -> Settings:
        """Build settings from a parsed document, validating every field."""
        self.errors = []

        if data is None:
            data = {}
        if not isinstance(data, dict):
            self._add_error("Settings must be a YAML object/dictionary")
            self._raise_validation_errors()

        for key in data.keys():
            if key not in self.KNOWN_FIELDS:
                self._add_error(f"Unknown field '{key}'")

        settings = Settings()

        for path_field in ('template_path', 'target_base_path'):
            value = data.get(path_field, "")
            if value is None:
                value = ""
            if not isinstance(value, str):
                self._add_error(f"must be a string, got {type(value).__name__}", path_field)
            else:
                setattr(settings, path_field, value.strip())

        replace = data.get('replace_readme_content', True)
        if not isinstance(replace, bool):
            self._add_error(f"must be a boolean, got {type(replace).__name__}", 'replace_readme_content')
        else:
            settings.replace_readme_content = replace

        placeholders = data.get('user_placeholders') or []
        if not isinstance(placeholders, list):
            self._add_error("must be a list", 'user_placeholders')
        else:
            for i, item in enumerate(placeholders):
                if not isinstance(item, dict):
                    self._add_error("must be a dictionary with 'key' and 'label'", f"user_placeholders[{i}]")
                    continue
                key = item.get('key', '')
                label = item.get('label', '')
                settings.user_placeholders.append(UserPlaceholder(
                    key=str(key).strip() if key is not None else "",
                    label=str(label).strip() if label is not None else ""
                ))

        self._validate_placeholders(settings.user_placeholders)

        if self.errors:
            self._raise_validation_errors()

        return settings

    def validate(self, settings: Settings) -> Settings:
        """Validate an in-memory Settings object."""
        self.errors = []
        self._validate_placeholders(settings.user_placeholders)
        if self.errors:
            self._raise_validation_errors()
        return settings

    def _validate_placeholders(self, placeholders: List[UserPlaceholder]):
        """Check key syntax, labels, preset collisions and duplicates."""
        preset_keys = self.resolver.preset_keys()
        used_keys = set()

        for i, placeholder in enumerate(placeholders):
            path = f"user_placeholders[{i}]"
            key = placeholder.key

            if not key or not key.strip():
                self._add_error("placeholder 'key' must not be empty", path)
                continue
            if not self.KEY_PATTERN.match(key):
                self._add_error(
                    f"key '{key}' contains invalid characters; use letters, digits and underscores",
                    path
                )
                continue
            if not placeholder.label or not placeholder.label.strip():
                self._add_error(f"key '{key}' must have a label", path)

            token = VariableMapping.token(key).casefold()
            if token in preset_keys:
                self._add_error(f"key '{key}' collides with a preset placeholder", path)
            elif token in used_keys:
                self._add_error(f"key '{key}' is defined more than once", path)
            else:
                used_keys.add(token)

    def _add_error(self, message: str, path: str = "", exit_code: int = 2):
        self.errors.append(ValidationError(message, path, exit_code))

    def _raise_validation_errors(self):
        raise SettingsValidationError(self.errors)


def load_settings(config_path: Optional[Union[str, Path]] = None) -> Settings:
    """Load settings from ``config_path`` (default location if omitted)."""
    return SettingsLoader().load(config_path or default_config_path())


def save_settings(settings: Settings, config_path: Optional[Union[str, Path]] = None) -> Path:
    """Validate and write settings atomically (temp file + rename).

    Returns:
        Path the settings were written to
    """
    SettingsLoader().validate(settings)

    config_path = Path(config_path or default_config_path())
    config_path.parent.mkdir(parents=True, exist_ok=True)

    temp_file = config_path.with_suffix('.tmp')
    try:
        with open(temp_file, 'w', encoding='utf-8') as f:
            yaml.safe_dump(settings.to_dict(), f, allow_unicode=True, sort_keys=False)
        temp_file.replace(config_path)
    except Exception:
        if temp_file.exists():
            temp_file.unlink()
        raise

    return config_path


def load_or_create_settings(config_path: Optional[Union[str, Path]] = None) -> Settings:
    """Load settings, writing the defaults first if the file is missing."""
    config_path = Path(config_path or default_config_path())
    if not config_path.exists():
        save_settings(default_settings(), config_path)
    return load_settings(config_path)
