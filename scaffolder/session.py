"""Turn settings plus runtime values into a resolved engine invocation."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Mapping, Optional, Tuple

from scaffolder.exceptions import InvalidInputError, TemplateNotFoundError
from scaffolder.settings import Settings
from scaffolder.template import TemplateInstantiator
from scaffolder.variables import VariableMapping, VariableResolver, substitute


logger = logging.getLogger(__name__)


@dataclass
class Invocation:
    """Everything the template engine needs for one run."""
    mapping: VariableMapping
    template_path: Path
    target_base_path: str
    replace_readme_content: bool

    def instantiator(self) -> TemplateInstantiator:
        return TemplateInstantiator(self.mapping, self.replace_readme_content)

    def destination(self) -> Path:
        """Project folder this invocation would create."""
        return self.instantiator().resolve_destination(self.template_path, self.target_base_path)

    def run(self) -> Path:
        return self.instantiator().create_project(self.template_path, self.target_base_path)


def collect_user_values(settings: Settings, values: Mapping[str, str]) -> List[Tuple[str, str]]:
    """Match runtime values to configured placeholders.

    Values are trimmed; every configured placeholder needs a non-blank value
    and values for unknown keys are rejected.

    Returns:
        ``(token, value)`` pairs in configuration order
    """
    by_token = {}
    for key, value in values.items():
        placeholder = settings.find_placeholder(key)
        if placeholder is None:
            raise InvalidInputError(f"Unknown placeholder '{key}'")
        by_token[placeholder.token.casefold()] = "" if value is None else str(value).strip()

    pairs = []
    for placeholder in settings.user_placeholders:
        value = by_token.get(placeholder.token.casefold(), "")
        if not value:
            raise InvalidInputError(f"Input '{placeholder.label}' must not be empty")
        pairs.append((placeholder.token, value))
    return pairs


def resolve_template_path(template_path: str, preset: Mapping[str, str]) -> Path:
    """Resolve presets in the configured template path.

    Falls back to the raw configured path when the resolved one is not a
    directory, so template folders whose own names contain placeholders can
    be referenced literally.
    """
    if not template_path or not template_path.strip():
        raise InvalidInputError("Template path is not configured")

    raw = Path(template_path.strip()).expanduser()
    resolved = Path(substitute(template_path.strip(), preset)).expanduser()

    if resolved.is_dir():
        return resolved
    if raw.is_dir():
        logger.debug(f"Resolved template path {resolved} missing, using {raw}")
        return raw
    raise TemplateNotFoundError(f"Template path is invalid: {resolved} (or {raw})", raw)


def build_invocation(settings: Settings, user_values: Mapping[str, str],
                     resolver: Optional[VariableResolver] = None) -> Invocation:
    """Validate runtime input and resolve everything needed for one run.

    The preset mapping is built once here and shared by template path
    resolution and the substitution mapping.

    Raises:
        InvalidInputError: Missing/blank value, unknown key, blank target path
        TemplateNotFoundError: Template path does not exist
    """
    resolver = resolver or VariableResolver()

    pairs = collect_user_values(settings, user_values)

    preset = resolver.preset_mapping()
    template_path = resolve_template_path(settings.template_path, preset)

    if not settings.target_base_path or not settings.target_base_path.strip():
        raise InvalidInputError("Target base path is not configured")

    mapping = resolver.merged_mapping(preset, pairs)
    return Invocation(
        mapping=mapping,
        template_path=template_path,
        target_base_path=settings.target_base_path.strip(),
        replace_readme_content=settings.replace_readme_content
    )
