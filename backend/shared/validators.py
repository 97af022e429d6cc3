"""Shared validation helpers for service settings."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, ClassVar

from pydantic_settings import EnvSettingsSource

if TYPE_CHECKING:
    from pydantic.fields import FieldInfo

WILDCARD_ORIGIN = "*"


def parse_origin_list(value: str | list[str]) -> list[str]:
    """Parse a CORS origin list from an environment variable or config value.

    Accepts a list of strings, a JSON array string ('["a","b"]') or a
    comma-separated string ('a,b'). A wildcard cannot be combined with
    explicit origins.
    """
    if isinstance(value, list):
        origins = [item.strip() for item in value]
    else:
        stripped = value.strip()
        if not stripped:
            raise ValueError("Origin list must not be empty")
        if stripped.startswith("["):
            try:
                parsed = json.loads(stripped)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON array: {e}") from e
            if not isinstance(parsed, list) or not all(isinstance(item, str) for item in parsed):
                raise ValueError("JSON value must be an array of strings")
            origins = [item.strip() for item in parsed]
        else:
            origins = [item.strip() for item in stripped.split(",")]

    origins = [origin for origin in origins if origin]
    if not origins:
        raise ValueError("Origin list must not be empty")
    if WILDCARD_ORIGIN in origins and len(origins) > 1:
        raise ValueError("Wildcard origin '*' cannot be combined with explicit origins")
    return origins


class RawStringListEnvSettingsSource(EnvSettingsSource):
    """Env settings source that hands list fields to validators as raw strings.

    pydantic-settings JSON-decodes list-typed fields from env vars before
    validators run, which rejects CSV values. Fields named in
    ``raw_list_fields`` skip that step so a field validator can parse them.
    """

    raw_list_fields: ClassVar[frozenset[str]] = frozenset({"cors_origins"})

    def prepare_field_value(
        self,
        field_name: str,
        field: FieldInfo,
        value: Any,  # noqa: ANN401
        value_is_complex: bool,  # noqa: FBT001
    ) -> Any:  # noqa: ANN401
        if field_name in self.raw_list_fields and isinstance(value, str):
            return value
        return super().prepare_field_value(field_name, field, value, value_is_complex)
