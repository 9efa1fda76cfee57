"""Parser limits.

The grammar allows unbounded paths and query lists; these options cap them.
Defaults can be overridden through environment variables.
"""

import os

from pydantic import BaseModel, Field

DEFAULT_MAX_INPUT_LENGTH = 4096
DEFAULT_MAX_PATH_COMPONENTS = 64
DEFAULT_MAX_QUERY_PARAMS = 64

ENV_PREFIX = "IDL_PARSER_"


class ParserOptions(BaseModel):
    """Limits applied while parsing. ``None`` disables a limit."""

    max_input_length: int | None = Field(default=DEFAULT_MAX_INPUT_LENGTH, ge=1)
    max_path_components: int | None = Field(default=DEFAULT_MAX_PATH_COMPONENTS, ge=1)
    max_query_params: int | None = Field(default=DEFAULT_MAX_QUERY_PARAMS, ge=1)

    @classmethod
    def unbounded(cls) -> "ParserOptions":
        return cls(max_input_length=None, max_path_components=None, max_query_params=None)

    @classmethod
    def from_env(cls, environ=None) -> "ParserOptions":
        """Build options from ``IDL_PARSER_MAX_*`` variables.

        An empty value or ``none`` disables the limit; unset variables keep the default.
        """
        environ = os.environ if environ is None else environ
        values = {}
        for field_name in cls.model_fields:
            raw = environ.get(ENV_PREFIX + field_name.upper())
            if raw is None:
                continue
            raw = raw.strip()
            values[field_name] = None if raw.lower() in ("", "none") else raw
        return cls(**values)
