"""Base class for profile configurations.

Every profile has its own configuration model with profile-specific defaults.
Field domains (non-negative, fits in the wire width, ...) are declared with
Pydantic's Field(); cross-field rules are checked when the engine is built.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from .exceptions import ConfigurationError


class ProfileConfig(BaseModel):
    """Immutable configuration shared by all profile engines.

    Invalid field values raise ConfigurationError instead of Pydantic's
    ValidationError, so callers only need to handle one error type when
    building a profile.

    Example:
        >>> from autosar_e2e import Profile4Config
        >>> config = Profile4Config(data_id=0x12345678, offset=64)
        >>> config.offset
        64
    """

    model_config = ConfigDict(
        # Configuration never changes after an engine is built
        frozen=True,
        # Catch misspelled options
        extra="forbid",
        validate_default=True,
    )

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid {type(self).__name__}: {e}") from e
