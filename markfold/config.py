"""Runtime settings for folding computation.

Settings are plain dataclasses. ``FoldingSettings.from_env()`` reads the
``MARKFOLD_*`` environment variables:

    MARKFOLD_RANGE_LIMIT          maximum number of ranges (unset = no limit)
    MARKFOLD_EMBEDDED_LANGUAGES   comma-separated enabled language ids
    MARKFOLD_MAX_WORKERS          threads used for embedded providers
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from markfold.constants import DEFAULT_EMBEDDED_LANGUAGES
from markfold.types.errors import ConfigurationError, ErrorContext, RecoveryAction

ENV_RANGE_LIMIT = "MARKFOLD_RANGE_LIMIT"
ENV_EMBEDDED_LANGUAGES = "MARKFOLD_EMBEDDED_LANGUAGES"
ENV_MAX_WORKERS = "MARKFOLD_MAX_WORKERS"


@dataclass
class FoldingSettings:
    """Folding engine configuration.

    Attributes:
        range_limit: Default maximum range count; None means unlimited.
        embedded_languages: Language id -> enabled flag for embedded regions.
        max_workers: Worker threads for embedded providers (1 = sequential).
    """

    range_limit: int | None = None
    embedded_languages: dict[str, bool] = field(
        default_factory=lambda: dict(DEFAULT_EMBEDDED_LANGUAGES)
    )
    max_workers: int = 1

    def __post_init__(self) -> None:
        if self.max_workers < 1:
            raise ConfigurationError(
                f"max_workers must be >= 1, got {self.max_workers}",
                context=ErrorContext(operation="configure", component="settings"),
            )

    def is_language_enabled(self, language_id: str) -> bool:
        return self.embedded_languages.get(language_id, False)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> FoldingSettings:
        """Build settings from ``MARKFOLD_*`` environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ``.

        Returns:
            Settings with defaults for unset variables.

        Raises:
            ConfigurationError: If a variable holds an invalid value.
        """
        env = os.environ if environ is None else environ

        range_limit = None
        raw_limit = env.get(ENV_RANGE_LIMIT, "").strip()
        if raw_limit:
            range_limit = _parse_int(ENV_RANGE_LIMIT, raw_limit)

        embedded = dict(DEFAULT_EMBEDDED_LANGUAGES)
        if ENV_EMBEDDED_LANGUAGES in env:
            enabled = {
                name.strip().lower()
                for name in env[ENV_EMBEDDED_LANGUAGES].split(",")
                if name.strip()
            }
            embedded = {name: name in enabled for name in embedded}
            for name in enabled:
                embedded[name] = True

        max_workers = 1
        raw_workers = env.get(ENV_MAX_WORKERS, "").strip()
        if raw_workers:
            max_workers = _parse_int(ENV_MAX_WORKERS, raw_workers)

        return cls(
            range_limit=range_limit,
            embedded_languages=embedded,
            max_workers=max_workers,
        )


def _parse_int(name: str, value: str) -> int:
    try:
        return int(value)
    except ValueError as e:
        raise ConfigurationError(
            f"{name} must be an integer, got {value!r}",
            user_message=f"Invalid value for {name}.",
            context=ErrorContext(
                operation="from_env",
                component="settings",
                additional_info={"variable": name, "value": value},
            ),
            recovery_actions=[RecoveryAction(description=f"Set {name} to a whole number or unset it")],
            original_error=e,
        ) from e
