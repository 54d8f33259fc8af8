"""Configuration settings using Pydantic Settings.

Provides typed copy-engine configuration with environment variable support.

Usage:
    from structclone.config import CopySettings

    # Load from environment variables (STRUCTCLONE_*)
    settings = CopySettings()

    # Or override with explicit values
    settings = CopySettings(max_depth=None, allow_placeholder=False)
"""

from __future__ import annotations

from functools import cache
from typing import Annotated

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CopySettings(BaseSettings):  # type: ignore[misc]
    """Configuration for the deep copy engine.

    Attributes:
        max_depth: Deepest nesting level copied before the call aborts with
            CopyDepthExceeded. Each level costs up to three interpreter frames,
            so the default stays below the standard recursion limit of
            1000. None disables the guard (raise sys.setrecursionlimit first).
        allow_placeholder: Allow instances of types without a zero-argument
            constructor to be allocated with ``__init__`` skipped. When False,
            such types fail with InstantiationFailure.
        copy_container_attributes: Also copy instance attributes of container
            subclasses (e.g. ``class Tags(list)`` carrying an ``owner`` field).

    Environment Variables:
        STRUCTCLONE_MAX_DEPTH
        STRUCTCLONE_ALLOW_PLACEHOLDER
        STRUCTCLONE_COPY_CONTAINER_ATTRIBUTES
    """

    model_config = SettingsConfigDict(
        env_prefix="STRUCTCLONE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    max_depth: Annotated[int, Field(ge=1)] | None = 200
    allow_placeholder: bool = True
    copy_container_attributes: bool = True


@cache
def get_settings() -> CopySettings:
    """Settings loaded once from the environment.

    Returns:
        Process-wide default CopySettings.
    """
    return CopySettings()
