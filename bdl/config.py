"""
BDL runtime configuration

Environment-driven settings for the command-line front end. None of these
influence parse results; they control presentation and the caller-side
bound on input size.

    BDL_LOG_LEVEL        logging level name (default WARNING)
    BDL_JSON_INDENT      JSON indent, 0 for compact output (default 2)
    BDL_MAX_BLOCK_CHARS  reject larger inputs before parsing (default 4000000)
    BDL_COLOR            ANSI colors in `bdl show` output (default on)
"""

from __future__ import annotations

import logging
import os

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BDLConfig(BaseModel):

    model_config = ConfigDict(frozen=True)

    log_level: str = Field("WARNING", description="Root logging level for the CLI")
    json_indent: int = Field(2, ge=0, description="Indent for JSON output")
    max_block_chars: int = Field(
        4_000_000,
        gt=0,
        description="Largest block the CLI will hand to the parser",
    )
    color: bool = Field(True, description="Colorize human-readable output")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level '{v}'")
        return level

    @classmethod
    def from_env(cls) -> BDLConfig:
        def env_bool(name: str, default: bool) -> bool:
            raw = os.getenv(name)
            if raw is None:
                return default
            return raw.lower() in {"1", "true", "yes", "on"}

        return cls(
            log_level=os.getenv("BDL_LOG_LEVEL", "WARNING"),
            json_indent=int(os.getenv("BDL_JSON_INDENT", "2")),
            max_block_chars=int(os.getenv("BDL_MAX_BLOCK_CHARS", "4000000")),
            color=env_bool("BDL_COLOR", True),
        )
