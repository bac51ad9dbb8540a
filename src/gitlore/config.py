"""Runtime settings, read from the environment (and a .env file if present)."""

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

ENV_PREFIX = "GITLORE_"


class Settings(BaseModel):
    """Settings shared by every gitlore operation."""

    git_executable: str = Field("git", description="Program used to run git commands")
    timeout: Optional[float] = Field(
        None, description="Seconds after which a git invocation is killed", gt=0
    )
    log_level: str = Field("INFO", description="loguru level used by the command line")


def load_settings(dotenv: bool = True) -> Settings:
    """Build Settings from GITLORE_* environment variables."""
    if dotenv:
        load_dotenv()

    values = {}
    for name in Settings.model_fields:
        raw = os.getenv(f"{ENV_PREFIX}{name.upper()}")
        if raw:
            values[name] = raw
    return Settings(**values)
