"""
linepatterns Configuration

Central settings loaded from environment variables.
"""

import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Immutable matcher settings."""

    # --- Line Source ---
    # Longest line (in bytes, or characters for text sources) a scan will buffer
    MAX_LINE_SIZE: int = int(os.getenv("LINEPATTERNS_MAX_LINE_SIZE", str(1024 * 1024)))
    SOURCE_ENCODING: str = os.getenv("LINEPATTERNS_ENCODING", "utf-8")

    # --- Reducer ---
    # "paired" or "membership"
    REDUCE_STRATEGY: str = os.getenv("LINEPATTERNS_REDUCE_STRATEGY", "paired")


settings = Settings()
