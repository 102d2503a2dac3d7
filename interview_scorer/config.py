# settings read from the environment (and .env)
import json
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .rubrics import DEFAULT_IDEAL_LENGTH, DEFAULT_TABLES, ScoringTables, coerce_ideal_length


@dataclass(frozen=True)
class Settings:
    default_ideal_length: int = DEFAULT_IDEAL_LENGTH
    log_level: str = "WARNING"
    tables_path: Optional[str] = None

    def tables(self) -> ScoringTables:
        if not self.tables_path:
            return DEFAULT_TABLES
        with open(self.tables_path, "r", encoding="utf-8") as f:
            return ScoringTables.from_dict(json.load(f))


def load_settings() -> Settings:
    load_dotenv()
    return Settings(
        default_ideal_length=coerce_ideal_length(os.getenv("SCORER_DEFAULT_IDEAL_LENGTH"), DEFAULT_IDEAL_LENGTH),
        log_level=os.getenv("SCORER_LOG_LEVEL", "WARNING").upper(),
        tables_path=os.getenv("SCORER_TABLES_PATH") or None,
    )
