from dataclasses import dataclass
import os
from dotenv import load_dotenv


load_dotenv()


def _split_csv(value: str) -> tuple[str, ...]:
    return tuple(item.strip() for item in value.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    # JSON list of {"min", "label", "gp", "passing"}; empty means the built-in table.
    grade_table_json: str = os.getenv("REPORTCARDS_GRADE_TABLE", "")
    denominator_policy: str = os.getenv("REPORTCARDS_DENOMINATOR_POLICY", "configured")
    log_level: str = os.getenv("REPORTCARDS_LOG_LEVEL", "INFO")

    cors_allowed_origins: tuple[str, ...] = _split_csv(
        os.getenv("CORS_ALLOWED_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000")
    )


settings = Settings()
