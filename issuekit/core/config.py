import os

from pydantic import BaseModel


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


class Settings(BaseModel):
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Report log: error lines kept verbatim before the rest is only counted
    REPORT_MAX_ERROR_LINES: int = int(os.getenv("REPORT_MAX_ERROR_LINES", "20"))

    # Parser registry: re-raise ParsingError instead of logging it into the report
    PARSER_FAIL_FAST: bool = _env_flag("PARSER_FAIL_FAST")


settings = Settings()
