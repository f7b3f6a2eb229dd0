import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict

DEFAULT_SCHEMA_FILE = Path(__file__).parent / "schemas" / "appsettings.schema.json"


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    config_dir: Path = Path(".")
    config_file: str = "appsettings.json"
    schema_file: Path = DEFAULT_SCHEMA_FILE
    log_encoding: str = "utf-8-sig"
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from ``TAPDIAG_*`` environment variables."""
        return cls(
            config_dir=Path(os.getenv("TAPDIAG_CONFIG_DIR", ".")),
            config_file=os.getenv("TAPDIAG_CONFIG_FILE", "appsettings.json"),
            schema_file=Path(os.getenv("TAPDIAG_SCHEMA_FILE", str(DEFAULT_SCHEMA_FILE))),
            log_encoding=os.getenv("TAPDIAG_LOG_ENCODING", "utf-8-sig"),
            log_level=os.getenv("TAPDIAG_LOG_LEVEL", "WARNING").upper(),
        )
