from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from httpboot_core import constants


class Settings(BaseSettings):
    """Runtime settings, read from HTTPBOOT_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix=constants.ENV_PREFIX, case_sensitive=False
    )

    env_file: Path = Path(constants.DEFAULT_ENV_FILE)

    # accepted CIDR prefix lengths for the boot network
    min_prefix_length: int = constants.MIN_PREFIX_LENGTH
    max_prefix_length: int = constants.MAX_PREFIX_LENGTH

    # JSON log file directory; console logging only when unset
    log_dir: Optional[Path] = None

    # seconds to wait for ss/netstat/podman
    command_timeout: int = 5


settings = Settings()
