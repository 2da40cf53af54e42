import logging
from pathlib import Path
from typing import Mapping, Union

from httpboot_core.constants import DEPLOYMENT_ENV_KEYS, NETWORK_ENV_KEYS
from httpboot_core.models.network_config_errors import EnvFileError
from httpboot_core.schemas.network_config.network_config import (
    DeploymentSettings,
    NetworkConfig,
)

log = logging.getLogger(__name__)


def parse_env_text(text: str) -> dict[str, str]:
    """Parse KEY=VALUE lines into a dict.

    Blank lines and lines starting with # are ignored, a leading "export " is
    dropped and one pair of matching quotes around the value is removed. Later
    keys override earlier ones.
    """
    values: dict[str, str] = {}
    for lineno, line in enumerate(text.splitlines(), start=1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("export "):
            line = line[len("export "):].lstrip()
        if "=" not in line:
            log.debug("Skipping line %d without '=': %s", lineno, line)
            continue

        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
            value = value[1:-1]
        if not key:
            log.debug("Skipping line %d with empty key", lineno)
            continue
        values[key] = value
    return values


def read_env_file(path: Union[str, Path]) -> dict[str, str]:
    """Read and parse a .env file.

    Raises:
        EnvFileError: If the file does not exist or cannot be read.
    """
    path = Path(path)
    try:
        text = path.read_text()
    except FileNotFoundError:
        raise EnvFileError(f"Configuration file {path} not found")
    except OSError as err:
        raise EnvFileError(f"Cannot read configuration file {path}: {err}")
    log.info("Configuration loaded from %s", path)
    return parse_env_text(text)


def _pick(env: Mapping[str, str], keys: Mapping[str, str]) -> dict[str, str]:
    # empty values count as unset
    return {
        field: env[key] for field, key in keys.items() if env.get(key, "").strip()
    }


def network_config_from_env(env: Mapping[str, str]) -> NetworkConfig:
    return NetworkConfig(**_pick(env, NETWORK_ENV_KEYS))


def deployment_settings_from_env(env: Mapping[str, str]) -> DeploymentSettings:
    return DeploymentSettings(**_pick(env, DEPLOYMENT_ENV_KEYS))
