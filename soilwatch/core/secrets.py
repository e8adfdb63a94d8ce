"""
Secret loading with Docker secrets fallback

Lookup order for a secret named ``secret_key``:
1. /run/secrets/secret_key
2. File path in SECRET_KEY_FILE
3. SECRET_KEY environment variable
4. The supplied default
"""
import os
from pathlib import Path
from typing import Optional

import structlog

logger = structlog.get_logger()

SECRETS_DIR = Path("/run/secrets")


def load_secret(
    secret_name: str,
    default: Optional[str] = None,
    required: bool = False
) -> Optional[str]:
    """
    Load a secret from Docker secrets, a file, or the environment

    Args:
        secret_name: Name of the secret (e.g., "secret_key")
        default: Value returned when no source provides the secret
        required: Raise instead of returning None when nothing is found

    Raises:
        ValueError: If required and the secret is missing with no default
        FileNotFoundError: If the _FILE variable points to a missing file
    """
    name = secret_name.lower().replace("-", "_")
    env_var_name = name.upper()

    docker_secret_path = SECRETS_DIR / name
    if docker_secret_path.exists():
        logger.debug("secret_loaded", secret_name=name, source="docker_secret")
        return docker_secret_path.read_text().strip()

    env_file_path = os.getenv(f"{env_var_name}_FILE")
    if env_file_path:
        path = Path(env_file_path)
        if not path.exists():
            raise FileNotFoundError(
                f"Secret file specified by {env_var_name}_FILE={env_file_path} does not exist"
            )
        logger.debug("secret_loaded", secret_name=name, source="env_file", path=str(path))
        return path.read_text().strip()

    env_value = os.getenv(env_var_name)
    if env_value:
        logger.debug("secret_loaded", secret_name=name, source="env_var")
        return env_value

    if default is not None:
        logger.debug("secret_loaded", secret_name=name, source="default", is_production_safe=False)
        return default

    if required:
        raise ValueError(
            f"Required secret '{name}' not found. "
            f"Checked: {docker_secret_path}, {env_var_name}_FILE, {env_var_name}"
        )

    logger.warning("secret_not_found", secret_name=name)
    return None
