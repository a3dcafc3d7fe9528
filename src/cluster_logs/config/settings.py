"""Configuration settings for the cluster logs tool."""

import os
from pydantic_settings import BaseSettings
from ..core.constants import (
    ENV_CLUSTER_URL, ENV_ACS_TOKEN, ENV_USER_AGENT, ENV_VERBOSE, ENV_TIMEOUT,
    DEFAULT_CLUSTER_URL, DEFAULT_USER_AGENT, DEFAULT_TIMEOUT, DEFAULT_LOG_DIR,
)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    This uses Pydantic Settings for environment variable loading.
    """
    # Cluster connection
    CLUSTER_URL: str = os.environ.get(ENV_CLUSTER_URL, DEFAULT_CLUSTER_URL)
    ACS_TOKEN: str = os.environ.get(ENV_ACS_TOKEN, "")
    USER_AGENT: str = os.environ.get(ENV_USER_AGENT, DEFAULT_USER_AGENT)
    TIMEOUT: float = float(os.environ.get(ENV_TIMEOUT, DEFAULT_TIMEOUT))

    # General settings
    VERBOSE: bool = os.environ.get(ENV_VERBOSE, "false").lower() in ("true", "1", "yes")
    LOG_DIR: str = DEFAULT_LOG_DIR


# Create a singleton settings instance
settings = Settings()
