"""
Client configuration.

Settings come from a YAML file and are overridden by environment variables:

    admin_url: http://localhost:8001
    admin_token: secret
    workspace: default
    timeout: 30
    max_retries: 3
    headers:
      X-Request-Source: automation
"""

import os
from typing import Dict, Optional

import yaml
from pydantic import BaseModel, Field

HOME_DIR = os.path.expanduser("~") or os.environ.get("HOME") or os.environ.get("USERPROFILE")
KONG_DIR = os.path.join(HOME_DIR, ".kong")
CONFIG_FILE = "client.yaml"

ENV_ADMIN_URL = "KONG_ADMIN_URL"
ENV_ADMIN_TOKEN = "KONG_ADMIN_TOKEN"
ENV_WORKSPACE = "KONG_WORKSPACE"

DEFAULT_ADMIN_URL = "http://localhost:8001"


class KongClientConfig(BaseModel):
    admin_url: str = Field(DEFAULT_ADMIN_URL, description="Base URL of the Kong Admin API")
    admin_token: Optional[str] = Field(None, description="RBAC token sent as Kong-Admin-Token")
    workspace: Optional[str] = Field(None, description="Workspace to scope requests to")
    timeout: float = Field(30.0, gt=0, description="Request timeout in seconds")
    max_retries: int = Field(3, ge=1, description="Attempts for transient transport failures")
    headers: Dict[str, str] = Field(default_factory=dict, description="Extra headers for every request")


def default_config_path() -> str:
    return os.path.join(KONG_DIR, CONFIG_FILE)


def read_config_file(path: str) -> dict:
    with open(path, "r") as file:
        obj = yaml.safe_load(file)

    if obj is None:
        return {}
    if not isinstance(obj, dict):
        raise ValueError(f"Expected a mapping in {path}, got {type(obj).__name__}")
    return obj


def load_config(path: Optional[str] = None) -> KongClientConfig:
    """
    Load client settings.

    An explicit ``path`` must exist. Without one, ``~/.kong/client.yaml`` is
    read when present. ``KONG_ADMIN_URL``, ``KONG_ADMIN_TOKEN`` and
    ``KONG_WORKSPACE`` override the file.
    """
    values: dict = {}

    if path is not None:
        values.update(read_config_file(path))
    elif os.path.exists(default_config_path()):
        values.update(read_config_file(default_config_path()))

    for env_name, key in (
        (ENV_ADMIN_URL, "admin_url"),
        (ENV_ADMIN_TOKEN, "admin_token"),
        (ENV_WORKSPACE, "workspace"),
    ):
        value = os.environ.get(env_name)
        if value:
            values[key] = value

    return KongClientConfig(**values)
