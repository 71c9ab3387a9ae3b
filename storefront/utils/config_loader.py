"""
Configuration loader for the storefront engine
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

_ENV_OVERRIDES = {
    "STOREFRONT_ENDPOINT": "endpoint",
    "STOREFRONT_TIMEOUT_SECONDS": "timeout_seconds",
    "STOREFRONT_DEBOUNCE_MS": "search_debounce_ms",
    "STOREFRONT_PREVENT_DUPLICATES": "prevent_duplicates",
    "STOREFRONT_INTEGRATIONS_MODE": "integrations_mode",
}


class StorefrontConfig(BaseModel):
    """Engine configuration"""

    endpoint: str = "http://localhost:8082/api/v1"
    timeout_seconds: float = Field(default=20.0, gt=0.0)
    search_debounce_ms: int = Field(default=500, ge=0, le=10_000)
    prevent_duplicates: bool = True
    shipping_charge: float = Field(default=0.0, ge=0.0)
    integrations_mode: str = Field(default="real", pattern="^(real|mock)$")


def default_config_path() -> Path:
    return Path(__file__).parent.parent.parent / "config" / "storefront_config.yml"


def load_storefront_config(config_path: Optional[Path] = None, allow_missing: bool = False) -> StorefrontConfig:
    """
    Load and validate storefront configuration from YAML, then apply env overrides

    Args:
        config_path: Path to config file. Defaults to config/storefront_config.yml
        allow_missing: Use built-in defaults when the file does not exist

    Returns:
        Validated StorefrontConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist and allow_missing is False
        ValidationError: If config doesn't match schema
    """
    load_dotenv()

    if config_path is None:
        config_path = default_config_path()

    data: Dict[str, Any] = {}
    if config_path.exists():
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    elif not allow_missing:
        raise FileNotFoundError(f"Storefront config file not found: {config_path}")

    data.update(_env_overrides())

    try:
        cfg = StorefrontConfig(**data)
        logger.info("Loaded storefront config (endpoint=%s, debounce=%sms)", cfg.endpoint, cfg.search_debounce_ms)
        return cfg
    except ValidationError as e:
        logger.error("Storefront config validation failed: %s", e)
        raise


def _env_overrides() -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    for env_name, field_name in _ENV_OVERRIDES.items():
        value = os.getenv(env_name)
        if value is None or not value.strip():
            continue
        value = value.strip()
        if field_name == "prevent_duplicates":
            overrides[field_name] = value.lower() in ("1", "true", "yes")
        else:
            overrides[field_name] = value
    return overrides
