"""
Settings: read from ~/.polychat/config.json, overridden by POLYCHAT_* env vars.
"""

import json
import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel

from polychat.consent import CONSENT_VERSION, DEFAULT_PROVIDER
from polychat.gateway import DEFAULT_SOURCE_LANGUAGE
from polychat.transport.http import DEFAULT_GATEWAY_URL

CONFIG_DIR = Path.home() / ".polychat"
CONFIG_FILE = CONFIG_DIR / "config.json"
DATA_FILE = CONFIG_DIR / "storage.json"
ENV_PREFIX = "POLYCHAT_"


class Settings(BaseModel):
    gateway_url: str = DEFAULT_GATEWAY_URL
    app_language: str = "en"          # "my language"
    receiver_language: str = "fr"     # the other side of the chat
    source_language: str = DEFAULT_SOURCE_LANGUAGE
    reference_language: str = "en"    # back-translation target
    consent_version: str = CONSENT_VERSION
    consent_provider: str = DEFAULT_PROVIDER
    sender: str = "user"
    auto_receiver_variant: bool = True
    auto_reference_variant: bool = True
    timeout: float = 30.0
    data_file: str = str(DATA_FILE)


def _env_overrides() -> dict[str, str]:
    overrides = {}
    for name in Settings.model_fields:
        value = os.environ.get(ENV_PREFIX + name.upper())
        if value is not None:
            overrides[name] = value
    return overrides


def _load_config(path: Path = CONFIG_FILE) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def load_settings(path: Optional[Path] = None) -> Settings:
    cfg = _load_config(path or CONFIG_FILE)
    known = {k: v for k, v in cfg.items() if k in Settings.model_fields}
    return Settings.model_validate({**known, **_env_overrides()})


def save_settings(settings: Settings, path: Optional[Path] = None) -> None:
    target = path or CONFIG_FILE
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(settings.model_dump(), indent=2))
