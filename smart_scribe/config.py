import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


logger = logging.getLogger(__name__)


class ConfigError(Exception):
    pass


@dataclass
class AdapterConfig:
    class_path: str
    settings: Dict[str, Any] = field(default_factory=dict)


@dataclass
class AppConfig:
    data_dir: str
    live_delay_seconds: float
    min_live_chars: int
    capture: AdapterConfig
    storage: AdapterConfig
    notifier: AdapterConfig


DEFAULT_CONFIG_PATH = "config.json"
ENV_CONFIG_PATH = "SS_CONFIG_PATH"

DEFAULT_ADAPTERS = {
    "capture": "smart_scribe.adapters.capture_queue.QueueTranscriptSource",
    "storage": "smart_scribe.adapters.storage_json.JsonNoteStorage",
    "notifier": "smart_scribe.adapters.notifier_console.ConsoleNotifier",
}


def load_dotenv(path: str = ".env") -> None:
    if not os.path.exists(path):
        return
    with open(path, "r", encoding="utf-8") as handle:
        for line in handle:
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip().strip("\"'")
            if key and key not in os.environ:
                os.environ[key] = value


def _resolve_env(value: Any) -> Any:
    if isinstance(value, str) and value.startswith("$"):
        return os.environ.get(value[1:], value)
    if isinstance(value, dict):
        return {k: _resolve_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_resolve_env(v) for v in value]
    return value


def _find_config(path: Optional[str]) -> Optional[str]:
    config_path = path or os.environ.get(ENV_CONFIG_PATH, DEFAULT_CONFIG_PATH)
    if os.path.exists(config_path):
        return config_path
    if path:
        raise ConfigError(f"Config file not found: {path}")
    if config_path == DEFAULT_CONFIG_PATH and os.path.exists("config.example.json"):
        return "config.example.json"
    return None


def load_config(path: Optional[str] = None) -> AppConfig:
    load_dotenv()
    config_path = _find_config(path)
    raw: Dict[str, Any] = {}
    if config_path:
        try:
            with open(config_path, "r", encoding="utf-8") as handle:
                raw = json.load(handle)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Invalid JSON in {config_path}: {exc}") from exc
        logger.debug("Loaded config from %s", config_path)
    else:
        logger.debug("No config file found, using defaults")

    raw = _resolve_env(raw)
    data_dir = raw.get("data_dir", "data")
    default_settings = {
        "capture": {"queue_path": os.path.join(data_dir, "transcript_queue.json")},
        "storage": {"base_dir": data_dir},
        "notifier": {},
    }

    def _adapter(key: str) -> AdapterConfig:
        payload = raw.get(key, {})
        class_path = payload.get("class") or DEFAULT_ADAPTERS[key]
        settings = payload.get("settings")
        if settings is None:
            settings = default_settings[key] if class_path == DEFAULT_ADAPTERS[key] else {}
        return AdapterConfig(class_path=class_path, settings=settings)

    try:
        live_delay = float(raw.get("live_delay_seconds", 1.0))
        min_live_chars = int(raw.get("min_live_chars", 30))
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid numeric setting: {exc}") from exc

    return AppConfig(
        data_dir=data_dir,
        live_delay_seconds=live_delay,
        min_live_chars=min_live_chars,
        capture=_adapter("capture"),
        storage=_adapter("storage"),
        notifier=_adapter("notifier"),
    )
