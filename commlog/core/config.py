"""
Configuration management for the communication log API.
Handles loading non-secret settings from disk, environment overrides,
and Google credentials supplied through the environment.
"""

import json
import os
from pathlib import Path
from typing import Dict, Any, List, Optional

from dotenv import load_dotenv


# Setting key -> environment variable that overrides it
ENV_OVERRIDES = {
    "display_timezone": "COMMLOG_TIMEZONE",
    "default_calendar_id": "COMMLOG_CALENDAR_ID",
    "cors_origins": "COMMLOG_CORS_ORIGINS",
    "log_level": "LOG_LEVEL",
    "host": "HOST",
    "port": "PORT",
    "debug": "COMMLOG_DEBUG",
}

DEFAULT_TOKEN_URI = "https://oauth2.googleapis.com/token"


class Config:
    """Configuration manager for the communication log service"""

    def __init__(self, config_dir: Optional[Path] = None, environ: Optional[Dict[str, str]] = None):
        """
        Initialize configuration manager

        Args:
            config_dir: Path to configuration directory (defaults to ./config,
                or COMMLOG_CONFIG_DIR when set)
            environ: Environment mapping to read overrides from (defaults to os.environ)
        """
        if environ is None:
            load_dotenv()
            environ = os.environ
        self.environ = environ

        if config_dir is None:
            config_dir = environ.get("COMMLOG_CONFIG_DIR") or Path(__file__).parent.parent.parent / "config"

        self.config_dir = Path(config_dir)
        self.settings_file = self.config_dir / "settings.json"

        self.settings = self._default_settings()
        self.settings.update(self._load_json(self.settings_file))
        self._apply_env_overrides()

    def _load_json(self, file_path: Path) -> Dict[str, Any]:
        """Load JSON file or return an empty dict if file doesn't exist"""
        if file_path.exists():
            with open(file_path, 'r', encoding='utf-8') as f:
                return json.load(f)
        return {}

    def _default_settings(self) -> Dict[str, Any]:
        """Default system settings"""
        return {
            "display_timezone": "Europe/Prague",
            "default_calendar_id": "primary",
            "max_results": 1000,
            "search_window_days": 30,
            "cors_origins": ["*"],
            "log_level": "INFO",
            "host": "0.0.0.0",
            "port": 3001,
            "debug": False,
        }

    def _apply_env_overrides(self) -> None:
        """Overlay environment variables on top of file settings"""
        for key, env_name in ENV_OVERRIDES.items():
            raw = self.environ.get(env_name)
            if raw is None or raw == "":
                continue

            if key == "cors_origins":
                self.settings[key] = [o.strip() for o in raw.split(",") if o.strip()]
            elif key == "port":
                self.settings[key] = int(raw)
            elif key == "debug":
                self.settings[key] = raw.strip().lower() in ("1", "true", "yes", "on")
            else:
                self.settings[key] = raw

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value

        Args:
            key: Configuration key
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        return self.settings.get(key, default)

    @property
    def display_timezone(self) -> str:
        return self.settings["display_timezone"]

    @property
    def default_calendar_id(self) -> str:
        return self.settings["default_calendar_id"]

    @property
    def cors_origins(self) -> List[str]:
        return list(self.settings["cors_origins"])

    @property
    def debug(self) -> bool:
        return bool(self.settings.get("debug", False))

    def google_credentials(self) -> Dict[str, Optional[str]]:
        """Google OAuth values, read from the environment only"""
        return {
            "client_id": self.environ.get("GOOGLE_CLIENT_ID"),
            "client_secret": self.environ.get("GOOGLE_CLIENT_SECRET"),
            "access_token": self.environ.get("GOOGLE_ACCESS_TOKEN"),
            "refresh_token": self.environ.get("GOOGLE_REFRESH_TOKEN"),
            "token_uri": self.environ.get("GOOGLE_TOKEN_URI") or DEFAULT_TOKEN_URI,
        }

    def has_google_credentials(self) -> bool:
        """Whether enough credentials exist to call the calendar API"""
        creds = self.google_credentials()
        return bool(creds["access_token"] or creds["refresh_token"])
