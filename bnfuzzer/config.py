# bnfuzzer/config.py
import os
import json
from typing import Any, Dict, Optional

DEFAULT_COUNT = 1
DEFAULT_MAX_DEPTH = 0

class BNFuzzerConfigError(Exception):
    """Custom exception for BNFuzzer configuration errors."""
    pass

class BNFuzzerConfig:
    def __init__(self, count: int = DEFAULT_COUNT, max_depth: int = DEFAULT_MAX_DEPTH, **kwargs):
        self._data: Dict[str, Any] = {
            "count": count,
            "max_depth": max_depth,
            "seed": kwargs.get("seed", None),
            "log_level": kwargs.get("log_level", "WARNING"),
            "log_to_file": kwargs.get("log_to_file", False),
            "use_color": kwargs.get("use_color", True),
        }

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._data)

    def __getattr__(self, name: str) -> Any:
        if name in self._data:
            return self._data[name]
        raise AttributeError(f"'BNFuzzerConfig' object has no attribute '{name}'")

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "_data":
            super().__setattr__(name, value)
        else:
            self._data[name] = value

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> "BNFuzzerConfig":
        """
        Load configuration from a JSON file.

        Without an explicit path the default ~/.bnfuzzer/config.json is used
        and created with default values if it does not exist yet.
        """
        if config_path is None:
            config_path = os.path.join(_ensure_bnfuzzer_dir(), "config.json")
            if not os.path.exists(config_path):
                cfg = cls()
                cfg.save(config_path)
                return cfg

        try:
            with open(os.path.expanduser(config_path), "r") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise BNFuzzerConfigError(f"Failed to load config from {config_path}: {e}")
        if not isinstance(data, dict):
            raise BNFuzzerConfigError(f"Config file {config_path} must contain a JSON object")
        return cls(**data)

    def save(self, config_path: Optional[str] = None) -> None:
        if config_path is None:
            config_path = os.path.join(_ensure_bnfuzzer_dir(), "config.json")
        try:
            with open(os.path.expanduser(config_path), "w") as f:
                json.dump(self._data, f, indent=2)
        except OSError as e:
            raise BNFuzzerConfigError(f"Failed to save BNFuzzer config: {e}")

def _ensure_bnfuzzer_dir() -> str:
    """Ensure that ~/.bnfuzzer/ directory exists. Return its path."""
    home = os.path.expanduser("~")
    bnfuzzer_dir = os.path.join(home, ".bnfuzzer")
    os.makedirs(bnfuzzer_dir, exist_ok=True)
    return bnfuzzer_dir
