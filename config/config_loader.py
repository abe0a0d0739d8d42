import json
import os
from datetime import datetime

DEFAULT_CONFIG_PATH = "config/runtime_config.json"

DEFAULT_CONFIG = {
    "machine_file": "machines/unary_add.tm",
    "tape": "1 + 1 1 =",
    "start_position": 0,
    "max_steps": 10_000,
    "trace": True,
    "log_runs": True,
    "output_directory": "logs/",
    "log_file_prefix": "tm_runs_"
}

# Expected types for validation
CONFIG_SCHEMA = {
    "machine_file": str,
    "tape": str,
    "start_position": int,
    "max_steps": int,
    "trace": bool,
    "log_runs": bool,
    "output_directory": str,
    "log_file_prefix": str
}

def validate_config(config):
    for key, expected_type in CONFIG_SCHEMA.items():
        if key not in config:
            raise ValueError(f"Missing required configuration key: {key}")
        # bool is an int subclass; keep the two apart
        value = config[key]
        if not isinstance(value, expected_type) or (expected_type is int and isinstance(value, bool)):
            raise TypeError(f"Config key '{key}' expected {expected_type}, got {type(value)}.")

    if config["start_position"] < 0:
        raise ValueError("start_position must be >= 0.")
    if config["max_steps"] < 0:
        raise ValueError("max_steps must be >= 0 (0 disables the step budget).")

def load_config(path=DEFAULT_CONFIG_PATH, verbose=True):
    if not os.path.exists(path):
        raise FileNotFoundError(f"Configuration file not found at: {path}")

    with open(path, "r", encoding="utf-8") as f:
        user_config = json.load(f)

    # Merge defaults with overrides
    config = DEFAULT_CONFIG.copy()
    config.update(user_config)

    validate_config(config)

    os.makedirs(config["output_directory"], exist_ok=True)

    if verbose:
        print(f"[{datetime.now()}] Loaded config:")
        for key, value in config.items():
            print(f"  {key}: {value}")

    return config

def save_config(config, path=DEFAULT_CONFIG_PATH):
    validate_config(config)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config, f, indent=4)
