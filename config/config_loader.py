import json
import os
from datetime import datetime

from simulator.errors import ConfigurationError
from simulator.turing_machine import TraceMode

DEFAULT_CONFIG_PATH = "config/runtime_config.json"

DEFAULT_CONFIG = {
    "tape_size": 200,
    "mode": "NONE",
    "strict": False,
    "max_steps": None,
    "use_jit": False,
    "output_directory": "logs/",
    "log_file_prefix": "utm_",
    "log_steps": False
}

# Expected types for validation
CONFIG_SCHEMA = {
    "tape_size": int,
    "mode": str,
    "strict": bool,
    "max_steps": (int, type(None)),
    "use_jit": bool,
    "output_directory": str,
    "log_file_prefix": str,
    "log_steps": bool
}

def validate_config(config):
    for key, expected_type in CONFIG_SCHEMA.items():
        if key not in config:
            raise ValueError(f"Missing required configuration key: {key}")
        if not isinstance(config[key], expected_type):
            raise TypeError(f"Config key '{key}' expected {expected_type}, got {type(config[key])}.")

    # bool is an int subclass
    for key in ("tape_size", "max_steps"):
        if isinstance(config[key], bool):
            raise TypeError(f"Config key '{key}' expected an integer, got a boolean.")

    if config["tape_size"] <= 0:
        raise ConfigurationError(f"tape_size must be positive, got {config['tape_size']}")
    if config["max_steps"] is not None and config["max_steps"] <= 0:
        raise ConfigurationError(f"max_steps must be positive or null, got {config['max_steps']}")
    TraceMode.parse(config["mode"])

def load_config(path=DEFAULT_CONFIG_PATH, verbose=True):
    if not os.path.exists(path):
        raise FileNotFoundError(f"Configuration file not found at: {path}")

    with open(path, "r", encoding="utf-8") as f:
        user_config = json.load(f)

    # Merge defaults with overrides
    config = DEFAULT_CONFIG.copy()
    config.update(user_config)

    # Validate schema
    validate_config(config)

    # Validate output directory
    os.makedirs(config["output_directory"], exist_ok=True)

    if verbose:
        print(f"[{datetime.now()}] Loaded config:")
        for key, value in config.items():
            print(f"  {key}: {value}")

    return config

def save_config(config, path=DEFAULT_CONFIG_PATH):
    validate_config(config)
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config, f, indent=4)
