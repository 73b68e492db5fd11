import copy
import json
import logging
import os
from typing import Dict, Optional, Any

logger = logging.getLogger(__name__)

CONFIG_FILE_PATH = "sitemap_model.json"

DEFAULT_CONFIG: Dict[str, Any] = {
    "reader": {
        "recover": True,      # let lxml parse mildly malformed XML
        "huge_tree": False,
    },
    "writer": {
        "pretty_print": True,
        "xml_declaration": True,
        "encoding": "UTF-8",
    },
}

_BOOL_KEYS = {
    "reader": ["recover", "huge_tree"],
    "writer": ["pretty_print", "xml_declaration"],
}


def merge_config(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Returns DEFAULT_CONFIG with the given sections/keys replaced."""
    merged = copy.deepcopy(DEFAULT_CONFIG)
    for section, values in (overrides or {}).items():
        if isinstance(values, dict) and isinstance(merged.get(section), dict):
            merged[section].update(values)
        else:
            merged[section] = values
    return merged


def load_config(path: str = CONFIG_FILE_PATH) -> Optional[Dict[str, Any]]:
    """Loads reader/writer options from a JSON file, merged over the defaults."""
    if not os.path.exists(path):
        logger.error(f"Configuration file not found: {path}")
        return None
    try:
        with open(path, 'r') as f:
            config_data = json.load(f)
        logger.info(f"Successfully loaded configuration from {path}")
    except json.JSONDecodeError as e:
        logger.error(f"Error decoding JSON from {path}: {e}")
        return None
    except OSError as e:
        logger.error(f"Could not read configuration file {path}: {e}")
        return None

    if not isinstance(config_data, dict):
        logger.error("Configuration must be a dictionary.")
        return None

    config = merge_config(config_data)
    if not validate_config(config):
        return None
    return config


def validate_config(config: Dict[str, Any]) -> bool:
    """Validates the structure and content of the configuration."""
    if not isinstance(config, dict):
        logger.error("Configuration must be a dictionary.")
        return False

    for section, keys in _BOOL_KEYS.items():
        if not isinstance(config.get(section), dict):
            logger.error(f"'{section}' key is missing or not a dictionary in config.")
            return False
        for key in keys:
            if not isinstance(config[section].get(key), bool):
                logger.error(f"Value for '{section}.{key}' must be true or false.")
                return False

    encoding = config["writer"].get("encoding")
    if not isinstance(encoding, str) or not encoding.strip():
        logger.error("Value for 'writer.encoding' must be a non-empty string.")
        return False

    unknown = set(config) - set(DEFAULT_CONFIG)
    if unknown:
        logger.warning(f"Ignoring unknown configuration sections: {sorted(unknown)}")

    logger.info("Configuration validation successful.")
    return True
