from copy import deepcopy
from typing import Any, Dict
from typeguard import typechecked

from kutulu.core.console import *


@typechecked
def recursive_update(default: Dict, override: Dict, force: bool) -> Dict:
    """
    Recursively updates the 'default' dictionary with the 'override' dictionary.

    For each key in the override dictionary:
      - If force is True:
          - If the key exists in default, override the value and log a debug message.
          - If the key does not exist in default, add the key with the override value and log a warning.
      - If force is False:
          - If the key exists in default and its value is None, override it.
          - If the key does not exist in default, add it with the override value.

    If both values are dictionaries, the function updates them recursively.

    Parameters:
    -----------
    default : Dict
        The original configuration dictionary.
    override : Dict
        The extra (override) dictionary.
    force : bool
        Whether to force overriding keys that already have a valid value.

    Returns:
    --------
    Dict
        The updated dictionary.
    """
    for key, value in override.items():
        # If both default and override values are dictionaries, update recursively.
        if key in default and isinstance(default[key], dict) and isinstance(value, dict):
            default[key] = recursive_update(default[key], value, force)
        elif force:
            if key in default:
                if default[key] != value:
                    debug(f"Overriding key '{key}': {default[key]} -> {value}")
                    default[key] = value
            else:
                warning(f"Key '{key}' not found in default config. Adding with value: {value}")
                default[key] = value
        else:
            if key not in default or default.get(key) is None:
                debug(f"Key '{key}' is missing. Setting to: {value}")
                default[key] = value
    return default


@typechecked
def merged_config(default: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Return a deep copy of ``default`` with ``override`` forced on top."""
    return recursive_update(deepcopy(default), deepcopy(override), force=True)
