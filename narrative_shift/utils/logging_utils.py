import logging
import logging.config
from pathlib import Path
from typing import Optional

import yaml

from ..config.settings import Settings, settings as default_settings

SERVICE_LOGGER = "narrative_shift"


def setup_logging(config: Settings = default_settings, config_path: Optional[Path] = None) -> Path:
    """
    Configure logging for the service from its YAML dictConfig file.

    Args:
        config: Settings naming the file in LOGGING_CONFIG_PATH. With DEBUG on,
                the service logger is lowered to DEBUG after the file is applied.
        config_path: Explicit file, taking precedence over the settings.

    Returns:
        The path that was looked up.
    """
    path = Path(config_path or config.LOGGING_CONFIG_PATH)
    if not path.exists():
        logging.basicConfig(level=logging.INFO)
        logging.warning(f"Logging configuration file not found at {path}. Using basicConfig.")
    else:
        try:
            with open(path, 'rt') as f:
                logging.config.dictConfig(yaml.safe_load(f))
            logging.getLogger(__name__).info(f"Logging configured from {path}")
        except (OSError, ValueError, TypeError, yaml.YAMLError) as e:
            logging.basicConfig(level=logging.INFO)
            logging.error(f"Invalid logging configuration in {path}: {e}. Using basicConfig.")

    if config.DEBUG:
        logging.getLogger(SERVICE_LOGGER).setLevel(logging.DEBUG)
    return path
