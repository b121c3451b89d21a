from gitly.config.config import Config, get_bool_env, resolve_config_file
from gitly.config.constants import CONFIG_DIR, DEFAULT_CONFIG_FILE, PACKAGE_DIR, TEMPLATES_DIR

# Loaded once at import time; GITLY_CONFIG_FILE points at a replacement file.
configuration: Config = Config.load_from_file(file_path=resolve_config_file())

__all__ = [
    "Config",
    "get_bool_env",
    "resolve_config_file",
    "configuration",
    "PACKAGE_DIR",
    "CONFIG_DIR",
    "DEFAULT_CONFIG_FILE",
    "TEMPLATES_DIR",
]
