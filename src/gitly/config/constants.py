from pathlib import Path

# =============================================================================
#   Package-level path constants
# =============================================================================
# __file__ is gitly/config/constants.py; everything here ships inside the package
PACKAGE_DIR:   Path = Path(__file__).parents[1]
CONFIG_DIR:    Path = PACKAGE_DIR / "config"
TEMPLATES_DIR: Path = PACKAGE_DIR / "templates"

DEFAULT_CONFIG_FILE: Path = CONFIG_DIR / "config.yml"
CONFIG_FILE_ENV = "GITLY_CONFIG_FILE"
