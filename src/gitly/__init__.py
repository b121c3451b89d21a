from gitly.config import configuration
from gitly.utils.logging import setup_logging

# =============================================================================
#   Logging – Initialization from config
# =============================================================================
setup_logging(configuration.logging, service_name=configuration.app.name)

__all__ = ["configuration"]
