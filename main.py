import logging
from pathlib import Path

import uvicorn
from dotenv import load_dotenv

import gitly  # triggers logging setup
from gitly.app import create_app
from gitly.config import configuration, get_bool_env

# ======================================================================================================================
#   Global Variables
# ======================================================================================================================
logger = logging.getLogger(Path(__file__).stem)
load_dotenv()

# =============================================================================
#   REST API app - Gitly
# =============================================================================
app = create_app(debug=get_bool_env("APP_DEBUG", configuration.app.debug))


# =============================================================================
#   Entry point
# =============================================================================
def main() -> None:
    logger.info("Starting server on %s:%d", configuration.server.host, configuration.server.port)
    uvicorn.run(
        "main:app",
        host=configuration.server.host,
        port=configuration.server.port,
        reload=False,
        log_config=None,  # keep the handlers installed by setup_logging
    )


if __name__ == "__main__":
    main()
