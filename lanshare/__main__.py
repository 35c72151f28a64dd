"""Run the sharing server: ``python -m lanshare``."""
import logging

import uvicorn

from lanshare.core.config import get_settings
from lanshare.core.logging import configure_logging
from lanshare.core.network import get_local_ip

logger = logging.getLogger("lanshare")


def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("Local access:   http://localhost:%d", settings.port)
    logger.info("Network access: http://%s:%d", get_local_ip(), settings.port)
    uvicorn.run(
        "lanshare.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.server.reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
