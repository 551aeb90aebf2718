"""Run the gateway with uvicorn: ``python -m advisory.gateway``."""

import uvicorn

from advisory.config import settings
from advisory.gateway.app import create_app
from advisory.logging_config import setup_logging


def main() -> None:
    setup_logging(settings.log_level)
    uvicorn.run(create_app(), host=settings.gateway_host, port=settings.gateway_port)


if __name__ == "__main__":
    main()
