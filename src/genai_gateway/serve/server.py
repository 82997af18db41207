"""Run the gateway with uvicorn."""
from __future__ import annotations
import argparse
import logging

import uvicorn

from genai_gateway.common.logging_setup import setup_logging
from genai_gateway.common.settings import get_settings

LOGGER = logging.getLogger("genai_gateway.server")


def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level)
    ap = argparse.ArgumentParser(description="Serve the GenAI gateway")
    ap.add_argument("--host", default=settings.host)
    ap.add_argument("--port", type=int, default=settings.port)
    args = ap.parse_args()

    LOGGER.info("Server ready on http://%s:%s", args.host, args.port)
    # log_config=None keeps the handler installed by setup_logging
    uvicorn.run(
        "genai_gateway.serve.fastapi_app:app",
        host=args.host,
        port=args.port,
        log_config=None,
    )

if __name__ == "__main__":
    main()
