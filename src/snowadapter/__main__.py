"""Serve the snowadapter API with uvicorn."""

from __future__ import annotations

import os

import uvicorn

from snowadapter.logging import setup_logging, uvicorn_log_config


def main() -> None:
    """Run the API server.

    Host and port come from SNOWADAPTER_HOST and SNOWADAPTER_PORT.
    """
    setup_logging()
    uvicorn.run(
        "snowadapter.api.app:app",
        host=os.environ.get("SNOWADAPTER_HOST", "127.0.0.1"),
        port=int(os.environ.get("SNOWADAPTER_PORT", "8000")),
        log_config=uvicorn_log_config(),
    )


if __name__ == "__main__":
    main()
