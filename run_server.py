#!/usr/bin/env python
"""
Run the article site server.
"""
import logging

import uvicorn

from site_app import create_site_app
from src.config import Config


def main():
    """Run the site server."""
    # Load configuration
    config = Config()
    logging.basicConfig(
        level=config.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    app = create_site_app(config=config)

    print("Starting article server...")
    print(f"Article storage: {config.article_storage_type}")
    print(f"Listening on http://{config.server_host}:{config.server_port}")

    # Run uvicorn server
    uvicorn.run(
        app,
        host=config.server_host,
        port=config.server_port,
        log_level=config.log_level.lower()
    )


if __name__ == "__main__":
    main()
