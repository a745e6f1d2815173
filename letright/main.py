"""
Entry point for the swipe session server.
"""
import os
import logging

import uvicorn
from dotenv import load_dotenv

from .config import load_config
from .server import create_app

# Load environment variables
load_dotenv()

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

config = load_config(os.getenv("LETRIGHT_CONFIG"))
app = create_app(config)


def main():
    """Run the server with uvicorn."""
    port = int(os.getenv("LETRIGHT_PORT", config.server.port))

    logger.info(f"🚀 Starting swipe session server on port {port}")
    logger.info(f"🃏 Physics mode: {config.gestures.physics_mode}")
    logger.info(f"📚 API documentation available at http://localhost:{port}/docs")

    uvicorn.run(
        app,
        host=config.server.host,
        port=port,
        reload=False,
        log_level="info"
    )


if __name__ == "__main__":
    main()
