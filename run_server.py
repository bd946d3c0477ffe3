#!/usr/bin/env python
"""
Run the Innovation Pulse article API server.
"""
import uvicorn
from pulse_api.app import create_app
from pulse_api.config import Config


def main():
    """Run the API server."""
    # Load configuration
    config = Config()

    app = create_app(config=config)

    print(f"Server running on port {config.port}")
    print(f"Mirror backend: {config.mirror_storage_type}")
    print(f"Health check: http://localhost:{config.port}/api/health")

    # Run uvicorn server
    uvicorn.run(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower()
    )


if __name__ == "__main__":
    main()
