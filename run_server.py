#!/usr/bin/env python3
"""Run the cardquiz API server."""

import os

import uvicorn


def main():
    host = os.environ.get('CARDQUIZ_HOST', '127.0.0.1')
    port = int(os.environ.get('CARDQUIZ_PORT', '8000'))
    print("Starting Card Quiz API server...")
    print(f"API documentation available at: http://{host}:{port}/docs")
    uvicorn.run(
        "server.app:app",
        host=host,
        port=port,
        reload=False
    )


if __name__ == "__main__":
    main()
