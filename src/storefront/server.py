"""HTTP server runner for the Storefront API.

Usage:
    storefront-server                         # Serve on 0.0.0.0:8000
    storefront-server --port 9000 --reload    # Development mode
    STOREFRONT_STORE=file storefront-server   # Persist to ./data
"""

import argparse

import uvicorn


def main():
    parser = argparse.ArgumentParser(description="Storefront API server")
    parser.add_argument("--host", default="0.0.0.0", help="Interface to bind (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=8000, help="Port to listen on (default: 8000)")
    parser.add_argument("--reload", action="store_true", help="Restart on code changes")
    args = parser.parse_args()

    uvicorn.run(
        "storefront.app:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload,
    )


if __name__ == "__main__":
    main()
