#!/usr/bin/env python3
"""Development server runner for the PIR8 practice API."""

import argparse

import uvicorn


def main():
    parser = argparse.ArgumentParser(description="Serve PIR8 human vs AI games over HTTP")
    parser.add_argument("--host", default="0.0.0.0", help="Interface to bind (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=9000, help="Port to listen on (default: 9000)")
    parser.add_argument(
        "--no-reload", action="store_true", help="Disable auto-reload on code changes"
    )
    args = parser.parse_args()

    uvicorn.run(
        "pir8.server.main:app",
        host=args.host,
        port=args.port,
        reload=not args.no_reload,
        log_level="info",
    )


if __name__ == "__main__":
    main()
