#!/usr/bin/env python3
"""
Entry point for running the Yachtbook reporting server.

Usage:
    python run.py [--port PORT] [--host HOST] [--reload]
"""

import argparse
import uvicorn


def main():
    parser = argparse.ArgumentParser(description="Yachtbook reporting server")
    parser.add_argument("--port", type=int, default=8000, help="Port to run on")
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind to")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    args = parser.parse_args()

    url = f"http://{args.host}:{args.port}"

    print("\n" + "=" * 50)
    print("  Yachtbook")
    print("=" * 50)
    print(f"\n  URL:  {url}")
    print(f"  Docs: {url}/docs\n")
    print("  Press Ctrl+C to stop the server\n")
    print("=" * 50 + "\n")

    uvicorn.run(
        "yachtbook.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level="info"
    )


if __name__ == "__main__":
    main()
