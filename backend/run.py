"""
Run the editorial workflow API with uvicorn.

Host and port default to API_HOST / API_PORT from the environment or .env.

Usage:
    python run.py
    python run.py --memory          # In-process store, no MongoDB needed
    python run.py --no-scheduler    # Don't run the scheduled-publish job
    python run.py --reload --port 8080
"""
import argparse
import os

import uvicorn


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the editorial workflow API server")
    parser.add_argument("--host", help="Host to bind to (default: settings.api_host)")
    parser.add_argument("--port", type=int, help="Port to bind to (default: settings.api_port)")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload for development")
    parser.add_argument(
        "--memory",
        action="store_true",
        help="Keep articles in process memory (sets STORAGE_BACKEND=memory)"
    )
    parser.add_argument(
        "--no-scheduler",
        action="store_true",
        help="Disable the scheduled-publish job (sets PUBLISH_SCHEDULER_ENABLED=false)"
    )
    return parser.parse_args()


def main():
    args = parse_args()

    # Settings are read once on import, so overrides go into the environment first
    if args.memory:
        os.environ["STORAGE_BACKEND"] = "memory"
    if args.no_scheduler:
        os.environ["PUBLISH_SCHEDULER_ENABLED"] = "false"

    from editorial.config.settings import settings

    host = args.host or settings.api_host
    port = args.port or settings.api_port

    print("Starting editorial workflow API server...")
    print(f"  Address: http://{host}:{port}")
    print(f"  Storage: {settings.storage_backend}")
    print(f"  Scheduled publishing: {'on' if settings.publish_scheduler_enabled else 'off'}")
    print(f"  Reload: {args.reload}")
    print()

    # A single worker: the in-memory store is per process
    uvicorn.run(
        "editorial.main:app",
        host=host,
        port=port,
        reload=args.reload,
    )


if __name__ == "__main__":
    main()
