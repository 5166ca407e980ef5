"""
Run the Brotocare Grievance API with uvicorn.

Usage:
    python run.py
    python run.py --reload            # Development mode with auto-reload
    python run.py --port 8080         # Custom port
    python run.py --workers 4         # Several processes; each opens its own MongoDB clients

Settings such as MONGO_URI and ENVIRONMENT are read from the environment or
backend/.env, not from the command line.
"""
import argparse
import uvicorn

from brotocare.config.settings import settings


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the Brotocare Grievance API server")
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind to (default: 8000)")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload for development")
    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Number of worker processes (default: 1, ignored if --reload is set)"
    )
    return parser.parse_args(argv)


def main():
    args = parse_args()
    workers = 1 if args.reload else args.workers
    
    print(f"Starting Brotocare Grievance API on {args.host}:{args.port}")
    print(f"  Environment: {settings.environment}")
    print(f"  Database:    {settings.mongo_db}")
    print(f"  Workers:     {workers}{' (reload)' if args.reload else ''}")
    
    uvicorn.run(
        "brotocare.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        workers=workers,
        log_level=settings.log_level.lower(),
        # Request lines are logged by CorrelationIdMiddleware
        access_log=False
    )


if __name__ == "__main__":
    main()
