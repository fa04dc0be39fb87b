#!/usr/bin/env python3
"""
Start the idiom editor API with uvicorn.

Command line overrides are exported as environment variables before the
global settings are rebuilt, so the served app (and any reload or worker
process uvicorn spawns) sees the same configuration as this launcher.
"""

import argparse
import os
import sys

from app.config import reload_settings
from app.config.loader import ConfigLoader


def export_overrides(args: argparse.Namespace) -> None:
    """Copy CLI flags into the environment read by Settings"""
    overrides = {
        "ENVIRONMENT": args.env,
        "HOST": args.host,
        "PORT": args.port,
        "WORKERS": args.workers,
        "RELOAD": "true" if args.reload else None,
        "DEBUG": "true" if args.debug else None,
    }
    for name, value in overrides.items():
        if value is not None:
            os.environ[name] = str(value)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Idiom Editor Backend Server")
    parser.add_argument(
        "--env",
        choices=["development", "staging", "production", "testing"],
        default=None,
        help="Environment to run (default: from ENVIRONMENT env var or development)"
    )
    parser.add_argument("--host", default=None, help="Host to bind to (overrides config)")
    parser.add_argument("--port", type=int, default=None, help="Port to bind to (overrides config)")
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of worker processes (overrides config)"
    )
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    parser.add_argument("--debug", action="store_true", help="Enable debug mode")
    parser.add_argument(
        "--validate-env",
        help="Validate a specific environment configuration and exit"
    )
    parser.add_argument(
        "--create-sample",
        help="Write .env.<environment>.sample and exit"
    )
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    if args.validate_env:
        if ConfigLoader.validate_environment_config(args.validate_env):
            print(f"✓ Environment '{args.validate_env}' configuration is valid")
            return
        print(f"✗ Environment '{args.validate_env}' configuration is invalid")
        sys.exit(1)

    if args.create_sample:
        try:
            sample_file = ConfigLoader.create_sample_env_file(args.create_sample)
        except (OSError, ValueError) as e:
            print(f"✗ Failed to create sample configuration: {e}")
            sys.exit(1)
        print(f"✓ Sample configuration created: {sample_file}")
        return

    export_overrides(args)
    try:
        settings = reload_settings()
    except ValueError as e:
        print(f"✗ Failed to load configuration: {e}")
        sys.exit(1)

    reload = settings.reload
    if reload and settings.is_production():
        print("✗ Auto-reload is disabled in production")
        reload = False

    print(f"🚀 Starting {settings.app_name} v{settings.app_version}")
    print(f"   Environment: {settings.environment.value}")
    print(f"   Host: {settings.host}")
    print(f"   Port: {settings.port}")
    print(f"   Workers: {settings.workers}")
    print(f"   Debug: {settings.debug}")
    print(f"   Reload: {reload}")
    print(f"   Database: {settings.database.url.split('://', 1)[0]}")

    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=reload,
        workers=settings.workers if not reload else 1,
        log_level=settings.log_level.value.lower(),
        access_log=True,
    )


if __name__ == "__main__":
    main()
