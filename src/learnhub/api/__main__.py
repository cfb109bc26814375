"""
learnhub.api.__main__

Process entrypoint: `python -m learnhub.api [--service NAME]` or `learnhub-api`.

Responsibilities:
- Resolve the service shape (CLI flag wins over LEARNHUB_SERVICE).
- Build the app for that shape and hand it to uvicorn.
"""

from __future__ import annotations

import argparse
from typing import get_args

import uvicorn

from learnhub.api.app import create_app
from learnhub.settings import ServiceName, Settings, get_settings


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="learnhub-api",
        description="Run one LearnHub service (or all of them) behind uvicorn.",
    )
    parser.add_argument(
        "--service",
        choices=get_args(ServiceName),
        help="Service shape to mount (default: LEARNHUB_SERVICE, else 'all')",
    )
    parser.add_argument("--host", help="Bind address (default: LEARNHUB_API_HOST)")
    parser.add_argument("--port", type=int, help="Bind port (default: LEARNHUB_API_PORT)")
    return parser.parse_args(argv)


def _apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    overrides = {
        field: value
        for field, value in (
            ("service", args.service),
            ("api_host", args.host),
            ("api_port", args.port),
        )
        if value is not None
    }
    return settings.model_copy(update=overrides) if overrides else settings


def main(argv: list[str] | None = None) -> None:
    settings = _apply_overrides(get_settings(), _parse_args(argv))
    app = create_app(settings=settings)

    uvicorn.run(app, host=settings.api_host, port=settings.api_port, log_config=None)


if __name__ == "__main__":
    main()
