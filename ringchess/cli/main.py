from __future__ import annotations

import argparse
from typing import List, Optional

import uvicorn

from ..config import Settings
from ..engine.rules import GameMode
from ..protocol.http.app import create_app


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Serve the ring chess engine over HTTP")
    parser.add_argument("--host", type=str, default=settings.host, help="Bind address")
    parser.add_argument("--port", type=int, default=settings.port, help="Bind port")
    parser.add_argument(
        "--log-level", type=str, default=settings.log_level, help="Logging level (e.g. INFO)"
    )
    parser.add_argument(
        "--mode",
        choices=["standard", "modern", "citadel"],
        default=settings.default_mode.value,
        help="Mode of games created without an explicit mode",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    settings = Settings()
    args = build_parser(settings).parse_args(argv)
    settings = settings.model_copy(
        update={
            "host": args.host,
            "port": args.port,
            "log_level": args.log_level,
            "default_mode": GameMode(args.mode),
        }
    )

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
