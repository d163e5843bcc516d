"""Command line entry point for listing platforms and running generation jobs."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any

from mediagen.config import AppConfig
from mediagen.exceptions import MediaGenError, ValidationError
from mediagen.logging import configure_logging
from mediagen.services.generation_service import GenerationService


def parse_params(pairs: list[str]) -> dict[str, Any]:
    """Turn ``key=value`` pairs into a parameter mapping."""
    params: dict[str, Any] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise ValidationError(f"Invalid parameter '{pair}', expected key=value")
        params[key.strip()] = value
    return params


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run generative-media jobs against FAL, Genbo or Replicate.")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("platforms", help="List supported platforms.")

    models = sub.add_parser("models", help="List models of a platform.")
    models.add_argument("platform")

    verify = sub.add_parser("verify", help="Check the platform credential against its test endpoint.")
    verify.add_argument("platform")

    generate = sub.add_parser("generate", help="Run one generation job.")
    generate.add_argument("platform")
    generate.add_argument("model")
    generate.add_argument("--mode", choices=("sync", "async"), default="async")
    generate.add_argument(
        "--param",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Model input, repeatable.",
    )
    return parser.parse_args(argv)


async def run(args: argparse.Namespace, service: GenerationService) -> Any:
    if args.command == "platforms":
        return service.list_platforms()
    if args.command == "models":
        return service.list_models(args.platform)
    if args.command == "verify":
        return await service.verify(args.platform)
    result = await service.generate(
        args.platform,
        args.model,
        args.mode,
        parse_params(args.param),
    )
    return result.as_dict()


def main(argv: list[str] | None = None, *, service: GenerationService | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    configure_logging()
    service = service or GenerationService(config=AppConfig.build_default())
    try:
        output = asyncio.run(run(args, service))
    except MediaGenError as exc:
        print(f"mediagen failed: {exc}", file=sys.stderr)
        return 2

    print(json.dumps(output, indent=2, ensure_ascii=False, default=str), file=sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
