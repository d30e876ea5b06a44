import argparse
import asyncio
from pathlib import Path

import uvicorn

from promoposter.api.app import create_app
from promoposter.config.settings import Settings
from promoposter.dispatch.models import Recipient
from promoposter.logging.logger import Log
from promoposter.processor.processor import build_processor
from promoposter.processor.service import build_service


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="promoposter")
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("serve", help="Run the HTTP API")

    run = commands.add_parser("run", help="Turn one PDF into a poster")
    run.add_argument("document", type=Path)
    run.add_argument("--directive", default="", help="Extra summarization instruction")
    run.add_argument("--images", type=int, default=None, help="Number of backgrounds (1-4)")
    run.add_argument("--strict", action="store_true", help="Stop when the summary degrades")
    run.add_argument("--sender", default="", help="Send the poster by MMS from this number")
    run.add_argument("--to", action="append", default=[], help="Recipient phone number")
    return parser.parse_args(argv)


def _run_document(settings: Settings, args: argparse.Namespace) -> None:
    service = build_service(settings)
    recipients = tuple(Recipient(phone_number=number) for number in args.to)
    processor = build_processor(
        service,
        with_dispatch=bool(args.sender and recipients),
        image_count=args.images or settings.image_count,
    )
    context = asyncio.run(
        processor.process(
            args.document,
            args.directive,
            strict=args.strict,
            sender=args.sender,
            recipients=recipients,
        )
    )
    if context.dispatch_result is not None:
        Log.info(f"MMS accepted with message key {context.dispatch_result.message_key}")


def main(argv: list[str] | None = None) -> None:
    """Entry point: load settings -> serve the API or process one document."""
    args = _parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)

    if args.command == "serve":
        uvicorn.run(create_app(settings), host=settings.host, port=settings.port)
    else:
        _run_document(settings, args)


if __name__ == "__main__":
    main()
