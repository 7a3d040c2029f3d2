"""Command-line demo: submit a sample document several times through the limiter."""

from __future__ import annotations

import argparse
import sys
import time

from registry_gateway.adapters.rate_limit.sliding_window import SlidingWindowRateLimiter
from registry_gateway.adapters.registry.http_client import HttpRegistryClient
from registry_gateway.core.config import settings
from registry_gateway.core.errors import AppError
from registry_gateway.core.logging import configure_logging
from registry_gateway.schemas.document import Document
from registry_gateway.services.document_service import DocumentService

SAMPLE_DOCUMENT = Document(
    description="Test document",
    participant_inn="1234567890",
    doc_id="DOC-123",
    doc_status="NEW",
    doc_type="LP_INTRODUCE_GOODS",
    import_request=False,
    production_date="2023-10-26",
    production_type="OWN_PRODUCTION",
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Submit a sample signed document repeatedly under a sliding-window rate limit",
    )
    parser.add_argument("--count", type=int, default=10, help="Number of submissions")
    parser.add_argument(
        "--window-seconds",
        type=float,
        default=settings.rate_limit.window_seconds,
        help="Rolling window length in seconds",
    )
    parser.add_argument(
        "--max-requests",
        type=int,
        default=settings.rate_limit.max_requests,
        help="Maximum submissions per window",
    )
    parser.add_argument(
        "--tick-seconds",
        type=float,
        default=settings.rate_limit.tick_seconds,
        help="Eviction period in seconds (default: 1s, or a tenth of shorter windows)",
    )
    parser.add_argument("--url", type=str, default=settings.registry.url, help="Registry endpoint")
    parser.add_argument(
        "--signature",
        type=str,
        default="someDigitalSignature",
        help="Signature sent with the document",
    )
    parser.add_argument(
        "--linger-seconds",
        type=float,
        default=0.0,
        help="Keep the limiter alive this long after the last submission",
    )
    return parser


def run(args: argparse.Namespace, service: DocumentService) -> int:
    """Submit ``args.count`` documents; return the number of failures."""

    failures = 0
    for i in range(1, args.count + 1):
        try:
            result = service.create_document(SAMPLE_DOCUMENT, args.signature)
            print(f"Request {i} Result: {result}")
        except AppError as exc:
            failures += 1
            print(f"Request {i} Error: {exc.message}", file=sys.stderr)
    return failures


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.count < 0:
        parser.error("--count must be >= 0")

    configure_logging(settings.log)

    try:
        limiter = SlidingWindowRateLimiter(
            window_seconds=args.window_seconds,
            max_requests=args.max_requests,
            tick_seconds=args.tick_seconds,
            poll_interval_seconds=settings.rate_limit.poll_interval_seconds,
        )
    except ValueError as exc:
        parser.error(str(exc))

    client = HttpRegistryClient(url=args.url, timeout_seconds=settings.registry.timeout_seconds)
    with DocumentService(limiter=limiter, client=client) as service:
        failures = run(args, service)
        if args.linger_seconds > 0:
            time.sleep(args.linger_seconds)

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
