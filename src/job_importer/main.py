import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from pydantic import BaseModel, ValidationError

from job_importer.enrichment.ai import enrich_job_text
from job_importer.importer import NOT_USABLE_MESSAGE, import_job
from job_importer.models import EnrichRequest, ImportRequest

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NOT_USABLE = 1
EXIT_INVALID_INPUT = 2


def _dump(model: BaseModel) -> dict:
    return model.model_dump(mode="json", by_alias=True)


def _read_text(text: str | None, text_file: str | None) -> str | None:
    if text_file:
        return Path(text_file).read_text(encoding="utf-8")
    return text


async def run_import(args: argparse.Namespace) -> int:
    """Import one job page and print the merged fields as JSON."""
    request = ImportRequest(
        linkedin_url=args.url,
        job_text=_read_text(args.text, args.text_file),
    )
    html = Path(args.html_file).read_text(encoding="utf-8") if args.html_file else None

    fields = await import_job(request.linkedin_url, job_text=request.job_text, html=html)
    if not fields.is_usable:
        print(NOT_USABLE_MESSAGE, file=sys.stderr)
        return EXIT_NOT_USABLE

    print(json.dumps({"fields": _dump(fields)}, indent=2, ensure_ascii=False))
    return EXIT_OK


async def run_enrich(args: argparse.Namespace) -> int:
    """Enrich pasted job text and print the result as JSON."""
    request = EnrichRequest(
        job_text=_read_text(args.text, args.text_file) or "",
        linkedin_url=args.url,
    )
    result = await enrich_job_text(request.job_text, request.linkedin_url)
    print(json.dumps(_dump(result), indent=2, ensure_ascii=False))
    return EXIT_OK


def _add_text_source(parser: argparse.ArgumentParser, required: bool) -> None:
    source = parser.add_mutually_exclusive_group(required=required)
    source.add_argument("--text", help="Job description text.")
    source.add_argument(
        "--text-file",
        metavar="PATH",
        help="Read the job description from a UTF-8 text file.",
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="job-importer",
        description="Extract and enrich job application fields from job postings.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    import_parser = subparsers.add_parser(
        "import",
        help="Extract company, role and location from a job page URL.",
    )
    import_parser.add_argument("url", help="Job posting URL (e.g. a LinkedIn job view).")
    _add_text_source(import_parser, required=False)
    import_parser.add_argument(
        "--html-file",
        metavar="PATH",
        help="Parse this saved HTML instead of fetching the URL.",
    )
    import_parser.set_defaults(handler=run_import)

    enrich_parser = subparsers.add_parser(
        "enrich",
        help="Classify a job description (seniority, salary, skills, ...).",
    )
    _add_text_source(enrich_parser, required=True)
    enrich_parser.add_argument("--url", default=None, help="Optional job posting URL.")
    enrich_parser.set_defaults(handler=run_enrich)

    return parser.parse_args(argv)


def cli(argv: list[str] | None = None) -> None:
    """CLI entry point for the package."""
    args = parse_args(argv)

    # Set up logging once, in the application entry point only
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.DEBUG if args.verbose else logging.INFO,
        stream=sys.stderr,
    )

    try:
        exit_code = asyncio.run(args.handler(args))
    except ValidationError as e:
        message = e.errors()[0]["msg"] if e.errors() else "Invalid request payload."
        logger.error(f"Invalid input: {message}")
        sys.exit(EXIT_INVALID_INPUT)
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Could not read input file: {e}")
        sys.exit(EXIT_INVALID_INPUT)

    sys.exit(exit_code)


if __name__ == "__main__":
    cli()
