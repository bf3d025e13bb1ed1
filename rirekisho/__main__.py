"""Main entry point for rirekisho-kit."""

import argparse
import asyncio
import base64
import json
import mimetypes
import sys
from datetime import date
from pathlib import Path

from rirekisho import __version__
from rirekisho.config.settings import Settings
from rirekisho.utils.logging import configure_logging


def _iso_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError("--date must be YYYY-MM-DD") from e


def _photo_data_url(path: Path) -> str:
    mime_type = mimetypes.guess_type(path.name)[0] or "image/jpeg"
    encoded = base64.b64encode(path.read_bytes()).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


def _missing_file(*paths: Path | None) -> Path | None:
    """First given path that does not exist on disk."""
    return next((p for p in paths if p is not None and not p.exists()), None)


def _write_json(path: Path, payload: object) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(payload, indent=2, ensure_ascii=False),
        encoding="utf-8",
    )


def _print_missing(validation) -> None:
    if validation is not None and validation.has_missing:
        print(
            "Warning: missing information: " + ", ".join(validation.missing_fields()),
            file=sys.stderr,
        )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="rirekisho",
        description="rirekisho-kit: build 履歴書 and 職務経歴書 from a personal record",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m rirekisho build --record record.yaml
  python -m rirekisho extract resume.pdf --out resume.txt
  python -m rirekisho generate --text-file resume.txt --family-name 山田 --build
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Set the log level (overrides settings)",
    )

    subparsers = parser.add_subparsers(
        dest="mode",
        title="modes",
        description="Available commands",
    )

    # build
    build_parser = subparsers.add_parser(
        "build",
        help="Build the document archive from a record (YAML or JSON)",
    )
    build_parser.add_argument("--record", type=Path, required=True, help="Path to record")
    build_parser.add_argument(
        "--photo",
        type=Path,
        default=None,
        help="ID photo file (overrides the record's photo)",
    )
    build_parser.add_argument(
        "--out-dir",
        type=Path,
        default=None,
        help="Output directory (defaults to settings output_dir)",
    )
    build_parser.add_argument(
        "--date",
        type=_iso_date,
        default=None,
        help="Date printed on the documents (YYYY-MM-DD, default today)",
    )

    # validate
    validate_parser = subparsers.add_parser(
        "validate",
        help="Report missing fields in a record",
    )
    validate_parser.add_argument("--record", type=Path, required=True, help="Path to record")

    # extract
    extract_parser = subparsers.add_parser(
        "extract",
        help="Extract plain text from a PDF, DOCX or text file",
    )
    extract_parser.add_argument("file", type=Path, help="Document to read")
    extract_parser.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Write text to this file instead of stdout",
    )

    # generate
    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate a record with the LLM (optionally build documents)",
    )
    generate_parser.add_argument(
        "--text-file",
        type=Path,
        default=None,
        help="Free-text profile or resume (PDF, DOCX or text)",
    )
    generate_parser.add_argument(
        "--draft",
        type=Path,
        default=None,
        help="Existing record (YAML or JSON) to refine",
    )
    generate_parser.add_argument(
        "--job-description",
        type=Path,
        default=None,
        help="Text file with the target job description",
    )
    generate_parser.add_argument("--given-name", default=None)
    generate_parser.add_argument("--family-name", default=None)
    generate_parser.add_argument("--email", default=None)
    generate_parser.add_argument("--phone", default=None)
    generate_parser.add_argument("--photo", type=Path, default=None, help="ID photo file")
    generate_parser.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Where to write the record JSON (default <output_dir>/record.json)",
    )
    generate_parser.add_argument(
        "--build",
        action="store_true",
        help="Also build the document archive from the generated record",
    )

    return parser


def _build_archive(record, out_dir: Path, today: date | None) -> int:
    from rirekisho.documents.service import DocumentService

    result = asyncio.run(DocumentService().generate(record, today=today))
    if not result.success:
        print(f"Error: document generation failed: {result.error}", file=sys.stderr)
        return 1

    out_dir.mkdir(parents=True, exist_ok=True)
    archive_path = out_dir / result.archive_name
    archive_path.write_bytes(result.archive_bytes)
    print(f"Wrote: {archive_path}")
    _print_missing(result.validation)
    return 0


def main(args: list[str] | None = None) -> int:
    """Main entry point for the application.

    Args:
        args: Command line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    parser = create_parser()
    parsed = parser.parse_args(args)

    try:
        settings = Settings()
    except Exception as e:
        print(f"Error loading settings: {e}", file=sys.stderr)
        return 1

    log_level = parsed.log_level or settings.log_level
    logger = configure_logging(level=log_level)

    if parsed.mode is None:
        parser.print_help()
        return 0

    logger.info(f"rirekisho-kit v{__version__} running {parsed.mode}")

    if parsed.mode in {"build", "validate"}:
        from pydantic import ValidationError

        from rirekisho.documents.loader import load_record

        try:
            record = load_record(parsed.record)
        except (FileNotFoundError, ValueError, ValidationError) as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

        if parsed.mode == "validate":
            from rirekisho.documents.validation import validate_record

            report = validate_record(record)
            print(json.dumps(report.model_dump(), indent=2))
            return 1 if report.has_missing else 0

        missing = _missing_file(parsed.photo)
        if missing is not None:
            print(f"Error: file not found: {missing}", file=sys.stderr)
            return 1

        if parsed.photo is not None:
            identity = record.identity.model_copy(
                update={"photo": _photo_data_url(parsed.photo)}
            )
            record = record.model_copy(update={"identity": identity})

        return _build_archive(record, parsed.out_dir or settings.output_dir, parsed.date)

    if parsed.mode == "extract":
        from rirekisho.extractor.service import TextExtractionService

        if not parsed.file.exists():
            print(f"Error: file not found: {parsed.file}", file=sys.stderr)
            return 1

        result = TextExtractionService().extract(
            parsed.file.read_bytes(), filename=parsed.file.name
        )
        if not result.success:
            print(f"Error: {result.error}", file=sys.stderr)
            return 1

        if parsed.out is not None:
            parsed.out.write_text(result.text or "", encoding="utf-8")
            print(f"Wrote: {parsed.out}")
        else:
            print(result.text)
        return 0

    if parsed.mode == "generate":
        from pydantic import ValidationError

        from rirekisho.documents.loader import load_record
        from rirekisho.extractor.service import TextExtractionService
        from rirekisho.generation.llm import LLMError
        from rirekisho.generation.models import GenerationRequest, IdentityOverrides
        from rirekisho.generation.service import ProfileGenerationService

        missing = _missing_file(
            parsed.text_file, parsed.draft, parsed.job_description, parsed.photo
        )
        if missing is not None:
            print(f"Error: file not found: {missing}", file=sys.stderr)
            return 1

        draft = None
        if parsed.draft is not None:
            try:
                draft = load_record(parsed.draft)
            except (ValueError, ValidationError) as e:
                print(f"Error: {e}", file=sys.stderr)
                return 1

        free_text = None
        if parsed.text_file is not None:
            extraction = TextExtractionService().extract(
                parsed.text_file.read_bytes(), filename=parsed.text_file.name
            )
            if not extraction.success:
                print(f"Error: {extraction.error}", file=sys.stderr)
                return 1
            free_text = extraction.text

        request = GenerationRequest(
            identity=IdentityOverrides(
                given_name=parsed.given_name,
                family_name=parsed.family_name,
                email=parsed.email,
                phone=parsed.phone,
                photo=_photo_data_url(parsed.photo) if parsed.photo else None,
            ),
            free_text=free_text,
            structured_draft=draft,
            job_description=(
                parsed.job_description.read_text(encoding="utf-8")
                if parsed.job_description
                else None
            ),
        )

        try:
            record = asyncio.run(ProfileGenerationService().generate(request))
        except LLMError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

        out_path = parsed.out or settings.output_dir / "record.json"
        _write_json(out_path, record.model_dump(mode="json", by_alias=True))
        print(f"Wrote: {out_path}")

        if parsed.build:
            return _build_archive(record, settings.output_dir, None)
        return 0

    return 0


if __name__ == "__main__":
    sys.exit(main())
