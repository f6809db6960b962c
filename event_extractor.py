"""Command line entry point for the birthday calendar extractor."""
import argparse
import json
import logging
import os
import sys
import time
from typing import List, Optional, Sequence

from config.job_config import Config, Entry
from processor.errors import ContactParseError, EventExtractorError
from processor.event_generator import BirthdayEventGenerator, target_years
from processor.models import ProcessResult
from reader.vcard_reader import VcardReader
from storage.ics_writer import IcsWriter

logger = logging.getLogger(__name__)

EXTRA_FIELDS = ('path', 'uid', 'years', 'error_type', 'duration_seconds')


# Configure JSON logging
class JsonFormatter(logging.Formatter):
    """Formats each record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            'timestamp': self.formatTime(record),
            'level': record.levelname,
            'message': record.getMessage(),
            'logger': record.name
        }

        for name in EXTRA_FIELDS:
            if hasattr(record, name):
                log_data[name] = getattr(record, name)

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def setup_logging(log_level: str = 'INFO') -> None:
    """
    Configure root logging with the JSON formatter on stderr.

    Args:
        log_level: Logging level name; unknown names fall back to INFO
    """
    root_logger = logging.getLogger()

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    root_logger.addHandler(handler)

    level = getattr(logging, log_level.upper(), None)
    if not isinstance(level, int):
        level = logging.INFO
    root_logger.setLevel(level)


def process_entry(
    entry: Entry,
    years: Optional[Sequence[int]] = None,
    strict: bool = False
) -> ProcessResult:
    """
    Convert every contact of an input directory into birthday ``.ics`` files.

    Args:
        entry: Input/output directories and purge flag
        years: Target years (default: previous year to two years ahead)
        strict: Re-raise the first failing file or contact instead of
            logging it and continuing

    Returns:
        ProcessResult with counts and collected error messages

    Raises:
        OSError: If the input or output directory is missing or cannot
            be listed
    """
    result = ProcessResult()
    reader = VcardReader(entry.input)
    writer = IcsWriter(entry.output)
    generator = BirthdayEventGenerator()

    writer.check_output_dir()

    if entry.remove_files:
        result.files_removed = writer.remove_existing()

    if years is None:
        years = target_years()
    logger.info(
        f"Generating entries for years: {', '.join(str(year) for year in years)}",
        extra={'years': list(years)}
    )

    for path in reader.list_files():
        logger.info(f"Processing file \"{path}\"", extra={'path': str(path)})
        try:
            contacts = reader.read_contacts(path)
        except (ContactParseError, OSError) as e:
            if strict:
                raise
            _record_error(result, f"{path}: {e}", e, path)
            continue
        result.files_read += 1

        for index, contact in enumerate(contacts):
            try:
                events = generator.convert(contact, years)
                for event in events:
                    writer.write_event(event)
                    result.events_written += 1
            except (EventExtractorError, OSError) as e:
                if strict:
                    raise
                uid = contact.find('UID')
                label = uid.value if uid is not None else f"contact #{index + 1}"
                _record_error(result, f"{path}: {label}: {e}", e, path)
                continue
            result.contacts_processed += 1

    logger.info(
        f"Entry complete: {result.events_written} events written for "
        f"{result.contacts_processed} contacts from {result.files_read} files, "
        f"{len(result.errors)} errors"
    )
    return result


def _record_error(result: ProcessResult, message: str, error: Exception, path) -> None:
    logger.error(
        f"Skipping after error: {message}",
        extra={'path': str(path), 'error_type': type(error).__name__}
    )
    result.errors.append(message)


def run(
    config: Config,
    years: Optional[Sequence[int]] = None,
    strict: bool = False
) -> List[ProcessResult]:
    """
    Process every configuration entry in order.

    An entry whose directories are missing is recorded as failed and the
    remaining entries still run, unless ``strict`` is set.
    """
    results = []
    for entry in config.entries:
        try:
            results.append(process_entry(entry, years=years, strict=strict))
        except (EventExtractorError, OSError) as e:
            if strict:
                raise
            result = ProcessResult()
            _record_error(result, f"{entry.input} -> {entry.output}: {e}", e, entry.input)
            results.append(result)
    return results


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='event-extractor',
        description='Generate birthday calendar files (.ics) from vCard files.'
    )
    parser.add_argument('-c', '--config', help='JSON configuration file')
    parser.add_argument('-i', '--input', help='Input directory with .vcf files')
    parser.add_argument('-o', '--output', help='Output directory for .ics files')
    parser.add_argument(
        '--remove-files',
        action='store_true',
        help='Remove existing .ics files from the output directory first'
    )
    parser.add_argument(
        '--strict',
        action='store_true',
        help='Abort on the first contact that cannot be converted'
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Run the extractor from the command line.

    Returns:
        Process exit code: 0 on success, 1 on any error
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    setup_logging(os.environ.get('LOG_LEVEL', 'INFO'))

    config_file = args.config or os.environ.get('EVENT_EXTRACTOR_CONFIG')
    if args.input or args.output:
        if not (args.input and args.output):
            parser.error('--input and --output must be given together')
        if args.config:
            parser.error('--config cannot be combined with --input/--output')
        config = Config(entries=[
            Entry(input=args.input, output=args.output, remove_files=args.remove_files)
        ])
    elif config_file:
        try:
            config = Config.from_file(config_file)
        except EventExtractorError as e:
            logger.error(f"Configuration error: {e}")
            return 1
    else:
        parser.error('either --config or --input/--output is required')

    start_time = time.time()
    try:
        results = run(config, strict=args.strict)
    except (EventExtractorError, OSError) as e:
        logger.error(
            f"Extraction failed: {e}",
            extra={'error_type': type(e).__name__},
            exc_info=True
        )
        return 1

    error_count = sum(len(result.errors) for result in results)
    logger.info(
        f"Extraction finished: "
        f"{sum(result.events_written for result in results)} events written, "
        f"{error_count} errors",
        extra={'duration_seconds': round(time.time() - start_time, 2)}
    )
    return 1 if error_count else 0


if __name__ == '__main__':
    sys.exit(main())
