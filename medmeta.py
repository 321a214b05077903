#!/usr/bin/env python3
"""
medmeta.py - DICOM metadata field extractor with CSV/JSON aggregation

Reads a configurable list of metadata fields from a DICOM file or a directory
tree of DICOM files and writes one combined CSV or JSON document:
 - field names map to DICOM tags through a fixed lookup table
 - missing or unreadable fields are reported as "N/A"; unreadable files are
   skipped and counted as failures
 - optional PatientID pseudonymization (SHA-256, or HMAC-SHA-256 with a salt)
 - settings come from a JSON config file and can be overridden on the CLI
 - diagnostics always go to stderr, so stdout output can be piped safely

Usage: see argparse help (``medmeta -h``)
"""

from __future__ import annotations
import argparse
import functools
import io
import json
import logging
import sys
import traceback
from concurrent.futures import ThreadPoolExecutor
from contextlib import ExitStack
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Protocol, TextIO, Tuple, Union

import pydicom
import pyfiglet
from colorama import Fore, Style, just_fix_windows_console
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives import hmac as crypto_hmac
from pydicom.dataset import Dataset as PyDicomDataset
from pydicom.errors import InvalidDicomError
from pydicom.multival import MultiValue
from pydicom.tag import BaseTag, Tag
from termcolor import colored
from tqdm import tqdm
from tqdm.contrib.logging import logging_redirect_tqdm

# Type aliases for clarity
StrDict = Dict[str, str]
PathLike = Union[str, Path]

# Constants
__version__ = "0.1.0"
NOT_AVAILABLE = "N/A"
FILE_NAME_FIELD = "FileName"
SENSITIVE_FIELD = "PatientID"
HASH_PREFIX = "HASH_"
OUTPUT_FORMATS = ("csv", "json")
DEFAULT_OUTPUT_FORMAT = "csv"
DEFAULT_CONFIG_FILE = "config.json"
DEFAULT_THREADS = 1
MAX_THREAD_CAP = 64
DICOM_EXTENSIONS = {'.dcm', '.dicom', '.ima'}
CSV_SPECIAL_CHARS = (',', '"', '\n', '\r')

log = logging.getLogger("medmeta")

# ------------------------------- Logging ----------------------------------

LEVEL_COLORS = {
    logging.DEBUG: Fore.CYAN,
    logging.INFO: Fore.GREEN,
    logging.WARNING: Fore.YELLOW,
    logging.ERROR: Fore.RED,
    logging.CRITICAL: Fore.RED + Style.BRIGHT,
}
LEVEL_PREFIXES = {
    logging.WARNING: "Warning: ",
    logging.ERROR: "Error: ",
    logging.CRITICAL: "Error: ",
}


def is_terminal(stream: Optional[TextIO] = None) -> bool:
    """Return True when ``stream`` (stderr by default) is attached to a terminal."""
    stream = sys.stderr if stream is None else stream
    isatty = getattr(stream, 'isatty', None)
    if isatty is None:
        return False
    try:
        return bool(isatty())
    except ValueError:
        # closed stream
        return False


class DiagnosticFormatter(logging.Formatter):
    """Console formatter for the diagnostic stream.

    Messages are colored by level when the target stream is a terminal. The
    check runs on every record, so redirecting stderr mid-run is honored.
    Without colors, warnings and errors carry a plain-text prefix instead.
    ``color`` forces the choice either way when not None.
    """

    def __init__(self, color: Optional[bool] = None, stream: Optional[TextIO] = None):
        super().__init__('%(message)s')
        self.color = color
        self.stream = stream

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        use_color = self.color if self.color is not None else is_terminal(self.stream)
        if use_color:
            return f"{LEVEL_COLORS.get(record.levelno, '')}{message}{Style.RESET_ALL}"
        return LEVEL_PREFIXES.get(record.levelno, '') + message


def configure_logging(quiet: bool, verbose_count: int, log_file: Optional[str] = None,
                      color: Optional[bool] = None) -> None:
    if quiet:
        level = logging.ERROR
    elif verbose_count >= 2:
        level = logging.DEBUG
    else:
        level = logging.INFO
    just_fix_windows_console()
    for handler in list(log.handlers):
        log.removeHandler(handler)
        handler.close()
    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(DiagnosticFormatter(color=color, stream=sys.stderr))
    log.addHandler(console)
    log.propagate = False
    log.setLevel(level)
    if log_file:
        try:
            fh = logging.FileHandler(log_file, encoding='utf-8')
        except OSError as e:
            log.warning("Could not open log file '%s': %s", log_file, e)
        else:
            fh.setFormatter(logging.Formatter('%(asctime)s %(levelname)s: %(message)s'))
            log.addHandler(fh)
    log.debug("Logging initialized. level=%s, log_file=%s", logging.getLevelName(level), log_file)

# ----------------------- banner -----------------------

def show_banner(args: argparse.Namespace) -> None:
    """Print the program banner to stderr unless quiet/no_banner is set."""
    if getattr(args, 'quiet', False) or getattr(args, 'no_banner', False):
        return
    try:
        art = pyfiglet.figlet_format('MEDMETA', font='standard')
    except pyfiglet.FontNotFound:
        art = 'MEDMETA\n'
    tagline = f"v{__version__} - DICOM metadata extractor"
    if is_terminal(sys.stderr) and not getattr(args, 'no_color', False):
        art = colored(art, 'green', attrs=['bold'])
        tagline = colored(tagline, 'cyan')
    print(art.rstrip('\n'), file=sys.stderr)
    print(tagline, file=sys.stderr)

# ----------------------------- configuration -----------------------------

@dataclass(frozen=True)
class Settings:
    """Immutable snapshot of the run configuration."""
    output_format: str = DEFAULT_OUTPUT_FORMAT
    fields: Tuple[str, ...] = ()
    anonymize: bool = False
    output_file: str = ''
    anonymize_salt: str = ''


def settings_from_mapping(raw: Dict[str, Any], source: str = '<config>') -> Settings:
    """Build Settings from a decoded config object.

    Invalid values are reported and replaced by their defaults; unknown keys
    are ignored.
    """
    values: Dict[str, Any] = {}

    fmt = raw.get('output_format')
    if fmt is not None:
        if isinstance(fmt, str) and fmt in OUTPUT_FORMATS:
            values['output_format'] = fmt
        else:
            log.warning("Invalid output_format %r in '%s'. Using default '%s'.", fmt, source, DEFAULT_OUTPUT_FORMAT)

    fields = raw.get('fields')
    if fields is not None:
        if isinstance(fields, list):
            kept: list[str] = []
            for item in fields:
                if isinstance(item, str):
                    kept.append(item)
                else:
                    log.warning("Ignoring non-string field %r in '%s'.", item, source)
            values['fields'] = tuple(kept)
        else:
            log.warning("'fields' in '%s' must be a list. Using default (none).", source)

    anonymize = raw.get('anonymize')
    if anonymize is not None:
        if isinstance(anonymize, bool):
            values['anonymize'] = anonymize
        else:
            log.warning("'anonymize' in '%s' must be true or false. Using default (false).", source)

    for key in ('output_file', 'anonymize_salt'):
        value = raw.get(key)
        if value is None:
            continue
        if isinstance(value, str):
            values[key] = value
        else:
            log.warning("'%s' in '%s' must be a string. Ignoring it.", key, source)

    return Settings(**values)


def load_settings(config_path: PathLike) -> Settings:
    """Load Settings from a JSON config file, falling back to defaults on any error."""
    path = Path(config_path)
    try:
        with open(path, encoding='utf-8') as f:
            raw = json.load(f)
    except FileNotFoundError:
        log.warning("Could not open config file '%s'. Using default values.", path)
        return Settings()
    except json.JSONDecodeError as e:
        log.warning("JSON parsing error in config file '%s': %s. Using default values.", path, e)
        return Settings()
    except (OSError, UnicodeDecodeError) as e:
        log.warning("Error reading config file '%s': %s. Using default values.", path, e)
        return Settings()
    if not isinstance(raw, dict):
        log.warning("Config file '%s' must contain a JSON object. Using default values.", path)
        return Settings()
    log.debug("Loaded configuration from %s", path)
    return settings_from_mapping(raw, source=str(path))


def parse_field_list(text: Optional[str]) -> List[str]:
    if not text:
        return []
    return [p.strip() for p in text.split(',') if p.strip()]


def apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """Return a copy of ``settings`` with command-line values taking precedence."""
    changes: Dict[str, Any] = {}
    if getattr(args, 'format', None):
        changes['output_format'] = args.format
    if getattr(args, 'fields', None):
        changes['fields'] = tuple(parse_field_list(args.fields))
    if getattr(args, 'anonymize', False):
        changes['anonymize'] = True
    if getattr(args, 'anonymize_salt', None):
        changes['anonymize_salt'] = args.anonymize_salt
    if getattr(args, 'output', None):
        changes['output_file'] = args.output
    return replace(settings, **changes)


def build_field_list(fields: Iterable[str]) -> List[str]:
    """Output columns: FileName first, then the requested fields without repeats."""
    out = [FILE_NAME_FIELD]
    for name in fields:
        if name in out:
            log.warning("Duplicate field '%s' ignored.", name)
            continue
        out.append(name)
    return out

# ----------------------------- tag resolver ------------------------------

NULL_TAG = Tag(0x0000, 0x0000)

FIELD_TAGS: Dict[str, BaseTag] = {
    'PatientID': Tag(0x0010, 0x0020),
    'PatientName': Tag(0x0010, 0x0010),
    'StudyDate': Tag(0x0008, 0x0020),
    'StudyTime': Tag(0x0008, 0x0030),
    'Modality': Tag(0x0008, 0x0060),
    'StudyDescription': Tag(0x0008, 0x1030),
    'SeriesDescription': Tag(0x0008, 0x103E),
    'InstitutionName': Tag(0x0008, 0x0080),
    'ManufacturerModelName': Tag(0x0008, 0x1090),
    'SliceThickness': Tag(0x0018, 0x0050),
    'ImageType': Tag(0x0008, 0x0008),
    'AccessionNumber': Tag(0x0008, 0x0050),
}


def resolve_tag(field_name: str) -> BaseTag:
    """Map a field name to its DICOM tag; unknown names give NULL_TAG."""
    return FIELD_TAGS.get(field_name, NULL_TAG)


def supported_fields() -> List[str]:
    return list(FIELD_TAGS)

# ---------------------------- source records -----------------------------

class SourceRecord(Protocol):
    """Read-only tag store for one file. ``lookup`` returns None when a tag can't be read."""

    @property
    def is_valid(self) -> bool: ...

    def lookup(self, tag: BaseTag) -> Optional[str]: ...


def format_element_value(value: Any) -> str:
    if value is None:
        return ''
    if isinstance(value, (MultiValue, list, tuple)):
        # first value only
        return format_element_value(value[0]) if len(value) else ''
    if isinstance(value, (bytes, bytearray)):
        return value.decode('utf-8', errors='replace')
    return str(value)


class DicomRecord:
    """pydicom-backed SourceRecord.

    The whole header is read when the record is opened and the file handle is
    released right away; pixel data is never loaded.
    """

    def __init__(self, path: PathLike, dataset: Optional[PyDicomDataset] = None):
        self.path = str(path)
        self._dataset = dataset

    @classmethod
    def open(cls, path: PathLike, force: bool = False) -> 'DicomRecord':
        try:
            ds = pydicom.dcmread(str(path), stop_before_pixels=True, force=force)
        except InvalidDicomError as e:
            log.error("Not a valid DICOM file: %s (%s)", path, e)
            return cls(path)
        except Exception as e:
            log.error("Failed to read DICOM %s: %s", path, e)
            log.debug(traceback.format_exc())
            return cls(path)
        return cls(path, ds)

    @property
    def is_valid(self) -> bool:
        return self._dataset is not None

    def lookup(self, tag: BaseTag) -> Optional[str]:
        if self._dataset is None or tag == NULL_TAG:
            return None
        try:
            elem = self._dataset.get(tag)
            if elem is None:
                return None
            return format_element_value(elem.value)
        except Exception as e:
            log.debug("Could not read tag %s from %s: %s", tag, self.path, e)
            return None

# --------------------------- anonymization -------------------------------

def anonymize_value(value: str, salt: Optional[str] = None) -> str:
    """
    Returns ``HASH_`` + 64 hex digits.
    Plain SHA-256 of the value, or HMAC-SHA-256 keyed by ``salt`` when one is given.
    The result is stable across runs and platforms; there is no inverse.
    """
    data = str(value).encode('utf-8')
    if salt:
        mac = crypto_hmac.HMAC(salt.encode('utf-8'), hashes.SHA256())
        mac.update(data)
        digest = mac.finalize()
    else:
        hasher = hashes.Hash(hashes.SHA256())
        hasher.update(data)
        digest = hasher.finalize()
    return HASH_PREFIX + digest.hex()

# -------------------------- metadata extraction --------------------------

def extract_fields(record: SourceRecord, fields: Iterable[str], anonymize: bool = False,
                   salt: Optional[str] = None) -> StrDict:
    """Return exactly one value per requested field.

    Fields that can't be resolved or read map to ``N/A``; an invalid record
    maps every field to ``N/A``. With ``anonymize`` set, only PatientID is
    replaced by its hash, and only when it was actually present.
    """
    fields = list(fields)
    if not record.is_valid:
        return {name: NOT_AVAILABLE for name in fields}

    result: StrDict = {}
    for name in fields:
        value = record.lookup(resolve_tag(name))
        if value is None:
            value = NOT_AVAILABLE
        if anonymize and name == SENSITIVE_FIELD and value != NOT_AVAILABLE:
            value = anonymize_value(value, salt)
        result[name] = value
    return result

# -------------------------- find files (pathlib) -------------------------

def find_dicom_files(root: PathLike, max_depth: Optional[int] = None) -> List[str]:
    """List candidate files in a stable order.

    A file path is returned as-is whatever its extension. Directories are
    scanned recursively for DICOM_EXTENSIONS; ``max_depth`` 1 keeps only the
    files directly inside ``root``.
    """
    rootp = Path(root)
    if rootp.is_file():
        return [str(rootp)]
    if not rootp.is_dir():
        return []
    base_level = len(rootp.parts)
    out: list[str] = []
    for p in rootp.rglob("*"):
        if p.suffix.lower() not in DICOM_EXTENSIONS or not p.is_file():
            continue
        if max_depth is not None and len(p.parts) - base_level > max_depth:
            continue
        out.append(str(p))
    return sorted(out)

# ------------------------------- processing --------------------------------

@dataclass
class BatchResult:
    records: List[StrDict] = field(default_factory=list)
    processed: int = 0
    failed: int = 0
    failures: List[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.processed + self.failed


def process_file(path: PathLike, fields: List[str], anonymize: bool = False,
                 salt: Optional[str] = None, force: bool = False) -> Optional[StrDict]:
    """Extract one output row from ``path``; None when the file can't be read."""
    record = DicomRecord.open(path, force=force)
    if not record.is_valid:
        return None
    extracted = extract_fields(record, fields, anonymize=anonymize, salt=salt)
    missing = [k for k, v in extracted.items() if v == NOT_AVAILABLE]
    if missing:
        log.debug("%s: no value for %s", path, ', '.join(missing))
    row: StrDict = {FILE_NAME_FIELD: Path(path).name}
    row.update((k, v) for k, v in extracted.items() if k != FILE_NAME_FIELD)
    return row


def collect_records(paths: Iterable[PathLike], fields: Iterable[str], anonymize: bool = False,
                    salt: Optional[str] = None, *, force: bool = False,
                    threads: int = DEFAULT_THREADS, progress: bool = False) -> BatchResult:
    """Process ``paths`` and gather the rows in input order.

    Unreadable files are counted and left out of ``records``. With more than
    one thread, files are read concurrently but rows still come back in the
    order of ``paths``.
    """
    paths = [str(p) for p in paths]
    worker = functools.partial(process_file, fields=list(fields), anonymize=anonymize,
                               salt=salt, force=force)
    threads = max(1, min(threads, MAX_THREAD_CAP))
    result = BatchResult()

    with ExitStack() as stack:
        if threads > 1:
            executor = stack.enter_context(ThreadPoolExecutor(max_workers=threads))
            rows: Iterable[Optional[StrDict]] = executor.map(worker, paths)
        else:
            rows = map(worker, paths)
        pairs: Iterable[Tuple[str, Optional[StrDict]]] = zip(paths, rows)
        if progress:
            stack.enter_context(logging_redirect_tqdm(loggers=[log]))
            pairs = tqdm(pairs, total=len(paths), desc='Extracting', unit='file', file=sys.stderr)
        for path, row in pairs:
            if row is None:
                result.failed += 1
                result.failures.append(path)
            else:
                result.records.append(row)
                result.processed += 1
    return result

# ---------------------------- output formatting ---------------------------

def escape_csv_field(value: str) -> str:
    """Quote ``value`` if it holds a comma, quote, LF or CR; inner quotes are doubled."""
    if not any(ch in value for ch in CSV_SPECIAL_CHARS):
        return value
    return '"' + value.replace('"', '""') + '"'


class OutputFormatter:
    """Render records as CSV or JSON with columns in ``field_names`` order.

    A field missing from a record renders as an empty string in both formats.
    """

    def __init__(self, records: Iterable[Dict[str, str]], field_names: Iterable[str]):
        self.records = list(records)
        self.field_names = list(field_names)

    def _values(self, record: Dict[str, str]) -> List[str]:
        return [str(record.get(name, '')) for name in self.field_names]

    def to_csv(self, sink: TextIO) -> None:
        sink.write(','.join(escape_csv_field(name) for name in self.field_names) + '\n')
        for record in self.records:
            sink.write(','.join(escape_csv_field(v) for v in self._values(record)) + '\n')

    def to_json(self, sink: TextIO) -> None:
        payload = [dict(zip(self.field_names, self._values(record))) for record in self.records]
        json.dump(payload, sink, indent=2, ensure_ascii=False)
        sink.write('\n')

    def render(self, output_format: str) -> str:
        buf = io.StringIO()
        if output_format == 'csv':
            self.to_csv(buf)
        elif output_format == 'json':
            self.to_json(buf)
        else:
            raise ValueError(f"Unsupported output format: {output_format!r}")
        return buf.getvalue()


def write_output(text: str, output_file: Optional[str] = None) -> None:
    """Write rendered output to ``output_file`` (overwritten) or to stdout."""
    if not output_file:
        buffer = getattr(sys.stdout, 'buffer', None)
        if buffer is None:
            sys.stdout.write(text)
            sys.stdout.flush()
            return
        # bypass text-mode newline translation and the console encoding
        sys.stdout.flush()
        buffer.write(text.encode('utf-8'))
        buffer.flush()
        return
    outpath = Path(output_file)
    outpath.parent.mkdir(parents=True, exist_ok=True)
    with open(outpath, 'w', encoding='utf-8', newline='') as f:
        f.write(text)

# ----------------------- Arg parsing with groups --------------------------

def positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {text!r}")
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="medmeta",
                                description="Extract DICOM metadata fields into a combined CSV or JSON file")
    p.add_argument("path", nargs="?", default=None,
                   help="DICOM file or directory (scanned recursively for .dcm/.dicom/.ima files)")
    p.add_argument("-c", "--config", default=None,
                   help=f"JSON config file (default: ./{DEFAULT_CONFIG_FILE} when present)")

    # Output group
    g_out = p.add_argument_group('Output options')
    g_out.add_argument("-f", "--format", choices=OUTPUT_FORMATS, default=None,
                       help="Output format (overrides config; default csv)")
    g_out.add_argument("--fields", type=str, default=None,
                       help="Comma-separated fields to extract, e.g. PatientID,Modality (overrides config)")
    g_out.add_argument("-o", "--output", type=str, default=None,
                       help="Output file, overwritten if it exists (default: stdout)")

    # Anonymization group
    g_anon = p.add_argument_group('Anonymization options')
    g_anon.add_argument("--anonymize", action="store_true",
                        help="Replace PatientID with a SHA-256 based pseudonym")
    g_anon.add_argument("--anonymize-salt", type=str, default=None,
                        help="Secret key for HMAC-SHA-256 pseudonyms (recommended)")

    # Performance & batch group
    g_perf = p.add_argument_group('Batch & performance')
    g_perf.add_argument("-t", "--threads", type=positive_int, default=DEFAULT_THREADS,
                        help="Worker threads for reading files (output order is unaffected)")
    g_perf.add_argument("--max-depth", type=positive_int, default=None,
                        help="Max recursion depth when scanning folders (1 = top level only)")
    g_perf.add_argument("--force", action="store_true",
                        help="Force read even if file meta missing (use with caution)")
    g_perf.add_argument("--no-progress", action="store_true", help="Disable the progress bar")

    # Misc
    g_misc = p.add_argument_group('Misc')
    g_misc.add_argument("-q", "--quiet", action="store_true", help="Quiet mode (errors only)")
    g_misc.add_argument("-v", "--verbose", action="count", default=0, help="Verbose mode (-v, -vv)")
    g_misc.add_argument("--log-file", type=str, default=None, help="Optional log file path")
    g_misc.add_argument("--no-banner", action="store_true", help="Skip banner display")
    g_misc.add_argument("--no-color", action="store_true", help="Disable colored diagnostics")
    g_misc.add_argument("--list-fields", action="store_true", help="List supported field names and exit")
    g_misc.add_argument("--version", action="store_true", help="Show version and exit")
    return p

# --------------------------------- Main ---------------------------------

def resolve_settings(args: argparse.Namespace) -> Settings:
    if args.config:
        settings = load_settings(args.config)
    elif Path(DEFAULT_CONFIG_FILE).is_file():
        settings = load_settings(DEFAULT_CONFIG_FILE)
    else:
        log.debug("No config file given and ./%s not found; using defaults", DEFAULT_CONFIG_FILE)
        settings = Settings()
    return apply_overrides(settings, args)


def run(argv: Optional[List[str]] = None) -> int:
    """Run the command line tool; returns the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"medmeta {__version__}")
        return 0

    if args.list_fields:
        for name, tag in FIELD_TAGS.items():
            print(f"{name}\t({tag.group:04X},{tag.element:04X})")
        return 0

    configure_logging(args.quiet, args.verbose, args.log_file, color=False if args.no_color else None)
    show_banner(args)

    settings = resolve_settings(args)

    if not args.path:
        log.error('No input path provided. Pass a DICOM file or directory.')
        return 1
    if not Path(args.path).exists():
        log.error('Input path does not exist: %s', args.path)
        return 1

    files = find_dicom_files(args.path, max_depth=args.max_depth)
    if not files:
        log.error('No DICOM files found under %s', args.path)
        return 1

    if not settings.fields:
        log.warning('No fields configured; only %s will be written.', FILE_NAME_FIELD)
    unknown = [f for f in settings.fields if f != FILE_NAME_FIELD and f not in FIELD_TAGS]
    if unknown:
        log.warning('Unknown field(s) will be reported as %s: %s', NOT_AVAILABLE, ', '.join(unknown))
    if settings.anonymize and not settings.anonymize_salt:
        log.debug('Anonymizing without a salt; pseudonyms are plain SHA-256 digests')

    field_names = build_field_list(settings.fields)
    log.info('Processing %d file(s)', len(files))
    show_progress = len(files) > 1 and not (args.quiet or args.no_progress) and is_terminal(sys.stderr)
    batch = collect_records(files, field_names[1:], anonymize=settings.anonymize,
                            salt=settings.anonymize_salt or None, force=args.force,
                            threads=args.threads, progress=show_progress)

    if not batch.records:
        log.error('No files were processed successfully (%d failed). Nothing written.', batch.failed)
        return 1

    text = OutputFormatter(batch.records, field_names).render(settings.output_format)
    try:
        write_output(text, settings.output_file)
    except (OSError, UnicodeError) as e:
        log.error('Failed to write output to %s: %s', settings.output_file or '<stdout>', e)
        return 1
    if settings.output_file:
        log.info('Saved %s -> %s', settings.output_format.upper(), settings.output_file)

    log.info('Processed %d file(s), %d failed', batch.processed, batch.failed)
    return 0


def main() -> None:
    sys.exit(run())


if __name__ == '__main__':
    main()
