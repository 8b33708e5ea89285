"""Command-line batch driver.

Usage:
    tempometer                         # scan ./test
    tempometer scan path/to/dir        # scan a directory
    tempometer scan --workers 4 -v     # thread pool, INFO logging
    tempometer track 123456            # fetch track metadata
"""

import argparse
import logging
import sys
import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from tempometer.analysis.engine import TempoEngine
from tempometer.analysis.models import FileReport
from tempometer.audio.loader import AudioLoadError
from tempometer.config import settings
from tempometer.metadata import fetch_track

logger = logging.getLogger(__name__)

COMMANDS = ("scan", "track")

# Serializes report lines so one file's output is never interleaved.
_report_lock = threading.Lock()


def list_audio_files(folder: Path, extensions=None) -> list[Path]:
    """Direct children of *folder* with an accepted (case-sensitive) suffix."""
    extensions = tuple(extensions or settings.audio_extensions)
    return sorted(
        p for p in folder.iterdir()
        if p.is_file() and p.suffix in extensions
    )


def quote_name(name: str) -> str:
    """Double-quote a file name, escaping backslashes and quotes."""
    return '"' + name.replace("\\", "\\\\").replace('"', '\\"') + '"'


def format_bpm(bpm: float) -> str:
    return f"{bpm:g}"


def analyze_one(engine: TempoEngine, path: Path) -> FileReport:
    """Analyze one file, turning per-file failures into a report."""
    try:
        result = engine.analyze_file(path)
    except AudioLoadError as e:
        return FileReport(path=str(path), error=e)
    except Exception as e:
        logger.exception(f"Unexpected failure analyzing {path}")
        return FileReport(path=str(path), error=e)
    return FileReport(path=str(path), bpm=result.bpm)


def report(rep: FileReport, out=None, err=None) -> None:
    out = out or sys.stdout
    err = err or sys.stderr
    with _report_lock:
        if rep.ok:
            print(f"Detected BPM for {rep.path}: {format_bpm(rep.bpm)}", file=out, flush=True)
        else:
            kind = getattr(rep.error, "kind", "Error")
            print(f"{kind}: {rep.error}", file=err, flush=True)


def scan(folder: Path, workers: int = 1, out=None, err=None) -> list[FileReport]:
    """Analyze every audio file in *folder* and print one report per file."""
    out = out or sys.stdout
    err = err or sys.stderr

    if not folder.is_dir():
        print(f"NotFound: Directory not found: {folder}", file=err, flush=True)
        return []

    files = list_audio_files(folder)
    for path in files:
        print(f"Found: {quote_name(path.name)}", file=out, flush=True)
    logger.info(f"{len(files)} audio file(s) in {folder}")

    engine = TempoEngine()

    def _process(path: Path) -> FileReport:
        rep = analyze_one(engine, path)
        report(rep, out=out, err=err)
        return rep

    if workers <= 1:
        return [_process(p) for p in files]

    with ThreadPoolExecutor(max_workers=workers) as pool:
        return list(pool.map(_process, files))


def show_track(track_id: str, client_id: str, out=None) -> None:
    out = out or sys.stdout
    resp = fetch_track(track_id, client_id)
    if resp.ok:
        print(f"Track Data: {resp.text}", file=out)
    else:
        print(f"Failed to fetch track! Status Code: {resp.status_code}", file=out)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tempometer",
        description="Envelope-based tempo estimation for a directory of audio files",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="-v for INFO, -vv for DEBUG logging")
    sub = parser.add_subparsers(dest="command")

    p_scan = sub.add_parser("scan", help="Estimate BPM for each audio file in a directory")
    p_scan.add_argument("directory", nargs="?", type=Path, default=None,
                        help=f"Directory to scan (default: ./{settings.audio_dir})")
    p_scan.add_argument("-w", "--workers", type=int, default=None,
                        help="Analyze files on a thread pool of this size")

    p_track = sub.add_parser("track", help="Fetch metadata for a track id")
    p_track.add_argument("track_id")
    p_track.add_argument("--client-id", default=None,
                         help="API client id (default: TEMPOMETER_CLIENT_ID)")
    return parser


def _with_default_command(argv: list[str]) -> list[str]:
    if any(a in COMMANDS for a in argv) or any(a in ("-h", "--help") for a in argv):
        return argv
    return [*[a for a in argv if a.startswith("-v")], "scan",
            *[a for a in argv if not a.startswith("-v")]]


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(_with_default_command(list(sys.argv[1:] if argv is None else argv)))

    level = {0: logging.WARNING, 1: logging.INFO}.get(args.verbose, logging.DEBUG)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    if args.command == "track":
        client_id = args.client_id or settings.client_id
        if not client_id:
            parser.error("no client id: pass --client-id or set TEMPOMETER_CLIENT_ID")
        show_track(args.track_id, client_id)
        return 0

    folder = args.directory or (Path.cwd() / settings.audio_dir)
    workers = args.workers if args.workers is not None else settings.workers
    scan(folder, workers=workers)
    return 0


if __name__ == "__main__":
    sys.exit(main())
