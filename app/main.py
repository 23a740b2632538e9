"""Command-line entry point for the speech test pipeline."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from app.config import Config
from app.dependencies import get_bootstrap_service, get_test_pipeline_service
from core.ci import error_annotation, export_env
from core.exceptions import SpeechTestCIException
from services.test_pipeline_service import PipelineResult
from services.trigger_resolver import resolve_trigger

logger = logging.getLogger(__name__)


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="speech-test-ci",
        description="Speech Test CI - Continuously test a Custom Speech model against updated testing data",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  bootstrap   Create the test-results and configuration containers if missing
  test        Upload testing data, test the benchmark or baseline model, archive results
  run         bootstrap, then test

Examples:
  python main.py run                                   # Use GITHUB_REF / git HEAD
  python main.py test --ref refs/tags/BASELINE001      # Force a baseline test
  python main.py -v test --sha 1a2b3c4                 # Verbose, explicit commit
        """,
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("bootstrap", help="Ensure storage containers exist")
    for name, help_text in (
        ("test", "Run the test pipeline"),
        ("run", "Run bootstrap then the test pipeline"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument(
            "--ref",
            default=None,
            help="Git ref of the trigger (default: $GITHUB_REF)",
        )
        sub.add_argument(
            "--sha",
            default=None,
            help="Short commit hash for data-update runs (default: git rev-parse --short HEAD)",
        )
        sub.add_argument(
            "--source-zip",
            default=None,
            metavar="PATH",
            help="Testing archive with .wav files and the transcript (default: $TEST_ZIP_SOURCE_PATH)",
        )
    return parser


def configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
    else:
        logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
        # Azure SDK logs every HTTP request at INFO
        logging.getLogger("azure").setLevel(logging.WARNING)


def run_bootstrap() -> List[str]:
    created = get_bootstrap_service().ensure_containers()
    for name in created:
        print(f"CREATED {name.upper()} CONTAINER.")
    return created


def run_test_pipeline(ref: Optional[str], sha: Optional[str], source_zip: Optional[str]) -> PipelineResult:
    trigger = resolve_trigger(
        ref if ref is not None else Config.GITHUB_REF,
        short_sha=sha,
        full_sha=Config.GITHUB_SHA,
    )
    pipeline = get_test_pipeline_service()
    result = pipeline.run(trigger, Path(source_zip or Config.TEST_ZIP_SOURCE_PATH))
    export_env(result.to_env())

    print(f"TESTED MODEL {result.model_id} WITH TEST {result.test_id}.")
    print(f"TEST SUMMARY: {Config.TEST_RESULTS_CONTAINER}/{result.summary_blob}")
    print(f"TEST RESULTS: {Config.TEST_RESULTS_CONTAINER}/{result.results_blob}")
    if result.pointer_updated:
        print(f"BENCHMARK UPDATED: {result.summary_blob}")
    return result


def main(argv: Optional[List[str]] = None) -> int:
    """Run the CLI. Returns the process exit code."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        Config.validate(require_speech=args.command != "bootstrap")
        if args.command in ("bootstrap", "run"):
            run_bootstrap()
        if args.command in ("test", "run"):
            run_test_pipeline(args.ref, args.sha, args.source_zip)
    except SpeechTestCIException as e:
        logger.error(f"{type(e).__name__}: {e}")
        error_annotation(str(e))
        return 1
    return 0


def cli_entry() -> None:
    """Console script entry point."""
    sys.exit(main())
