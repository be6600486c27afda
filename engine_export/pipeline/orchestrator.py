#!/usr/bin/env python3
"""
Export Orchestrator

Runs the engine export stages in order:
- synonyms         -> synonyms.json
- curations        -> curations.json
- curation_urls    -> rewrites curations.json with document URLs
- search_settings  -> search_settings.json

The first failing stage aborts the run; later stages are cancelled and the
files written by earlier stages are left in place.

Usage:
    # Full export into the current directory
    python -m engine_export

    # Run specific steps
    python -m engine_export --steps synonyms,search_settings

    # Dry run (show what would run)
    python -m engine_export --dry-run

    # Export somewhere else, using a specific env file
    python -m engine_export --output-dir backups/prod --env-file .env.prod
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from engine_export.client import EngineAPIClient
from engine_export.config import (
    DEFAULT_ENV_FILE,
    ExportConfig,
    describe_config,
    load_config,
    load_env_file,
)
from engine_export.exceptions import ConfigurationError, ExportError
from engine_export.export import (
    CURATIONS_FILE,
    SEARCH_SETTINGS_FILE,
    SYNONYMS_FILE,
    CurationExporter,
    CurationURLResolver,
    SearchSettingsExporter,
    SynonymExporter,
)
from engine_export.progress import NullProgress, ProgressReporter, TqdmProgress

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


class StepStatus(Enum):
    """Status of an export step."""
    PENDING = "pending"
    RUNNING = "running"
    SUCCESS = "success"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass
class ExportStep:
    """
    A single stage of the export.

    depends_on is informational: it is shown by --list-steps but not
    enforced, so curation_urls can run alone against an existing
    curations.json.
    """
    name: str
    description: str
    endpoint: str
    output_file: str
    depends_on: List[str] = field(default_factory=list)
    action: Optional[Callable[[], Any]] = field(default=None, repr=False)

    # Runtime state
    status: StepStatus = StepStatus.PENDING
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    duration_seconds: float = 0.0
    error: str = ""


@dataclass
class ExportResult:
    """Result of a full export run."""
    run_id: str
    started_at: str
    completed_at: Optional[str] = None
    duration_seconds: float = 0.0
    status: str = "pending"

    # Step results
    total_steps: int = 0
    steps_succeeded: int = 0
    steps_failed: int = 0
    steps_cancelled: int = 0

    # Detailed results
    step_results: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    files_written: List[str] = field(default_factory=list)

    # Errors
    errors: List[str] = field(default_factory=list)


# Canonical execution order; selected subsets always run in this order
STEP_ORDER = ["synonyms", "curations", "curation_urls", "search_settings"]

# name -> (description, endpoint, output file, depends on)
STEP_DEFINITIONS = {
    "synonyms": (
        "Export synonym sets",
        EngineAPIClient.SYNONYMS,
        SYNONYMS_FILE,
        [],
    ),
    "curations": (
        "Export curations with promoted or hidden documents",
        EngineAPIClient.CURATIONS,
        CURATIONS_FILE,
        [],
    ),
    "curation_urls": (
        "Replace curated document ids with URLs",
        EngineAPIClient.DOCUMENTS,
        CURATIONS_FILE,
        ["curations"],
    ),
    "search_settings": (
        "Export search field settings",
        EngineAPIClient.SEARCH_SETTINGS,
        SEARCH_SETTINGS_FILE,
        [],
    ),
}


class ExportOrchestrator:
    """
    Orchestrates the export run.

    Steps share one API client. Nothing is retried: the first step that
    raises an ExportError fails the run and the remaining steps are
    cancelled.
    """

    def __init__(
        self,
        config: ExportConfig,
        client: Optional[EngineAPIClient] = None,
        progress: Optional[ProgressReporter] = None,
        dry_run: bool = False,
    ):
        self.config = config
        self.dry_run = dry_run
        self._owns_client = client is None
        self.client = client or EngineAPIClient(config)
        self._progress = progress

    def _reporter(self, unit: str) -> ProgressReporter:
        if self._progress is not None:
            return self._progress
        return TqdmProgress(unit=unit)

    def _step_actions(self) -> Dict[str, Callable[[], Any]]:
        config, client = self.config, self.client
        return {
            "synonyms": lambda: SynonymExporter(
                config, client, self._reporter("page")
            ).export(),
            "curations": lambda: CurationExporter(
                config, client, self._reporter("page")
            ).export(),
            "curation_urls": lambda: CurationURLResolver(
                config, client, self._reporter("curation")
            ).resolve_file(),
            "search_settings": lambda: SearchSettingsExporter(config, client).export(),
        }

    def _build_steps(self) -> Dict[str, ExportStep]:
        """Build step definitions bound to this run's config and client."""
        actions = self._step_actions()
        steps = {}
        for name in STEP_ORDER:
            description, endpoint, output_file, depends_on = STEP_DEFINITIONS[name]
            steps[name] = ExportStep(
                name=name,
                description=description,
                endpoint=endpoint,
                output_file=output_file,
                depends_on=list(depends_on),
                action=actions[name],
            )
        return steps

    @staticmethod
    def select_steps(step_names: Optional[List[str]] = None) -> List[str]:
        """
        Validate requested step names and return them in execution order.

        Raises:
            ValueError: if a name is not a known step
        """
        if not step_names:
            return list(STEP_ORDER)
        unknown = [name for name in step_names if name not in STEP_ORDER]
        if unknown:
            raise ValueError(
                f"Unknown step(s): {', '.join(unknown)}. "
                f"Available: {', '.join(STEP_ORDER)}"
            )
        return [name for name in STEP_ORDER if name in step_names]

    def _run_step(self, step: ExportStep) -> bool:
        """
        Execute a single export step.

        Returns:
            True if successful, False otherwise
        """
        step.status = StepStatus.RUNNING
        step.start_time = datetime.now()

        logger.info(f"Running step: {step.name}")

        if self.dry_run:
            logger.info(
                f"[DRY RUN] Would GET {self.client.build_url(step.endpoint)} "
                f"and write {self.config.output_path(step.output_file)}"
            )
            step.status = StepStatus.SUCCESS
            step.end_time = datetime.now()
            return True

        try:
            step.action()
            step.status = StepStatus.SUCCESS
            logger.info(f"Step {step.name} completed successfully")
        except ExportError as e:
            step.status = StepStatus.FAILED
            step.error = str(e)
            logger.error(f"Step {step.name} failed: {e}")

        step.end_time = datetime.now()
        step.duration_seconds = (step.end_time - step.start_time).total_seconds()

        return step.status == StepStatus.SUCCESS

    def run(self, step_names: Optional[List[str]] = None) -> ExportResult:
        """
        Run the export.

        Args:
            step_names: Optional list of specific steps to run

        Returns:
            ExportResult with detailed results
        """
        run_id = f"export_{datetime.now().strftime('%Y%m%d_%H%M%S')}"
        result = ExportResult(
            run_id=run_id,
            started_at=datetime.now().isoformat()
        )

        order = self.select_steps(step_names)
        steps = self._build_steps()
        result.total_steps = len(order)

        logger.info(f"Starting export {run_id} of engine '{self.config.engine_name}'")

        failed = False
        try:
            for name in order:
                step = steps[name]

                if failed:
                    step.status = StepStatus.CANCELLED
                    result.steps_cancelled += 1
                    result.step_results[name] = {"status": "cancelled"}
                    continue

                success = self._run_step(step)

                result.step_results[name] = {
                    "status": step.status.value,
                    "duration": step.duration_seconds,
                }

                if success:
                    result.steps_succeeded += 1
                    output = str(self.config.output_path(step.output_file))
                    if not self.dry_run and output not in result.files_written:
                        result.files_written.append(output)
                else:
                    result.steps_failed += 1
                    result.errors.append(f"Step {name} failed: {step.error}")
                    failed = True
        finally:
            if self._owns_client:
                self.client.close()

        result.status = "failed" if failed else "success"

        # Finalize result
        result.completed_at = datetime.now().isoformat()
        started = datetime.fromisoformat(result.started_at)
        completed = datetime.fromisoformat(result.completed_at)
        result.duration_seconds = (completed - started).total_seconds()

        logger.info(
            f"Export {run_id} completed: {result.status} "
            f"({result.steps_succeeded} succeeded, {result.steps_failed} failed, "
            f"{result.steps_cancelled} cancelled)"
        )

        return result


def run_export(
    config: ExportConfig,
    steps: Optional[List[str]] = None,
    progress: Optional[ProgressReporter] = None,
) -> ExportResult:
    """Run the export with a fresh API client."""
    orchestrator = ExportOrchestrator(config, progress=progress)
    return orchestrator.run(steps)


def print_summary(result: ExportResult) -> None:
    print("\n" + "=" * 60)
    print("EXPORT SUMMARY")
    print("=" * 60)
    print(f"Run ID: {result.run_id}")
    print(f"Status: {result.status.upper()}")
    print(f"Duration: {result.duration_seconds:.2f}s")
    print(f"\nSteps:")
    print(f"  Succeeded: {result.steps_succeeded}")
    print(f"  Failed: {result.steps_failed}")
    print(f"  Cancelled: {result.steps_cancelled}")

    if result.step_results:
        print("\nStep Details:")
        for name, details in result.step_results.items():
            status = details.get("status", "unknown")
            duration = details.get("duration", 0)
            print(f"  {name}: {status} ({duration:.2f}s)")

    if result.files_written:
        print("\nFiles:")
        for path in result.files_written:
            print(f"  {path}")

    if result.errors:
        print("\nErrors:")
        for error in result.errors:
            print(f"  - {error}")

    print("=" * 60)


def list_steps() -> None:
    print("\nAvailable Export Steps:")
    print("=" * 60)

    for name in STEP_ORDER:
        description, endpoint, output_file, depends_on = STEP_DEFINITIONS[name]
        deps = ", ".join(depends_on) if depends_on else "none"
        print(f"  {name}: {description}")
        print(f"    Endpoint: {endpoint}")
        print(f"    Writes: {output_file}")
        print(f"    Depends on: {deps}")

    print("=" * 60)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="engine-export",
        description="Export synonyms, curations and search settings of a search engine",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        "--steps",
        type=str,
        help=f"Comma-separated list of steps to run ({','.join(STEP_ORDER)})"
    )

    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("."),
        help="Directory for the exported JSON files (default: current directory)"
    )

    parser.add_argument(
        "--env-file",
        type=Path,
        help=f"Env file to load before reading the environment (default: {DEFAULT_ENV_FILE} if present)"
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would run without calling the API"
    )

    parser.add_argument(
        "--show-config",
        action="store_true",
        help="Print the resolved configuration (API key masked) and exit"
    )

    parser.add_argument(
        "--list-steps",
        action="store_true",
        help="List available steps and exit"
    )

    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Hide progress bars"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.list_steps:
        list_steps()
        return 0

    step_names = [s.strip() for s in args.steps.split(",") if s.strip()] if args.steps else None
    try:
        ExportOrchestrator.select_steps(step_names)
    except ValueError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    if args.env_file is not None and not args.env_file.exists():
        print(f"ERROR: Env file not found: {args.env_file}", file=sys.stderr)
        return 2
    load_env_file(args.env_file or DEFAULT_ENV_FILE)

    try:
        config = load_config(output_dir=args.output_dir)
    except ConfigurationError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    if args.show_config:
        print("Configuration:")
        for line in describe_config(config):
            print(f"  {line}")
        return 0

    orchestrator = ExportOrchestrator(
        config,
        progress=NullProgress() if args.quiet else None,
        dry_run=args.dry_run,
    )
    result = orchestrator.run(step_names)

    print_summary(result)

    if result.status != "success":
        return 1

    print("🎉 Done!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
