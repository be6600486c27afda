"""
Export Pipeline Module

Runs the export stages in order:
- Stage selection
- Abort on first failure
- Progress reporting
- Run summary
"""

from engine_export.pipeline.orchestrator import (
    ExportOrchestrator,
    ExportStep,
    ExportResult,
    STEP_ORDER,
    run_export,
)

__all__ = [
    "ExportOrchestrator",
    "ExportStep",
    "ExportResult",
    "STEP_ORDER",
    "run_export",
]
