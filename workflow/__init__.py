"""Orchestration of ingest, download and verification."""

from workflow.context import IntegrityContext, build_context
from workflow.integrity_workflow import IntegrityWorkflow

__all__ = [
    "IntegrityContext",
    "IntegrityWorkflow",
    "build_context",
]
