"""Orchestration module for digest runs."""

from discuss_digest.orchestration.digest_run import DigestRun
from discuss_digest.orchestration.result import CutoffSource, RunResult

__all__ = [
    "DigestRun",
    "RunResult",
    "CutoffSource",
]
