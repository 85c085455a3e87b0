"""Engine exceptions.

Two classes only: bad caller input, and broken forest invariants. Nothing in
the engine is transient, so nothing here is meant to be retried.
"""

from __future__ import annotations


class InvalidInputError(ValueError):
    """Grid, granularity or distance output rejected before segmentation."""


class ForestConsistencyError(RuntimeError):
    """A disjoint-set forest precondition was violated (driver bug)."""
