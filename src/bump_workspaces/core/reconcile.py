"""Turn an aggregated decision into a concrete next version.

Rules, in order:

1. A module with no version at the start point is new. Its change is the
   difference between its current version and ``0.0.0``.
2. A module whose version differs from the start point was bumped by hand.
   The manual change wins over whatever the commits ask for.
3. Otherwise the decision's severity is applied to the current version.
   On a ``0.x`` line, ``major`` becomes ``minor`` and ``minor`` becomes
   ``patch``. On a prerelease line every change is a new prerelease.
"""

from __future__ import annotations

import logging

from bump_workspaces.core.models import ModuleDecision, VersionResolution
from bump_workspaces.core.version import (
    ZERO_VERSION,
    BumpType,
    increment_version,
    parse_version,
    version_diff,
)
from bump_workspaces.exceptions import VersionResolutionError

logger = logging.getLogger(__name__)


def manual_resolution(
    decision: ModuleDecision,
    from_version: str,
    to_version: str,
) -> VersionResolution:
    """Resolve a module whose version was already changed outside this tool.

    Raises:
        VersionResolutionError: If the two versions show no change
    """
    magnitude = version_diff(to_version, from_version)
    if magnitude is None:
        raise VersionResolutionError(decision.module, from_version, to_version)
    return VersionResolution(
        module=decision.module,
        from_version=from_version,
        to_version=to_version,
        magnitude=magnitude,
        manual=True,
        decision=decision,
    )


def effective_bump(severity: BumpType, current_version: str) -> BumpType:
    """Adjust a requested severity to the release line of ``current_version``."""
    current = parse_version(current_version)
    bump = severity
    if current.major == 0:
        if bump is BumpType.MAJOR:
            bump = BumpType.MINOR
        elif bump is BumpType.MINOR:
            bump = BumpType.PATCH
    if current.prerelease:
        bump = BumpType.PRERELEASE
    return bump


def reconcile(
    decision: ModuleDecision,
    current_version: str,
    prior_version: str | None,
) -> VersionResolution:
    """Compute the next version of a module.

    Args:
        decision: Aggregated commit decision for the module
        current_version: Version recorded now
        prior_version: Version recorded at the start point, or None if the
            module did not exist then

    Returns:
        The resolved version change

    Raises:
        VersionResolutionError: If a manual edit cannot be interpreted
    """
    current_version = current_version.strip()
    if prior_version is None:
        logger.info("New module %s detected at %s", decision.module, current_version)
        return manual_resolution(decision, ZERO_VERSION, current_version)

    prior_version = prior_version.strip()
    if prior_version != current_version:
        logger.info(
            "Manual version update detected for %s: %s -> %s",
            decision.module,
            prior_version,
            current_version,
        )
        return manual_resolution(decision, prior_version, current_version)

    magnitude = effective_bump(decision.severity, current_version)
    if magnitude is not decision.severity:
        logger.debug("%s: %s adjusted to %s on %s", decision.module, decision.severity, magnitude, current_version)

    return VersionResolution(
        module=decision.module,
        from_version=current_version,
        to_version=increment_version(current_version, magnitude),
        magnitude=magnitude,
        decision=decision,
    )
