"""Ordered removal attempts for a single module version.

A removal tries each applicable method in turn and stops at the first
one that succeeds. Every call produces exactly one RemovalResult.
"""

import logging
from collections.abc import Callable
from pathlib import Path

from psmodctl.models.action import RemovalMethod, RemovalResult, RemovalStatus
from psmodctl.providers.errors import ProviderError
from psmodctl.utils.version import ModuleVersion

logger = logging.getLogger(__name__)

RemovalAttempt = tuple[RemovalMethod, Callable[[], None]]


def run_removal_chain(
    name: str,
    version: ModuleVersion,
    path: Path | None,
    attempts: list[RemovalAttempt],
) -> RemovalResult:
    """Run removal attempts in order until one succeeds.

    Args:
        name: Module name.
        version: Version being removed.
        path: Directory holding the version, if known.
        attempts: (method, action) pairs; an action signals failure by
            raising ProviderError or OSError.

    Returns:
        REMOVED with the succeeding method, or FAILED with the last method
        tried and every captured error message.
    """
    if not attempts:
        msg = "At least one removal attempt is required"
        raise ValueError(msg)

    errors: list[str] = []
    for method, action in attempts:
        try:
            action()
        except (ProviderError, OSError) as e:
            logger.warning("%s of %s %s failed: %s", method.value, name, version, e)
            errors.append(f"{method.value}: {e}")
            continue
        return RemovalResult(
            name=name,
            version=version,
            path=path,
            method=method,
            status=RemovalStatus.REMOVED,
        )

    return RemovalResult(
        name=name,
        version=version,
        path=path,
        method=attempts[-1][0],
        status=RemovalStatus.FAILED,
        message="; ".join(errors),
    )
