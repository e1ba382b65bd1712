# -*- encoding: utf-8 -*-
"""
Basanos runtime configuration.

Settings are read from environment variables so that a host process
(CLI, server, test) can tune engine defaults without code changes:

    BASANOS_TRAVERSAL_DEPTH   default max_depth for graph traversal (2)
    BASANOS_SKIP_STATUSES     comma-separated constraint statuses that the
                              constraint engine treats as not applicable
                              (empty by default, so candidates dry-run)
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from basanos.constraints.types import ConstraintStatus

logger = logging.getLogger(__name__)

DEFAULT_TRAVERSAL_DEPTH = 2


@dataclass
class BasanosConfig:
    """Engine defaults shared by OntologyEngine and ConstraintEngine."""
    traversal_depth: int = DEFAULT_TRAVERSAL_DEPTH
    skip_statuses: frozenset[ConstraintStatus] = field(default_factory=frozenset)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "BasanosConfig":
        """
        Build a config from environment variables.

        Unparseable values are logged and replaced by the default rather
        than raised, since a bad variable should not take the host down.

        Args:
            environ: Mapping to read from (default: os.environ)
        """
        env = os.environ if environ is None else environ

        depth = DEFAULT_TRAVERSAL_DEPTH
        raw_depth = env.get("BASANOS_TRAVERSAL_DEPTH", "").strip()
        if raw_depth:
            try:
                depth = int(raw_depth)
            except ValueError:
                logger.warning(
                    "Ignoring BASANOS_TRAVERSAL_DEPTH=%r (not an integer)", raw_depth
                )
            else:
                if depth < 0:
                    logger.warning(
                        "Ignoring BASANOS_TRAVERSAL_DEPTH=%r (negative)", raw_depth
                    )
                    depth = DEFAULT_TRAVERSAL_DEPTH

        statuses = set()
        for item in env.get("BASANOS_SKIP_STATUSES", "").split(","):
            item = item.strip().lower()
            if not item:
                continue
            try:
                statuses.add(ConstraintStatus(item))
            except ValueError:
                logger.warning("Ignoring unknown status %r in BASANOS_SKIP_STATUSES", item)

        return cls(traversal_depth=depth, skip_statuses=frozenset(statuses))
