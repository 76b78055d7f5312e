"""Domain services for pagepurge."""

from pagepurge.core.services.accumulator import EpochAccumulator
from pagepurge.core.services.classifier import (
    changed_profile_fields,
    comment_visibility_changed,
    is_eligible,
    should_purge,
)
from pagepurge.core.services.expander import EntityExpander
from pagepurge.core.services.flush import EpochState, FlushCoordinator, FlushReport
from pagepurge.core.services.purger import Purger, bootstrap, create_purger

__all__ = [
    "Purger",
    "create_purger",
    "bootstrap",
    # Epoch state and flushing
    "EpochAccumulator",
    "EpochState",
    "FlushCoordinator",
    "FlushReport",
    # Expansion
    "EntityExpander",
    # Classification
    "should_purge",
    "is_eligible",
    "comment_visibility_changed",
    "changed_profile_fields",
]
