"""Shared-expense split allocation engine."""

from splitshare.config import Settings, get_settings
from splitshare.engine import SplitEngine
from splitshare.errors import SplitError, UnbalancedSplitError, UnknownFieldError
from splitshare.models import AllocationRecord, RawInput, SplitState, SplitStrategy
from splitshare.services.recalc import SplitController
from splitshare.services.settlement import Transfer
from splitshare.services.validation import SplitSummary

__all__ = [
    "AllocationRecord",
    "RawInput",
    "Settings",
    "SplitController",
    "SplitEngine",
    "SplitError",
    "SplitState",
    "SplitStrategy",
    "SplitSummary",
    "Transfer",
    "UnbalancedSplitError",
    "UnknownFieldError",
    "get_settings",
]
