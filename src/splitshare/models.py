from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Hashable, Optional, TypeAlias

ParticipantId: TypeAlias = Hashable

ZERO = Decimal("0")
HUNDRED = Decimal("100")


class SplitStrategy(str, Enum):
    EQUALLY = "equally"
    EXACT_AMOUNTS = "exact_amounts"
    PERCENTAGES = "percentages"
    SHARES = "shares"
    ADJUSTMENTS = "adjustments"


RAW_INPUT_FIELDS = ("amount", "percentage", "shares", "adjustment")


@dataclass(slots=True)
class RawInput:
    """Per-participant values typed by the user.

    Only the field that belongs to the active strategy is read; the others
    are kept around untouched.
    """

    amount: Optional[Decimal] = None
    percentage: Optional[Decimal] = None
    shares: Optional[int] = None
    adjustment: Optional[Decimal] = None


@dataclass(slots=True, frozen=True)
class AllocationRecord:
    amount: Decimal
    percentage: Decimal
    shares: int = 1
    adjustment: Decimal = ZERO


@dataclass(slots=True)
class SplitState:
    """Working state of one shared-expense flow.

    ``participant_ids`` keeps selection order and never holds duplicates.
    Mutate it only through :mod:`splitshare.services.participants`.
    """

    total: Decimal = ZERO
    strategy: SplitStrategy = SplitStrategy.EQUALLY
    participant_ids: list[ParticipantId] = field(default_factory=list)
    payer_id: Optional[ParticipantId] = None
    raw_inputs: dict[ParticipantId, RawInput] = field(default_factory=dict)
    is_split: bool = True
    currency: str = "USD"

    @property
    def participant_count(self) -> int:
        return len(self.participant_ids)

    def has_participant(self, participant_id: ParticipantId) -> bool:
        return participant_id in self.participant_ids
