from __future__ import annotations

from decimal import Decimal
from typing import Iterable, List, Optional

from splitshare.config import Settings, get_settings
from splitshare.models import ParticipantId, SplitState, SplitStrategy
from splitshare.services import participants, settlement, strategies, validation
from splitshare.services.settlement import Transfer
from splitshare.services.strategies import Allocation
from splitshare.services.validation import SplitSummary
from splitshare.utils.parse import NumberLike


class SplitEngine:
    """Split operations bound to one explicit :class:`Settings` instance."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or get_settings()

    def new_state(self, *, is_split: bool = True) -> SplitState:
        return SplitState(is_split=is_split, currency=self.settings.default_currency)

    # Derived values

    def calculate(self, state: SplitState) -> Allocation:
        return strategies.calculate(state)

    def is_valid(self, state: SplitState) -> bool:
        return validation.is_valid(state, self.settings)

    def remainder(self, state: SplitState) -> Decimal:
        return validation.remainder(state)

    def remaining_percentage(self, state: SplitState) -> Decimal:
        return validation.remaining_percentage(state)

    def over_allocated(self, state: SplitState) -> Decimal:
        return validation.over_allocated(state)

    def total_shares(self, state: SplitState) -> int:
        return validation.total_shares(state)

    def validation_message(self, state: SplitState) -> str:
        return validation.validation_message(state, self.settings)

    def summarize(self, state: SplitState) -> SplitSummary:
        return validation.summarize(state, self.settings)

    # Mutators

    def set_total(self, state: SplitState, value: NumberLike) -> bool:
        return participants.set_total(state, value, self.settings.max_amount)

    def add_participant(self, state: SplitState, participant_id: ParticipantId) -> bool:
        return participants.add_participant(state, participant_id)

    def add_group(self, state: SplitState, member_ids: Iterable[ParticipantId]) -> int:
        return participants.add_group(state, member_ids)

    def remove_participant(self, state: SplitState, participant_id: ParticipantId) -> bool:
        return participants.remove_participant(state, participant_id, self.settings)

    def toggle_participant(self, state: SplitState, participant_id: ParticipantId) -> bool:
        return participants.toggle_participant(state, participant_id, self.settings)

    def select_payer(self, state: SplitState, participant_id: ParticipantId) -> bool:
        return participants.select_payer(state, participant_id)

    def clear_payer(self, state: SplitState) -> bool:
        return participants.clear_payer(state)

    def set_strategy(self, state: SplitState, strategy: SplitStrategy) -> bool:
        return participants.set_strategy(state, strategy)

    def update_raw_input(
        self,
        state: SplitState,
        participant_id: ParticipantId,
        field: str,
        value: NumberLike,
    ) -> bool:
        return participants.update_raw_input(state, participant_id, field, value, self.settings)

    # Hand-off

    def finalize(self, state: SplitState) -> dict[ParticipantId, int]:
        return settlement.finalize(state, self.settings)

    def settle_with_payer(self, state: SplitState) -> List[Transfer]:
        return settlement.settle_with_payer(state, self.settings)
