from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Optional

from splitshare.config import Settings
from splitshare.errors import UnknownFieldError
from splitshare.logging import get_logger
from splitshare.models import HUNDRED, RAW_INPUT_FIELDS, ParticipantId, RawInput, SplitState, SplitStrategy
from splitshare.utils.parse import MAX_AMOUNT, NumberLike, to_money, to_percentage, to_shares, to_signed_money

log = get_logger(__name__)


def default_raw_input(strategy: SplitStrategy, total: Decimal, participant_count: int) -> Optional[RawInput]:
    if participant_count <= 0 or strategy is SplitStrategy.EQUALLY:
        return None

    n = Decimal(participant_count)
    if strategy is SplitStrategy.EXACT_AMOUNTS:
        return RawInput(amount=total / n)
    if strategy is SplitStrategy.PERCENTAGES:
        return RawInput(percentage=HUNDRED / n)
    if strategy is SplitStrategy.SHARES:
        return RawInput(shares=1)
    return RawInput(adjustment=Decimal("0"))


def _initialize_default(state: SplitState, participant_id: ParticipantId) -> None:
    if participant_id in state.raw_inputs:
        return
    raw = default_raw_input(state.strategy, state.total, state.participant_count)
    if raw is not None:
        state.raw_inputs[participant_id] = raw


def initialize_defaults(state: SplitState) -> None:
    for pid in state.participant_ids:
        _initialize_default(state, pid)


def add_participant(state: SplitState, participant_id: ParticipantId) -> bool:
    if state.has_participant(participant_id):
        return False

    state.participant_ids.append(participant_id)
    _initialize_default(state, participant_id)
    if state.payer_id is None:
        state.payer_id = participant_id

    log.info("split.participant.added", participant_id=str(participant_id), count=state.participant_count)
    return True


def add_group(state: SplitState, member_ids: Iterable[ParticipantId]) -> int:
    added = 0
    for member_id in member_ids:
        if add_participant(state, member_id):
            added += 1
    return added


def remove_participant(state: SplitState, participant_id: ParticipantId, settings: Settings) -> bool:
    """Drop a participant together with its raw input.

    Returns False without touching the state when the participant is unknown
    or when a split would fall under ``settings.min_participants``.
    """
    if not state.has_participant(participant_id):
        return False

    if state.is_split and state.participant_count <= settings.min_participants:
        log.warning(
            "split.participant.remove_blocked",
            participant_id=str(participant_id),
            count=state.participant_count,
        )
        return False

    state.participant_ids.remove(participant_id)
    state.raw_inputs.pop(participant_id, None)

    if state.payer_id == participant_id:
        state.payer_id = state.participant_ids[0] if state.participant_ids else None

    log.info("split.participant.removed", participant_id=str(participant_id), count=state.participant_count)
    return True


def toggle_participant(state: SplitState, participant_id: ParticipantId, settings: Settings) -> bool:
    if state.has_participant(participant_id):
        return remove_participant(state, participant_id, settings)
    return add_participant(state, participant_id)


def select_payer(state: SplitState, participant_id: ParticipantId) -> bool:
    added = add_participant(state, participant_id)
    if state.payer_id == participant_id:
        return added
    state.payer_id = participant_id
    log.info("split.payer.selected", participant_id=str(participant_id))
    return True


def clear_payer(state: SplitState) -> bool:
    if state.payer_id is None:
        return False
    state.payer_id = None
    return True


def set_strategy(state: SplitState, strategy: SplitStrategy) -> bool:
    """Switch strategy and reset every raw input to the new strategy's defaults.

    Previous values are discarded, not converted.
    """
    strategy = SplitStrategy(strategy)
    if strategy is state.strategy:
        return False

    previous = state.strategy
    state.strategy = strategy
    state.raw_inputs.clear()
    initialize_defaults(state)
    log.info("split.strategy.changed", previous=previous.value, strategy=strategy.value)
    return True


def set_total(state: SplitState, value: NumberLike, maximum: Decimal = MAX_AMOUNT) -> bool:
    total = to_money(value, maximum)
    if total == state.total:
        return False
    state.total = total
    return True


def update_raw_input(
    state: SplitState,
    participant_id: ParticipantId,
    field: str,
    value: NumberLike,
    settings: Settings,
) -> bool:
    if field not in RAW_INPUT_FIELDS:
        raise UnknownFieldError(field)
    if not state.has_participant(participant_id):
        return False

    raw = state.raw_inputs.setdefault(participant_id, RawInput())
    if field == "amount":
        raw.amount = to_money(value, settings.max_amount)
    elif field == "percentage":
        raw.percentage = to_percentage(value)
    elif field == "shares":
        raw.shares = to_shares(value, settings.min_shares, settings.max_shares)
    else:
        raw.adjustment = to_signed_money(value, settings.max_amount)
    return True
