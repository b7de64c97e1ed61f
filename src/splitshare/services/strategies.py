from __future__ import annotations

from decimal import Decimal
from typing import Callable, Mapping, Sequence

from splitshare.models import (
    HUNDRED,
    ZERO,
    AllocationRecord,
    ParticipantId,
    RawInput,
    SplitState,
    SplitStrategy,
)

Allocation = dict[ParticipantId, AllocationRecord]
StrategyFn = Callable[[Decimal, Sequence[ParticipantId], Mapping[ParticipantId, RawInput]], Allocation]

_EMPTY = RawInput()


def _raw(raw_inputs: Mapping[ParticipantId, RawInput], participant_id: ParticipantId) -> RawInput:
    return raw_inputs.get(participant_id) or _EMPTY


def _shares_of(raw: RawInput) -> int:
    return 1 if raw.shares is None else raw.shares


def _percent_of(amount: Decimal, total: Decimal) -> Decimal:
    if total == ZERO:
        return ZERO
    return amount / total * HUNDRED


def split_equally(
    total: Decimal,
    participant_ids: Sequence[ParticipantId],
    raw_inputs: Mapping[ParticipantId, RawInput],
) -> Allocation:
    if not participant_ids or total <= ZERO:
        return {}

    n = Decimal(len(participant_ids))
    amount = total / n
    percentage = HUNDRED / n
    return {pid: AllocationRecord(amount=amount, percentage=percentage) for pid in participant_ids}


def split_exact_amounts(
    total: Decimal,
    participant_ids: Sequence[ParticipantId],
    raw_inputs: Mapping[ParticipantId, RawInput],
) -> Allocation:
    if not participant_ids or total <= ZERO:
        return {}

    result: Allocation = {}
    for pid in participant_ids:
        amount = _raw(raw_inputs, pid).amount or ZERO
        result[pid] = AllocationRecord(amount=amount, percentage=_percent_of(amount, total))
    return result


def split_percentages(
    total: Decimal,
    participant_ids: Sequence[ParticipantId],
    raw_inputs: Mapping[ParticipantId, RawInput],
) -> Allocation:
    if not participant_ids or total <= ZERO:
        return {}

    result: Allocation = {}
    for pid in participant_ids:
        percentage = _raw(raw_inputs, pid).percentage or ZERO
        result[pid] = AllocationRecord(amount=total * percentage / HUNDRED, percentage=percentage)
    return result


def split_shares(
    total: Decimal,
    participant_ids: Sequence[ParticipantId],
    raw_inputs: Mapping[ParticipantId, RawInput],
) -> Allocation:
    if not participant_ids or total <= ZERO:
        return {}

    shares = {pid: _shares_of(_raw(raw_inputs, pid)) for pid in participant_ids}
    total_shares = sum(shares.values())
    if total_shares <= 0:
        return {}

    denominator = Decimal(total_shares)
    return {
        pid: AllocationRecord(
            amount=total * count / denominator,
            percentage=HUNDRED * count / denominator,
            shares=count,
        )
        for pid, count in shares.items()
    }


def split_adjustments(
    total: Decimal,
    participant_ids: Sequence[ParticipantId],
    raw_inputs: Mapping[ParticipantId, RawInput],
) -> Allocation:
    if not participant_ids or total <= ZERO:
        return {}

    adjustments = {pid: _raw(raw_inputs, pid).adjustment or ZERO for pid in participant_ids}
    base = (total - sum(adjustments.values(), ZERO)) / Decimal(len(participant_ids))

    result: Allocation = {}
    for pid, adjustment in adjustments.items():
        # Large negative adjustments are clamped, so the sum may fall short of total
        amount = max(ZERO, base + adjustment)
        result[pid] = AllocationRecord(
            amount=amount,
            percentage=_percent_of(amount, total),
            adjustment=adjustment,
        )
    return result


STRATEGIES: dict[SplitStrategy, StrategyFn] = {
    SplitStrategy.EQUALLY: split_equally,
    SplitStrategy.EXACT_AMOUNTS: split_exact_amounts,
    SplitStrategy.PERCENTAGES: split_percentages,
    SplitStrategy.SHARES: split_shares,
    SplitStrategy.ADJUSTMENTS: split_adjustments,
}


def calculate(state: SplitState) -> Allocation:
    return STRATEGIES[state.strategy](state.total, state.participant_ids, state.raw_inputs)
