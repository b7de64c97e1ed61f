from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_EVEN, Decimal
from typing import List

from splitshare.config import Settings
from splitshare.errors import SplitError, UnbalancedSplitError
from splitshare.logging import get_logger
from splitshare.models import HUNDRED, ParticipantId, SplitState, SplitStrategy
from splitshare.services.strategies import calculate
from splitshare.services.validation import is_valid

log = get_logger(__name__)


@dataclass(slots=True)
class Transfer:
    from_participant: ParticipantId
    to_participant: ParticipantId
    amount_cents: int


def _to_cents(amount: Decimal) -> int:
    return int((amount * HUNDRED).quantize(Decimal("1"), rounding=ROUND_HALF_EVEN))


def finalize(state: SplitState, settings: Settings) -> dict[ParticipantId, int]:
    """Turn a balanced split into integer cents per participant.

    Each share is rounded half-even, then the residue is spread one cent at
    a time in participant order until the cents add up to the total. With
    adjustments, clamped amounts can exceed the total, so the target there
    is the rounded sum of the allocation instead.
    """
    if not is_valid(state, settings):
        raise UnbalancedSplitError("split is not balanced and cannot be finalized")

    allocations = calculate(state)
    order = [pid for pid in state.participant_ids if pid in allocations]
    if not order:
        return {}

    if state.strategy is SplitStrategy.ADJUSTMENTS:
        target = _to_cents(sum((allocations[pid].amount for pid in order), Decimal("0")))
    else:
        target = _to_cents(state.total)

    cents = [_to_cents(allocations[pid].amount) for pid in order]
    remainder = target - sum(cents)

    n = len(order)
    idx = 0
    step = 1 if remainder > 0 else -1
    while remainder != 0:
        # Never push a participant below zero cents
        if step > 0 or cents[idx] > 0:
            cents[idx] += step
            remainder -= step
        idx = (idx + 1) % n

    result = {pid: share for pid, share in zip(order, cents)}
    log.info("split.finalized", strategy=state.strategy.value, total_cents=target, participants=n)
    return result


def settle_with_payer(state: SplitState, settings: Settings) -> List[Transfer]:
    """What every other participant owes the payer, in participant order."""
    if state.payer_id is None:
        raise SplitError("payer is not set")

    shares = finalize(state, settings)
    return [
        Transfer(from_participant=pid, to_participant=state.payer_id, amount_cents=share)
        for pid, share in shares.items()
        if pid != state.payer_id and share > 0
    ]
