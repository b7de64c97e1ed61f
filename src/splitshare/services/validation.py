from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from splitshare.config import Settings
from splitshare.models import HUNDRED, ZERO, AllocationRecord, ParticipantId, SplitState, SplitStrategy
from splitshare.services.strategies import Allocation, calculate


@dataclass(slots=True)
class SplitSummary:
    """Everything the UI needs to render the current split."""

    strategy: SplitStrategy
    total: Decimal
    allocations: dict[ParticipantId, AllocationRecord] = field(default_factory=dict)
    is_valid: bool = False
    remainder: Decimal = ZERO
    over_allocated: Decimal = ZERO
    remaining_percentage: Decimal = HUNDRED
    total_shares: int = 0
    payer_id: Optional[ParticipantId] = None
    message: Optional[str] = None


def _sum_allocated(allocations: Allocation) -> Decimal:
    return sum((record.amount for record in allocations.values()), ZERO)


def _sum_raw_amounts(state: SplitState) -> Decimal:
    total = ZERO
    for pid in state.participant_ids:
        raw = state.raw_inputs.get(pid)
        if raw is not None and raw.amount is not None:
            total += raw.amount
    return total


def _sum_raw_percentages(state: SplitState) -> Decimal:
    total = ZERO
    for pid in state.participant_ids:
        raw = state.raw_inputs.get(pid)
        if raw is not None and raw.percentage is not None:
            total += raw.percentage
    return total


def _sum_raw_adjustments(state: SplitState) -> Decimal:
    total = ZERO
    for pid in state.participant_ids:
        raw = state.raw_inputs.get(pid)
        if raw is not None and raw.adjustment is not None:
            total += raw.adjustment
    return total


def total_shares(state: SplitState) -> int:
    count = 0
    for pid in state.participant_ids:
        raw = state.raw_inputs.get(pid)
        count += 1 if raw is None or raw.shares is None else raw.shares
    return count


def is_valid(state: SplitState, settings: Settings) -> bool:
    if state.participant_count < settings.min_participants:
        return False
    if state.total <= ZERO:
        return False

    if state.strategy is SplitStrategy.EQUALLY:
        return True
    if state.strategy is SplitStrategy.EXACT_AMOUNTS:
        return abs(_sum_raw_amounts(state) - state.total) < settings.amount_tolerance
    if state.strategy is SplitStrategy.PERCENTAGES:
        return abs(_sum_raw_percentages(state) - HUNDRED) < settings.percentage_tolerance
    if state.strategy is SplitStrategy.SHARES:
        return total_shares(state) > 0
    # Adjustments are optional; the base split always resolves
    return True


def remainder(state: SplitState, allocations: Allocation | None = None) -> Decimal:
    """Unallocated part of the total ("still need to allocate X")."""
    if state.strategy in (SplitStrategy.EQUALLY, SplitStrategy.SHARES):
        return ZERO
    if allocations is None:
        allocations = calculate(state)
    if not allocations:
        return state.total
    return max(ZERO, state.total - _sum_allocated(allocations))


def over_allocated(state: SplitState, allocations: Allocation | None = None) -> Decimal:
    """Allocated beyond the total ("X over"); for adjustments this is what clamping added."""
    if state.strategy in (SplitStrategy.EQUALLY, SplitStrategy.SHARES):
        return ZERO
    if allocations is None:
        allocations = calculate(state)
    return max(ZERO, _sum_allocated(allocations) - state.total)


def remaining_percentage(state: SplitState, allocations: Allocation | None = None) -> Decimal:
    if state.strategy is SplitStrategy.PERCENTAGES:
        return max(ZERO, HUNDRED - _sum_raw_percentages(state))
    if allocations is None:
        allocations = calculate(state)
    allocated = sum((record.percentage for record in allocations.values()), ZERO)
    return max(ZERO, HUNDRED - allocated)


def format_money(amount: Decimal, currency: str) -> str:
    return f"{amount:,.2f} {currency}"


def validation_message(state: SplitState, settings: Settings) -> str:
    currency = state.currency
    strategy = state.strategy

    if strategy is SplitStrategy.EQUALLY:
        count = state.participant_count
        per_person = state.total / Decimal(count) if count else ZERO
        return f"Split equally: {format_money(per_person, currency)} each"

    if strategy is SplitStrategy.EXACT_AMOUNTS:
        difference = state.total - _sum_raw_amounts(state)
        if abs(difference) < settings.amount_tolerance:
            return "Amounts match total"
        if difference > ZERO:
            return f"{format_money(difference, currency)} remaining"
        return f"{format_money(-difference, currency)} over"

    if strategy is SplitStrategy.PERCENTAGES:
        allocated = _sum_raw_percentages(state)
        if abs(allocated - HUNDRED) < settings.percentage_tolerance:
            return "Percentages add up to 100%"
        return f"Total: {allocated:.0f}% / 100%"

    if strategy is SplitStrategy.SHARES:
        count = total_shares(state)
        return f"{count} share{'' if count == 1 else 's'} total"

    adjustments = _sum_raw_adjustments(state)
    sign = "+" if adjustments >= ZERO else "-"
    return f"Adjustments: {sign}{format_money(abs(adjustments), currency)}"


def summarize(state: SplitState, settings: Settings) -> SplitSummary:
    allocations = calculate(state)
    return SplitSummary(
        strategy=state.strategy,
        total=state.total,
        allocations=allocations,
        is_valid=is_valid(state, settings),
        remainder=remainder(state, allocations),
        over_allocated=over_allocated(state, allocations),
        remaining_percentage=remaining_percentage(state, allocations),
        total_shares=total_shares(state),
        payer_id=state.payer_id,
        message=validation_message(state, settings),
    )
