from __future__ import annotations

from datetime import timedelta
from typing import Callable, Iterable, Optional

from splitshare.engine import SplitEngine
from splitshare.logging import get_logger
from splitshare.models import ParticipantId, SplitState, SplitStrategy
from splitshare.scheduler import DebounceScheduler
from splitshare.services.validation import SplitSummary
from splitshare.utils.parse import NumberLike, parse_amount

Subscriber = Callable[[SplitSummary], None]

AMOUNT_JOB_ID = "splitshare.amount"


class SplitController:
    """Keeps a :class:`SplitState` and its summary in sync with user edits.

    Amount text is debounced through the injected scheduler; every other
    edit recomputes right away, after applying any pending amount first.
    Without a scheduler amount edits are applied immediately too.
    """

    def __init__(
        self,
        engine: SplitEngine,
        scheduler: Optional[DebounceScheduler] = None,
        state: Optional[SplitState] = None,
    ) -> None:
        self.engine = engine
        self.state = state or engine.new_state()
        self._scheduler = scheduler
        self._subscribers: list[Subscriber] = []
        self._pending_amount: Optional[str] = None
        self._generation = 0
        self._log = get_logger(__name__)
        self._summary = engine.summarize(self.state)

    @property
    def summary(self) -> SplitSummary:
        return self._summary

    @property
    def has_pending_amount(self) -> bool:
        return self._pending_amount is not None

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        self._subscribers.append(callback)

        def _unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return _unsubscribe

    # Amount

    def set_amount_text(self, text: str) -> None:
        self._pending_amount = text
        self._generation += 1
        delay_ms = self.engine.settings.debounce_ms
        if self._scheduler is None or delay_ms == 0:
            self._apply_pending_amount()
            return

        generation = self._generation
        self._scheduler.schedule(
            AMOUNT_JOB_ID,
            timedelta(milliseconds=delay_ms),
            lambda: self._on_amount_debounced(generation),
        )

    def flush(self) -> bool:
        if self._pending_amount is None:
            return False
        if self._scheduler is not None:
            self._scheduler.cancel(AMOUNT_JOB_ID)
        self._apply_pending_amount()
        return True

    def _on_amount_debounced(self, generation: int) -> None:
        if generation != self._generation or self._pending_amount is None:
            # superseded by a newer keystroke or already flushed
            return
        self._log.debug("split.amount.debounced", generation=generation)
        self._apply_pending_amount()

    def _apply_pending_amount(self) -> None:
        text, self._pending_amount = self._pending_amount, None
        self.engine.set_total(self.state, parse_amount(text, self.engine.settings.max_amount))
        self.recalculate()

    # Structural edits

    def add_participant(self, participant_id: ParticipantId) -> bool:
        self.flush()
        return self._after(self.engine.add_participant(self.state, participant_id))

    def add_group(self, member_ids: Iterable[ParticipantId]) -> int:
        self.flush()
        added = self.engine.add_group(self.state, member_ids)
        self._after(added > 0)
        return added

    def remove_participant(self, participant_id: ParticipantId) -> bool:
        self.flush()
        return self._after(self.engine.remove_participant(self.state, participant_id))

    def toggle_participant(self, participant_id: ParticipantId) -> bool:
        self.flush()
        return self._after(self.engine.toggle_participant(self.state, participant_id))

    def select_payer(self, participant_id: ParticipantId) -> bool:
        self.flush()
        return self._after(self.engine.select_payer(self.state, participant_id))

    def clear_payer(self) -> bool:
        self.flush()
        return self._after(self.engine.clear_payer(self.state))

    def set_strategy(self, strategy: SplitStrategy) -> bool:
        self.flush()
        return self._after(self.engine.set_strategy(self.state, strategy))

    def update_raw_input(self, participant_id: ParticipantId, field: str, value: NumberLike) -> bool:
        self.flush()
        return self._after(self.engine.update_raw_input(self.state, participant_id, field, value))

    def reset(self) -> None:
        if self._scheduler is not None:
            self._scheduler.cancel(AMOUNT_JOB_ID)
        self._pending_amount = None
        self._generation += 1
        self.state = self.engine.new_state(is_split=self.state.is_split)
        self.recalculate()

    def _after(self, changed: bool) -> bool:
        if changed:
            self.recalculate()
        return changed

    def recalculate(self) -> SplitSummary:
        self._summary = self.engine.summarize(self.state)
        self._log.debug(
            "split.recalculated",
            strategy=self.state.strategy.value,
            participants=self.state.participant_count,
            is_valid=self._summary.is_valid,
        )
        for callback in list(self._subscribers):
            callback(self._summary)
        return self._summary
