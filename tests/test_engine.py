from decimal import Decimal

from splitshare.models import SplitStrategy


def test_equally_four_participants(engine):
    state = engine.new_state()
    engine.set_total(state, 100)
    engine.add_group(state, ["me", "alex", "sam", "kim"])

    allocations = engine.calculate(state)

    assert all(r.amount == Decimal("25") for r in allocations.values())
    assert all(r.percentage == Decimal("25") for r in allocations.values())
    assert engine.is_valid(state) is True


def test_percentages_scenario(engine):
    state = engine.new_state()
    engine.set_total(state, "90")
    engine.add_group(state, ["a", "b", "c"])
    engine.set_strategy(state, SplitStrategy.PERCENTAGES)
    for pid, value in zip(["a", "b", "c"], [40, 40, 20]):
        engine.update_raw_input(state, pid, "percentage", value)

    allocations = engine.calculate(state)

    assert [allocations[p].amount for p in ["a", "b", "c"]] == [36, 36, 18]
    assert engine.is_valid(state) is True
    assert engine.remaining_percentage(state) == 0
    assert engine.remainder(state) == 0


def test_shares_scenario(engine):
    state = engine.new_state()
    engine.set_total(state, "50")
    engine.add_group(state, ["a", "b"])
    engine.set_strategy(state, SplitStrategy.SHARES)
    engine.update_raw_input(state, "b", "shares", 3)

    allocations = engine.calculate(state)

    assert allocations["a"].amount == Decimal("12.5")
    assert allocations["b"].amount == Decimal("37.5")
    assert engine.total_shares(state) == 4


def test_adjustments_scenario(engine):
    state = engine.new_state()
    engine.set_total(state, "100")
    engine.add_group(state, ["a", "b"])
    engine.set_strategy(state, SplitStrategy.ADJUSTMENTS)
    engine.update_raw_input(state, "a", "adjustment", 10)
    engine.update_raw_input(state, "b", "adjustment", -10)

    allocations = engine.calculate(state)

    assert allocations["a"].amount == Decimal("60")
    assert allocations["b"].amount == Decimal("40")
    assert engine.is_valid(state) is True


def test_exact_amounts_hand_off(engine):
    state = engine.new_state()
    engine.set_total(state, "80.10")
    engine.add_group(state, ["a", "b"])
    engine.set_strategy(state, SplitStrategy.EXACT_AMOUNTS)
    engine.update_raw_input(state, "a", "amount", "50.05")
    engine.update_raw_input(state, "b", "amount", "30.05")

    assert engine.is_valid(state) is True
    assert engine.finalize(state) == {"a": 5005, "b": 3005}
    assert engine.validation_message(state) == "Amounts match total"


def test_payer_stays_a_participant(engine):
    state = engine.new_state()
    engine.add_group(state, ["a", "b", "c"])
    engine.select_payer(state, "c")
    engine.remove_participant(state, "c")

    assert state.payer_id in state.participant_ids
    assert engine.clear_payer(state) is True


def test_configured_max_amount_caps_total():
    from splitshare.config import Settings
    from splitshare.engine import SplitEngine

    engine = SplitEngine(Settings(max_amount=Decimal("1000")))
    state = engine.new_state()

    engine.set_total(state, "5000")
    assert state.total == Decimal("1000")
