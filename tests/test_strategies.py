from decimal import Decimal

from splitshare.models import RawInput, SplitState, SplitStrategy
from splitshare.services.strategies import (
    calculate,
    split_adjustments,
    split_equally,
    split_exact_amounts,
    split_percentages,
    split_shares,
)


def test_split_equally_four_ways():
    result = split_equally(Decimal("100"), ["a", "b", "c", "d"], {})

    assert set(result) == {"a", "b", "c", "d"}
    for record in result.values():
        assert record.amount == Decimal("25")
        assert record.percentage == Decimal("25")
        assert record.shares == 1
        assert record.adjustment == 0


def test_split_equally_sums_to_total():
    total = Decimal("100")
    result = split_equally(total, ["a", "b", "c"], {})

    assert abs(sum(r.amount for r in result.values()) - total) < Decimal("1e-20")
    assert result["a"].amount == total / 3


def test_every_strategy_returns_empty_without_participants_or_total():
    for strategy in SplitStrategy:
        assert calculate(SplitState(total=Decimal("50"), strategy=strategy)) == {}
        assert calculate(SplitState(total=Decimal("0"), strategy=strategy, participant_ids=["a", "b"])) == {}


def test_split_exact_amounts_reports_percentage():
    raw = {"a": RawInput(amount=Decimal("30")), "b": RawInput(amount=Decimal("10"))}
    result = split_exact_amounts(Decimal("40"), ["a", "b"], raw)

    assert result["a"].amount == Decimal("30")
    assert result["a"].percentage == Decimal("75")
    assert result["b"].percentage == Decimal("25")


def test_split_exact_amounts_missing_input_is_zero():
    result = split_exact_amounts(Decimal("40"), ["a", "b"], {"a": RawInput(amount=Decimal("40"))})

    assert result["b"].amount == 0
    assert result["b"].percentage == 0


def test_split_percentages():
    raw = {
        "a": RawInput(percentage=Decimal("40")),
        "b": RawInput(percentage=Decimal("40")),
        "c": RawInput(percentage=Decimal("20")),
    }
    result = split_percentages(Decimal("90"), ["a", "b", "c"], raw)

    assert [result[p].amount for p in ("a", "b", "c")] == [Decimal("36"), Decimal("36"), Decimal("18")]
    assert result["c"].percentage == Decimal("20")


def test_split_shares():
    raw = {"a": RawInput(shares=1), "b": RawInput(shares=3)}
    result = split_shares(Decimal("50"), ["a", "b"], raw)

    assert result["a"].amount == Decimal("12.5")
    assert result["b"].amount == Decimal("37.5")
    assert result["b"].percentage == Decimal("75")
    assert result["b"].shares == 3


def test_split_shares_defaults_to_one_share():
    result = split_shares(Decimal("30"), ["a", "b", "c"], {"a": RawInput(shares=4)})

    assert result["a"].amount == Decimal("20")
    assert result["b"].amount == Decimal("5")


def test_split_shares_zero_total_shares_is_empty():
    raw = {"a": RawInput(shares=0), "b": RawInput(shares=0)}

    assert split_shares(Decimal("50"), ["a", "b"], raw) == {}


def test_split_adjustments():
    raw = {"a": RawInput(adjustment=Decimal("10")), "b": RawInput(adjustment=Decimal("-10"))}
    result = split_adjustments(Decimal("100"), ["a", "b"], raw)

    assert result["a"].amount == Decimal("60")
    assert result["b"].amount == Decimal("40")
    assert result["a"].adjustment == Decimal("10")
    assert result["b"].percentage == Decimal("40")


def test_split_adjustments_clamps_negative_amounts():
    raw = {"a": RawInput(adjustment=Decimal("0")), "b": RawInput(adjustment=Decimal("-80"))}
    result = split_adjustments(Decimal("20"), ["a", "b"], raw)

    # base = (20 + 80) / 2 = 50
    assert result["a"].amount == Decimal("50")
    assert result["b"].amount == 0
    assert result["b"].percentage == 0


def test_calculate_dispatches_on_strategy():
    state = SplitState(
        total=Decimal("50"),
        strategy=SplitStrategy.SHARES,
        participant_ids=["a", "b"],
        raw_inputs={"a": RawInput(shares=1), "b": RawInput(shares=3)},
    )

    assert calculate(state)["b"].amount == Decimal("37.5")
