import json

import pytest

from bondsnipe.borsh import Pubkey
from bondsnipe.pattern_translator import (
    AmountCondition,
    BuyIxCondition,
    BuyIxRaw,
    ManualPattern,
    ManualPatternRaw,
    MintTransactionContext,
    TokenVersion,
    TxType,
    ValueCondition,
    extract_buy_amount,
    load_manual_patterns,
    parse_amount_condition,
    parse_value_condition,
    raw_manual_patterns,
)

KEY_A = Pubkey(bytes(range(32)))
KEY_B = Pubkey(bytes(range(1, 33)))


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("NULL", ValueCondition("NULL")),
        ("not_null", ValueCondition("NOT_NULL")),
        (" 160000 ", ValueCondition("EXACT", 160000)),
        ("abc", ValueCondition("NULL")),
        ("-5", ValueCondition("NULL")),
    ],
)
def test_parse_value_condition(raw, expected):
    assert parse_value_condition(raw) == expected


def test_value_condition_matches():
    assert ValueCondition("NULL").matches(0)
    assert not ValueCondition("NULL").matches(5)
    assert ValueCondition("NOT_NULL").matches(5)
    assert not ValueCondition("NOT_NULL").matches(0)
    assert ValueCondition("EXACT", 600000).matches(600000)
    assert not ValueCondition("EXACT", 600000).matches(600001)


def test_value_condition_rejects_unknown_kind():
    with pytest.raises(ValueError):
        ValueCondition("SOMETIMES")


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("ANY", AmountCondition("ANY")),
        ("null", AmountCondition("ANY")),
        ("SpendableSolIn>>DIVIDED>>1000000000", AmountCondition("DIVISIBLE_BY", 1000000000)),
        ("AMOUNT>>divided>> 25 ", AmountCondition("DIVISIBLE_BY", 25)),
        ("DIVIDED>>1000000000", AmountCondition("ANY")),
        ("A>>DIVIDED>>zz", AmountCondition("ANY")),
        ("12345", AmountCondition("EXACT", 12345)),
        ("something", AmountCondition("ANY")),
    ],
)
def test_parse_amount_condition(raw, expected):
    assert parse_amount_condition(raw) == expected


def test_amount_condition_matches():
    assert AmountCondition("ANY").matches(7)
    assert AmountCondition("DIVISIBLE_BY", 10).matches(30)
    assert not AmountCondition("DIVISIBLE_BY", 10).matches(31)
    assert not AmountCondition("DIVISIBLE_BY", 0).matches(0)
    assert AmountCondition("EXACT", 9).matches(9)
    assert not AmountCondition("EXACT", 9).matches(8)


def test_parse_defaults_label_from_index():
    pattern = ManualPatternRaw(take_profit=[200.0]).parse(2)
    assert pattern.label == "PATTERN_3"
    assert pattern.sell_amounts == [100.0]


def test_parse_default_sell_amounts_are_even_and_sum_to_hundred():
    pattern = ManualPatternRaw(take_profit=[100.0, 200.0, 300.0]).parse(0)
    assert len(pattern.sell_amounts) == 3
    assert len(set(pattern.sell_amounts)) == 1
    assert sum(pattern.sell_amounts) == pytest.approx(100.0)


def test_parse_requires_take_profit():
    with pytest.raises(ValueError, match="take_profit must not be empty"):
        ManualPatternRaw(label="EMPTY").parse(0)


def test_parse_rejects_mismatched_sell_amounts():
    raw = ManualPatternRaw(label="BAD", take_profit=[150.0, 300.0], sell_amounts=[100.0])
    with pytest.raises(ValueError, match="sell_amounts length"):
        raw.parse(0)


def test_parse_filters_zero_stop_loss_and_nonpositive_buy_amount():
    pattern = ManualPatternRaw(take_profit=[150.0], stop_loss=0.0, buy_amount_sol=-1.0).parse(0)
    assert pattern.stop_loss is None
    assert pattern.buy_amount_sol is None
    kept = ManualPatternRaw(take_profit=[150.0], stop_loss=70.0, buy_amount_sol=0.03).parse(0)
    assert kept.stop_loss == 70.0
    assert kept.buy_amount_sol == 0.03


def test_parse_full_pattern():
    raw = ManualPatternRaw(
        label="MY_PATTERN",
        dev_cu_price="NOT_NULL",
        dev_cu_limit="600000",
        mint_instructions="CB:SetComputeUnitLimit >> Pumpfun:CreateV2>>Pumpfun:BuyExactSolIn",
        dev_buy_instruction_data=BuyIxRaw("Pumpfun:BuyExactSolIn", "X>>DIVIDED>>1000000000"),
        bundle_buy_cu_limit="200000",
        take_profit=[200.0, 400.0],
        sell_amounts=[50.0, 50.0],
        alt_addresses=[f" {KEY_A} ", "not-base58-0OIl"],
    )
    pattern = raw.parse(0)
    assert pattern.label == "MY_PATTERN"
    assert pattern.cu_price == ValueCondition("NOT_NULL")
    assert pattern.cu_limit == ValueCondition("EXACT", 600000)
    assert pattern.mint_instructions == [
        "CB:SetComputeUnitLimit",
        "Pumpfun:CreateV2",
        "Pumpfun:BuyExactSolIn",
    ]
    assert pattern.buy_ix_condition == BuyIxCondition(
        "Pumpfun:BuyExactSolIn", AmountCondition("DIVISIBLE_BY", 1000000000)
    )
    assert pattern.alt_addresses == [KEY_A]
    assert pattern.needs_bundle_buy_confirmation() is True


def test_matches_with_no_conditions_accepts_everything():
    pattern = ManualPattern(label="ANY", take_profit=[150.0], sell_amounts=[100.0])
    assert pattern.matches(123, 456, MintTransactionContext())
    assert pattern.needs_bundle_buy_confirmation() is False


def test_matches_cu_conditions():
    pattern = ManualPattern(
        label="CU",
        cu_limit=ValueCondition("EXACT", 600000),
        cu_price=ValueCondition("NOT_NULL"),
    )
    ctx = MintTransactionContext()
    assert pattern.matches(600000, 1, ctx)
    assert not pattern.matches(600000, 0, ctx)
    assert not pattern.matches(1, 1, ctx)


def test_matches_instruction_sequence():
    names = ["CB:SetComputeUnitLimit", "Pumpfun:Create"]
    pattern = ManualPattern(label="IX", mint_instructions=list(names))
    assert pattern.matches(0, 0, MintTransactionContext(all_instruction_names=list(names)))
    assert not pattern.matches(0, 0, MintTransactionContext(all_instruction_names=names[:1]))


def test_matches_buy_amount_condition():
    pattern = ManualPattern(
        label="BUY",
        buy_ix_condition=BuyIxCondition(
            "Pumpfun:BuyExactSolIn", AmountCondition("DIVISIBLE_BY", 1000000000)
        ),
    )
    good = MintTransactionContext(
        buy_ix_name="Pumpfun:BuyExactSolIn",
        buy_ix_data=json.dumps({"spendable_sol_in": 2 * 1000000000}),
    )
    bad = MintTransactionContext(
        buy_ix_name="Pumpfun:BuyExactSolIn",
        buy_ix_data=json.dumps({"spendable_sol_in": 1000000000 + 1}),
    )
    wrong_name = MintTransactionContext(
        buy_ix_name="Pumpfun:Buy", buy_ix_data=json.dumps({"amount": 1000000000})
    )
    assert pattern.matches(0, 0, good)
    assert not pattern.matches(0, 0, bad)
    assert not pattern.matches(0, 0, wrong_name)
    assert not pattern.matches(0, 0, MintTransactionContext())


def test_matches_buy_name_with_any_amount_skips_data():
    pattern = ManualPattern(
        label="BUY", buy_ix_condition=BuyIxCondition("Pumpfun:Buy", AmountCondition("ANY"))
    )
    assert pattern.matches(0, 0, MintTransactionContext(buy_ix_name="Pumpfun:Buy"))


def test_matches_versions_case_insensitive():
    pattern = ManualPattern(label="VER", token_version="v2", mint_tx_version="v0")
    assert pattern.matches(
        0, 0, MintTransactionContext(token_version=TokenVersion.V2, tx_type=TxType.V0)
    )
    assert not pattern.matches(
        0, 0, MintTransactionContext(token_version=TokenVersion.V1, tx_type=TxType.V0)
    )
    assert not pattern.matches(
        0, 0, MintTransactionContext(token_version=TokenVersion.V2, tx_type=TxType.LEGACY)
    )


def test_matches_alt_addresses():
    pattern = ManualPattern(label="ALT", alt_addresses=[KEY_A])
    assert pattern.matches(0, 0, MintTransactionContext(alt_addresses=[KEY_A]))
    assert not pattern.matches(0, 0, MintTransactionContext(alt_addresses=[KEY_B]))
    empty = ManualPattern(label="ALT", alt_addresses=[])
    assert empty.matches(0, 0, MintTransactionContext(alt_addresses=[KEY_B]))


def test_matches_bundle_buy_cu():
    pattern = ManualPattern(
        label="BUNDLE",
        bundle_buy_cu_limit=ValueCondition("EXACT", 200000),
        bundle_buy_cu_price=ValueCondition("NOT_NULL"),
    )
    assert pattern.needs_bundle_buy_confirmation()
    assert pattern.matches_bundle_buy_cu(200000, 5)
    assert not pattern.matches_bundle_buy_cu(200000, 0)
    assert not pattern.matches_bundle_buy_cu(1, 5)


def test_extract_buy_amount():
    assert extract_buy_amount("Pumpfun:Buy", json.dumps({"amount": 5})) == 5
    assert extract_buy_amount("Pumpfun:BuyExactSolIn", json.dumps({"spendable_sol_in": 8})) == 8
    assert extract_buy_amount("Pumpfun:Sell", json.dumps({"amount": 5})) is None
    assert extract_buy_amount("Pumpfun:Buy", "{not json") is None
    assert extract_buy_amount("Pumpfun:Buy", None) is None
    assert extract_buy_amount("Pumpfun:Buy", json.dumps({"amount": 1.5})) is None
    assert extract_buy_amount("Pumpfun:Buy", json.dumps({"amount": -3})) is None
    assert extract_buy_amount("Pumpfun:Buy", json.dumps([1, 2])) is None


def test_raw_manual_patterns_defines_catch_all():
    patterns = load_manual_patterns(raw_manual_patterns())
    assert [p.label for p in patterns] == ["ALL_PUMPFUN_FILTERED"]
    catch_all = patterns[0]
    assert catch_all.take_profit == [150.0, 300.0]
    assert catch_all.sell_amounts == [50.0, 50.0]
    assert catch_all.stop_loss is None
    assert catch_all.matches(0, 0, MintTransactionContext())


def test_load_manual_patterns_skips_invalid(capsys):
    raws = [
        ManualPatternRaw(label="GOOD", take_profit=[150.0]),
        ManualPatternRaw(label="BAD"),
    ]
    patterns = load_manual_patterns(raws)
    assert [p.label for p in patterns] == ["GOOD"]
    captured = capsys.readouterr()
    assert "GOOD" in captured.out
    assert "Failed to parse manual pattern 2" in captured.err