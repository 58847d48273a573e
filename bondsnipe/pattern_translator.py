"""Manual mint patterns: a small DSL parsed into conditions matched against mint transactions."""

from __future__ import annotations

import json
import re
import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Literal

from .borsh import Pubkey

U64_MAX = 2**64 - 1
_UNSIGNED = re.compile(r"\+?[0-9]+")

ValueKind = Literal["NULL", "NOT_NULL", "EXACT"]
AmountKind = Literal["ANY", "DIVISIBLE_BY", "EXACT"]


def _parse_unsigned(text: str, maximum: int = U64_MAX) -> int | None:
    """Strict unsigned integer parse: optional '+', ASCII digits only, within range."""
    if not _UNSIGNED.fullmatch(text):
        return None
    value = int(text)
    return value if value <= maximum else None


@dataclass(frozen=True)
class ValueCondition:
    """Condition on a compute-budget value: zero, non-zero, or an exact number."""

    kind: ValueKind
    value: int = 0

    def __post_init__(self) -> None:
        if self.kind not in ("NULL", "NOT_NULL", "EXACT"):
            raise ValueError(f"unknown value condition kind: {self.kind!r}")

    def matches(self, val: int) -> bool:
        if self.kind == "NULL":
            return val == 0
        if self.kind == "NOT_NULL":
            return val != 0
        return val == self.value


def parse_value_condition(raw: str) -> ValueCondition:
    """Parse ``NULL``, ``NOT_NULL`` or an exact number; anything else means ``NULL``."""
    trimmed = raw.strip()
    upper = trimmed.upper()
    if upper == "NULL":
        return ValueCondition("NULL")
    if upper == "NOT_NULL":
        return ValueCondition("NOT_NULL")
    value = _parse_unsigned(trimmed)
    if value is not None:
        return ValueCondition("EXACT", value)
    return ValueCondition("NULL")


@dataclass(frozen=True)
class AmountCondition:
    """Condition on the amount carried by the creator's buy instruction."""

    kind: AmountKind
    value: int = 0

    def __post_init__(self) -> None:
        if self.kind not in ("ANY", "DIVISIBLE_BY", "EXACT"):
            raise ValueError(f"unknown amount condition kind: {self.kind!r}")

    def matches(self, val: int) -> bool:
        if self.kind == "ANY":
            return True
        if self.kind == "DIVISIBLE_BY":
            return self.value != 0 and val % self.value == 0
        return val == self.value


def parse_amount_condition(raw: str) -> AmountCondition:
    """Parse ``ANY``/``NULL``, ``<field>>>DIVIDED>><n>`` or an exact number; else ``ANY``."""
    upper = raw.upper()
    if upper in ("NULL", "ANY"):
        return AmountCondition("ANY")

    if ">>DIVIDED>>" in upper:
        parts = raw.split(">>")
        if len(parts) >= 3:
            divisor = _parse_unsigned(parts[2].strip())
            if divisor is not None:
                return AmountCondition("DIVISIBLE_BY", divisor)

    exact = _parse_unsigned(raw)
    if exact is not None:
        return AmountCondition("EXACT", exact)
    return AmountCondition("ANY")


@dataclass(frozen=True)
class BuyIxCondition:
    name: str
    amount_condition: AmountCondition


@dataclass(frozen=True)
class BuyIxRaw:
    name: str
    amount: str


class TokenVersion(Enum):
    V1 = "V1"
    V2 = "V2"


class TxType(Enum):
    LEGACY = "Legacy"
    V0 = "V0"


@dataclass
class MintTransactionContext:
    """What a mint transaction looked like, as far as pattern matching cares."""

    all_instruction_names: list[str] = field(default_factory=list)
    buy_ix_name: str | None = None
    buy_ix_data: str | None = None
    token_version: TokenVersion = TokenVersion.V1
    alt_addresses: list[Pubkey] = field(default_factory=list)
    tx_type: TxType = TxType.LEGACY


@dataclass
class ManualPattern:
    """A parsed pattern; fields left as ``None`` are not checked."""

    label: str
    cu_price: ValueCondition | None = None
    cu_limit: ValueCondition | None = None
    mint_instructions: list[str] | None = None
    buy_ix_condition: BuyIxCondition | None = None
    bundle_buy_cu_limit: ValueCondition | None = None
    bundle_buy_cu_price: ValueCondition | None = None
    stop_loss: float | None = None
    take_profit: list[float] = field(default_factory=list)
    sell_amounts: list[float] = field(default_factory=list)
    token_version: str | None = None
    alt_addresses: list[Pubkey] | None = None
    mint_tx_version: str | None = None
    buy_amount_sol: float | None = None

    def matches(self, cu_limit: int, cu_price: int, ctx: MintTransactionContext) -> bool:
        if self.cu_limit is not None and not self.cu_limit.matches(cu_limit):
            return False
        if self.cu_price is not None and not self.cu_price.matches(cu_price):
            return False

        if self.mint_instructions is not None:
            if list(ctx.all_instruction_names) != list(self.mint_instructions):
                return False

        if self.buy_ix_condition is not None:
            cond = self.buy_ix_condition
            if ctx.buy_ix_name is None or ctx.buy_ix_name != cond.name:
                return False
            if cond.amount_condition.kind != "ANY":
                amount = extract_buy_amount(ctx.buy_ix_name, ctx.buy_ix_data)
                if amount is None or not cond.amount_condition.matches(amount):
                    return False

        if self.token_version is not None:
            if self.token_version.lower() != ctx.token_version.value.lower():
                return False

        if self.alt_addresses:
            if list(ctx.alt_addresses) != list(self.alt_addresses):
                return False

        if self.mint_tx_version is not None:
            if self.mint_tx_version.lower() != ctx.tx_type.value.lower():
                return False

        return True

    def needs_bundle_buy_confirmation(self) -> bool:
        """True when entry must wait for the next buy's compute-budget data."""
        return self.bundle_buy_cu_limit is not None or self.bundle_buy_cu_price is not None

    def matches_bundle_buy_cu(self, cu_limit: int, cu_price: int) -> bool:
        if self.bundle_buy_cu_limit is not None and not self.bundle_buy_cu_limit.matches(cu_limit):
            return False
        if self.bundle_buy_cu_price is not None and not self.bundle_buy_cu_price.matches(cu_price):
            return False
        return True


@dataclass
class ManualPatternRaw:
    """Pattern as written in the DSL; only ``take_profit`` is required to be non-empty."""

    label: str | None = None
    dev_cu_limit: str | None = None
    dev_cu_price: str | None = None
    mint_instructions: str | None = None
    dev_buy_instruction_data: BuyIxRaw | None = None
    bundle_buy_cu_limit: str | None = None
    bundle_buy_cu_price: str | None = None
    stop_loss: float | None = None
    take_profit: list[float] = field(default_factory=list)
    sell_amounts: list[float] | None = None
    token_version: str | None = None
    alt_addresses: list[str] | None = None
    mint_tx_version: str | None = None
    buy_amount_sol: float | None = None

    def parse(self, index: int) -> ManualPattern:
        """Build a ``ManualPattern``; raises ValueError on an invalid take-profit plan."""
        label = self.label if self.label is not None else f"PATTERN_{index + 1}"

        def _cond(raw: str | None) -> ValueCondition | None:
            return None if raw is None else parse_value_condition(raw)

        mint_instructions = (
            None
            if self.mint_instructions is None
            else [part.strip() for part in self.mint_instructions.split(">>")]
        )

        buy_ix_condition = None
        if self.dev_buy_instruction_data is not None:
            raw = self.dev_buy_instruction_data
            buy_ix_condition = BuyIxCondition(raw.name, parse_amount_condition(raw.amount))

        stop_loss = self.stop_loss if self.stop_loss is not None and self.stop_loss != 0.0 else None
        buy_amount_sol = (
            self.buy_amount_sol
            if self.buy_amount_sol is not None and self.buy_amount_sol > 0.0
            else None
        )

        take_profit = list(self.take_profit)
        if not take_profit:
            raise ValueError(f"{label}: take_profit must not be empty")

        if self.sell_amounts is None:
            sell_amounts = [100.0 / len(take_profit)] * len(take_profit)
        else:
            sell_amounts = list(self.sell_amounts)
        if len(sell_amounts) != len(take_profit):
            raise ValueError(
                f"{label}: sell_amounts length ({len(sell_amounts)}) "
                f"!= take_profit length ({len(take_profit)})"
            )

        alt_addresses = None
        if self.alt_addresses is not None:
            alt_addresses = []
            for text in self.alt_addresses:
                try:
                    alt_addresses.append(Pubkey.from_base58(text.strip()))
                except ValueError:
                    continue

        return ManualPattern(
            label=label,
            cu_price=_cond(self.dev_cu_price),
            cu_limit=_cond(self.dev_cu_limit),
            mint_instructions=mint_instructions,
            buy_ix_condition=buy_ix_condition,
            bundle_buy_cu_limit=_cond(self.bundle_buy_cu_limit),
            bundle_buy_cu_price=_cond(self.bundle_buy_cu_price),
            stop_loss=stop_loss,
            take_profit=take_profit,
            sell_amounts=sell_amounts,
            token_version=self.token_version,
            alt_addresses=alt_addresses,
            mint_tx_version=self.mint_tx_version,
            buy_amount_sol=buy_amount_sol,
        )


def extract_buy_amount(buy_name: str, buy_ix_data: str | None) -> int | None:
    """Primary amount from the JSON form of a buy instruction's arguments."""
    if buy_ix_data is None:
        return None
    try:
        data = json.loads(buy_ix_data)
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None

    key = {"Pumpfun:Buy": "amount", "Pumpfun:BuyExactSolIn": "spendable_sol_in"}.get(buy_name)
    if key is None:
        return None
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= U64_MAX:
        return None
    return value


def raw_manual_patterns() -> list[ManualPatternRaw]:
    """The configured manual patterns."""
    return [
        # Catch-all: every new token, protected by the pre-buy filter.
        ManualPatternRaw(
            label="ALL_PUMPFUN_FILTERED",
            take_profit=[150.0, 300.0],
            sell_amounts=[50.0, 50.0],
        ),
    ]


def load_manual_patterns(
    raw_patterns: Iterable[ManualPatternRaw] | None = None,
) -> list[ManualPattern]:
    """Parse patterns, reporting each one; invalid patterns are skipped."""
    if raw_patterns is None:
        raw_patterns = raw_manual_patterns()
    patterns: list[ManualPattern] = []
    for index, raw in enumerate(raw_patterns):
        try:
            pattern = raw.parse(index)
        except ValueError as exc:
            print(f"❌ Failed to parse manual pattern {index + 1}: {exc}", file=sys.stderr)
            continue
        print(
            f"✅ Manual pattern loaded: {pattern.label} | "
            f"instructions: {pattern.mint_instructions} | TP: {pattern.take_profit}%"
        )
        patterns.append(pattern)
    return patterns