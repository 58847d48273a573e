"""Per-token trading state: price tracking, stop loss, trailing take-profit and sell plans."""

from __future__ import annotations

import copy
import math
import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

from .borsh import Pubkey
from .logs import update
from .pattern_translator import ManualPattern

SOL_DECIMALS = 9
TOKEN_DECIMALS = 6

# (event, mint, buy price, current price, detail)
PriceNotifier = Callable[[str, str, float, float, str], None]


class SLMode(Enum):
    NONE = "none"
    TRIGGERED = "triggered"


class TokenSellStatus(Enum):
    NONE = "none"
    SELL_TRADE_SUBMITTED = "sell_trade_submitted"


class TokenTradeSignal(Enum):
    NONE = "none"
    IS_ENTRY_POINT = "is_entry_point"
    ENTRY_SUBMITTED = "entry_submitted"
    IS_EXIT_POINT = "is_exit_point"
    EXIT_SUBMITTED = "exit_submitted"


@dataclass(frozen=True)
class TradeSettings:
    """Live exit settings.

    ``stop_loss`` is the fraction of the buy price below which the stop loss fires;
    ``tp_trailing`` scales a take-profit level to the price that arms trailing;
    ``trailing_stop`` is the fraction of the trailing high that triggers a sale.
    """

    stop_loss: float
    tp_trailing: float
    trailing_stop: float
    token_total_supply: int = 1_000_000_000


def price_from_reserves(sol_reserves: int, token_reserves: int) -> float:
    """Price of one whole token in SOL, from lamport and raw-token reserves."""
    sol = sol_reserves / 10**SOL_DECIMALS
    tokens = token_reserves / 10**TOKEN_DECIMALS
    if tokens == 0:
        return math.nan if sol == 0 else math.inf
    return sol / tokens


def _fmt_number(value: float) -> str:
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


def _notify(notifier: PriceNotifier | None, *args: object) -> None:
    if notifier is not None:
        notifier(*args)  # type: ignore[arg-type]


@dataclass
class TokenRecord:
    """Everything tracked about one token from its mint until it is sold out."""

    token_mint: Pubkey
    token_creator: Pubkey
    token_price: float
    token_max_price: float = 0.0
    token_mint_time: float = field(default_factory=time.monotonic)
    token_last_activity_time: float = field(default_factory=time.monotonic)
    token_buying_point_price: float = 0.0
    token_is_purchased: bool = False
    token_is_migrated: bool = False
    token_balance: int = 0
    sl_state: SLMode = SLMode.NONE
    tracked_sl_state: SLMode = SLMode.NONE
    token_trade_signal: TokenTradeSignal = TokenTradeSignal.NONE
    token_sell_status: TokenSellStatus = TokenSellStatus.NONE
    mint_budget_compute_unit_limit: int = 0
    mint_budget_compute_unit_price: int = 0
    dev_buy_sol_lamports: int | None = None
    buy_tx_history: list[tuple[tuple[int, int], int]] = field(default_factory=list)
    pending_manual_pattern: ManualPattern | None = None
    token_tp_levels: list[float] = field(default_factory=list)
    token_sell_amount_percents: list[float] = field(default_factory=list)
    token_sell_plan_amounts: list[int] = field(default_factory=list)
    next_tp_index_to_sell: int = 0
    pending_tp_sell_index: int | None = None
    pending_tp_sell_amount: int = 0
    is_cashback_enabled: bool = False
    override_buy_amount_sol: float | None = None
    override_stop_loss: float | None = None
    matched_pattern_label: str = ""
    tp_trailing_active: bool = False
    tp_trailing_max_price: float = 0.0
    filter_buy_multiplier: float = 1.0

    @classmethod
    def from_mint(
        cls,
        mint: Pubkey,
        creator: Pubkey,
        virtual_sol_reserves: int,
        virtual_token_reserves: int,
        budget_compute_data: tuple[int, int],
        is_cashback_enabled: bool,
    ) -> "TokenRecord":
        """Create the record for a freshly minted token and store it in ``TOKEN_DB``."""
        price = price_from_reserves(virtual_sol_reserves, virtual_token_reserves)
        cu_limit, cu_price = budget_compute_data
        record = cls(
            token_mint=mint,
            token_creator=creator,
            token_price=price,
            token_max_price=price,
            mint_budget_compute_unit_limit=cu_limit,
            mint_budget_compute_unit_price=cu_price,
            is_cashback_enabled=is_cashback_enabled,
        )
        TOKEN_DB.upsert(mint, record)
        return record

    def update_sell_state_flag(
        self, settings: TradeSettings, notifier: PriceNotifier | None = None
    ) -> None:
        """Re-evaluate stop loss and trailing take-profit against the current price."""
        if self.token_balance == 0:
            return

        mint = str(self.token_mint)
        supply = float(settings.token_total_supply)
        stop_loss = (
            self.override_stop_loss if self.override_stop_loss is not None else settings.stop_loss
        )
        if (
            self.token_price < self.token_buying_point_price * stop_loss
            and self.sl_state != SLMode.TRIGGERED
        ):
            update(
                f"[SL_REACHED]\t*MINT: {mint}\n"
                f"\t*MC VARIANT: {self.token_buying_point_price * supply:.3f} SOL (BUY) -> "
                f"{self.token_price * supply:.3f} SOL (NOW)"
            )
            _notify(
                notifier, "SL", mint, self.token_buying_point_price, self.token_price,
                f"SL: {settings.stop_loss * 100.0:.0f}%",
            )
            self.sl_state = SLMode.TRIGGERED

        if self.tp_trailing_active:
            self.tp_trailing_max_price = max(self.tp_trailing_max_price, self.token_price)

        if self.pending_tp_sell_index is not None:
            return
        tp_idx = self.next_tp_index_to_sell
        if tp_idx >= len(self.token_tp_levels):
            return

        threshold_pct = self.token_tp_levels[tp_idx]
        tp_multiplier = threshold_pct / 100.0
        trailing_trigger = tp_multiplier * settings.tp_trailing

        if (
            not self.tp_trailing_active
            and self.token_price >= self.token_buying_point_price * trailing_trigger
        ):
            self.tp_trailing_active = True
            self.tp_trailing_max_price = self.token_price
            update(
                f"[TP{tp_idx + 1}_TRAILING]\t*MINT: {mint}\n\t*TRIGGER: {trailing_trigger:.2f}x\n"
                f"\t*PRICE: {self.token_price:.10f}"
            )
            _notify(
                notifier, "TRAILING", mint, self.token_buying_point_price, self.token_price,
                f"TP{tp_idx + 1} Trailing activated at {trailing_trigger:.2f}x",
            )

        if not self.tp_trailing_active:
            return

        reached_tp = self.token_price >= self.token_buying_point_price * tp_multiplier
        trailing_stop_hit = self.token_price <= self.tp_trailing_max_price * settings.trailing_stop
        if not (reached_tp or trailing_stop_hit):
            return

        planned = (
            self.token_sell_plan_amounts[tp_idx]
            if tp_idx < len(self.token_sell_plan_amounts)
            else 0
        )
        planned = min(planned, self.token_balance)
        self.tp_trailing_active = False
        if planned <= 0:
            self.next_tp_index_to_sell += 1
            return

        self.pending_tp_sell_index = tp_idx
        self.pending_tp_sell_amount = planned
        reason = "TP_HIT" if reached_tp else "TRAILING_STOP"
        update(
            f"[TP{tp_idx + 1}_{reason}]\t*MINT: {mint}\n\t*TARGET: {_fmt_number(threshold_pct)}%\n"
            f"\t*SELL_AMOUNT: {planned}\n\t*MAX_PRICE: {self.tp_trailing_max_price:.10f}"
        )
        if reached_tp:
            event, detail = "TP", f"TP{tp_idx + 1} hit at {threshold_pct:.0f}%"
        else:
            event, detail = "TRAILING", f"Trailing Stop — TP{tp_idx + 1} {threshold_pct:.0f}%"
        _notify(notifier, event, mint, self.token_buying_point_price, self.token_price, detail)

    def set_tp_sell_strategy(
        self, tp_levels: list[float], sell_amount_percents: list[float]
    ) -> None:
        """Install a take-profit plan and reset all take-profit progress."""
        self.token_tp_levels = list(tp_levels)
        self.token_sell_amount_percents = list(sell_amount_percents)
        self.token_sell_plan_amounts = []
        self.next_tp_index_to_sell = 0
        self.pending_tp_sell_index = None
        self.pending_tp_sell_amount = 0
        self.tp_trailing_active = False
        self.tp_trailing_max_price = 0.0
        self.initialize_sell_plan_if_needed()

    def initialize_sell_plan_if_needed(self) -> None:
        """Split the held balance into per-level sell amounts once a position exists."""
        if (
            not self.token_is_purchased
            or self.token_balance == 0
            or self.token_sell_plan_amounts
            or not self.token_tp_levels
            or not self.token_sell_amount_percents
            or len(self.token_tp_levels) != len(self.token_sell_amount_percents)
        ):
            return

        plan: list[int] = []
        remaining = self.token_balance
        last = len(self.token_sell_amount_percents) - 1
        for position, sell_pct in enumerate(self.token_sell_amount_percents):
            if position == last:
                amount = remaining
            else:
                target = math.floor(self.token_balance * (sell_pct / 100.0))
                amount = max(0, min(target, remaining))
            plan.append(amount)
            remaining = max(0, remaining - amount)
        self.token_sell_plan_amounts = plan


class TokenDatabase:
    """Thread-safe in-memory store of token records keyed by mint; stores copies."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._records: dict[Pubkey, TokenRecord] = {}

    def upsert(self, key: Pubkey, data: TokenRecord) -> None:
        snapshot = copy.deepcopy(data)
        with self._lock:
            self._records[key] = snapshot

    def get(self, key: Pubkey) -> TokenRecord | None:
        with self._lock:
            record = self._records.get(key)
        return None if record is None else copy.deepcopy(record)

    def list_all(self) -> list[tuple[Pubkey, TokenRecord]]:
        with self._lock:
            items = list(self._records.items())
        return [(key, copy.deepcopy(record)) for key, record in items]

    def delete(self, key: Pubkey) -> None:
        with self._lock:
            self._records.pop(key, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._records


TOKEN_DB = TokenDatabase()