"""Apply observed trades to token records and keep the token database current."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable

from .borsh import Pubkey
from .logs import info
from .token_record import (
    TOKEN_DB,
    PriceNotifier,
    TokenDatabase,
    TokenRecord,
    TokenSellStatus,
    TradeSettings,
    price_from_reserves,
)

# (pattern label, mint, was the position closed in profit)
OutcomeRecorder = Callable[[str, str, bool], None]


@dataclass(frozen=True)
class PumpfunTradeEvent:
    """A buy or sell on the bonding curve."""

    mint: Pubkey
    user: Pubkey
    creator: Pubkey
    sol_amount: int
    token_amount: int
    virtual_sol_reserves: int
    virtual_token_reserves: int


@dataclass(frozen=True)
class PumpswapTradeEvent:
    """A buy or sell in the AMM pool; ``base_amount`` is tokens received or sold."""

    user: Pubkey
    coin_creator: Pubkey
    base_amount: int
    pool_base_token_reserves: int
    pool_quote_token_reserves: int


class StatusUpdater:
    """Updates records from trade events seen on chain, in place, and stores them."""

    def __init__(
        self,
        signer: Pubkey,
        settings: TradeSettings,
        db: TokenDatabase | None = None,
        notifier: PriceNotifier | None = None,
        outcome_recorder: OutcomeRecorder | None = None,
    ) -> None:
        self.signer = signer
        self.settings = settings
        self.db = TOKEN_DB if db is None else db
        self.notifier = notifier
        self.outcome_recorder = outcome_recorder

    def _refresh(self, record: TokenRecord) -> None:
        record.update_sell_state_flag(self.settings, self.notifier)

    def _record_buy(self, record: TokenRecord, amount: int, price: float) -> None:
        record.token_is_purchased = True
        record.token_balance += amount
        record.token_buying_point_price = price
        record.token_sell_status = TokenSellStatus.NONE
        record.initialize_sell_plan_if_needed()

    def _record_sell(self, record: TokenRecord, key: Pubkey, amount: int) -> TokenRecord | None:
        if amount > record.token_balance:
            raise ValueError(
                f"sold {amount} tokens but only {record.token_balance} are held for {key}"
            )
        record.token_balance -= amount
        record.token_sell_status = TokenSellStatus.NONE
        record.pending_tp_sell_index = None
        record.pending_tp_sell_amount = 0
        record.tp_trailing_active = False
        record.tp_trailing_max_price = 0.0

        if record.token_balance > 0:
            record.next_tp_index_to_sell += 1
            self.db.upsert(key, record)
            return record

        is_profit = record.token_price > record.token_buying_point_price
        if self.outcome_recorder is not None:
            self.outcome_recorder(record.matched_pattern_label, str(key), is_profit)
        self.db.delete(key)
        return None

    def apply_pumpfun_buy(
        self, record: TokenRecord, event: PumpfunTradeEvent, tx_id: str
    ) -> TokenRecord:
        price = price_from_reserves(event.virtual_sol_reserves, event.virtual_token_reserves)
        record.token_max_price = max(record.token_max_price, price)
        record.token_price = price
        record.token_creator = event.creator
        record.token_last_activity_time = time.monotonic()

        if event.user == self.signer:
            info(f"[My Tx]\t[Buy]\t*Hash: {tx_id}\t*Mint: {event.mint}")
            self._record_buy(record, event.token_amount, price)
        elif event.user == record.token_creator and record.dev_buy_sol_lamports is None:
            record.dev_buy_sol_lamports = event.sol_amount

        self._refresh(record)
        self.db.upsert(event.mint, record)
        return record

    def apply_pumpfun_sell(
        self, record: TokenRecord, event: PumpfunTradeEvent, tx_id: str
    ) -> TokenRecord | None:
        """Returns ``None`` once our own sale empties the position."""
        price = price_from_reserves(event.virtual_sol_reserves, event.virtual_token_reserves)
        record.token_max_price = max(record.token_max_price, price)
        record.token_price = price
        record.token_creator = event.creator
        record.token_last_activity_time = time.monotonic()

        self._refresh(record)

        if event.user == self.signer:
            info(f"[My Tx]\t[Sell]\t*Hash: {tx_id}\t*Mint: {event.mint}")
            return self._record_sell(record, event.mint, event.token_amount)

        self.db.upsert(event.mint, record)
        return record

    def apply_pumpswap_buy(
        self, record: TokenRecord, event: PumpswapTradeEvent, base_mint: Pubkey, tx_id: str
    ) -> TokenRecord:
        price = price_from_reserves(
            event.pool_quote_token_reserves, event.pool_base_token_reserves
        )
        record.token_max_price = max(record.token_max_price, price)
        record.token_creator = event.coin_creator
        record.token_price = price
        record.token_last_activity_time = time.monotonic()

        self._refresh(record)

        if event.user == self.signer:
            info(f"[My tx]\t[Buy]\t*Hash: {tx_id}\t*mint: {base_mint}")
            self._record_buy(record, event.base_amount, price)

        self.db.upsert(record.token_mint, record)
        return record

    def apply_pumpswap_sell(
        self, record: TokenRecord, event: PumpswapTradeEvent, base_mint: Pubkey, tx_id: str
    ) -> TokenRecord | None:
        """Returns ``None`` once our own sale empties the position."""
        price = price_from_reserves(
            event.pool_quote_token_reserves, event.pool_base_token_reserves
        )
        record.token_creator = event.coin_creator
        record.token_price = price
        record.token_last_activity_time = time.monotonic()

        self._refresh(record)

        if event.user == self.signer:
            info(f"[My Tx]\t[Sell]\t*Hash: {tx_id}\t*mint: {base_mint}")
            return self._record_sell(record, base_mint, event.base_amount)

        self.db.upsert(base_mint, record)
        return record