# bondsnipe

Building blocks for following tokens that trade on a bonding curve and later
move to an AMM pool: decoding the program's instructions and events, matching
new mints against entry patterns, receiving pattern statistics over HTTP, and
keeping per-token take-profit and stop-loss state. It uses only the standard
library.

## Modules

### `bondsnipe.borsh`

- `b58encode(data)` / `b58decode(text)` – base58 with the Bitcoin alphabet;
  `b58decode` raises `ValueError` on characters outside it.
- `Pubkey` – a frozen, ordered 32-byte address. `str()` gives base58,
  `bytes()` the raw bytes, `Pubkey.from_base58(text)` parses one. Any length
  other than 32 raises `ValueError`.
- `BorshReader(data)` – reads little-endian values in order: `u8()`, `bool()`,
  `u32()`, `u64()`, `i64()`, `string()` (u32 length then UTF-8), `pubkey()`,
  plus `is_empty()` and the `remaining` byte count.
- `BorshError` (a `ValueError`) – raised on truncated data, a bool byte other
  than 0 or 1, or invalid UTF-8.

### `bondsnipe.idl`

- Instruction argument classes (`AdminSetCreatorArgs`,
  `AdminSetIdlAuthorityArgs`, `AdminUpdateTokenIncentivesArgs`, `BuyArgs`,
  `BuyExactSolInArgs`, `CreateArgs`, `CreateV2Args`, `SellArgs`,
  `SetCreatorArgs`, `SetParamsArgs`, `SetReservedFeeRecipientsArgs`,
  `ToggleCashbackEnabledArgs`, `ToggleCreateV2Args`, `ToggleMayhemModeArgs`)
  and event classes (`IdlCreateEvent`, `IdlTradeEvent`, `IdlCompleteEvent`,
  `IdlCompletePumpAmmMigrationEvent`, `IdlSetParamsEvent`,
  `IdlCollectCreatorFeeEvent`, `IdlClaimCashbackEvent`,
  `IdlClaimTokenIncentivesEvent`). Each is a frozen dataclass built with
  `Cls.decode(data)` or `decode(Cls, data)`; trailing bytes are ignored.
  Instruction data is passed without its 8-byte discriminator, event data
  without the 16 bytes of log prefix and event discriminator. In `BuyArgs`,
  `BuyExactSolInArgs` and `CreateV2Args` the last flag may be missing, and is
  then `False`.
- `identify_instruction(data)` names an instruction (for example
  `"Pumpfun:Buy"`) from its first 8 bytes; `identify_event(data)` names an
  event (for example `"TradeEvent"`) from bytes 8–16. Both return `None` for
  short or unknown data.
- `IX_DISCRIMINATORS`, `EVENT_DISCRIMINATORS`, `ANCHOR_EVENT_LOG`,
  `PROGRAM_ID`, and `IX_ACCOUNTS`, a mapping from instruction name
  (`"buy"`, `"sell"`, `"create_v2"`, …) to an `IntEnum` of account positions.

### `bondsnipe.pattern_translator`

- `ManualPatternRaw` – a pattern in its loose text form. Compute-unit fields
  take `"NULL"` (zero), `"NOT_NULL"` (non-zero) or an exact number; anything
  else means `"NULL"`. `mint_instructions` is a `>>`-joined instruction
  sequence. `dev_buy_instruction_data` is a `BuyIxRaw(name, amount)` whose
  amount is `"ANY"`/`"NULL"`, `"<field>>>DIVIDED>><n>"` or an exact number.
- `ManualPatternRaw.parse(index)` returns a `ManualPattern`. It raises
  `ValueError` when `take_profit` is empty or `sell_amounts` has a different
  length; missing `sell_amounts` are split evenly. A zero stop loss and a
  non-positive buy amount are dropped; unparsable lookup-table addresses are
  skipped. An unnamed pattern is labelled `PATTERN_<index + 1>`.
- `ManualPattern.matches(cu_limit, cu_price, ctx)` checks only the fields that
  are set against a `MintTransactionContext` (instruction names, buy
  instruction name and JSON arguments, `TokenVersion`, lookup-table
  addresses, `TxType`). `needs_bundle_buy_confirmation()` and
  `matches_bundle_buy_cu(cu_limit, cu_price)` cover the deferred check on the
  next buy's compute-budget values.
- `ValueCondition`, `AmountCondition`, `parse_value_condition`,
  `parse_amount_condition`, `BuyIxCondition`, and
  `extract_buy_amount(buy_name, buy_ix_data)`, which reads `amount` or
  `spendable_sol_in` from a JSON string.
- `raw_manual_patterns()` gives the built-in catch-all pattern
  `ALL_PUMPFUN_FILTERED` (take profit at 150 % and 300 %, 50 % sold at each);
  `load_manual_patterns(raw_patterns=None)` parses a list, printing each
  loaded pattern and reporting failures on stderr instead of raising.

### `bondsnipe.pattern_api`

- `parse_mint_pattern("(cu_limit, cu_price)")` and
  `parse_buy_pattern("((cu_limit, cu_price), count)")` raise
  `PatternFormatError` on bad input or out-of-range numbers.
- `TokenFilter.from_raw(mapping)` validates one posted filter;
  `primary_tp_threshold()` is its first take-profit level.
- `PatternCache` – thread-safe; `get()` returns an immutable tuple snapshot,
  `replace(filters)` swaps it. `PATTERN_CACHE` is the shared instance.
- `handle_post_patterns(cache, payload)` returns `(status, body)`: 200 with
  `{"status": "ok", "patterns_saved": n}` after replacing the cache, 422 when a
  field is missing or of the wrong type, 400 when a filter fails to parse.
- `make_server(port, cache=None)` builds a `ThreadingHTTPServer` on all
  interfaces answering `POST /patterns` (JSON only; other content types get
  415) and `GET /health` (`ok`); `run_pattern_server(port)` serves it until
  interrupted.

### `bondsnipe.token_record`

- `TokenRecord` – per-mint state: price and maximum price, balance, buy
  price, stop-loss flag (`SLMode`), sell status (`TokenSellStatus`), trade
  signal (`TokenTradeSignal`), take-profit plan and trailing state.
  `TokenRecord.from_mint(...)` creates one and stores it in `TOKEN_DB`.
- `set_tp_sell_strategy(tp_levels, sell_amount_percents)` installs a plan and
  resets progress; `initialize_sell_plan_if_needed()` splits the held balance
  once the token is bought, the last level taking what remains.
- `update_sell_state_flag(settings, notifier=None)` evaluates stop loss and
  trailing take-profit against a `TradeSettings(stop_loss, tp_trailing,
  trailing_stop, token_total_supply=1_000_000_000)`. The optional notifier is
  called as `notifier(event, mint, buy_price, price, detail)` with event `"SL"`,
  `"TRAILING"` or `"TP"`.
- `price_from_reserves(sol_reserves, token_reserves)` – SOL per whole token
  (9 and 6 decimals).
- `TokenDatabase` – thread-safe in-memory store keyed by `Pubkey` with
  `upsert`, `get`, `list_all`, `delete`, `len()` and `in`; it stores and returns
  copies. `TOKEN_DB` is the shared instance.

### `bondsnipe.update_status`

`StatusUpdater(signer, settings, db=None, notifier=None,
outcome_recorder=None)` applies trades to a record in place and stores it:
`apply_pumpfun_buy` / `apply_pumpfun_sell` take a `PumpfunTradeEvent`,
`apply_pumpswap_buy` / `apply_pumpswap_sell` a `PumpswapTradeEvent` and the
base mint. A buy by `signer` opens or adds to the position; a first buy by the
creator records the creator's SOL amount. A sale by `signer` that empties the
position deletes the record, calls `outcome_recorder(label, mint, is_profit)`
and returns `None`; selling more than is held raises `ValueError`.

### `bondsnipe.logs`

`log`, `info`, `success`, `warning`, `error`, `update`, `result`, `alert`,
`dev_trade`, `pro_trade` and `dev_log(message, enabled)` print a coloured,
timestamped line and append its plain form (`HH:MM:SS.mmm [TAG] message`, see
`format_line`) to `logs/log_<YYYY-mm-dd_HH>` under the current directory,
creating it if needed. `LogWriter` is the file writer; `solscan(signature)`
returns an explorer link for a transaction.

## Example

```python
from bondsnipe.borsh import Pubkey
from bondsnipe.idl import BuyArgs, identify_instruction
from bondsnipe.pattern_translator import load_manual_patterns
from bondsnipe.token_record import TokenRecord

for pattern in load_manual_patterns():
    print(pattern.label, pattern.take_profit, pattern.sell_amounts)

data = bytes([102, 6, 61, 18, 1, 218, 235, 234]) + (1000).to_bytes(8, "little") * 2
print(identify_instruction(data))          # Pumpfun:Buy
print(BuyArgs.decode(data[8:]).amount)     # 1000

mint = Pubkey(bytes(32))
record = TokenRecord(token_mint=mint, token_creator=mint, token_price=1e-8,
                     token_is_purchased=True, token_balance=1000)
record.set_tp_sell_strategy([150.0, 300.0], [50.0, 50.0])
print(record.token_sell_plan_amounts)      # [500, 500]
```

## What it does not do

The package has no command-line program. It does not connect to an RPC node or
a transaction stream to observe trades, and it builds and sends no
transactions: events must be decoded and passed to `StatusUpdater` by the
caller. Migration to the pool is not applied to records, and notifications
(for example to a chat) happen only through the `notifier` and
`outcome_recorder` callbacks you supply. Token records live in memory only.