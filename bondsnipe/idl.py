"""Instruction and event layouts of the bonding-curve program, decoded from Borsh."""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import IntEnum
from typing import Callable, ClassVar, TypeVar

from .borsh import BorshReader, Pubkey

PROGRAM_ID = "6EF8rrecthR5Dkzon8Nwu78hRvfCKubJ14M5uBEwF6P"

DISCRIMINATOR_LEN = 8

# Instruction discriminators: first 8 bytes of instruction data.
IX_DISCRIMINATORS: dict[str, bytes] = {
    "Pumpfun:AdminSetCreator": bytes([69, 25, 171, 142, 57, 239, 13, 4]),
    "Pumpfun:AdminSetIdlAuthority": bytes([8, 217, 96, 231, 144, 104, 192, 5]),
    "Pumpfun:AdminUpdateTokenIncentives": bytes([209, 11, 115, 87, 213, 23, 124, 204]),
    "Pumpfun:Buy": bytes([102, 6, 61, 18, 1, 218, 235, 234]),
    "Pumpfun:BuyExactSolIn": bytes([56, 252, 116, 8, 158, 223, 205, 95]),
    "Pumpfun:ClaimCashback": bytes([37, 58, 35, 126, 190, 53, 228, 197]),
    "Pumpfun:ClaimTokenIncentives": bytes([16, 4, 71, 28, 204, 1, 40, 27]),
    "Pumpfun:CloseUserVolumeAccumulator": bytes([249, 69, 164, 218, 150, 103, 84, 138]),
    "Pumpfun:CollectCreatorFee": bytes([20, 22, 86, 123, 198, 28, 219, 132]),
    "Pumpfun:Create": bytes([24, 30, 200, 40, 5, 28, 7, 119]),
    "Pumpfun:CreateV2": bytes([214, 144, 76, 236, 95, 139, 49, 180]),
    "Pumpfun:DistributeCreatorFees": bytes([165, 114, 103, 0, 121, 206, 247, 81]),
    "Pumpfun:ExtendAccount": bytes([234, 102, 194, 203, 150, 72, 62, 229]),
    "Pumpfun:GetMinimumDistributableFee": bytes([117, 225, 127, 202, 134, 95, 68, 35]),
    "Pumpfun:InitUserVolumeAccumulator": bytes([94, 6, 202, 115, 255, 96, 232, 183]),
    "Pumpfun:Initialize": bytes([175, 175, 109, 31, 13, 152, 155, 237]),
    "Pumpfun:Migrate": bytes([155, 234, 231, 146, 236, 158, 162, 30]),
    "Pumpfun:MigrateBondingCurveCreator": bytes([87, 124, 52, 191, 52, 38, 214, 232]),
    "Pumpfun:Sell": bytes([51, 230, 133, 164, 1, 127, 131, 173]),
    "Pumpfun:SetCreator": bytes([254, 148, 255, 112, 207, 142, 170, 165]),
    "Pumpfun:SetMayhemVirtualParams": bytes([61, 169, 188, 191, 153, 149, 42, 97]),
    "Pumpfun:SetMetaplexCreator": bytes([138, 96, 174, 217, 48, 85, 197, 246]),
    "Pumpfun:SetParams": bytes([27, 234, 178, 52, 147, 2, 187, 141]),
    "Pumpfun:SetReservedFeeRecipients": bytes([111, 172, 162, 232, 114, 89, 213, 142]),
    "Pumpfun:SyncUserVolumeAccumulator": bytes([86, 31, 192, 87, 163, 87, 79, 238]),
    "Pumpfun:ToggleCashbackEnabled": bytes([115, 103, 224, 255, 189, 89, 86, 195]),
    "Pumpfun:ToggleCreateV2": bytes([28, 255, 230, 240, 172, 107, 203, 171]),
    "Pumpfun:ToggleMayhemMode": bytes([1, 9, 111, 208, 100, 31, 255, 163]),
    "Pumpfun:UpdateGlobalAuthority": bytes([227, 181, 74, 196, 208, 21, 97, 213]),
}

# Prefix of Anchor self-CPI event logs; the event discriminator follows it.
ANCHOR_EVENT_LOG = bytes([228, 69, 165, 46, 81, 203, 154, 29])

EVENT_DISCRIMINATORS: dict[str, bytes] = {
    "CreateEvent": bytes([27, 114, 169, 77, 222, 235, 99, 118]),
    "TradeEvent": bytes([189, 219, 127, 211, 78, 230, 97, 238]),
    "CompleteEvent": bytes([95, 114, 97, 156, 212, 46, 152, 8]),
    "CompletePumpAmmMigrationEvent": bytes([189, 233, 93, 185, 92, 148, 234, 148]),
    "SetParamsEvent": bytes([223, 195, 159, 246, 62, 48, 143, 131]),
    "CollectCreatorFeeEvent": bytes([122, 2, 127, 1, 14, 191, 12, 175]),
    "ClaimCashbackEvent": bytes([226, 214, 246, 33, 7, 242, 147, 229]),
    "ClaimTokenIncentivesEvent": bytes([79, 172, 246, 49, 205, 91, 206, 232]),
    "AdminSetCreatorEvent": bytes([64, 69, 192, 104, 29, 30, 25, 107]),
    "AdminSetIdlAuthorityEvent": bytes([245, 59, 70, 34, 75, 185, 109, 92]),
    "AdminUpdateTokenIncentivesEvent": bytes([147, 250, 108, 120, 247, 29, 67, 222]),
    "CloseUserVolumeAccumulatorEvent": bytes([146, 159, 189, 172, 146, 88, 56, 244]),
    "DistributeCreatorFeesEvent": bytes([165, 55, 129, 112, 4, 179, 202, 40]),
    "ExtendAccountEvent": bytes([97, 97, 215, 144, 93, 146, 22, 124]),
    "InitUserVolumeAccumulatorEvent": bytes([134, 36, 13, 72, 232, 101, 130, 216]),
    "MigrateBondingCurveCreatorEvent": bytes([155, 167, 104, 220, 213, 108, 243, 3]),
    "MinimumDistributableFeeEvent": bytes([168, 216, 132, 239, 235, 182, 49, 52]),
    "ReservedFeeRecipientsEvent": bytes([43, 188, 250, 18, 221, 75, 187, 95]),
    "SetCreatorEvent": bytes([237, 52, 123, 37, 245, 251, 72, 210]),
    "SetMetaplexCreatorEvent": bytes([142, 203, 6, 32, 127, 105, 191, 162]),
    "SyncUserVolumeAccumulatorEvent": bytes([197, 122, 167, 124, 116, 81, 91, 255]),
    "UpdateGlobalAuthorityEvent": bytes([182, 195, 137, 42, 35, 206, 207, 247]),
    "UpdateMayhemVirtualParamsEvent": bytes([117, 123, 228, 182, 161, 168, 220, 214]),
}

_IX_BY_DISC = {disc: name for name, disc in IX_DISCRIMINATORS.items()}
_EVENT_BY_DISC = {disc: name for name, disc in EVENT_DISCRIMINATORS.items()}

# Account positions within each instruction: account_keys[ix.accounts[INDEX]].
_TRADE_ACCOUNTS = (
    "GLOBAL", "FEE_RECIPIENT", "MINT", "BONDING_CURVE", "ASSOCIATED_BONDING_CURVE",
    "ASSOCIATED_USER", "USER", "SYSTEM_PROGRAM", "TOKEN_PROGRAM", "CREATOR_VAULT",
    "EVENT_AUTHORITY", "PROGRAM", "GLOBAL_VOLUME_ACCUMULATOR", "USER_VOLUME_ACCUMULATOR",
    "FEE_CONFIG", "FEE_PROGRAM",
)
_AUTHORITY_TOGGLE = ("GLOBAL", "AUTHORITY", "EVENT_AUTHORITY", "PROGRAM")

_ACCOUNT_LAYOUTS: dict[str, tuple[str, ...]] = {
    "admin_set_creator": (
        "ADMIN_SET_CREATOR_AUTHORITY", "GLOBAL", "MINT", "BONDING_CURVE",
        "EVENT_AUTHORITY", "PROGRAM",
    ),
    "admin_set_idl_authority": (
        "AUTHORITY", "GLOBAL", "IDL_ACCOUNT", "SYSTEM_PROGRAM", "PROGRAM_SIGNER",
        "EVENT_AUTHORITY", "PROGRAM",
    ),
    "admin_update_token_incentives": (
        "AUTHORITY", "GLOBAL", "GLOBAL_VOLUME_ACCUMULATOR", "MINT",
        "GLOBAL_INCENTIVE_TOKEN_ACCOUNT", "ASSOCIATED_TOKEN_PROGRAM", "SYSTEM_PROGRAM",
        "TOKEN_PROGRAM", "EVENT_AUTHORITY", "PROGRAM",
    ),
    "buy": _TRADE_ACCOUNTS,
    "buy_exact_sol_in": _TRADE_ACCOUNTS,
    "claim_cashback": (
        "USER", "USER_VOLUME_ACCUMULATOR", "SYSTEM_PROGRAM", "EVENT_AUTHORITY", "PROGRAM",
    ),
    "claim_token_incentives": (
        "USER", "USER_ATA", "GLOBAL_VOLUME_ACCUMULATOR", "GLOBAL_INCENTIVE_TOKEN_ACCOUNT",
        "USER_VOLUME_ACCUMULATOR", "MINT", "TOKEN_PROGRAM", "SYSTEM_PROGRAM",
        "ASSOCIATED_TOKEN_PROGRAM", "EVENT_AUTHORITY", "PROGRAM", "PAYER",
    ),
    "close_user_volume_accumulator": (
        "USER", "USER_VOLUME_ACCUMULATOR", "EVENT_AUTHORITY", "PROGRAM",
    ),
    "collect_creator_fee": (
        "CREATOR", "CREATOR_VAULT", "SYSTEM_PROGRAM", "EVENT_AUTHORITY", "PROGRAM",
    ),
    "create": (
        "MINT", "MINT_AUTHORITY", "BONDING_CURVE", "ASSOCIATED_BONDING_CURVE", "GLOBAL",
        "MPL_TOKEN_METADATA", "METADATA", "USER", "SYSTEM_PROGRAM", "TOKEN_PROGRAM",
        "ASSOCIATED_TOKEN_PROGRAM", "RENT", "EVENT_AUTHORITY", "PROGRAM",
    ),
    "create_v2": (
        "MINT", "MINT_AUTHORITY", "BONDING_CURVE", "ASSOCIATED_BONDING_CURVE", "GLOBAL",
        "USER", "SYSTEM_PROGRAM", "TOKEN_PROGRAM", "ASSOCIATED_TOKEN_PROGRAM",
        "MAYHEM_PROGRAM_ID", "GLOBAL_PARAMS", "SOL_VAULT", "MAYHEM_STATE",
        "MAYHEM_TOKEN_VAULT", "EVENT_AUTHORITY", "PROGRAM",
    ),
    "distribute_creator_fees": (
        "MINT", "BONDING_CURVE", "SHARING_CONFIG", "CREATOR_VAULT", "SYSTEM_PROGRAM",
        "EVENT_AUTHORITY", "PROGRAM",
    ),
    "extend_account": (
        "ACCOUNT", "USER", "SYSTEM_PROGRAM", "EVENT_AUTHORITY", "PROGRAM",
    ),
    "get_minimum_distributable_fee": (
        "MINT", "BONDING_CURVE", "SHARING_CONFIG", "CREATOR_VAULT",
    ),
    "init_user_volume_accumulator": (
        "PAYER", "USER", "USER_VOLUME_ACCUMULATOR", "SYSTEM_PROGRAM",
        "EVENT_AUTHORITY", "PROGRAM",
    ),
    "initialize": ("GLOBAL", "USER", "SYSTEM_PROGRAM"),
    "migrate": (
        "GLOBAL", "WITHDRAW_AUTHORITY", "MINT", "BONDING_CURVE", "ASSOCIATED_BONDING_CURVE",
        "USER", "SYSTEM_PROGRAM", "TOKEN_PROGRAM", "PUMP_AMM", "POOL", "POOL_AUTHORITY",
        "POOL_AUTHORITY_MINT_ACCOUNT", "POOL_AUTHORITY_WSOL_ACCOUNT", "AMM_GLOBAL_CONFIG",
        "WSOL_MINT", "LP_MINT", "USER_POOL_TOKEN_ACCOUNT", "POOL_BASE_TOKEN_ACCOUNT",
        "POOL_QUOTE_TOKEN_ACCOUNT", "TOKEN_2022_PROGRAM", "ASSOCIATED_TOKEN_PROGRAM",
        "PUMP_AMM_EVENT_AUTHORITY", "EVENT_AUTHORITY", "PROGRAM",
    ),
    "migrate_bonding_curve_creator": (
        "MINT", "BONDING_CURVE", "SHARING_CONFIG", "EVENT_AUTHORITY", "PROGRAM",
    ),
    "sell": (
        "GLOBAL", "FEE_RECIPIENT", "MINT", "BONDING_CURVE", "ASSOCIATED_BONDING_CURVE",
        "ASSOCIATED_USER", "USER", "SYSTEM_PROGRAM", "CREATOR_VAULT", "TOKEN_PROGRAM",
        "EVENT_AUTHORITY", "PROGRAM", "FEE_CONFIG", "FEE_PROGRAM",
    ),
    "set_creator": (
        "SET_CREATOR_AUTHORITY", "GLOBAL", "MINT", "METADATA", "BONDING_CURVE",
        "EVENT_AUTHORITY", "PROGRAM",
    ),
    "set_mayhem_virtual_params": (
        "SOL_VAULT_AUTHORITY", "MAYHEM_TOKEN_VAULT", "MINT", "GLOBAL", "BONDING_CURVE",
        "TOKEN_PROGRAM", "EVENT_AUTHORITY", "PROGRAM",
    ),
    "set_metaplex_creator": (
        "MINT", "METADATA", "BONDING_CURVE", "EVENT_AUTHORITY", "PROGRAM",
    ),
    "set_params": _AUTHORITY_TOGGLE,
    "set_reserved_fee_recipients": _AUTHORITY_TOGGLE,
    "sync_user_volume_accumulator": (
        "USER", "GLOBAL_VOLUME_ACCUMULATOR", "USER_VOLUME_ACCUMULATOR",
        "EVENT_AUTHORITY", "PROGRAM",
    ),
    "toggle_cashback_enabled": _AUTHORITY_TOGGLE,
    "toggle_create_v2": _AUTHORITY_TOGGLE,
    "toggle_mayhem_mode": _AUTHORITY_TOGGLE,
    "update_global_authority": (
        "GLOBAL", "AUTHORITY", "NEW_AUTHORITY", "EVENT_AUTHORITY", "PROGRAM",
    ),
}


def _account_enum(ix_name: str, names: tuple[str, ...]) -> type[IntEnum]:
    enum_name = "".join(part.title() for part in ix_name.split("_")) + "Accounts"
    return IntEnum(enum_name, [(name, index) for index, name in enumerate(names)])


IX_ACCOUNTS: dict[str, type[IntEnum]] = {
    name: _account_enum(name, layout) for name, layout in _ACCOUNT_LAYOUTS.items()
}


def _opt_bool(reader: BorshReader) -> bool:
    # A trailing OptionBool may be absent in older encodings; absent means false.
    return False if reader.is_empty() else reader.bool()


def _pubkeys8(reader: BorshReader) -> tuple[Pubkey, ...]:
    return tuple(reader.pubkey() for _ in range(8))


_READERS: dict[str, Callable[[BorshReader], object]] = {
    "u8": BorshReader.u8,
    "bool": BorshReader.bool,
    "u32": BorshReader.u32,
    "u64": BorshReader.u64,
    "i64": BorshReader.i64,
    "string": BorshReader.string,
    "pubkey": BorshReader.pubkey,
    "opt_bool": _opt_bool,
    "pubkeys8": _pubkeys8,
}

T = TypeVar("T", bound="_BorshStruct")


class _BorshStruct:
    """Dataclass mixin: fields are read in declaration order using ``_LAYOUT``."""

    _LAYOUT: ClassVar[tuple[str, ...]] = ()

    @classmethod
    def read(cls: type[T], reader: BorshReader) -> T:
        names = [f.name for f in fields(cls)]  # type: ignore[arg-type]
        values = {name: _READERS[kind](reader) for name, kind in zip(names, cls._LAYOUT)}
        return cls(**values)

    @classmethod
    def decode(cls: type[T], data: bytes) -> T:
        """Decode from Borsh bytes; trailing bytes are ignored."""
        return cls.read(BorshReader(data))


def decode(cls: type[T], data: bytes) -> T:
    """Decode ``data`` as an instance of the layout class ``cls``."""
    return cls.decode(data)


# ── Instruction arguments (data after the 8-byte discriminator) ──


@dataclass(frozen=True)
class AdminSetCreatorArgs(_BorshStruct):
    creator: Pubkey
    _LAYOUT: ClassVar[tuple[str, ...]] = ("pubkey",)


@dataclass(frozen=True)
class AdminSetIdlAuthorityArgs(_BorshStruct):
    idl_authority: Pubkey
    _LAYOUT: ClassVar[tuple[str, ...]] = ("pubkey",)


@dataclass(frozen=True)
class AdminUpdateTokenIncentivesArgs(_BorshStruct):
    start_time: int
    end_time: int
    seconds_in_a_day: int
    day_number: int
    pump_token_supply_per_day: int
    _LAYOUT: ClassVar[tuple[str, ...]] = ("i64", "i64", "i64", "u64", "u64")


@dataclass(frozen=True)
class BuyArgs(_BorshStruct):
    amount: int
    max_sol_cost: int
    track_volume: bool
    _LAYOUT: ClassVar[tuple[str, ...]] = ("u64", "u64", "opt_bool")


@dataclass(frozen=True)
class BuyExactSolInArgs(_BorshStruct):
    spendable_sol_in: int
    min_tokens_out: int
    track_volume: bool
    _LAYOUT: ClassVar[tuple[str, ...]] = ("u64", "u64", "opt_bool")


@dataclass(frozen=True)
class CreateArgs(_BorshStruct):
    name: str
    symbol: str
    uri: str
    creator: Pubkey
    _LAYOUT: ClassVar[tuple[str, ...]] = ("string", "string", "string", "pubkey")


@dataclass(frozen=True)
class CreateV2Args(_BorshStruct):
    name: str
    symbol: str
    uri: str
    creator: Pubkey
    is_mayhem_mode: bool
    is_cashback_enabled: bool
    _LAYOUT: ClassVar[tuple[str, ...]] = (
        "string", "string", "string", "pubkey", "bool", "opt_bool",
    )


@dataclass(frozen=True)
class SellArgs(_BorshStruct):
    amount: int
    min_sol_output: int
    _LAYOUT: ClassVar[tuple[str, ...]] = ("u64", "u64")


@dataclass(frozen=True)
class SetCreatorArgs(_BorshStruct):
    creator: Pubkey
    _LAYOUT: ClassVar[tuple[str, ...]] = ("pubkey",)


@dataclass(frozen=True)
class SetParamsArgs(_BorshStruct):
    initial_virtual_token_reserves: int
    initial_virtual_sol_reserves: int
    initial_real_token_reserves: int
    token_total_supply: int
    fee_basis_points: int
    withdraw_authority: Pubkey
    enable_migrate: bool
    pool_migration_fee: int
    creator_fee_basis_points: int
    set_creator_authority: Pubkey
    admin_set_creator_authority: Pubkey
    _LAYOUT: ClassVar[tuple[str, ...]] = (
        "u64", "u64", "u64", "u64", "u64", "pubkey", "bool", "u64", "u64",
        "pubkey", "pubkey",
    )


@dataclass(frozen=True)
class SetReservedFeeRecipientsArgs(_BorshStruct):
    whitelist_pda: Pubkey
    _LAYOUT: ClassVar[tuple[str, ...]] = ("pubkey",)


@dataclass(frozen=True)
class ToggleCashbackEnabledArgs(_BorshStruct):
    enabled: bool
    _LAYOUT: ClassVar[tuple[str, ...]] = ("bool",)


@dataclass(frozen=True)
class ToggleCreateV2Args(_BorshStruct):
    enabled: bool
    _LAYOUT: ClassVar[tuple[str, ...]] = ("bool",)


@dataclass(frozen=True)
class ToggleMayhemModeArgs(_BorshStruct):
    enabled: bool
    _LAYOUT: ClassVar[tuple[str, ...]] = ("bool",)


# ── Events (data after the 8-byte log prefix and 8-byte event discriminator) ──


@dataclass(frozen=True)
class IdlCreateEvent(_BorshStruct):
    name: str
    symbol: str
    uri: str
    mint: Pubkey
    bonding_curve: Pubkey
    user: Pubkey
    creator: Pubkey
    timestamp: int
    virtual_token_reserves: int
    virtual_sol_reserves: int
    real_token_reserves: int
    token_total_supply: int
    token_program: Pubkey
    is_mayhem_mode: bool
    is_cashback_enabled: bool
    _LAYOUT: ClassVar[tuple[str, ...]] = (
        "string", "string", "string", "pubkey", "pubkey", "pubkey", "pubkey", "i64",
        "u64", "u64", "u64", "u64", "pubkey", "bool", "bool",
    )


@dataclass(frozen=True)
class IdlTradeEvent(_BorshStruct):
    mint: Pubkey
    sol_amount: int
    token_amount: int
    is_buy: bool
    user: Pubkey
    timestamp: int
    virtual_sol_reserves: int
    virtual_token_reserves: int
    real_sol_reserves: int
    real_token_reserves: int
    fee_recipient: Pubkey
    fee_basis_points: int
    fee: int
    creator: Pubkey
    creator_fee_basis_points: int
    creator_fee: int
    track_volume: bool
    total_unclaimed_tokens: int
    total_claimed_tokens: int
    current_sol_volume: int
    last_update_timestamp: int
    ix_name: str
    mayhem_mode: bool
    cashback_fee_basis_points: int
    cashback: int
    _LAYOUT: ClassVar[tuple[str, ...]] = (
        "pubkey", "u64", "u64", "bool", "pubkey", "i64", "u64", "u64", "u64", "u64",
        "pubkey", "u64", "u64", "pubkey", "u64", "u64", "bool", "u64", "u64", "u64",
        "i64", "string", "bool", "u64", "u64",
    )


@dataclass(frozen=True)
class IdlCompleteEvent(_BorshStruct):
    user: Pubkey
    mint: Pubkey
    bonding_curve: Pubkey
    timestamp: int
    _LAYOUT: ClassVar[tuple[str, ...]] = ("pubkey", "pubkey", "pubkey", "i64")


@dataclass(frozen=True)
class IdlCompletePumpAmmMigrationEvent(_BorshStruct):
    user: Pubkey
    mint: Pubkey
    mint_amount: int
    sol_amount: int
    pool_migration_fee: int
    bonding_curve: Pubkey
    timestamp: int
    pool: Pubkey
    _LAYOUT: ClassVar[tuple[str, ...]] = (
        "pubkey", "pubkey", "u64", "u64", "u64", "pubkey", "i64", "pubkey",
    )


@dataclass(frozen=True)
class IdlSetParamsEvent(_BorshStruct):
    initial_virtual_token_reserves: int
    initial_virtual_sol_reserves: int
    initial_real_token_reserves: int
    final_real_sol_reserves: int
    token_total_supply: int
    fee_basis_points: int
    withdraw_authority: Pubkey
    enable_migrate: bool
    pool_migration_fee: int
    creator_fee_basis_points: int
    fee_recipients: tuple[Pubkey, ...]
    timestamp: int
    set_creator_authority: Pubkey
    admin_set_creator_authority: Pubkey
    _LAYOUT: ClassVar[tuple[str, ...]] = (
        "u64", "u64", "u64", "u64", "u64", "u64", "pubkey", "bool", "u64", "u64",
        "pubkeys8", "i64", "pubkey", "pubkey",
    )


@dataclass(frozen=True)
class IdlCollectCreatorFeeEvent(_BorshStruct):
    timestamp: int
    creator: Pubkey
    creator_fee: int
    _LAYOUT: ClassVar[tuple[str, ...]] = ("i64", "pubkey", "u64")


@dataclass(frozen=True)
class IdlClaimCashbackEvent(_BorshStruct):
    user: Pubkey
    amount: int
    timestamp: int
    total_claimed: int
    total_cashback_earned: int
    _LAYOUT: ClassVar[tuple[str, ...]] = ("pubkey", "u64", "i64", "u64", "u64")


@dataclass(frozen=True)
class IdlClaimTokenIncentivesEvent(_BorshStruct):
    user: Pubkey
    mint: Pubkey
    amount: int
    timestamp: int
    total_claimed_tokens: int
    current_sol_volume: int
    _LAYOUT: ClassVar[tuple[str, ...]] = ("pubkey", "pubkey", "u64", "i64", "u64", "u64")


# ── Identification ──


def identify_instruction(data: bytes) -> str | None:
    """Name of the instruction whose discriminator starts ``data``, if known."""
    if len(data) < DISCRIMINATOR_LEN:
        return None
    return _IX_BY_DISC.get(bytes(data[:DISCRIMINATOR_LEN]))


def identify_event(data: bytes) -> str | None:
    """Name of the event whose discriminator sits at ``data[8:16]``, if known."""
    if len(data) < 2 * DISCRIMINATOR_LEN:
        return None
    return _EVENT_BY_DISC.get(bytes(data[DISCRIMINATOR_LEN:2 * DISCRIMINATOR_LEN]))