"""Shared test fixtures: account byte builders and an in-memory account source."""

import struct
from collections.abc import Callable

import pytest
from solders.pubkey import Pubkey  # type: ignore[import-untyped]

from curvequote.exceptions import AccountNotFoundError
from curvequote.layouts.constants import (
    CPMM_PROGRAM_ID,
    LAUNCHPAD_PROGRAM_ID,
    PUMPFUN_PROGRAM_ID,
    TOKEN_PROGRAM_ID,
)
from curvequote.models.state import AccountData


def key(n: int) -> bytes:
    """32-byte identifier filled with ``n``."""
    return bytes([n] * 32)


def addr(n: int) -> str:
    return str(Pubkey.from_bytes(key(n)))


def build_bonding_curve(
    *,
    virtual_token_reserves: int = 1_000_000_000_000,
    virtual_sol_reserves: int = 30_000_000_000,
    real_token_reserves: int = 500_000_000_000,
    real_sol_reserves: int = 42_500_000_000,
    token_total_supply: int = 1_000_000_000_000,
    complete: bool = False,
    size: int = 57,
) -> bytes:
    buf = bytearray(size)
    struct.pack_into(
        "<5Q",
        buf,
        8,
        virtual_token_reserves,
        virtual_sol_reserves,
        real_token_reserves,
        real_sol_reserves,
        token_total_supply,
    )
    buf[48] = 1 if complete else 0
    return bytes(buf)


def build_launchpad_pool(
    *,
    status: int = 0,
    mint_decimals_a: int = 6,
    mint_decimals_b: int = 9,
    migrate_type: int = 1,
    supply: int = 1_000_000_000_000,
    total_sell_a: int = 800_000_000_000,
    virtual_a: int = 1_000_000_000_000,
    virtual_b: int = 30_000_000_000,
    real_a: int = 500_000_000_000,
    real_b: int = 42_500_000_000,
    total_fund_raising_b: int = 85_000_000_000,
    config: int = 1,
    size: int = 365,
) -> bytes:
    buf = bytearray(size)
    struct.pack_into("<Q", buf, 8, 7)  # epoch
    buf[16] = 254  # bump
    buf[17] = status
    buf[18] = mint_decimals_a
    buf[19] = mint_decimals_b
    buf[20] = migrate_type
    struct.pack_into(
        "<10Q",
        buf,
        21,
        supply,
        total_sell_a,
        virtual_a,
        virtual_b,
        real_a,
        real_b,
        total_fund_raising_b,
        1_000,  # protocol fee
        2_000,  # platform fee
        3_000,  # migrate fee
    )
    struct.pack_into("<5Q", buf, 101, 0, 0, 0, 0, 0)  # vesting
    for i, offset in enumerate((141, 173, 205, 237, 269, 301, 333)):
        buf[offset:offset + 32] = key(config + i)
    return bytes(buf)


def build_launchpad_config(
    *, curve_type: int = 0, index: int = 3, migrate_fee: int = 1_000, trade_fee_rate: int = 2_500
) -> bytes:
    buf = bytearray(35)
    struct.pack_into("<Q", buf, 8, 7)
    buf[16] = curve_type
    struct.pack_into("<HQQ", buf, 17, index, migrate_fee, trade_fee_rate)
    return bytes(buf)


def build_cpmm_pool(
    *,
    amm_config: int = 20,
    vault_0: int = 21,
    vault_1: int = 22,
    mint_0: int = 23,
    mint_1: int = 24,
    mint_0_decimals: int = 6,
    mint_1_decimals: int = 9,
    protocol_fees: tuple[int, int] = (0, 0),
    fund_fees: tuple[int, int] = (0, 0),
) -> bytes:
    buf = bytearray(637)
    buf[8:40] = key(amm_config)
    buf[72:104] = key(vault_0)
    buf[104:136] = key(vault_1)
    buf[168:200] = key(mint_0)
    buf[200:232] = key(mint_1)
    buf[329] = 0  # status
    buf[330] = 9  # lp decimals
    buf[331] = mint_0_decimals
    buf[332] = mint_1_decimals
    struct.pack_into(
        "<6Q", buf, 333, 0, protocol_fees[0], protocol_fees[1], fund_fees[0], fund_fees[1], 0
    )
    return bytes(buf)


def build_amm_config(
    *, trade_fee_rate: int = 2_500, protocol_fee_rate: int = 120_000, fund_fee_rate: int = 40_000
) -> bytes:
    buf = bytearray(236)
    buf[8] = 255
    struct.pack_into("<HQQQ", buf, 10, 0, trade_fee_rate, protocol_fee_rate, fund_fee_rate)
    return bytes(buf)


def build_token_account(amount: int, mint: int = 23) -> bytes:
    buf = bytearray(165)
    buf[0:32] = key(mint)
    struct.pack_into("<Q", buf, 64, amount)
    return bytes(buf)


class FakeAccountSource:
    """In-memory AccountDataSource that records every lookup."""

    def __init__(self, accounts: dict[str, AccountData] | None = None) -> None:
        self.accounts = dict(accounts or {})
        self.calls: list[str] = []

    def add(self, address: str, owner: str, data: bytes) -> None:
        self.accounts[address] = AccountData(address=address, owner=owner, data=data)

    async def get_account(self, address: str) -> AccountData:
        self.calls.append(address)
        account = self.accounts.get(address)
        if account is None:
            raise AccountNotFoundError(address)
        return account


@pytest.fixture
def source() -> FakeAccountSource:
    return FakeAccountSource()


@pytest.fixture
def pumpfun_source(source: FakeAccountSource) -> Callable[..., FakeAccountSource]:
    def _make(address: str = addr(9), owner: str = PUMPFUN_PROGRAM_ID, **fields) -> FakeAccountSource:
        source.add(address, owner, build_bonding_curve(**fields))
        return source

    return _make


@pytest.fixture
def launchpad_source(source: FakeAccountSource) -> Callable[..., FakeAccountSource]:
    def _make(pool_address: str = addr(10), curve_type: int = 0, **fields) -> FakeAccountSource:
        source.add(pool_address, LAUNCHPAD_PROGRAM_ID, build_launchpad_pool(config=1, **fields))
        source.add(addr(1), LAUNCHPAD_PROGRAM_ID, build_launchpad_config(curve_type=curve_type))
        return source

    return _make


@pytest.fixture
def cpmm_source(source: FakeAccountSource) -> Callable[..., FakeAccountSource]:
    def _make(
        pool_id: str = addr(30),
        vault_0_amount: int = 1_000_000_000_000,
        vault_1_amount: int = 30_000_000_000,
        trade_fee_rate: int = 2_500,
        **pool_fields,
    ) -> FakeAccountSource:
        source.add(pool_id, CPMM_PROGRAM_ID, build_cpmm_pool(**pool_fields))
        source.add(addr(20), CPMM_PROGRAM_ID, build_amm_config(trade_fee_rate=trade_fee_rate))
        source.add(addr(21), TOKEN_PROGRAM_ID, build_token_account(vault_0_amount))
        source.add(addr(22), TOKEN_PROGRAM_ID, build_token_account(vault_1_amount, mint=24))
        return source

    return _make
