import pytest

from narrative_shift.core.errors import (
    InsufficientFundsError,
    InvalidIdentityError,
    InvalidTransferAmountError,
)
from narrative_shift.core.identity import new_handle, normalize_identity
from narrative_shift.core.ledger import HostLedger, system_clock
from narrative_shift.tests.helpers import ALICE, BOB, T0


def test_unix_timestamp_reads_injected_clock(ledger: HostLedger, clock):
    assert ledger.unix_timestamp() == T0
    clock.advance(60)
    assert ledger.unix_timestamp() == T0 + 60


def test_system_clock_is_whole_seconds():
    assert isinstance(system_clock(), int)


def test_normalize_identity():
    assert normalize_identity(f" {ALICE.upper()}\n") == ALICE
    for bad in ["", "a1" * 31, "zz" * 32, "a1" * 33, None]:
        with pytest.raises(InvalidIdentityError):
            normalize_identity(bad)


def test_new_handle_is_a_fresh_identity():
    handle = new_handle()
    assert normalize_identity(handle) == handle
    assert new_handle() != handle


@pytest.mark.asyncio
async def test_balance_of_unknown_identity_is_zero(ledger: HostLedger):
    async with ledger.transaction() as session:
        assert await ledger.balance_of(session, BOB) == 0


@pytest.mark.asyncio
async def test_credit_creates_and_grows_balance(ledger: HostLedger, balance):
    async with ledger.transaction() as session:
        assert await ledger.credit(session, ALICE, 500) == 500
    async with ledger.transaction() as session:
        assert await ledger.credit(session, ALICE, 250) == 750
    assert await balance(ALICE) == 750


@pytest.mark.asyncio
@pytest.mark.parametrize("amount", [0, -5])
async def test_credit_requires_positive_amount(ledger: HostLedger, amount):
    with pytest.raises(InvalidTransferAmountError):
        async with ledger.transaction() as session:
            await ledger.credit(session, ALICE, amount)


@pytest.mark.asyncio
async def test_transfer_moves_units(ledger: HostLedger, fund, balance, total_supply):
    await fund(ALICE, 1000)

    async with ledger.transaction() as session:
        await ledger.transfer(session, ALICE, BOB, 400)

    assert await balance(ALICE) == 600
    assert await balance(BOB) == 400
    assert await total_supply() == 1000


@pytest.mark.asyncio
async def test_transfer_entire_balance(ledger: HostLedger, fund, balance):
    await fund(ALICE, 1000)

    async with ledger.transaction() as session:
        await ledger.transfer(session, ALICE, BOB, 1000)

    assert await balance(ALICE) == 0
    assert await balance(BOB) == 1000


@pytest.mark.asyncio
async def test_transfer_insufficient_funds(ledger: HostLedger, fund, balance):
    await fund(ALICE, 100)

    with pytest.raises(InsufficientFundsError) as exc_info:
        async with ledger.transaction() as session:
            await ledger.transfer(session, ALICE, BOB, 101)

    assert exc_info.value.identity == ALICE
    assert exc_info.value.required == 101
    assert exc_info.value.available == 100
    assert await balance(ALICE) == 100
    assert await balance(BOB) == 0


@pytest.mark.asyncio
async def test_transfer_rejects_negative_amount(ledger: HostLedger, fund):
    await fund(ALICE, 100)
    with pytest.raises(InvalidTransferAmountError):
        async with ledger.transaction() as session:
            await ledger.transfer(session, ALICE, BOB, -1)


@pytest.mark.asyncio
async def test_transfer_to_self_keeps_balance(ledger: HostLedger, fund, balance):
    await fund(ALICE, 100)
    async with ledger.transaction() as session:
        await ledger.transfer(session, ALICE, ALICE, 60)
    assert await balance(ALICE) == 100


@pytest.mark.asyncio
async def test_transaction_rolls_back_on_error(ledger: HostLedger, fund, balance):
    await fund(ALICE, 1000)

    with pytest.raises(RuntimeError):
        async with ledger.transaction() as session:
            await ledger.transfer(session, ALICE, BOB, 400)
            raise RuntimeError("boom")

    assert await balance(ALICE) == 1000
    assert await balance(BOB) == 0
