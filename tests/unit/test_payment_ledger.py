from datetime import date, datetime, timezone
from decimal import Decimal

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from rental_agreement.errors import NotFound, Conflict, Forbidden
from rental_agreement.models import Base, PaymentType, RequestStatus
from rental_agreement.schemas import ContractTerms
from rental_agreement.services import contract_lifecycle, payment_ledger, request_lifecycle
from tests.fakes import FakePropertyDirectory

OWNER = 100
TENANT = 42


@pytest_asyncio.fixture
async def db():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session
    await engine.dispose()


@pytest_asyncio.fixture
async def contract_id(db):
    directory = FakePropertyDirectory({5: OWNER})
    req = await request_lifecycle.create(db, 5, TENANT, directory)
    req = await request_lifecycle.transition(db, req.id, RequestStatus.ACCEPTED, OWNER)
    terms = ContractTerms(
        owner_id=OWNER,
        agreement_id_on_chain=9001,
        security_deposit=Decimal("1500.00"),
        rent_per_month=Decimal("750.00"),
        start_date=date(2024, 1, 1),
        end_date=date(2024, 12, 31),
    )
    contract = await contract_lifecycle.create_from_accepted_request(db, req, terms)
    return contract.id


async def test_record_and_list_in_paid_order(db, contract_id):
    await payment_ledger.record_payment(
        db, contract_id, Decimal("750.00"), "0xrent-feb", PaymentType.RENT,
        paid_at=datetime(2024, 2, 1, tzinfo=timezone.utc),
    )
    await payment_ledger.record_payment(
        db, contract_id, Decimal("1500.00"), "0xdeposit", PaymentType.DEPOSIT,
        paid_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )

    history = await payment_ledger.list_for_contract(db, contract_id, TENANT)
    assert [p.tx_hash for p in history] == ["0xdeposit", "0xrent-feb"]
    assert history[0].payment_type is PaymentType.DEPOSIT
    assert history[0].amount == Decimal("1500.00")


async def test_duplicate_tx_hash_conflicts(db, contract_id):
    await payment_ledger.record_payment(db, contract_id, Decimal("750.00"), "0xabc")
    with pytest.raises(Conflict):
        await payment_ledger.record_payment(db, contract_id, Decimal("750.00"), "0xabc")
    assert len(await payment_ledger.list_for_contract(db, contract_id, OWNER)) == 1


async def test_record_for_missing_contract_is_not_found(db):
    with pytest.raises(NotFound):
        await payment_ledger.record_payment(db, "01NOTAREALCONTRACT00000000", Decimal("1.00"), "0xnope")


async def test_payments_do_not_change_contract_state(db, contract_id):
    await payment_ledger.record_payment(db, contract_id, Decimal("750.00"), "0xrent")
    contract = await contract_lifecycle.get(db, contract_id)
    assert contract.is_payment_released is False
    assert contract.is_key_delivered is False


async def test_only_parties_can_read_payments(db, contract_id):
    payment = await payment_ledger.record_payment(db, contract_id, Decimal("750.00"), "0xrent")
    payment_id = payment.id

    assert (await payment_ledger.get_payment(db, payment_id, OWNER)).tx_hash == "0xrent"
    assert (await payment_ledger.get_payment(db, payment_id, TENANT)).tx_hash == "0xrent"
    with pytest.raises(Forbidden):
        await payment_ledger.get_payment(db, payment_id, 777)
    with pytest.raises(Forbidden):
        await payment_ledger.list_for_contract(db, contract_id, 777)


async def test_get_missing_payment_is_not_found(db):
    with pytest.raises(NotFound):
        await payment_ledger.get_payment(db, "01NOTAREALPAYMENT000000000", TENANT)
