from datetime import date
from decimal import Decimal

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from rental_agreement.errors import NotFound, Forbidden, InvalidState
from rental_agreement.models import Base, ContractStatus, RequestStatus
from rental_agreement.schemas import RentalContractCreate
from rental_agreement.services import request_lifecycle
from rental_agreement.services.contract_orchestrator import open_contract
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


@pytest.fixture
def directory():
    return FakePropertyDirectory({5: OWNER})


def _body(request_id, agreement_id=3001):
    return RentalContractCreate(
        request_id=request_id,
        agreement_id_on_chain=agreement_id,
        security_deposit=Decimal("2000.00"),
        rent_per_month=Decimal("1000.00"),
        start_date=date(2024, 1, 1),
        end_date=date(2024, 12, 31),
    )


async def test_open_contract_for_accepted_request(db, directory):
    req = await request_lifecycle.create(db, 5, TENANT, directory)
    await request_lifecycle.transition(db, req.id, RequestStatus.ACCEPTED, OWNER)

    contract = await open_contract(db, _body(req.id), TENANT, directory)
    assert contract.state is ContractStatus.PENDING_RESERVATION
    assert contract.owner_id == OWNER
    assert contract.tenant_id == TENANT
    assert contract.request_id == req.id


@pytest.mark.parametrize("status", [RequestStatus.PENDING, RequestStatus.REJECTED])
async def test_request_must_be_accepted(db, directory, status):
    req = await request_lifecycle.create(db, 5, TENANT, directory)
    if status is not RequestStatus.PENDING:
        await request_lifecycle.transition(db, req.id, status, OWNER)
    with pytest.raises(InvalidState):
        await open_contract(db, _body(req.id), TENANT, directory)


async def test_only_requesting_tenant_opens_contract(db, directory):
    req = await request_lifecycle.create(db, 5, TENANT, directory)
    await request_lifecycle.transition(db, req.id, RequestStatus.ACCEPTED, OWNER)
    with pytest.raises(Forbidden):
        await open_contract(db, _body(req.id), OWNER, directory)


async def test_unknown_request_is_not_found(db, directory):
    with pytest.raises(NotFound):
        await open_contract(db, _body("01NOTAREALREQUEST000000000"), TENANT, directory)


async def test_property_gone_from_catalog_is_not_found(db, directory):
    req = await request_lifecycle.create(db, 5, TENANT, directory)
    await request_lifecycle.transition(db, req.id, RequestStatus.ACCEPTED, OWNER)
    directory.owners.clear()
    with pytest.raises(NotFound):
        await open_contract(db, _body(req.id), TENANT, directory)
