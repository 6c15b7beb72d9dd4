"""Races between independent sessions on a shared file-backed database."""

from __future__ import annotations

import asyncio
from datetime import date
from decimal import Decimal

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from rental_agreement.errors import Conflict, InvalidTransition
from rental_agreement.models import Base, ContractStatus, RequestStatus
from rental_agreement.schemas import ContractTerms
from rental_agreement.services import contract_lifecycle, request_lifecycle
from tests.fakes import FakePropertyDirectory

OWNER = 100


@pytest_asyncio.fixture
async def factory(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'race.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


async def test_concurrent_creates_leave_one_live_request(factory):
    directory = FakePropertyDirectory({5: OWNER})

    async def attempt():
        async with factory() as db:
            try:
                req = await request_lifecycle.create(db, 5, 42, directory)
                return req.id
            except Conflict:
                return None

    results = await asyncio.gather(*(attempt() for _ in range(6)))
    assert len([r for r in results if r]) == 1

    async with factory() as db:
        live = [r for r in await request_lifecycle.list_for_property(db, 5) if r.is_live]
        assert len(live) == 1


async def test_overlapping_accepts_have_a_single_winner(factory):
    directory = FakePropertyDirectory({5: OWNER})
    async with factory() as db:
        ids = [(await request_lifecycle.create(db, 5, tenant, directory)).id for tenant in (1, 2, 3)]

    async def accept(request_id):
        async with factory() as db:
            try:
                await request_lifecycle.transition(db, request_id, RequestStatus.ACCEPTED, OWNER)
                return request_id
            except InvalidTransition:
                return None

    winners = [w for w in await asyncio.gather(*(accept(i) for i in ids)) if w]
    assert len(winners) == 1

    async with factory() as db:
        by_id = {r.id: r.status for r in await request_lifecycle.list_for_property(db, 5)}
    assert by_id[winners[0]] is RequestStatus.ACCEPTED
    assert sorted(s.value for s in by_id.values()) == ["ACCEPTED", "REJECTED", "REJECTED"]


async def test_concurrent_key_confirmations_activate_once(factory):
    directory = FakePropertyDirectory({5: OWNER})
    async with factory() as db:
        req = await request_lifecycle.create(db, 5, 42, directory)
        req = await request_lifecycle.transition(db, req.id, RequestStatus.ACCEPTED, OWNER)
        terms = ContractTerms(
            owner_id=OWNER,
            agreement_id_on_chain=1,
            security_deposit=Decimal("100.00"),
            rent_per_month=Decimal("100.00"),
            start_date=date(2024, 1, 1),
            end_date=date(2024, 12, 31),
        )
        contract_id = (await contract_lifecycle.create_from_accepted_request(db, req, terms)).id

    async def confirm():
        async with factory() as db:
            c = await contract_lifecycle.confirm_key_delivery(db, contract_id, True, 42)
            return c.state

    states = await asyncio.gather(*(confirm() for _ in range(4)))
    assert all(s is ContractStatus.ACTIVE for s in states)
