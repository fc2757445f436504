import asyncio

import pytest

from fleetadmin.core.locks import ProjectLocks


@pytest.mark.asyncio
async def test_locks_serialize_same_name_and_are_released() -> None:
    locks = ProjectLocks()
    order: list[str] = []

    async def worker(label: str, name: str) -> None:
        async with locks.hold(name):
            order.append(f"{label}:in")
            await asyncio.sleep(0.01)
            order.append(f"{label}:out")

    await asyncio.gather(worker("a", "acme"), worker("b", "acme"))

    assert order == ["a:in", "a:out", "b:in", "b:out"]
    assert locks.is_held("acme") is False
    assert locks._locks == {}


@pytest.mark.asyncio
async def test_locks_for_different_names_are_independent() -> None:
    locks = ProjectLocks()
    async with locks.hold("acme"):
        assert locks.is_held("acme")
        assert not locks.is_held("beta")
        async with locks.hold("beta"):
            assert locks.is_held("beta")
