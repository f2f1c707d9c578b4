from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from fastapi import status

from tests.conftest import OUTSIDER, SUPPORTER_A, SUPPORTER_B, create_project, send_signal


@pytest.mark.asyncio
async def test_repeat_signal_accumulates_into_one_record(client, store):
    project = await create_project(client, name="Foo")

    first = await send_signal(client, project["id"], SUPPORTER_A, amount=5)
    assert first.status_code == status.HTTP_201_CREATED, first.text
    assert first.json()["project"] == {
        "id": project["id"],
        "name": "Foo",
        "supportCount": 1,
        "totalSignal": 5,
    }
    assert first.json()["signal"]["updatedAt"] is None

    second = await send_signal(client, project["id"], SUPPORTER_A, amount=3)
    assert second.status_code == status.HTTP_200_OK
    body = second.json()
    assert body["project"]["supportCount"] == 1
    assert body["project"]["totalSignal"] == 8
    assert body["signal"]["amount"] == 8
    assert body["signal"]["id"] == first.json()["signal"]["id"]
    assert body["signal"]["updatedAt"] is not None
    assert len(store.signals) == 1


@pytest.mark.asyncio
async def test_signal_amount_is_clamped_and_defaulted(client):
    project = await create_project(client)

    high = await send_signal(client, project["id"], SUPPORTER_B, amount=200)
    assert high.json()["signal"]["amount"] == 100

    default = await send_signal(client, project["id"], SUPPORTER_A, amount="lots")
    assert default.json()["signal"]["amount"] == 1
    assert default.json()["project"]["totalSignal"] == 101


@pytest.mark.asyncio
async def test_signal_message_keeps_latest_non_empty_value(client):
    project = await create_project(client)

    await send_signal(client, project["id"], SUPPORTER_A, message="love it")
    repeat = await send_signal(client, project["id"], SUPPORTER_A, message="")
    assert repeat.json()["signal"]["message"] == "love it"

    changed = await send_signal(client, project["id"], SUPPORTER_A, message="still")
    assert changed.json()["signal"]["message"] == "still"


@pytest.mark.asyncio
async def test_signal_unknown_project_returns_404(client):
    response = await send_signal(client, "missing", SUPPORTER_A)

    assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
async def test_signal_requires_allowlisted_address(client, store):
    project = await create_project(client)

    response = await send_signal(client, project["id"], OUTSIDER)

    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert store.signals == {}


@pytest.mark.asyncio
async def test_signal_requires_address_field(client):
    project = await create_project(client)

    # The gate accepts the creator field, the signal itself needs an address.
    response = await client.post(
        f"/projects/{project['id']}/signal", json={"creator": SUPPORTER_A}
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["message"] == "address required"


@pytest.mark.asyncio
async def test_remove_signal_updates_counters(client):
    project = await create_project(client)
    await send_signal(client, project["id"], SUPPORTER_A, amount=4)
    kept = await send_signal(client, project["id"], SUPPORTER_B, amount=6)
    removed_id = (await send_signal(client, project["id"], SUPPORTER_A)).json()["signal"]["id"]

    response = await client.request(
        "DELETE",
        f"/projects/{project['id']}/signal",
        json={"address": SUPPORTER_A.upper().replace("0X", "0x")},
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"success": True, "removed": removed_id}
    detail = (await client.get(f"/projects/{project['id']}")).json()
    assert detail["supportCount"] == 1
    assert detail["totalSignal"] == 6
    assert [s["id"] for s in detail["recentSupporters"]] == [kept.json()["signal"]["id"]]


@pytest.mark.asyncio
async def test_remove_missing_signal_returns_404(client):
    project = await create_project(client)

    response = await client.request(
        "DELETE", f"/projects/{project['id']}/signal", json={"address": SUPPORTER_A}
    )

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["message"] == "Signal not found"


@pytest.mark.asyncio
async def test_remove_signal_requires_address(client):
    project = await create_project(client)

    response = await client.delete(f"/projects/{project['id']}/signal")

    assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.asyncio
async def test_supporter_aggregation(client):
    foo = await create_project(client, name="Foo", category="defi")
    bar = await create_project(client, name="Bar", category="nft")
    await send_signal(client, foo["id"], SUPPORTER_A, amount=2)
    await send_signal(client, bar["id"], SUPPORTER_A, amount=7)
    await send_signal(client, bar["id"], SUPPORTER_B, amount=1)

    response = await client.get(f"/supporters/{SUPPORTER_A}")

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["address"] == SUPPORTER_A
    assert body["projectsSupported"] == 2
    assert body["totalSignal"] == 9
    assert {(s["projectName"], s["projectCategory"]) for s in body["signals"]} == {
        ("Foo", "defi"),
        ("Bar", "nft"),
    }


@pytest.mark.asyncio
async def test_supporter_rejects_invalid_address(client):
    response = await client.get("/supporters/not-an-address")

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["message"] == "Invalid address"


@pytest.mark.asyncio
async def test_supporter_signals_are_newest_first_and_keep_nulls(client, store):
    older = await create_project(client, name="Older")
    newer = await create_project(client, name="Newer")
    first = (await send_signal(client, older["id"], SUPPORTER_A)).json()["signal"]
    second = (await send_signal(client, newer["id"], SUPPORTER_A)).json()["signal"]
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    store.signals[first["id"]].created_at = base
    store.signals[second["id"]].created_at = base + timedelta(hours=1)

    body = (await client.get(f"/supporters/{SUPPORTER_A}")).json()

    assert [s["id"] for s in body["signals"]] == [second["id"], first["id"]]
    newest = body["signals"][0]
    assert newest["message"] is None
    assert newest["updatedAt"] is None
    assert newest["projectName"] == "Newer"


@pytest.mark.asyncio
async def test_supporter_signal_of_missing_project_omits_project_fields(client, store):
    project = await create_project(client, name="Gone")
    signal = (await send_signal(client, project["id"], SUPPORTER_A)).json()["signal"]
    # A signal left behind without its project, bypassing the cascade.
    del store.projects[project["id"]]

    body = (await client.get(f"/supporters/{SUPPORTER_A}")).json()

    entry = body["signals"][0]
    assert entry["id"] == signal["id"]
    assert "projectName" not in entry
    assert "projectCategory" not in entry
    assert entry["message"] is None
