"""Tests for the assistant chat endpoints."""
import pytest
from httpx import AsyncClient

from portfolio_api.services.assistant import WELCOME_TEXT
from portfolio_api.services.session_manager import session_manager


async def _open_session(client: AsyncClient) -> dict:
    resp = await client.post("/api/assistant/sessions")
    assert resp.status_code == 201
    return resp.json()


@pytest.mark.asyncio
async def test_open_session_has_welcome(client: AsyncClient):
    session = await _open_session(client)

    assert session["is_typing"] is False
    assert len(session["messages"]) == 1
    assert session["messages"][0]["content"] == WELCOME_TEXT
    assert session["messages"][0]["is_user"] is False
    assert session_manager.count() == 1


@pytest.mark.asyncio
async def test_send_message_returns_reply_and_transcript(client: AsyncClient):
    session = await _open_session(client)
    sid = session["session_id"]

    resp = await client.post(
        f"/api/assistant/sessions/{sid}/messages",
        json={"message": "  What are your skills?  "},
    )
    assert resp.status_code == 200
    data = resp.json()

    assert data["session_id"] == sid
    assert data["reply"]["is_user"] is False
    assert data["reply"]["content"].startswith("My core skills include:")
    assert [m["is_user"] for m in data["messages"]] == [False, True, False]
    assert data["messages"][1]["content"] == "What are your skills?"
    assert data["messages"][-1]["id"] == data["reply"]["id"]


@pytest.mark.asyncio
async def test_recommendation_reply_carries_metadata(client: AsyncClient):
    sid = (await _open_session(client))["session_id"]

    resp = await client.post(
        f"/api/assistant/sessions/{sid}/messages",
        json={"message": "recommend something with angular"},
    )
    reply = resp.json()["reply"]
    assert reply["type"] == "project_recommendation"
    assert [r["title"] for r in reply["metadata"]["recommendations"]] == [
        "AI-Powered E-commerce",
        "Smart Portfolio Generator",
    ]


@pytest.mark.asyncio
async def test_transcript_persists_between_requests(client: AsyncClient):
    sid = (await _open_session(client))["session_id"]
    await client.post(f"/api/assistant/sessions/{sid}/messages", json={"message": "hello"})

    resp = await client.get(f"/api/assistant/sessions/{sid}")
    assert resp.status_code == 200
    assert len(resp.json()["messages"]) == 3


@pytest.mark.asyncio
async def test_send_while_typing_conflicts(client: AsyncClient):
    sid = (await _open_session(client))["session_id"]
    session_manager.get(sid).is_typing = True

    resp = await client.post(f"/api/assistant/sessions/{sid}/messages", json={"message": "hi"})
    assert resp.status_code == 409
    assert len(session_manager.get(sid).messages) == 1


@pytest.mark.asyncio
async def test_blank_message_rejected(client: AsyncClient):
    sid = (await _open_session(client))["session_id"]

    resp = await client.post(f"/api/assistant/sessions/{sid}/messages", json={"message": "   "})
    assert resp.status_code == 422
    assert len(session_manager.get(sid).messages) == 1


@pytest.mark.asyncio
async def test_clear_session_keeps_only_welcome(client: AsyncClient):
    sid = (await _open_session(client))["session_id"]
    for text in ("hello", "What are your skills?"):
        await client.post(f"/api/assistant/sessions/{sid}/messages", json={"message": text})

    resp = await client.post(f"/api/assistant/sessions/{sid}/clear")
    assert resp.status_code == 200
    messages = resp.json()["messages"]
    assert len(messages) == 1
    assert messages[0]["content"] == WELCOME_TEXT


@pytest.mark.asyncio
async def test_close_session(client: AsyncClient):
    sid = (await _open_session(client))["session_id"]

    resp = await client.delete(f"/api/assistant/sessions/{sid}")
    assert resp.status_code == 204
    assert session_manager.get(sid) is None

    resp = await client.get(f"/api/assistant/sessions/{sid}")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_unknown_session_404(client: AsyncClient):
    resp = await client.post(
        "/api/assistant/sessions/does-not-exist/messages", json={"message": "hi"}
    )
    assert resp.status_code == 404
    assert "does-not-exist" in resp.json()["detail"]
