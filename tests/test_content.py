"""Tests for the content generator and its local cache."""
import os
import random

import pytest
from httpx import AsyncClient

from portfolio_api.services.content_generator import (
    PROJECT_DESCRIPTION_TEMPLATES,
    ContentGenerator,
    ContentLibrary,
    ContentType,
)


def _generator(seed: int = 7) -> ContentGenerator:
    return ContentGenerator(signature="Raghav Bharadwaj", rng=random.Random(seed))


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_project_description_uses_one_template():
    item = await _generator().generate(ContentType.PROJECT_DESCRIPTION, "Task Manager")

    assert item.title == "Project Description"
    assert item.content in [template("Task Manager") for template in PROJECT_DESCRIPTION_TEMPLATES]


@pytest.mark.asyncio
async def test_same_seed_same_content():
    first = await _generator(3).generate(ContentType.PROJECT_DESCRIPTION, "Chat App")
    second = await _generator(3).generate(ContentType.PROJECT_DESCRIPTION, "Chat App")
    assert first.content == second.content


@pytest.mark.asyncio
async def test_deterministic_types():
    generator = _generator()

    skill = await generator.generate(ContentType.SKILL_ANALYSIS, "Angular")
    assert skill.content.startswith("**ANGULAR - Skill Analysis:**")
    assert "1. Advanced Angular patterns" in skill.content

    resume = await generator.generate(ContentType.RESUME_SECTION, "Python")
    assert "**Senior Python Developer** | Company Name | 2021 - Present" in resume.content

    letter = await generator.generate(ContentType.COVER_LETTER, "Frontend")
    assert letter.title == "Cover Letter"
    assert letter.content.startswith("**Cover Letter for Frontend Position:**")
    assert letter.content.endswith("Best regards,\n[Raghav Bharadwaj]")


# ---------------------------------------------------------------------------
# Library
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_library_missing_file_is_empty(content_library: ContentLibrary):
    assert await content_library.load() == []


@pytest.mark.asyncio
async def test_library_malformed_file_is_empty(tmp_path):
    path = tmp_path / "content.json"
    path.write_text('{"not": "a list"', encoding="utf-8")
    assert await ContentLibrary(str(path)).load() == []

    path.write_text('[{"type": "poem", "title": 1}]', encoding="utf-8")
    assert await ContentLibrary(str(path)).load() == []


@pytest.mark.asyncio
async def test_library_non_utf8_file_is_empty(tmp_path):
    path = tmp_path / "content.json"
    path.write_bytes(b'[{"type": "\xff\xfe"}]')
    library = ContentLibrary(str(path))

    assert await library.load() == []

    item = await _generator().generate(ContentType.SKILL_ANALYSIS, "Python")
    assert await library.add(item) == [item]
    assert [i.content for i in await library.load()] == [item.content]


@pytest.mark.asyncio
async def test_list_with_undecodable_cache(client: AsyncClient, content_library: ContentLibrary):
    path = content_library.path
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "wb") as fh:
        fh.write(b"\xff\xfe not json")

    resp = await client.get("/api/content")
    assert resp.status_code == 200
    assert resp.json() == []


@pytest.mark.asyncio
async def test_library_newest_first_and_remove(content_library: ContentLibrary):
    generator = _generator()
    for topic in ("One", "Two", "Three"):
        await content_library.add(await generator.generate(ContentType.RESUME_SECTION, topic))

    items = await content_library.load()
    assert [i.content.split(" - ")[0] for i in items] == ["**Three", "**Two", "**One"]

    remaining = await content_library.remove(1)
    assert [i.content.split(" - ")[0] for i in remaining] == ["**Three", "**One"]

    with pytest.raises(IndexError):
        await content_library.remove(5)

    await content_library.clear()
    assert await content_library.load() == []


# ---------------------------------------------------------------------------
# API
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_generate_and_list(client: AsyncClient):
    resp = await client.post("/api/content", json={"type": "skill_analysis", "input": "React"})
    assert resp.status_code == 201
    assert resp.json()["title"] == "Skill Analysis"

    await client.post("/api/content", json={"type": "cover_letter", "input": "Backend"})

    resp = await client.get("/api/content")
    assert [item["type"] for item in resp.json()] == ["cover_letter", "skill_analysis"]


@pytest.mark.asyncio
async def test_generate_rejects_blank_input(client: AsyncClient):
    resp = await client.post("/api/content", json={"type": "resume_section", "input": " "})
    assert resp.status_code == 422
    assert (await client.get("/api/content")).json() == []


@pytest.mark.asyncio
async def test_delete_by_index_and_clear(client: AsyncClient):
    for topic in ("Angular", "React"):
        await client.post("/api/content", json={"type": "skill_analysis", "input": topic})

    resp = await client.delete("/api/content/0")
    assert resp.status_code == 200
    assert len(resp.json()) == 1
    assert resp.json()[0]["content"].startswith("**ANGULAR")

    resp = await client.delete("/api/content/3")
    assert resp.status_code == 404

    resp = await client.delete("/api/content")
    assert resp.status_code == 204
    assert (await client.get("/api/content")).json() == []
