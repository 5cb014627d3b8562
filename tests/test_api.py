import asyncio
import time

import httpx
import pytest
from fastapi.testclient import TestClient

import plagcheck.routers.plagiarism as plagiarism_router
from plagcheck.main import app
from plagcheck.schemas.plagiarism_schemas import PlagiarismResult

LONG_TEXT = (
    "The Eiffel Tower is a wrought-iron lattice tower on the Champ de Mars in Paris, France. "
    "It is named after the engineer Gustave Eiffel."
)

client = TestClient(app)


@pytest.fixture
def checked_texts(monkeypatch: pytest.MonkeyPatch):
    seen = []

    def _fake_check(text):
        seen.append(text)
        return PlagiarismResult(overall_similarity=0.0, matches=[])

    monkeypatch.setattr(plagiarism_router, "check_plagiarism", _fake_check)
    return seen


def test_health() -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_check_text_rejects_short_text(checked_texts) -> None:
    response = client.post("/plagiarism/check-text", json={"text": "   too short   "})

    assert response.status_code == 400
    assert checked_texts == []


def test_check_text_returns_result(checked_texts) -> None:
    response = client.post("/plagiarism/check-text", json={"text": LONG_TEXT})

    assert response.status_code == 200
    assert response.json() == {"overall_similarity": 0.0, "matches": []}
    assert checked_texts == [LONG_TEXT]


def test_check_text_requires_body() -> None:
    response = client.post("/plagiarism/check-text", json={})

    assert response.status_code == 422


def test_compare_against_supplied_sources() -> None:
    response = client.post("/plagiarism/compare", json={
        "original_text": LONG_TEXT,
        "sources": [{
            "title": "Eiffel Tower",
            "text": LONG_TEXT,
            "source_url": "https://en.wikipedia.org/wiki/Eiffel_Tower",
        }],
    })

    assert response.status_code == 200
    payload = response.json()
    assert payload["overall_similarity"] > 0
    top = payload["matches"][0]
    assert top["similarity"] == 100
    assert top["source"] == "Eiffel Tower"
    assert top["token_start"] == 0


def test_check_file_accepts_txt(checked_texts) -> None:
    response = client.post(
        "/plagiarism/check-file",
        files={"file": ("essay.txt", LONG_TEXT.encode("utf-8"), "text/plain")},
    )

    assert response.status_code == 200
    assert checked_texts == [LONG_TEXT]


def test_check_file_rejects_unknown_type(checked_texts) -> None:
    response = client.post(
        "/plagiarism/check-file",
        files={"file": ("essay.exe", b"MZ", "application/octet-stream")},
    )

    assert response.status_code == 400
    assert checked_texts == []


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.mark.anyio
async def test_health_answers_while_file_check_runs(monkeypatch: pytest.MonkeyPatch) -> None:
    def _slow_check(text):
        time.sleep(1.0)
        return PlagiarismResult(overall_similarity=0.0, matches=[])

    monkeypatch.setattr(plagiarism_router, "check_plagiarism", _slow_check)

    async def _check_file(client: httpx.AsyncClient) -> httpx.Response:
        return await client.post(
            "/plagiarism/check-file",
            files={"file": ("essay.txt", LONG_TEXT.encode("utf-8"), "text/plain")},
        )

    async def _timed_health(client: httpx.AsyncClient) -> float:
        await asyncio.sleep(0.1)
        started = time.perf_counter()
        response = await client.get("/health")
        assert response.status_code == 200
        return time.perf_counter() - started

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        file_response, health_latency = await asyncio.gather(_check_file(client), _timed_health(client))

    assert file_response.status_code == 200
    assert health_latency < 0.5
