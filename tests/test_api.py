"""Tests for the HTTP API."""

from __future__ import annotations

from fastapi.testclient import TestClient

from paperdraft.api.app import create_app
from paperdraft.config import Settings


def _client(**overrides: object) -> TestClient:
    return TestClient(create_app(Settings(log_level="WARNING", **overrides)))


def _doc(*sections: dict) -> dict:
    return {"id": "paper-1", "title": "T", "authors": "A", "sections": list(sections)}


def test_health() -> None:
    assert _client().get("/health").json() == {"status": "ok"}


def test_references_endpoint() -> None:
    resp = _client().post(
        "/references",
        json=_doc(
            {"id": "s1", "title": "Intro", "body": "Foo [CITE: prior survey] bar."},
            {"id": "s2", "title": "Methods", "body": "Baz [CITE: dataset source]."},
        ),
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["entries"] == [
        {"index": 1, "reason": "prior survey"},
        {"index": 2, "reason": "dataset source"},
    ]
    assert body["rendered"] == "[1] prior survey\n[2] dataset source"
    assert body["has_markers"] is True


def test_references_endpoint_without_markers() -> None:
    body = _client().post("/references", json=_doc({"id": "s1", "title": "Intro"})).json()

    assert body["entries"] == []
    assert body["rendered"] == "No citations found in the text."
    assert body["has_markers"] is False


def test_sync_endpoint_creates_references() -> None:
    resp = _client().post(
        "/sync",
        json={"document": _doc({"id": "s1", "title": "Intro", "body": "[CITE: x]"})},
    )

    body = resp.json()
    assert body["action"] == "created"
    sections = body["document"]["sections"]
    assert [s["title"] for s in sections] == ["Intro", "References"]
    assert sections[1]["kind"] == "references"
    assert sections[1]["body"] == "[1] x"
    assert sections[1]["id"] == body["references_id"]


def test_sync_endpoint_uses_policy() -> None:
    doc = _doc(
        {"id": "s1", "title": "Intro", "body": "no markers"},
        {"id": "r", "title": "References", "body": "[1] x"},
    )

    kept = _client().post("/sync", json={"document": doc}).json()
    removed = _client().post("/sync", json={"document": doc, "policy": "remove"}).json()
    cleared = _client(stale_references_policy="clear").post("/sync", json={"document": doc}).json()

    assert kept["action"] == "unchanged"
    assert removed["action"] == "removed"
    assert [s["id"] for s in removed["document"]["sections"]] == ["s1"]
    assert cleared["document"]["sections"][1]["body"] == "No citations found in the text."


def test_sync_endpoint_rejects_bad_document() -> None:
    resp = _client().post("/sync", json={"document": {"sections": [{"body": "x"}]}})
    assert resp.status_code == 422


def test_export_endpoints() -> None:
    doc = _doc({"id": "s1", "title": "Intro", "body": "Hello."})
    client = _client()

    tex = client.post("/export/latex", json=doc)
    bib = client.post("/export/bibtex", json=doc)

    assert tex.status_code == 200
    assert "\\section{Intro}\nHello." in tex.text
    assert "@article{example2023," in bib.text


def test_references_and_sync_agree_with_two_reference_blocks() -> None:
    doc = _doc(
        {"id": "s1", "title": "Intro", "body": "[CITE: a]"},
        {"id": "refs", "title": "References", "body": "old"},
        {"id": "bg", "title": "Background references", "body": "[CITE: b]"},
    )
    client = _client()

    listed = client.post("/references", json=doc).json()
    synced = client.post("/sync", json={"document": doc}).json()

    assert listed["rendered"] == "[1] a\n[2] b"
    assert synced["document"]["sections"][1]["body"] == listed["rendered"]
