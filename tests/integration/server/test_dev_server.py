"""Integration tests for the dev server (server.py)"""

import pytest
from fastapi.testclient import TestClient

from mdpreview.config import Settings
from mdpreview.core.dom import Page
from mdpreview.server import create_app


@pytest.fixture(name="docs")
def docs_fixture(tmp_path):
    docs = tmp_path / "docs"
    docs.mkdir()
    (docs / "hello.md").write_text("---\ntitle: Hi\n---\n# Hello\n\n<script>x()</script>\n")
    (docs / "broken.md").write_bytes(b"\xff\xfe\x00bad")
    return docs


@pytest.fixture(name="client")
def client_fixture(tmp_path, docs, typesetter, diagram_engine):
    static = tmp_path / "public"
    static.mkdir()
    (static / "index.html").write_text("<html><body>index</body></html>")
    settings = Settings(docs_dir=str(docs), static_dir=str(static), dist_dir=str(tmp_path / "nodist"))
    app = create_app(settings, typesetter=typesetter, diagram_engine=diagram_engine)
    return TestClient(app)


def test_markdown_endpoint_returns_content(client):
    response = client.get("/api/markdown/hello.md")
    assert response.status_code == 200
    assert response.json() == {"content": "---\ntitle: Hi\n---\n# Hello\n\n<script>x()</script>\n"}


def test_markdown_endpoint_missing_file(client):
    response = client.get("/api/markdown/nope.md")
    assert response.status_code == 404
    assert response.json() == {"error": "File not found"}


def test_markdown_endpoint_unreadable_file(client):
    response = client.get("/api/markdown/broken.md")
    assert response.status_code == 500
    assert response.json() == {"error": "Error reading file"}


def test_markdown_endpoint_rejects_traversal(client):
    response = client.get("/api/markdown/..%2Fpublic%2Findex.html")
    assert response.status_code == 404


def test_raw_documents_are_served_under_test(client):
    response = client.get("/test/hello.md")
    assert response.status_code == 200
    assert "# Hello" in response.text


def test_static_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert "index" in response.text


def test_preview_renders_sanitized_page(client):
    response = client.get("/preview/hello.md")
    assert response.status_code == 200
    target = Page(response.text).get_element_by_id("markdown-preview")
    assert target.select_one("table td").get_text() == "Hi"
    assert target.select_one("h1").get_text() == "Hello"
    assert target.select("script") == []


def test_preview_missing_file(client):
    response = client.get("/preview/nope.md")
    assert response.status_code == 404
    assert "Error loading markdown file" in response.text
