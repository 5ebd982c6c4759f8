"""End-to-end tests for the HTTP API, driven through FastAPI's TestClient.

Storage and clipboard run on their memory engines (see the root conftest);
the generation service is replaced by an httpx.MockTransport.
"""

import asyncio
import re
from collections.abc import Callable, Generator

import httpx
import pytest
from fastapi.testclient import TestClient

from server.api_server import app

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def service_handler() -> dict[str, Handler]:
    return {
        "handler": lambda request: httpx.Response(200, json={"content": [{"type": "text", "text": "Proposal body"}]}),
    }


@pytest.fixture
def client(service_handler: dict[str, Handler], requests_seen: list) -> Generator[TestClient, None, None]:
    def dispatch(request: httpx.Request) -> httpx.Response:
        requests_seen.append(request)
        return service_handler["handler"](request)

    with TestClient(app) as test_client:
        llm_client = app.state.llm_client
        # swap the booted client for one on the mock transport, inside the app's event loop
        test_client.portal.call(llm_client.close)
        test_client.portal.call(llm_client.boot, httpx.MockTransport(dispatch))
        yield test_client


@pytest.fixture
def logged_in(client: TestClient) -> TestClient:
    response = client.post("/auth/login", json={"username": "admin", "password": "password123"})
    assert response.status_code == 200
    return client


def _upload(client: TestClient, name: str = "capabilities.txt", content: bytes = b"Hello", category: str = "Business Capability"):
    return client.post("/documents", files={"file": (name, content, "text/plain")}, data={"category": category})


def test_health(client: TestClient) -> None:
    assert client.get("/health").json() == {"status": "ok"}


def test_routes_require_login(client: TestClient) -> None:
    for method, path in [("GET", "/documents"), ("GET", "/settings/credential"), ("POST", "/proposal/generate")]:
        response = client.request(method, path)
        assert response.status_code == 401
        assert response.json() == {"detail": "Please log in first."}


def test_login_and_logout(client: TestClient) -> None:
    bad = client.post("/auth/login", json={"username": "admin", "password": "nope"})
    assert bad.status_code == 401
    assert bad.json()["detail"] == "Invalid username or password"
    assert client.get("/auth/status").json() == {"authenticated": False}

    assert client.post("/auth/login", json={"username": "user", "password": "userpass"}).json() == {"authenticated": True}
    assert client.get("/auth/status").json() == {"authenticated": True}
    assert client.get("/documents").status_code == 200

    assert client.post("/auth/logout").json() == {"authenticated": False}
    assert client.get("/documents").status_code == 401


def test_upload_list_toggle_delete(logged_in: TestClient) -> None:
    response = _upload(logged_in)
    assert response.status_code == 201
    summary = response.json()
    assert summary["name"] == "capabilities.txt"
    assert summary["category"] == "Business Capability"
    assert summary["size_bytes"] == 5
    assert summary["selected"] is False

    toggled = logged_in.post(f"/documents/{summary['id']}/toggle").json()
    assert toggled == {"document_id": summary["id"], "selected": True}

    listing = logged_in.get("/documents").json()
    assert listing["total"] == 1
    assert listing["selected_ids"] == [summary["id"]]

    assert logged_in.delete(f"/documents/{summary['id']}").json() == {"status": "deleted"}
    listing = logged_in.get("/documents").json()
    assert listing == {"documents": [], "selected_ids": [], "total": 0}

    assert logged_in.post(f"/documents/{summary['id']}/toggle").status_code == 404


def test_upload_requires_file_and_category(logged_in: TestClient) -> None:
    assert logged_in.post("/documents", data={"category": "RFI/RFP"}).status_code == 400
    assert _upload(logged_in, category="Brochure").status_code == 400
    assert logged_in.get("/documents").json()["total"] == 0


def test_reset_clears_everything(logged_in: TestClient) -> None:
    first = _upload(logged_in, name="a.txt").json()
    _upload(logged_in, name="b.txt", category="RFI/RFP")
    logged_in.post(f"/documents/{first['id']}/toggle")

    assert logged_in.delete("/documents").json() == {"status": "cleared"}
    assert logged_in.get("/documents").json()["total"] == 0


def test_credential_settings(logged_in: TestClient) -> None:
    assert logged_in.get("/settings/credential").json() == {"configured": False}
    assert logged_in.put("/settings/credential", json={"api_key": "   "}).status_code == 400
    assert logged_in.put("/settings/credential", json={"api_key": "sk-test"}).json() == {"configured": True}
    assert logged_in.get("/settings/credential").json() == {"configured": True}


def test_generate_download_and_copy(logged_in: TestClient, requests_seen: list) -> None:
    document = _upload(logged_in).json()
    logged_in.post(f"/documents/{document['id']}/toggle")
    logged_in.put("/settings/credential", json={"api_key": "sk-test"})

    response = logged_in.post("/proposal/generate")
    assert response.status_code == 200
    body = response.json()
    assert body["state"] == "succeeded"
    assert body["proposal"] == "Proposal body"
    assert body["generated_at"] is not None

    assert len(requests_seen) == 1
    assert requests_seen[0].headers["x-api-key"] == "sk-test"

    download = logged_in.get("/proposal/download")
    assert download.status_code == 200
    assert download.content == b"Proposal body"
    assert download.headers["content-type"].startswith("text/plain")
    assert re.search(r'filename="proposal_\d{4}-\d{2}-\d{2}\.txt"', download.headers["content-disposition"])

    assert logged_in.post("/proposal/copy").json() == {"status": "copied"}
    assert app.state.clipboard.content == "Proposal body"

    assert logged_in.delete("/proposal").json() == {"status": "cleared"}
    assert logged_in.get("/proposal/download").status_code == 400


def test_generate_upstream_rejection_is_bad_gateway(
    logged_in: TestClient, service_handler: dict[str, Handler]
) -> None:
    document = _upload(logged_in).json()
    logged_in.post(f"/documents/{document['id']}/toggle")
    logged_in.put("/settings/credential", json={"api_key": "sk-bad"})
    service_handler["handler"] = lambda request: httpx.Response(401, json={"error": {"message": "invalid key"}})

    response = logged_in.post("/proposal/generate")

    assert response.status_code == 502
    assert response.json() == {"detail": "invalid key"}
    proposal = logged_in.get("/proposal").json()
    assert proposal["state"] == "failed"
    assert proposal["proposal"] is None


def test_generate_without_selection_sends_nothing(logged_in: TestClient, requests_seen: list) -> None:
    _upload(logged_in)
    logged_in.put("/settings/credential", json={"api_key": "sk-test"})

    response = logged_in.post("/proposal/generate")

    assert response.status_code == 400
    assert response.json() == {"detail": "Please select at least one file."}
    assert requests_seen == []


def test_upload_over_quota_is_rejected(monkeypatch: pytest.MonkeyPatch, requests_seen: list) -> None:
    monkeypatch.setenv("STORAGE_QUOTA_BYTES", "512")
    with TestClient(app) as client:
        client.post("/auth/login", json={"username": "admin", "password": "password123"})

        response = _upload(client, content=b"x" * 1024)

        assert response.status_code == 507
        assert client.get("/documents").json()["total"] == 0


def _record_loop_presence(calls: list[bool], func: Callable) -> Callable:
    def wrapper(*args, **kwargs):
        try:
            asyncio.get_running_loop()
            calls.append(True)
        except RuntimeError:
            calls.append(False)
        return func(*args, **kwargs)

    return wrapper


def test_blocking_work_runs_off_the_event_loop(logged_in: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    storage_calls: list[bool] = []
    clipboard_calls: list[bool] = []
    storage = app.state.storage
    clipboard = app.state.clipboard
    monkeypatch.setattr(storage, "set", _record_loop_presence(storage_calls, storage.set))
    monkeypatch.setattr(clipboard, "copy", _record_loop_presence(clipboard_calls, clipboard.copy))

    document = _upload(logged_in).json()
    logged_in.post(f"/documents/{document['id']}/toggle")
    logged_in.put("/settings/credential", json={"api_key": "sk-test"})
    assert logged_in.post("/proposal/generate").status_code == 200
    assert logged_in.post("/proposal/copy").json() == {"status": "copied"}
    logged_in.delete(f"/documents/{document['id']}")

    assert storage_calls and not any(storage_calls)
    assert clipboard_calls == [False]


def test_upload_sanitises_declared_mime_type(logged_in: TestClient) -> None:
    response = logged_in.post(
        "/documents",
        files={"file": ("notes.txt", b"Hello", "text/plain;base64,AAAA")},
        data={"category": "RFI/RFP"},
    )

    assert response.status_code == 201
    summary = response.json()
    assert summary["mime_type"] == "text/plain"
    assert summary["size_bytes"] == 5
    assert summary["is_text"] is True
