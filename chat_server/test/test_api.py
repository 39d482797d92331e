from fastapi.testclient import TestClient

from chat_server.agents.chat_orchestrator.messages import APOLOGY_TEXT
from chat_server.agents.chat_orchestrator.orchestrator import ChatOrchestrator
from chat_server.api.main import app
from chat_server.api.route import get_orchestrator
from chat_server.schemas.chat_schema import PlaceCandidate
from chat_server.test.fakes import (
    CountingMapLinkBuilder,
    FakeAnswerClient,
    FakeExtractor,
    FakeImageClient,
    FakeNormalizer,
    backend_down,
)


def _client_with(answer) -> tuple:
    answer_client = answer
    orchestrator = ChatOrchestrator(
        answer_client=answer_client,
        normalizer=FakeNormalizer(value="Respuesta limpia"),
        extractor=FakeExtractor(places=[PlaceCandidate(name="Monserrate", city="Bogotá")]),
        image_client=FakeImageClient(),
        map_link_builder=CountingMapLinkBuilder(),
    )
    app.dependency_overrides[get_orchestrator] = lambda: orchestrator
    return TestClient(app), answer_client


def teardown_function():
    app.dependency_overrides.clear()


def test_health_and_root():
    client = TestClient(app)

    assert client.get("/health").json() == {"status": "ok"}
    assert "message" in client.get("/").json()


def test_chat_returns_camel_case_result():
    client, answer = _client_with(FakeAnswerClient(reply="Visita Monserrate."))
    r = client.post("/api/chat", json={"prompt": "¿Qué ver en Bogotá?", "location": {"latitude": 4.6, "longitude": -74.1}})

    assert r.status_code == 200
    body = r.json()
    assert body["responseText"] == "Respuesta limpia"
    assert body["imageUrl"] == "https://img.example/thumb.jpg"
    assert body["mapLinks"][0]["name"] == "Monserrate"
    assert body["groundingChunks"] == []
    assert answer.calls[0][0] == "¿Qué ver en Bogotá?"


def test_prompt_is_sanitized_before_orchestration():
    client, answer = _client_with(FakeAnswerClient(reply="ok"))
    client.post("/api/chat", json={"prompt": "Hola<script>alert(1)</script> <b>Cali</b>"})

    assert answer.calls[0][0] == "Hola Cali"


def test_backend_failure_is_still_http_200():
    client, _ = _client_with(backend_down())
    r = client.post("/api/chat", json={"prompt": "Hola", "location": None})

    assert r.status_code == 200
    assert r.json() == {"responseText": APOLOGY_TEXT, "imageUrl": None, "mapLinks": [], "groundingChunks": []}


def test_oversized_prompt_is_rejected():
    client, answer = _client_with(FakeAnswerClient(reply="ok"))
    r = client.post("/api/chat", json={"prompt": "x" * 2001})

    assert r.status_code == 400
    assert answer.calls == []
