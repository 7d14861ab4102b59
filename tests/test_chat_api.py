"""
End-to-end tests for the chat endpoint.
"""

from unittest.mock import MagicMock

import pytest

from chavis.api.main import GENERATION_ERROR
from chavis.core.config import REFUSAL_MESSAGE
from chavis.vector.types import QueryResult


def test_exact_keyword_answer(make_client):
    client, services = make_client()
    services.store.add(["printer"], "Printer is on floor 2.", "https://wiki/printer")

    response = client.post("/chat", json={"question": "Where is the printer?"})

    assert response.status_code == 200
    data = response.json()
    assert data["type"] == "exact_match"
    assert data["answer"] == "Printer is on floor 2."
    assert data["matchedKeyword"] == "printer"
    assert data["referenceLink"] == "https://wiki/printer"


def test_no_knowledge_refuses_and_logs(make_client):
    client, _ = make_client()

    response = client.post("/chat", json={"question": "vacation policy"})

    assert response.status_code == 200
    data = response.json()
    assert data["type"] == "no_match"
    assert data["answer"] == REFUSAL_MESSAGE
    assert data["sources"] == []

    unanswered = client.get("/unanswered").json()
    assert [u["question"] for u in unanswered] == ["vacation policy"]
    assert "createdAt" in unanswered[0]


def test_generated_answer_with_sources(make_client):
    vector_store = MagicMock()
    vector_store.search.return_value = [
        QueryResult(id="doc_1", score=0.9, text="건전지는 탕비실 세 번째 서랍에 있습니다.",
                    metadata={"source": "office_guide"}),
        QueryResult(id="doc_2", score=0.8, text="신규 입사자 환영 회식은 매달 마지막 주 금요일입니다.",
                    metadata={"source": "office_guide"}),
    ]
    client, services = make_client(vector_store=vector_store)

    response = client.post("/chat", json={"question": "사무실 안내"})

    assert response.status_code == 200
    data = response.json()
    assert data["type"] == "rag"
    assert len(data["sources"]) == 2
    assert data["sources"][0]["metadata"] == {"source": "office_guide"}
    assert "matchedKeyword" not in data
    assert services.unanswered.list() == []


def test_generation_failure_returns_500_and_logs(make_client, failing_generator):
    vector_store = MagicMock()
    vector_store.search.return_value = [
        QueryResult(id="knowledge_1", score=0.7, text="Business casual on Fridays.", metadata={}),
    ]
    client, services = make_client(vector_store=vector_store, generator=failing_generator)

    response = client.post("/chat", json={"question": "what should I wear?"})

    assert response.status_code == 500
    assert response.json()["error"] == GENERATION_ERROR
    assert [e.question for e in services.unanswered.list()] == ["what should I wear?"]


@pytest.mark.parametrize("body", [
    {},
    {"question": 42},
    {"question": None},
    {"question": ""},
    {"question": "   "},
])
def test_invalid_question_is_bad_request(make_client, body):
    client, services = make_client()

    response = client.post("/chat", json=body)

    assert response.status_code == 400
    assert "error" in response.json()
    assert services.unanswered.list() == []


def test_api_chat_alias(make_client):
    client, services = make_client()
    services.store.add(["건전지"], "건전지는 탕비실 세 번째 서랍에 있습니다.")

    response = client.post("/api/chat", json={"question": "건전지 어디 있어요?"})

    assert response.status_code == 200
    assert response.json()["type"] == "exact_match"
