"""API tests with the record store swapped for an in-memory fake."""

from fastapi.testclient import TestClient
import pytest

from wrongnote.errors import CategorizationError, RemoteRejected, RemoteUnavailable
from wrongnote.main import app
from wrongnote.record_store import RecordStore, get_record_store
from wrongnote.routers import categorize as categorize_router
from wrongnote.schemas import CategorizationResult, WrongAnswerRecord


class FakeStore(RecordStore):
    def __init__(self, records=None, students=None, fail_reads=False, fail_writes=False):
        self.records = list(records or [])
        self.students = list(students or [])
        self.fail_reads = fail_reads
        self.fail_writes = fail_writes
        self.resolved = []

    async def fetch_all(self):
        if self.fail_reads:
            raise RemoteUnavailable("store unreachable")
        return list(self.records)

    async def list_students(self):
        if self.fail_reads:
            raise RemoteUnavailable("store unreachable")
        return list(self.students)

    async def save(self, answer):
        if self.fail_writes:
            raise RemoteRejected("quota exceeded")
        data = answer.model_dump(exclude={"image_base64", "image_name", "image_type"})
        record = WrongAnswerRecord(id=f"new{len(self.records)}", is_resolved=False, **data)
        self.records.append(record)
        return record

    async def set_resolved(self, record_id):
        if self.fail_writes:
            raise RemoteRejected("row locked")
        self.resolved.append(record_id)


@pytest.fixture
def use_store():
    def _use(store):
        app.dependency_overrides[get_record_store] = lambda: store
        return TestClient(app)

    yield _use
    app.dependency_overrides.clear()


def _payload(**overrides):
    body = {
        "studentId": "홍길동",
        "date": "2024-05-03",
        "grade": 5,
        "term": 1,
        "chapter": "규칙과 대응",
        "problemLevel": "High",
        "questionType": "ProblemSolving",
        "memo": "대응 관계 식 세우기",
    }
    body.update(overrides)
    return body


def test_health():
    client = TestClient(app)
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_list_answers_filters_by_query(use_store, make_record):
    store = FakeStore([make_record(id="a", grade=5), make_record(id="b", grade=4)])
    response = use_store(store).get("/answers", params={"grade": 5})
    assert response.status_code == 200
    body = response.json()
    assert [r["id"] for r in body] == ["a"]
    assert body[0]["studentId"] == "홍길동"
    assert body[0]["isResolved"] is False


def test_list_answers_degrades_when_store_down(use_store):
    response = use_store(FakeStore(fail_reads=True)).get("/answers")
    assert response.status_code == 200
    assert response.json() == []


def test_students_degrade_when_store_down(use_store):
    assert use_store(FakeStore(fail_reads=True)).get("/students").json() == []
    assert use_store(FakeStore(students=["홍길동"])).get("/students").json() == ["홍길동"]


def test_stats_endpoint(use_store, make_record):
    store = FakeStore([
        make_record(chapter="약수와 배수", problem_level="Low", is_resolved=True),
        make_record(chapter="약수와 배수", problem_level="Mid"),
        make_record(chapter="규칙과 대응", problem_level="Mid", grade=4),
    ])
    response = use_store(store).get("/analysis/stats", params={"grade": 5, "chapter": "전체"})
    assert response.status_code == 200
    stats = response.json()
    assert stats["totalWrong"] == 2
    assert stats["resolved"] == 1
    assert stats["resolutionRate"] == 50
    assert stats["worstChapter"] == "약수와 배수"
    assert stats["pieData"] == [
        {"name": "Low", "value": 1},
        {"name": "Mid", "value": 1},
        {"name": "High", "value": 0},
        {"name": "Top", "value": 0},
    ]
    assert stats["radarData"][1] == {"subject": "계산", "A": 2, "fullMark": 10}


def test_stats_when_store_down_is_empty_report(use_store):
    stats = use_store(FakeStore(fail_reads=True)).get("/analysis/stats").json()
    assert stats["totalWrong"] == 0
    assert stats["worstChapter"] == "-"
    assert stats["barData"] == []
    assert len(stats["pieData"]) == 4


def test_save_answer(use_store):
    store = FakeStore()
    response = use_store(store).post("/answers", json=_payload())
    assert response.status_code == 201
    body = response.json()
    assert body["isResolved"] is False
    assert body["chapter"] == "규칙과 대응"
    assert len(store.records) == 1


def test_save_answer_validation(use_store):
    response = use_store(FakeStore()).post("/answers", json=_payload(problemLevel="Extreme"))
    assert response.status_code == 422


def test_save_failure_reported(use_store):
    response = use_store(FakeStore(fail_writes=True)).post("/answers", json=_payload())
    assert response.status_code == 502
    assert response.json()["detail"] == "quota exceeded"


def test_resolve(use_store):
    store = FakeStore()
    response = use_store(store).post("/answers/r7/resolve")
    assert response.status_code == 200
    assert response.json() == {"id": "r7", "isResolved": True}
    assert store.resolved == ["r7"]


def test_resolve_failure_reported(use_store):
    response = use_store(FakeStore(fail_writes=True)).post("/answers/r7/resolve")
    assert response.status_code == 502
    assert response.json()["detail"] == "row locked"


def test_worksheet(use_store, make_record):
    records = [make_record(id=f"r{i}", is_resolved=(i == 0)) for i in range(6)]
    sheet = use_store(FakeStore(records)).get("/worksheet").json()
    assert sheet["total"] == 5
    assert [len(p["records"]) for p in sheet["pages"]] == [4, 1]
    assert sheet["pages"][0]["records"][0]["id"] == "r1"


def test_curriculum():
    client = TestClient(app)
    assert "약수와 배수" in client.get("/curriculum", params={"grade": 5, "term": 1}).json()
    assert client.get("/curriculum").json() == []
    assert client.get("/curriculum", params={"grade": 9}).status_code == 400


def test_categorize(monkeypatch):
    calls = []

    async def fake_categorize(image_base64, mime_type):
        calls.append((image_base64, mime_type))
        return CategorizationResult(problem_level="Top", question_type="Concept")

    monkeypatch.setattr(categorize_router, "categorize_image", fake_categorize)
    response = TestClient(app).post(
        "/categorize",
        json={"imageBase64": "data:image/png;base64,QUJD", "mimeType": "image/png"},
    )
    assert response.status_code == 200
    assert response.json() == {"problemLevel": "Top", "questionType": "Concept"}
    assert calls == [("QUJD", "image/png")]


def test_categorize_failure_is_502(monkeypatch):
    async def failing(image_base64, mime_type):
        raise CategorizationError("all 5 models failed")

    monkeypatch.setattr(categorize_router, "categorize_image", failing)
    response = TestClient(app).post("/categorize", json={"imageBase64": "QUJD"})
    assert response.status_code == 502
    assert "all 5 models failed" in response.json()["detail"]
