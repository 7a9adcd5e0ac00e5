import pytest

from wrongnote.schemas import WrongAnswerRecord


@pytest.fixture
def make_record():
    """Build a valid record, overriding any field by its python name."""
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        fields = {
            "id": f"r{counter['n']}",
            "student_id": "홍길동",
            "date": "2024-05-01",
            "grade": 5,
            "term": 1,
            "chapter": "약수와 배수",
            "problem_level": "Mid",
            "question_type": "Computation",
            "is_resolved": False,
        }
        fields.update(overrides)
        return WrongAnswerRecord(**fields)

    return _make
