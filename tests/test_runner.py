import json

import pytest

from interview_scorer.config import Settings
from interview_scorer.loaders import SessionFormatError
from interview_scorer.runner import aggregate, run_full_pass

BINARY_SEARCH = (
    "Binary search works by repeatedly dividing the sorted array in half. "
    "First compare the middle element, then recurse into the correct half. "
    "For example, searching for 7 in [1,3,5,7,9] takes log2(5) steps."
)
BANK = [{
    "id": "b1", "role": "backend", "difficulty": "easy",
    "question_text": "How does binary search work?",
    "expected_keywords": ["binary search", "divide", "sorted", "logarithmic"],
    "ideal_answer_length": 40,
}]


@pytest.fixture
def session(tmp_path):
    inp = tmp_path / "in.json"
    inp.write_text(json.dumps({"questions": [
        {"id": "q1", "question": "How does binary search work?", "answer_text": BINARY_SEARCH},
        {"id": "q2", "question": "What is a deadlock?",
         "transcript": "Um, a deadlock is when two threads wait on each other forever. So neither can proceed.",
         "expected_keywords": ["thread", "wait"]},
        {"id": "q3", "question": "Unanswered", "answer_text": "   "},
    ]}), encoding="utf-8")
    return inp


def test_run_full_pass(session, tmp_path):
    outp = tmp_path / "out.json"
    res = run_full_pass(str(session), str(outp), bank=BANK)
    assert outp.exists()
    assert json.loads(outp.read_text(encoding="utf-8")) == res

    assert res["meta"]["scored_questions"] == 2
    assert res["meta"]["total_questions"] == 3
    q1, q2 = res["per_question"]
    assert q1["question_id"] == "q1"
    assert q1["ai_score"] == 7.6
    assert q1["ai_feedback"]["technical_accuracy"] == 5.0
    assert "confidence_score" not in q1

    assert q2["ai_feedback"]["technical_accuracy"] == 10.0
    assert q2["filler_word_count"] == 2
    assert q2["words_per_minute"] == 32

    overall = res["overall"]
    assert overall["overall_score"] == round((q1["ai_score"] + q2["ai_score"]) / 2, 2)
    assert overall["confidence_score"] == round((70 + q2["confidence_score"]) / 2, 2)


def test_run_full_pass_without_bank(session, tmp_path):
    res = run_full_pass(str(session), str(tmp_path / "out.json"), settings=Settings(default_ideal_length=30))
    assert res["per_question"][0]["ai_feedback"]["technical_accuracy"] == 0.0


def test_aggregate_empty():
    assert aggregate([]) == {"overall_score": 0, "confidence_score": 0}


def test_non_string_answer_raises_format_error(tmp_path):
    inp = tmp_path / "bad.json"
    inp.write_text(json.dumps({"questions": [{"id": "q1", "answer_text": 42}]}), encoding="utf-8")
    with pytest.raises(SessionFormatError):
        run_full_pass(str(inp), str(tmp_path / "out.json"))
