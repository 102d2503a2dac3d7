import json

import pytest

from interview_scorer.feedback import Feedback, parse_feedback_sections, render_feedback
from interview_scorer.loaders import (
    SessionFormatError, index_bank, load_question_bank, normalize_from_questions_block,
    pick_rubric_for_item, relax_load_json,
)

BANK = [
    {"id": "b1", "question_text": "What is a mutex?", "expected_keywords": ["lock", "Thread"], "ideal_answer_length": 60},
    {"id": "b2", "question_text": "What is a mutex?", "expected_keywords": ["ignored"]},
    {"id": "b3", "question_text": "Explain TCP.", "ideal_answer_length": None},
]


def test_normalize_from_questions_block():
    data = {"questions": [{"id": "q1", "question": "What?", "answer": "This"}, {"transcript": "um yes"}]}
    items = normalize_from_questions_block(data)
    assert items[0]["id"] == "q1"
    assert items[0]["answer_text"] == "This"
    assert items[1]["id"] == "q2"
    assert items[1]["transcript"] == "um yes"
    assert items[1]["answer_text"] == ""


def test_missing_questions_block():
    with pytest.raises(SessionFormatError):
        normalize_from_questions_block({"answers": []})


def test_relax_load_json_trailing_commas(tmp_path):
    p = tmp_path / "s.json"
    p.write_text('{"questions": [{"id": "q1",},],}', encoding="utf-8")
    assert relax_load_json(str(p)) == {"questions": [{"id": "q1"}]}


def test_load_question_bank_shapes(tmp_path):
    p = tmp_path / "bank.json"
    p.write_text(json.dumps({"questions": BANK}), encoding="utf-8")
    assert len(load_question_bank(str(p))) == 3
    p.write_text(json.dumps({"questions": "nope"}), encoding="utf-8")
    with pytest.raises(SessionFormatError):
        load_question_bank(str(p))


def test_rubric_lookup_by_question_text():
    idx = index_bank(BANK)
    r = pick_rubric_for_item({"question": "What is a mutex? "}, idx)
    assert r.expected_keywords == ("lock", "thread")
    assert r.ideal_answer_length == 60
    assert pick_rubric_for_item({"question": "Explain TCP."}, idx).ideal_answer_length == 100


def test_inline_rubric_wins_over_bank():
    idx = index_bank(BANK)
    r = pick_rubric_for_item({"question": "What is a mutex?", "expected_keywords": ["futex"]}, idx)
    assert r.expected_keywords == ("futex",)
    assert r.ideal_answer_length == 60


def test_unknown_question_gets_defaults():
    r = pick_rubric_for_item({"question": "Unlisted"}, {}, default_length=80)
    assert r.expected_keywords == ()
    assert r.ideal_answer_length == 80


def test_feedback_text_sections():
    fb = Feedback(score=6.5, technical_accuracy=5.0, clarity=8.0, structure=7.0,
                  strengths=("Clear and easy to understand explanation",),
                  weaknesses=("Answer was too brief",),
                  suggestions=("Provide more detail and examples in your response",))
    text = render_feedback(fb)
    assert text.startswith("Score: 6.5/10")
    assert parse_feedback_sections(text) == {
        "strengths": ["Clear and easy to understand explanation"],
        "areas_to_improve": ["Answer was too brief"],
        "suggestions": ["Provide more detail and examples in your response"],
    }


@pytest.mark.parametrize("question", [
    {"id": "q1", "answer_text": 42},
    {"id": "q1", "transcript": ["um", "yes"]},
    "just a string",
])
def test_malformed_answer_fields_rejected(question):
    with pytest.raises(SessionFormatError):
        normalize_from_questions_block({"questions": [question]})


def test_null_inline_rubric_keeps_bank_values():
    idx = index_bank(BANK)
    items = normalize_from_questions_block({"questions": [
        {"question": "What is a mutex?", "answer_text": "a lock", "expected_keywords": None, "ideal_answer_length": None},
    ]})
    r = pick_rubric_for_item(items[0], idx)
    assert r.expected_keywords == ("lock", "thread")
    assert r.ideal_answer_length == 60
    assert pick_rubric_for_item({"question": "What is a mutex?", "expected_keywords": None}, idx).expected_keywords == ("lock", "thread")
