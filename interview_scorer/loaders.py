import json, logging, re
from typing import Any, Dict, List, Optional
from .rubrics import DEFAULT_IDEAL_LENGTH, Rubric

logger = logging.getLogger(__name__)


class SessionFormatError(ValueError):
    pass


def relax_load_json(path: str) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        txt = f.read()
    txt = re.sub(r",\s*([\]\}])", r"\1", txt)
    return json.loads(txt)

def _text_field(d: dict, i: int, key: str) -> str:
    v = d.get(key)
    if v is None:
        return ""
    if not isinstance(v, str):
        raise SessionFormatError(f"Question {i}: '{key}' must be a string, got {type(v).__name__}.")
    return v

def normalize_from_questions_block(data: dict) -> List[dict]:
    if not isinstance(data, dict) or not isinstance(data.get("questions"), list):
        raise SessionFormatError("Top-level 'questions' list not found.")
    out = []
    for i, d in enumerate(data["questions"], 1):
        if not isinstance(d, dict):
            raise SessionFormatError(f"Question {i} is not an object.")
        answer_text = _text_field(d, i, "answer_text") or _text_field(d, i, "answer")
        transcript = _text_field(d, i, "transcript")
        item = {
            "id": d.get("id", f"q{i}"),
            "question": d.get("question", d.get("question_text", "")),
            "answer_text": answer_text,
            "transcript": transcript,
        }
        for key in ("expected_keywords", "ideal_answer_length"):
            if d.get(key) is not None:
                item[key] = d[key]
        out.append(item)
    return out

def load_question_bank(path: str) -> List[dict]:
    data = relax_load_json(path)
    if isinstance(data, dict):
        data = data.get("questions")
    if not isinstance(data, list):
        raise SessionFormatError("Question bank must be a list of questions.")
    return data

def index_bank(bank: Optional[List[dict]]) -> Dict[str, dict]:
    """Key bank rows by question text; the first row wins on duplicates."""
    idx: Dict[str, dict] = {}
    for row in bank or []:
        text = (row.get("question_text") or "").strip()
        if text and text not in idx:
            idx[text] = row
    return idx

def pick_rubric_for_item(item: dict, bank_index: Optional[Dict[str, dict]] = None,
                         default_length: int = DEFAULT_IDEAL_LENGTH) -> Rubric:
    """Inline rubric fields on the item take precedence over the bank row."""
    row = dict((bank_index or {}).get((item.get("question") or "").strip(), {}))
    if not row and item.get("expected_keywords") is None:
        logger.debug("no rubric for question %s, using defaults", item.get("id"))
    for key in ("expected_keywords", "ideal_answer_length"):
        if item.get(key) is not None:
            row[key] = item[key]
    return Rubric.from_record(row, default_length)
