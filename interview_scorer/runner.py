import json, logging, time
from typing import Any, Dict, List, Optional
from .config import Settings
from .evaluator import AnswerScorer
from .loaders import index_bank, normalize_from_questions_block, pick_rubric_for_item, relax_load_json
from .rubrics import DEFAULT_IDEAL_LENGTH
from .voice import VoiceMetrics, estimate_confidence

logger = logging.getLogger(__name__)


def score_item(item: dict, scorer: AnswerScorer, bank_index: Optional[Dict[str, dict]] = None,
               default_length: int = DEFAULT_IDEAL_LENGTH) -> Optional[Dict[str, Any]]:
    """Score one answered question; returns None for blank answers."""
    answer = item.get("answer_text") or item.get("transcript") or ""
    if not answer.strip():
        logger.debug("skipping unanswered question %s", item.get("id"))
        return None

    rubric = pick_rubric_for_item(item, bank_index, default_length)
    fb = scorer.score_rubric(answer, rubric)
    res: Dict[str, Any] = {
        "question_id": item.get("id"),
        "question": item.get("question", ""),
        "ai_score": fb.score,
        "ai_feedback": fb.to_dict(),
    }
    if item.get("transcript"):
        res.update(estimate_confidence(item["transcript"], fb.clarity, scorer.tables).to_dict())
    return res


def aggregate(per_q: List[Dict[str, Any]]) -> Dict[str, float]:
    if not per_q:
        return {"overall_score": 0, "confidence_score": 0}
    default_conf = VoiceMetrics.default().confidence_score
    scores = [x["ai_score"] for x in per_q]
    confs = [x.get("confidence_score", default_conf) for x in per_q]
    return {
        "overall_score": round(sum(scores)/len(scores), 2),
        "confidence_score": round(sum(confs)/len(confs), 2),
    }


def run_full_pass(in_path: str, out_path: str, bank: Optional[List[dict]] = None,
                  settings: Optional[Settings] = None) -> Dict[str, Any]:
    settings = settings or Settings()
    scorer = AnswerScorer(settings.tables())
    items = normalize_from_questions_block(relax_load_json(in_path))
    bank_index = index_bank(bank)

    per_q: List[Dict[str, Any]] = []
    t0 = time.time()
    for idx, item in enumerate(items, 1):
        res = score_item(item, scorer, bank_index, settings.default_ideal_length)
        if res is not None:
            per_q.append(res)
        logger.info("Processed %d/%d", idx, len(items))

    out = {
        "meta": {
            "elapsed_sec": round(time.time()-t0, 2),
            "scored_questions": len(per_q),
            "total_questions": len(items),
        },
        "per_question": per_q,
        "overall": aggregate(per_q),
    }
    with open(out_path, "w", encoding="utf-8") as f:
        json.dump(out, f, indent=2, ensure_ascii=False)
    return out
