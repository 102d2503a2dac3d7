#!/usr/bin/env python
import os, argparse, json, logging
from interview_scorer.config import load_settings
from interview_scorer.feedback import Feedback, render_feedback
from interview_scorer.loaders import load_question_bank
from interview_scorer.runner import run_full_pass

def main(argv=None):
    ap = argparse.ArgumentParser()
    ap.add_argument("input", help="Path to session JSON with a top-level 'questions' list")
    ap.add_argument("--bank", help="Question bank JSON used to look up rubrics by question text")
    ap.add_argument("--out", help="Output path (defaults to <input>_scored.json)")
    ap.add_argument("--print-feedback", action="store_true", help="Print per-question feedback")
    args = ap.parse_args(argv)

    settings = load_settings()
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")

    bank = load_question_bank(args.bank) if args.bank else None
    out = args.out or (os.path.splitext(args.input)[0] + "_scored.json")
    result = run_full_pass(args.input, out, bank=bank, settings=settings)

    if args.print_feedback:
        for res in result["per_question"]:
            print(f"[{res['question_id']}] {res['question']}")
            print(render_feedback(Feedback(**res["ai_feedback"])))
            print()
    print(json.dumps({"saved": out, "scored": result["meta"]["scored_questions"],
                      "overall_score": result["overall"]["overall_score"]}, indent=2))

if __name__ == "__main__":
    main()
