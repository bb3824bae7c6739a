# core/result_aggregator.py
import math
from typing import Dict, Final, List, Sequence
import logging
from core.claim_evaluator import error_verdict
from core.entities import Claim, Verdict, VerificationReport
from util.enums import Assessment

logger = logging.getLogger(__name__)

WEIGHTS: Final[Dict[Assessment, float]] = {
    Assessment.true: 1.0,
    Assessment.partially_true: 0.5,
    Assessment.needs_context: 0.5,
    Assessment.unverifiable: 0.3,
    Assessment.false: 0.0,
}

MISSING_VERDICT_SUMMARY = "Verification did not complete for this claim."


def summarize(verdicts: Sequence[Verdict]) -> Dict[Assessment, int]:
    counts = {a: 0 for a in Assessment}
    for v in verdicts:
        counts[v.assessment] += 1
    return counts


def overall_score(counts: Dict[Assessment, int]) -> int:
    """
    Weighted share of support across judged claims. Errors are left out of the
    denominator: infrastructure failures say nothing about the text.
    """
    judged = sum(n for a, n in counts.items() if a is not Assessment.error)
    if judged == 0:
        return 0
    weighted = sum(counts[a] * w for a, w in WEIGHTS.items())
    # half-up, not banker's rounding
    return int(math.floor(100 * weighted / judged + 0.5))


def aggregate(claims: Sequence[Claim], verdicts: Sequence[Verdict]) -> VerificationReport:
    ordered: List[Verdict] = list(verdicts[: len(claims)]) if claims else list(verdicts)
    if len(verdicts) != len(claims):
        logger.error(
            "aggregate.mismatch claims=%d verdicts=%d", len(claims), len(verdicts)
        )
        for claim in claims[len(ordered):]:
            ordered.append(error_verdict(claim, MISSING_VERDICT_SUMMARY))

    counts = summarize(ordered)
    score = overall_score(counts)
    logger.info("aggregate.done n=%d score=%d", len(ordered), score)
    return VerificationReport(
        per_claim_verdicts=tuple(ordered),
        summary_counts=counts,
        overall_score=score,
    )
