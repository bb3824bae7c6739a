import pytest

from core.claim_evaluator import error_verdict
from core.entities import Claim, Verdict
from core.result_aggregator import MISSING_VERDICT_SUMMARY, aggregate, overall_score, summarize
from util.enums import Assessment


def _claim(i: int) -> Claim:
    return Claim(text=f"Claim number {i} is a statement.")


def _verdict(i: int, assessment: Assessment) -> Verdict:
    return Verdict(
        claim_text=_claim(i).text,
        assessment=assessment,
        confidence=50,
        summary="s",
    )


class TestSummarize:
    def test_all_keys_present(self):
        counts = summarize([_verdict(0, Assessment.true), _verdict(1, Assessment.true)])
        assert set(counts) == set(Assessment)
        assert counts[Assessment.true] == 2
        assert sum(counts.values()) == 2


class TestOverallScore:
    @pytest.mark.parametrize(
        "assessments, expected",
        [
            ([Assessment.true, Assessment.error], 100),
            ([Assessment.true, Assessment.false], 50),
            ([Assessment.true, Assessment.false, Assessment.partially_true, Assessment.unverifiable], 45),
            ([Assessment.partially_true, Assessment.false, Assessment.false, Assessment.false], 13),
            ([Assessment.error, Assessment.error], 0),
            ([], 0),
        ],
    )
    def test_score(self, assessments, expected):
        counts = summarize([_verdict(i, a) for i, a in enumerate(assessments)])
        assert overall_score(counts) == expected


class TestAggregate:
    def test_report(self):
        claims = [_claim(0), _claim(1)]
        verdicts = [_verdict(0, Assessment.true), _verdict(1, Assessment.needs_context)]
        report = aggregate(claims, verdicts)

        assert report.per_claim_verdicts == tuple(verdicts)
        assert report.overall_score == 75
        assert sum(report.summary_counts.values()) == len(claims)
        assert report.has_claims
        assert report.generated_at.tzinfo is not None

    def test_missing_verdicts_are_padded(self):
        claims = [_claim(0), _claim(1), _claim(2)]
        report = aggregate(claims, [_verdict(0, Assessment.true)])

        assert len(report.per_claim_verdicts) == 3
        padded = report.per_claim_verdicts[1:]
        assert all(v.assessment is Assessment.error for v in padded)
        assert all(v.summary == MISSING_VERDICT_SUMMARY for v in padded)
        assert [v.claim_text for v in padded] == [claims[1].text, claims[2].text]
        assert report.overall_score == 100

    def test_extra_verdicts_are_dropped(self):
        report = aggregate(
            [_claim(0)], [_verdict(0, Assessment.false), error_verdict(_claim(1), "x")]
        )
        assert len(report.per_claim_verdicts) == 1
        assert report.summary_counts[Assessment.error] == 0

    def test_empty(self):
        report = aggregate([], [])
        assert not report.has_claims
        assert report.overall_score == 0
