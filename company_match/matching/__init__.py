"""
Matching Module.

Resolves partial identity queries to ranked company records:
- Candidate generation (per-signal index lookups, unioned)
- Scoring (weighted conditions per signal, compounded)
- Ranking and confidence gating (Matcher)
- Match explanation
- Batch evaluation

Each component can be tested independently and swapped out.
"""

from company_match.matching.batch import (
    EvaluationReport,
    QueryEvaluation,
    evaluate,
    evaluate_sample,
    match_many,
)
from company_match.matching.candidates import (
    CandidateSource,
    PreparedQuery,
    generate_candidates,
    prepare_query,
)
from company_match.matching.explain import explain_match
from company_match.matching.matcher import (
    Matcher,
    MatchOutcome,
    MatchResult,
    Ranking,
    ScoredCandidate,
)
from company_match.matching.scoring import (
    WEIGHTS,
    Condition,
    Contribution,
    SignalScorer,
    confidence_from_score,
    is_confident,
    score_record,
)

__all__ = [
    # Candidates
    "CandidateSource",
    "PreparedQuery",
    "generate_candidates",
    "prepare_query",
    # Scoring
    "WEIGHTS",
    "Condition",
    "Contribution",
    "SignalScorer",
    "confidence_from_score",
    "is_confident",
    "score_record",
    # Explanation
    "explain_match",
    # Matcher
    "Matcher",
    "MatchOutcome",
    "MatchResult",
    "Ranking",
    "ScoredCandidate",
    # Batch
    "EvaluationReport",
    "QueryEvaluation",
    "evaluate",
    "evaluate_sample",
    "match_many",
]
