# tests/test_similarity.py  ──  Jaccard similarity, clustering and insights
# Run: pytest tests/test_similarity.py -v

import pytest

from incidentdesk.core import ValidationException
from incidentdesk.similarity.application import (
    SimilarityService, InsightGenerator, NEW_TICKET_ID
)
from incidentdesk.similarity.domain import (
    TicketSummary, JaccardCalculator, KeywordExtractor, TicketClusterer
)


def _ticket(ticket_id: str, title: str, description: str = "") -> TicketSummary:
    return TicketSummary(ticket_id=ticket_id, title=title, description=description)


NEW = _ticket(NEW_TICKET_ID, "alpha bravo", "charlie delta")

HISTORY = [
    _ticket("H4", "zulu yankee", "xray"),
    _ticket("H3", "alpha bravo", "foxtrot golf"),
    _ticket("H2", "alpha bravo", "charlie echo"),
    _ticket("H1", "alpha bravo", "charlie delta"),
    _ticket("H5", "alpha bravo", "charlie"),
]


# ─────────────────────────────────────────────────────────────────────────────
# JaccardCalculator
# ─────────────────────────────────────────────────────────────────────────────

def test_jaccard_identical_texts():
    assert JaccardCalculator.similarity("alpha bravo", "bravo alpha") == 1.0


def test_jaccard_partial_overlap():
    # {alpha, bravo, charlie} vs {alpha, bravo, charlie, echo}
    assert JaccardCalculator.similarity("alpha bravo charlie", "alpha bravo charlie echo") == 0.75


def test_jaccard_is_symmetric():
    a = "Email service outage today"
    b = "Email server outage yesterday"
    assert JaccardCalculator.similarity(a, b) == JaccardCalculator.similarity(b, a)


@pytest.mark.parametrize("a,b", [("", ""), ("a b", "to of"), ("  ", "x")])
def test_jaccard_empty_word_sets_score_zero(a, b):
    assert JaccardCalculator.similarity(a, b) == 0.0


def test_jaccard_ignores_case_but_keeps_punctuation():
    assert JaccardCalculator.similarity("EMAIL server", "email SERVER") == 1.0
    assert JaccardCalculator.similarity("email.", "email") == 0.0


def test_email_outage_scores_against_corpus(corpus):
    """Raw Jaccard values for a new email outage report."""
    text = "Email service down again Email server unreachable for all users"
    by_id = {t.ticket_id: t for t in corpus.historical_tickets}

    assert JaccardCalculator.similarity(text, by_id["INC-001"].text) == pytest.approx(3 / 16)
    assert JaccardCalculator.similarity(text, by_id["INC-003"].text) == pytest.approx(3 / 15)
    assert (
        JaccardCalculator.similarity(text, by_id["INC-003"].text)
        > JaccardCalculator.similarity(text, by_id["INC-005"].text)
    )


# ─────────────────────────────────────────────────────────────────────────────
# KeywordExtractor
# ─────────────────────────────────────────────────────────────────────────────

def test_common_keywords_follow_historical_order_and_skip_short_words():
    historical = _ticket("H", "Server mail down", "mail server not responding")
    new_ticket = _ticket(NEW_TICKET_ID, "responding server", "mail is not down")

    keywords = KeywordExtractor.common_keywords(historical, new_ticket)

    # 'not' has only three letters; duplicates appear once
    assert keywords == ["server", "mail", "down", "responding"]


def test_common_keywords_are_capped():
    words = "alpha bravo charlie delta echo foxtrot golf"
    keywords = KeywordExtractor.common_keywords(_ticket("H", words), _ticket("N", words))
    assert keywords == ["alpha", "bravo", "charlie", "delta", "echo"]


# ─────────────────────────────────────────────────────────────────────────────
# TicketClusterer
# ─────────────────────────────────────────────────────────────────────────────

@pytest.mark.parametrize("similarity,members,action", [
    (1.0, 2, "merge"),
    (0.81, 2, "merge"),
    (0.8, 2, "escalate"),
    (0.75, 2, "escalate"),
    (0.7, 2, "monitor"),
    (0.5, 2, "monitor"),
    (0.6, 4, "create_kb"),
    (0.6, 3, "monitor"),
])
def test_suggest_action_boundaries(similarity, members, action):
    assert TicketClusterer.suggest_action(similarity, members) == action


def test_find_similar_filters_and_sorts():
    similar = TicketClusterer.find_similar(NEW, HISTORY)

    assert [p.ticket.ticket_id for p in similar] == ["H1", "H5", "H2", "H3"]
    assert [p.similarity for p in similar] == pytest.approx([1.0, 0.75, 0.6, 2 / 6])


def test_clusters_are_built_from_sufficiently_similar_tickets():
    analysis = TicketClusterer.analyze(NEW, HISTORY)

    assert [c.cluster_id for c in analysis.clusters] == ["CLUSTER-1", "CLUSTER-2", "CLUSTER-3"]
    assert [c.tickets for c in analysis.clusters] == [
        [NEW_TICKET_ID, "H1"], [NEW_TICKET_ID, "H5"], [NEW_TICKET_ID, "H2"]
    ]
    assert [c.suggested_action for c in analysis.clusters] == ["merge", "escalate", "monitor"]
    assert analysis.clusters[2].common_keywords == ["alpha", "bravo", "charlie"]
    assert analysis.clusters[1].confidence == pytest.approx(0.75)
    assert analysis.duplicate_probability == 1.0


def test_each_historical_ticket_joins_one_cluster():
    duplicated = HISTORY + [HISTORY[3]]
    analysis = TicketClusterer.analyze(NEW, duplicated)

    members = [c.tickets[1] for c in analysis.clusters]
    assert members.count("H1") == 1


def test_analysis_is_idempotent(corpus):
    ticket = _ticket(NEW_TICKET_ID, "Email service outage", "Cannot connect to email server.")
    first = TicketClusterer.analyze(ticket, corpus.historical_tickets)
    second = TicketClusterer.analyze(ticket, corpus.historical_tickets)
    assert first == second


def test_no_candidates_means_zero_duplicate_probability():
    analysis = TicketClusterer.analyze(_ticket(NEW_TICKET_ID, "printer toner"), HISTORY)
    assert analysis.similar_tickets == []
    assert analysis.clusters == []
    assert analysis.duplicate_probability == 0.0


# ─────────────────────────────────────────────────────────────────────────────
# InsightGenerator
# ─────────────────────────────────────────────────────────────────────────────

def test_insights_and_recommendations_for_strong_matches():
    analysis = TicketClusterer.analyze(NEW, HISTORY)

    assert InsightGenerator.insights(analysis) == [
        "⚠️ High probability of duplicate ticket detected",
        "📊 Found 3 related ticket cluster(s)",
    ]
    assert InsightGenerator.recommendations(analysis) == [
        "Consider closing as duplicate and linking to existing ticket",
        "Escalate to senior team - pattern indicates systemic issue",
        "Review historical resolution patterns for faster resolution",
    ]


def test_insights_for_moderately_similar_ticket():
    # 3/4 overlap with H5 is the best match
    history = [_ticket("H5", "alpha bravo", "charlie")]
    analysis = TicketClusterer.analyze(NEW, history)

    assert InsightGenerator.insights(analysis) == [
        "🔍 Similar tickets found - consider merging or escalating",
        "📊 Found 1 related ticket cluster(s)",
    ]
    assert InsightGenerator.recommendations(analysis) == [
        "Escalate to senior team - pattern indicates systemic issue",
    ]


def test_insights_for_unique_ticket():
    analysis = TicketClusterer.analyze(_ticket(NEW_TICKET_ID, "printer toner"), HISTORY)

    assert InsightGenerator.insights(analysis) == [
        "✨ New unique issue - consider creating KB article after resolution"
    ]
    assert InsightGenerator.recommendations(analysis) == []


# ─────────────────────────────────────────────────────────────────────────────
# SimilarityService
# ─────────────────────────────────────────────────────────────────────────────

def test_service_finds_exact_duplicate_in_corpus(corpus):
    service = SimilarityService(corpus.historical_tickets)
    report = service.check(
        "Email server not responding",
        "Users unable to access email. Server appears to be down.",
        category="Email",
    )

    analysis = report.analysis
    assert analysis.duplicate_probability == 1.0
    assert [p.ticket.ticket_id for p in analysis.similar_tickets] == ["INC-001"]

    cluster = analysis.clusters[0]
    assert cluster.cluster_id == "CLUSTER-1"
    assert cluster.tickets == ["NEW", "INC-001"]
    assert cluster.suggested_action == "merge"
    assert cluster.common_keywords == ["email", "server", "responding", "users", "unable"]

    assert report.insights == [
        "⚠️ High probability of duplicate ticket detected",
        "📊 Found 1 related ticket cluster(s)",
    ]
    assert report.recommendations == [
        "Consider closing as duplicate and linking to existing ticket"
    ]


def test_service_limits_returned_similar_tickets():
    service = SimilarityService(HISTORY, similar_tickets_limit=2)
    report = service.check("alpha bravo", "charlie delta")

    assert [p.ticket.ticket_id for p in report.top_similar_tickets] == ["H1", "H5"]
    # Recommendations still see every candidate
    assert "Review historical resolution patterns for faster resolution" in report.recommendations


def test_service_rejects_blank_fields():
    service = SimilarityService(HISTORY)
    with pytest.raises(ValidationException) as exc_info:
        service.check("title", "   ")
    assert exc_info.value.fields == ["description"]


def test_service_does_not_mutate_history():
    history = tuple(HISTORY)
    service = SimilarityService(history)
    service.check("alpha bravo", "charlie delta")
    assert tuple(HISTORY) == history
