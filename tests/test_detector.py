"""Single-message scoring: thresholds, flags, ordering and the shape heuristics."""

import pytest

from fraudshield.catalog import ScoringWeights
from fraudshield.detector import (
    EMPTY_EXPLANATION,
    EXPLANATIONS,
    FRAUD,
    SAFE,
    SUSPICIOUS,
    MessageScorer,
    classify,
)


SAMPLE_MESSAGES = [
    "Hi, running late for dinner, see you soon",
    "CONGRATULATIONS!!! You WON $1,000,000! Click here NOW to claim!",
    "Your bank account has been temporarily locked. Verify at http://verify-account-now.xyz",
    "URGENT URGENT URGENT!!! police will arrest you, pay fine via bank transfer ₹50,000 now",
    "ok",
    "My SSN is 123-45-6789 and card 4111111111111111",
    "Did you finish the project?",
]


@pytest.mark.parametrize("message", ["", "   ", "\n\t", None])
def test_empty_message_is_safe_with_no_flags(scorer, message):
    result = scorer.score(message)
    assert result.classification == SAFE
    assert result.risk_score == 0
    assert result.flags == ()
    assert result.explanation == EMPTY_EXPLANATION


@pytest.mark.parametrize("message", SAMPLE_MESSAGES)
def test_score_is_bounded_and_matches_threshold(scorer, message):
    result = scorer.score(message)
    assert 0 <= result.risk_score <= 100
    assert result.classification == classify(result.risk_score)
    assert result.explanation == EXPLANATIONS[result.classification]


@pytest.mark.parametrize("message", SAMPLE_MESSAGES)
def test_flags_sorted_by_severity(scorer, message):
    severities = [f.severity for f in scorer.score(message).flags]
    assert severities == sorted(severities, reverse=True)


@pytest.mark.parametrize("message", SAMPLE_MESSAGES)
def test_scoring_is_idempotent(scorer, message):
    assert scorer.score(message) == scorer.score(message)


@pytest.mark.parametrize("score, expected", [
    (0, SAFE), (29, SAFE), (30, SUSPICIOUS), (69, SUSPICIOUS), (70, FRAUD), (100, FRAUD),
])
def test_classification_thresholds(score, expected):
    assert classify(score) == expected


def test_lottery_scam_is_fraud(scorer):
    result = scorer.score("CONGRATULATIONS!!! You WON $1,000,000! Click here NOW to claim!")
    assert result.classification == FRAUD
    assert result.risk_score >= 70
    categories = {f.category for f in result.flags}
    assert {"money", "urgency", "pattern"} <= categories
    pattern_texts = [f.text for f in result.flags if f.category == "pattern"]
    assert any("Money amount" in t for t in pattern_texts)


def test_casual_message_is_safe(scorer):
    result = scorer.score("Hi, running late for dinner, see you soon")
    assert result.classification == SAFE
    assert result.risk_score < 30
    assert result.flags == ()


def test_bank_otp_request_is_fraud(scorer):
    result = scorer.score("verify your bank account otp")
    # banking x2 (60) + requests (20) + impersonation (20)
    assert result.risk_score == 100
    assert result.classification == FRAUD
    assert result.flags[0].category == "banking"
    assert result.flags[0].severity == 60


def test_category_matches_are_capped_at_three(scorer):
    result = scorer.score("urgent immediately now asap hurry")
    assert len(result.flags) == 1
    flag = result.flags[0]
    assert flag.category == "urgency"
    assert flag.severity == 45
    assert flag.text == 'Urgency tactics detected: "urgent, immediately, now"'
    assert result.classification == SUSPICIOUS


def test_equal_severity_keeps_evaluation_order(scorer):
    result = scorer.score("Reply now, pay $50 today please ok")
    assert [(f.category, f.severity) for f in result.flags] == [
        ("urgency", 15),
        ("pattern", 15),
    ]


def test_short_message_adds_mild_risk_without_flag(scorer):
    result = scorer.score("hello there")
    assert result.risk_score == 5
    assert result.flags == ()
    assert result.classification == SAFE


def test_excessive_punctuation(scorer):
    result = scorer.score("Are you coming to the party???")
    assert result.risk_score == 10
    assert len(result.flags) == 1
    assert result.flags[0].category == "urgency"
    assert "punctuation" in result.flags[0].text


def test_shouting_needs_more_than_two_caps_words(scorer):
    shouting = scorer.score("PLEASE CALL BACK SOON about the meeting")
    assert shouting.risk_score == 10
    assert "capitalization" in shouting.flags[0].text

    two_words = scorer.score("PLEASE CALL back soon about the meeting")
    assert two_words.risk_score == 0
    assert two_words.flags == ()


def test_ssn_pattern_is_case_sensitive_structural_match(scorer):
    result = scorer.score("My number is 123-45-6789 for the form")
    assert result.risk_score == 15
    assert [f.text for f in result.flags] == [
        "Suspicious pattern detected: Social security number",
    ]


def test_trusted_url_is_not_flagged(scorer):
    result = scorer.score("See https://www.google.com/maps for directions")
    assert not any("URL" in f.text for f in result.flags)


def test_untrusted_url_is_flagged_even_if_brand_named_elsewhere(scorer):
    result = scorer.score("Visit http://evil.xyz/login and ask google about it")
    assert any(f.text.endswith("Suspicious URL") for f in result.flags)


def test_each_currency_pattern_scores_independently(scorer):
    result = scorer.score("Pay $500 or ₹40,000 by the end of the week")
    money_flags = [f for f in result.flags if f.text.endswith("Money amount")]
    assert len(money_flags) == 2


def test_custom_weights_are_honoured():
    scorer = MessageScorer(ScoringWeights(pattern_weight=20))
    result = scorer.score("My number is 123-45-6789 for the form")
    assert result.risk_score == 20


def test_score_never_exceeds_100(scorer):
    message = (
        "URGENT!!! You WON the LOTTERY PRIZE! Your BANK account is BLOCKED. "
        "Share OTP, PIN and CVV now or police will arrest you. Click here: "
        "http://claim-now.xyz $5,000 ₹9,999 4111111111111111 123-45-6789"
    )
    result = scorer.score(message)
    assert result.risk_score == 100
    assert result.classification == FRAUD


def test_to_dict_uses_wire_names(scorer):
    payload = scorer.score("verify your bank account otp").to_dict()
    assert set(payload) == {"classification", "riskScore", "flags", "explanation"}
    assert set(payload["flags"][0]) == {"category", "icon", "text", "severity"}


def test_shouting_counts_ascii_caps_runs_only(scorer):
    # Accented capitals break the word, leaving "BCDE" as the caps run
    result = scorer.score("ÀBCDE ÀBCDE ÀBCDE please listen to me")
    assert result.risk_score == 10
    assert [f.text for f in result.flags] == ["Excessive capitalization detected (pressure tactic)"]


def test_non_ascii_digits_do_not_match_number_patterns(scorer):
    result = scorer.score("Reference ١٢٣٤٥٦٧٨٩٠١٢٣٤٥٦ and ₹१२३४ noted for the record")
    assert not any("Credit card number" in f.text for f in result.flags)
    assert not any("Money amount" in f.text for f in result.flags)
