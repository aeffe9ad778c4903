from datetime import datetime, timezone

from prompthub.features.monetization.eligibility import (
    REQUIRED_PROMPTS,
    REQUIRED_VIEWS,
    eligibility_windows,
    evaluate_eligibility,
    meets_requirements,
)


def test_one_view_short_of_threshold_is_not_eligible():
    assert meets_requirements(recent_prompts_count=5, total_views=99_999) is False


def test_exact_thresholds_are_eligible():
    assert meets_requirements(recent_prompts_count=5, total_views=100_000) is True


def test_too_few_prompts_is_not_eligible_regardless_of_views():
    assert meets_requirements(recent_prompts_count=4, total_views=10_000_000) is False


def test_report_carries_requirements_and_clamps_negatives():
    report = evaluate_eligibility(recent_prompts_count=-3, total_views=None)

    assert report.meets_requirements is False
    assert report.recent_prompts_count == 0
    assert report.total_views == 0
    assert report.required_prompts == REQUIRED_PROMPTS
    assert report.required_views == REQUIRED_VIEWS


def test_windows_look_back_thirty_and_ninety_days():
    now = datetime(2026, 4, 1, tzinfo=timezone.utc)
    prompts_since, views_since = eligibility_windows(now)

    assert prompts_since == datetime(2026, 3, 2, tzinfo=timezone.utc)
    assert views_since == datetime(2026, 1, 1, tzinfo=timezone.utc)
