from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

REQUIRED_PROMPTS = 5
REQUIRED_VIEWS = 100_000

RECENT_PROMPTS_WINDOW = timedelta(days=30)
VIEWS_WINDOW = timedelta(days=90)


@dataclass(frozen=True)
class EligibilityReport:
    meets_requirements: bool
    recent_prompts_count: int
    total_views: int
    required_prompts: int = REQUIRED_PROMPTS
    required_views: int = REQUIRED_VIEWS


def meets_requirements(*, recent_prompts_count: int, total_views: int) -> bool:
    return recent_prompts_count >= REQUIRED_PROMPTS and total_views >= REQUIRED_VIEWS


def evaluate_eligibility(*, recent_prompts_count: int, total_views: int) -> EligibilityReport:
    recent_prompts_count = max(int(recent_prompts_count or 0), 0)
    total_views = max(int(total_views or 0), 0)
    return EligibilityReport(
        meets_requirements=meets_requirements(
            recent_prompts_count=recent_prompts_count,
            total_views=total_views,
        ),
        recent_prompts_count=recent_prompts_count,
        total_views=total_views,
    )


def eligibility_windows(now: datetime) -> tuple[datetime, datetime]:
    """Return the (prompts_since, views_since) cutoffs for ``now``."""
    return now - RECENT_PROMPTS_WINDOW, now - VIEWS_WINDOW
