from __future__ import annotations

import logging
from datetime import datetime, timezone

from prompthub.features.monetization.eligibility import (
    EligibilityReport,
    eligibility_windows,
    evaluate_eligibility,
)
from prompthub.features.monetization.repository import MonetizationRepository
from prompthub.platform.db.models import UserMonetization
from prompthub.platform.errors import DuplicateRequestError, IneligibleError

logger = logging.getLogger(__name__)

_OPEN_STATUSES = frozenset({"pending", "approved"})


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


async def get_eligibility(repo: MonetizationRepository, user_id: str) -> EligibilityReport:
    prompts_since, views_since = eligibility_windows(_utcnow())
    recent_prompts_count = await repo.count_prompts_since(user_id, prompts_since)
    total_views = await repo.sum_views_since(user_id, views_since)
    return evaluate_eligibility(recent_prompts_count=recent_prompts_count, total_views=total_views)


async def request_monetization(repo: MonetizationRepository, user_id: str) -> UserMonetization:
    existing = await repo.get_status(user_id)
    if existing is not None and existing.status in _OPEN_STATUSES:
        raise DuplicateRequestError(
            "A monetization request already exists",
            details={"status": existing.status},
        )

    report = await get_eligibility(repo, user_id)
    if not report.meets_requirements:
        raise IneligibleError(
            "Does not meet eligibility requirements",
            details={
                "recent_prompts_count": report.recent_prompts_count,
                "required_prompts": report.required_prompts,
                "total_views": report.total_views,
                "required_views": report.required_views,
            },
        )

    if existing is not None:
        row = await repo.reopen_request(existing, _utcnow())
    else:
        row = await repo.create_request(user_id)
    await repo.commit(row)

    logger.info("Monetization requested: user=%s reapplied=%s", user_id, existing is not None)
    return row
