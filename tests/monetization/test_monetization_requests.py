from types import SimpleNamespace

import pytest

from prompthub.features.monetization.services import get_eligibility, request_monetization
from prompthub.platform.errors import DuplicateRequestError, IneligibleError


class _FakeMonetizationRepo:
    def __init__(self, *, prompts: int, views: int, existing: SimpleNamespace | None = None) -> None:
        self.prompts = prompts
        self.views = views
        self.existing = existing
        self.created: list[SimpleNamespace] = []
        self.commits = 0

    async def get_status(self, user_id):
        return self.existing

    async def count_prompts_since(self, user_id, since):
        return self.prompts

    async def sum_views_since(self, user_id, since):
        return self.views

    async def create_request(self, user_id):
        row = SimpleNamespace(user_id=user_id, status="pending", is_monetized=False)
        self.created.append(row)
        return row

    async def reopen_request(self, row, now):
        row.status = "pending"
        row.requested_at = now
        row.rejected_at = None
        return row

    async def commit(self, row=None):
        self.commits += 1


@pytest.mark.asyncio
async def test_eligible_user_gets_pending_request() -> None:
    repo = _FakeMonetizationRepo(prompts=5, views=100_000)

    row = await request_monetization(repo, "user-1")

    assert row.status == "pending"
    assert row.is_monetized is False
    assert repo.commits == 1


@pytest.mark.asyncio
async def test_ineligible_user_is_rejected_with_progress_details() -> None:
    repo = _FakeMonetizationRepo(prompts=5, views=99_999)

    with pytest.raises(IneligibleError) as excinfo:
        await request_monetization(repo, "user-1")

    assert excinfo.value.details["total_views"] == 99_999
    assert excinfo.value.details["required_views"] == 100_000
    assert repo.created == []
    assert repo.commits == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("status", ["pending", "approved"])
async def test_open_request_blocks_a_second_one(status: str) -> None:
    repo = _FakeMonetizationRepo(
        prompts=50,
        views=1_000_000,
        existing=SimpleNamespace(status=status, is_monetized=status == "approved"),
    )

    with pytest.raises(DuplicateRequestError):
        await request_monetization(repo, "user-1")
    assert repo.commits == 0


@pytest.mark.asyncio
async def test_rejected_request_can_reapply() -> None:
    existing = SimpleNamespace(status="rejected", is_monetized=False, rejected_at="earlier")
    repo = _FakeMonetizationRepo(prompts=6, views=200_000, existing=existing)

    row = await request_monetization(repo, "user-1")

    assert row is existing
    assert row.status == "pending"
    assert row.rejected_at is None
    assert repo.created == []


@pytest.mark.asyncio
async def test_get_eligibility_reports_counts() -> None:
    repo = _FakeMonetizationRepo(prompts=2, views=500)

    report = await get_eligibility(repo, "user-1")

    assert report.meets_requirements is False
    assert report.recent_prompts_count == 2
    assert report.total_views == 500
