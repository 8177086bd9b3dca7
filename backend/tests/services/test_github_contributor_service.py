"""GitHubContributor Service: registration, identity changes, alias filters, and links."""

from datetime import datetime, timezone
from uuid import uuid4

import pytest

from metrics_api.core.domain_types import ContributorStatus
from metrics_api.core.errors import (
    ConstraintKind, IntegrityViolationError, NotFoundError, ValidationError,
)
from metrics_api.core.github_contributor import GitHubContributor
from metrics_api.core.result import Err, Ok
from metrics_api.core.user import User
from metrics_api.services.github_contributor_service import GitHubContributorService


@pytest.fixture
async def octocat(contributor_service):
    result = await contributor_service.create_contributor(
        "octocat", "octo@example.com", "The Octocat",
    )
    return result.value


async def test_create_contributor(contributor_service):
    result = await contributor_service.create_contributor(
        " octocat ", "Octo@Example.com", "The Octocat", all_known_usernames=["old", "old"],
    )
    assert result.value.current_username == "octocat"
    assert result.value.current_email == "octo@example.com"
    assert result.value.all_known_usernames == ("old",)


async def test_create_returns_domain_validation_as_err(contributor_service):
    result = await contributor_service.create_contributor("octocat", "bad", "Octo")
    assert isinstance(result.error, ValidationError)
    assert result.error.message == "Invalid email format"


async def test_create_duplicate_username(contributor_service, octocat):
    result = await contributor_service.create_contributor("octocat", "x@example.com", "X")
    assert result.error.message == "GitHub contributor with username 'octocat' already exists"


async def test_create_with_unknown_user(contributor_service):
    result = await contributor_service.create_contributor(
        "octocat", "octo@example.com", "Octo", user_id=uuid4(),
    )
    assert result.error.message == "User not found"


async def test_lookups(contributor_service, octocat):
    assert (await contributor_service.get_contributor_by_id(octocat.id)).value == octocat
    by_name = await contributor_service.get_contributor_by_username("octocat")
    assert by_name.value.id == octocat.id
    by_email = await contributor_service.get_contributor_by_email("OCTO@example.com")
    assert by_email.value.id == octocat.id


async def test_lookup_by_shared_email_returns_earliest(contributor_service):
    alice = (await contributor_service.create_contributor(
        "alice", "team@example.com", "Alice",
    )).value
    await contributor_service.create_contributor("bob", "Team@Example.com", "Bob")

    result = await contributor_service.get_contributor_by_email("team@example.com")
    assert result.is_ok()
    assert result.value.id == alice.id


async def test_lookup_missing(contributor_service):
    assert isinstance(
        (await contributor_service.get_contributor_by_id(uuid4())).error, NotFoundError,
    )
    missing = await contributor_service.get_contributor_by_username("ghost")
    assert missing.error.message == "GitHub contributor with username 'ghost' not found"
    blank = await contributor_service.get_contributor_by_username("  ")
    assert isinstance(blank.error, ValidationError)


async def test_update_current_info_keeps_history(contributor_service, octocat):
    result = await contributor_service.update_current_info(
        octocat.id, username="octo2", email="new@example.com",
    )
    assert result.value.current_username == "octo2"
    assert result.value.current_name == "The Octocat"
    assert result.value.all_known_usernames == ("octocat",)
    assert result.value.all_known_emails == ("octo@example.com",)

    stored = await contributor_service.get_contributor_by_id(octocat.id)
    assert stored.value.all_known_usernames == ("octocat",)


async def test_update_current_info_rejects_taken_username(contributor_service, octocat):
    other = (await contributor_service.create_contributor("hubot", "hu@example.com", "Hu")).value
    result = await contributor_service.update_current_info(other.id, username="octocat")
    assert result.error.message == "GitHub contributor with username 'octocat' already exists"


async def test_list_filters_match_known_aliases(contributor_service, octocat):
    await contributor_service.update_current_info(octocat.id, username="octo2")
    await contributor_service.create_contributor("hubot", "hu@example.com", "Hu")

    by_old_username = await contributor_service.list_contributors(username="octocat")
    assert [c.id for c in by_old_username.value] == [octocat.id]
    by_email = await contributor_service.list_contributors(email="OCTO@example.com")
    assert [c.id for c in by_email.value] == [octocat.id]
    everyone = await contributor_service.list_contributors()
    assert len(everyone.value) == 2
    assert len((await contributor_service.list_contributors(limit=1)).value) == 1


async def test_link_and_unlink(contributor_service, user_service, octocat):
    user = (await user_service.create_user("dev@example.com", "Dev")).value

    linked = await contributor_service.link_to_user(octocat.id, user.id)
    assert linked.value.user_id == user.id
    by_user = await contributor_service.list_contributors(user_id=user.id)
    assert [c.id for c in by_user.value] == [octocat.id]

    unlinked = await contributor_service.unlink_from_user(octocat.id)
    assert unlinked.value.user_id is None


async def test_link_to_unknown_user(contributor_service, octocat):
    result = await contributor_service.link_to_user(octocat.id, uuid4())
    assert result.error.message == "User not found"


async def test_add_known_aliases(contributor_service, octocat):
    result = await contributor_service.add_known_aliases(
        octocat.id, usernames=["octo-old"], emails=["Old@Example.com"],
    )
    assert result.value.all_known_usernames == ("octo-old",)
    assert result.value.all_known_emails == ("old@example.com",)

    bad = await contributor_service.add_known_aliases(octocat.id, emails=["nope"])
    assert bad.error.message == "Invalid email format: nope"


async def test_update_status_and_last_active(contributor_service, octocat):
    inactive = await contributor_service.update_status(octocat.id, "inactive")
    assert inactive.value.status is ContributorStatus.INACTIVE
    invalid = await contributor_service.update_status(octocat.id, "archived")
    assert isinstance(invalid.error, ValidationError)

    when = datetime(2030, 2, 3, 4, 5, tzinfo=timezone.utc)
    active = await contributor_service.update_last_active_date(octocat.id, when)
    assert active.value.last_active_date == when


async def test_mutating_missing_contributor_is_not_found(contributor_service):
    result = await contributor_service.update_status(uuid4(), "inactive")
    assert isinstance(result.error, NotFoundError)


async def test_delete_contributor(contributor_service, octocat):
    assert (await contributor_service.delete_contributor(octocat.id)).is_ok()
    assert isinstance(
        (await contributor_service.get_contributor_by_id(octocat.id)).error, NotFoundError,
    )


# --- store failures (fake repositories) ---------------------------------------------

class _FailingUpdateRepository:
    """Contributor exists, but every write is rejected by the store."""

    def __init__(self, contributor, update_error):
        self.contributor = contributor
        self.update_error = update_error

    async def find_by_id(self, contributor_id):
        return Ok(self.contributor)

    async def find_by_current_username(self, username):
        return Ok(None)

    async def update(self, contributor):
        return Err(self.update_error)


class _KnownUserRepository:
    def __init__(self, user):
        self.user = user

    async def find_by_id(self, user_id):
        return Ok(self.user)


def _service_failing_with(error):
    contributor = GitHubContributor.create(uuid4(), "octocat", "octo@example.com", "Octo")
    user = User.create(uuid4(), "dev@example.com", "Dev")
    service = GitHubContributorService(
        _FailingUpdateRepository(contributor, error), _KnownUserRepository(user),
    )
    return service, contributor, user


async def test_link_rejected_by_user_foreign_key_is_user_not_found():
    service, contributor, user = _service_failing_with(
        IntegrityViolationError(
            "Integrity constraint violated", constraint=ConstraintKind.FOREIGN_KEY,
        ),
    )
    result = await service.link_to_user(contributor.id, user.id)
    assert isinstance(result.error, ValidationError)
    assert result.error.message == "User not found"
    assert result.error.field == "user_id"


async def test_rename_rejected_by_unique_index_is_duplicate():
    service, contributor, _ = _service_failing_with(
        IntegrityViolationError(
            "Integrity constraint violated", constraint=ConstraintKind.UNIQUE,
        ),
    )
    result = await service.update_current_info(contributor.id, username="hubot")
    assert result.error.message == "GitHub contributor with username 'hubot' already exists"


async def test_unclassified_integrity_violation_propagates():
    failure = IntegrityViolationError("Integrity constraint violated")
    service, contributor, user = _service_failing_with(failure)
    result = await service.link_to_user(contributor.id, user.id)
    assert result.error is failure
    assert result.error.http_status == 500
