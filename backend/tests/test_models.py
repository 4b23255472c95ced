"""
ProjectHub Backend — Model Tests
==================================

What we test:
    ✅ ActiveToken validity window (boundary excluded)
    ✅ Naive datetimes treated as UTC
    ✅ Response schemas read ORM rows through their aliases
"""

from datetime import datetime, timedelta, timezone

from projecthub.models.project import ProjectFile
from projecthub.models.user import ActiveToken, User, as_utc
from projecthub.schemas.project import ProjectFileResponse
from projecthub.schemas.user import TokenResponse, UserResponse

T0 = datetime(2024, 10, 28, 12, 0, 0, tzinfo=timezone.utc)


class TestActiveTokenValidity:

    def make_token(self, ttl=3600, created=T0):
        return ActiveToken(id=1, user_id=1, ttl_seconds=ttl, creation_date=created)

    def test_valid_inside_window(self):
        assert self.make_token().is_valid(now=T0 + timedelta(seconds=3599))

    def test_invalid_at_exact_ttl(self):
        assert not self.make_token().is_valid(now=T0 + timedelta(seconds=3600))

    def test_invalid_after_ttl(self):
        assert not self.make_token(ttl=60).is_valid(now=T0 + timedelta(minutes=5))

    def test_naive_creation_date_is_utc(self):
        token = self.make_token(ttl=60, created=T0.replace(tzinfo=None))
        assert token.is_valid(now=T0 + timedelta(seconds=30))

    def test_as_utc_keeps_aware_values(self):
        assert as_utc(T0) is T0


class TestResponseSchemas:

    def test_user_response_from_orm(self):
        user = User(
            id=7,
            sub="google-oauth2|7",
            email="u@example.com",
            name="U",
            picture="https://example.com/u.jpg",
            last_login=T0,
        )

        body = UserResponse.model_validate(user).model_dump(mode="json")

        assert body["UserID"] == 7
        assert body["lastLogin"].startswith("2024-10-28T12:00:00")

    def test_token_response_from_orm(self):
        token = ActiveToken(id=3, user_id=7, ttl_seconds=120, creation_date=T0)

        body = TokenResponse.model_validate(token).model_dump()

        assert body == {"TokenID": 3, "UserID": 7, "TTL": 120, "CreationDate": T0}

    def test_root_file_has_null_parent(self):
        node = ProjectFile(
            id=1,
            project_id=2,
            parent_directory_id=None,
            name="README.md",
            is_directory=False,
            creation_date=T0,
        )

        body = ProjectFileResponse.model_validate(node).model_dump()

        assert body["ParentDirectory"] is None
        assert body["FileName"] == "README.md"
        assert body["IsDirectory"] is False

    def test_json_round_trip(self):
        user = User(
            id=7,
            sub="google-oauth2|7",
            email="u@example.com",
            name="U",
            picture="https://example.com/u.jpg",
            last_login=T0,
        )
        original = UserResponse.model_validate(user)

        rehydrated = UserResponse.model_validate_json(original.model_dump_json())

        assert rehydrated == original
