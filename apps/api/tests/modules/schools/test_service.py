"""
Unit tests for the school service layer.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from pydantic import ValidationError as SchemaValidationError

from school_admin.core.errors import ConflictError, NotFoundError, ValidationError
from school_admin.core.pagination import PageParams
from school_admin.modules.schools.models import School
from school_admin.modules.schools.schemas import SchoolCreate, SchoolUpdate
from school_admin.modules.schools.service import (
    DUPLICATE_SCHOOL_MESSAGE,
    create_school,
    delete_school,
    get_school,
    list_schools,
    update_school,
)
from school_admin.modules.shared.models import utc_now
from school_admin.modules.shared.repository import DuplicateRecordError


@pytest.fixture
def sample_school_create():
    return SchoolCreate(
        name="Hilltop Academy",
        address="12 Ridge Road",
        phone="+15550100",
        email="Office@Hilltop.edu",
        established_year=1998,
        website="https://hilltop.edu",
    )


@pytest.fixture
def sample_school():
    now = utc_now()
    return School(
        id="scid-0a1b2c3d4e",
        name="Hilltop Academy",
        address="12 Ridge Road",
        phone="+15550100",
        email="office@hilltop.edu",
        established_year=1998,
        website="https://hilltop.edu",
        additional_info=None,
        created_by="a1b2c3d4e5",
        created_at=now,
        updated_at=now,
    )


class TestSchoolSchemas:
    def test_email_is_lowercased(self, sample_school_create):
        assert sample_school_create.email == "office@hilltop.edu"

    def test_established_year_range(self):
        with pytest.raises(SchemaValidationError):
            SchoolUpdate(established_year=1799)
        with pytest.raises(SchemaValidationError):
            SchoolUpdate(established_year=utc_now().year + 1)
        assert SchoolUpdate(established_year=1800).established_year == 1800

    def test_website_must_be_http_url(self):
        with pytest.raises(SchemaValidationError):
            SchoolUpdate(website="ftp://hilltop.edu")
        assert SchoolUpdate(website="http://hilltop.edu/about").website == "http://hilltop.edu/about"

    @pytest.mark.parametrize("field", ["name", "address", "phone"])
    def test_update_rejects_blank_required_text(self, field):
        with pytest.raises(SchemaValidationError):
            SchoolUpdate.model_validate({field: "   "})

    def test_update_strips_required_text(self):
        update = SchoolUpdate.model_validate({"name": "  Hilltop Academy  "})

        assert update.name == "Hilltop Academy"


class TestCreateSchool:
    """Tests for create_school."""

    @pytest.mark.asyncio
    async def test_create_records_creator(self, mock_db, sample_school_create, sample_school):
        with patch("school_admin.modules.schools.service.SchoolRepository") as mock_repo:
            mock_repo.find_conflicting = AsyncMock(return_value=None)
            mock_repo.create = AsyncMock(return_value=sample_school)

            result = await create_school(mock_db, sample_school_create, created_by="a1b2c3d4e5")

            assert result is sample_school
            kwargs = mock_repo.create.call_args.kwargs
            assert kwargs["created_by"] == "a1b2c3d4e5"
            assert kwargs["email"] == "office@hilltop.edu"
            assert kwargs["established_year"] == 1998

    @pytest.mark.asyncio
    async def test_duplicate_name_or_email(self, mock_db, sample_school_create, sample_school):
        with patch("school_admin.modules.schools.service.SchoolRepository") as mock_repo:
            mock_repo.find_conflicting = AsyncMock(return_value=sample_school)
            mock_repo.create = AsyncMock()

            with pytest.raises(ConflictError) as exc_info:
                await create_school(mock_db, sample_school_create, created_by="a1b2c3d4e5")

            assert exc_info.value.message == DUPLICATE_SCHOOL_MESSAGE
            mock_repo.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_unique_constraint_race(self, mock_db, sample_school_create):
        with patch("school_admin.modules.schools.service.SchoolRepository") as mock_repo:
            mock_repo.find_conflicting = AsyncMock(return_value=None)
            mock_repo.create = AsyncMock(side_effect=DuplicateRecordError("schools"))

            with pytest.raises(ConflictError):
                await create_school(mock_db, sample_school_create, created_by="a1b2c3d4e5")


class TestReadSchools:
    @pytest.mark.asyncio
    async def test_get_missing_school(self, mock_db):
        with patch("school_admin.modules.schools.service.SchoolRepository") as mock_repo:
            mock_repo.get_by_id = AsyncMock(return_value=None)

            with pytest.raises(NotFoundError) as exc_info:
                await get_school(mock_db, "scid-missing")

            assert exc_info.value.message == "No school found with id: scid-missing"

    @pytest.mark.asyncio
    async def test_empty_list_is_not_an_error(self, mock_db):
        with patch("school_admin.modules.schools.service.SchoolRepository") as mock_repo:
            mock_repo.get_page = AsyncMock(return_value=([], 0))

            schools, pagination = await list_schools(mock_db, PageParams())

            assert schools == []
            assert pagination.total_count == 0


class TestUpdateSchool:
    """Tests for update_school."""

    @pytest.mark.asyncio
    async def test_missing_id(self, mock_db):
        with pytest.raises(ValidationError) as exc_info:
            await update_school(mock_db, None, SchoolUpdate(name="New"))

        assert exc_info.value.message == "School ID is required to update a record."

    @pytest.mark.asyncio
    async def test_unknown_fields_are_ignored(self, mock_db):
        data = SchoolUpdate.model_validate({"createdBy": "attacker", "id": "scid-x"})

        with pytest.raises(ValidationError) as exc_info:
            await update_school(mock_db, "scid-0a1b2c3d4e", data)

        assert exc_info.value.message == "No valid fields provided for update."

    @pytest.mark.asyncio
    async def test_not_found(self, mock_db):
        with patch("school_admin.modules.schools.service.SchoolRepository") as mock_repo:
            mock_repo.get_by_id = AsyncMock(return_value=None)

            with pytest.raises(NotFoundError) as exc_info:
                await update_school(mock_db, "scid-missing", SchoolUpdate(phone="1"))

            assert exc_info.value.message == "School not found with the given ID."

    @pytest.mark.asyncio
    async def test_rename_collides_with_other_school(self, mock_db, sample_school):
        with patch("school_admin.modules.schools.service.SchoolRepository") as mock_repo:
            mock_repo.get_by_id = AsyncMock(return_value=sample_school)
            mock_repo.find_conflicting = AsyncMock(return_value=MagicMock(spec=School))
            mock_repo.update = AsyncMock()

            with pytest.raises(ConflictError):
                await update_school(mock_db, sample_school.id, SchoolUpdate(name="Taken"))

            mock_repo.find_conflicting.assert_called_once_with(
                mock_db, name="Taken", email=None, exclude_id=sample_school.id
            )
            mock_repo.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_applies_whitelisted_fields(self, mock_db, sample_school):
        with patch("school_admin.modules.schools.service.SchoolRepository") as mock_repo:
            mock_repo.get_by_id = AsyncMock(return_value=sample_school)
            mock_repo.update = AsyncMock(return_value=sample_school)

            await update_school(
                mock_db,
                sample_school.id,
                SchoolUpdate(phone="+15550199", additional_info="Boarding"),
            )

            mock_repo.update.assert_called_once_with(
                mock_db,
                sample_school,
                {"phone": "+15550199", "additional_info": "Boarding"},
            )


class TestDeleteSchool:
    @pytest.mark.asyncio
    async def test_missing_id(self, mock_db):
        with pytest.raises(ValidationError) as exc_info:
            await delete_school(mock_db, None)

        assert exc_info.value.message == "School ID is required to delete a record."

    @pytest.mark.asyncio
    async def test_returns_deleted_school(self, mock_db, sample_school):
        with patch("school_admin.modules.schools.service.SchoolRepository") as mock_repo:
            mock_repo.get_by_id = AsyncMock(return_value=sample_school)
            mock_repo.delete = AsyncMock()

            result = await delete_school(mock_db, sample_school.id)

            assert result is sample_school
            mock_repo.delete.assert_called_once_with(mock_db, sample_school)
