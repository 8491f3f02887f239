"""
Tests for pagination math and the response envelope.
"""

from school_admin.core.pagination import PageParams
from school_admin.core.responses import describe_validation_errors
from school_admin.core.schemas import ApiResponse


class TestPageParams:
    def test_offset(self):
        assert PageParams(page=1, limit=10).offset == 0
        assert PageParams(page=3, limit=25).offset == 50

    def test_total_pages_rounds_up(self):
        pagination = PageParams(page=2, limit=10).to_pagination(21)

        assert pagination.current_page == 2
        assert pagination.total_pages == 3
        assert pagination.total_count == 21
        assert pagination.page_size == 10

    def test_exact_multiple(self):
        assert PageParams(limit=5).to_pagination(20).total_pages == 4

    def test_empty_result(self):
        assert PageParams().to_pagination(0).total_pages == 0

    def test_camel_case_on_the_wire(self):
        dumped = PageParams(limit=10).to_pagination(11).model_dump(by_alias=True)
        assert dumped == {"currentPage": 1, "totalPages": 2, "totalCount": 11, "pageSize": 10}


class TestEnvelope:
    def test_success_envelope(self):
        body = ApiResponse[dict](message="ok", data={"a": 1}).model_dump(by_alias=True)
        assert body == {"status": "success", "message": "ok", "data": {"a": 1}}

    def test_list_envelope_keeps_pagination(self):
        pagination = PageParams(limit=10).to_pagination(11)
        body = ApiResponse[list[int]](message="ok", data=[1], pagination=pagination).model_dump(
            by_alias=True
        )
        assert body["pagination"]["totalPages"] == 2

    def test_missing_fields_message(self):
        errors = [
            {"loc": ["body", "name"], "msg": "Field required", "type": "missing"},
            {"loc": ["body", "schoolId"], "msg": "Field required", "type": "missing"},
        ]
        assert describe_validation_errors(errors) == "Missing required fields: name, schoolId."

    def test_value_error_message(self):
        errors = [
            {
                "loc": ["body"],
                "msg": "Value error, Username or email and password are required.",
                "type": "value_error",
            }
        ]
        assert describe_validation_errors(errors) == (
            "Username or email and password are required."
        )

    def test_typed_error_names_field(self):
        errors = [
            {
                "loc": ["body", "capacity"],
                "msg": "Input should be greater than or equal to 1",
                "type": "greater_than_equal",
            }
        ]
        assert describe_validation_errors(errors) == (
            "Invalid value for capacity: Input should be greater than or equal to 1"
        )
