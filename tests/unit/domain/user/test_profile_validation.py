"""Unit tests for registration and profile input validation."""

import pytest

from ogla_identity.domain.user import (
    CompanyRole,
    CompanyType,
    Email,
    InvalidEmailError,
    InvalidProfileError,
    ProfileUpdate,
)
from tests.shared.fixtures.factories import TestUserFactory


def _fields(exc_info) -> set[str]:
    return {error.field for error in exc_info.value.errors}


class TestEmail:
    def test_email_is_normalized(self):
        assert Email("  Alice@Example.COM ").value == "alice@example.com"

    @pytest.mark.parametrize("value", ["", "alice", "alice@example", "@example.com"])
    def test_invalid_email_raises(self, value):
        with pytest.raises(InvalidEmailError):
            Email(value)


class TestRegistrationData:
    def test_valid_data_is_normalized(self):
        data = TestUserFactory.registration_data(
            first_name="  Alice ",
            email="ALICE@Example.com",
        ).validated()

        assert data.first_name == "Alice"
        assert data.email == "alice@example.com"
        assert data.company_type is CompanyType.FOOD_BEVERAGE
        assert data.company_role is CompanyRole.OWNER

    def test_phone_is_optional(self):
        data = TestUserFactory.registration_data(phone=None).validated()

        assert data.phone is None

    def test_all_violations_are_reported_together(self):
        data = TestUserFactory.registration_data(
            first_name="A",
            email="not-an-email",
            password="abc",
            company_type="Shea Butter",
        )

        with pytest.raises(InvalidProfileError) as exc_info:
            data.validated()

        assert _fields(exc_info) == {
            "first_name",
            "email",
            "password",
            "company_type",
        }

    @pytest.mark.parametrize(
        "phone",
        ["0204543372", "+0204543372", "+12", "+233 20 454 3372"],
    )
    def test_phone_must_be_international(self, phone):
        with pytest.raises(InvalidProfileError) as exc_info:
            TestUserFactory.registration_data(phone=phone).validated()

        assert _fields(exc_info) == {"phone"}

    def test_shortest_valid_phone(self):
        data = TestUserFactory.registration_data(phone="+2332045").validated()

        assert data.phone == "+2332045"

    def test_name_length_limits(self):
        with pytest.raises(InvalidProfileError) as exc_info:
            TestUserFactory.registration_data(
                last_name="x" * 51,
                company_name="y" * 101,
            ).validated()

        assert _fields(exc_info) == {"last_name", "company_name"}

    def test_unknown_company_role_is_rejected(self):
        with pytest.raises(InvalidProfileError) as exc_info:
            TestUserFactory.registration_data(company_role="Chief Taster").validated()

        assert exc_info.value.errors[0].message == "Valid company role is required"


class TestProfileUpdate:
    def test_empty_update(self):
        assert ProfileUpdate().is_empty()

    def test_provided_fields(self):
        update = ProfileUpdate(first_name="Alicia", phone="")

        assert update.provided_fields() == ["first_name", "phone"]

    def test_empty_phone_stays_provided(self):
        update = ProfileUpdate(phone="").validated()

        assert update.provided_fields() == ["phone"]
        assert update.phone == ""

    def test_invalid_fields_are_reported(self):
        with pytest.raises(InvalidProfileError) as exc_info:
            ProfileUpdate(first_name="A", phone="12345").validated()

        assert _fields(exc_info) == {"first_name", "phone"}

    def test_address_must_be_an_object(self):
        with pytest.raises(InvalidProfileError) as exc_info:
            ProfileUpdate(address="Tamale").validated()

        assert _fields(exc_info) == {"address"}
