"""Tests for the ogla command-line interface."""

from unittest.mock import AsyncMock, Mock, patch

from typer.testing import CliRunner

from ogla.presentation.cli.app import app
from ogla_identity.exceptions import ConflictError, ValidationError
from tests.shared.fixtures.factories import TestUserFactory

runner = CliRunner()

ADMIN_ARGS = [
    "users",
    "create-super-admin",
    "--email",
    "owner@ogla.example.com",
    "--first-name",
    "Ama",
    "--last-name",
    "Owusu",
    "--password",
    "admin-pass",
]


class TestSecretsGenerate:
    def test_prints_both_secrets(self):
        result = runner.invoke(app, ["secrets", "generate"])

        assert result.exit_code == 0
        assert "JWT_SECRET_KEY" in result.output
        assert "POSTGRES_PASSWORD" in result.output


class TestCreateSuperAdmin:
    def setup_method(self):
        self.settings_patcher = patch(
            "ogla.presentation.cli.app.get_settings",
            return_value=Mock(),
        )
        self.settings_patcher.start()

    def teardown_method(self):
        self.settings_patcher.stop()

    def test_success(self):
        admin = TestUserFactory.super_admin(email="owner@ogla.example.com")
        with patch(
            "ogla.presentation.cli.app._create_super_admin",
            new=AsyncMock(return_value=admin),
        ) as create:
            result = runner.invoke(app, ADMIN_ARGS)

        assert result.exit_code == 0, result.output
        assert "owner@ogla.example.com" in result.output
        assert "Ama Owusu" in result.output
        data = create.call_args[0][1]
        assert data.company_name == "Ogla Shea Butter & General Trading"
        assert data.company_role == "Owner/CEO"

    def test_validation_errors_are_listed(self):
        error = ValidationError(
            errors=[{"field": "password", "message": "Too short"}],
        )
        with patch(
            "ogla.presentation.cli.app._create_super_admin",
            new=AsyncMock(side_effect=error),
        ):
            result = runner.invoke(app, ADMIN_ARGS)

        assert result.exit_code == 1
        assert "password: Too short" in result.output

    def test_existing_email(self):
        with patch(
            "ogla.presentation.cli.app._create_super_admin",
            new=AsyncMock(side_effect=ConflictError()),
        ):
            result = runner.invoke(app, ADMIN_ARGS)

        assert result.exit_code == 1
        assert "already exists" in result.output
