import pytest

from cliforge.errors import AppError, PostSetupError, SetupError, ValidationError


def test_validation_error_shows_message_only():
    err = ValidationError("project name cannot be empty")
    assert str(err) == "project name cannot be empty"
    assert err.message == "project name cannot be empty"


def test_setup_error_has_prefix():
    err = SetupError("boom")
    assert str(err) == "setup failed: boom"
    assert err.message == "boom"


def test_post_setup_error_has_prefix():
    assert str(PostSetupError("git")) == "post-setup command failed: git"


@pytest.mark.parametrize("cls", [ValidationError, SetupError, PostSetupError])
def test_all_errors_are_app_errors(cls):
    err = cls("x")
    assert isinstance(err, AppError)
    assert err.message == "x"
    assert str(err).endswith("x")