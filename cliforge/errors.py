"""Error types raised by the project scaffolder."""


class AppError(Exception):
    """Base class for every error the scaffolder reports to the user."""

    prefix = ""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.prefix}{self.message}"


class ValidationError(AppError):
    """User input was rejected before anything was written."""


class SetupError(AppError):
    """Rendering the template into the output directory failed."""

    prefix = "setup failed: "


class PostSetupError(AppError):
    """A command run after rendering failed."""

    prefix = "post-setup command failed: "