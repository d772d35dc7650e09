"""Service-level exceptions."""


class ProfileNotFoundError(LookupError):
    """Raised when a user has not completed onboarding."""

    def __init__(self, user_id: str) -> None:
        super().__init__(f"No profile for user {user_id}")
        self.user_id = user_id


class VisionAnalysisError(RuntimeError):
    """Raised when the vision model output cannot be used."""
