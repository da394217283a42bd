from datetime import datetime

from pydantic import BaseModel, Field, model_validator


class FixtureUser(BaseModel):
    """An account the suite logs in as, mirroring the backend ``User`` document."""

    id: str
    email: str
    # Plaintext; the seeder stores a pre-computed hash of the shared test password.
    password: str
    first_name: str
    last_name: str | None = None
    authorities: list[str] = Field(default_factory=lambda: ["ROLE_USER"])
    activated: bool = True
    activation_key: str | None = None
    reset_key: str | None = None
    # Reset keys are honoured for 24 hours after this instant.
    reset_date: datetime | None = None

    @model_validator(mode="after")
    def keys_are_exclusive(self) -> "FixtureUser":
        if self.activation_key and self.reset_key:
            raise ValueError("A user may carry an activation key or a reset key, not both")
        return self
