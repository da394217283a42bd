"""Exception hierarchy for the seeding and bootstrap tooling."""


class StorefrontE2EError(Exception):
    """Base class for every error raised by this package."""


class SeederError(StorefrontE2EError):
    """A database operation performed by :class:`DataSeeder` failed.

    The message is tagged with the component and the operation so that a
    failure in one seed step can be told apart from another in the logs.
    """

    component = "DataSeeder"

    def __init__(self, operation: str, cause: BaseException | str) -> None:
        self.operation = operation
        self.cause = cause
        super().__init__(f"[{self.component}] Failed to {operation}: {cause}")


class SeederConnectionError(SeederError):
    """MongoDB is unreachable, or the seeder was used before ``connect()``."""


class NotConnectedError(SeederConnectionError):
    def __init__(self) -> None:
        self.operation = "access database"
        self.cause = "not connected"
        StorefrontE2EError.__init__(
            self, f"[{self.component}] Not connected to MongoDB. Call connect() first."
        )


class BackendError(StorefrontE2EError):
    """The backend could not be reached or returned something unusable."""


class FixtureNotFoundError(LookupError, StorefrontE2EError):
    """A fixture accessor was asked for a key, index or value that does not exist."""
