"""League exceptions raised across domain, repository and API layers."""


class LeagueError(Exception):
    """Base class for league errors."""


class InstallationNotFound(LeagueError):
    """No installation is registered for the given OAuth client id."""

    def __init__(self, oauth_id: str) -> None:
        self.oauth_id = oauth_id
        super().__init__(f"Installation {oauth_id} not found")


class InvalidMatch(LeagueError, ValueError):
    """A match record cannot be rated or saved as given."""

    def __init__(self, match_id: str | None, reason: str) -> None:
        self.match_id = match_id
        label = "match" if match_id is None else f"match_id={match_id}"
        super().__init__(f"{label} {reason}")
