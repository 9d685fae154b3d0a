"""
Typed failures raised by the match engine and player registry.
"""


class CreaseError(Exception):
    """Base class for recoverable engine errors"""


class PlayerNotFoundError(CreaseError):
    def __init__(self, player_id: int):
        self.player_id = player_id
        super().__init__(f"Could not find player with ID {player_id}")


class DuplicatePlayerIdError(CreaseError):
    def __init__(self, player_id: int):
        self.player_id = player_id
        super().__init__(f"Duplicate player ID: {player_id}")


class MatchCompleteError(CreaseError):
    def __init__(self, detail: str = "Match is complete"):
        super().__init__(detail)


class MissingDataError(CreaseError):
    def __init__(self, what: str):
        self.what = what
        super().__init__(f"Object not available: {what}")
