"""
Error types raised by the rockfall package.
"""


class RockfallError(Exception):
    """Base class for all rockfall errors"""


class InvalidInputError(RockfallError, ValueError):
    """A sensor reading is missing a field, is not numeric, or is out of range"""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid reading field '{field}': {reason}")


class UnknownMineError(RockfallError, KeyError):
    """Mine id is not in the catalogue"""

    def __init__(self, mine_id: str):
        self.mine_id = mine_id
        super().__init__(mine_id)

    def __str__(self):
        return f"Unknown mine: {self.mine_id}"


class UnknownEventError(RockfallError, TypeError):
    """Dashboard transition received an event it does not handle"""


class APIClientError(RockfallError):
    """Request to the rockfall REST API failed"""
