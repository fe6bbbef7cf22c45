"""Errors raised when a game or duel cannot start."""


class GameError(Exception):
    """Base error; the message is shown to the member who triggered it."""
    default_message = "❌ Something went wrong with this game."

    def __init__(self, message: str = None):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return self.args[0]


class GameInProgressError(GameError):
    default_message = "❌ A game is already in progress!"


class GameVetoedError(GameInProgressError):
    """A ``newGame`` listener refused the game."""


class MemberOnCooldownError(GameError):
    default_message = "⏳ You must wait before requesting another duel!"


class UnknownUserError(GameError):
    default_message = "❌ You can't play with this member!"


class BotInvitedError(GameError):
    default_message = "❌ You can't play against a bot account!"
