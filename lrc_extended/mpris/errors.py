class ClockError(RuntimeError):
    pass


class NoPlayersFound(ClockError):
    pass


class PlayerUnavailable(ClockError):
    pass
