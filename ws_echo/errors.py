"""Exceptions raised by the relay."""


class RelayError(Exception):
    pass


class BindError(RelayError):
    """A listening port could not be bound (invalid, in use, or privileged)."""

    def __init__(self, port, reason):
        self.port = port
        self.reason = reason
        super().__init__(f'cannot listen on port {port}: {reason}')
