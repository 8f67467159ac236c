class RoomError(Exception):
    """A request against a room that must be reported back to the caller."""

    message = 'Room request failed.'

    def __init__(self, message=None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class RoomNotFound(RoomError):
    message = 'Room not found. Check the code and try again.'


class RoomFull(RoomError):
    message = 'Room is full.'
