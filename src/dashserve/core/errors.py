class ServerStartupError(Exception):
    """Base class for errors that stop the server before or while listening."""


class WorkingDirectoryUnreadableError(ServerStartupError):
    """Raised when the working directory cannot be resolved or listed."""


class EntryFileMissingError(ServerStartupError):
    """Raised when the entry file is absent from the served directory."""


class ListenerBindError(ServerStartupError):
    """Raised when the listening socket cannot be bound or the listener fails."""
