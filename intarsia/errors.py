"""Exceptions raised by intarsia."""


class IntarsiaError(Exception):
    """Base exception for all intarsia errors."""

    pass


class InvalidDimensions(IntarsiaError, ValueError):
    """Grid width/height is zero, negative or larger than the image."""

    pass


class PaletteTooSmall(IntarsiaError, ValueError):
    """Fewer palette colours are available than were requested."""

    pass


class CodecFailure(IntarsiaError):
    """An image could not be decoded or encoded."""

    pass


class RenderFailure(IntarsiaError):
    """The axis annotation stage failed."""

    pass


class ProjectExists(IntarsiaError):
    """A project with this name exists already."""

    pass


class ProjectNotFound(IntarsiaError):
    """The project does not exist yet."""

    pass


class InvalidProjectPath(IntarsiaError):
    """The project name or storage root cannot be used as a path."""

    pass


class EmptyImage(IntarsiaError):
    """The project holds no image of the requested type."""

    pass


class OpenFailure(IntarsiaError):
    """The OS image viewer could not be started."""

    pass


class StorageFailure(IntarsiaError):
    """A project directory could not be created or removed."""

    pass
