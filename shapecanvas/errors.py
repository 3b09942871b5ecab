# shapecanvas/errors.py
"""Exceptions raised by the canvas model, the serializer and the store."""


class ShapeCanvasError(Exception):
    """Base class of every error raised by shapecanvas."""


class UnknownKindError(ShapeCanvasError, KeyError):
    """Aucun gabarit ne correspond au type de forme demandé."""

    def __init__(self, kind):
        super().__init__(kind)
        self.kind = kind

    def __str__(self):
        return f"unknown shape kind: {self.kind!r}"


class DuplicateIdError(ShapeCanvasError, ValueError):
    """A shape id is already present in the repository."""

    def __init__(self, shape_id):
        super().__init__(shape_id)
        self.shape_id = shape_id

    def __str__(self):
        return f"duplicate shape id: {self.shape_id!r}"


class InvalidFormatError(ShapeCanvasError, ValueError):
    """Document importé ou reçu du serveur mal formé."""


class NetworkError(ShapeCanvasError):
    """The painting store is unreachable or answered with an error status."""

    def __init__(self, message, status=None):
        super().__init__(message)
        self.status = status


class NotFoundError(ShapeCanvasError):
    """Peinture ou utilisateur absent du serveur."""
