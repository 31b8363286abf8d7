"""Error taxonomy for the files API.

Services raise these; ``files_manager.main`` renders every one of them as
``{"error": <message>}`` with the matching status code.
"""


class FilesManagerError(Exception):
    """Base for all errors that map onto an HTTP response."""
    status_code = 500
    message = "Internal error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class Unauthorized(FilesManagerError):
    status_code = 401
    message = "Unauthorized"


class ValidationError(FilesManagerError):
    """A required upload field is missing or malformed."""
    status_code = 400
    message = "Invalid request"


class MissingName(ValidationError):
    message = "Missing name"


class MissingType(ValidationError):
    message = "Missing type"


class MissingData(ValidationError):
    message = "Missing data"


class InvalidData(ValidationError):
    message = "Invalid data"


class ParentInvalid(FilesManagerError):
    """parentId does not reference an owned folder."""
    status_code = 400
    message = "Parent not found"


class ParentNotFound(ParentInvalid):
    message = "Parent not found"


class ParentNotFolder(ParentInvalid):
    message = "Parent is not a folder"


class NotFound(FilesManagerError):
    """Absent, or present but deliberately not disclosed to this caller."""
    status_code = 404
    message = "Not found"


class NoContentForFolder(FilesManagerError):
    status_code = 400
    message = "A folder doesn't have content"


class StorageError(FilesManagerError):
    """The metadata store failed before a response could be built."""
    status_code = 500
    message = "Internal error"
