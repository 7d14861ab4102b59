"""
Error taxonomy for the answering cascade and knowledge administration.
"""


class ChavisError(Exception):
    """Base class for all knowledge desk errors."""


class ValidationError(ChavisError):
    """Malformed administration or question input."""


class NotFoundError(ChavisError):
    """Administration operation on an id that does not exist."""

    def __init__(self, kind: str, item_id: str):
        self.kind = kind
        self.item_id = item_id
        super().__init__(f"{kind} '{item_id}' not found")


class UpstreamRetrievalFailure(ChavisError):
    """Vector index query failed. Recovered locally as an empty result set."""


class UpstreamGenerationFailure(ChavisError):
    """Text generation call failed. Fatal to the request."""


class ProjectionSyncFailure(ChavisError):
    """Vector index add/update/delete failed during an administration write."""

    def __init__(self, operation: str, document_id: str, cause: Exception = None):
        self.operation = operation
        self.document_id = document_id
        self.cause = cause
        message = f"vector {operation} failed for '{document_id}'"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)
