class ServiceError(Exception):
    """Base class for failures surfaced to API clients.

    ``error`` is the kind name clients can branch on, ``status_code`` the
    HTTP status it is rendered with.
    """

    status_code = 500
    error = "Internal"
    message = "Server error"

    def __init__(self, message: str = None):
        self.message = message or self.message
        super().__init__(self.message)


class Internal(ServiceError):
    pass


class InvalidInput(ServiceError):
    status_code = 400
    error = "InvalidInput"
    message = "Invalid input"


class Unauthenticated(ServiceError):
    status_code = 401
    error = "Unauthenticated"
    message = "No token, authorization denied"


class Forbidden(ServiceError):
    status_code = 403
    error = "Forbidden"
    message = "User not authorized"


class NotFound(ServiceError):
    status_code = 404
    error = "NotFound"
    message = "Not found"


class InvalidCredentials(ServiceError):
    status_code = 400
    error = "InvalidCredentials"
    message = "Invalid credentials"


class Conflict(ServiceError):
    status_code = 400
    error = "Conflict"
    message = "Conflict"


class AlreadyExists(Conflict):
    error = "AlreadyExists"
    message = "User already exists, Please Login"


class AlreadyLiked(Conflict):
    error = "AlreadyLiked"
    message = "Post already liked"


class NotYetLiked(Conflict):
    error = "NotYetLiked"
    message = "Post has not yet been liked"
