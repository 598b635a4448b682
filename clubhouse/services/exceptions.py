class ServiceError(Exception):
    """Error raised by the service layer and mapped to an HTTP response."""

    status_code = 400
    kind = "error"

    def __init__(self, message: str, status_code: int | None = None, kind: str | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        if kind is not None:
            self.kind = kind


class ValidationError(ServiceError):
    status_code = 400
    kind = "validation"


class AuthError(ServiceError):
    status_code = 401
    kind = "unauthorized"


class NotFoundError(ServiceError):
    status_code = 404
    kind = "not_found"


class ConflictError(ServiceError):
    status_code = 409
    kind = "conflict"


class AlreadyConfirmedError(ConflictError):
    kind = "already_confirmed"


class AlreadyUnlockedError(ConflictError):
    kind = "already_unlocked"


class BusinessRuleError(ServiceError):
    status_code = 400
    kind = "business_rule"


class InsufficientPointsError(BusinessRuleError):
    kind = "insufficient_points"

    def __init__(self, message: str = "Insufficient points"):
        super().__init__(message)


class StatAtMaxError(BusinessRuleError):
    kind = "stat_at_max"

    def __init__(self, message: str = "Stat already at maximum"):
        super().__init__(message)


class UpstreamError(ServiceError):
    status_code = 502
    kind = "upstream"
