"""Authorization error taxonomy."""

from rest_framework import exceptions, status

MISSING_PERMISSION = "missing permission"
NOT_OWNER = "not owner"
IDENTITY_UNRESOLVED = "identity unresolved"


class StoreUnavailable(Exception):
    """Raised when an identity or ownership read fails for infrastructure reasons.

    Retryable. Callers own the retry policy; this is never an authorization
    verdict.
    """


class AuthorizationDenied(exceptions.PermissionDenied):
    """Expected, user-facing denial carrying the actor's role and the reason."""

    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, role, reason: str, resource=None, action=None):
        self.role = str(role) if role is not None else None
        self.reason = reason
        self.resource = str(resource) if resource is not None else None
        self.action = str(action) if action is not None else None
        super().__init__(detail=self._build_message(), code=reason.replace(" ", "_"))

    def _build_message(self) -> str:
        what = f"{self.action} {self.resource}" if self.action and self.resource else "perform this action"
        if self.reason == NOT_OWNER:
            if self.action and self.resource:
                return f"You can only {self.action} your own {self.resource}."
            return "You can only modify resources you own."
        if self.reason == IDENTITY_UNRESOLVED:
            return "Unable to verify user identity."
        return f"You do not have permission to {what}. Your role: {self.role}."


__all__ = [
    "AuthorizationDenied",
    "IDENTITY_UNRESOLVED",
    "MISSING_PERMISSION",
    "NOT_OWNER",
    "StoreUnavailable",
]
