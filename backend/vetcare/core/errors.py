"""Module: errors.

Domain failures raised by services and repositories. The API layer turns
them into ``{"message": ...}`` bodies; nothing else should catch them.
"""


class VetcareError(Exception):
    default_message = "Request failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class DuplicateEmail(VetcareError):
    default_message = "Email already in use"


class NotFound(VetcareError):
    default_message = "Not found"


class AccountNotFound(NotFound):
    default_message = "Account not found"


class InvalidCredential(VetcareError):
    default_message = "Invalid credentials"


class InvalidCredentialFormat(VetcareError):
    default_message = "Stored credential is not a valid password digest"


class InvalidTimeFormat(VetcareError):
    default_message = "start_time and end_time must use the HH:MM format"


class MalformedInput(VetcareError):
    default_message = "Malformed input"
