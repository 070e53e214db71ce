from fastapi import status


class SignInError(Exception):
    """Base class for errors raised by the nonce/signature flow."""
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR


class BadRequest(SignInError):
    status_code = status.HTTP_400_BAD_REQUEST


class NonceNotFound(SignInError, KeyError):
    """No outstanding nonce for the address (never issued, consumed or replaced)."""
    status_code = status.HTTP_404_NOT_FOUND

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return Exception.__str__(self)


class RandomSourceError(SignInError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


# --- Verification failures (all reported as 401) ---

class VerificationFailed(SignInError):
    status_code = status.HTTP_401_UNAUTHORIZED


class MalformedSignature(VerificationFailed):
    pass


class RecoveryFailed(VerificationFailed):
    pass


class AddressMismatch(VerificationFailed):
    pass
