import logging
import secrets

from ..exceptions import RandomSourceError

logger = logging.getLogger(__name__)

NONCE_LENGTH = 12
NONCE_ALPHABET = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"


def generate_nonce() -> str:
    """
    Generates a random nonce of NONCE_LENGTH letters from NONCE_ALPHABET.

    Each byte from the OS CSPRNG is mapped with `byte % 52`. This is slightly
    biased towards the first letters of the alphabet; kept as-is so nonces
    stay identical in shape to those issued by existing deployments.
    """
    try:
        raw = secrets.token_bytes(NONCE_LENGTH)
    except (OSError, NotImplementedError) as e:
        logger.error(f"Secure random source unavailable: {e}")
        raise RandomSourceError(f"failed to read secure random bytes: {e}") from e

    return "".join(NONCE_ALPHABET[b % len(NONCE_ALPHABET)] for b in raw)
