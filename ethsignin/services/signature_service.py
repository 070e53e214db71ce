from dataclasses import dataclass

from eth_account.messages import defunct_hash_message
from eth_keys import keys
from eth_keys.exceptions import BadSignature, ValidationError
from eth_utils import decode_hex, is_0x_prefixed, is_hex

from ..exceptions import AddressMismatch, MalformedSignature, RecoveryFailed
from ..nonce_store import normalize_address

SIGNATURE_LENGTH = 65  # r (32) + s (32) + v (1)
RECOVERY_ID_OFFSET = 64
# Wallets following the yellow paper encode v as 27/28, recovery wants 0/1
RECOVERY_ID_SHIFT = 27


@dataclass(frozen=True)
class VerificationResult:
    success: bool
    recovered_address: str


def personal_message_hash(message: str) -> bytes:
    """Hash of `message` as signed by `personal_sign` / `eth_sign` (EIP-191 version 0x45)."""
    return bytes(defunct_hash_message(text=message))


def decode_signature(signature_hex: str) -> bytearray:
    """Decodes a 0x-prefixed hex signature into its 65 raw bytes."""
    if not isinstance(signature_hex, str) or not is_0x_prefixed(signature_hex):
        raise MalformedSignature("signature must be a 0x-prefixed hex string")
    if not is_hex(signature_hex):
        raise MalformedSignature("signature is not valid hex")
    try:
        # Whitespace anywhere in the string is rejected
        sig = bytearray(decode_hex(signature_hex))
    except ValueError as e:
        raise MalformedSignature(f"signature is not valid hex: {e}") from e
    if len(sig) != SIGNATURE_LENGTH:
        raise MalformedSignature(
            f"signature must be {SIGNATURE_LENGTH} bytes, got {len(sig)}"
        )
    return sig


def recover_address(msg_hash: bytes, sig: bytearray) -> str:
    """Recovers the checksum address of the key that produced `sig` over `msg_hash`."""
    sig = bytearray(sig)
    # Byte arithmetic: anything other than 27/28 wraps to an invalid recovery id
    sig[RECOVERY_ID_OFFSET] = (sig[RECOVERY_ID_OFFSET] - RECOVERY_ID_SHIFT) % 256
    try:
        signature = keys.Signature(signature_bytes=bytes(sig))
        public_key = signature.recover_public_key_from_msg_hash(msg_hash)
    except (BadSignature, ValidationError, ValueError) as e:
        raise RecoveryFailed(f"failed to recover public key: {e}") from e
    return public_key.to_checksum_address()


def verify_signature(address: str, signature_hex: str, nonce: str) -> VerificationResult:
    """
    Checks that `signature_hex` is a personal_sign signature over `nonce`
    made by the private key controlling `address`.

    Raises MalformedSignature, RecoveryFailed or AddressMismatch.
    """
    sig = decode_signature(signature_hex)
    recovered = recover_address(personal_message_hash(nonce), sig)

    if recovered.lower() != normalize_address(address):
        raise AddressMismatch("failed to verify signature")

    return VerificationResult(success=True, recovered_address=recovered)
