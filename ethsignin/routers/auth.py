from fastapi import APIRouter, Depends, HTTPException, status
import logging

from ..models.auth_models import NonceRequest, NonceResponse, VerifyRequest, VerifyResponse
from ..nonce_store import NonceStore, get_nonce_store
from ..services.ens_service import NameResolver, build_name_resolver
from ..services.nonce_service import generate_nonce
from ..services.signature_service import verify_signature
from ..exceptions import NonceNotFound, RandomSourceError, VerificationFailed
from .. import config

router = APIRouter(
    prefix="/api",
    tags=["Authentication (Sign-In with Ethereum)"],
)

logger = logging.getLogger(__name__)

_PLAIN_TEXT_ERROR = {"content": {"text/plain": {}}}

# Shared, read-only; safe to use from every request thread
_name_resolver = build_name_resolver(config.ETH_RPC_URL)


def get_name_resolver() -> NameResolver:
    """FastAPI dependency returning the configured (possibly no-op) ENS resolver."""
    return _name_resolver


# --- API Endpoints ---
@router.post(
    "/nonce",
    response_model=NonceResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {"description": "Malformed request body", **_PLAIN_TEXT_ERROR},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"description": "Random source failure", **_PLAIN_TEXT_ERROR},
    },
)
def issue_nonce(nonce_request: NonceRequest, store: NonceStore = Depends(get_nonce_store)):
    """
    Issues a fresh nonce for the address. Any nonce previously issued for
    the same address is replaced and can no longer be used.
    """
    try:
        nonce = generate_nonce()
    except RandomSourceError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))

    store.set(nonce_request.address, nonce)
    logger.info(f"Issued nonce for address: {nonce_request.address}")
    return NonceResponse(nonce=nonce)


@router.post(
    "/verify-signature",
    response_model=VerifyResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {"description": "Malformed request body", **_PLAIN_TEXT_ERROR},
        status.HTTP_401_UNAUTHORIZED: {"description": "Signature verification failed", **_PLAIN_TEXT_ERROR},
        status.HTTP_404_NOT_FOUND: {"description": "No outstanding nonce for address", **_PLAIN_TEXT_ERROR},
    },
)
def verify_nonce_signature(
    verify_request: VerifyRequest,
    store: NonceStore = Depends(get_nonce_store),
    name_resolver: NameResolver = Depends(get_name_resolver),
):
    """
    Verifies that the signature was made over the outstanding nonce by the
    key controlling the address, then consumes the nonce.

    - **address**: The address the nonce was issued for.
    - **signature**: The hex-encoded personal_sign signature of the nonce.
    """
    address = verify_request.address
    try:
        nonce = store.get(address)
        result = verify_signature(address, verify_request.signature, nonce)
        # Only the exact nonce that was verified may be consumed
        if not store.remove(address, nonce):
            raise NonceNotFound(f"nonce for address {address} was already used or replaced")
    except NonceNotFound as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    except VerificationFailed as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))

    logger.info(f"Signature verified for {result.recovered_address}, nonce consumed")

    return VerifyResponse(ens=name_resolver.reverse_resolve(address))
