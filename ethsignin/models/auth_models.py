from pydantic import BaseModel, Field

class NonceRequest(BaseModel):
    address: str = Field(..., description="Ethereum address the nonce is issued for.")

class NonceResponse(BaseModel):
    nonce: str = Field(..., description="One-time nonce the wallet must sign with personal_sign.")

class VerifyRequest(BaseModel):
    address: str = Field(..., description="Ethereum address claiming to have signed the nonce.")
    signature: str = Field(..., description="0x-prefixed hex signature (r, s, v with v in 27/28).")

class VerifyResponse(BaseModel):
    ens: str = Field("", description="ENS name of the address, empty if none or resolution is disabled.")
