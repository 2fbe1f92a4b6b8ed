import logging

from fastapi import FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware

from .chain import Environment
from .config import Settings
from .deploy import TokenDeployment, deploy_token
from .errors import ExecutionError, TokenError, Unauthorized, UnknownContract
from .models import (
    BalanceResponse, BlacklistRequest, BurnRequest, FlashInfoResponse, MintRequest,
    OutboundRestrictionRequest, Receipt, RevokeRequest, Role, RoleChangeRequest,
    RolesResponse, TierRequest, TokenInfo, TransferCheckResponse, TransferRequest, TxResponse,
)

logger = logging.getLogger(__name__)

settings = Settings.from_env()


def create_deployment(settings: Settings) -> TokenDeployment:
    env = Environment()
    return deploy_token(
        env,
        name=settings.token_name,
        symbol=settings.token_symbol,
        initial_supply=settings.initial_supply,
        reserve=settings.reserve,
        reserve_decimals=settings.reserve_decimals,
        auto_enroll_owner_as_minter=settings.auto_enroll_owner_as_minter,
        auto_enroll_owner_as_whitelister=settings.auto_enroll_owner_as_whitelister,
    )


app = FastAPI(
    title="Wrapped Token Ledger API",
    description="Reserve-backed, role-gated token ledger with flash minting and upgradeable logic",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

deployment = create_deployment(settings)
token = deployment.token


def _http_error(exc: Exception) -> HTTPException:
    if isinstance(exc, Unauthorized):
        code = status.HTTP_403_FORBIDDEN
    elif isinstance(exc, UnknownContract):
        code = status.HTTP_404_NOT_FOUND
    else:
        code = status.HTTP_400_BAD_REQUEST
    error_code = getattr(exc, "code", type(exc).__name__)
    return HTTPException(status_code=code, detail={"code": error_code, "reason": str(exc)})


def _tx_response(receipt: Receipt, message: str) -> TxResponse:
    return TxResponse(method=receipt.method, result=receipt.result, events=receipt.events, message=message)


@app.get("/health", tags=["System"])
def health_check():
    return {"status": "healthy", "service": "wrapped-token-ledger"}


@app.get("/token", response_model=TokenInfo, tags=["Token"])
def get_token_info() -> TokenInfo:
    return TokenInfo(
        address=token.address,
        logic_address=token.get_logic_address(),
        name=token.name(),
        symbol=token.symbol(),
        decimals=token.decimals(),
        total_supply=token.total_supply(),
        reserve=token.reserve(),
        oracle_address=token.oracle_address(),
    )


@app.get("/accounts/{address}/balance", response_model=BalanceResponse, tags=["Accounts"])
def get_balance(address: str) -> BalanceResponse:
    return BalanceResponse(address=address, balance=token.balance_of(address))


@app.get("/accounts/{address}/roles", response_model=RolesResponse, tags=["Accounts"])
def get_roles(address: str) -> RolesResponse:
    return RolesResponse(address=address, roles=token.roles_of(address))


@app.post("/token/mint", response_model=TxResponse, tags=["Token"])
def mint(request: MintRequest) -> TxResponse:
    try:
        receipt = token.mint(request.to, request.amount, sender=request.sender)
    except (TokenError, ExecutionError) as e:
        raise _http_error(e)
    return _tx_response(receipt, "Tokens minted successfully")


@app.post("/token/burn", response_model=TxResponse, tags=["Token"])
def burn(request: BurnRequest) -> TxResponse:
    try:
        receipt = token.burn(request.amount, sender=request.sender)
    except (TokenError, ExecutionError) as e:
        raise _http_error(e)
    return _tx_response(receipt, "Tokens burned successfully")


@app.post("/token/transfer", response_model=TxResponse, tags=["Token"])
def transfer(request: TransferRequest) -> TxResponse:
    try:
        receipt = token.transfer(request.to, request.amount, sender=request.sender)
    except (TokenError, ExecutionError) as e:
        raise _http_error(e)
    return _tx_response(receipt, "Transfer completed")


@app.post("/token/revoke", response_model=TxResponse, tags=["Token"])
def revoke(request: RevokeRequest) -> TxResponse:
    try:
        receipt = token.revoke_to_address(
            request.from_address, request.to, request.amount, sender=request.sender
        )
    except (TokenError, ExecutionError) as e:
        raise _http_error(e)
    return _tx_response(receipt, "Tokens revoked successfully")


@app.post("/roles/{role}/add", response_model=TxResponse, tags=["Roles"])
def add_role(role: Role, request: RoleChangeRequest) -> TxResponse:
    try:
        receipt = token.add_role(role, request.account, sender=request.sender)
    except (TokenError, ExecutionError) as e:
        raise _http_error(e)
    return _tx_response(receipt, f"{role.value} role granted")


@app.post("/roles/{role}/remove", response_model=TxResponse, tags=["Roles"])
def remove_role(role: Role, request: RoleChangeRequest) -> TxResponse:
    try:
        receipt = token.remove_role(role, request.account, sender=request.sender)
    except (TokenError, ExecutionError) as e:
        raise _http_error(e)
    return _tx_response(receipt, f"{role.value} role removed")


@app.post("/gate/tier", response_model=TxResponse, tags=["Transfer Gate"])
def set_tier(request: TierRequest) -> TxResponse:
    try:
        receipt = token.set_tier(request.account, request.tier, sender=request.sender)
    except (TokenError, ExecutionError) as e:
        raise _http_error(e)
    return _tx_response(receipt, "Whitelist tier updated")


@app.post("/gate/outbound", response_model=TxResponse, tags=["Transfer Gate"])
def set_outbound_restriction(request: OutboundRestrictionRequest) -> TxResponse:
    try:
        receipt = token.set_outbound_restriction(
            request.from_tier, request.to_tier, request.enabled, sender=request.sender
        )
    except (TokenError, ExecutionError) as e:
        raise _http_error(e)
    return _tx_response(receipt, "Outbound restriction updated")


@app.post("/gate/blacklist", response_model=TxResponse, tags=["Transfer Gate"])
def set_blacklisted(request: BlacklistRequest) -> TxResponse:
    try:
        receipt = token.set_blacklisted(request.account, request.blacklisted, sender=request.sender)
    except (TokenError, ExecutionError) as e:
        raise _http_error(e)
    return _tx_response(receipt, "Blacklist updated")


@app.get("/gate/check", response_model=TransferCheckResponse, tags=["Transfer Gate"])
def check_transfer(sender: str, recipient: str, amount: int = 0) -> TransferCheckResponse:
    code = token.check_transfer(sender, recipient, amount)
    return TransferCheckResponse(code=int(code), message=code.message, allowed=code.allowed)


@app.get("/flash/max", response_model=FlashInfoResponse, tags=["Flash Loans"])
def max_flash_loan(token_address: str) -> FlashInfoResponse:
    return FlashInfoResponse(token=token_address, value=token.max_flash_loan(token_address))


@app.get("/flash/fee", response_model=FlashInfoResponse, tags=["Flash Loans"])
def flash_fee(token_address: str, amount: int) -> FlashInfoResponse:
    try:
        fee = token.flash_fee(token_address, amount)
    except TokenError as e:
        raise _http_error(e)
    return FlashInfoResponse(token=token_address, value=fee)


if __name__ == "__main__":
    import uvicorn
    logging.basicConfig(level=settings.log_level.upper())
    uvicorn.run(app, host="0.0.0.0", port=8000)
