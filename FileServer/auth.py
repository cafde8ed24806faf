from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from core.storage.exceptions import InvalidUserError

from .dependencies import (
    NotAuthenticated, create_access_token, decode_token, get_auth, get_files, raw_token,
)
from .logutil import get_logger, redacts
from .schemas import LoginRequest, LoginResponse, SuccessResponse

logger = get_logger("fileserver.auth", file_basename="auth")

router = APIRouter()

@router.post("/login", response_model=LoginResponse)
def login(body: LoginRequest, auth=Depends(get_auth), files=Depends(get_files)):
    """
    Accepts JSON in the format of LoginRequest
    """
    row = auth.verify_credentials(body.username, body.password)
    if not row:
        logger.info("auth.login.fail", extra={"user": body.username})
        return JSONResponse(status_code=401, content={"success": False, "message": "Invalid credentials"})

    files.ensure_user_dir(row["username"])
    token = create_access_token(row["username"])
    logger.info("auth.login.ok", extra={"user": row["username"], "tok": redacts(token)})
    return {"success": True, "token": token, "message": "Login successful"}

@router.post("/register", response_model=SuccessResponse)
def register(body: LoginRequest, auth=Depends(get_auth), files=Depends(get_files)):
    try:
        auth.create_user(body.username, body.password)
    except InvalidUserError as e:
        logger.info("auth.register.fail", extra={"user": body.username, "err": str(e)})
        return JSONResponse(status_code=400, content={"error": str(e)})

    try:
        files.ensure_user_dir(body.username)
    except OSError:
        logger.exception("auth.register.mkdir_fail", extra={"user": body.username})
        return JSONResponse(status_code=500, content={"error": "Error creating user directory"})

    logger.info("auth.register.ok", extra={"user": body.username})
    return {"success": True}

@router.post("/logout", response_model=SuccessResponse)
def logout(token: str = Depends(raw_token), auth=Depends(get_auth)):
    """Best-effort: an unknown or expired token still logs out cleanly."""
    if token:
        try:
            payload = decode_token(token)
        except NotAuthenticated:
            payload = {}
        if payload.get("jti"):
            auth.revoke(payload["jti"], payload.get("exp") or 0)
            logger.info("auth.logout.ok", extra={"user": payload.get("sub"), "tok": redacts(token)})
    return {"success": True}
