import logging
from fastapi import APIRouter, HTTPException
from config import settings
from models.schemas import CallBody, CallResult, Credentials
from services.call2fa import Call2FAClient, Call2FAError, normalize_phone_number, place_call

router = APIRouter()
logger = logging.getLogger(__name__)

def configured_credentials() -> Credentials:
    credentials = Credentials(login=settings.CALL2FA_LOGIN, password=settings.CALL2FA_PASSWORD)
    if credentials.is_empty():
        logger.error("CALL2FA_LOGIN or CALL2FA_PASSWORD is not set")
        raise HTTPException(
            status_code=500,
            detail="Call2FA credentials are not configured"
        )
    return credentials

@router.post("/", response_model=CallResult)
def initiate_call(request: CallBody):
    try:
        phone_number = normalize_phone_number(request.phone_number)
    except Call2FAError as e:
        raise HTTPException(status_code=400, detail=str(e))
    result = place_call(
        phone_number,
        configured_credentials(),
        callback_url=request.callback_url or "",
    )
    if not result.success:
        raise HTTPException(
            status_code=502,
            detail=result.error or "Call failed"
        )
    return result

@router.get("/{call_id}")
def call_info(call_id: str):
    credentials = configured_credentials()
    try:
        client = Call2FAClient.from_credentials(credentials)
        return client.info(call_id)
    except Call2FAError as e:
        logger.error(f"Call info for {call_id} failed: {str(e)}")
        raise HTTPException(
            status_code=502,
            detail=f"Call2FA request failed: {str(e)}"
        )
