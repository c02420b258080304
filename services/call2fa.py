import logging
from typing import Optional

import phonenumbers
import requests

from config import settings
from models.schemas import CallRequest, CallResult, Credentials

logger = logging.getLogger(__name__)


class Call2FAError(Exception):
    """Base error for everything the Call2FA client can fail with."""


class EmptyParameterError(Call2FAError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"The {name} parameter is empty")


class InvalidPhoneNumberError(Call2FAError):
    def __init__(self, phone_number: str):
        self.phone_number = phone_number
        super().__init__(f"Not a valid E.164 phone number: {phone_number!r}")


class NetworkError(Call2FAError):
    pass


class ApiError(Call2FAError):
    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"API returned an unexpected status code: {status_code} {body[:200]}".rstrip())


class ParseError(Call2FAError):
    pass


def _require(name: str, value: str):
    if not value:
        raise EmptyParameterError(name)


def normalize_phone_number(phone_number: str) -> str:
    """Validate a phone number and return it in E.164 form.

    Only international numbers (with a leading ``+``) are accepted, the API
    has no notion of a default region.
    """
    _require("phone number", phone_number)
    try:
        parsed = phonenumbers.parse(phone_number, None)
    except phonenumbers.NumberParseException:
        raise InvalidPhoneNumberError(phone_number)
    if parsed.extension or not phonenumbers.is_possible_number(parsed):
        raise InvalidPhoneNumberError(phone_number)
    return phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.E164)


class Call2FAClient:
    """Client for the Rikkicom Call2FA API.

    Authenticates on construction and keeps the JWT for subsequent calls.
    """

    def __init__(
        self,
        login: str,
        password: str,
        base_url: Optional[str] = None,
        version: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        _require("login", login)
        _require("password", password)

        self.base_url = (base_url or settings.CALL2FA_BASE_URL).rstrip("/")
        self._version = version or settings.CALL2FA_API_VERSION
        self.timeout = timeout if timeout is not None else settings.CALL2FA_TIMEOUT
        self.jwt = self._receive_jwt(login, password)

    @classmethod
    def from_credentials(cls, credentials: Credentials, **kwargs) -> "Call2FAClient":
        return cls(credentials.login, credentials.password, **kwargs)

    @property
    def version(self) -> str:
        return self._version

    @version.setter
    def version(self, value: str):
        _require("version", value)
        self._version = value

    def make_full_uri(self, method: str) -> str:
        return f"{self.base_url}/{self._version}/{method}/"

    def _receive_jwt(self, login: str, password: str) -> str:
        uri = self.make_full_uri("auth")
        logger.info(f"Call2FA auth request URL: {uri}")
        result = self._send(
            "POST",
            uri,
            {"login": login, "password": password},
            expected_status=200,
            authorized=False,
            log_bodies=False,
        )
        jwt = result.get("jwt")
        if not jwt:
            logger.error("Call2FA auth response has no JWT")
            raise ParseError("JWT not found in authentication response")
        return jwt

    def _send(
        self,
        method: str,
        uri: str,
        payload: Optional[dict] = None,
        expected_status: int = 200,
        authorized: bool = True,
        log_bodies: bool = True,
    ) -> dict:
        headers = {"Accept": "application/json"}
        if authorized:
            headers["Authorization"] = f"Bearer {self.jwt}"
        logger.debug(f"Call2FA {method} {uri}")
        if payload is not None and log_bodies:
            logger.debug(f"Call2FA request payload: {payload}")
        try:
            response = requests.request(
                method,
                uri,
                json=payload,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Call2FA request failed: {str(e)}")
            raise NetworkError(f"HTTP request failed: {str(e)}") from e

        logger.debug(f"Call2FA response status: {response.status_code}")
        if log_bodies:
            logger.debug(f"Call2FA response text: {response.text}")
        if response.status_code != expected_status:
            logger.error(f"Call2FA error: {response.status_code} {response.text}")
            raise ApiError(response.status_code, response.text)
        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Call2FA response not JSON: {response.text}")
            raise ParseError(f"Failed to deserialize JSON response: {str(e)}") from e
        if not isinstance(data, dict):
            raise ParseError(f"Expected a JSON object, got: {response.text[:200]}")
        return data

    def call(self, phone_number: str, callback_url: str = "") -> dict:
        """Initiate a new call. Returns the response body, e.g. ``{"call_id": "95831458"}``."""
        payload = {"phone_number": normalize_phone_number(phone_number)}
        if callback_url:
            payload["callback_url"] = callback_url
        return self._send("POST", self.make_full_uri("call"), payload, expected_status=201)

    def call_via_last_digits(self, phone_number: str, pool_id: str, use_six_digits: bool = False) -> dict:
        """Initiate a call from a pool number; the user confirms with its last 4 or 6 digits."""
        payload = {"phone_number": normalize_phone_number(phone_number)}
        _require("pool ID", pool_id)
        method = f"pool/{pool_id}/call"
        if use_six_digits:
            method += "/six-digits"
        return self._send("POST", self.make_full_uri(method), payload, expected_status=201)

    def call_with_code(self, phone_number: str, code: str, lang: str) -> dict:
        """Initiate a call that dictates ``code`` to the user in language ``lang``."""
        payload = {"phone_number": normalize_phone_number(phone_number)}
        _require("code", code)
        _require("lang", lang)
        payload.update(code=code, lang=lang)
        return self._send("POST", self.make_full_uri("code/call"), payload, expected_status=201)

    def info(self, call_id: str) -> dict:
        _require("call ID", call_id)
        return self._send("GET", self.make_full_uri(f"call/{call_id}"), expected_status=200)


def place_call(phone_number: str, credentials: Credentials, callback_url: str = "") -> CallResult:
    """Place one verification call and report the outcome.

    Input is checked before anything goes over the wire. Errors are never
    raised to the caller, they come back as a failed ``CallResult``.
    """
    try:
        if credentials is None or credentials.is_empty():
            raise EmptyParameterError("credentials")
        request = CallRequest(
            phone_number=normalize_phone_number(phone_number),
            credentials=credentials,
            callback_url=callback_url,
        )
    except Call2FAError as e:
        logger.warning(f"Call request rejected: {e}")
        return CallResult(success=False, error=str(e))

    try:
        client = Call2FAClient.from_credentials(request.credentials)
        response = client.call(request.phone_number, request.callback_url)
        call_id = response.get("call_id")
        if call_id is None or call_id == "":
            raise ParseError(f"call_id not found in response: {response}")
    except Call2FAError as e:
        logger.error(f"Call to {request.phone_number} failed: {e}")
        return CallResult(success=False, error=str(e))

    logger.info(f"Call initiated successfully, call_id: {call_id}")
    return CallResult(success=True, remote_identifier=str(call_id))
