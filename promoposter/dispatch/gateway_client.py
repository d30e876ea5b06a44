import base64

import httpx

from promoposter.config.settings import Settings
from promoposter.dispatch.models import DispatchRequest
from promoposter.logging.logger import Log


class MmsGatewayClient:
    """Token exchange and MMS submission against the messaging gateway.

    Expected gateway rejections are reported as ``None`` and logged; only
    programmer errors (empty recipient list, blank sender) raise.
    """

    def __init__(
        self,
        *,
        api_url: str,
        account: str,
        api_key: str,
        timeout_seconds: int = 30,
        ref_key: str = "ref_key",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_url = api_url.rstrip("/")
        self._account = account
        self._api_key = api_key
        self._timeout = timeout_seconds
        self._ref_key = ref_key
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "MmsGatewayClient":
        return cls(
            api_url=settings.mms_api_url,
            account=settings.mms_account,
            api_key=settings.mms_api_key,
            timeout_seconds=settings.mms_timeout_seconds,
            ref_key=settings.mms_ref_key,
        )

    async def authenticate(self) -> str | None:
        """Exchange basic-auth credentials for a bearer token."""
        try:
            async with self._http() as http:
                response = await http.post(
                    f"{self._api_url}/v1/token",
                    json={},
                    auth=(self._account, self._api_key),
                )
        except httpx.HTTPError as exc:
            Log.error(f"Error getting access token: {exc}")
            return None

        if not response.is_success:
            Log.error(f"Error getting access token: {response.status_code} {response.text}")
            return None
        token = self._json_field(response, "token")
        if token:
            Log.info("Gateway access token acquired")
        else:
            Log.error("Gateway token response carried no token")
        return token

    async def send(self, token: str | None, request: DispatchRequest) -> str | None:
        """Submit one MMS with the poster attached; returns the gateway message key."""
        if not request.recipients:
            raise ValueError("At least one recipient is required")
        if not request.sender.strip():
            raise ValueError("Sender is required")
        if not token:
            Log.error("Cannot send MMS without an access token")
            return None

        payload = self._build_payload(request)
        try:
            async with self._http() as http:
                response = await http.post(
                    f"{self._api_url}/v1/message",
                    json=payload,
                    headers={"Authorization": f"Bearer {token}"},
                )
        except httpx.HTTPError as exc:
            Log.error(f"Error sending MMS: {exc}")
            return None

        if not response.is_success:
            Log.error(f"Error sending MMS: {response.status_code} {response.text}")
            return None
        message_key = self._json_field(response, "messageKey")
        if message_key:
            Log.info(f"MMS accepted by gateway: {message_key}")
        return message_key

    def _build_payload(self, request: DispatchRequest) -> dict[str, object]:
        image = request.poster_path.read_bytes()
        return {
            "account": self._account,
            "messageType": "MMS",
            "content": request.message,
            "from": request.sender,
            "duplicateFlag": "N",
            "rejectType": "AD",
            "refKey": self._ref_key,
            "targetCount": len(request.recipients),
            "targets": [recipient.to_target() for recipient in request.recipients],
            "files": [
                {
                    "name": request.poster_path.name,
                    "size": len(image),
                    "data": base64.b64encode(image).decode("ascii"),
                }
            ],
        }

    def _http(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._timeout, transport=self._transport)

    @staticmethod
    def _json_field(response: httpx.Response, name: str) -> str | None:
        try:
            value = response.json().get(name)
        except (ValueError, AttributeError):
            return None
        return str(value) if value else None
