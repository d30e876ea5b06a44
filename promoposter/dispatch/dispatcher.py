import os

from promoposter.dispatch.exceptions import DispatchError, DispatchValidationError
from promoposter.dispatch.gateway_client import MmsGatewayClient
from promoposter.dispatch.models import DispatchRequest, DispatchResult, DispatchState
from promoposter.logging.logger import Log

TOKEN_FAILURE = "Failed to get access token"
SEND_FAILURE = "Failed to send MMS"


class Dispatcher:
    """Runs one dispatch attempt: UNAUTHENTICATED -> TOKEN_ACQUIRED -> SENT | FAILED."""

    def __init__(self, gateway: MmsGatewayClient) -> None:
        self._gateway = gateway

    async def dispatch(self, request: DispatchRequest) -> DispatchResult:
        self.validate(request)
        result = DispatchResult()

        token = await self._gateway.authenticate()
        if not token:
            result.state = DispatchState.FAILED
            result.error = DispatchError(TOKEN_FAILURE)
            return result
        result.state = DispatchState.TOKEN_ACQUIRED

        with Log.timed("MMS dispatch"):
            message_key = await self._gateway.send(token, request)
        if not message_key:
            result.state = DispatchState.FAILED
            result.error = DispatchError(SEND_FAILURE)
            return result

        result.state = DispatchState.SENT
        result.message_key = message_key
        return result

    @staticmethod
    def validate(request: DispatchRequest) -> None:
        """Reject incomplete requests before any gateway traffic."""
        if not request.sender.strip() or not request.recipients:
            raise DispatchValidationError("Sender and recipients are required")
        if any(not r.phone_number.strip() for r in request.recipients):
            raise DispatchValidationError("Every recipient needs a phone number")
        path = request.poster_path
        if not path.is_file() or not os.access(path, os.R_OK):
            raise DispatchValidationError(f"Poster file {path.name} is not available")
