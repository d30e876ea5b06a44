from promoposter.dispatch.dispatcher import Dispatcher
from promoposter.dispatch.gateway_client import MmsGatewayClient
from promoposter.dispatch.models import DispatchRequest, DispatchResult, DispatchState, Recipient

__all__ = [
    "DispatchRequest",
    "DispatchResult",
    "DispatchState",
    "Dispatcher",
    "MmsGatewayClient",
    "Recipient",
]
