from typing import Dict, Any, List, Optional
import httpx
import structlog
from ...settings import settings
from ...utils.http import CONNECT_ERRORS, client, retry_policy
from ...exceptions import ProviderError
from .schemas import CloudPaymentsConfig

logger = structlog.get_logger(__name__)


class CloudPaymentsProtocol:
    """
    CloudPayments API transport (HTTP Basic: public_id / secret_key):
      - POST /payments/cards/charge   charge by cryptogram packet
      - POST /payments/tokens/charge  charge by saved card token
      - POST /subscriptions/{create,update,cancel,get,find}
    Every reply is {"Success": bool, "Message": str|null, "Model": ...}.
    """

    def __init__(
        self,
        config: CloudPaymentsConfig,
        timeout_sec: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = config.base_url.rstrip("/")
        self.auth = httpx.BasicAuth(config.public_id, config.secret_key)
        self.timeout_sec = timeout_sec or settings.HTTP_TIMEOUT_SEC
        self._transport = transport

    async def _send(self, path: str, json_payload: Dict[str, Any]) -> httpx.Response:
        async with client(self.timeout_sec, auth=self.auth, transport=self._transport) as c:
            return await c.post(f"{self.base_url}{path}", json=json_payload)

    @retry_policy(max_attempts=settings.HTTP_RETRY_MAX)
    async def _send_idempotent(self, path: str, json_payload: Dict[str, Any]) -> httpx.Response:
        return await self._send(path, json_payload)

    # a read timeout may come after the provider has already charged the card
    @retry_policy(max_attempts=settings.HTTP_RETRY_MAX, retry_on=CONNECT_ERRORS)
    async def _send_once(self, path: str, json_payload: Dict[str, Any]) -> httpx.Response:
        return await self._send(path, json_payload)

    async def _post(self, path: str, json_payload: Dict[str, Any], idempotent: bool = True) -> Dict[str, Any]:
        logger.info("cloudpayments_request", path=path)
        send = self._send_idempotent if idempotent else self._send_once
        resp = await send(path, json_payload)
        logger.info("cloudpayments_response", path=path, status_code=resp.status_code)
        resp.raise_for_status()
        return resp.json()

    def _ensure_success(self, path: str, js: Dict[str, Any]) -> Dict[str, Any]:
        if not js.get("Success"):
            message = js.get("Message") or f"{path} failed"
            logger.warning("cloudpayments_declined", path=path, message=message)
            raise ProviderError(message, js)
        return js

    # ---- Payments ----
    async def get_payment_url(self, request: Dict[str, Any]) -> str:
        js = await self._post("/payments/cards/charge", request, idempotent=False)
        model = js.get("Model") or {}
        # 3-D Secure: payer has to be sent to the issuer's ACS page
        acs_url = model.get("AcsUrl")
        if acs_url:
            return acs_url
        if js.get("Success"):
            return ""
        message = model.get("CardHolderMessage") or js.get("Message") or "payment declined"
        raise ProviderError(message, js)

    async def payment_by_token(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._post("/payments/tokens/charge", data, idempotent=False)

    def get_notification_response(self, payload: Dict[str, Any], error_code: int) -> Dict[str, Any]:
        return {"code": error_code}

    # ---- Subscriptions ----
    async def create_schedule(self, data: Dict[str, Any]) -> str:
        js = self._ensure_success("/subscriptions/create", await self._post("/subscriptions/create", data, idempotent=False))
        return str((js.get("Model") or {}).get("Id") or "")

    async def update_schedule(self, schedule_id: str, data: Dict[str, Any]) -> bool:
        body = {**data, "Id": schedule_id}
        js = self._ensure_success("/subscriptions/update", await self._post("/subscriptions/update", body))
        return bool(js.get("Success"))

    async def remove_schedule(self, schedule_id: str) -> bool:
        js = await self._post("/subscriptions/cancel", {"Id": schedule_id})
        return bool(js.get("Success"))

    async def get_schedule(self, schedule_id: str) -> Dict[str, Any]:
        return self._ensure_success("/subscriptions/get", await self._post("/subscriptions/get", {"Id": schedule_id}))

    async def get_schedule_list(self, account_id: Optional[str] = None) -> List[Dict[str, Any]]:
        body = {"accountId": account_id} if account_id else {}
        js = self._ensure_success("/subscriptions/find", await self._post("/subscriptions/find", body))
        return list(js.get("Model") or [])
