from typing import Optional
import httpx
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

def client(
    timeout_sec: int = 15,
    auth: Optional[httpx.Auth] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=timeout_sec, auth=auth, transport=transport)

# the request never reached the server, so resending cannot duplicate it
CONNECT_ERRORS = (httpx.ConnectError, httpx.ConnectTimeout)

def retry_policy(max_attempts: int = 4, retry_on=httpx.TransportError):
    # only transport-level failures; HTTP status errors are raised after the retry loop
    return retry(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=0.5, min=0.5, max=8),
        retry=retry_if_exception_type(retry_on),
        reraise=True,
    )
