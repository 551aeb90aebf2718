"""CORS forwarding endpoint.

``/api/proxy?url=<target>`` relays the caller's method, body and content
type to ``target`` and relays the upstream status, content type and body
back verbatim. Every response, errors included, carries permissive CORS
headers so browser front-ends can reach backends that do not send them.
"""

import logging

import httpx
from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse, Response

from advisory.config import settings
from advisory.exceptions import GatewayError

logger = logging.getLogger(__name__)

router = APIRouter()

CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, PATCH, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

PROXY_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

# Methods whose body is never forwarded
_BODYLESS_METHODS = frozenset({"GET", "HEAD"})


def get_upstream_client(request: Request) -> httpx.AsyncClient:
    """Shared upstream client created in the app lifespan."""
    client: httpx.AsyncClient = request.app.state.upstream_client
    return client


async def forward_request(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    body: bytes | None,
    content_type: str,
) -> httpx.Response:
    """Send one request to the target URL.

    Raises:
        GatewayError: The target could not be reached (DNS, connect,
            timeout, malformed URL).
    """
    try:
        return await client.request(
            method,
            url,
            content=body,
            headers={"Content-Type": content_type},
        )
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        details = str(e) or type(e).__name__
        logger.error("Gateway %s %s failed: %s", method, url, details)
        raise GatewayError(details, target_url=url) from e


@router.api_route("/proxy", methods=PROXY_METHODS)
async def proxy(
    request: Request,
    url: str | None = Query(default=None, description="Target URL to forward to"),
    client: httpx.AsyncClient = Depends(get_upstream_client),
) -> Response:
    if not url:
        return JSONResponse(
            {"error": "Missing URL parameter"},
            status_code=400,
            headers=CORS_HEADERS,
        )

    if request.method == "OPTIONS":
        return Response(
            status_code=settings.gateway_preflight_status,
            headers=CORS_HEADERS,
        )

    body = None if request.method in _BODYLESS_METHODS else await request.body()
    content_type = (
        request.headers.get("content-type") or settings.gateway_default_content_type
    )

    try:
        upstream = await forward_request(client, request.method, url, body, content_type)
    except GatewayError as e:
        return JSONResponse(
            {"error": "Proxy failed", "details": str(e)},
            status_code=500,
            headers=CORS_HEADERS,
        )

    logger.info(
        "Gateway %s %s -> %d (%d bytes)",
        request.method,
        url,
        upstream.status_code,
        len(upstream.content),
    )
    return Response(
        content=upstream.content,
        status_code=upstream.status_code,
        headers={
            **CORS_HEADERS,
            "Content-Type": upstream.headers.get("content-type", "text/plain"),
        },
    )
