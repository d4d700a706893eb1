"""
Models router: ``/models`` and ``/models/{entity_type}``.

Every verb is accepted on both paths and handed to the
:class:`~modelreg.api.adapter.RequestAdapter`, which decides between a
registry operation and 501. Responses are raw JSON bytes so the store's
native bodies pass through untouched; ``?pretty`` indents them.

Tags:
    modelreg, api, router, models

Doc-Types:
    api-reference
"""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import Response

from modelreg.api.adapter import ModelRequest, parse_pretty
from modelreg.api.deps import Adapter

router = APIRouter(prefix="/models")

_METHODS = ["GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS"]


async def _dispatch(request: Request, adapter: Adapter, entity_type: str | None) -> Response:
    pretty = parse_pretty(request.query_params.get("pretty"))
    body = await request.body()
    result = await adapter.handle(
        ModelRequest(
            method=request.method,
            entity_type=entity_type,
            body=body or None,
            pretty=pretty,
            path=request.url.path,
        )
    )
    return Response(
        content=result.render(pretty),
        status_code=result.status,
        media_type="application/json",
    )


@router.api_route("", methods=_METHODS, summary="List entity models")
async def models_collection(request: Request, adapter: Adapter) -> Response:
    """``GET`` lists every entity model; other verbs answer 501."""
    return await _dispatch(request, adapter, None)


@router.api_route("/{entity_type}", methods=_METHODS, summary="Read or write one entity model")
async def models_item(entity_type: str, request: Request, adapter: Adapter) -> Response:
    """``GET`` fetches, ``POST`` creates, ``PUT`` upserts, ``DELETE`` removes."""
    return await _dispatch(request, adapter, entity_type)
