from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import Response
from starlette.concurrency import run_in_threadpool

from cncvlo.api.deps import get_dispatcher
from cncvlo.config import Settings, get_settings
from cncvlo.constants import DUBLIN_CORE_PREFIX
from cncvlo.services.oaipmh import OAIResult, VerbDispatcher, handle_oai_request, handle_self_link

router = APIRouter(tags=["oai"])

XML_MEDIA_TYPE = "text/xml; charset=utf-8"


def _multi_dict(items: list[tuple[str, str]]) -> dict[str, list[str]]:
    params: dict[str, list[str]] = {}
    for key, value in items:
        params.setdefault(key, []).append(value)
    return params


def _to_response(result: OAIResult) -> Response:
    if result.body is None:
        return Response(status_code=result.http_status)
    return Response(content=result.body, status_code=result.http_status, media_type=XML_MEDIA_TYPE)


@router.get("/oai")
def oai_get(
    request: Request,
    dispatcher: VerbDispatcher = Depends(get_dispatcher),
    settings: Settings = Depends(get_settings),
) -> Response:
    params = _multi_dict(request.query_params.multi_items())
    return _to_response(handle_oai_request(params, url=settings.oai_url, dispatcher=dispatcher))


@router.post("/oai")
async def oai_post(
    request: Request,
    dispatcher: VerbDispatcher = Depends(get_dispatcher),
    settings: Settings = Depends(get_settings),
) -> Response:
    form = await request.form()
    params = _multi_dict([(key, value) for key, value in form.multi_items() if isinstance(value, str)])
    result = await run_in_threadpool(handle_oai_request, params, url=settings.oai_url, dispatcher=dispatcher)
    return _to_response(result)


@router.get("/record/{record_id}")
def record_self_link(
    record_id: str,
    metadata_prefix: str = Query(default=DUBLIN_CORE_PREFIX, alias="format"),
    dispatcher: VerbDispatcher = Depends(get_dispatcher),
    settings: Settings = Depends(get_settings),
) -> Response:
    result = handle_self_link(record_id, metadata_prefix, url=settings.oai_url, dispatcher=dispatcher)
    return _to_response(result)
