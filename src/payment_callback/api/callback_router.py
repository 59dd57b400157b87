from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from starlette.requests import Request

from src.payment_callback import callback_logger
from src.payment_callback.core import ReconciliationDispatcher
from src.payment_callback.dependencies import get_callback_guard, get_dispatcher
from src.payment_callback.schemas.enums import CallbackStatus, FailureKind
from src.payment_callback.services.callback_service import process_redirect
from src.utils.response_format import ResponseFormat
from src.utils.status import Status
from src.utils.urls import CALLBACK_URLS

callback_router = APIRouter(tags=["Payment Callback"])


@callback_router.get(CALLBACK_URLS.api)
async def payment_callback_api(
    request: Request,
    dispatcher: ReconciliationDispatcher = Depends(get_dispatcher),
):
    """
    JSON variant of the redirect handler for single-page storefronts.

    The storefront forwards the gateway's query string unchanged and renders
    the returned state itself.
    """
    callback_logger.info("Received payment redirect via API")

    state, session = await process_redirect(request.url.query, dispatcher)

    if state.status is CallbackStatus.SUCCEEDED:
        status = Status.SUCCESS
        redirect = {"target": session.redirect_target, "delay_seconds": session.redirect_delay}
    elif state.failure_kind is FailureKind.PARSE_ERROR:
        status = Status.INVALID_CALLBACK
        redirect = None
    else:
        status = Status.FAILURE
        redirect = None

    return JSONResponse(
        content=ResponseFormat(
            status=status,
            message=state.message,
            data={"state": state.model_dump(mode="json"), "redirect": redirect},
        ).to_dict()
    )


@callback_router.get(CALLBACK_URLS.health)
async def health():
    guard = get_callback_guard()
    redis_ok = await guard.health_check() if guard is not None else None
    return JSONResponse(
        content=ResponseFormat(
            status=Status.SUCCESS,
            message="OK",
            data={"redis": redis_ok},
        ).to_dict()
    )
