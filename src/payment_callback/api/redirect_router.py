from pathlib import Path

from fastapi import APIRouter, Depends
from starlette.requests import Request
from starlette.responses import HTMLResponse
from starlette.templating import Jinja2Templates

from src.config import CART_PATH, HOME_PATH
from src.payment_callback import callback_logger
from src.payment_callback.core import ReconciliationDispatcher
from src.payment_callback.dependencies import get_dispatcher
from src.payment_callback.schemas.enums import CallbackStatus
from src.payment_callback.services.callback_service import process_redirect
from src.utils.urls import CALLBACK_URLS

TEMPLATES_DIR = Path(__file__).parent.parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
redirect_router = APIRouter(tags=["Payment Redirect"])


@redirect_router.get(CALLBACK_URLS.processing, response_class=HTMLResponse)
async def processing_page(request: Request):
    """
    Render the processing spinner, then forward the browser to the callback page.

    Gateways may be pointed here as return URL so the customer sees a spinner
    while the confirmation call runs. The query string is forwarded untouched.
    """
    callback_url = CALLBACK_URLS.page
    if request.url.query:
        callback_url = f"{callback_url}?{request.url.query}"

    return templates.TemplateResponse(
        request,
        "processing.html",
        {"callback_url": callback_url, "message": "Processing payment..."},
    )


@redirect_router.get(CALLBACK_URLS.page, response_class=HTMLResponse)
async def payment_callback_page(
    request: Request,
    dispatcher: ReconciliationDispatcher = Depends(get_dispatcher),
):
    """
    Handle the customer's redirect back from MoMo or VNPay.

    Runs normalize -> classify -> reconcile once and renders:
    - success.html: order details plus an auto-redirect countdown
    - failure.html: Back to Cart / Back to Home, no auto-redirect
    """
    callback_logger.info(f"Received payment redirect ({len(request.query_params)} params)")

    state, session = await process_redirect(request.url.query, dispatcher)

    if state.status is CallbackStatus.SUCCEEDED:
        return templates.TemplateResponse(
            request,
            "success.html",
            {
                "message": state.message,
                "display": state.display,
                "redirect_delay": int(session.redirect_delay),
                "redirect_target": session.redirect_target,
            },
        )

    return templates.TemplateResponse(
        request,
        "failure.html",
        {"message": state.message, "cart_url": CART_PATH, "home_url": HOME_PATH},
    )
