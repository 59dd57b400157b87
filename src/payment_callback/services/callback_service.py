from src.payment_callback.core import CallbackSession, ReconciliationDispatcher
from src.payment_callback.schemas import CallbackState, RawCallbackParameters


async def process_redirect(query: str, dispatcher: ReconciliationDispatcher) -> tuple[CallbackState, CallbackSession]:
    """
    Run one redirect through the reconciliation pipeline.

    The raw query string is decoded here, once. The session is closed before
    returning; the rendered page owns the post-success countdown.

    Args:
        query: Raw (percent-encoded) query string of the redirect
        dispatcher: Dispatcher bound to the order backend

    Returns:
        The terminal callback state and the session that produced it
    """
    raw = RawCallbackParameters.from_query_string(query)
    session = CallbackSession(raw, dispatcher)
    try:
        state = await session.run()
    finally:
        session.close()
    return state, session
