import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse

from app import dependencies as deps
from app.schemas.events import EventPayload
from app.services import renderer
from app.services.events import InvalidEventPayload, UnknownEventError, events
from app.services.screen import RecordingPrompter
from app.services.sessions import ViewSession
from app.settings import Settings

logger = logging.getLogger(__name__)

router = APIRouter()


def render_response(
    session: ViewSession, current_settings: Settings, prompter=None
) -> HTMLResponse:
    controller = session.controller
    nav = renderer.render_nav(
        current_settings.nav_page_slugs, controller.state.is_authenticated
    )
    body = renderer.render_shell(
        site_title=current_settings.SITE_TITLE,
        nav=nav,
        content=controller.screen.content,
        alerts=prompter.alerts if prompter else (),
        scroll_top=controller.screen.scroll_top,
    )
    response = HTMLResponse(body)
    response.set_cookie(deps.TAB_COOKIE, session.tab_id, httponly=True, samesite="lax")
    return response


@router.get("/", response_class=HTMLResponse)
async def reload_app(
    session: ViewSession = Depends(deps.get_view_session),
    current_settings: Settings = Depends(deps.get_settings),
):
    """Fresh start for this browser: its state and session are dropped."""
    session.controller.reset()
    await session.controller.init()
    return render_response(session, current_settings)


@router.post("/events/{event}", response_class=HTMLResponse)
async def handle_event(
    event: str,
    request: Request,
    session: ViewSession = Depends(deps.get_view_session),
    current_settings: Settings = Depends(deps.get_settings),
):
    form = await request.form()
    payload = EventPayload(**{k: v for k, v in form.items() if isinstance(v, str)})
    prompter = RecordingPrompter(confirmed=payload.is_confirmed)

    try:
        await events.dispatch(session.controller, event, payload, prompter)
    except UnknownEventError:
        raise HTTPException(status_code=404, detail=f"Unknown event: {event}")
    except InvalidEventPayload as e:
        raise HTTPException(status_code=422, detail=str(e))

    return render_response(session, current_settings, prompter)


@router.get("/health")
async def health():
    return {"message": "Blog client is running"}
