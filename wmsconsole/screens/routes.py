from fastapi import APIRouter, Request
from fastapi.responses import RedirectResponse

from wmsconsole.rbac import format_role
from wmsconsole.rbac.decorators import protected
from wmsconsole.utils import success_response
from .registry import SCREENS, Screen

screens_router = APIRouter()


def _make_handler(screen: Screen):
    @protected(allowed_roles=screen.allowed_roles)
    async def render_screen(request: Request):
        user = request.app.state.session_store.state.user
        return success_response(
            data={
                "screen": screen.title,
                "path": request.url.path,
                "params": dict(request.path_params),
                "user": {
                    "id": user.id,
                    "name": user.name,
                    "role": user.role,
                    "role_label": format_role(user.role),
                },
            }
        )

    render_screen.__name__ = "screen_" + screen.path.strip("/").replace("/", "_").replace("-", "_")
    return render_screen


for _screen in SCREENS:
    screens_router.add_api_route(
        _screen.path,
        _make_handler(_screen),
        methods=["GET"],
        name=_screen.title,
    )


@screens_router.get("/{unknown_path:path}", include_in_schema=False)
async def unknown_screen(request: Request, unknown_path: str):
    """Unknown routes go back to the landing page."""
    return RedirectResponse(request.app.state.settings.landing_path, status_code=303)
