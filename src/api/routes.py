"""
API routes - Signup pages.

This module defines the HTTP endpoints:
- GET  /        - Landing page, shows the flash notice and signed-in user
- GET  /signup  - Blank signup form
- POST /signup  - Create the account and sign the user in
"""

from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from src.api.dependencies import (
    SESSION_NOTICE_KEY,
    SESSION_USER_KEY,
    get_current_user,
    get_signup_service,
)
from src.api.models import SignupFormData
from src.domain.exceptions import SignupRejected
from src.domain.signup import SignupService
from src.domain.user import SignupForm, User

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))

router = APIRouter(tags=["signup"])

SIGNUP_NOTICE = "Thank you for signing up!"


def render_signup(
    request: Request, form: SignupForm, status_code: int = status.HTTP_200_OK
) -> HTMLResponse:
    return templates.TemplateResponse(
        request, "signup.html", {"form": form}, status_code=status_code
    )


@router.get("/", response_class=HTMLResponse, summary="Landing page")
async def home(
    request: Request, user: User | None = Depends(get_current_user)
) -> HTMLResponse:
    notice = request.session.pop(SESSION_NOTICE_KEY, None)
    return templates.TemplateResponse(
        request, "home.html", {"user": user, "notice": notice}
    )


@router.get("/signup", response_class=HTMLResponse, summary="Signup form")
async def new_user(
    request: Request, service: SignupService = Depends(get_signup_service)
) -> HTMLResponse:
    return render_signup(request, service.new_user())


@router.post(
    "/signup",
    response_class=HTMLResponse,
    response_model=None,
    responses={
        303: {"description": "Account created, session started"},
        422: {"description": "Form re-rendered with field errors"},
    },
    summary="Create an account",
)
async def create_user(
    request: Request,
    data: Annotated[SignupFormData, Form()],
    service: SignupService = Depends(get_signup_service),
) -> HTMLResponse | RedirectResponse:
    """
    Register a new user and sign them in.

    - **email**: Email address to register
    - **password**: Password (minimum 8 characters)
    - **password_confirmation**: Must match password

    On success the session is bound to the new user and the client is
    redirected to the landing page. On failure the form is shown again
    with the submitted email and the field errors; nothing is stored.
    """
    try:
        user = service.signup(data.email, data.password, data.password_confirmation)
    except SignupRejected as exc:
        return render_signup(request, exc.form, status.HTTP_422_UNPROCESSABLE_CONTENT)

    request.session[SESSION_USER_KEY] = user.id
    request.session[SESSION_NOTICE_KEY] = SIGNUP_NOTICE
    return RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)
