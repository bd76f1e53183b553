"""Admin HTML routes: the options page and its form submission."""

from collections.abc import Iterable
from typing import Annotated, Any

from fastapi import APIRouter, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from starlette.datastructures import FormData

from convert_to_blocks.admin.settings_page import NONCE_FIELD, load_page_context, nonce_action
from convert_to_blocks.api.v1.dependencies import (
    Admin,
    AppSettings,
    Options,
    Provider,
    Registry,
    Store,
)
from convert_to_blocks.core.exceptions import ForbiddenError, ValidationError
from convert_to_blocks.core.security import verify_form_nonce

router = APIRouter()


def extract_submitted_values(
    form: FormData, option_names: Iterable[str]
) -> dict[str, Any]:
    """Pick the raw values for the given options out of a submitted form.

    ``name[]`` fields arrive as lists, plain fields as a single string, and
    options with no field at all are left out.
    """
    submitted: dict[str, Any] = {}
    for option_name in option_names:
        list_key = f"{option_name}[]"
        if list_key in form:
            submitted[option_name] = form.getlist(list_key)
        elif option_name in form:
            submitted[option_name] = form.get(option_name)
    return submitted


def _required_form_value(form: FormData, name: str) -> str:
    value = form.get(name)
    if not isinstance(value, str) or not value:
        raise ValidationError(
            f"Missing {name}",
            errors=[{"field": name, "message": "This field is required"}],
        )
    return value


@router.get("/options-general.php", response_class=HTMLResponse)
async def options_general(
    page: Annotated[str, Query(description="Slug of the options page")],
    admin: Admin,  # noqa: ARG001
    registry: Registry,
    provider: Provider,
    store: Store,
    settings_updated: Annotated[
        bool, Query(alias="settings-updated", description="Show the saved notice")
    ] = False,
) -> HTMLResponse:
    """Render a registered options page."""
    options_page = registry.get_page(page)
    context = await load_page_context(provider, store, updated=settings_updated)
    return HTMLResponse(options_page.render(context))


@router.post("/options.php")
async def save_options(
    request: Request,
    admin: Admin,  # noqa: ARG001
    registry: Registry,
    options: Options,
    settings: AppSettings,
) -> RedirectResponse:
    """Save a settings group submitted from an options page.

    The form must carry a token issued for the group, or nothing is saved.
    Each registered option is passed through its sanitize callback before
    being persisted; then the browser is sent back to the page with the
    saved notice.
    """
    form = await request.form()
    group = _required_form_value(form, "option_page")
    nonce = form.get(NONCE_FIELD)
    if not isinstance(nonce, str) or not verify_form_nonce(
        nonce, nonce_action(group), settings.admin_api_key
    ):
        raise ForbiddenError()
    page = _required_form_value(form, "page")

    registry.get_page(page)
    option_names = [setting.option_name for setting in registry.settings_for(group)]

    await registry.save_group(
        group, extract_submitted_values(form, option_names), options
    )

    redirect_url = request.url_for("options_general").include_query_params(
        page=page, **{"settings-updated": "true"}
    )
    return RedirectResponse(url=str(redirect_url), status_code=303)
