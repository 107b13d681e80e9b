"""
web/routes.py -- Jinja2 template routes for the CompanyHub web UI.

These routes serve server-rendered HTML. Unlike the JSON handlers they never
touch a store: every page fetches its data from the /api endpoints through
web/client.InternalApi, forwarding the visitor's cookies and locale. A failed
data request renders the not-found page (404), which is also what a
non-member sees for a company they cannot access.

HTML forms post back to these routes, which forward the write to the API
(POST/PUT/DELETE) and then redirect (303) to the list page. When the API
rejects a write, the page is re-rendered with the API's translated messages
and its status code.

Route registration order matters: GET /companies/new and GET
/company/{company_id}/roles/new must be registered before the routes whose
path parameter would otherwise capture "new".

Routes:
  GET  /login, POST /login, GET /register, POST /register, POST /logout
  GET  /locale/{code}                                   -- switch UI language
  GET  /                                                -- companies of the visitor
  GET  /companies/new, POST /companies/new
  GET  /company/{id}, POST /company/{id}/edit, POST /company/{id}/delete
  GET  /company/{id}/stocks        (+ create / update / delete posts)
  GET  /company/{id}/price-types   (+ create / update / delete posts)
  GET  /company/{id}/members       (+ change role / remove posts)
  GET  /company/{id}/roles, GET|POST /company/{id}/roles/new,
  GET|POST /company/{id}/roles/{role_id}, POST /company/{id}/roles/{role_id}/delete
  GET  /company/{id}/invitations   (+ invite / delete posts)
  GET  /invitations, POST /invitations/{id}/accept, POST /invitations/{id}/decline
"""

import logging
from pathlib import Path
from typing import Any, Optional
from urllib.parse import quote

from fastapi import APIRouter, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from auth.dependencies import try_get_current_user
from auth.tokens import clear_auth_cookie, set_auth_cookie
from core.config import get_settings
from core.i18n import Translator, locale_display_name, negotiate_locale, parse_accept_language
from core.pagination import MAX_PAGE
from web.client import ApiResult, InternalApi

logger = logging.getLogger("companyhub.web")

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))
router = APIRouter()

_PAGE_SIZE = 10
# Stocks, price types and roles offered in selects and role forms.
_OPTIONS_LIMIT = 100
_LOCALE_COOKIE_MAX_AGE = 365 * 24 * 3600


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def page_locale(request: Request) -> str:
    """Locale of a page: the locale cookie first, then Accept-Language, then the default."""
    settings = get_settings()
    preferred = []
    cookie = request.cookies.get(settings.locale_cookie_name)
    if cookie:
        preferred.append(cookie)
    preferred.extend(parse_accept_language(request.headers.get("accept-language")))
    return negotiate_locale(preferred, settings.supported_locales, settings.default_locale)


def _safe_next(next_url: Optional[str]) -> str:
    """Validate a post-login redirect target. Only relative, server-local paths are accepted."""
    if next_url and next_url.startswith("/") and not next_url.startswith("//"):
        return next_url
    return "/"


def _current_path(request: Request) -> str:
    if request.url.query:
        return f"{request.url.path}?{request.url.query}"
    return request.url.path


def _require_auth(request: Request) -> Optional[RedirectResponse]:
    """Return a redirect to /login if the request is not authenticated, None if OK.

        if redirect := _require_auth(request):
            return redirect
    """
    if try_get_current_user(request) is None:
        return RedirectResponse(f"/login?next={quote(_current_path(request), safe='')}", status_code=302)
    return None


def _render(request: Request, name: str, context: dict, status_code: int = 200) -> HTMLResponse:
    settings = get_settings()
    locale = page_locale(request)
    base = {
        "t": Translator(locale, "Web", fallback_locale=settings.default_locale),
        "locale": locale,
        "locales": [(code, locale_display_name(code)) for code in settings.supported_locales],
        "current_user": try_get_current_user(request),
    }
    base.update(context)
    return templates.TemplateResponse(request, name, base, status_code=status_code)


def _not_found(request: Request) -> HTMLResponse:
    return _render(request, "not_found.html", {}, status_code=404)


def _api(request: Request) -> InternalApi:
    return InternalApi(request, page_locale(request))


def _failure_status(result: ApiResult) -> int:
    return result.status_code if 400 <= result.status_code < 500 else 500


def _page_number(page: Optional[str]) -> int:
    """Page number from the query string. Anything but an in-range positive integer means page 1."""
    try:
        number = int(page) if page is not None else 1
    except ValueError:
        return 1
    return number if 0 < number <= MAX_PAGE else 1


def _optional(value: Optional[str]) -> Optional[str]:
    value = (value or "").strip()
    return value or None


async def _company(api: InternalApi, company_id: str) -> Optional[dict]:
    return await api.get(f"/api/company/{company_id}")


async def _options(api: InternalApi, company_id: str, resource: str) -> list[dict]:
    data = await api.get(f"/api/company/{company_id}/{resource}", page=1, limit=_OPTIONS_LIMIT)
    return data["result"] if data else []


async def _render_company_list(
    request: Request,
    company_id: str,
    resource: str,
    slug: str,
    page: int,
    errors: Optional[list[str]] = None,
    status_code: int = 200,
    form: Optional[dict] = None,
) -> HTMLResponse:
    """Render one of the per-company list pages (stocks, price types, members, roles, invitations).

    resource is the API path segment ("price-type"), slug the page path
    segment ("price-types"); the template is named after the slug.
    """
    api = _api(request)
    company = await _company(api, company_id)
    if company is None:
        return _not_found(request)
    data = await api.get(f"/api/company/{company_id}/{resource}", page=page, limit=_PAGE_SIZE)
    if data is None:
        return _not_found(request)
    context: dict[str, Any] = {
        "company": company,
        "result": data["result"],
        "pagination": data["pagination"],
        "page_href": f"/company/{company_id}/{slug}?page=",
        "active_tab": slug,
        "errors": errors or [],
        "form": form or {},
    }
    if resource in ("member", "invitation") and company["isOwner"]:
        context["roles"] = await _options(api, company_id, "role")
    template = slug.replace("-", "_") + ".html"
    return _render(request, template, context, status_code=status_code)


async def _after_write(
    request: Request, result: ApiResult, company_id: str, resource: str, slug: str, form: Optional[dict] = None
):
    if result.ok:
        return RedirectResponse(f"/company/{company_id}/{slug}", status_code=303)
    return await _render_company_list(
        request,
        company_id,
        resource,
        slug,
        page=1,
        errors=result.messages,
        status_code=_failure_status(result),
        form=form,
    )


# ---------------------------------------------------------------------------
# Auth pages
# ---------------------------------------------------------------------------


@router.get("/login", response_class=HTMLResponse)
def login_form(request: Request) -> HTMLResponse:
    if try_get_current_user(request) is not None:
        return RedirectResponse("/", status_code=302)
    next_url = _safe_next(request.query_params.get("next"))
    return _render(request, "login.html", {"next": next_url, "errors": [], "form": {}})


def _logged_in_redirect(result: ApiResult, next_url: str) -> RedirectResponse:
    resp = RedirectResponse(_safe_next(next_url), status_code=303)
    set_auth_cookie(resp, result.data["accessToken"])
    resp.headers["Cache-Control"] = "no-store"
    return resp


@router.post("/login", response_class=HTMLResponse)
async def login_post(
    request: Request,
    username: str = Form(default=""),
    password: str = Form(default=""),
    next_url: str = Form(default="/", alias="next"),
):
    """Forward the credentials to POST /api/auth/login and keep the returned token as a cookie."""
    result = await _api(request).send("POST", "/api/auth/login", {"username": username, "password": password})
    if result.ok:
        return _logged_in_redirect(result, next_url)
    return _render(
        request,
        "login.html",
        {"next": _safe_next(next_url), "errors": result.messages, "form": {"username": username}},
        status_code=_failure_status(result),
    )


@router.get("/register", response_class=HTMLResponse)
def register_form(request: Request) -> HTMLResponse:
    if try_get_current_user(request) is not None:
        return RedirectResponse("/", status_code=302)
    return _render(request, "register.html", {"errors": [], "form": {}})


@router.post("/register", response_class=HTMLResponse)
async def register_post(
    request: Request,
    username: str = Form(default=""),
    password: str = Form(default=""),
    display_name: str = Form(default=""),
):
    payload = {"username": username, "password": password, "displayName": _optional(display_name)}
    result = await _api(request).send("POST", "/api/auth/register", payload)
    if result.ok:
        return _logged_in_redirect(result, "/")
    messages = result.messages or [Translator(page_locale(request), "Web")("requestFailed")]
    return _render(
        request,
        "register.html",
        {"errors": messages, "form": {"username": username, "display_name": display_name}},
        status_code=_failure_status(result),
    )


@router.post("/logout")
def logout(request: Request) -> RedirectResponse:
    """Clear the JWT cookie and redirect to the login page."""
    resp = RedirectResponse("/login", status_code=303)
    clear_auth_cookie(resp)
    return resp


@router.get("/locale/{code}")
def switch_locale(request: Request, code: str) -> RedirectResponse:
    """Remember the chosen UI language in the locale cookie."""
    settings = get_settings()
    resp = RedirectResponse(_safe_next(request.query_params.get("next")), status_code=303)
    if code in settings.supported_locales:
        resp.set_cookie(
            settings.locale_cookie_name,
            value=code,
            max_age=_LOCALE_COOKIE_MAX_AGE,
            samesite="lax",
            secure=settings.secure_cookies,
        )
    return resp


# ---------------------------------------------------------------------------
# Companies
# ---------------------------------------------------------------------------


@router.get("/", response_class=HTMLResponse)
async def companies_page(request: Request, page: Optional[str] = None):
    if redirect := _require_auth(request):
        return redirect
    data = await _api(request).get("/api/company", page=_page_number(page), limit=_PAGE_SIZE)
    if data is None:
        return _not_found(request)
    return _render(
        request,
        "companies.html",
        {"result": data["result"], "pagination": data["pagination"], "page_href": "/?page="},
    )


@router.get("/companies/new", response_class=HTMLResponse)
def company_create_form(request: Request):
    if redirect := _require_auth(request):
        return redirect
    return _render(request, "company_form.html", {"form": {}, "errors": [], "company": None})


def _company_payload(
    company_id: str,
    name: str,
    tin: str,
    description: str,
    description_ru: str,
    slogan: str,
    slogan_ru: str,
    image_id: str,
) -> dict:
    return {
        "id": company_id.strip(),
        "name": name.strip(),
        "tin": tin.strip(),
        "description": description.strip(),
        "descriptionRu": _optional(description_ru),
        "slogan": _optional(slogan),
        "sloganRu": _optional(slogan_ru),
        "imageId": _optional(image_id),
    }


@router.post("/companies/new", response_class=HTMLResponse)
async def company_create(
    request: Request,
    id: str = Form(default=""),
    name: str = Form(default=""),
    tin: str = Form(default=""),
    description: str = Form(default=""),
    description_ru: str = Form(default=""),
    slogan: str = Form(default=""),
    slogan_ru: str = Form(default=""),
    image_id: str = Form(default=""),
):
    if redirect := _require_auth(request):
        return redirect
    payload = _company_payload(id, name, tin, description, description_ru, slogan, slogan_ru, image_id)
    result = await _api(request).send("POST", "/api/company", payload)
    if result.ok:
        return RedirectResponse(f"/company/{result.data['id']}", status_code=303)
    return _render(
        request,
        "company_form.html",
        {"form": payload, "errors": result.messages, "company": None},
        status_code=_failure_status(result),
    )


@router.get("/company/{company_id}", response_class=HTMLResponse)
async def company_detail(request: Request, company_id: str):
    if redirect := _require_auth(request):
        return redirect
    company = await _company(_api(request), company_id)
    if company is None:
        return _not_found(request)
    return _render(
        request,
        "company_detail.html",
        {"company": company, "form": company, "errors": [], "active_tab": "info"},
    )


@router.post("/company/{company_id}/edit", response_class=HTMLResponse)
async def company_update(
    request: Request,
    company_id: str,
    name: str = Form(default=""),
    tin: str = Form(default=""),
    description: str = Form(default=""),
    description_ru: str = Form(default=""),
    slogan: str = Form(default=""),
    slogan_ru: str = Form(default=""),
    image_id: str = Form(default=""),
):
    if redirect := _require_auth(request):
        return redirect
    api = _api(request)
    payload = _company_payload(company_id, name, tin, description, description_ru, slogan, slogan_ru, image_id)
    result = await api.send("PUT", f"/api/company/{company_id}", payload)
    if result.ok:
        return RedirectResponse(f"/company/{company_id}", status_code=303)
    company = await _company(api, company_id)
    if company is None:
        return _not_found(request)
    return _render(
        request,
        "company_detail.html",
        {"company": company, "form": payload, "errors": result.messages, "active_tab": "info"},
        status_code=_failure_status(result),
    )


@router.post("/company/{company_id}/delete")
async def company_delete(request: Request, company_id: str):
    if redirect := _require_auth(request):
        return redirect
    result = await _api(request).send("DELETE", f"/api/company/{company_id}")
    if not result.ok:
        return _not_found(request)
    return RedirectResponse("/", status_code=303)


# ---------------------------------------------------------------------------
# Stocks
# ---------------------------------------------------------------------------


@router.get("/company/{company_id}/stocks", response_class=HTMLResponse)
async def stocks_page(request: Request, company_id: str, page: Optional[str] = None):
    if redirect := _require_auth(request):
        return redirect
    return await _render_company_list(request, company_id, "stock", "stocks", _page_number(page))


@router.post("/company/{company_id}/stocks", response_class=HTMLResponse)
async def stock_create(request: Request, company_id: str, name: str = Form(default="")):
    if redirect := _require_auth(request):
        return redirect
    result = await _api(request).send("POST", f"/api/company/{company_id}/stock", {"name": name.strip()})
    return await _after_write(request, result, company_id, "stock", "stocks", form={"name": name})


@router.post("/company/{company_id}/stocks/{stock_id}", response_class=HTMLResponse)
async def stock_update(request: Request, company_id: str, stock_id: str, name: str = Form(default="")):
    if redirect := _require_auth(request):
        return redirect
    result = await _api(request).send("PUT", f"/api/company/{company_id}/stock/{stock_id}", {"name": name.strip()})
    return await _after_write(request, result, company_id, "stock", "stocks")


@router.post("/company/{company_id}/stocks/{stock_id}/delete", response_class=HTMLResponse)
async def stock_delete(request: Request, company_id: str, stock_id: str):
    if redirect := _require_auth(request):
        return redirect
    result = await _api(request).send("DELETE", f"/api/company/{company_id}/stock/{stock_id}")
    return await _after_write(request, result, company_id, "stock", "stocks")


# ---------------------------------------------------------------------------
# Price types
# ---------------------------------------------------------------------------


@router.get("/company/{company_id}/price-types", response_class=HTMLResponse)
async def price_types_page(request: Request, company_id: str, page: Optional[str] = None):
    if redirect := _require_auth(request):
        return redirect
    return await _render_company_list(request, company_id, "price-type", "price-types", _page_number(page))


@router.post("/company/{company_id}/price-types", response_class=HTMLResponse)
async def price_type_create(
    request: Request, company_id: str, name: str = Form(default=""), currency: str = Form(default="")
):
    if redirect := _require_auth(request):
        return redirect
    payload = {"name": name.strip(), "currency": currency.strip()}
    result = await _api(request).send("POST", f"/api/company/{company_id}/price-type", payload)
    return await _after_write(request, result, company_id, "price-type", "price-types", form=payload)


@router.post("/company/{company_id}/price-types/{price_type_id}", response_class=HTMLResponse)
async def price_type_update(
    request: Request,
    company_id: str,
    price_type_id: str,
    name: str = Form(default=""),
    currency: str = Form(default=""),
):
    if redirect := _require_auth(request):
        return redirect
    payload = {"name": name.strip(), "currency": currency.strip()}
    result = await _api(request).send("PUT", f"/api/company/{company_id}/price-type/{price_type_id}", payload)
    return await _after_write(request, result, company_id, "price-type", "price-types")


@router.post("/company/{company_id}/price-types/{price_type_id}/delete", response_class=HTMLResponse)
async def price_type_delete(request: Request, company_id: str, price_type_id: str):
    if redirect := _require_auth(request):
        return redirect
    result = await _api(request).send("DELETE", f"/api/company/{company_id}/price-type/{price_type_id}")
    return await _after_write(request, result, company_id, "price-type", "price-types")


# ---------------------------------------------------------------------------
# Members
# ---------------------------------------------------------------------------


@router.get("/company/{company_id}/members", response_class=HTMLResponse)
async def members_page(request: Request, company_id: str, page: Optional[str] = None):
    if redirect := _require_auth(request):
        return redirect
    return await _render_company_list(request, company_id, "member", "members", _page_number(page))


@router.post("/company/{company_id}/members/{user_id}", response_class=HTMLResponse)
async def member_update(request: Request, company_id: str, user_id: int, role_id: str = Form(default="")):
    if redirect := _require_auth(request):
        return redirect
    result = await _api(request).send("PUT", f"/api/company/{company_id}/member/{user_id}", {"roleId": role_id})
    return await _after_write(request, result, company_id, "member", "members")


@router.post("/company/{company_id}/members/{user_id}/delete", response_class=HTMLResponse)
async def member_delete(request: Request, company_id: str, user_id: int):
    if redirect := _require_auth(request):
        return redirect
    result = await _api(request).send("DELETE", f"/api/company/{company_id}/member/{user_id}")
    return await _after_write(request, result, company_id, "member", "members")


# ---------------------------------------------------------------------------
# Roles
# ---------------------------------------------------------------------------


def _grouped_grants(grants: Optional[list[str]]) -> list[dict]:
    """Turn "stockId:priceTypeId" checkbox values into the API's availableData shape."""
    grouped: dict[str, list[dict]] = {}
    for value in grants or []:
        stock_id, _, price_type_id = value.partition(":")
        if stock_id and price_type_id:
            grouped.setdefault(stock_id, []).append({"priceTypeId": price_type_id})
    return [{"stockId": stock_id, "priceTypes": refs} for stock_id, refs in grouped.items()]


def _granted(role: Optional[dict]) -> set[str]:
    if not role:
        return set()
    return {f"{d['stockId']}:{d['priceTypeId']}" for d in role["availableData"] if d.get("stockId")}


async def _render_role_form(
    request: Request,
    company_id: str,
    role_id: Optional[str] = None,
    form: Optional[dict] = None,
    errors: Optional[list[str]] = None,
    status_code: int = 200,
) -> HTMLResponse:
    """New/edit role page. Only the company owner gets it; everybody else sees 404."""
    api = _api(request)
    company = await _company(api, company_id)
    if company is None or not company["isOwner"]:
        return _not_found(request)
    role = None
    if role_id is not None:
        role = await api.get(f"/api/company/{company_id}/role/{role_id}")
        if role is None:
            return _not_found(request)
    return _render(
        request,
        "role_form.html",
        {
            "company": company,
            "role": role,
            "stocks": await _options(api, company_id, "stock"),
            "price_types": await _options(api, company_id, "price-type"),
            "form": form if form is not None else {"name": role["name"] if role else "", "grants": _granted(role)},
            "errors": errors or [],
        },
        status_code=status_code,
    )


@router.get("/company/{company_id}/roles", response_class=HTMLResponse)
async def roles_page(request: Request, company_id: str, page: Optional[str] = None):
    if redirect := _require_auth(request):
        return redirect
    return await _render_company_list(request, company_id, "role", "roles", _page_number(page))


@router.get("/company/{company_id}/roles/new", response_class=HTMLResponse)
async def role_create_form(request: Request, company_id: str):
    if redirect := _require_auth(request):
        return redirect
    return await _render_role_form(request, company_id)


@router.post("/company/{company_id}/roles/new", response_class=HTMLResponse)
async def role_create(
    request: Request,
    company_id: str,
    name: str = Form(default=""),
    grants: Optional[list[str]] = Form(default=None),  # noqa: B008
):
    if redirect := _require_auth(request):
        return redirect
    payload = {"name": name.strip(), "availableData": _grouped_grants(grants)}
    result = await _api(request).send("POST", f"/api/company/{company_id}/role", payload)
    if result.ok:
        return RedirectResponse(f"/company/{company_id}/roles", status_code=303)
    return await _render_role_form(
        request,
        company_id,
        form={"name": name, "grants": set(grants or [])},
        errors=result.messages,
        status_code=_failure_status(result),
    )


@router.get("/company/{company_id}/roles/{role_id}", response_class=HTMLResponse)
async def role_edit_form(request: Request, company_id: str, role_id: str):
    if redirect := _require_auth(request):
        return redirect
    return await _render_role_form(request, company_id, role_id)


@router.post("/company/{company_id}/roles/{role_id}", response_class=HTMLResponse)
async def role_update(
    request: Request,
    company_id: str,
    role_id: str,
    name: str = Form(default=""),
    grants: Optional[list[str]] = Form(default=None),  # noqa: B008
):
    if redirect := _require_auth(request):
        return redirect
    payload = {"name": name.strip(), "availableData": _grouped_grants(grants)}
    result = await _api(request).send("PUT", f"/api/company/{company_id}/role/{role_id}", payload)
    if result.ok:
        return RedirectResponse(f"/company/{company_id}/roles", status_code=303)
    return await _render_role_form(
        request,
        company_id,
        role_id,
        form={"name": name, "grants": set(grants or [])},
        errors=result.messages,
        status_code=_failure_status(result),
    )


@router.post("/company/{company_id}/roles/{role_id}/delete", response_class=HTMLResponse)
async def role_delete(request: Request, company_id: str, role_id: str):
    if redirect := _require_auth(request):
        return redirect
    result = await _api(request).send("DELETE", f"/api/company/{company_id}/role/{role_id}")
    return await _after_write(request, result, company_id, "role", "roles")


# ---------------------------------------------------------------------------
# Invitations
# ---------------------------------------------------------------------------


@router.get("/company/{company_id}/invitations", response_class=HTMLResponse)
async def company_invitations_page(request: Request, company_id: str, page: Optional[str] = None):
    if redirect := _require_auth(request):
        return redirect
    return await _render_company_list(request, company_id, "invitation", "invitations", _page_number(page))


@router.post("/company/{company_id}/invitations", response_class=HTMLResponse)
async def invitation_create(
    request: Request, company_id: str, email: str = Form(default=""), role_id: str = Form(default="")
):
    if redirect := _require_auth(request):
        return redirect
    payload = {"email": email.strip(), "roleId": role_id}
    result = await _api(request).send("POST", f"/api/company/{company_id}/invitation", payload)
    return await _after_write(
        request, result, company_id, "invitation", "invitations", form={"email": email, "role_id": role_id}
    )


@router.post("/company/{company_id}/invitations/{invitation_id}/delete", response_class=HTMLResponse)
async def invitation_delete(request: Request, company_id: str, invitation_id: str):
    if redirect := _require_auth(request):
        return redirect
    result = await _api(request).send("DELETE", f"/api/company/{company_id}/invitation/{invitation_id}")
    return await _after_write(request, result, company_id, "invitation", "invitations")


async def _render_my_invitations(
    request: Request, page: int, errors: Optional[list[str]] = None, status_code: int = 200
) -> HTMLResponse:
    data = await _api(request).get("/api/invitation", page=page, limit=_PAGE_SIZE)
    if data is None:
        return _not_found(request)
    return _render(
        request,
        "my_invitations.html",
        {
            "result": data["result"],
            "pagination": data["pagination"],
            "page_href": "/invitations?page=",
            "errors": errors or [],
        },
        status_code=status_code,
    )


@router.get("/invitations", response_class=HTMLResponse)
async def my_invitations_page(request: Request, page: Optional[str] = None):
    if redirect := _require_auth(request):
        return redirect
    return await _render_my_invitations(request, _page_number(page))


@router.post("/invitations/{invitation_id}/accept", response_class=HTMLResponse)
async def invitation_accept(request: Request, invitation_id: str):
    if redirect := _require_auth(request):
        return redirect
    result = await _api(request).send("POST", f"/api/invitation/{invitation_id}/accept")
    if result.ok:
        return RedirectResponse(f"/company/{result.data['companyId']}", status_code=303)
    return await _render_my_invitations(request, 1, errors=result.messages, status_code=_failure_status(result))


@router.post("/invitations/{invitation_id}/decline", response_class=HTMLResponse)
async def invitation_decline(request: Request, invitation_id: str):
    if redirect := _require_auth(request):
        return redirect
    result = await _api(request).send("DELETE", f"/api/invitation/{invitation_id}")
    if result.ok:
        return RedirectResponse("/invitations", status_code=303)
    return await _render_my_invitations(request, 1, errors=result.messages, status_code=_failure_status(result))
