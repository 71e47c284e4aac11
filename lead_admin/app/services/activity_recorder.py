"""
Activity Recorder

Turns a finished request/response pair into one ActivityLog row.
Runs after the response has been sent and never raises.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, AsyncContextManager, Callable, Dict, Mapping, Optional, Tuple

from lead_admin.app.security.identity import Identity
from lead_admin.app.services.geo_lookup import IGeoLookup
from lead_admin.app.services.unit_of_work import UnitOfWork
from lead_admin.domain.entities import ActivityAction, ActivityLog, ResourceType

logger = logging.getLogger(__name__)

SKIP_ENDPOINTS = frozenset({"/health", "/api/admin/users/logout"})

SENSITIVE_FIELDS = (
    "password",
    "passwordhash",
    "token",
    "jwt",
    "secret",
    "apikey",
    "authorization",
)
REDACTED = "[REDACTED]"

MAX_BODY_SIZE = 10000

FILTER_FIELDS = (
    "search",
    "status",
    "city",
    "source",
    "companyID",
    "createdBy",
    "updatedBy",
    "createdFrom",
    "createdTo",
    "updatedFrom",
    "updatedTo",
)

RESOURCE_ID_PARAMS = ("id", "companyID", "investorId", "userId")


@dataclass(frozen=True)
class RequestContext:
    method: str
    path: str
    path_params: Mapping[str, Any] = field(default_factory=dict)
    query_params: Mapping[str, str] = field(default_factory=dict)
    headers: Mapping[str, str] = field(default_factory=dict)
    client_host: Optional[str] = None
    body: Any = None
    identity: Optional[Identity] = None


@dataclass(frozen=True)
class ResponseContext:
    status_code: int
    body: Any = None
    duration_ms: Optional[int] = None


def _is_auth_endpoint(path: str) -> bool:
    return "/login" in path or "/logout" in path


def should_track(req: RequestContext) -> bool:
    """
    GET requests and deny-listed endpoints are never tracked. Anonymous
    requests are tracked only on login and logout.
    """
    if req.method.upper() == "GET":
        return False
    if req.path in SKIP_ENDPOINTS:
        return False
    if req.identity is None and not _is_auth_endpoint(req.path):
        return False
    return True


def derive_action(method: str, path: str) -> str:
    if "/login" in path:
        return ActivityAction.LOGIN.value
    if "/logout" in path:
        return ActivityAction.LOGOUT.value
    if "/transfer" in path:
        return ActivityAction.TRANSFER.value

    method = method.upper()
    if method == "POST":
        return ActivityAction.CREATE.value
    if method in ("PUT", "PATCH"):
        return ActivityAction.UPDATE.value
    if method == "DELETE":
        return ActivityAction.DELETE.value
    if method == "GET":
        return ActivityAction.READ.value
    return method


def derive_resource_type(path: str) -> str:
    # investor-admin has to be checked before investor
    if "/investor-admin" in path:
        return ResourceType.InvestorAdmin.value
    if "/investor-form" in path or "/investor" in path:
        return ResourceType.Investor.value
    if "/company" in path:
        return ResourceType.Company.value
    if "/users" in path or "/user" in path:
        return ResourceType.User.value
    return ResourceType.Unknown.value


def derive_resource_id(req: RequestContext, resp: ResponseContext) -> Optional[str]:
    for name in RESOURCE_ID_PARAMS:
        value = req.path_params.get(name)
        if value not in (None, ""):
            return str(value)

    if isinstance(req.body, dict) and req.body.get("id") not in (None, ""):
        return str(req.body["id"])

    if req.method.upper() == "POST" and resp.status_code == 201 and isinstance(resp.body, dict):
        data = resp.body.get("data")
        if isinstance(data, dict):
            for key in ("id", "companyID"):
                if data.get(key) not in (None, ""):
                    return str(data[key])
        if resp.body.get("id") not in (None, ""):
            return str(resp.body["id"])

    return None


def resolve_actor(
    req: RequestContext, resp: ResponseContext
) -> Tuple[Optional[str], str, str, Optional[int]]:
    """
    (actor_id, username, role, company_id) for the event.

    A login has no identity yet, so a successful one is attributed from the
    response's user object, falling back to the submitted username.
    """
    if req.identity is not None:
        identity = req.identity
        return (
            identity.subject_id,
            identity.username,
            identity.role.value,
            identity.company_scope,
        )

    submitted = req.body.get("username") if isinstance(req.body, dict) else None

    if "/login" in req.path and resp.status_code == 200:
        user = resp.body.get("user") if isinstance(resp.body, dict) else None
        if isinstance(user, dict):
            return (
                user.get("id") or None,
                user.get("username") or submitted or "unknown",
                user.get("role") or "unknown",
                user.get("companyId") or None,
            )
        if submitted:
            return None, submitted, "none", None

    return None, "anonymous", "none", None


def _is_sensitive(key: str) -> bool:
    lowered = key.lower()
    return any(name in lowered for name in SENSITIVE_FIELDS)


def sanitize_request_data(data: Any) -> Any:
    """Replace sensitive values with [REDACTED] at any depth."""
    if isinstance(data, list):
        return [sanitize_request_data(item) for item in data]
    if not isinstance(data, dict):
        return data

    sanitized = {}
    for key, value in data.items():
        if _is_sensitive(str(key)):
            sanitized[key] = REDACTED
        else:
            sanitized[key] = sanitize_request_data(value)
    return sanitized


def cap_body(body: Any, max_size: int = MAX_BODY_SIZE) -> Any:
    size = len(json.dumps(body, separators=(",", ":"), default=str))
    if size > max_size:
        return {
            "_truncated": True,
            "_size": size,
            "_message": "Request body too large, truncated",
        }
    return body


def format_error(error: Any) -> Optional[str]:
    if error is None or error == "":
        return None
    if isinstance(error, str):
        return error
    if isinstance(error, BaseException):
        return str(error)
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    message = getattr(error, "message", None)
    if message:
        return str(message)
    return str(error)


def extract_error_message(resp: ResponseContext) -> Optional[str]:
    if resp.status_code < 400:
        return None
    body = resp.body
    if isinstance(body, dict):
        return format_error(
            body.get("error") or body.get("message") or body.get("detail") or body
        )
    if isinstance(body, str):
        return body or None
    return None


def _parse_int(value: Optional[str]) -> Optional[int]:
    try:
        return int(value) if value is not None else None
    except ValueError:
        return None


def extract_metadata(
    query_params: Mapping[str, str], path_params: Mapping[str, Any]
) -> Optional[Dict[str, Any]]:
    """Query params, pagination, known filters and route params."""
    metadata: Dict[str, Any] = {}

    if query_params:
        metadata["queryParams"] = dict(query_params)

    if query_params.get("page") or query_params.get("limit"):
        metadata["pagination"] = {
            "page": _parse_int(query_params.get("page")),
            "limit": _parse_int(query_params.get("limit")),
        }

    filters = {
        name: query_params[name]
        for name in FILTER_FIELDS
        if query_params.get(name) and query_params[name] != "all"
    }
    if filters:
        metadata["filters"] = filters

    if path_params:
        metadata["routeParams"] = {k: str(v) for k, v in path_params.items()}

    return metadata or None


def client_ip(headers: Mapping[str, str], client_host: Optional[str]) -> Optional[str]:
    forwarded = headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    real_ip = headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()
    return client_host


class ActivityRecorder:
    """
    Writes audit events through a fresh unit of work.

    uow_factory returns an async context manager yielding a UnitOfWork; each
    event is committed on its own so a failed write never touches the
    request's transaction.
    """

    def __init__(
        self,
        uow_factory: Callable[[], AsyncContextManager[UnitOfWork]],
        geo_lookup: Optional[IGeoLookup] = None,
        max_body_size: int = MAX_BODY_SIZE,
        enabled: bool = True,
    ):
        self.uow_factory = uow_factory
        self.geo_lookup = geo_lookup
        self.max_body_size = max_body_size
        self.enabled = enabled

    def build_event(self, req: RequestContext, resp: ResponseContext) -> ActivityLog:
        actor_id, username, role, company_id = resolve_actor(req, resp)

        request_body = None
        if req.method.upper() != "GET" and req.body not in (None, "", {}, []):
            request_body = cap_body(sanitize_request_data(req.body), self.max_body_size)

        return ActivityLog(
            actor_id=actor_id,
            actor_username=username,
            actor_role=role,
            company_id=company_id,
            action=derive_action(req.method, req.path),
            resource_type=derive_resource_type(req.path),
            resource_id=derive_resource_id(req, resp),
            http_method=req.method.upper(),
            endpoint=req.path,
            status_code=resp.status_code,
            duration_ms=resp.duration_ms,
            client_ip=client_ip(req.headers, req.client_host),
            user_agent=req.headers.get("user-agent"),
            request_body=request_body,
            error_message=extract_error_message(resp),
            event_metadata=extract_metadata(req.query_params, req.path_params),
        )

    async def record(
        self, req: RequestContext, resp: ResponseContext, *, force: bool = False
    ) -> None:
        """
        Record one tracked request.

        Args:
            req: Finalised request metadata
            resp: Finalised response metadata
            force: Skip the tracking rules (handlers recording their own event)
        """
        if not self.enabled:
            return
        if not force and not should_track(req):
            return

        try:
            event = self.build_event(req, resp)
            if self.geo_lookup is not None:
                event.location = await self.geo_lookup.resolve(event.client_ip)

            async with self.uow_factory() as uow:
                await uow.activity_logs.create(event)
                await uow.commit()

            logger.debug(
                f"Recorded {event.action} {event.resource_type} "
                f"status={event.status_code} actor={event.actor_username}"
            )
        except Exception:
            logger.exception(f"Failed to record activity for {req.method} {req.path}")
