# logic/validation.py
"""Request payload checks.

Every parser takes the raw body (JSON dict or form mapping), keeps only the
fields it knows, coerces them and returns a frozen record. Anything wrong is
collected per field and raised as one ``ValidationError``.
"""
import math
import re
from dataclasses import asdict, dataclass
from typing import Optional, Tuple

from logic.errors import ValidationError
from models.room_model import RoomStatus
from models.user_model import ROLES

_SLUG_INVALID = re.compile(r"[^a-z0-9]+")

# Member names are accepted as aliases of the stored values
_STATUS_ALIASES = {
    "Booked": RoomStatus.BOOKED,
    "Sementara": RoomStatus.TEMPORARY,
    "Temporary": RoomStatus.TEMPORARY,
}

_MISSING = object()

# Integer columns are 32-bit signed
INT_MIN = -2 ** 31
INT_MAX = 2 ** 31 - 1


def slugify(value):
    return _SLUG_INVALID.sub("-", str(value).lower()).strip("-")


class _Checker:
    def __init__(self, payload):
        self.payload = payload if payload is not None else {}
        self.errors = {}

    def has(self, field):
        return self.raw(field) is not _MISSING

    def raw(self, field):
        try:
            return self.payload.get(field, _MISSING)
        except AttributeError:
            return _MISSING

    def number(self, field, required=True, integral=False):
        value = self.raw(field)
        if value is _MISSING or value is None:
            if required:
                self.errors[field] = "is required"
            return None
        if isinstance(value, bool):
            self.errors[field] = "must be a number"
            return None
        if isinstance(value, str):
            try:
                value = float(value.strip())
            except ValueError:
                self.errors[field] = "must be a number"
                return None
        if not isinstance(value, (int, float)):
            self.errors[field] = "must be a number"
            return None
        if isinstance(value, float) and not math.isfinite(value):
            self.errors[field] = "must be a finite number"
            return None
        if integral:
            if value != int(value):
                self.errors[field] = "must be a whole number"
                return None
            if not INT_MIN <= int(value) <= INT_MAX:
                self.errors[field] = "is out of range"
                return None
            return int(value)
        return value

    def string(self, field, required=True, allow_empty=False):
        value = self.raw(field)
        if value is _MISSING or value is None:
            if required:
                self.errors[field] = "is required"
            return None
        if not isinstance(value, str):
            self.errors[field] = "must be a string"
            return None
        value = value.strip()
        if not value and not allow_empty:
            if required:
                self.errors[field] = "must not be empty"
            return None
        return value

    def status(self, field, required=True):
        value = self.raw(field)
        if value is _MISSING or value is None:
            if required:
                self.errors[field] = "is required"
            return None
        status = _STATUS_ALIASES.get(value) if isinstance(value, str) else None
        if status is None:
            self.errors[field] = "must be one of: Booked, Sementara"
            return None
        return status.value

    def raise_if_failed(self, message="Invalid request payload."):
        if self.errors:
            names = ", ".join(sorted(self.errors))
            raise ValidationError(f"{message} Invalid field(s): {names}.", fields=self.errors)


@dataclass(frozen=True)
class OutletInput:
    name: str
    slug: Optional[str] = None
    company_name: Optional[str] = None


@dataclass(frozen=True)
class OutletUpdate:
    name: Optional[str] = None
    slug: Optional[str] = None
    company_name: Optional[str] = None


@dataclass(frozen=True)
class FloorInput:
    level: int
    name: str
    view_box: str
    image_url: Optional[str] = None


@dataclass(frozen=True)
class FloorUpdate:
    level: Optional[int] = None
    name: Optional[str] = None
    view_box: Optional[str] = None
    image_url: Optional[str] = None


@dataclass(frozen=True)
class RoomInput:
    code: str
    x: float
    y: float
    width: float
    height: float
    status: str
    tenant_name: Optional[str] = None


@dataclass(frozen=True)
class RoomUpdate:
    code: Optional[str] = None
    floor_level: Optional[int] = None
    x: Optional[float] = None
    y: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None
    status: Optional[str] = None
    # None leaves the tenant untouched, "" clears it
    tenant_name: Optional[str] = None

    def changes(self):
        return {k: v for k, v in asdict(self).items() if v is not None}


@dataclass(frozen=True)
class BulkStatusInput:
    codes: Tuple[str, ...]
    status: str


@dataclass(frozen=True)
class LoginInput:
    email: str
    password: str


@dataclass(frozen=True)
class UserInput:
    email: str
    full_name: str
    password: str
    role: str


def parse_level(raw):
    check = _Checker({"level": raw})
    level = check.number("level", integral=True)
    check.raise_if_failed("Invalid level.")
    return level


def parse_outlet_create(payload):
    check = _Checker(payload)
    name = check.string("name")
    slug = None
    raw_slug = check.string("slug", required=False)
    if raw_slug is not None:
        slug = slugify(raw_slug)
        if not slug:
            check.errors["slug"] = "must contain letters or digits"
    elif name is not None and not slugify(name):
        check.errors["name"] = "must contain letters or digits"
    company_name = check.string("companyName", required=False)
    check.raise_if_failed()
    return OutletInput(name=name, slug=slug, company_name=company_name)


def parse_outlet_update(payload):
    check = _Checker(payload)
    name = check.string("name", required=False)
    company_name = check.string("companyName", required=False)
    slug = None
    raw_slug = check.string("slug", required=False)
    if raw_slug is not None:
        slug = slugify(raw_slug)
        if not slug:
            check.errors["slug"] = "must contain letters or digits"
    check.raise_if_failed()
    if name is None and slug is None and company_name is None:
        raise ValidationError("Nothing to update.")
    return OutletUpdate(name=name, slug=slug, company_name=company_name)


def parse_floor_create(payload):
    check = _Checker(payload)
    level = check.number("level", integral=True)
    name = check.string("name")
    view_box = check.string("viewBox")
    image_url = check.string("imageUrl", required=False, allow_empty=True)
    check.raise_if_failed("Fields level, name and viewBox are required.")
    return FloorInput(level=level, name=name, view_box=view_box, image_url=image_url)


def parse_floor_update(payload, has_image=False):
    """``has_image`` marks a multipart file that counts as a change on its own."""
    check = _Checker(payload)
    level = check.number("level", required=False, integral=True)
    name = check.string("name", required=False)
    view_box = check.string("viewBox", required=False)
    image_url = check.string("imageUrl", required=False, allow_empty=True)
    check.raise_if_failed()
    if not has_image and level is None and name is None and view_box is None and image_url is None:
        raise ValidationError("Nothing to update.")
    return FloorUpdate(level=level, name=name, view_box=view_box, image_url=image_url)


def parse_room_create(payload):
    check = _Checker(payload)
    code = check.string("id")
    x = check.number("x")
    y = check.number("y")
    width = check.number("width")
    height = check.number("height")
    status = check.status("status")
    tenant_name = check.string("tenantName", required=False)
    check.raise_if_failed("Invalid room fields.")
    return RoomInput(
        code=code, x=x, y=y, width=width, height=height, status=status, tenant_name=tenant_name
    )


def parse_room_update(payload):
    check = _Checker(payload)
    code = check.string("id", required=False)
    if check.has("id") and code is None and "id" not in check.errors:
        check.errors["id"] = "must not be empty"
    floor_level = check.number("floorLevel", required=False, integral=True)
    x = check.number("x", required=False)
    y = check.number("y", required=False)
    width = check.number("width", required=False)
    height = check.number("height", required=False)
    status = check.status("status", required=False)

    tenant_name = None
    if check.has("tenantName"):
        raw = check.raw("tenantName")
        if raw is None:
            tenant_name = ""
        else:
            tenant_name = check.string("tenantName", required=False, allow_empty=True)
    check.raise_if_failed("Invalid room fields.")

    update = RoomUpdate(
        code=code, floor_level=floor_level, x=x, y=y, width=width, height=height,
        status=status, tenant_name=tenant_name,
    )
    if not update.changes():
        raise ValidationError("Nothing to update.")
    return update


def parse_bulk_status(payload):
    check = _Checker(payload)
    ids = check.raw("ids")
    codes = []
    if not isinstance(ids, list) or not ids:
        check.errors["ids"] = "must be a non-empty list"
    elif not all(isinstance(i, str) and i.strip() for i in ids):
        check.errors["ids"] = "must contain only non-empty strings"
    else:
        for code in (i.strip() for i in ids):
            if code not in codes:
                codes.append(code)
    status = check.status("status")
    check.raise_if_failed("Invalid bulk status payload.")
    return BulkStatusInput(codes=tuple(codes), status=status)


def parse_login(payload):
    check = _Checker(payload)
    email = check.string("email")
    password = check.raw("password")
    if not isinstance(password, str) or not password:
        check.errors["password"] = "is required"
    check.raise_if_failed("Email and password are required.")
    return LoginInput(email=email.lower(), password=password)


def parse_user_create(payload):
    check = _Checker(payload)
    email = check.string("email")
    if email is not None and "@" not in email:
        check.errors["email"] = "must be a valid email address"
    full_name = check.string("fullName")
    password = check.raw("password")
    if not isinstance(password, str) or len(password) < 8:
        check.errors["password"] = "must be at least 8 characters"
    role = check.string("role", required=False) or "editor"
    if role not in ROLES:
        check.errors["role"] = "must be one of: admin, editor"
    check.raise_if_failed()
    return UserInput(email=email.lower(), full_name=full_name, password=password, role=role)
