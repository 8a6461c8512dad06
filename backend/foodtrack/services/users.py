import logging

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from foodtrack.database import utcnow
from foodtrack.errors import InvalidArgument, NotFound
from foodtrack.models.user import User
from foodtrack.utils.coerce import parse_id

logger = logging.getLogger(__name__)

PROFILE_FIELDS = {"full_name", "household_size", "dietary_preferences", "location"}


def _normalize_email(email: str | None) -> str:
    email = (email or "").strip().lower()
    if not email or "@" not in email:
        raise InvalidArgument(f"A valid email is required, got {email!r}")
    return email


def _validate_household_size(size) -> int:
    if isinstance(size, bool) or not isinstance(size, int) or size < 1:
        raise InvalidArgument(f"household_size must be an integer >= 1, got {size!r}")
    return size


def _normalize_preferences(prefs) -> list[str]:
    if prefs is None:
        return []
    if isinstance(prefs, str) or not all(isinstance(p, str) for p in prefs):
        raise InvalidArgument("dietary_preferences must be a list of strings")
    # Keep first-seen order, drop blanks and duplicates
    seen: list[str] = []
    for p in prefs:
        tag = p.strip().lower()
        if tag and tag not in seen:
            seen.append(tag)
    return seen


def _email_taken(db: Session, email: str) -> bool:
    return db.query(User.id).filter(func.lower(User.email) == email).first() is not None


def register_user(
    db: Session,
    email: str,
    full_name: str | None = None,
    household_size: int = 1,
    dietary_preferences: list[str] | None = None,
    location: str | None = None,
) -> User:
    email = _normalize_email(email)
    household_size = _validate_household_size(household_size)
    prefs = _normalize_preferences(dietary_preferences)
    if _email_taken(db, email):
        raise InvalidArgument("Email already registered")
    user = User(
        email=email,
        full_name=full_name,
        household_size=household_size,
        dietary_preferences=prefs,
        location=location,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration of the same email
        db.rollback()
        raise InvalidArgument("Email already registered")
    db.refresh(user)
    logger.info(f"Registered user {user.id}")
    return user


def get_user(db: Session, user_id) -> User:
    user_id = parse_id(user_id, "user_id")
    user = db.get(User, user_id)
    if user is None:
        raise NotFound("User", user_id)
    return user


def update_profile(db: Session, user_id, **changes) -> User:
    unknown = set(changes) - PROFILE_FIELDS
    if unknown:
        raise InvalidArgument(f"Cannot update fields: {', '.join(sorted(unknown))}")
    if "household_size" in changes:
        _validate_household_size(changes["household_size"])
    if "dietary_preferences" in changes:
        changes["dietary_preferences"] = _normalize_preferences(changes["dietary_preferences"])

    user = get_user(db, user_id)
    for k, v in changes.items():
        setattr(user, k, v)
    user.updated_at = utcnow()
    db.commit()
    db.refresh(user)
    return user
