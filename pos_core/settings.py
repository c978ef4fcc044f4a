# pos_core/settings.py
import logging
from dataclasses import replace

from pos_core.errors import AuthenticationFailure, ValidationError
from pos_core.models import DBState

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("company_name", "currency", "username", "password", "logo")


def update_settings(state: DBState, **fields) -> DBState:
    if not fields:
        return state
    unknown = [k for k in fields if k not in EDITABLE_FIELDS]
    if unknown:
        raise ValidationError(f"Unknown settings field(s): {', '.join(sorted(unknown))}")
    if "username" in fields and not (fields["username"] or "").strip():
        raise ValidationError("Username is required")
    # An empty password field on the form means "keep the current one".
    if "password" in fields and not fields["password"]:
        fields.pop("password")
    return replace(state, settings=replace(state.settings, **fields))


def authenticate(state: DBState, username: str, password: str) -> bool:
    """Plain comparison against the stored credentials."""
    settings = state.settings
    if settings.password is None or username != settings.username or password != settings.password:
        logger.warning("Failed login attempt for user %r", username)
        raise AuthenticationFailure()
    return True
