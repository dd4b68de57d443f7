"""
Payload validation.

Field rules live on the pydantic schemas; this module runs them against raw
payloads and renders the failures as plain "field: message" strings, the
same strings the API returns for a rejected request body.
"""

from typing import Any, List, Mapping, Sequence

from pydantic import ValidationError

from moolah.config import settings
from moolah.errors import ValidationFailed
from moolah.schemas.budget import BudgetCreate, BudgetUpdate
from moolah.schemas.category import CategoryCreate, CategoryUpdate
from moolah.schemas.goal import GoalCreate, GoalUpdate
from moolah.schemas.transaction import TransactionCreate, TransactionUpdate
from moolah.schemas.user import UserSelfUpdate

# entity -> (create schema, patch schema)
SCHEMAS = {
    "transaction": (TransactionCreate, TransactionUpdate),
    "budget": (BudgetCreate, BudgetUpdate),
    "goal": (GoalCreate, GoalUpdate),
    "category": (CategoryCreate, CategoryUpdate),
    "user": (UserSelfUpdate, UserSelfUpdate),
}

VALUE_ERROR_PREFIX = "Value error, "


def format_errors(errors: Sequence[Mapping[str, Any]]) -> List[str]:
    """Render pydantic error dicts as human-readable strings."""
    messages = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        message = str(error.get("msg", "is invalid"))
        if message.startswith(VALUE_ERROR_PREFIX):
            message = message[len(VALUE_ERROR_PREFIX):]
        messages.append(f"{'.'.join(loc)}: {message}" if loc else message)
    return messages


def missing_transaction_category(category_id) -> List[str]:
    if settings.require_transaction_category and not category_id:
        return ["category_id: Field required"]
    return []


def validate_payload(entity: str, payload: Any, partial: bool = False) -> List[str]:
    """
    Validate a raw payload for ``entity`` in create or patch mode.

    Returns a list of error strings; an empty list means the payload is
    valid. Patch mode only checks the fields that are present. Checks that
    need stored data (parent existence, duplicate names) are not done here.
    """
    try:
        create_schema, patch_schema = SCHEMAS[entity]
    except KeyError:
        raise ValueError(f"Unknown entity: {entity}") from None

    if not isinstance(payload, Mapping):
        return ["payload must be a JSON object"]

    schema = patch_schema if partial else create_schema
    try:
        schema.model_validate(dict(payload))
    except ValidationError as e:
        return format_errors(e.errors())

    if entity == "transaction" and not partial:
        return missing_transaction_category(payload.get("category_id"))
    return []


def ensure_valid(errors: List[str]) -> None:
    if errors:
        raise ValidationFailed(errors)
