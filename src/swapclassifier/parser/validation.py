"""Structural checks on normalized transaction payloads, reported as the first failing field."""

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError
from pydantic.alias_generators import to_camel

from swapclassifier.parser.utils.tokens import mint_format_error


def field_value(payload: Mapping, name: str) -> Any:
    """Look a field up by its snake_case name or its camelCase alias."""
    if name in payload:
        return payload[name]
    return payload.get(to_camel(name))


def is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_transaction(payload: Any) -> str | None:
    """Return a message naming the first failing field, or None when the payload is usable."""
    if not isinstance(payload, Mapping):
        return "Invalid transaction: expected an object"

    signature = field_value(payload, "signature")
    if not isinstance(signature, str) or not signature:
        return "Missing required field: signature"
    if not is_int(field_value(payload, "timestamp")):
        return "Missing required field: timestamp"
    fee_payer = field_value(payload, "fee_payer")
    if not isinstance(fee_payer, str) or not fee_payer:
        return "Missing required field: fee_payer"
    if not isinstance(field_value(payload, "signers"), list):
        return "Missing or invalid required field: signers"
    changes = field_value(payload, "balance_changes")
    if not isinstance(changes, list):
        return "Missing or invalid required field: balance_changes"

    for change in changes:
        if not isinstance(change, Mapping):
            return "Invalid balance change: expected an object"
        error = mint_format_error(change.get("mint"))
        if error:
            return error

    fee = field_value(payload, "fee")
    if isinstance(fee, int | float) and fee < 0:
        return "Invalid fee: must be non-negative"
    return None


def first_validation_error(exc: ValidationError) -> str:
    error = exc.errors()[0]
    location = ".".join(str(part) for part in error["loc"])
    return f"Invalid field {location}: {error['msg']}"
