"""Base adapter interface: provider payload -> NormalizedTransaction."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from swapclassifier.domain.enums import Provider
from swapclassifier.parser.utils.types import NormalizedTransaction
from swapclassifier.parser.validation import first_validation_error, validate_transaction


class AdapterError(ValueError):
    """The payload cannot be turned into a NormalizedTransaction."""


class BaseAdapter(ABC):
    """Minimal interface all provider adapters must implement."""

    PROVIDER: Provider = Provider.NORMALIZED

    @abstractmethod
    def can_adapt(self, payload: Mapping) -> bool:
        """Quick shape check: does this payload come from our provider?"""

    @abstractmethod
    def adapt(self, payload: Mapping) -> NormalizedTransaction:
        """Normalize the payload. Raises AdapterError when it is unusable."""

    def _require(self, payload: Mapping, key: str) -> Any:
        value = payload.get(key)
        if value is None or value == "":
            raise AdapterError(f"Missing required field: {key}")
        return value

    def _list(self, payload: Mapping, key: str) -> list:
        value = payload.get(key)
        if value is None:
            return []
        if not isinstance(value, list):
            raise AdapterError(f"Missing or invalid required field: {key}")
        return value

    def _build(self, **fields: Any) -> NormalizedTransaction:
        """Construct the normalized model, turning schema errors into AdapterError."""
        try:
            return NormalizedTransaction(provider=self.PROVIDER, **fields)
        except ValidationError as e:
            raise AdapterError(f"Invalid {self.PROVIDER.value} payload: {first_validation_error(e)}") from e


class NormalizedAdapter(BaseAdapter):
    """Payloads already in the provider-agnostic shape."""

    PROVIDER = Provider.NORMALIZED

    def can_adapt(self, payload: Mapping) -> bool:
        return "balanceChanges" in payload or "balance_changes" in payload

    def adapt(self, payload: Mapping) -> NormalizedTransaction:
        error = validate_transaction(payload)
        if error:
            raise AdapterError(error)
        try:
            return NormalizedTransaction.model_validate(payload)
        except ValidationError as e:
            raise AdapterError(first_validation_error(e)) from e
