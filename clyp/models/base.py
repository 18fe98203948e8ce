"""Shared pydantic base for models decoded from Clyp responses."""

from __future__ import annotations

import logging
from typing import Any, List, Type, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from clyp.exceptions import DecodingError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound="WireModel")


class WireModel(BaseModel):
    """Base model whose fields carry the service's wire names as aliases.

    Instances can be built from a response (wire names) or directly by
    callers and tests (attribute names).  Fields marked ``frozen`` hold
    server-assigned values and refuse assignment.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        validate_assignment=True,
        arbitrary_types_allowed=True,
        extra="ignore",
    )

    @classmethod
    def from_response(cls: Type[ModelT], data: Any) -> ModelT:
        """Decode one JSON object into this model, raising DecodingError on a shape mismatch."""
        if not isinstance(data, dict):
            logger.error(f"Expected a JSON object for {cls.__name__}, got {type(data).__name__}")
            raise DecodingError(f"Expected a JSON object for {cls.__name__}, got {type(data).__name__}.")
        try:
            return cls.model_validate(data)
        except PydanticValidationError as e:
            logger.error(f"Response does not match {cls.__name__}: {e}")
            raise DecodingError(f"Response does not match {cls.__name__}: {e}") from e

    @classmethod
    def list_from_response(cls: Type[ModelT], data: Any) -> List[ModelT]:
        """Decode a JSON array into a list of this model."""
        if not isinstance(data, list):
            logger.error(f"Expected a JSON array of {cls.__name__}, got {type(data).__name__}")
            raise DecodingError(f"Expected a JSON array of {cls.__name__}, got {type(data).__name__}.")
        return [cls.from_response(item) for item in data]
