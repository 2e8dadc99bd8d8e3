"""Common base for decoded provider payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class PayloadModel(BaseModel):
    """Base model for provider responses.

    Unknown keys are ignored so new provider fields never break decoding,
    while declared fields keep their types strictly enforced.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)
