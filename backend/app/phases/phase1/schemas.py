"""
Phase 1 — Content Extraction: Pydantic schemas for the extracted listing.
"""

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator


class ExtractedListing(BaseModel):
    """Reward and conditions of one points-site campaign, as read by the model.

    Field types are strict: a model answering `"reward": 1000` or
    `"conditions": "..."` is rejected rather than coerced.
    """

    model_config = ConfigDict(frozen=True)

    service_name: StrictStr = Field(..., description="Name of the service or product being promoted")
    reward: StrictStr = Field(..., description="Point reward or percentage, free text (e.g. '1,000 Points (1,000 JPY)')")
    conditions: list[StrictStr] = Field(..., description="Requirements for the reward, in display order")
    denial_conditions: list[StrictStr] = Field(..., description="What invalidates the reward, in display order")

    @field_validator("service_name")
    @classmethod
    def service_name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("service_name must not be blank")
        return v
