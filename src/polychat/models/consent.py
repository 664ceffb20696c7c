"""
Consent record: persisted under the translation_consent key.
"""

from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StrictBool


class ConsentRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    granted: StrictBool
    version: str
    granted_at: datetime = Field(
        validation_alias=AliasChoices("grantedAt", "date", "granted_at"),
        serialization_alias="grantedAt",
    )
    provider: Optional[str] = None
    updated_at: Optional[datetime] = Field(
        default=None,
        validation_alias=AliasChoices("updatedAt", "updatedDate", "updated_at"),
        serialization_alias="updatedAt",
    )
