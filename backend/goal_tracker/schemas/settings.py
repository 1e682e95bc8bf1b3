from pydantic import BaseModel, Field


class SettingsResponse(BaseModel):
    """Ads gate as seen by the current visitor."""
    ads_removed: bool = Field(alias="adsRemoved")

    class Config:
        populate_by_name = True


class SuccessResponse(BaseModel):
    """Acknowledgement for commands without a payload."""
    success: bool = True
