from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class QrTokenRequest(_CamelModel):
    market_id: str = Field(min_length=1)
    day_id: str = Field(min_length=1)
    expires_at: int  # Unix timestamp (秒)


class QrTokenResponse(_CamelModel):
    qr_payload: str


class AdminStats(_CamelModel):
    day_id: str
    today_check_ins: int
    total_check_ins: int
    unique_visitors: int
    new_visitors_today: int
