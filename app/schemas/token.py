from pydantic import BaseModel, Field, StrictFloat, StrictInt
from typing import Literal, Optional, Union

CHECKIN_ISSUER = "market-passport"
CHECKIN_AUDIENCE = "checkin"


class CheckInTokenClaims(BaseModel):
    """チェックインQRのJWTクレーム"""

    iss: Literal["market-passport"]
    aud: Literal["checkin"]
    mid: str = Field(min_length=1)  # marketId
    eid: str = Field(min_length=1)  # eventDayId
    iat: Union[StrictInt, StrictFloat]  # 発行時刻 (Unix timestamp)
    exp: Union[StrictInt, StrictFloat]  # 有効期限 (Unix timestamp)
    jti: Optional[str] = None  # トークンID
