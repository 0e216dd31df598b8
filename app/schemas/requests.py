from pydantic import BaseModel, Field


class VerifyTokenIn(BaseModel):
    # blank tokens are rejected by the use case with a 400, not here
    token: str = Field(..., description="The one-time token to redeem")
