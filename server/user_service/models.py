from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, StrictStr, model_validator

# ---- Request Models ----

class CreateUserRequest(BaseModel):
    """JSON body accepted by POST /user. Unknown fields are ignored."""
    model_config = ConfigDict(extra="ignore")

    name: Optional[StrictStr] = None  # null behaves like an absent field

    @model_validator(mode="before")
    @classmethod
    def fold_name_key(cls, data: Any) -> Any:
        """Match the ``name`` key case-insensitively; the last matching key wins."""
        if not isinstance(data, dict):
            return data
        folded = {k: v for k, v in data.items() if k.lower() != "name"}
        for key, value in data.items():
            if key.lower() == "name":
                folded["name"] = value
        return folded

# ---- Response Models ----

class ErrorResponse(BaseModel):
    error: str

class UserResponse(BaseModel):
    user_id: int

class CreatedResponse(BaseModel):
    created: str  # The submitted name, trimmed
