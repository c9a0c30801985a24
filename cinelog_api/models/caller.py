from pydantic import BaseModel, ConfigDict


class Caller(BaseModel):
    """Authenticated identity handed over by the identity provider."""

    model_config = ConfigDict(frozen=True)

    user_id: int
    is_admin: bool = False

    def may_act_for(self, user_id: int) -> bool:
        return self.is_admin or self.user_id == user_id
