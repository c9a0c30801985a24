from pydantic import BaseModel


class VoteToggleResponse(BaseModel):
    review_id: str
    voted: bool
    useful_votes: int


class VoteStateResponse(BaseModel):
    review_id: str
    voted: bool
