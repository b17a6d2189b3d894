from pydantic import BaseModel


class MessageResponse(BaseModel):
    """
    Standard response structure, used for successes and errors alike.
    """
    message: str
