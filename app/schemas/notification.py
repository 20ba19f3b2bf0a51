from typing import Literal

from pydantic import BaseModel


class Notification(BaseModel):
    """A transient message the page shows as a toast."""

    title: str
    description: str
    variant: Literal["default", "destructive"] = "default"
