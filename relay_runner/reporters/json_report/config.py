"""Configuration for the JSON reporter."""

from pydantic import BaseModel


class JsonConfig(BaseModel):
    """Configuration for the JSON reporter."""

    include_passing_outcomes: bool = False
