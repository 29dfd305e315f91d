"""Configuration for the JUnit reporter."""

from pydantic import BaseModel


class JUnitConfig(BaseModel):
    """Configuration for the JUnit reporter."""

    suite_name: str = "relay-runner"
