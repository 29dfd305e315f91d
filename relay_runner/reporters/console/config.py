"""Configuration for the console reporter."""

from pydantic import BaseModel


class ConsoleConfig(BaseModel):
    """Configuration for the console reporter."""

    show_passing: bool = False
    runner_name: str = "relay-runner"
