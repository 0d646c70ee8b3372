"""Pydantic schema for match launch parameters."""

from pydantic import BaseModel, Field, field_validator, model_validator

from ..utils.constants import DEFAULT_MAX_TURNS, DEFAULT_TURN_TIMEOUT_MS


class MatchConfig(BaseModel):
    """Everything needed to referee one match."""

    map_path: str | None = Field(default=None, description="Map file in Point-in-Time format")
    map_data: str | None = Field(
        default=None, description="Map given directly as Point-in-Time text"
    )
    turn_timeout_ms: int = Field(
        default=DEFAULT_TURN_TIMEOUT_MS, gt=0, description="Time each player has per turn"
    )
    max_turns: int = Field(
        default=DEFAULT_MAX_TURNS,
        ge=0,
        description="Turn limit; past it the player with most ships wins",
    )
    log_path: str | None = Field(default=None, description="Optional match log file")
    player_commands: list[str] = Field(
        min_length=2, description="Command line of each player, in seat order"
    )
    parallel_exchanges: bool = Field(
        default=False,
        description="Talk to all players at once each turn; orders are still "
        "applied in player id order",
    )

    @field_validator("player_commands")
    @classmethod
    def _commands_not_blank(cls, commands: list[str]) -> list[str]:
        for index, command in enumerate(commands, start=1):
            if not command.strip():
                raise ValueError(f"player {index} command is empty")
        return commands

    @model_validator(mode="after")
    def _one_map_source(self) -> "MatchConfig":
        if (self.map_path is None) == (self.map_data is None):
            raise ValueError("exactly one of map_path or map_data is required")
        return self
