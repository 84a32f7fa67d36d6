"""Move models."""

from pydantic import BaseModel

from .board import Position


class Move(BaseModel, frozen=True):
    """An intended jump from one position to another."""

    from_pos: Position
    to_pos: Position

    def __str__(self) -> str:
        return f"{self.from_pos} -> {self.to_pos}"


class InFlightMove(BaseModel, frozen=True):
    """A validated move waiting to be applied.

    mid is the cell of the marble being captured.
    """

    from_pos: Position
    to_pos: Position
    mid: Position

    def __str__(self) -> str:
        return f"{self.from_pos} -> {self.to_pos} (over {self.mid})"
