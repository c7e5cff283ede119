from pydantic import BaseModel, ConfigDict, Field


class Position(BaseModel):
    """A zero-indexed line/character location, as used by LSP and index bundles."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    line: int = Field(ge=0)
    character: int = Field(ge=0)

    def __str__(self) -> str:
        return f"{self.line}:{self.character}"


class Range(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    start: Position
    end: Position

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"


EMPTY_POSITION = Position(line=0, character=0)
EMPTY_RANGE = Range(start=EMPTY_POSITION, end=EMPTY_POSITION)


# ---


class PathAdjustment(BaseModel):
    path: str
    ok: bool


class PositionAdjustment(BaseModel):
    path: str
    position: Position | None = None
    ok: bool


class RangeAdjustment(BaseModel):
    path: str
    range: Range | None = None
    ok: bool
