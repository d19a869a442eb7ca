from pydantic import BaseModel, ConfigDict, Field, model_validator

from shared.dal.models import PROFILE_NAME_MAX_LENGTH, GameDraft
from tracker.logic.catalog import MAX_ADVERSARY_LEVEL, adversary_difficulty, find_scenario, scenario_difficulty


def _name(value: object) -> str | None:
    if isinstance(value, str):
        return value.strip() or None
    return None


class _GameRequest(GameDraft, frozen=True):
    """Game facts as submitted by a client.

    Difficulties left out are filled from the catalog: an adversary_level
    resolves to the adversary's difficulty at that level, and a known
    scenario name resolves to its difficulty. Explicit values win.
    """

    model_config = ConfigDict(extra="forbid")

    adversary_level: int | None = Field(default=None, ge=0, le=MAX_ADVERSARY_LEVEL)

    @model_validator(mode="before")
    @classmethod
    def _resolve_catalog_difficulty(cls, data: object) -> object:
        if not isinstance(data, dict):
            return data
        data = dict(data)

        level = data.get("adversary_level")
        if isinstance(level, int) and not isinstance(level, bool) and data.get("adversary_difficulty") is None:
            adversary = _name(data.get("adversary"))
            if adversary is None:
                raise ValueError("Adversary level requires an adversary")
            data["adversary_difficulty"] = adversary_difficulty(adversary, level)

        scenario = _name(data.get("scenario"))
        if scenario is not None and data.get("scenario_difficulty") is None and find_scenario(scenario) is not None:
            data["scenario_difficulty"] = scenario_difficulty(scenario)
        return data

    def to_draft(self) -> GameDraft:
        return GameDraft(**self.model_dump(exclude={"profile_id", "adversary_level"}))


class CreateGameRequest(_GameRequest, frozen=True):
    profile_id: str


class UpdateGameRequest(_GameRequest, frozen=True):
    profile_id: str | None = None  # move the game to another profile


class CreateProfileRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1, max_length=PROFILE_NAME_MAX_LENGTH)
