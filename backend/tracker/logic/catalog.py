"""
Static adversary and scenario data.

Adversary levels run 0-6; each level carries the difficulty number that feeds
the score. Scenario difficulty may be negative (Destiny Unfolds is -1).
"""

from pydantic import BaseModel

MAX_ADVERSARY_LEVEL = 6


class AdversaryLevel(BaseModel, frozen=True):
    level: int
    name: str
    difficulty: int


class Adversary(BaseModel, frozen=True):
    name: str
    label: str
    levels: tuple[AdversaryLevel, ...]


class Scenario(BaseModel, frozen=True):
    name: str
    difficulty: int


def _adversary(name: str, label: str, levels: list[tuple[str, int]]) -> Adversary:
    return Adversary(
        name=name,
        label=label,
        levels=tuple(
            AdversaryLevel(level=i, name=level_name, difficulty=difficulty)
            for i, (level_name, difficulty) in enumerate(levels)
        ),
    )


ADVERSARIES: tuple[Adversary, ...] = (
    _adversary(
        "The Kingdom of Brandenberg-Prussia",
        "Brandenberg-Prussia",
        [
            ("Base Adversary", 1),
            ("Fast Start", 2),
            ("Surge of Colonists", 4),
            ("Efficient", 6),
            ("Aggressive Timetable", 7),
            ("Ruthlessly Efficient", 9),
            ("Terrifyingly Efficient", 10),
        ],
    ),
    _adversary(
        "The Kingdom of England",
        "England",
        [
            ("Base Adversary", 1),
            ("Indentured Servants Earn Land", 3),
            ("Criminals and Malcontents", 4),
            ("High Immigration (I)", 6),
            ("High Immigration (Full)", 7),
            ("Local Autonomy", 9),
            ("Independent Resolve", 11),
        ],
    ),
    _adversary(
        "The Kingdom of Sweden",
        "Sweden",
        [
            ("Base Adversary", 1),
            ("Heavy Mining", 2),
            ("Population Pressure at Home", 3),
            ("Fine Steel for Tools and Guns", 5),
            ("Royal Backing", 6),
            ("Mining Rush", 7),
            ("Prospecting Outpost", 8),
        ],
    ),
    _adversary(
        "The Kingdom of France (Plantation Colony)",
        "France",
        [
            ("Base Adversary", 2),
            ("Frontier Explorers", 3),
            ("Slave Labor", 5),
            ("Early Plantation", 7),
            ("Triangle Trade", 8),
            ("Slow-Healing Ecosystem", 9),
            ("Persistent Explorers", 10),
        ],
    ),
    _adversary(
        "The Habsburg Monarchy (Livestock Colony)",
        "Habsburg",
        [
            ("Base Adversary", 2),
            ("Migratory Herders", 3),
            ("More Rural than Urban", 5),
            ("Fast Spread", 6),
            ("Herds Thrive in Verdant Lands", 8),
            ("Wave of Immigration", 9),
            ("Far-Flung Herds", 10),
        ],
    ),
    _adversary(
        "The Tsardom of Russia",
        "Russia",
        [
            ("Base Adversary", 1),
            ("Hunters Bring Home Shell and Hide", 3),
            ("A Sense for Impending Disaster", 4),
            ("Competition Among Hunters", 6),
            ("Accelerated Exploitation", 7),
            ("Entrench in the Face of Fear", 9),
            ("Pressure for Fast Profit", 11),
        ],
    ),
    _adversary(
        "The Kingdom of Scotland",
        "Scotland",
        [
            ("Base Adversary", 1),
            ("Trading Port", 3),
            ("Seize Opportunity", 4),
            ("Chart the Coastline", 6),
            ("Ambition of a Minor Nation", 7),
            ("Runoff and Bilgewater", 8),
            ("Exports Fuel Inward Growth", 10),
        ],
    ),
    _adversary(
        "Habsburg Mining Expedition",
        "Mining Expedition",
        [
            ("Base Adversary", 1),
            ("Avarice Rewarded", 3),
            ("Miners Come From Far and Wide", 4),
            ("Mining Boom (I)", 5),
            ("Untapped Salt Deposits", 7),
            ("Mining Boom (II)", 9),
            ("The Empire Ascendant", 10),
        ],
    ),
)

SCENARIOS: tuple[Scenario, ...] = (
    Scenario(name="Blitz", difficulty=0),
    Scenario(name="Guard the Isle's Heart", difficulty=0),
    Scenario(name="Rituals of Terror", difficulty=3),
    Scenario(name="Dahan Insurrection", difficulty=4),
    Scenario(name="Second Wave", difficulty=1),
    Scenario(name="Powers Long Forgotten", difficulty=1),
    Scenario(name="Ward the Shores", difficulty=2),
    Scenario(name="Rituals of the Destroying Flame", difficulty=3),
    Scenario(name="Elemental Invocation", difficulty=1),
    Scenario(name="Despicable Theft", difficulty=2),
    Scenario(name="The Great River", difficulty=3),
    Scenario(name="A Diversity of Spirits", difficulty=0),
    Scenario(name="Varied Terrains", difficulty=2),
    Scenario(name="Destiny Unfolds", difficulty=-1),
    Scenario(name="Surges of Colonization", difficulty=2),
    Scenario(name="Surges of Colonization (Larger Surges)", difficulty=7),
)

_ADVERSARIES_BY_NAME = {a.name: a for a in ADVERSARIES}
_SCENARIOS_BY_NAME = {s.name: s for s in SCENARIOS}


def find_adversary(name: str) -> Adversary | None:
    return _ADVERSARIES_BY_NAME.get(name)


def find_scenario(name: str) -> Scenario | None:
    return _SCENARIOS_BY_NAME.get(name)


def adversary_difficulty(name: str, level: int) -> int:
    """Difficulty number for an adversary at a level.

    Raises ValueError for an unknown adversary or a level outside 0-6.
    """
    adversary = find_adversary(name)
    if adversary is None:
        raise ValueError(f"Unknown adversary: {name!r}")
    if not 0 <= level <= MAX_ADVERSARY_LEVEL:
        raise ValueError(f"Adversary level must be between 0 and {MAX_ADVERSARY_LEVEL}, got {level}")
    return adversary.levels[level].difficulty


def scenario_difficulty(name: str) -> int:
    """Difficulty number for a scenario. Raises ValueError for an unknown scenario."""
    scenario = find_scenario(name)
    if scenario is None:
        raise ValueError(f"Unknown scenario: {name!r}")
    return scenario.difficulty
