"""Starting roster: the empires of a new game and where they begin."""

from __future__ import annotations

from dataclasses import dataclass

from conquest.core.models import Empire, Position, ResourceBundle


@dataclass(frozen=True, slots=True)
class EmpireTemplate:
    """Blueprint for one empire at game start."""

    empire_id: str
    name: str
    color: str
    is_ai: bool
    action_cooldown: float
    start: Position | None = None
    gold: float = 100.0
    population: float = 10.0
    military_ratio: float = 0.3
    gold_per_second: float = 2.0
    population_growth_rate: float = 0.5

    def build(self) -> Empire:
        resources = ResourceBundle(
            gold=self.gold,
            population=self.population,
            max_population=self.population,
            military_ratio=self.military_ratio,
            gold_per_second=self.gold_per_second,
            population_growth_rate=self.population_growth_rate,
            base_gold_per_second=self.gold_per_second,
            base_population_growth_rate=self.population_growth_rate,
        )
        return Empire(
            empire_id=self.empire_id, name=self.name, color=self.color,
            is_ai=self.is_ai, resources=resources,
            last_action_time=0.0, action_cooldown=self.action_cooldown,
        )


HUMAN_EMPIRE_ID = "player"

DEFAULT_ROSTER: tuple[EmpireTemplate, ...] = (
    EmpireTemplate(HUMAN_EMPIRE_ID, "Player", "#3b82f6", False, 2.0, Position(15, 25)),
    EmpireTemplate("ai1", "Roman Empire", "#ef4444", True, 3.0, Position(50, 20)),
    EmpireTemplate("ai2", "Byzantine Empire", "#10b981", True, 3.5, Position(55, 35)),
    EmpireTemplate("ai3", "Holy Roman Empire", "#f59e0b", True, 4.0, Position(35, 15),
                   military_ratio=0.4),
    EmpireTemplate("ai4", "French Kingdom", "#8b5cf6", True, 3.2, Position(20, 20),
                   military_ratio=0.35),
    EmpireTemplate("ai5", "English Kingdom", "#06b6d4", True, 4.5, Position(10, 15),
                   military_ratio=0.25),
    EmpireTemplate("ai6", "Viking Clans", "#84cc16", True, 2.5, Position(25, 10),
                   gold=80.0, population=8.0, military_ratio=0.6,
                   gold_per_second=1.5, population_growth_rate=0.4),
)


def fallback_start(index: int) -> Position:
    """Start position for roster entries without an explicit one."""
    return Position(40 + index * 5, 30 + index * 3)
