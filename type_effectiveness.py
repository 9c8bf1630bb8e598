# type_effectiveness.py
from typing import TYPE_CHECKING, Dict, Iterable, List, Tuple

from pydantic import BaseModel

if TYPE_CHECKING:
    from pokemon_data import Creature, PokeAPIClient, TypeRelations

ALL_TYPES = [
    "normal", "fire", "water", "electric", "grass", "ice",
    "fighting", "poison", "ground", "flying", "psychic", "bug",
    "rock", "ghost", "dragon", "dark", "steel", "fairy",
]


class EffectivenessResult(BaseModel):
    weaknesses: List[Tuple[str, float]] = []
    resistances: List[Tuple[str, float]] = []
    immunities: List[Tuple[str, float]] = []


def combine_relations(relations: Iterable["TypeRelations"]) -> Dict[str, float]:
    """Multiplier of every attacking type against a defender with the given type records."""
    mult = {t: 1.0 for t in ALL_TYPES}
    for rel in relations:
        for t in rel.double_damage_from:
            if t in mult:
                mult[t] *= 2
        for t in rel.half_damage_from:
            if t in mult:
                mult[t] *= 0.5
        for t in rel.no_damage_from:
            if t in mult:
                mult[t] *= 0
    return mult


def partition(mult: Dict[str, float]) -> EffectivenessResult:
    entries = list(mult.items())
    return EffectivenessResult(
        weaknesses=sorted([e for e in entries if e[1] > 1], key=lambda e: e[1], reverse=True),
        resistances=sorted([e for e in entries if 0 < e[1] < 1], key=lambda e: e[1]),
        immunities=[e for e in entries if e[1] == 0],
    )


async def weaknesses_for(creature: "Creature", client: "PokeAPIClient") -> EffectivenessResult:
    # one type at a time, like the defender's own slots
    relations = []
    for t in creature.types:
        relations.append(await client.get_type(t))
    return partition(combine_relations(relations))
