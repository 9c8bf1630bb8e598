# render.py
from typing import TYPE_CHECKING, List, Optional, Sequence

if TYPE_CHECKING:
    from pokemon_data import Creature, Move
    from type_effectiveness import EffectivenessResult


def capitalize(word: Optional[str]) -> Optional[str]:
    if not word:
        return word
    return word[0].upper() + word[1:]


def oxford_join(items: Sequence[str], conj: str = "and") -> str:
    items = list(items)
    if len(items) <= 1:
        return "".join(items)
    if len(items) == 2:
        return f" {conj} ".join(items)
    return f"{', '.join(items[:-1])}, {conj} {items[-1]}"


def format_multiplier(m: float) -> str:
    if float(m).is_integer():
        return f"×{int(m)}"
    return f"×{m:.2f}"


def render_types(p: "Creature") -> str:
    return f"{capitalize(p.name)} is {oxford_join([capitalize(t) for t in p.types])} type."


def render_stats(p: "Creature") -> str:
    s = p.stats
    return (f"{capitalize(p.name)}'s base stats — HP {s.get('hp')}, Atk {s.get('attack')}, "
            f"Def {s.get('defense')}, SpA {s.get('special-attack')}, "
            f"SpD {s.get('special-defense')}, Spe {s.get('speed')}.")


def render_weaknesses(p: "Creature", result: "EffectivenessResult") -> str:
    w = [f"{capitalize(t)} ({format_multiplier(m)})" for t, m in result.weaknesses]
    r = [f"{capitalize(t)} ({format_multiplier(m)})" for t, m in result.resistances]
    i = [capitalize(t) for t, _ in result.immunities]
    parts = [f"Weak to {oxford_join(w)}." if w else f"{capitalize(p.name)} has no notable weaknesses."]
    if r:
        parts.append(f"Resists {oxford_join(r)}.")
    if i:
        parts.append(f"Immune to {oxford_join(i)}.")
    return " ".join(parts)


def render_evolution(name: str, paths: List[List[str]]) -> str:
    lines = []
    for path in paths:
        line = " → ".join(capitalize(n) for n in path)
        if line not in lines:
            lines.append(line)
    # a lone base form is not a lineage
    if not lines or all(len(path) < 2 for path in paths):
        return f"{capitalize(name)} does not evolve."
    return f"{capitalize(name)}'s evolution line: {' | '.join(lines)}."


def render_speed(a: "Creature", b: "Creature") -> str:
    sa, sb = a.stats.get('speed'), b.stats.get('speed')
    na, nb = capitalize(a.name), capitalize(b.name)
    if sa == sb:
        return f"{na} and {nb} tie in Speed ({sa})."
    if sa > sb:
        return f"{na} is faster than {nb} ({sa} vs {sb})."
    return f"{nb} is faster than {na} ({sb} vs {sa})."


def render_move(move: "Move") -> str:
    parts = []
    if move.type:
        parts.append(f"{capitalize(move.type)}-type")
    if move.damage_class:
        parts.append(f"{move.damage_class} move")
    line1 = f"{capitalize(move.name)} is a {' '.join(parts)}."
    line2 = " • ".join(x for x in [
        f"Power {move.power}" if move.power else None,
        f"Accuracy {move.accuracy}" if move.accuracy else None,
        f"{move.pp} PP" if move.pp else None,
    ] if x)
    chance = "" if move.effect_chance is None else str(move.effect_chance)
    effect = (move.short_effect or "").replace("$effect_chance", chance)
    return "\n".join(x for x in [line1, line2, effect] if x)


def render_dex(p: "Creature") -> str:
    types = oxford_join([capitalize(t) for t in p.types])
    abilities = oxford_join([capitalize(a) for a in p.abilities])
    return (f"{capitalize(p.name)} (#{p.id}) is {types} type. Abilities: {abilities}. "
            f"Height {p.height}, weight {p.weight}.")
