# evolution.py
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict


class EvolutionNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    species: str
    evolves_to: List["EvolutionNode"] = []

    @classmethod
    def from_api(cls, chain: Dict[str, Any]) -> "EvolutionNode":
        """Build the tree from a PokeAPI ``chain`` object (recursive)."""
        return cls(
            species=chain['species']['name'],
            evolves_to=[cls.from_api(child) for child in chain.get('evolves_to') or []],
        )


EvolutionNode.model_rebuild()


def flatten_chain(root: EvolutionNode) -> List[List[str]]:
    """
    Returns every root-to-leaf lineage as a list of species names, depth first.
    Identical lineages from different branches are kept; dedupe for display only.
    """
    paths: List[List[str]] = []

    def walk(node: EvolutionNode, acc: List[str]) -> None:
        path = acc + [node.species]
        if not node.evolves_to:
            paths.append(path)
            return
        for child in node.evolves_to:
            walk(child, path)

    walk(root, [])
    return paths
