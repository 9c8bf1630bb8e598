# pokemon_data.py
import logging
from typing import Any, Callable, Dict, List, Optional, TypeVar
from urllib.parse import quote

import httpx
from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, ConfigDict, ValidationError

from errors import NotFound, PokedexError, UpstreamError
from evolution import EvolutionNode
from ttl_cache import ResponseCache

logger = logging.getLogger(__name__)

router = APIRouter()
POKEAPI_BASE = "https://pokeapi.co/api/v2"

T = TypeVar("T")


# ----- Records -----
class Creature(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    types: List[str]
    abilities: List[str]
    stats: Dict[str, int]
    height: Optional[int] = None
    weight: Optional[int] = None
    sprite: Optional[str] = None

    @classmethod
    def from_api(cls, p: Dict[str, Any]) -> "Creature":
        sprites = p.get('sprites') or {}
        artwork = ((sprites.get('other') or {}).get('official-artwork') or {}).get('front_default')
        return cls(
            id=p['id'],
            name=p['name'],
            types=[t['type']['name'] for t in p['types']],
            abilities=[a['ability']['name'] for a in p['abilities']],
            stats={s['stat']['name']: s['base_stat'] for s in p['stats']},
            height=p.get('height'),
            weight=p.get('weight'),
            sprite=artwork or sprites.get('front_default'),
        )


class Species(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    evolution_chain_url: Optional[str] = None

    @classmethod
    def from_api(cls, s: Dict[str, Any]) -> "Species":
        chain = s.get('evolution_chain') or {}
        return cls(name=s['name'], evolution_chain_url=chain.get('url'))


class TypeRelations(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    double_damage_from: List[str] = []
    half_damage_from: List[str] = []
    no_damage_from: List[str] = []

    @classmethod
    def from_api(cls, t: Dict[str, Any]) -> "TypeRelations":
        dr = t['damage_relations']
        return cls(
            name=t['name'],
            double_damage_from=[x['name'] for x in dr.get('double_damage_from', [])],
            half_damage_from=[x['name'] for x in dr.get('half_damage_from', [])],
            no_damage_from=[x['name'] for x in dr.get('no_damage_from', [])],
        )


class Move(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    type: Optional[str] = None
    damage_class: Optional[str] = None
    power: Optional[int] = None
    accuracy: Optional[int] = None
    pp: Optional[int] = None
    effect_chance: Optional[int] = None
    short_effect: Optional[str] = None

    @classmethod
    def from_api(cls, m: Dict[str, Any]) -> "Move":
        entries = m.get('effect_entries') or []
        english = [e for e in entries if (e.get('language') or {}).get('name') == "en"]
        entry = (english or entries or [{}])[0]
        return cls(
            name=m['name'],
            type=(m.get('type') or {}).get('name'),
            damage_class=(m.get('damage_class') or {}).get('name'),
            power=m.get('power'),
            accuracy=m.get('accuracy'),
            pp=m.get('pp'),
            effect_chance=m.get('effect_chance'),
            short_effect=entry.get('short_effect'),
        )


def _parse(build: Callable[[Dict[str, Any]], T], data: Dict[str, Any], identifier: str) -> T:
    try:
        return build(data)
    except (AttributeError, KeyError, TypeError, ValidationError) as exc:
        logger.warning("malformed payload for %s: %s", identifier, exc)
        raise UpstreamError(identifier, f"Malformed response for {identifier}") from exc


def _ident(value: Any) -> str:
    return quote(str(value).lower(), safe="")


# ----- Client -----
class PokeAPIClient:
    """Typed, cached access to the PokeAPI resources the bot needs."""

    def __init__(self, http: httpx.AsyncClient, cache: ResponseCache, base_url: str = POKEAPI_BASE):
        self.http = http
        self.cache = cache
        self.base_url = base_url.rstrip("/")

    async def get_json(self, url: str, identifier: Optional[str] = None) -> Dict[str, Any]:
        ident = identifier if identifier is not None else url

        async def fetch() -> Dict[str, Any]:
            try:
                r = await self.http.get(url)
            except httpx.HTTPError as exc:
                logger.warning("request to %s failed: %s", url, exc)
                raise UpstreamError(ident, f"Upstream error: {ident} ({exc.__class__.__name__})") from exc
            if r.status_code == 404:
                raise NotFound(ident)
            if not r.is_success:
                logger.warning("upstream returned %s for %s", r.status_code, url)
                raise UpstreamError(ident, f"Fetch failed {r.status_code}: {ident}")
            try:
                data = r.json()
            except ValueError as exc:
                raise UpstreamError(ident, f"Unreadable response for {ident}") from exc
            if not isinstance(data, dict):
                raise UpstreamError(ident, f"Unexpected response for {ident}")
            return data

        return await self.cache.get_or_fetch(url, fetch)

    async def get_pokemon(self, name_or_id: Any) -> Creature:
        ident = str(name_or_id)
        data = await self.get_json(f"{self.base_url}/pokemon/{_ident(name_or_id)}", ident)
        return _parse(Creature.from_api, data, ident)

    async def get_species(self, name: str) -> Species:
        data = await self.get_json(f"{self.base_url}/pokemon-species/{_ident(name)}", name)
        return _parse(Species.from_api, data, name)

    async def get_type(self, type_name: str) -> TypeRelations:
        data = await self.get_json(f"{self.base_url}/type/{_ident(type_name)}", type_name)
        return _parse(TypeRelations.from_api, data, type_name)

    async def get_move(self, name: str) -> Move:
        data = await self.get_json(f"{self.base_url}/move/{_ident(name)}", name)
        return _parse(Move.from_api, data, name)

    async def get_evolution_chain(self, url: str) -> EvolutionNode:
        data = await self.get_json(url)
        return _parse(lambda d: EvolutionNode.from_api(d['chain']), data, url)


def get_client(request: Request) -> PokeAPIClient:
    return request.app.state.pokeapi


# ----- Routes -----
@router.get("/{name}")
async def pokemon(name: str, request: Request):
    """
    Returns the Pokémon's name, id, types, abilities, base stats and sprite.
    """
    client = get_client(request)
    try:
        p = await client.get_pokemon(name)
    except NotFound:
        raise HTTPException(status_code=404, detail=f"Pokémon not found: {name}")
    except PokedexError as exc:
        raise HTTPException(status_code=exc.http_status, detail=exc.message)
    return {
        "name": p.name,
        "id": p.id,
        "types": p.types,
        "abilities": p.abilities,
        "stats": p.stats,
        "sprite": p.sprite,
    }
