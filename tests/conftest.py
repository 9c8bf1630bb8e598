import json

import httpx
import pytest

from pokemon_data import PokeAPIClient
from ttl_cache import ResponseCache

BASE = "https://pokeapi.test/api/v2"


def pokemon_payload(name, id=1, types=("normal",), abilities=("run-away",), stats=None,
                    height=7, weight=69):
    base = {"hp": 50, "attack": 50, "defense": 50, "special-attack": 50,
            "special-defense": 50, "speed": 50}
    base.update(stats or {})
    return {
        "id": id,
        "name": name,
        "height": height,
        "weight": weight,
        "types": [{"slot": i + 1, "type": {"name": t}} for i, t in enumerate(types)],
        "abilities": [{"ability": {"name": a}, "is_hidden": False} for a in abilities],
        "stats": [{"base_stat": v, "stat": {"name": k}} for k, v in base.items()],
        "sprites": {"front_default": f"https://img.test/{id}.png", "other": {}},
    }


def type_payload(name, double=(), half=(), none=()):
    return {
        "name": name,
        "damage_relations": {
            "double_damage_from": [{"name": t} for t in double],
            "half_damage_from": [{"name": t} for t in half],
            "no_damage_from": [{"name": t} for t in none],
        },
    }


def chain_node(name, *children):
    return {"species": {"name": name}, "evolves_to": list(children)}


class FakePokeAPI:
    """In-memory stand-in for PokeAPI; unknown paths answer 404."""

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []

    def add(self, path, payload):
        self.routes[path] = payload

    def handler(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.calls.append(url)
        payload = self.routes.get(url)
        if payload is None:
            payload = self.routes.get(url.replace(BASE, "", 1))
        if payload is None:
            return httpx.Response(404, text="Not Found")
        if isinstance(payload, httpx.Response):
            return payload
        return httpx.Response(200, content=json.dumps(payload).encode(),
                              headers={"content-type": "application/json"})

    def count(self, path):
        return sum(1 for c in self.calls if c.endswith(path))


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def fake_api():
    return FakePokeAPI()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def client(fake_api, clock):
    http = httpx.AsyncClient(transport=httpx.MockTransport(fake_api.handler))
    return PokeAPIClient(http, ResponseCache(ttl=600, timer=clock), base_url=BASE)
