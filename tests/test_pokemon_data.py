import asyncio

import httpx
import pytest

from errors import NotFound, UpstreamError
from conftest import BASE, chain_node, pokemon_payload, type_payload


def test_get_pokemon_builds_a_record(client, fake_api):
    fake_api.add("/pokemon/pikachu", pokemon_payload("pikachu", id=25, types=["electric"], stats={"speed": 90}))

    p = asyncio.run(client.get_pokemon("Pikachu"))

    assert p.name == "pikachu"
    assert p.id == 25
    assert p.types == ["electric"]
    assert p.stats["speed"] == 90
    assert p.sprite == "https://img.test/25.png"


def test_identifiers_are_lowercased_and_escaped(client, fake_api):
    with pytest.raises(NotFound):
        asyncio.run(client.get_pokemon("Mr. Mime"))
    assert fake_api.calls == [f"{BASE}/pokemon/mr.%20mime"]


def test_numeric_ids_are_accepted(client, fake_api):
    fake_api.add("/pokemon/25", pokemon_payload("pikachu", id=25))
    assert asyncio.run(client.get_pokemon(25)).name == "pikachu"


def test_official_artwork_is_preferred(client, fake_api):
    payload = pokemon_payload("mew", id=151)
    payload["sprites"]["other"] = {"official-artwork": {"front_default": "https://img.test/art/151.png"}}
    fake_api.add("/pokemon/mew", payload)
    assert asyncio.run(client.get_pokemon("mew")).sprite == "https://img.test/art/151.png"


def test_repeated_lookups_hit_the_cache(client, fake_api):
    fake_api.add("/type/ground", type_payload("ground", double=["water"]))

    async def run():
        await client.get_type("ground")
        return await client.get_type("GROUND")

    relations = asyncio.run(run())
    assert relations.double_damage_from == ["water"]
    assert fake_api.count("/type/ground") == 1


def test_not_found_carries_the_identifier(client):
    with pytest.raises(NotFound) as info:
        asyncio.run(client.get_pokemon("missingno"))
    assert info.value.identifier == "missingno"
    assert info.value.message == "not found: missingno"


def test_failures_are_not_cached(client, fake_api):
    with pytest.raises(NotFound):
        asyncio.run(client.get_pokemon("ditto"))
    fake_api.add("/pokemon/ditto", pokemon_payload("ditto", id=132))
    assert asyncio.run(client.get_pokemon("ditto")).id == 132
    assert fake_api.count("/pokemon/ditto") == 2


def test_server_errors_are_upstream_errors(client, fake_api):
    fake_api.add("/pokemon/eevee", httpx.Response(503, text="busy"))
    with pytest.raises(UpstreamError) as info:
        asyncio.run(client.get_pokemon("eevee"))
    assert "503" in info.value.message


def test_unparsable_body_is_an_upstream_error(client, fake_api):
    fake_api.add("/type/fire", httpx.Response(200, text="<html>oops</html>"))
    with pytest.raises(UpstreamError):
        asyncio.run(client.get_type("fire"))


def test_malformed_payload_is_an_upstream_error(client, fake_api):
    fake_api.add("/pokemon/onix", {"name": "onix"})
    with pytest.raises(UpstreamError):
        asyncio.run(client.get_pokemon("onix"))


@pytest.mark.parametrize("path,payload,fetch", [
    ("/pokemon/pikachu", dict(pokemon_payload("pikachu"), sprites=["oops"]), lambda c: c.get_pokemon("pikachu")),
    ("/type/fire", {"name": "fire", "damage_relations": []}, lambda c: c.get_type("fire")),
    ("/pokemon-species/eevee", {"name": "eevee", "evolution_chain": "chain/67"}, lambda c: c.get_species("eevee")),
    ("/move/ember", {"name": "ember", "type": "fire"}, lambda c: c.get_move("ember")),
])
def test_wrong_container_shapes_are_upstream_errors(client, fake_api, path, payload, fetch):
    fake_api.add(path, payload)
    with pytest.raises(UpstreamError):
        asyncio.run(fetch(client))


def test_transport_errors_are_upstream_errors(client, fake_api):
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    client.http = httpx.AsyncClient(transport=httpx.MockTransport(refuse))
    with pytest.raises(UpstreamError):
        asyncio.run(client.get_species("bulbasaur"))


def test_species_and_chain(client, fake_api):
    chain_url = f"{BASE}/evolution-chain/1/"
    fake_api.add("/pokemon-species/bulbasaur", {"name": "bulbasaur", "evolution_chain": {"url": chain_url}})
    fake_api.add(chain_url, {"id": 1, "chain": chain_node("bulbasaur", chain_node("ivysaur", chain_node("venusaur")))})

    async def run():
        species = await client.get_species("bulbasaur")
        return species, await client.get_evolution_chain(species.evolution_chain_url)

    species, root = asyncio.run(run())
    assert species.evolution_chain_url == chain_url
    assert root.species == "bulbasaur"
    assert root.evolves_to[0].evolves_to[0].species == "venusaur"


def test_move_prefers_english_effect(client, fake_api):
    fake_api.add("/move/ember", {
        "name": "ember", "type": {"name": "fire"}, "damage_class": {"name": "special"},
        "power": 40, "accuracy": 100, "pp": 25, "effect_chance": 10,
        "effect_entries": [
            {"short_effect": "Hat eine Chance.", "language": {"name": "de"}},
            {"short_effect": "Has a $effect_chance% chance to burn the target.", "language": {"name": "en"}},
        ],
    })
    move = asyncio.run(client.get_move("ember"))
    assert move.type == "fire"
    assert move.short_effect.startswith("Has a")
