# ask.py
import asyncio
import logging
from dataclasses import dataclass

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

from errors import PokedexError
from evolution import flatten_chain
from intent import (
    COMPARE_SPEED,
    EVOLUTION,
    MOVE,
    STATS,
    TYPES,
    WEAKNESSES,
    Intent,
    classify,
)
from pokemon_data import PokeAPIClient, get_client
from render import (
    render_dex,
    render_evolution,
    render_move,
    render_speed,
    render_stats,
    render_types,
    render_weaknesses,
)
from type_effectiveness import weaknesses_for

logger = logging.getLogger(__name__)

router = APIRouter()

APOLOGY = "Sorry, I couldn't answer that."


@dataclass(frozen=True)
class Answer:
    intent: Intent
    text: str
    ok: bool = True


async def _resolve(parsed: Intent, client: PokeAPIClient) -> str:
    if parsed.kind == MOVE:
        return render_move(await client.get_move(parsed.move))

    if parsed.kind == COMPARE_SPEED:
        # both lookups in flight before either is awaited
        a, b = await asyncio.gather(
            client.get_pokemon(parsed.name),
            client.get_pokemon(parsed.other),
        )
        return render_speed(a, b)

    p = await client.get_pokemon(parsed.name)

    if parsed.kind == TYPES:
        return render_types(p)
    if parsed.kind == STATS:
        return render_stats(p)
    if parsed.kind == WEAKNESSES:
        return render_weaknesses(p, await weaknesses_for(p, client))
    if parsed.kind == EVOLUTION:
        species = await client.get_species(p.name)
        if not species.evolution_chain_url:
            return render_evolution(p.name, [])
        chain = await client.get_evolution_chain(species.evolution_chain_url)
        return render_evolution(p.name, flatten_chain(chain))
    return render_dex(p)


async def answer(query: str, client: PokeAPIClient) -> Answer:
    """Classify ``query``, look up what it needs and phrase the reply. Never raises."""
    parsed = classify(query)
    logger.debug("query %r classified as %s", query, parsed)
    try:
        text = await _resolve(parsed, client)
    except PokedexError as exc:
        logger.info("could not answer %r: %s", query, exc)
        return Answer(parsed, f"{APOLOGY} {exc.message}", ok=False)
    except Exception as exc:
        logger.exception("unexpected failure answering %r", query)
        return Answer(parsed, f"{APOLOGY} {exc}", ok=False)
    return Answer(parsed, text)


@router.get("/ask", response_class=PlainTextResponse)
async def ask(request: Request, q: str = ""):
    result = await answer(q, get_client(request))
    return PlainTextResponse(result.text, status_code=200 if result.ok else 400)
