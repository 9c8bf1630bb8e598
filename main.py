# main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from ask import router as ask_router
from config import Settings, load_settings
from pokemon_data import PokeAPIClient
from pokemon_data import router as pokemon_router
from ttl_cache import ResponseCache


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_client(settings: Settings) -> PokeAPIClient:
    return PokeAPIClient(
        httpx.AsyncClient(timeout=settings.timeout),
        ResponseCache(ttl=settings.cache_ttl),
        base_url=settings.pokeapi_base,
    )


def create_app(settings: Optional[Settings] = None, client: Optional[PokeAPIClient] = None) -> FastAPI:
    settings = settings or load_settings()
    configure_logging(settings.log_level)
    pokeapi = client or build_client(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await pokeapi.http.aclose()

    app = FastAPI(title="Pokédex Bot API", lifespan=lifespan)
    app.state.pokeapi = pokeapi

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    # include routers
    app.include_router(pokemon_router, prefix="/pokemon", tags=["Pokemon Data"])
    app.include_router(ask_router, tags=["Questions"])

    @app.get("/status", response_class=PlainTextResponse)
    async def status():
        return "Pokédex Bot API is running. Try /ask?q=weaknesses%20of%20Garchomp"

    return app


app = create_app()


if __name__ == "__main__":
    import os

    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=int(os.getenv("PORT", 3000)))
