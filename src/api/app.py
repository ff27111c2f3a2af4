"""FastAPI application exposing the league bot to the chat platform."""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Request
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from api.schemas import (
    ChatResponsePayload,
    InstallationPayload,
    InstallationResponse,
    WebhookEvent,
)
from db import create_db_engine, create_session_factory, ensure_schema
from domain.config import LeagueConfig
from domain.dispatcher import MessageHandler
from domain.exceptions import InvalidMatch
from domain.ratings.registry import calculator_factory
from repositories import InstallationRepository, MatchRepository

logger = logging.getLogger(__name__)


class LeagueServices:
    """Repositories and the message handler shared by all requests."""

    def __init__(self, config: LeagueConfig, session_factory: sessionmaker[Session]) -> None:
        self.config = config
        self.installations = InstallationRepository(session_factory)
        self.matches = MatchRepository(session_factory)
        self.handler = MessageHandler(
            self.installations,
            self.matches,
            calculator_factory(config.rating),
        )


def get_services(request: Request) -> LeagueServices:
    return request.app.state.services


def create_app(config: LeagueConfig, *, engine: Engine | None = None) -> FastAPI:
    """Build the webhook app; tables are created on startup."""
    if engine is None:
        engine = create_db_engine(config.storage.db_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        ensure_schema(engine)
        logger.info("League %s ready (rating system: %s)", config.name, config.rating.system.value)
        yield

    app = FastAPI(
        title="Foosball League Bot",
        description=config.description or "Table football league chat bot",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.services = LeagueServices(config, create_session_factory(engine))

    @app.post("/webhook", response_model=ChatResponsePayload)
    def webhook(event: WebhookEvent, services: LeagueServices = Depends(get_services)):
        """Answer one room message."""
        try:
            installation = services.installations.find_installation(event.oauth_client_id)
            if installation is None:
                logger.warning("Message for unknown installation %s", event.oauth_client_id)
                raise HTTPException(status_code=404, detail="Installation not found")

            response = services.handler.handle(installation, event.to_chat_event())
        except InvalidMatch as e:
            logger.error(f"Stored match history is invalid: {e}")
            raise HTTPException(status_code=500, detail="Invalid match history")
        except SQLAlchemyError as e:
            logger.error(f"Storage failure while handling message: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail="Internal error")

        return response.as_payload()

    @app.post("/installations", response_model=InstallationResponse)
    def install(payload: InstallationPayload, services: LeagueServices = Depends(get_services)):
        """Register the bot for a chat-platform account."""
        try:
            installation = services.installations.register_installation(
                payload.oauth_id,
                payload.oauth_secret,
            )
        except SQLAlchemyError as e:
            logger.error(f"Failed to register installation: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail="Internal error")

        return InstallationResponse(
            oauth_id=installation.oauth_id,
            room_count=len(installation.rooms),
        )

    @app.get("/health")
    def health():
        return {"status": "healthy", "league": config.name}

    return app


__all__ = ["LeagueServices", "create_app", "get_services"]
