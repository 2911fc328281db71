"""Application context.

Builds the shared collaborators once and hands them to the front ends
(TUI and CLI) explicitly, instead of relying on module-level globals.
"""

import logging
from dataclasses import dataclass, field

from .config import Settings, load_settings
from .gateway import AIGateway, CredentialReselector, CredentialSource, create_gateway
from .navigation import NavigationShell
from .preferences import PreferenceStore
from .session import SessionController
from .storage import LocalStorage, create_local_storage

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Single source of truth for application-level state."""

    settings: Settings
    credentials: CredentialSource
    storage: LocalStorage
    gateway: AIGateway
    session: SessionController
    navigation: NavigationShell = field(default_factory=NavigationShell)

    @classmethod
    def build(
        cls,
        settings: Settings | None = None,
        reselector: CredentialReselector | None = None,
        credentials: CredentialSource | None = None,
        gateway: AIGateway | None = None,
        storage: LocalStorage | None = None,
    ) -> "AppContext":
        """Wire the default collaborators; any of them can be overridden."""
        settings = settings or load_settings()
        credentials = credentials or CredentialSource()
        if storage is None:
            storage_config = {}
            if settings.storage_backend != "memory":
                storage_config["path"] = settings.storage_path
            storage = create_local_storage(settings.storage_backend, **storage_config)
        if gateway is None:
            gateway = create_gateway(
                "gemini",
                credentials=credentials,
                reselector=reselector,
                chat_model=settings.chat_model,
                image_edit_model=settings.image_edit_model,
                hd_image_model=settings.hd_image_model,
            )
        session = SessionController(gateway, PreferenceStore(storage))
        return cls(
            settings=settings,
            credentials=credentials,
            storage=storage,
            gateway=gateway,
            session=session,
        )

    async def open(self) -> None:
        """Connect storage and restore the chat session."""
        await self.storage.connect()
        logger.info("Storage connected (%s)", self.storage.backend_type)
        await self.session.start()

    async def close(self) -> None:
        await self.gateway.close()
        await self.storage.disconnect()
