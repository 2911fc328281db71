"""Chat session controller.

Owns the in-memory transcript, drives the AI gateway for each submission
and keeps the preference store in sync with the transcript and the user's
preferences.

State machine per conversation:

    IDLE -> SENDING -> (IDLE | ERROR_APPENDED) -> SENDING -> ...

The user's turn is appended before the remote call so it is always
visible; the reply, or the error text in its place, is appended after.
"""

import logging
from collections.abc import Callable
from enum import Enum

from .config import (
    EMPTY_REPLY_TEXT,
    PERSONAL_WELCOME_TEMPLATE,
    UNEXPECTED_FAILURE_TEXT,
    WELCOME_MESSAGE_ID,
    WELCOME_MESSAGES,
)
from .gateway import AIGateway
from .models import ChatMessage, Sender, UserPreferences
from .preferences import PreferenceStore

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    IDLE = "idle"
    SENDING = "sending"
    ERROR_APPENDED = "error_appended"


SessionListener = Callable[["SessionController"], None]


def greeting_text(name: str) -> str:
    """Welcome line, personalized when the name is known."""
    if name:
        return PERSONAL_WELCOME_TEMPLATE.format(name=name)
    return WELCOME_MESSAGES[0]


class SessionController:
    """Conversation state, request lifecycle and preference persistence.

    At most one chat request is in flight; submissions made while one is
    pending are ignored rather than queued.
    """

    def __init__(
        self,
        gateway: AIGateway,
        store: PreferenceStore | None = None,
        user_name: str = "",
        remember_me: bool = False,
    ) -> None:
        self._gateway = gateway
        self._store = store
        self._user_name = user_name
        self._remember_me = remember_me
        self._transcript: list[ChatMessage] = []
        self._state = SessionState.IDLE
        self._started = False
        self._greeted = False
        self._listeners: list[SessionListener] = []

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def busy(self) -> bool:
        return self._state == SessionState.SENDING

    @property
    def transcript(self) -> tuple[ChatMessage, ...]:
        return tuple(self._transcript)

    @property
    def user_name(self) -> str:
        return self._user_name

    @property
    def remember_me(self) -> bool:
        return self._remember_me

    def add_listener(self, listener: SessionListener) -> None:
        """Register a callback run after every transcript or preference change."""
        self._listeners.append(listener)

    def _notify(self) -> None:
        for listener in self._listeners:
            listener(self)

    def preferences(self) -> UserPreferences:
        """Snapshot of the current preferences and transcript."""
        return UserPreferences(
            name=self._user_name,
            remember_me=self._remember_me,
            last_chat=list(self._transcript),
        )

    async def start(self) -> None:
        """Restore stored preferences and greet the user once.

        Safe to call more than once; only the first call has an effect.
        """
        if self._started:
            return
        self._started = True

        if self._store is not None:
            prefs = await self._store.load()
            if prefs is not None:
                self._user_name = prefs.name
                self._remember_me = prefs.remember_me
                self._transcript = list(prefs.last_chat)
                logger.info("Restored %d message(s) from preferences", len(self._transcript))

        if not self._transcript and not self._greeted:
            self._greeted = True
            await self._append(ChatMessage(
                id=WELCOME_MESSAGE_ID,
                sender=Sender.ASSISTANT,
                text=greeting_text(self._user_name),
            ))
        else:
            self._notify()

    async def set_user_name(self, name: str) -> None:
        if name == self._user_name:
            return
        self._user_name = name
        await self._persist()
        self._notify()

    async def set_remember_me(self, remember: bool) -> None:
        if remember == self._remember_me:
            return
        self._remember_me = remember
        if remember:
            await self._persist()
        elif self._store is not None:
            await self._store.clear()
        self._notify()

    async def submit(self, text: str) -> ChatMessage | None:
        """Send a user message and append the assistant's reply.

        Args:
            text: Raw input text

        Returns:
            The assistant turn that was appended, or None if the submission
            was ignored (blank text or a request already in flight).
        """
        message = text.strip()
        if not message or self.busy:
            return None

        self._state = SessionState.SENDING
        await self._append(ChatMessage(sender=Sender.USER, text=message))

        next_state = SessionState.IDLE
        try:
            result = await self._gateway.send_chat_turn(message, self.transcript, self._user_name)
            if result.text:
                reply_text = result.text
            else:
                reply_text = result.error or EMPTY_REPLY_TEXT
                next_state = SessionState.ERROR_APPENDED
        except Exception:
            logger.exception("Failed to send message")
            reply_text = UNEXPECTED_FAILURE_TEXT
            next_state = SessionState.ERROR_APPENDED

        reply = ChatMessage(sender=Sender.ASSISTANT, text=reply_text)
        self._state = next_state
        await self._append(reply)
        return reply

    async def _append(self, message: ChatMessage) -> None:
        self._transcript.append(message)
        await self._persist()
        self._notify()

    async def _persist(self) -> None:
        """Write the preferences record when remember-me is on.

        A storage failure is logged and does not interrupt the conversation.
        """
        if not self._remember_me or self._store is None:
            return
        try:
            await self._store.save(self.preferences())
        except Exception:
            logger.exception("Failed to save user preferences")
