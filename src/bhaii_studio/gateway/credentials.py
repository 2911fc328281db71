"""Credential resolution and reselection.

The API key is resolved at call time so that a key chosen after startup
is picked up by the next request. Reselection is a capability supplied by
the host (a TUI dialog, a console prompt, or nothing at all).
"""

import logging
import os
from abc import ABC, abstractmethod

from ..config import API_KEY_ENV_VARS
from ..errors import MissingCredentialError

logger = logging.getLogger(__name__)


class CredentialSource:
    """Resolves the API key from an explicit selection or the environment."""

    def __init__(
        self,
        api_key: str | None = None,
        env_vars: tuple[str, ...] = API_KEY_ENV_VARS,
    ):
        self._selected = api_key or None
        self._env_vars = env_vars

    def select(self, api_key: str | None) -> None:
        """Override the environment with an explicitly chosen key.

        Passing None or an empty string drops the override.
        """
        self._selected = api_key.strip() if api_key and api_key.strip() else None

    def resolve(self) -> str:
        """Return the current API key.

        Raises:
            MissingCredentialError: If no key is selected or configured
        """
        if self._selected:
            return self._selected
        for name in self._env_vars:
            value = os.getenv(name)
            if value:
                return value
        raise MissingCredentialError(
            f"API key is not set. Please configure one of: {', '.join(self._env_vars)}"
        )

    @property
    def has_key(self) -> bool:
        try:
            self.resolve()
        except MissingCredentialError:
            return False
        return True


class CredentialReselector(ABC):
    """Host capability that lets the user pick a different API key."""

    @abstractmethod
    async def request_reselection(self) -> None:
        """Ask the user to select an API key again.

        The caller does not inspect the outcome.
        """


class NullReselector(CredentialReselector):
    """Reselector for hosts without an interactive key dialog."""

    async def request_reselection(self) -> None:
        logger.warning(
            "API key was rejected; set %s to a valid key and try again",
            " or ".join(API_KEY_ENV_VARS),
        )
