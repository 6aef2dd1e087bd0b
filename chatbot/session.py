"""Session controller: owns the transcript and the single in-flight request."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional, Tuple

from .config import ChatConfig
from .diagnostics import DiagnosticChannel
from .errors import ChatError, ConfigurationMissing, NetworkFailure
from .registry import DEFAULT_MODEL_ID, ModelDescriptor, lookup
from .request_builder import build_request
from .response_handler import ResponseHandler
from .schemas import CompletionRequest
from .state import Message, MessageStore, Role, SessionState
from .transport import CompletionTransport, HttpCompletionTransport

logger = logging.getLogger(__name__)


class ChatSession:
    """Handles one conversation: history, model selection and sending.

    The session is owned by its caller. ``submit``, ``clear`` and
    ``select_model`` are plain methods; only the transport call is awaited,
    in a task scheduled by ``submit``.
    """

    def __init__(
        self,
        transport: Optional[CompletionTransport],
        *,
        api_key: Optional[str],
        model_id: str = DEFAULT_MODEL_ID,
        diagnostics: Optional[DiagnosticChannel] = None,
        drop_stale_responses: bool = True,
        owns_transport: bool = False,
    ) -> None:
        self._transport = transport
        self._api_key = api_key
        self._owns_transport = owns_transport
        self.selected_model_id = model_id or DEFAULT_MODEL_ID
        self.diagnostics = diagnostics or DiagnosticChannel()
        self.drop_stale_responses = drop_stale_responses
        self.draft = ""
        self._store = MessageStore()
        self._handler = ResponseHandler(self.diagnostics)
        self._state = SessionState.IDLE
        self._generation = 0
        self._inflight: Optional[asyncio.Task] = None

    @classmethod
    def from_config(cls, config: ChatConfig, **kwargs: Any) -> "ChatSession":
        transport = None
        if config.api_key:
            transport = HttpCompletionTransport(
                config.api_key,
                endpoint=config.endpoint,
                timeout=config.timeout_seconds,
            )
        return cls(
            transport,
            api_key=config.api_key,
            model_id=config.model_id,
            owns_transport=transport is not None,
            **kwargs,
        )

    @property
    def history(self) -> Tuple[Message, ...]:
        return self._store.snapshot()

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def sending(self) -> bool:
        return self._state is SessionState.SENDING

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key and self._api_key.strip()) and self._transport is not None

    @property
    def blocked(self) -> bool:
        """True when no credential is configured and nothing can be sent."""
        return not self.is_configured

    @property
    def selected_model(self) -> Optional[ModelDescriptor]:
        return lookup(self.selected_model_id)

    def submit(self, text: Optional[str] = None) -> Optional[asyncio.Task]:
        """
        Accept one user turn and schedule its completion.

        Must be called while an event loop is running. Rejected submits are
        no-ops: nothing is appended and no call is issued.

        Args:
            text: Turn text; the current ``draft`` is used when omitted.

        Returns:
            The task resolving the turn, or None when the submit was rejected.
        """
        raw = self.draft if text is None else text
        if not raw or not raw.strip():
            logger.debug("Ignoring empty submit")
            return None
        if not self.is_configured:
            logger.warning(f"Submit blocked: {ConfigurationMissing.kind} (no API key configured)")
            return None
        if self._state is SessionState.SENDING:
            logger.debug("Ignoring submit while a request is in flight")
            return None

        loop = asyncio.get_running_loop()
        # Built from the history as it was before this turn was appended.
        request = build_request(
            self._store.snapshot(),
            raw,
            self.selected_model,
            model_id=self.selected_model_id or DEFAULT_MODEL_ID,
        )
        self._store.append(Message.create(Role.USER, raw))
        self.draft = ""
        self._state = SessionState.SENDING
        self._inflight = loop.create_task(self._resolve(request, self._generation))
        return self._inflight

    def select_model(self, model_id: str) -> None:
        """Takes effect on the next submit; the in-flight request keeps its model.

        Blank ids are ignored and the current selection stays.
        """
        if not model_id or not model_id.strip():
            logger.warning(f"Ignoring blank model id; keeping {self.selected_model_id!r}")
            return
        if lookup(model_id) is None:
            logger.warning(f"Unknown model id {model_id!r}; requests will use the default token ceiling")
        self.selected_model_id = model_id

    def clear(self) -> None:
        """Empty the history; the selected model and any in-flight call are untouched."""
        self._store.clear()
        self._generation += 1

    async def wait_idle(self) -> None:
        if self._inflight is not None:
            await asyncio.shield(self._inflight)

    async def close(self) -> None:
        await self.wait_idle()
        if self._owns_transport and self._transport is not None:
            aclose = getattr(self._transport, "aclose", None)
            if aclose is not None:
                await aclose()

    async def __aenter__(self) -> "ChatSession":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def _resolve(self, request: CompletionRequest, generation: int) -> Optional[Message]:
        try:
            try:
                body = await self._transport.send(request)
            except ChatError as exc:
                reply = self._handler.on_failure(exc, generation=generation, model=request.model)
            except Exception as exc:  # Unclassified transport errors still end the turn.
                logger.exception("Transport raised an unclassified error")
                reply = self._handler.on_failure(
                    NetworkFailure(f"{type(exc).__name__}: {exc}"),
                    generation=generation,
                    model=request.model,
                )
            else:
                reply = self._handler.on_success(body, generation=generation, model=request.model)

            if generation != self._generation and self.drop_stale_responses:
                self.diagnostics.report_stale(generation=generation, current_generation=self._generation)
                return None
            self._store.append(reply)
            return reply
        finally:
            self._state = SessionState.IDLE
            self._inflight = None
