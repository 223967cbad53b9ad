"""
SportsChatOrchestrator - Core business logic layer for the sports chat service.

Key guarantees:
- HTTP/CLI layers stay thin (no provider or retriever imports there)
- Every request is answered from its own message alone; nothing is kept between requests
- No exceptions bubble up from ask(); retrieval and LLM failures become part of the answer
"""

import asyncio
import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from api.base_client import BaseAIClient
from models.chat import ChatResult, ChatTurn, Link
from models.query import Query
from models.unified_response import UnifiedResponse
from orchestrator.query_optimizer import QueryOptimizer
from orchestrator.response_assembler import ResponseAssembler, source_title
from tools.web.base_retriever import DataRetriever
from tools.web.contracts import RetrievalResult
from tools.web.research_pack import build_injected_text
from utils.logger import extra_fields, get_logger

SYSTEM_PROMPT = """You are an NBA and NFL analytics assistant with access to live sports data.

For ANY question about:
- Current games, scores, or schedules ("What games are today?", "Who won last night?")
- Player performance or stats ("How many points did X score?")
- Team records or standings
- Recent game results

answer ONLY from the retrieved data provided in this conversation. Do not make up scores or stats.

When you answer:
1. Present the data in a clear, conversational format
2. Cite the source URLs you relied on
3. If the retrieved data does not contain the answer, say so plainly

For general basketball or football knowledge (history, rules, definitions), you can answer directly."""

APOLOGY = "Sorry, I couldn't generate an answer right now. Please try again in a moment."


@dataclass(frozen=True)
class PreparedChat:
    """Everything needed to produce an answer once retrieval has run."""

    turn: ChatTurn
    query: Query
    retrieval: RetrievalResult
    messages: list[dict[str, str]]


class SportsChatOrchestrator:
    def __init__(
        self,
        llm_client: BaseAIClient,
        retriever: DataRetriever,
        optimizer: QueryOptimizer | None = None,
        assembler: ResponseAssembler | None = None,
        logger: logging.Logger | None = None,
    ):
        self.llm_client = llm_client
        self.retriever = retriever
        self.optimizer = optimizer or QueryOptimizer()
        self.assembler = assembler or ResponseAssembler()
        self.logger = logger or get_logger(__name__)

    # ---------- helpers ----------

    def build_messages(self, turn: ChatTurn, retrieval: RetrievalResult) -> list[dict[str, str]]:
        return [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "system", "content": build_injected_text(retrieval)},
            {"role": turn.role, "content": turn.content},
        ]

    def _thinking(self, prepared: PreparedChat) -> dict[str, Any]:
        retrieval = prepared.retrieval
        return {
            "understood": prepared.query.raw,
            "sport": prepared.query.sport.value,
            "search_query": prepared.query.search_text,
            "strategy": self.retriever.name,
            "result_type": retrieval.kind.value,
            "results_count": retrieval.count,
            "sources": list(retrieval.urls),
        }

    def _fallback_answer(self, prepared: PreparedChat) -> ChatTurn:
        """Apology plus whatever retrieval produced, used when the LLM call failed."""
        retrieval = prepared.retrieval
        parts = [APOLOGY]
        if retrieval.ok:
            parts.append("Here is the raw data I found:")
            parts.append(self.assembler.clean_text(retrieval.to_tool_output()))
        links = tuple(
            Link(title=source_title(url), url=url)
            for url in retrieval.urls[: self.assembler.max_links]
        )
        return ChatTurn(role="assistant", content="\n\n".join(parts), links=links)

    # ---------- public API ----------

    async def prepare(self, turn: ChatTurn) -> PreparedChat:
        """Classify, optimize and retrieve for one user turn."""
        query = self.optimizer.build(turn.content)
        self.logger.info(
            "Query optimized",
            extra=extra_fields(
                sport=query.sport.value,
                temporal=query.temporal.value,
                optimized=query.optimized,
            ),
        )

        retrieval = await self.retriever.search(query)
        self.logger.info(
            "Retrieval finished",
            extra=extra_fields(
                retriever=self.retriever.name,
                result_type=retrieval.kind.value,
                results_count=retrieval.count,
            ),
        )
        return PreparedChat(
            turn=turn,
            query=query,
            retrieval=retrieval,
            messages=self.build_messages(turn, retrieval),
        )

    async def ask(self, message: str) -> ChatResult:
        """
        Answer one stateless question.

        The blocking completion runs in a worker thread; links are extracted
        only after the full answer is known.
        """
        prepared = await self.prepare(ChatTurn.from_user(message))
        response: UnifiedResponse = await asyncio.to_thread(
            self.llm_client.get_completion, prepared.messages
        )

        if response.is_error:
            self.logger.error(
                "Completion failed, answering with retrieval data only",
                extra=extra_fields(
                    request_id=response.request_id,
                    error_code=response.error.code,
                    retryable=response.error.retryable,
                ),
            )
            return ChatResult(
                turn=self._fallback_answer(prepared),
                thinking=self._thinking(prepared),
                data=prepared.retrieval.to_dict(),
                success=False,
            )

        assembled = self.assembler.assemble(response.text, prepared.retrieval.urls)
        self.logger.info(
            "Answer assembled",
            extra=extra_fields(
                request_id=response.request_id,
                latency_ms=response.latency_ms,
                links=len(assembled.links),
            ),
        )
        return ChatResult(
            turn=ChatTurn(role="assistant", content=assembled.text, links=assembled.links),
            thinking=self._thinking(prepared),
            data=prepared.retrieval.to_dict(),
            success=True,
        )

    def stream_answer(self, prepared: PreparedChat) -> Iterator[str]:
        """
        Yield completion text deltas as they arrive. No link extraction.

        A fault after streaming began is logged and ends the stream; one
        before the first delta is answered with the apology instead.
        """
        chunks = 0
        try:
            for delta in self.llm_client.stream_completion(prepared.messages):
                chunks += 1
                yield delta
        except Exception as e:
            self.logger.error(
                "Stream interrupted",
                extra=extra_fields(chunks=chunks, error_type=type(e).__name__, error=str(e)),
            )
            if chunks == 0:
                yield APOLOGY
            return
        self.logger.info("Stream complete", extra=extra_fields(chunks=chunks))
