"""Build the retrieval injection text handed to the language model."""

from .contracts import RetrievalResult

SEPARATOR = "=" * 80


def build_injected_text(result: RetrievalResult) -> str:
    """
    Wrap retrieval output with grounding instructions for the LLM context.

    Failure results are injected too, so the model can explain what went
    wrong instead of inventing data.
    """
    if result.ok:
        header = [
            "LIVE SPORTS DATA RETRIEVED FOR THIS QUESTION.",
            "Use ONLY the data below for scores, schedules and stats.",
            "Cite the source URLs you relied on. Do NOT claim lack of internet access.",
            "If the answer is not in the data, say it was not found.",
        ]
    else:
        header = [
            "LIVE SPORTS DATA RETRIEVAL DID NOT RETURN DATA.",
            "Tell the user briefly why, using the message below, and do NOT invent scores or stats.",
            "You may still answer general rules or history questions from your own knowledge.",
        ]

    lines = [
        SEPARATOR,
        *header,
        f"Retrieval: {result.source or 'unknown'} | Result type: {result.kind.value}",
        SEPARATOR,
        "",
        result.to_tool_output(),
        "",
        SEPARATOR,
    ]
    return "\n".join(lines)
