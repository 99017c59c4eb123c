"""Prompt template for grounded answers.

The prompt carries the question, the deduplicated source URLs and the
retrieved chunk bodies in rank order, separated by
:data:`CONTEXT_SEPARATOR`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from langchain_core.messages import HumanMessage, SystemMessage

if TYPE_CHECKING:
    from langchain_core.messages import BaseMessage

ANSWER_SYSTEM = """\
You are an assistant that answers questions on behalf of a website.

Answer using **only** the retrieved page content given below.
If that content does not contain enough information to answer, say so
honestly instead of guessing. Do not use outside knowledge.
"""

CONTEXT_SEPARATOR = "\n\n---\n\n"


def build_answer_prompt(question: str, urls: list[str], bodies: list[str]) -> list[BaseMessage]:
    """Assemble the messages for one grounded-answer call.

    Parameters
    ----------
    question:
        The user question, included verbatim.
    urls:
        Source URLs, already deduplicated, in rank order.
    bodies:
        Non-blank chunk bodies in rank order (closest first).

    Returns
    -------
    list[BaseMessage]
        ``[SystemMessage, HumanMessage]`` ready for ``llm.invoke()``.
    """
    sources = "\n".join(f"- {url}" for url in urls) or "- (unknown)"
    context = CONTEXT_SEPARATOR.join(bodies)
    user_msg = (
        f"Question: {question}\n\n"
        f"Sources:\n{sources}\n\n"
        f"Retrieved context:\n{context}\n\n"
        "Answer the question using only the retrieved context above."
    )
    return [
        SystemMessage(content=ANSWER_SYSTEM),
        HumanMessage(content=user_msg),
    ]
