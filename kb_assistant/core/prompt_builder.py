"""
Grounded prompt template.

Defines the instruction template that wraps retrieved context and the
user question. The instructions keep answers inside the supplied context
and require an explicit "do not know" when the context is insufficient.

Dependencies: langchain_core.prompts, kb_assistant.models
System role: Prompt builder for grounded generation
"""

from collections.abc import Sequence

from langchain_core.prompts import PromptTemplate

from kb_assistant.models.chunk import ScoredChunk

DEFAULT_ASSISTANT_ROLE = "a legal assistant for a law firm"

GROUNDED_PROMPT = PromptTemplate.from_template(
    """You are {assistant_role}.

Answer strictly using the provided context.
If the answer is not clearly found in the context, say you do not know.

Context:
{context}

User Question:
{question}
"""
)


def format_context(context_chunks: Sequence[ScoredChunk]) -> str:
    """Join chunk contents in rank order, separated by a blank line."""
    return "\n\n".join(scored.chunk.content for scored in context_chunks)


def build_prompt(
    context_chunks: Sequence[ScoredChunk],
    question: str,
    assistant_role: str = DEFAULT_ASSISTANT_ROLE,
) -> str:
    """
    Build the generation prompt for accepted chunks.

    Args:
        context_chunks: Gate-accepted chunks, best first
        question: User question
        assistant_role: Role and domain stated to the model

    Returns:
        str: Complete prompt text
    """
    return GROUNDED_PROMPT.format(
        assistant_role=assistant_role,
        context=format_context(context_chunks),
        question=question,
    )
