"""
Dependency injection helpers.

The pipeline context is built once in the application lifespan and kept
on app.state; these functions hand it to request handlers.

Dependencies: fastapi, kb_assistant.core.context
System role: DI for request handlers
"""

from fastapi import Depends, Request

from kb_assistant.core.context import PipelineContext
from kb_assistant.core.retrieval_pipeline import RetrievalPipeline


def get_pipeline_context(request: Request) -> PipelineContext:
    """
    Get the shared pipeline context.

    Raises:
        RuntimeError: When the application started without a context
    """
    context = getattr(request.app.state, "pipeline_context", None)
    if context is None:
        raise RuntimeError("Pipeline context is not initialized")
    return context


def get_retrieval_pipeline(
    context: PipelineContext = Depends(get_pipeline_context),
) -> RetrievalPipeline:
    """Get the retrieval pipeline from the shared context."""
    return context.pipeline
