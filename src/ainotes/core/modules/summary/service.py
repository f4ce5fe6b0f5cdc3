import time

import structlog

from ainotes.core.core import Service
from ainotes.core.modules.summary.extractive import MIN_SUMMARY_LENGTH, extractive_summary
from ainotes.core.modules.summary.models import SummaryResult, SummarySource, SummaryState
from ainotes.core.modules.summary.prompts import build_summary_messages
from ainotes.core.modules.summary.utils import extract_summary
from ainotes.errors import SummaryError, TooShortError

logger = structlog.get_logger(__name__)


class SummaryService(Service):
    """Summarizes text through the configured provider, falling back to an extractive summary.

    Stateless between calls and never writes to the note store.
    """

    async def summarize(self, content: str) -> SummaryResult:
        """
        Produce a short summary of `content`.

        Provider failures (`UpstreamError`) and unusable answers
        (`NoSummaryExtractedError`) are answered with the local extractive
        summary, so the only failure a caller sees is `TooShortError`.

        Raises:
            TooShortError: If the content is shorter than MIN_SUMMARY_LENGTH characters
        """
        text = content.strip()
        if len(text) < MIN_SUMMARY_LENGTH:
            raise TooShortError

        provider = self.core.summary_provider
        if provider is None:
            return self._local_summary(text, reason="no_provider")

        start_time = time.time()
        logger.debug("summary_request", state=SummaryState.REQUESTING, model=provider.model, length=len(text))
        try:
            payload = await provider.complete(build_summary_messages(text, self.core.config.summary_sentences))
            summary = extract_summary(payload)
        except SummaryError as e:
            duration_ms = int((time.time() - start_time) * 1000)
            logger.warning(
                "summary_request",
                state=SummaryState.FAILED,
                model=provider.model,
                error_type=type(e).__name__,
                error=str(e),
                duration_ms=duration_ms,
            )
            return self._local_summary(text, reason=type(e).__name__)

        duration_ms = int((time.time() - start_time) * 1000)
        logger.info("summary_request", state=SummaryState.SUCCEEDED, model=provider.model, duration_ms=duration_ms)
        return SummaryResult(summary=summary, source=SummarySource.AI, model=provider.model)

    def _local_summary(self, text: str, reason: str) -> SummaryResult:
        summary = extractive_summary(text)
        logger.info("summary_fallback_used", reason=reason, length=len(text))
        return SummaryResult(summary=summary, source=SummarySource.LOCAL)
