"""
Catalogue scraping engine.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

import requests

from parts_catalogue.scraping.base import CatalogueSource
from parts_catalogue.scraping.config.models import CHANNEL_OUTPUTS, ScrapeSettings
from parts_catalogue.scraping.errors import CatalogueLookupError
from parts_catalogue.scraping.logging_utils import log_event
from parts_catalogue.scraping.registry import SourceRegistry
from parts_catalogue.scraping.routing import route
from parts_catalogue.scraping.storage import CsvChannelSink, ErrorLog, ImageDownloadSink, RecordSink
from parts_catalogue.scraping.types import (
    CatalogueQuery,
    OutputChannel,
    RowOutcome,
    RowStatus,
    ScrapeRunSummary,
)

logger = logging.getLogger(__name__)


@dataclass
class _RunState:
    succeeded: int = 0
    outcomes: list[RowOutcome] = field(default_factory=list)


class CatalogueScrapingEngine:
    """
    Drives fetch -> extract -> route for every query and fans the result out
    to the channel sinks.

    A fixed pool of worker coroutines drains the query queue, so at most
    `settings.concurrency` rows are fetching at once. A failed row is logged
    to the error log and never affects its siblings. A sink that raises
    `OSError` while consuming a row fails that row only; the other sinks
    still receive it. Only configuration errors (unsupported brand) abort the
    run, and they do so before any request is sent.
    """

    def __init__(
        self,
        *,
        settings: ScrapeSettings,
        registry: SourceRegistry | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self._settings = settings
        self._registry = registry or SourceRegistry()
        self._session = session or requests.Session()

    def run(self, queries: Sequence[CatalogueQuery]) -> ScrapeRunSummary:
        return asyncio.run(self.run_async(queries))

    async def run_async(self, queries: Sequence[CatalogueQuery]) -> ScrapeRunSummary:
        queries = [CatalogueQuery.create(query.brand, query.item_identifier) for query in queries]
        sources = self._registry.create_sources(
            brands=(query.brand for query in queries),
            settings=self._settings,
            session=self._session,
        )
        sinks = self._build_sinks(sources.keys())
        error_log = ErrorLog(Path(self._settings.error_log_path))

        queue: asyncio.Queue[CatalogueQuery] = asyncio.Queue()
        for query in queries:
            queue.put_nowait(query)

        state = _RunState()
        log_event(
            logger,
            logging.INFO,
            "catalogue_scrape_started",
            rows=len(queries),
            brands=sorted(sources),
            concurrency=self._settings.concurrency,
        )

        for sink in sinks:
            sink.open()
        try:
            workers = [
                asyncio.create_task(
                    self._worker(
                        queue=queue,
                        sources=sources,
                        sinks=sinks,
                        error_log=error_log,
                        state=state,
                    )
                )
                for _ in range(min(self._settings.concurrency, len(queries)))
            ]
            await asyncio.gather(*workers)
        finally:
            for sink in sinks:
                sink.close()

        summary = self._summarize(queries=queries, sinks=sinks, state=state)
        log_event(
            logger,
            logging.INFO,
            "catalogue_scrape_completed",
            rows_total=summary.rows_total,
            rows_succeeded=summary.rows_succeeded,
            rows_failed=summary.rows_failed,
            images_saved=summary.images_saved,
        )
        return summary

    async def _worker(
        self,
        *,
        queue: asyncio.Queue[CatalogueQuery],
        sources: dict[str, CatalogueSource],
        sinks: list[RecordSink],
        error_log: ErrorLog,
        state: _RunState,
    ) -> None:
        while True:
            try:
                query = queue.get_nowait()
            except asyncio.QueueEmpty:
                return
            outcome = await self.process_row(
                query=query,
                source=sources[query.brand],
                sinks=sinks,
                error_log=error_log,
                state=state,
            )
            state.outcomes.append(outcome)

    async def process_row(
        self,
        *,
        query: CatalogueQuery,
        source: CatalogueSource,
        sinks: list[RecordSink],
        error_log: ErrorLog,
        state: _RunState,
    ) -> RowOutcome:
        try:
            result = await asyncio.to_thread(source.fetch, query)
            if not result.success or result.document is None:
                raise CatalogueLookupError(f"Not found: [{query.brand} {query.item_identifier}]")
            item = source.extract(result.document)
            routed = route(item, query)
        except Exception as exc:
            return self._fail_row(query=query, error_log=error_log, state=state, error=exc)

        failed_channels: list[str] = []
        for sink in sinks:
            try:
                await sink.consume(routed)
            except OSError as exc:
                failed_channels.append(sink.channel)
                log_event(
                    logger,
                    logging.ERROR,
                    "sink_write_failed",
                    brand=query.brand,
                    item=query.item_identifier,
                    channel=sink.channel,
                    error=str(exc),
                )
        if failed_channels:
            return self._fail_row(
                query=query,
                error_log=error_log,
                state=state,
                error=OSError(f"Write failed for channel(s): {', '.join(failed_channels)}"),
            )

        state.succeeded += 1
        log_event(
            logger,
            logging.INFO,
            "row_processed",
            brand=query.brand,
            item=query.item_identifier,
            status="success",
            succeeded=state.succeeded,
        )
        return RowOutcome(query=query, status=RowStatus.ROUTED)

    @staticmethod
    def _fail_row(
        *,
        query: CatalogueQuery,
        error_log: ErrorLog,
        state: _RunState,
        error: Exception,
    ) -> RowOutcome:
        error_log.append(query)
        log_event(
            logger,
            logging.ERROR,
            "row_failed",
            brand=query.brand,
            item=query.item_identifier,
            status="failure",
            succeeded=state.succeeded,
            error=str(error),
        )
        return RowOutcome(query=query, status=RowStatus.FAILED, error=str(error))

    def _build_sinks(self, brands: Iterable[str]) -> list[RecordSink]:
        sinks: list[RecordSink] = []
        for brand in brands:
            for channel in OutputChannel.TABULAR:
                sinks.append(
                    CsvChannelSink(
                        path=self._settings.channel_path(brand=brand, channel=channel),
                        brand=brand,
                        channel=channel,
                        columns=CHANNEL_OUTPUTS[channel].columns,
                        batch_size=self._settings.csv_batch_size,
                    )
                )
        sinks.append(ImageDownloadSink(settings=self._settings, session=self._session))
        return sinks

    @staticmethod
    def _summarize(
        *,
        queries: Sequence[CatalogueQuery],
        sinks: list[RecordSink],
        state: _RunState,
    ) -> ScrapeRunSummary:
        records_written = {channel: 0 for channel in OutputChannel.TABULAR}
        images_saved = 0
        for sink in sinks:
            if sink.channel == OutputChannel.IMAGE:
                images_saved += sink.written
            else:
                records_written[sink.channel] += sink.written

        failed = sum(1 for outcome in state.outcomes if outcome.status == RowStatus.FAILED)
        return ScrapeRunSummary(
            rows_total=len(queries),
            rows_succeeded=state.succeeded,
            rows_failed=failed,
            images_saved=images_saved,
            records_written=records_written,
        )
