# (c) Copyright Datacraft, 2026
"""Recognition engine: scan intake and asynchronous recognition.

``submit_scan`` records the scan under the job lock and returns at once
with an ``asyncio.Task``. The task runs the recognizer without holding
any lock, then re-acquires the job lock to apply its result. Recognizer
failures never escape: they become an ERROR verdict on the job.
"""
import asyncio
import logging
from typing import Iterable

from checkflow.core.auth import Actor, require_actor
from checkflow.core.config import Settings, get_settings
from checkflow.core.exceptions import InvalidStateError, PreconditionError, UnauthorizedError
from checkflow.core.features.history.service import append_event
from checkflow.core.features.print_jobs.schema import PrintJob
from checkflow.core.features.print_jobs.state import (
	SCANNABLE_STATUSES,
	VERDICT_STATUS,
	ensure_transition,
)
from checkflow.core.features.templates.schema import TemplateVersion
from checkflow.core.store import ChecklistStore
from checkflow.core.types import HistoryAction, JobStatus, ScanProcessingStatus, Verdict

from .base import ExtractionError, Recognizer
from .policy import VerdictPolicy
from .schema import RecognitionResult, RecognizedItem, Scan, ScanUpload
from .simulated import SimulatedRecognizer

logger = logging.getLogger(__name__)


class RecognitionEngine:
	"""Turns uploaded scans into recognition results."""

	def __init__(
		self,
		store: ChecklistStore,
		recognizer: Recognizer,
		policy: VerdictPolicy | None = None,
		delay_seconds: float = 0.0,
	):
		self.store = store
		self.recognizer = recognizer
		self.policy = policy or VerdictPolicy()
		self.delay_seconds = delay_seconds
		self._tasks: set[asyncio.Task] = set()

	@property
	def pending(self) -> int:
		return len(self._tasks)

	async def submit_scan(
		self,
		actor: Actor | None,
		job_id: str,
		upload: ScanUpload,
	) -> "asyncio.Task[RecognitionResult]":
		"""Attach a scan to the job and schedule its recognition."""
		actor = require_actor(actor)
		async with self.store.job_lock(job_id):
			job = self.store.get_job(job_id)
			if job.created_by != actor.id and not actor.is_reviewer:
				raise UnauthorizedError(
					f"Only the creator of {job.short_id} or a reviewer may upload scans"
				)
			if job.status not in SCANNABLE_STATUSES:
				raise InvalidStateError(
					f"Job {job.short_id} is {job.status.value} and does not accept scans"
				)
			ensure_transition(job.status, JobStatus.SCAN_RECEIVED)

			scan = Scan(
				print_job_id=job.id,
				office_id=job.office_id,
				uploaded_by=actor.id,
				file_name=upload.file_name,
				file_ref=upload.file_ref,
			)
			job = append_event(
				job,
				HistoryAction.SCAN_UPLOADED,
				actor,
				f"Scan uploaded: {upload.file_name}",
				status=JobStatus.SCAN_RECEIVED,
				scan=scan,
				recognition_result=None,
			)
			self.store.put_job(job)

		logger.info(f"Scan {scan.id[:8]}... received for print job {job.short_id}")
		task = asyncio.create_task(self.recognize(job_id), name=f"recognize-{job.short_id}")
		self._tasks.add(task)
		task.add_done_callback(self._tasks.discard)
		return task

	async def recognize(self, job_id: str) -> RecognitionResult:
		"""Run recognition for the job's attached scan and apply the verdict."""
		job = self.store.get_job(job_id)
		if job.scan is None:
			raise PreconditionError(f"Job {job.short_id} has no scan attached")
		if job.status != JobStatus.SCAN_RECEIVED:
			raise InvalidStateError(
				f"Job {job.short_id} is {job.status.value}, not awaiting recognition"
			)
		scan = job.scan

		if self.delay_seconds:
			await asyncio.sleep(self.delay_seconds)
		result = await self._extract(job, scan)

		async with self.store.job_lock(job_id):
			job = self.store.get_job(job_id)
			if job.scan is None or job.scan.id != scan.id:
				raise InvalidStateError(
					f"Scan {scan.id} is no longer attached to job {job.short_id}"
				)
			target = VERDICT_STATUS[result.status]
			ensure_transition(job.status, target)

			processing = (
				ScanProcessingStatus.ERROR
				if result.status == Verdict.ERROR
				else ScanProcessingStatus.PROCESSED
			)
			job = append_event(
				job,
				HistoryAction.RECOGNIZED,
				None,
				self._describe(result),
				status=target,
				scan=scan.model_copy(update={"processing_status": processing}),
				recognition_result=result,
			)
			self.store.put_job(job)

		logger.info(
			f"Print job {job.short_id} recognized by {self.recognizer.name}: "
			f"{result.status.value}"
		)
		return result

	def reconcile_items(
		self,
		version: TemplateVersion,
		items: Iterable[RecognizedItem],
		job: PrintJob | None = None,
	) -> tuple[RecognizedItem, ...]:
		"""Align recognized items with the pinned version.

		Unknown item ids are dropped, duplicates keep their first
		occurrence, and items the recognizer skipped come back unchecked
		with zero confidence.
		"""
		index = version.item_index()
		recognized: dict[str, RecognizedItem] = {}
		for item in items:
			if item.item_id not in index:
				logger.warning(
					f"Dropping unknown item {item.item_id} from recognition"
					+ (f" of {job.short_id}" if job else "")
				)
				continue
			recognized.setdefault(item.item_id, item)

		return tuple(
			recognized.get(item_id) or RecognizedItem(item_id=item_id, is_checked=False, confidence=0)
			for item_id in index
		)

	async def drain(self) -> None:
		"""Wait for all scheduled recognitions to finish."""
		if self._tasks:
			await asyncio.gather(*list(self._tasks), return_exceptions=True)

	async def _extract(self, job: PrintJob, scan: Scan) -> RecognitionResult:
		# Any recognizer failure or malformed result becomes an ERROR verdict
		try:
			version = self.store.get_version(job.template_version_id)
			raw = await self.recognizer.recognize(job, scan, version)
			if not isinstance(raw, RecognitionResult):
				raise TypeError(
					f"expected RecognitionResult, got {type(raw).__name__}"
				)
			if raw.status == Verdict.ERROR:
				return self._failed(job, scan, raw.error_reason or "Extraction failed")

			items = self.reconcile_items(version, raw.items, job)
			return RecognitionResult(
				id=raw.id,
				scan_id=scan.id,
				print_job_id=job.id,
				items=items,
				status=self.policy.classify(items),
			)
		except ExtractionError as e:
			logger.warning(f"Extraction failed for {job.short_id}: {e}")
			return self._failed(job, scan, str(e) or "Extraction failed")
		except Exception as e:
			logger.exception(f"Recognizer '{self.recognizer.name}' failed on {job.short_id}")
			return self._failed(job, scan, f"Recognition failed: {e}")

	@staticmethod
	def _failed(job: PrintJob, scan: Scan, reason: str) -> RecognitionResult:
		return RecognitionResult(
			scan_id=scan.id,
			print_job_id=job.id,
			status=Verdict.ERROR,
			error_reason=reason,
		)

	def _describe(self, result: RecognitionResult) -> str:
		if result.status == Verdict.AUTO_OK:
			return "Automatic recognition succeeded"
		if result.status == Verdict.NEED_REVIEW:
			low = len(self.policy.low_confidence_items(result.items))
			return (
				f"Manual review required: {low} item(s) below "
				f"{self.policy.review_threshold}% confidence"
			)
		return f"Recognition error: {result.error_reason}"


def build_recognition_engine(
	store: ChecklistStore,
	settings: Settings | None = None,
	recognizer: Recognizer | None = None,
) -> RecognitionEngine:
	settings = settings or get_settings()
	if recognizer is None:
		recognizer = SimulatedRecognizer(
			seed=settings.recognition_seed,
			error_rate=settings.recognition_error_rate,
			review_rate=settings.recognition_review_rate,
		)
	return RecognitionEngine(
		store,
		recognizer,
		policy=VerdictPolicy(review_threshold=settings.recognition_review_threshold),
		delay_seconds=settings.recognition_delay_seconds,
	)
