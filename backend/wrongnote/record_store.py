"""Wrong-answer record storage: the spreadsheet web app over HTTP, or a SQL database."""
from __future__ import annotations

import base64
import binascii
import logging
import mimetypes
import uuid
from pathlib import Path
from typing import Any, AsyncIterator, Dict, Iterable, List, Optional

import httpx
from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from .db import SessionLocal
from .errors import RemoteError, RemoteRejected, RemoteUnavailable
from .filters import apply_filters
from .models import Student, WrongAnswer
from .schemas import FilterCriteria, NewWrongAnswer, WrongAnswerRecord
from .settings import settings

logger = logging.getLogger(__name__)

UPLOADS_URL_PREFIX = "/uploads"


def parse_records(rows: Iterable[Any]) -> List[WrongAnswerRecord]:
	"""Validate raw rows, skipping the ones that do not form a record."""
	records: List[WrongAnswerRecord] = []
	for row in rows:
		try:
			records.append(WrongAnswerRecord.model_validate(row))
		except ValidationError as e:
			row_id = row.get("id") if isinstance(row, dict) else None
			logger.warning("skipping malformed record %r: %d error(s)", row_id, e.error_count(), extra={"record_id": row_id})
	return records


class RecordStore:
	"""Operations every backend provides."""

	async def fetch_all(self) -> List[WrongAnswerRecord]:
		raise NotImplementedError

	async def list_students(self) -> List[str]:
		raise NotImplementedError

	async def save(self, answer: NewWrongAnswer) -> WrongAnswerRecord:
		raise NotImplementedError

	async def set_resolved(self, record_id: str) -> None:
		raise NotImplementedError

	async def aclose(self) -> None:
		return None


class RemoteRecordStore(RecordStore):
	"""Client for the spreadsheet web app's JSON action protocol."""

	def __init__(
		self,
		url: Optional[str] = None,
		*,
		timeout: Optional[float] = None,
		transport: Optional[httpx.AsyncBaseTransport] = None,
	) -> None:
		self.url = url if url is not None else settings.store_url
		# Script web apps answer through a redirect to the rendered output
		self._client = httpx.AsyncClient(
			timeout=timeout or settings.store_timeout,
			transport=transport,
			follow_redirects=True,
		)

	async def _call(self, method: str, **kwargs: Any) -> Dict[str, Any]:
		if not self.url:
			raise RemoteUnavailable("store URL is not configured")
		try:
			r = await self._client.request(method, self.url, **kwargs)
			r.raise_for_status()
		except httpx.HTTPStatusError as e:
			raise RemoteUnavailable(f"store answered HTTP {e.response.status_code}") from e
		except httpx.RequestError as e:
			raise RemoteUnavailable(f"store unreachable: {type(e).__name__}") from e
		try:
			data = r.json()
		except ValueError as e:
			raise RemoteRejected("store returned a non-JSON response") from e
		if not isinstance(data, dict):
			raise RemoteRejected("store returned an unexpected response")
		if data.get("status") == "error":
			raise RemoteRejected(str(data.get("message") or "store reported an error"))
		return data

	async def fetch_all(self) -> List[WrongAnswerRecord]:
		data = await self._call("GET", params={"action": "get_answers"})
		return parse_records(data.get("data") or [])

	async def list_students(self) -> List[str]:
		data = await self._call("GET", params={"action": "get_students"})
		return [str(name) for name in data.get("data") or [] if name is not None and str(name).strip()]

	async def save(self, answer: NewWrongAnswer) -> WrongAnswerRecord:
		payload = answer.model_dump(by_alias=True, exclude_none=True)
		payload["id"] = str(uuid.uuid4())
		payload["isResolved"] = False
		data = await self._call("POST", json={"action": "save_answer", "payload": payload})
		saved = data.get("savedData")
		merged = {**payload, **saved} if isinstance(saved, dict) else payload
		merged["id"] = payload["id"]
		return WrongAnswerRecord.model_validate(merged)

	async def set_resolved(self, record_id: str) -> None:
		await self._call(
			"POST",
			json={"action": "update_status", "payload": {"id": record_id, "isResolved": True}},
		)

	async def aclose(self) -> None:
		await self._client.aclose()


def _to_record(row: WrongAnswer) -> WrongAnswerRecord:
	return WrongAnswerRecord(
		id=row.id,
		student_id=row.student_id,
		date=row.date,
		grade=row.grade,
		term=row.term,
		chapter=row.chapter,
		problem_level=row.problem_level,
		question_type=row.question_type,
		memo=row.memo,
		image_url=row.image_url,
		is_resolved=row.is_resolved,
	)


class SqlRecordStore(RecordStore):
	"""Store records in a SQL database and images on local disk."""

	def __init__(self, session_factory: sessionmaker = SessionLocal, *, upload_dir: Optional[str] = None) -> None:
		self._session_factory = session_factory
		self.upload_dir = Path(upload_dir or settings.upload_dir)

	async def fetch_all(self) -> List[WrongAnswerRecord]:
		try:
			with self._session_factory() as db:
				rows = db.execute(select(WrongAnswer).order_by(WrongAnswer.created_at)).scalars().all()
				return [_to_record(row) for row in rows]
		except SQLAlchemyError as e:
			raise RemoteUnavailable(f"database error: {type(e).__name__}") from e

	async def list_students(self) -> List[str]:
		try:
			with self._session_factory() as db:
				return list(db.execute(select(Student.name).order_by(Student.id)).scalars().all())
		except SQLAlchemyError as e:
			raise RemoteUnavailable(f"database error: {type(e).__name__}") from e

	def _store_image(self, answer: NewWrongAnswer) -> Optional[str]:
		if not answer.image_base64:
			return None
		try:
			content = base64.b64decode(answer.image_base64, validate=True)
		except (binascii.Error, ValueError) as e:
			raise RemoteRejected("image is not valid base64") from e
		name = Path(answer.image_name).name if answer.image_name else ""
		if not name:
			name = "image" + (mimetypes.guess_extension(answer.image_type or "") or "")
		filename = f"{uuid.uuid4()}-{name}"
		try:
			self.upload_dir.mkdir(parents=True, exist_ok=True)
			(self.upload_dir / filename).write_bytes(content)
		except OSError as e:
			raise RemoteUnavailable(f"could not write image: {e.strerror}") from e
		return f"{UPLOADS_URL_PREFIX}/{filename}"

	async def save(self, answer: NewWrongAnswer) -> WrongAnswerRecord:
		image_url = self._store_image(answer)
		row = WrongAnswer(
			id=str(uuid.uuid4()),
			date=answer.date,
			student_id=answer.student_id,
			grade=answer.grade,
			term=answer.term,
			chapter=answer.chapter,
			problem_level=answer.problem_level,
			question_type=answer.question_type,
			memo=answer.memo,
			image_url=image_url,
			is_resolved=False,
		)
		try:
			with self._session_factory() as db:
				db.add(row)
				db.commit()
				return _to_record(row)
		except SQLAlchemyError as e:
			if image_url:
				(self.upload_dir / image_url.rsplit("/", 1)[-1]).unlink(missing_ok=True)
			raise RemoteUnavailable(f"database error: {type(e).__name__}") from e

	async def set_resolved(self, record_id: str) -> None:
		try:
			with self._session_factory() as db:
				row = db.get(WrongAnswer, record_id)
				if row is None:
					raise RemoteRejected(f"record {record_id} not found")
				row.is_resolved = True
				db.commit()
		except SQLAlchemyError as e:
			raise RemoteUnavailable(f"database error: {type(e).__name__}") from e


def build_record_store() -> RecordStore:
	if settings.store_backend == "sql":
		return SqlRecordStore()
	if settings.store_backend == "remote":
		return RemoteRecordStore()
	raise ValueError(f"STORE_BACKEND must be 'remote' or 'sql', got {settings.store_backend!r}")


async def get_record_store() -> AsyncIterator[RecordStore]:
	store = build_record_store()
	try:
		yield store
	finally:
		await store.aclose()


async def load_records(store: RecordStore, criteria: Optional[FilterCriteria] = None) -> List[WrongAnswerRecord]:
	"""Fetch and filter records; a store failure yields an empty list."""
	try:
		records = await store.fetch_all()
	except RemoteError as e:
		logger.warning("could not load wrong answers: %s", e)
		return []
	return apply_filters(records, criteria)


async def load_students(store: RecordStore) -> List[str]:
	try:
		return await store.list_students()
	except RemoteError as e:
		logger.warning("could not load students: %s", e)
		return []
