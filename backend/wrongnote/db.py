from __future__ import annotations
from sqlalchemy import create_engine, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from .settings import settings


DATABASE_URL = settings.database_url or "sqlite:///./wrongnote.db"

Base = declarative_base()

# Example names the spreadsheet setup also starts with
SEED_STUDENTS = ["홍길동", "김철수"]


def make_engine(url: str = DATABASE_URL) -> Engine:
	connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
	return create_engine(url, connect_args=connect_args, future=True)


engine = make_engine()
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, future=True)


def init_db(bind: Engine = engine) -> None:
	"""Create tables and seed the student list when it is empty."""
	from .models import Student

	Base.metadata.create_all(bind=bind)
	factory = sessionmaker(bind=bind, future=True)
	with factory() as db:
		if db.execute(select(Student.name).limit(1)).first() is None:
			db.add_all([Student(name=name) for name in SEED_STUDENTS])
			db.commit()
