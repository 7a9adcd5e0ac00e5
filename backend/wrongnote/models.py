from __future__ import annotations
from datetime import datetime
from sqlalchemy import Boolean, Column, String, DateTime, Integer, Text
from .db import Base


class WrongAnswer(Base):
	__tablename__ = "wrong_answers"
	id = Column(String(64), primary_key=True)
	date = Column(String(10), nullable=False, index=True)
	student_id = Column(String(128), nullable=False, default="unknown", index=True)
	grade = Column(Integer, nullable=False)
	term = Column(Integer, nullable=False)
	chapter = Column(String(128), nullable=False)
	problem_level = Column(String(16), nullable=False)
	question_type = Column(String(32), nullable=False)
	memo = Column(Text, nullable=True)
	image_url = Column(String(512), nullable=True)
	is_resolved = Column(Boolean, default=False, nullable=False)
	created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class Student(Base):
	__tablename__ = "students"
	# Autoincrement id keeps the list in insertion order
	id = Column(Integer, primary_key=True, autoincrement=True)
	name = Column(String(128), nullable=False, unique=True)
