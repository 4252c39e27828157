# (c) Copyright Datacraft, 2026
"""FastAPI dependencies for the store and the recognition engine."""
from fastapi import Request

from checkflow.core.features.recognition.service import RecognitionEngine
from checkflow.core.store import ChecklistStore


def get_store(request: Request) -> ChecklistStore:
	return request.app.state.store


def get_recognition_engine(request: Request) -> RecognitionEngine:
	return request.app.state.recognition
