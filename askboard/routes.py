"""
HTTP routes for the question board API.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends

from askboard.dependencies import get_board
from askboard.records import QuestionBoard
from askboard.schemas import (
    CreateQuestionPayload,
    DeleteQuestionPayload,
    QuestionRecord,
    UpdateQuestionPayload,
    UpdateQuestionResponse,
    DeleteQuestionResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/questions")
def list_questions(board: QuestionBoard = Depends(get_board)):
    """
    Return the stored document as is, hidden questions included.
    """
    return board.list()


@router.post(
    "/questions",
    response_model=QuestionRecord,
    response_model_by_alias=True,
    status_code=201,
)
def create_question(
    payload: Optional[CreateQuestionPayload] = None,
    board: QuestionBoard = Depends(get_board),
):
    payload = payload or CreateQuestionPayload()
    return board.create(payload.text)


@router.patch("/questions", response_model=UpdateQuestionResponse)
def update_question(
    payload: Optional[UpdateQuestionPayload] = None,
    board: QuestionBoard = Depends(get_board),
):
    payload = payload or UpdateQuestionPayload()
    row = board.mutate(payload.id, payload.action)
    return UpdateQuestionResponse(row=row)


@router.delete("/questions", response_model=DeleteQuestionResponse)
def delete_question(
    payload: Optional[DeleteQuestionPayload] = None,
    board: QuestionBoard = Depends(get_board),
):
    payload = payload or DeleteQuestionPayload()
    if payload.all:
        logger.info("Deleting all questions")
        board.delete_all()
    else:
        board.delete(payload.id)
    return DeleteQuestionResponse()
