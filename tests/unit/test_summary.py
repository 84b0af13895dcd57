"""Unit tests for summary assembly"""

import pytest
from dataclasses import FrozenInstanceError
from datetime import datetime, timedelta, timezone
from credit_approver.domain.models import Answer
from credit_approver.domain.questionnaire import (
    MONTHLY_EXPENSES_QUESTION,
    MONTHLY_INCOME_QUESTION,
    QUESTIONNAIRE,
)
from credit_approver.domain.summary import SummaryAssembler


def test_approved_summary(machine, approved, assembler):
    """Test an approved session yields both financial answers and the amount"""
    state = machine.validate_email(approved, "user@example.com")
    summary = assembler.assemble(state)

    assert summary.recipient == "user@example.com"
    assert summary.credit_amount == 24000
    assert summary.approved is True
    assert summary.formatted_amount == "$24,000"
    assert summary.financial_answers == (
        Answer(MONTHLY_INCOME_QUESTION, "5000"),
        Answer(MONTHLY_EXPENSES_QUESTION, "3000"),
    )
    assert summary.generated_at == assembler.clock()


def test_basic_answers_follow_questionnaire_order(approved, assembler):
    summary = assembler.assemble(approved)

    assert [a.question for a in summary.basic_answers] == [q.text for q in QUESTIONNAIRE]
    assert all(a.answer == "yes" for a in summary.basic_answers)


def test_rejected_summary(rejected, assembler):
    """Test a rejected session has no financial answers and is not approved"""
    summary = assembler.assemble(rejected)

    assert summary.financial_answers == ()
    assert summary.approved is False
    assert summary.credit_amount == 0
    assert [a.answer for a in summary.basic_answers] == ["yes", "no", "no", "no", "no"]


def test_non_positive_amount_is_not_approved(machine, awaiting_financials, assembler):
    """Test approval follows the amount, not the phase name"""
    state = machine.submit_financials(awaiting_financials, "3000", "3000")
    summary = assembler.assemble(state)

    assert summary.credit_amount == 0
    assert summary.approved is False
    assert len(summary.financial_answers) == 2


def test_unanswered_questions_use_placeholder(machine, assembler):
    state = machine.advance(machine.start(), "yes")
    summary = assembler.assemble(state)

    assert [a.answer for a in summary.basic_answers] == ["yes", "N/A", "N/A", "N/A", "N/A"]
    assert summary.financial_answers == ()
    assert summary.recipient == ""


def test_awaiting_financials_has_no_financial_answers(awaiting_financials, assembler):
    assert assembler.assemble(awaiting_financials).financial_answers == ()


def test_timestamp_taken_at_assembly(approved):
    """Test each assembly reads the clock again"""
    start = datetime(2024, 1, 1, tzinfo=timezone.utc)
    ticks = iter([start, start + timedelta(minutes=5)])
    assembler = SummaryAssembler(clock=lambda: next(ticks))

    first = assembler.assemble(approved)
    second = assembler.assemble(approved)

    assert second.generated_at - first.generated_at == timedelta(minutes=5)


def test_default_clock_is_utc(approved):
    before = datetime.now(timezone.utc)
    summary = SummaryAssembler().assemble(approved)
    assert summary.generated_at.tzinfo is not None
    assert summary.generated_at >= before


def test_summary_is_read_only(approved, assembler):
    summary = assembler.assemble(approved)
    with pytest.raises(FrozenInstanceError):
        summary.credit_amount = 1
    assert summary.credit_amount == 24000


def test_to_dict(machine, approved, assembler):
    state = machine.validate_email(approved, "user@example.com")
    data = assembler.assemble(state).to_dict()

    assert data["recipient"] == "user@example.com"
    assert data["credit_amount"] == 24000
    assert data["formatted_amount"] == "$24,000"
    assert data["approved"] is True
    assert data["generated_at"] == "2024-03-01T12:30:00+00:00"
    assert data["financial_answers"][0] == {"question": MONTHLY_INCOME_QUESTION, "answer": "5000"}
    assert len(data["basic_answers"]) == 5
