"""Eligibility questionnaire and its scoring weights"""

from typing import Tuple

from credit_approver.domain.models import Question

# Weights sum to 11; more than 6 points unlocks the financial questions
QUESTIONNAIRE: Tuple[Question, ...] = (
    Question("Do you have a paying job?", 4),
    Question("Did you consistently have a paying job for the past 12 months?", 2),
    Question("Do you own a home?", 2),
    Question("Do you own a car?", 1),
    Question("Do you have any additional source of income?", 2),
)

MONTHLY_INCOME_QUESTION = "What is your total monthly income from all income sources (in USD)?"
MONTHLY_EXPENSES_QUESTION = "What are your total monthly expenses (in USD)?"

UNANSWERED = "N/A"
