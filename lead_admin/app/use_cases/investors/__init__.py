"""
Investor Submission Use Cases
"""

from .submit_investor_use_case import SubmitInvestorUseCase
from .list_investors_use_case import ListInvestorsUseCase
from .dtos import InvestorOut, SubmissionReceipt, SubmitInvestorCommand

__all__ = [
    "SubmitInvestorUseCase",
    "ListInvestorsUseCase",
    "InvestorOut",
    "SubmissionReceipt",
    "SubmitInvestorCommand",
]
