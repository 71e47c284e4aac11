"""
Lead Use Cases

Listing, creation, updates, transfer from submissions, history and
statistics for investor-admin leads.
"""

from .list_leads_use_case import ListLeadsUseCase
from .create_lead_use_case import CreateLeadUseCase
from .update_lead_use_case import UpdateLeadUseCase
from .delete_lead_use_case import DeleteLeadUseCase
from .transfer_investor_use_case import TransferInvestorUseCase
from .lead_history_use_case import LeadHistoryUseCase
from .lead_statistics_use_case import LeadStatisticsUseCase
from .dtos import (
    HistoryActor,
    HistoryEntry,
    LeadCreateCommand,
    LeadHistory,
    LeadListCommand,
    LeadOut,
    LeadPage,
    LeadStatisticsOut,
)

__all__ = [
    # Use Cases
    "ListLeadsUseCase",
    "CreateLeadUseCase",
    "UpdateLeadUseCase",
    "DeleteLeadUseCase",
    "TransferInvestorUseCase",
    "LeadHistoryUseCase",
    "LeadStatisticsUseCase",
    # DTOs - Commands
    "LeadCreateCommand",
    "LeadListCommand",
    # DTOs - Responses
    "HistoryActor",
    "HistoryEntry",
    "LeadHistory",
    "LeadOut",
    "LeadPage",
    "LeadStatisticsOut",
]
