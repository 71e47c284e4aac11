"""
Company Use Cases
"""

from .list_companies_use_case import ListCompaniesUseCase
from .get_company_use_case import GetCompanyUseCase
from .create_company_use_case import CreateCompanyUseCase
from .update_company_use_case import UpdateCompanyUseCase
from .delete_company_use_case import DeleteCompanyUseCase
from .dtos import CompanyCommand, CompanyOut

__all__ = [
    "ListCompaniesUseCase",
    "GetCompanyUseCase",
    "CreateCompanyUseCase",
    "UpdateCompanyUseCase",
    "DeleteCompanyUseCase",
    "CompanyCommand",
    "CompanyOut",
]
