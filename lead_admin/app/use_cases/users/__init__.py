"""
User Management Use Cases

All user-related business logic.
"""

from .list_users_use_case import ListUsersUseCase
from .get_user_use_case import GetUserUseCase
from .create_user_use_case import CreateUserUseCase
from .update_user_use_case import UpdateUserUseCase
from .delete_user_use_case import DeleteUserUseCase
from .get_profile_use_case import GetProfileUseCase
from .passwords import hash_password
from .dtos import CreateUserCommand, ProfileOut, UserOut

__all__ = [
    "ListUsersUseCase",
    "GetUserUseCase",
    "CreateUserUseCase",
    "UpdateUserUseCase",
    "DeleteUserUseCase",
    "GetProfileUseCase",
    "hash_password",
    "CreateUserCommand",
    "ProfileOut",
    "UserOut",
]
