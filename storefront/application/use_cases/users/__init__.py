# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .change_password import ChangePasswordUseCase
from .create_user import CreateUserUseCase
from .forgot_password import ForgotPasswordUseCase
from .get_user import GetUserUseCase
from .list_users import ListUsersUseCase
from .login_user import LoginOutcome, LoginUserUseCase
from .login_with_remember_token import LoginWithRememberTokenUseCase
from .logout_user import LogoutUserUseCase
from .update_user import UpdateUserUseCase

__all__ = [
    "ChangePasswordUseCase",
    "CreateUserUseCase",
    "ForgotPasswordUseCase",
    "GetUserUseCase",
    "ListUsersUseCase",
    "LoginOutcome",
    "LoginUserUseCase",
    "LoginWithRememberTokenUseCase",
    "LogoutUserUseCase",
    "UpdateUserUseCase",
]
