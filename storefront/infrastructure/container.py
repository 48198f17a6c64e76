# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import timedelta
from functools import cached_property

from storefront.application.interfaces import ResetCodeNotifier
from storefront.application.services.password_hashing import WerkzeugPasswordHasher
from storefront.application.use_cases.catalog.categories import (
    CreateCategoryUseCase,
    DeleteCategoryUseCase,
    GetCategoryUseCase,
    ListCategoriesUseCase,
    UpdateCategoryUseCase,
)
from storefront.application.use_cases.catalog.products import (
    CreateProductUseCase,
    DeleteProductUseCase,
    GetProductUseCase,
    ListProductsUseCase,
    UpdateProductUseCase,
)
from storefront.application.use_cases.users.change_password import ChangePasswordUseCase
from storefront.application.use_cases.users.create_user import CreateUserUseCase
from storefront.application.use_cases.users.forgot_password import ForgotPasswordUseCase
from storefront.application.use_cases.users.get_user import GetUserUseCase
from storefront.application.use_cases.users.list_users import ListUsersUseCase
from storefront.application.use_cases.users.login_user import LoginUserUseCase
from storefront.application.use_cases.users.login_with_remember_token import (
    LoginWithRememberTokenUseCase,
)
from storefront.application.use_cases.users.logout_user import LogoutUserUseCase
from storefront.application.use_cases.users.update_user import UpdateUserUseCase
from storefront.infrastructure.auth.jwt_tokens import JoseTokenIssuer
from storefront.infrastructure.auth_middleware import RequestAuthenticator
from storefront.infrastructure.db import SessionLocal
from storefront.infrastructure.health import check_database
from storefront.infrastructure.notifications.email import (
    LogResetCodeNotifier,
    SmtpResetCodeNotifier,
)
from storefront.infrastructure.repositories.catalog.sqlalchemy_catalog_repository import (
    SqlAlchemyCategoryRepository,
    SqlAlchemyProductRepository,
)
from storefront.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyRememberTokenRepository,
    SqlAlchemyUserRepository,
)
from storefront.interfaces.http.controllers.auth_controller import AuthController
from storefront.interfaces.http.controllers.categories_controller import CategoriesController
from storefront.interfaces.http.controllers.misc_controller import MiscController
from storefront.interfaces.http.controllers.products_controller import ProductsController
from storefront.interfaces.http.controllers.users_controller import UsersController
from storefront.shared.config import AppConfig, load_config


class Container:
    def __init__(self, config: AppConfig | None = None) -> None:
        self.config = config or load_config()

    # Ports

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher()

    @cached_property
    def token_issuer(self) -> JoseTokenIssuer:
        return JoseTokenIssuer(
            self.config.secret_key,
            algorithm=self.config.auth.jwt_algorithm,
            ttl=timedelta(seconds=self.config.auth.token_ttl_seconds),
        )

    @cached_property
    def reset_code_notifier(self) -> ResetCodeNotifier:
        if self.config.mail.enabled:
            return SmtpResetCodeNotifier(
                self.config.mail, ttl_minutes=self.config.auth.reset_code_ttl_minutes
            )
        return LogResetCodeNotifier()

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository()

    @cached_property
    def remember_token_repository(self) -> SqlAlchemyRememberTokenRepository:
        return SqlAlchemyRememberTokenRepository(
            validity=timedelta(days=self.config.auth.remember_token_days)
        )

    @cached_property
    def category_repository(self) -> SqlAlchemyCategoryRepository:
        return SqlAlchemyCategoryRepository(SessionLocal)

    @cached_property
    def product_repository(self) -> SqlAlchemyProductRepository:
        return SqlAlchemyProductRepository(SessionLocal)

    @cached_property
    def authenticator(self) -> RequestAuthenticator:
        return RequestAuthenticator(
            token_issuer=self.token_issuer,
            users=self.user_repository,
            admin_requires_flag=self.config.security.admin_requires_flag,
        )

    # Auth use cases

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            remember_tokens=self.remember_token_repository,
            password_hasher=self.password_hasher,
            token_issuer=self.token_issuer,
        )

    @cached_property
    def remember_login_use_case(self) -> LoginWithRememberTokenUseCase:
        return LoginWithRememberTokenUseCase(
            remember_tokens=self.remember_token_repository,
            token_issuer=self.token_issuer,
        )

    @cached_property
    def logout_user_use_case(self) -> LogoutUserUseCase:
        return LogoutUserUseCase(remember_tokens=self.remember_token_repository)

    @cached_property
    def forgot_password_use_case(self) -> ForgotPasswordUseCase:
        return ForgotPasswordUseCase(
            users=self.user_repository,
            notifier=self.reset_code_notifier,
            code_length=self.config.auth.reset_code_length,
        )

    @cached_property
    def change_password_use_case(self) -> ChangePasswordUseCase:
        return ChangePasswordUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
            code_ttl=timedelta(minutes=self.config.auth.reset_code_ttl_minutes),
        )

    # User use cases

    @cached_property
    def create_user_use_case(self) -> CreateUserUseCase:
        return CreateUserUseCase(users=self.user_repository, password_hasher=self.password_hasher)

    @cached_property
    def update_user_use_case(self) -> UpdateUserUseCase:
        return UpdateUserUseCase(users=self.user_repository)

    # Controllers

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            authenticator=self.authenticator,
            login_use_case=self.login_user_use_case,
            remember_login_use_case=self.remember_login_use_case,
            logout_use_case=self.logout_user_use_case,
            forgot_password_use_case=self.forgot_password_use_case,
            change_password_use_case=self.change_password_use_case,
        )

    @cached_property
    def users_controller(self) -> UsersController:
        return UsersController(
            authenticator=self.authenticator,
            pagination=self.config.pagination,
            list_users=ListUsersUseCase(self.user_repository),
            get_user=GetUserUseCase(self.user_repository),
            create_user=self.create_user_use_case,
            update_user=self.update_user_use_case,
        )

    @cached_property
    def categories_controller(self) -> CategoriesController:
        return CategoriesController(
            authenticator=self.authenticator,
            pagination=self.config.pagination,
            list_categories=ListCategoriesUseCase(self.category_repository),
            get_category=GetCategoryUseCase(self.category_repository),
            create_category=CreateCategoryUseCase(self.category_repository),
            update_category=UpdateCategoryUseCase(self.category_repository),
            delete_category=DeleteCategoryUseCase(
                categories=self.category_repository, products=self.product_repository
            ),
        )

    @cached_property
    def products_controller(self) -> ProductsController:
        return ProductsController(
            authenticator=self.authenticator,
            pagination=self.config.pagination,
            list_products=ListProductsUseCase(self.product_repository),
            get_product=GetProductUseCase(self.product_repository),
            create_product=CreateProductUseCase(
                products=self.product_repository, categories=self.category_repository
            ),
            update_product=UpdateProductUseCase(
                products=self.product_repository, categories=self.category_repository
            ),
            delete_product=DeleteProductUseCase(self.product_repository),
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(
            app_name=self.config.app_name,
            app_version=self.config.app_version,
            check_database=check_database,
        )


container = Container()
